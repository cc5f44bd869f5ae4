"""Feature sync orchestration.

Runs the whole pipeline once: locate the repository, choose the target
notes file, confirm an inferred choice, snapshot git state, compose the
progress block and append it. Fatal conditions raise FeatureSyncError;
git failures are tolerated inside the snapshot builder.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from .config import DEFAULT_NOTES_DIR
from .models import Candidate, FeatureSyncError, SyncResult
from .progress import append_block, compose_block, extract_open_items
from .prompt import InputSource, StdinInputSource, confirm
from .repository import (
    find_repo_root,
    infer_feature_file,
    list_feature_candidates,
    resolve_feature_argument,
)
from .snapshot import CommandRunner, build_snapshot, run_command
from .sync_logging import (
    log_error_with_context,
    log_operation,
    log_performance,
    observability_hooks,
)

logger = logging.getLogger("featuresync.workflow")

MAX_LISTED_CANDIDATES = 20


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeatureSyncManager:
    """Appends progress blocks to feature notes under a repository."""

    def __init__(
        self,
        cwd: Path | str,
        *,
        notes_dir_name: str = DEFAULT_NOTES_DIR,
        input_source: Optional[InputSource] = None,
        output: Optional[TextIO] = None,
        runner: Optional[CommandRunner] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize the manager for the working directory ``cwd``."""
        self.cwd = Path(cwd).resolve()
        self.repo_root = find_repo_root(self.cwd)
        self.notes_dir = self.repo_root / notes_dir_name
        self.input_source = input_source if input_source is not None else StdinInputSource()
        self.output = output
        self.runner = runner or run_command
        self.clock = clock or _utc_now

    # ------------------------------------------------------------------
    # Target selection
    # ------------------------------------------------------------------

    def list_candidates(self) -> List[Candidate]:
        return list_feature_candidates(self.notes_dir)

    def infer_target(self) -> Optional[Candidate]:
        """Return the inferred notes file without asking for confirmation."""
        return infer_feature_file(self.list_candidates())

    def select_target(self, argument: Optional[str] = None) -> Candidate:
        """Choose the notes file to update.

        With an argument, resolve it explicitly. Without one, infer a file
        and require confirmation through the input source.
        """
        if not self.notes_dir.is_dir():
            raise FeatureSyncError(f"notes directory not found: {self.notes_dir}")

        argument = (argument or "").strip()
        if argument:
            target, name = resolve_feature_argument(argument, self.notes_dir, self.cwd)
            if target is None:
                raise FeatureSyncError(f"Specified feature file not found: {name}")
            return target

        candidates = self.list_candidates()
        if not candidates:
            raise FeatureSyncError(f"No markdown feature candidates in {self.notes_dir.name}/")

        guess = infer_feature_file(candidates)
        question = f"Inferred feature file: {guess.file}. Use this? (y/N): "
        if not confirm(question, self.input_source, self.output):
            observability_hooks.log_event("feature_sync_declined", inferred=guess.file)
            raise FeatureSyncError(
                "Aborted. Provide a file name. Candidates:",
                candidates=candidates[:MAX_LISTED_CANDIDATES],
            )
        return guess

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    @log_performance("feature_sync")
    def sync(self, argument: Optional[str] = None) -> SyncResult:
        """Append a progress block to the selected notes file."""
        target = self.select_target(argument)

        with log_operation("feature_sync", target=str(target.path)):
            try:
                with target.path.open(encoding="utf-8", newline="") as handle:
                    content = handle.read()
            except (OSError, UnicodeDecodeError) as e:
                log_error_with_context(e, {"operation": "read_feature_file", "path": str(target.path)})
                raise FeatureSyncError(f"Read error: {e}") from e

            snapshot = build_snapshot(self.cwd, self.repo_root, self.clock(), self.runner)
            block = compose_block(snapshot, extract_open_items(content))

            try:
                written = append_block(target.path, content, block)
            except OSError as e:
                log_error_with_context(e, {"operation": "write_feature_file", "path": str(target.path)})
                raise FeatureSyncError(f"Write error: {e}") from e

        if not written:
            logger.info(f"Duplicate progress block skipped for {target.path}")
            observability_hooks.log_event("feature_sync_duplicate", target=str(target.path))
            return SyncResult(status="duplicate", target=target.path, block=block)

        logger.info(f"Progress block appended to {target.path}")
        observability_hooks.log_event(
            "feature_sync_updated",
            target=str(target.path),
            snapshot=snapshot.to_dict(),
        )
        return SyncResult(status="updated", target=target.path, block=block)
