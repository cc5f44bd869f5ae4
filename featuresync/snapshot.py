"""Lightweight git state captured into each progress block.

Every query tolerates failure on its own: a missing ``git`` binary, a
non-zero exit or empty output all yield None, and the run carries on.
"""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

from .models import ChangeSummary, Snapshot

logger = logging.getLogger("featuresync.snapshot")

CommandRunner = Callable[[Sequence[str], Path], Optional[str]]

BRANCH_COMMAND = ("git", "rev-parse", "--abbrev-ref", "HEAD")
COMMIT_COMMAND = ("git", "log", "-1", "--oneline")
STATUS_COMMAND = ("git", "status", "--porcelain")

ADDED_PREFIXES = ("A", "??")
MODIFIED_PREFIXES = (" M", "M ")
DELETED_PREFIXES = (" D", "D ")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def run_command(command: Sequence[str], cwd: Path) -> Optional[str]:
    """Run ``command`` in ``cwd`` and return its stdout, or None on failure."""
    try:
        proc = subprocess.run(
            list(command),
            cwd=cwd,
            text=True,
            capture_output=True,
            stdin=subprocess.DEVNULL,
            check=False,
        )
    except (OSError, ValueError) as e:
        logger.debug(f"{' '.join(command)} could not be started: {e}")
        return None

    if proc.returncode != 0:
        logger.debug(f"{' '.join(command)} exited with {proc.returncode}: {proc.stderr.strip()}")
        return None
    return proc.stdout


def _query(command: Sequence[str], cwd: Path, runner: CommandRunner) -> Optional[str]:
    output = runner(command, cwd)
    if output is None:
        return None
    output = output.strip()
    return output or None


def query_branch(cwd: Path, runner: CommandRunner = run_command) -> Optional[str]:
    return _query(BRANCH_COMMAND, cwd, runner)


def query_latest_commit(cwd: Path, runner: CommandRunner = run_command) -> Optional[str]:
    return _query(COMMIT_COMMAND, cwd, runner)


def query_status(cwd: Path, runner: CommandRunner = run_command) -> Optional[str]:
    """Return porcelain status text; leading columns are kept intact."""
    output = runner(STATUS_COMMAND, cwd)
    if output is None:
        return None
    output = output.rstrip()
    return output or None


def summarize_changes(status: Optional[str]) -> Optional[ChangeSummary]:
    """Classify porcelain status lines into added, modified and deleted."""
    if not status:
        return None

    summary = ChangeSummary()
    for line in status.splitlines():
        if not line:
            continue
        if line.startswith(ADDED_PREFIXES):
            summary.added += 1
        if line.startswith(MODIFIED_PREFIXES):
            summary.modified += 1
        if line.startswith(DELETED_PREFIXES):
            summary.deleted += 1
    return summary


def format_timestamp(now: datetime) -> str:
    """Format ``now`` in UTC with second precision."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def relative_cwd(cwd: Path, repo_root: Path) -> str:
    """Express ``cwd`` relative to the repository root as ``.`` or ``./sub``."""
    try:
        relative = Path(cwd).resolve().relative_to(Path(repo_root).resolve())
    except ValueError:
        return str(cwd)
    if relative == Path("."):
        return "."
    return f"./{relative.as_posix()}"


def build_snapshot(
    cwd: Path,
    repo_root: Path,
    now: datetime,
    runner: CommandRunner = run_command,
) -> Snapshot:
    """Query git sequentially and assemble a snapshot."""
    branch = query_branch(cwd, runner)
    commit = query_latest_commit(cwd, runner)
    status = query_status(cwd, runner)

    snapshot = Snapshot(
        timestamp=format_timestamp(now),
        cwd=relative_cwd(cwd, repo_root),
        branch=branch,
        commit=commit,
        changes=summarize_changes(status),
    )
    logger.debug(f"Snapshot built: {snapshot.to_dict()}")
    return snapshot
