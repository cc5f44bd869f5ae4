"""Locating the repository and the notes file to update.

Covers walking up to the repository root, scanning the notes directory
for markdown candidates, picking the most relevant one, and resolving an
explicit file argument.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

from .models import Candidate

logger = logging.getLogger("featuresync.repository")

VCS_MARKER = ".git"
MARKDOWN_SUFFIX = ".md"
FEATURE_KEYWORDS = ("feature", "roadmap", "task", "plan")

_KEYWORD_PATTERN = re.compile("|".join(FEATURE_KEYWORDS), re.IGNORECASE)


def find_repo_root(start: Path | str) -> Path:
    """Return the nearest ancestor of ``start`` holding a ``.git`` entry.

    Falls back to ``start`` itself when the filesystem root is reached.
    """
    start_path = Path(start).resolve()
    for directory in (start_path, *start_path.parents):
        if (directory / VCS_MARKER).exists():
            logger.debug(f"Repository root found at {directory}")
            return directory
    logger.debug(f"No repository marker above {start_path}; using it as root")
    return start_path


def list_feature_candidates(notes_dir: Path | str) -> List[Candidate]:
    """List markdown files in ``notes_dir``, most recently modified first."""
    notes_path = Path(notes_dir)
    if not notes_path.is_dir():
        return []

    candidates: List[Candidate] = []
    for entry in notes_path.iterdir():
        if not entry.name.endswith(MARKDOWN_SUFFIX) or not entry.is_file():
            continue
        candidates.append(Candidate(file=entry.name, path=entry, mtime=entry.stat().st_mtime))

    # sorted() is stable, so equal mtimes keep listing order
    return sorted(candidates, key=lambda candidate: candidate.mtime, reverse=True)


def infer_feature_file(candidates: Sequence[Candidate]) -> Optional[Candidate]:
    """Pick the newest keyword-matching candidate, else the newest overall."""
    for candidate in candidates:
        if _KEYWORD_PATTERN.search(candidate.file):
            return candidate
    return candidates[0] if candidates else None


def resolve_feature_argument(
    argument: str,
    notes_dir: Path,
    cwd: Path | str,
) -> tuple[Optional[Candidate], str]:
    """Resolve an explicit file argument to a candidate.

    The name (with ``.md`` appended when missing) is looked up in the notes
    directory first, unless it is absolute, then the raw argument is tried
    as a path relative to ``cwd``. Returns the candidate, or None, together
    with the name that was looked up in the notes directory.
    """
    name = argument if argument.endswith(MARKDOWN_SUFFIX) else f"{argument}{MARKDOWN_SUFFIX}"

    if not Path(name).is_absolute():
        in_notes = notes_dir / name
        if in_notes.exists():
            return Candidate(file=name, path=in_notes), name

    direct = (Path(cwd) / argument).resolve()
    if direct.exists():
        return Candidate(file=direct.name, path=direct), name

    return None, name
