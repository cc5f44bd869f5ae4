"""Composing and appending progress blocks to a feature notes file."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence

from .models import Snapshot

OPEN_ITEM_PATTERN = re.compile(r"^- \[ \] [^\r\n]+", re.MULTILINE)
OPEN_ITEM_PREFIX = "- [ ] "
MAX_OPEN_ITEMS = 5

# Length of the block prefix compared against existing content. It spans
# the heading and the timestamp up to the tens digit of the hour.
SIGNATURE_LENGTH = 25

PLACEHOLDER_ITEM = "<add next task>"
NOT_AVAILABLE = "n/a"
NO_CHANGES = "none"


def extract_open_items(content: str, limit: int = MAX_OPEN_ITEMS) -> List[str]:
    """Return the text of the first ``limit`` unchecked checkbox lines."""
    matches = OPEN_ITEM_PATTERN.findall(content)
    return [match[len(OPEN_ITEM_PREFIX):] for match in matches[:limit]]


def compose_block(snapshot: Snapshot, open_items: Sequence[str]) -> str:
    """Render the markdown progress section for ``snapshot``."""
    if open_items:
        items = "\n".join(f"{OPEN_ITEM_PREFIX}{item}" for item in open_items)
    else:
        items = f"{OPEN_ITEM_PREFIX}{PLACEHOLDER_ITEM}"

    changes = snapshot.changes.format() if snapshot.changes else NO_CHANGES

    lines = [
        "",
        f"## Progress {snapshot.timestamp}",
        "",
        "Context:",
        f"- Branch: {snapshot.branch or NOT_AVAILABLE}",
        f"- Commit: {snapshot.commit or NOT_AVAILABLE}",
        f"- Changes: {changes}",
        f"- PWD: {snapshot.cwd}",
        "",
        "Plan (succinct):",
        "- Current Focus: <fill>",
        "- Next Step: <single actionable step>",
        "- Risks: <list or none>",
        "",
        "Open Items:",
        items,
        "",
        "---",
        "",
    ]
    return "\n".join(lines)


def block_signature(block: str) -> str:
    return block[:SIGNATURE_LENGTH]


def is_duplicate(content: str, block: str) -> bool:
    """Tell whether ``content`` already holds a block with the same signature."""
    return block_signature(block) in content


def append_block(path: Path, content: str, block: str) -> bool:
    """Append ``block`` to the file at ``path`` unless it is a duplicate.

    ``content`` is the file text read earlier; the file is rewritten in full
    as ``content`` with trailing whitespace removed followed by ``block``.
    Line endings already in ``content`` are written back untouched.
    Returns False when the write was skipped. OSError propagates.
    """
    if is_duplicate(content, block):
        return False
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content.rstrip() + block)
    return True
