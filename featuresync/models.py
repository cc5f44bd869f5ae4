"""Data models for Feature Sync.

This module contains the small data structures passed between the
locator, snapshot builder, composer and the command-line surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class Candidate:
    """A markdown notes file considered for a progress update."""

    file: str
    path: Path
    mtime: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "file": self.file,
            "path": str(self.path),
            "mtime": self.mtime,
        }


@dataclass(slots=True)
class ChangeSummary:
    """Counts of working-tree changes taken from porcelain status output."""

    added: int = 0
    modified: int = 0
    deleted: int = 0

    def format(self) -> str:
        return f"+{self.added} ~{self.modified} -{self.deleted}"


@dataclass(slots=True)
class Snapshot:
    """Repository state embedded into a progress block.

    ``branch``, ``commit`` and ``changes`` are None when the underlying
    git query failed or printed nothing.
    """

    timestamp: str
    cwd: str
    branch: Optional[str] = None
    commit: Optional[str] = None
    changes: Optional[ChangeSummary] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "timestamp": self.timestamp,
            "cwd": self.cwd,
            "branch": self.branch,
            "commit": self.commit,
            "changes": self.changes.format() if self.changes else None,
        }


@dataclass(slots=True)
class SyncResult:
    """Outcome of a successful feature sync run."""

    status: str
    target: Path
    block: str

    @property
    def written(self) -> bool:
        return self.status == "updated"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "status": self.status,
            "target": str(self.target),
            "block": self.block,
        }


@dataclass(slots=True)
class ProjectInfo:
    """Basic metadata about a workspace directory."""

    timestamp: str
    workspace: str
    files: List[str] = field(default_factory=list)
    git_status: Optional[str] = None
    project_name: Optional[str] = None
    project_version: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the key layout printed by project-info."""
        data: Dict[str, Any] = {
            "timestamp": self.timestamp,
            "workspace": self.workspace,
            "files": list(self.files),
            "gitStatus": self.git_status,
        }
        if self.project_name is not None or self.project_version is not None:
            data["projectName"] = self.project_name
            data["projectVersion"] = self.project_version
        if self.error is not None:
            data["error"] = self.error
        return data


class FeatureSyncError(RuntimeError):
    """Fatal feature sync failure carrying the process exit code."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = 1,
        candidates: Optional[List[Candidate]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.candidates = list(candidates or [])
