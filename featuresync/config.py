"""Environment-driven settings for the Feature Sync entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_NOTES_DIR = "notes"
DEFAULT_WORKSPACE = "/workspace"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(slots=True)
class Settings:
    """Settings read once by the CLI and the MCP server.

    The core modules never consult the environment; they receive these
    values as explicit arguments.
    """

    NOTES_DIR_ENV = "FEATURESYNC_NOTES_DIR"
    WORKSPACE_ENV = "FEATURESYNC_WORKSPACE"
    LOG_LEVEL_ENV = "FEATURESYNC_LOG_LEVEL"
    LOG_FILE_ENV = "FEATURESYNC_LOG_FILE"

    notes_dir: str = DEFAULT_NOTES_DIR
    workspace: Path = Path(DEFAULT_WORKSPACE)
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        log_file = env.get(cls.LOG_FILE_ENV)
        return cls(
            notes_dir=env.get(cls.NOTES_DIR_ENV) or DEFAULT_NOTES_DIR,
            workspace=Path(env.get(cls.WORKSPACE_ENV) or DEFAULT_WORKSPACE).expanduser(),
            log_level=(env.get(cls.LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )
