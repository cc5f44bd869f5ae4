"""Basic project metadata for the project-info command."""

from __future__ import annotations

import json
import logging
import tomllib
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

from .models import ProjectInfo

logger = logging.getLogger("featuresync.project_info")

MAX_LISTED_FILES = 10
GIT_DETECTED = "Git repository detected"
HEADER = "📊 Project Information:"


def _iso_now() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _read_manifest(workspace: Path) -> tuple[Optional[str], Optional[str]] | None:
    """Return (name, version) from package.json, else pyproject.toml."""
    package_json = workspace / "package.json"
    if package_json.exists():
        data = json.loads(package_json.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            return None, None
        return data.get("name"), data.get("version")

    pyproject = workspace / "pyproject.toml"
    if pyproject.exists():
        with pyproject.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
        if not isinstance(project, dict):
            return None, None
        return project.get("name"), project.get("version")

    return None


def collect_project_info(workspace: Path | str) -> ProjectInfo:
    """Gather metadata about ``workspace``; failures land in ``error``."""
    workspace_path = Path(workspace)
    info = ProjectInfo(timestamp=_iso_now(), workspace=str(workspace_path))

    try:
        info.files = sorted(entry.name for entry in workspace_path.iterdir())[:MAX_LISTED_FILES]

        if (workspace_path / ".git").exists():
            info.git_status = GIT_DETECTED

        manifest = _read_manifest(workspace_path)
        if manifest is not None:
            info.project_name, info.project_version = manifest
    except (OSError, ValueError) as e:
        # json and toml decode errors are ValueError subclasses
        logger.info(f"Project info for {workspace_path} incomplete: {e}")
        info.error = str(e)

    return info


def print_project_info(info: ProjectInfo, output: Optional[TextIO] = None) -> None:
    print(HEADER, file=output)
    print(json.dumps(info.to_dict(), indent=2, ensure_ascii=False), file=output)
