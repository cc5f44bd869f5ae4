"""MCP server exposing feature sync and project metadata tools."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from featuresync.config import Settings
from featuresync.diagnostics import collect_diagnostics
from featuresync.models import FeatureSyncError
from featuresync.project_info import collect_project_info
from featuresync.prompt import ScriptedInputSource
from featuresync.sync_logging import setup_logging
from featuresync.workflow import FeatureSyncManager

mcp = FastMCP("feature-sync")

SETTINGS = Settings.from_env()


def _resolve_root(root: Optional[str]) -> Path:
    if not root:
        return Path.cwd().resolve()
    resolved = Path(root).expanduser().resolve()
    if not resolved.exists():
        raise ValueError(f"Provided root '{root}' does not exist.")
    return resolved


def _manager(root: Optional[str], *, accept_inferred: bool = False) -> FeatureSyncManager:
    # Tool calls cannot prompt; the caller answers the confirmation up front.
    answer = ScriptedInputSource("yes" if accept_inferred else "no")
    return FeatureSyncManager(
        _resolve_root(root),
        notes_dir_name=SETTINGS.notes_dir,
        input_source=answer,
        output=io.StringIO(),
    )


@mcp.tool()
def list_feature_candidates(root: Optional[str] = None) -> Dict[str, Any]:
    """List markdown notes files, newest first, and the file inference would pick."""

    manager = _manager(root)
    candidates = manager.list_candidates()
    inferred = manager.infer_target()
    return {
        "notes_dir": str(manager.notes_dir),
        "notes_dir_exists": manager.notes_dir.is_dir(),
        "candidates": [candidate.to_dict() for candidate in candidates],
        "inferred": inferred.file if inferred else None,
    }


@mcp.tool()
def sync_feature(
    feature_file: Optional[str] = None,
    accept_inferred: bool = False,
    root: Optional[str] = None,
) -> Dict[str, Any]:
    """Append a progress block (git branch, commit, changes, open items) to a feature notes file.
    Pass feature_file to choose the file, or set accept_inferred to use the inferred one.
    Call list_feature_candidates first to see which file would be inferred."""

    try:
        manager = _manager(root, accept_inferred=accept_inferred)
        result = manager.sync(feature_file)
    except FeatureSyncError as e:
        response: Dict[str, Any] = {
            "error": e.message,
            "exit_code": e.exit_code,
        }
        if e.candidates:
            response["candidates"] = [candidate.file for candidate in e.candidates]
            response["suggestion"] = "Pass feature_file, or set accept_inferred to use the inferred file"
        return response

    message = (
        f"Updated feature file: {result.target}"
        if result.written
        else "Similar block detected; not adding duplicate."
    )
    return {**result.to_dict(), "message": message}


@mcp.tool()
def project_info(workspace: Optional[str] = None) -> Dict[str, Any]:
    """Return basic metadata (files, git detection, manifest name and version) for a workspace."""

    path = Path(workspace).expanduser() if workspace else SETTINGS.workspace
    return collect_project_info(path).to_dict()


@mcp.tool()
def diagnostics() -> Dict[str, Any]:
    """Confirm the server is running and report its directory and environment."""

    return {"message": "Feature sync server is working", **collect_diagnostics()}


@mcp.resource("feature-sync://candidates")
def resource_candidates() -> str:
    """Resource view listing feature notes candidates for discovery."""

    manager = _manager(None)
    candidates = manager.list_candidates()
    if not candidates:
        return f"No markdown feature candidates in {manager.notes_dir}"

    lines = ["Feature notes candidates"]
    for candidate in candidates:
        lines.append(f"- {candidate.file}")
    return "\n".join(lines)


if __name__ == "__main__":
    setup_logging(SETTINGS.log_level, SETTINGS.log_file)
    mcp.run(transport="stdio")
