"""Feature Sync - progress notes and project metadata for developer assistants."""

# No imports at package level; import modules directly where needed

__all__ = [
    "cli",
    "config",
    "diagnostics",
    "models",
    "progress",
    "project_info",
    "prompt",
    "repository",
    "snapshot",
    "sync_logging",
    "workflow",
]
