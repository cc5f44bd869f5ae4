"""Command-line entry points: feature-sync, project-info and test-command."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, NoReturn, Optional

from .config import Settings
from .diagnostics import collect_diagnostics, print_diagnostics
from .models import FeatureSyncError
from .project_info import collect_project_info, print_project_info
from .sync_logging import setup_logging
from .workflow import FeatureSyncManager


def _configure(settings: Settings, log_level: Optional[str]) -> None:
    setup_logging(log_level or settings.log_level, settings.log_file)


def build_feature_sync_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feature-sync",
        description="Append a timestamped progress block to a feature notes file.",
    )
    parser.add_argument(
        "name",
        nargs="*",
        help="notes file name (with or without .md) or a path to any file; omit to infer",
    )
    parser.add_argument("--notes-dir", help="notes directory under the repository root")
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG")
    return parser


def feature_sync_main(argv: Optional[List[str]] = None) -> int:
    args = build_feature_sync_parser().parse_args(argv)
    settings = Settings.from_env()
    _configure(settings, args.log_level)

    manager = FeatureSyncManager(
        Path.cwd(),
        notes_dir_name=args.notes_dir or settings.notes_dir,
    )
    try:
        result = manager.sync(" ".join(args.name))
    except FeatureSyncError as e:
        if e.candidates:
            # A declined inference prints the candidates as guidance.
            print(e.message)
            for candidate in e.candidates:
                print(" -", candidate.file)
        else:
            print(e.message, file=sys.stderr)
        return e.exit_code

    if result.written:
        print("Updated feature file:", result.target)
    else:
        print("Similar block detected; not adding duplicate.")
    return 0


def project_info_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="project-info", description="Print basic project metadata.")
    parser.add_argument("--workspace", help="directory to inspect")
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    _configure(settings, args.log_level)

    workspace = Path(args.workspace).expanduser() if args.workspace else settings.workspace
    print_project_info(collect_project_info(workspace))
    return 0


def diagnostic_command_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="test-command", description="Print diagnostic information.")
    parser.parse_args(argv)
    print_diagnostics(collect_diagnostics())
    return 0


def run(entry: Callable[[], int]) -> NoReturn:
    sys.exit(entry())


def feature_sync() -> None:
    run(feature_sync_main)


def project_info() -> None:
    run(project_info_main)


def diagnostic_command() -> None:
    run(diagnostic_command_main)
