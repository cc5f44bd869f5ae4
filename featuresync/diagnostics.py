"""Diagnostic output confirming the commands are installed and runnable."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional, TextIO

BANNER = "🎉 Custom feature-sync command is working!"
NOT_SET = "Not set"


def collect_diagnostics(
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, object]:
    env = os.environ if environ is None else environ
    return {
        "cwd": str(cwd if cwd is not None else Path.cwd()),
        "environment": {
            "USER": env.get("USER"),
            "HOME": env.get("HOME"),
            "WORKSPACE": env.get("WORKSPACE") or NOT_SET,
        },
    }


def print_diagnostics(data: Dict[str, object], output: Optional[TextIO] = None) -> None:
    print(BANNER, file=output)
    print("Current directory:", data["cwd"], file=output)
    print("Environment:", data["environment"], file=output)
