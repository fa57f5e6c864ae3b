"""
Utilities for working with CLI in tests.
"""

import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    """
    Runs impi.cli with specified arguments in the given directory.

    Args:
        root: Working directory for command execution
        *args: Command line arguments for impi.cli

    Returns:
        CompletedProcess with execution results
    """
    env = os.environ.copy()
    env.pop("IMPI_DEBUG", None)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "impi.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )
