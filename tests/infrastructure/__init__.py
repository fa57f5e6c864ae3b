"""
Shared test infrastructure for impi.

Modules:
- file_utils: creating files and Go sources in temporary trees
- cli_utils: running the command line tool in a subprocess
- reporting: in-memory error reporters
"""

from .file_utils import write, write_go
from .cli_utils import run_cli
from .reporting import CollectingReporter, ExplodingReporter

__all__ = [
    "write",
    "write_go",
    "run_cli",
    "CollectingReporter",
    "ExplodingReporter",
]
