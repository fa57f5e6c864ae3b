"""
Exception taxonomy for impi.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from ImpiUserError.

Per-file problems (FileCheckError and its subclasses) are recovered by the
engine and delivered to the reporter. Everything else aborts the run.

Programming errors and bugs should NOT inherit from ImpiUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import List, Sequence


class ImpiUserError(Exception):
    """Base class for all user-facing errors in impi."""
    pass


class SetupError(ImpiUserError, ValueError):
    """Invalid run configuration: unknown scheme, bad pattern, broken config file."""
    pass


class DiscoveryError(ImpiUserError):
    """Package path expansion produced nothing to verify."""
    pass


class FileCheckError(ImpiUserError):
    """Problem confined to a single file. Reported, counted, the run continues."""
    pass


class ImportParseError(FileCheckError):
    """Malformed source in the package clause or import declarations."""
    pass


class StructuralError(FileCheckError):
    """Import block shape violates the scheme (declarations, groups, types, order)."""
    pass


class SortError(FileCheckError):
    """One or more import groups are not sorted."""
    pass


class ImportPolicyError(FileCheckError):
    """
    All violations found in one file, combined into a single error.

    The message is the violation messages joined by newlines, in the
    order they were detected.
    """

    def __init__(self, violations: Sequence[FileCheckError]):
        self.violations: List[FileCheckError] = list(violations)
        super().__init__("\n".join(str(v) for v in self.violations))


class VerificationFailed(ImpiUserError):
    """Run-level result: some files failed verification. Details went to the reporter."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Found {count} errors")


__all__ = [
    "ImpiUserError",
    "SetupError",
    "DiscoveryError",
    "FileCheckError",
    "ImportParseError",
    "StructuralError",
    "SortError",
    "ImportPolicyError",
    "VerificationFailed",
]
