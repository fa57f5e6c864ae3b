from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Tuple


# ---- Import categories ----

class ImportType(Enum):
    UNKNOWN = "Unknown"
    STD = "Std"
    LOCAL = "Local"
    THIRD_PARTY = "Third party"
    LOCAL_OR_THIRD_PARTY = "Local or third party"

    @property
    def display_name(self) -> str:
        return self.value


# ---- Parsed imports ----

@dataclass(frozen=True)
class ImportRecord:
    """
    One import spec of a file.

    start_line includes an attached leading comment, import_line is the
    line of the path literal itself. Lines are 1-based.
    """
    path: str
    start_line: int
    end_line: int
    import_line: int
    classified_type: ImportType = ImportType.UNKNOWN


@dataclass(frozen=True)
class ImportDeclaration:
    """A top-level `import` declaration with its specs in source order."""
    start_line: int
    end_line: int
    records: Tuple[ImportRecord, ...] = ()


@dataclass(frozen=True)
class ImportGroup:
    """Contiguous run of import records (no blank or comment-only line inside)."""
    records: Tuple[ImportRecord, ...]

    @property
    def paths(self) -> list[str]:
        return [r.path for r in self.records]

    @property
    def leading_type(self) -> ImportType:
        return self.records[0].classified_type


# ---- Run options ----

@dataclass(frozen=True)
class VerifyOptions:
    scheme: str = ""
    local_prefix: str = ""
    skip_tests: bool = False
    # regexes, searched anywhere in the file path
    skip_paths: Tuple[str, ...] = field(default_factory=tuple)
    ignore_generated: bool = False
    # glob, matched against the base name
    ignore_pattern: str = ""


# ---- Results ----

@dataclass(frozen=True)
class VerificationError:
    """Failure of a single file, as delivered to the reporter."""
    file_path: str
    message: str

    def __str__(self) -> str:
        return f"{self.file_path}: {self.message}"


class ErrorReporter(Protocol):
    """Receives verification errors as the workers detect them."""

    def report(self, error: VerificationError) -> None:
        ...


__all__ = [
    "ImportType",
    "ImportRecord",
    "ImportDeclaration",
    "ImportGroup",
    "VerifyOptions",
    "VerificationError",
    "ErrorReporter",
]
