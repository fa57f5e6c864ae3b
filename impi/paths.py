"""
Package path expansion and candidate file filtering.

Arguments follow Go tool semantics:

* `dir/...` - the directory and every nested package below it
* `...`     - same as `./...`
* `dir`     - the files directly inside dir
* anything else is taken as a file path
"""

from __future__ import annotations

import fnmatch
import os
import re
from dataclasses import dataclass
from typing import Iterator, List, Pattern, Tuple

from .errors import SetupError
from .types import VerifyOptions

SOURCE_EXT = ".go"
TEST_SUFFIX = "_test.go"
RECURSIVE_SUFFIX = "/..."

# Directories the go tool never descends into when expanding `...`
_SKIPPED_DIR_NAMES = {"testdata", "vendor"}


def _is_skipped_dir(name: str) -> bool:
    return name.startswith(".") or name.startswith("_") or name in _SKIPPED_DIR_NAMES


def _has_sources(dir_path: str, filenames: List[str]) -> bool:
    return any(
        fn.endswith(SOURCE_EXT) and os.path.isfile(os.path.join(dir_path, fn))
        for fn in filenames
    )


def _walk_packages(base: str) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(base):
        # in-place pruning, sorted for a stable discovery order
        dirnames[:] = sorted(d for d in dirnames if not _is_skipped_dir(d))
        if _has_sources(dirpath, filenames):
            yield dirpath


def expand_package_paths(arg: str) -> List[str]:
    """
    Expand one command line argument into package directories / file paths.

    Only the recursive form looks at the file system; plain arguments are
    returned unchanged (a missing file shows up later as a read failure).
    """
    if arg == "...":
        arg = "." + RECURSIVE_SUFFIX

    if arg.endswith(RECURSIVE_SUFFIX):
        base = arg[: -len(RECURSIVE_SUFFIX)] or "."
        return list(_walk_packages(base))

    return [arg]


def iter_package_files(package_path: str) -> Iterator[str]:
    """Files directly inside a package directory (sorted), or the path itself."""
    if not os.path.isdir(package_path):
        yield package_path
        return

    for name in sorted(os.listdir(package_path)):
        file_path = os.path.join(package_path, name)
        if os.path.isdir(file_path):
            continue
        yield file_path


def read_source(file_path: str) -> str:
    """Read a source file. OSError is left to the caller: an unreadable file is fatal."""
    with open(file_path, encoding="utf-8", errors="ignore") as f:
        return f.read()


# ---- Filtering ----

def _compile_skip_paths(patterns: Tuple[str, ...]) -> Tuple[Pattern[str], ...]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise SetupError(f"Invalid skip path pattern {pattern!r}: {e}") from e
    return tuple(compiled)


def _compile_ignore_pattern(pattern: str) -> str:
    """
    Validate a base-name glob and return it in fnmatch form.

    A character class must be closed and non-empty (`[`, `a[` and `[]` are
    rejected); `[^...]` is accepted as a negated class, like `[!...]`.
    """
    out: List[str] = []
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] != "[":
            out.append(pattern[i])
            i += 1
            continue
        j = i + 1
        negate = j < n and pattern[j] in "!^"
        if negate:
            j += 1
        # a leading ']' is a member of the class, not its end
        end = pattern.find("]", j + 1 if j < n and pattern[j] == "]" else j)
        if end < 0:
            raise SetupError(f"Invalid ignore pattern {pattern!r}: unterminated character class")
        out.append("[" + ("!" if negate else "") + pattern[j:end + 1])
        i = end + 1
    return "".join(out)


@dataclass(frozen=True)
class FileFilter:
    """
    Decides which discovered files get verified.

    Built once per run from VerifyOptions; all patterns are compiled up front
    so a bad pattern fails the run before any file is looked at.
    """
    skip_tests: bool = False
    skip_paths: Tuple[Pattern[str], ...] = ()
    ignore_pattern: str = ""

    @classmethod
    def from_options(cls, options: VerifyOptions) -> FileFilter:
        return cls(
            skip_tests=options.skip_tests,
            skip_paths=_compile_skip_paths(tuple(options.skip_paths)),
            ignore_pattern=_compile_ignore_pattern(options.ignore_pattern),
        )

    def accepts(self, file_path: str) -> bool:
        if not file_path.endswith(SOURCE_EXT):
            return False

        if self.skip_tests and file_path.endswith(TEST_SUFFIX):
            return False

        if any(rx.search(file_path) for rx in self.skip_paths):
            return False

        # shell glob against the base name, not the path; case-sensitive
        if self.ignore_pattern and fnmatch.fnmatchcase(os.path.basename(file_path), self.ignore_pattern):
            return False

        return True


__all__ = [
    "SOURCE_EXT",
    "TEST_SUFFIX",
    "expand_package_paths",
    "iter_package_files",
    "read_source",
    "FileFilter",
]
