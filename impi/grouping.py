"""
Grouping of import records by source-line adjacency.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .types import ImportDeclaration, ImportGroup, ImportRecord

# cgo pseudo-package; lives in its own declaration under the C preamble comment
FOREIGN_PSEUDO_IMPORT = "C"


def group_imports(records: Iterable[ImportRecord]) -> List[ImportGroup]:
    """
    Split records (source order) into groups.

    A record continues the current group only when it starts on the line right
    after the previous record ends. A leading comment attached to a record is
    already part of its start_line, so it does not break a group; a blank line
    or a detached comment does.
    """
    groups: List[ImportGroup] = []
    current: List[ImportRecord] = []
    prev: Optional[ImportRecord] = None

    for record in records:
        if prev is not None and record.start_line != prev.end_line + 1:
            groups.append(ImportGroup(records=tuple(current)))
            current = []
        current.append(record)
        prev = record

    if current:
        groups.append(ImportGroup(records=tuple(current)))

    return groups


def is_foreign_pseudo_import(decl: ImportDeclaration) -> bool:
    """True for a declaration that holds nothing but `import "C"`."""
    return bool(decl.records) and all(r.path == FOREIGN_PSEUDO_IMPORT for r in decl.records)


def filter_foreign_imports(declarations: Sequence[ImportDeclaration]) -> List[ImportDeclaration]:
    """Drop standalone `import "C"` declarations; mixed declarations are kept as is."""
    return [d for d in declarations if not is_foreign_pseudo_import(d)]


__all__ = [
    "FOREIGN_PSEUDO_IMPORT",
    "group_imports",
    "is_foreign_pseudo_import",
    "filter_foreign_imports",
]
