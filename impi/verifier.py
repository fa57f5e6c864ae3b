"""
Per-file verification of the import block.

The verifier walks one file through a fixed sequence of checks:

    parse -> (exempt | group) -> group count -> [mixed types -> order] -> sorting

Structural and sorting violations are accumulated and raised together as a
single ImportPolicyError, so a file is reported once with everything wrong
with it. Parse failures and the multiple-declarations rule end the check early.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import List, Optional, Sequence

from .adapters.go import GoDocument, GoImportClassifier, GoImportReader
from .adapters.imports import ImportClassifier, TreeSitterImportReader
from .errors import FileCheckError, ImportPolicyError, SortError, StructuralError
from .grouping import filter_foreign_imports, group_imports
from .schemes import Scheme
from .types import ImportDeclaration, ImportGroup, ImportRecord, VerifyOptions

logger = logging.getLogger(__name__)

# Marker of generated code. Can be anywhere in the file, in practice the first line.
GENERATED_RE = re.compile(r"// Code generated .* DO NOT EDIT\.")


class Verifier:
    """
    Checks one file at a time against a scheme.

    Instances are cheap but not meant to be shared between threads: each
    worker owns its own verifier.
    """

    def __init__(
        self,
        scheme: Scheme,
        options: VerifyOptions,
        *,
        classifier: Optional[ImportClassifier] = None,
        reader: Optional[TreeSitterImportReader] = None,
    ):
        self.scheme = scheme
        self.options = options
        self.classifier = classifier or GoImportClassifier(options.local_prefix)
        self.reader = reader or GoImportReader()

    def verify(self, source: str) -> None:
        """
        Verify the import block of one source file.

        Raises:
            ImportParseError: the package clause or imports are malformed
            StructuralError: more than one import declaration
            ImportPolicyError: all group/order/sort violations of the file
        """
        if self.options.ignore_generated and GENERATED_RE.search(source):
            logger.debug("generated file, skipping")
            return

        declarations = filter_foreign_imports(self.parse(source))

        if not declarations:
            return

        if len(declarations) > 1:
            raise StructuralError(
                f"multiple import declarations not permitted, got {len(declarations)}"
            )

        groups = group_imports(self._classify(declarations[0].records))
        logger.debug("%d import group(s)", len(groups))

        violations: List[FileCheckError] = []

        count_error = self.check_group_count(groups)
        if count_error is not None:
            violations.append(count_error)
        elif not self.scheme.allow_mixed_types:
            mixed_error = self.check_mixed_groups(groups)
            if mixed_error is not None:
                violations.append(mixed_error)
            else:
                order_error = self.check_group_order(groups)
                if order_error is not None:
                    violations.append(order_error)

        sort_error = self.check_sorted(groups)
        if sort_error is not None:
            violations.append(sort_error)

        if violations:
            raise ImportPolicyError(violations)

    def parse(self, source: str) -> List[ImportDeclaration]:
        return self.reader.read_declarations(GoDocument(source))

    def _classify(self, records: Sequence[ImportRecord]) -> List[ImportRecord]:
        return [replace(r, classified_type=self.classifier.classify(r.path)) for r in records]

    # ---- Individual checks ----

    def check_group_count(self, groups: Sequence[ImportGroup]) -> Optional[StructuralError]:
        if len(groups) > self.scheme.max_groups:
            return StructuralError(
                f"expected no more than {self.scheme.max_groups} groups, got {len(groups)}"
            )
        return None

    @staticmethod
    def check_mixed_groups(groups: Sequence[ImportGroup]) -> Optional[StructuralError]:
        """First record whose category differs from its group's first record."""
        for index, group in enumerate(groups):
            first = group.records[0]
            for record in group.records[1:]:
                if record.classified_type != first.classified_type:
                    return StructuralError(
                        "Imports of different types are not allowed in the same group "
                        f"({index}): {first.path} != {record.path}"
                    )
        return None

    def check_group_order(self, groups: Sequence[ImportGroup]) -> Optional[StructuralError]:
        observed = [g.leading_type for g in groups]
        if self.scheme.allows_order(observed):
            return None

        names = " ".join(f'"{self.scheme.category_name(t)}"' for t in observed)
        return StructuralError(f"Import groups are not in the proper order: [{names}]")

    @staticmethod
    def check_sorted(groups: Sequence[ImportGroup]) -> Optional[SortError]:
        """Every group must be strictly ascending (byte-wise); all offending groups are listed."""
        report = ""
        for index, group in enumerate(groups):
            paths = group.paths
            keys = [p.encode("utf-8") for p in paths]
            if all(a < b for a, b in zip(keys, keys[1:])):
                continue
            expected = sorted(paths, key=lambda p: p.encode("utf-8"))
            report += "\n- Import group {} is not sorted\n-- Got:\n{}\n\n-- Expected:\n{}\n".format(
                index, "\n".join(paths), "\n".join(expected)
            )

        return SortError(report) if report else None


__all__ = ["Verifier", "GENERATED_RE"]
