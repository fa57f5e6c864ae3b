"""
Language-neutral contracts for import classification and import reading.

The grouping/ordering engine only sees ImportDeclaration/ImportRecord values;
everything that knows about a concrete language lives behind these two seams.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from .tree_sitter_support import TreeSitterDocument
from ..types import ImportDeclaration, ImportType


class ImportClassifier(ABC):
    """Abstract base for import classification (std / local / third party)."""

    @abstractmethod
    def classify(self, path: str) -> ImportType:
        """Map an import path to its category."""
        pass


class TreeSitterImportReader(ABC):
    """
    Base Tree-sitter based reader of top-level import declarations.
    Uses AST structure instead of regex parsing.
    """

    @abstractmethod
    def read_declarations(self, doc: TreeSitterDocument) -> List[ImportDeclaration]:
        """
        Read import declarations of the document in source order.

        Raises:
            ImportParseError: the import region of the file is malformed
        """
        pass


__all__ = ["ImportClassifier", "TreeSitterImportReader"]
