"""
Language adapters: Tree-sitter documents and import readers.

Only Go is implemented; the grouping/ordering engine itself is language-neutral.
"""

from .imports import ImportClassifier, TreeSitterImportReader
from .tree_sitter_support import TreeSitterDocument

__all__ = ["ImportClassifier", "TreeSitterImportReader", "TreeSitterDocument"]
