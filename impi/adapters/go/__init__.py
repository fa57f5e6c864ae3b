"""
Go adapter: Tree-sitter document, import classifier and import reader.
"""

from .adapter import GoDocument
from .imports import GoImportClassifier, GoImportReader, classify_import

__all__ = ["GoDocument", "GoImportClassifier", "GoImportReader", "classify_import"]
