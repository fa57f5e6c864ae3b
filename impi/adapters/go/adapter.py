"""
Go adapter core: Tree-sitter document bound to the Go grammar.
"""

from __future__ import annotations

from typing import Dict

from tree_sitter import Language

from ..tree_sitter_support import TreeSitterDocument


class GoDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_go as tsgo
        return Language(tsgo.language())

    def get_query_definitions(self) -> Dict[str, str]:
        from .queries import QUERIES
        return QUERIES
