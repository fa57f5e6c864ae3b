"""
Go import analysis and classification using Tree-sitter AST.
Clean implementation without regex parsing.
"""

from __future__ import annotations

from typing import Dict, List

from ..imports import ImportClassifier, TreeSitterImportReader
from ..tree_sitter_support import TreeSitterDocument, Node
from ...errors import ImportParseError
from ...types import ImportDeclaration, ImportRecord, ImportType

# Nodes that show an ERROR subtree is a broken import declaration
_IMPORT_NODE_TYPES = ("import", "import_spec", "import_spec_list", "import_declaration")


def classify_import(path: str, local_prefix: str = "") -> ImportType:
    """
    Classify a Go import path.

    Standard library paths never contain a dot (`fmt`, `net/http`), anything
    with a dot is either the project itself or a third party module. Without
    a local prefix the two can't be told apart.
    """
    if "." not in path:
        return ImportType.STD

    if not local_prefix:
        return ImportType.LOCAL_OR_THIRD_PARTY

    if path.startswith(local_prefix):
        return ImportType.LOCAL

    return ImportType.THIRD_PARTY


class GoImportClassifier(ImportClassifier):
    """Go-specific import classifier."""

    def __init__(self, local_prefix: str = ""):
        self.local_prefix = local_prefix

    def classify(self, path: str) -> ImportType:
        return classify_import(path, self.local_prefix)


class GoImportReader(TreeSitterImportReader):
    """
    Go-specific Tree-sitter import reader.

    Only the package clause and the import declarations that follow it are
    looked at, so syntax errors further down the file do not matter.
    """

    def read_declarations(self, doc: TreeSitterDocument) -> List[ImportDeclaration]:
        declarations: List[ImportDeclaration] = []
        seen_package = False

        for child in doc.root_node.named_children:
            if child.type == "comment":
                continue

            if not seen_package:
                if child.type != "package_clause" or child.has_error:
                    raise ImportParseError(f"{doc.position(child)}: expected 'package'")
                seen_package = True
                continue

            if child.type == "import_declaration":
                error = doc.first_error(child)
                if error is not None:
                    raise ImportParseError(f"{doc.position(error)}: invalid import declaration")
                declarations.append(self._read_declaration(doc, child))
                continue

            if child.type == "ERROR" and self._is_broken_import(doc, child):
                raise ImportParseError(f"{doc.position(child)}: invalid import declaration")

            # imports always come first in Go; the first other declaration ends the region
            break

        if not seen_package:
            raise ImportParseError("1:1: expected 'package', found 'EOF'")

        return declarations

    def _read_declaration(self, doc: TreeSitterDocument, decl: Node) -> ImportDeclaration:
        start_line, end_line = doc.get_line_range(decl)
        lead_comments = self._standalone_comments(doc, decl)

        records: List[ImportRecord] = []
        prev_end_byte = decl.start_byte
        for node, capture_name in doc.query("imports", decl):
            if capture_name != "import_spec":
                continue

            path_node = node.child_by_field_name("path")
            if path_node is None:
                raise ImportParseError(f"{doc.position(node)}: missing import path")

            spec_start, spec_end = doc.get_line_range(node)
            import_line = doc.get_line_range(path_node)[0]

            # walk up through the comment group attached right above the spec
            record_start = spec_start
            comment = lead_comments.get(record_start - 1)
            while comment is not None and comment.start_byte >= prev_end_byte:
                record_start = doc.get_line_range(comment)[0]
                comment = lead_comments.get(record_start - 1)

            records.append(ImportRecord(
                path=self._unquote(doc.get_node_text(path_node)),
                start_line=record_start,
                end_line=spec_end,
                import_line=import_line,
            ))
            prev_end_byte = node.end_byte

        return ImportDeclaration(start_line=start_line, end_line=end_line, records=tuple(records))

    @staticmethod
    def _standalone_comments(doc: TreeSitterDocument, decl: Node) -> Dict[int, Node]:
        """Comments on lines of their own inside the declaration, keyed by end line."""
        by_end_line: Dict[int, Node] = {}
        for node, _ in doc.query("comments", decl):
            if doc.line_prefix(node).strip():
                # trailing comment of the previous spec
                continue
            by_end_line.setdefault(doc.get_line_range(node)[1], node)
        return by_end_line

    @staticmethod
    def _is_broken_import(doc: TreeSitterDocument, node: Node) -> bool:
        return any(doc.find_nodes_by_type(t, node) for t in _IMPORT_NODE_TYPES)

    @staticmethod
    def _unquote(literal: str) -> str:
        # "path" or `path`
        if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
            return literal[1:-1]
        return literal


__all__ = ["classify_import", "GoImportClassifier", "GoImportReader"]
