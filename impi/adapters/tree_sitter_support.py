"""
Tree-sitter plumbing shared by language adapters.

A document owns the source bytes and their syntax tree and runs the named
queries its language declares. Line numbers handed out are 1-based, the way
they appear in error messages.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple

from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree


class TreeSitterDocument(ABC):
    """Parsed source file plus a per-document cache of compiled queries."""

    def __init__(self, text: str):
        self.text = text
        self._source = text.encode("utf-8")
        self._compiled: Dict[str, Query] = {}
        self.tree: Tree = self.get_parser().parse(self._source)

    @abstractmethod
    def get_language(self) -> Language:
        """Grammar of the document."""

    @abstractmethod
    def get_query_definitions(self) -> Dict[str, str]:
        """Query name -> S-expression source."""

    def get_parser(self) -> Parser:
        return Parser(self.get_language())

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def query(self, query_name: str, start_node: Optional[Node] = None) -> List[Tuple[Node, str]]:
        """
        Run a named query over the whole tree or one subtree.

        Returns (node, capture name) pairs in source order.

        Raises:
            ValueError: the language does not define query_name
        """
        compiled = self._compiled.get(query_name)
        if compiled is None:
            definitions = self.get_query_definitions()
            if query_name not in definitions:
                raise ValueError(f"Unknown query: {query_name}")
            compiled = Query(self.get_language(), definitions[query_name])
            self._compiled[query_name] = compiled

        captured: List[Tuple[Node, str]] = []
        for _pattern, captures in QueryCursor(compiled).matches(start_node or self.root_node):
            for capture_name, nodes in captures.items():
                captured.extend((node, capture_name) for node in nodes)

        # matches() groups by pattern
        captured.sort(key=lambda pair: pair[0].start_byte)
        return captured

    def get_node_text(self, node: Node) -> str:
        return self._source[node.start_byte:node.end_byte].decode("utf-8")

    def line_prefix(self, node: Node) -> str:
        """Text between the start of the node's first line and the node itself."""
        line_start = self._source.rfind(b"\n", 0, node.start_byte) + 1
        return self._source[line_start:node.start_byte].decode("utf-8", errors="replace")

    @staticmethod
    def get_line_range(node: Node) -> Tuple[int, int]:
        """First and last line of the node, inclusive."""
        return node.start_point[0] + 1, node.end_point[0] + 1

    @staticmethod
    def position(node: Node) -> str:
        """`line:column` of the node start, both 1-based."""
        row, col = node.start_point
        return f"{row + 1}:{col + 1}"

    def walk(self, start_node: Optional[Node] = None) -> Iterator[Node]:
        """Pre-order traversal, anonymous nodes included."""
        stack = [start_node or self.root_node]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_nodes_by_type(self, node_type: str, start_node: Optional[Node] = None) -> List[Node]:
        return [n for n in self.walk(start_node) if n.type == node_type]

    def first_error(self, start_node: Optional[Node] = None) -> Optional[Node]:
        """First ERROR or MISSING node of the subtree in source order, None for a clean subtree."""
        node = start_node or self.root_node
        if not node.has_error:
            return None
        for candidate in self.walk(node):
            if candidate.type == "ERROR" or candidate.is_missing:
                return candidate
        return node
