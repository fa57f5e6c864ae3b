"""
Tree-sitter query definitions for Go language.
Contains S-expression queries used by the import reader.
"""

from __future__ import annotations

QUERIES = {
    # Import specs with their path literal (plain, aliased, dot and blank imports)
    "imports": """
    (import_spec
      path: (_) @import_path) @import_spec
    """,

    # Comments
    "comments": """
    (comment) @comment
    """,
}
