"""Shared tree-sitter parsing utilities.

Provides parse_source and the small node helpers used by every
syntax-tree based pass in the sfclint.sfc package.
"""

from __future__ import annotations

from collections.abc import Iterator

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser, Tree

TYPESCRIPT = Language(tsts.language_typescript())
TSX = Language(tsts.language_tsx())

_TSX_LANGS = frozenset({"tsx", "jsx"})


def language_for(lang: str | None) -> Language:
    """Pick the grammar for a logic block's ``lang`` attribute.

    Args:
        lang: Value of the ``lang`` attribute (``ts``, ``tsx``, ...) or None

    Returns:
        The TSX grammar for ``tsx``/``jsx``, TypeScript otherwise
    """
    if lang and lang.lower() in _TSX_LANGS:
        return TSX
    return TYPESCRIPT


def parse_source(code: str | bytes, lang: str | None = None) -> Tree:
    """Parse logic-block source into a tree-sitter Tree.

    Args:
        code: Source text (str is encoded as UTF-8)
        lang: Optional ``lang`` attribute of the enclosing block

    Returns:
        tree-sitter Tree; syntax errors show up as ERROR nodes, never as
        exceptions

    Example:
        >>> tree = parse_source("const a = 1\\n")
        >>> tree.root_node.type
        'program'
    """
    source = code.encode("utf-8") if isinstance(code, str) else code
    parser = Parser(language_for(lang))
    return parser.parse(source)


def node_text(node: Node) -> str:
    """Return the UTF-8 decoded source text of a node."""
    text = node.text
    return text.decode("utf-8") if text is not None else ""


def same_node(a: Node | None, b: Node | None) -> bool:
    """True if both nodes cover the same byte span with the same type."""
    if a is None or b is None:
        return False
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all of its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def unwrap_export(node: Node) -> Node:
    """Return the declaration inside an ``export`` statement, or node itself."""
    if node.type == "export_statement":
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            return declaration
    return node


def line_col(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair."""
    line = text.count("\n", 0, offset) + 1
    last_newline = text.rfind("\n", 0, offset)
    return line, offset - (last_newline + 1) + 1
