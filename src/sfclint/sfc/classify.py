"""Statement classification for the logic block.

Splits the program's top-level children into statements carrying their
leading comment trivia, then assigns every statement exactly one kind.
Region markers found in the input are dropped and carry no authority:
content is reclassified from scratch on every pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node

from sfclint.sfc.core import node_text, unwrap_export
from sfclint.sfc.regions import (
    Region,
    is_end_marker,
    is_placeholder,
    is_region_marker,
    marker_region_name,
)

INPUT_MACRO = "defineProps"
DEFAULTS_MACRO = "withDefaults"
OUTPUT_MACRO = "defineEmits"
SLOT_MACRO = "defineSlots"
PAGE_META_MACRO = "definePageMeta"

_TYPE_DECLARATIONS = frozenset({"interface_declaration", "type_alias_declaration"})
_BINDINGS = frozenset({"lexical_declaration", "variable_declaration"})


class StatementKind(Enum):
    IMPORT = "import"
    INPUT_CONTRACT_DECL = "input-contract"
    OUTPUT_CONTRACT_DECL = "output-contract"
    SLOT_CONTRACT_DECL = "slot-contract"
    PAGE_META_DECL = "page-meta"
    OTHER = "other"

    @property
    def region(self) -> Region:
        return _KIND_REGIONS[self]


_KIND_REGIONS = {
    StatementKind.IMPORT: Region.IMPORTS,
    StatementKind.PAGE_META_DECL: Region.PAGE_META,
    StatementKind.INPUT_CONTRACT_DECL: Region.INPUT_CONTRACT,
    StatementKind.OUTPUT_CONTRACT_DECL: Region.OUTPUT_CONTRACT,
    StatementKind.SLOT_CONTRACT_DECL: Region.SLOT_CONTRACT,
    StatementKind.OTHER: Region.LOGIC,
}


@dataclass
class TopLevelItem:
    """A top-level statement with the comments that travel with it.

    ``node`` is None for a run of comments after the last statement and
    for statements synthesized by a contract transform, which carry their
    text in ``synthesized``.
    """

    node: Node | None
    leading: list[str] = field(default_factory=list)
    trailing: str | None = None
    kind: StatementKind = StatementKind.OTHER
    synthesized: str | None = None


def callee_name(call: Node | None) -> str | None:
    """Name of a call expression's callee if it is a bare identifier."""
    if call is None or call.type != "call_expression":
        return None
    function = call.child_by_field_name("function")
    if function is None or function.type != "identifier":
        return None
    return node_text(function)


def macro_call(value: Node | None) -> tuple[str | None, Node | None]:
    """Resolve the contract macro invoked by an initializer.

    ``withDefaults(defineProps<...>(), {...})`` resolves to the inner
    ``defineProps`` call.

    Returns:
        (macro name, the macro's call node), or (None, None)
    """
    name = callee_name(value)
    if name in (INPUT_MACRO, OUTPUT_MACRO, SLOT_MACRO):
        return name, value
    if name == DEFAULTS_MACRO:
        arguments = value.child_by_field_name("arguments")
        inner = arguments.named_children[0] if arguments and arguments.named_children else None
        if callee_name(inner) == INPUT_MACRO:
            return INPUT_MACRO, inner
    return None, None


def first_declarator(node: Node) -> Node | None:
    return next((c for c in node.named_children if c.type == "variable_declarator"), None)


def classify_statement(node: Node | None) -> StatementKind:
    """Assign one kind to a top-level statement, first match wins."""
    if node is None:
        return StatementKind.OTHER
    if node.type == "import_statement":
        return StatementKind.IMPORT

    declaration = unwrap_export(node)
    if declaration.type in _TYPE_DECLARATIONS:
        name = declaration.child_by_field_name("name")
        type_name = node_text(name) if name is not None else ""
        if type_name.endswith("Props"):
            return StatementKind.INPUT_CONTRACT_DECL
        if type_name.endswith("Emits"):
            return StatementKind.OUTPUT_CONTRACT_DECL

    if node.type == "expression_statement" and node.named_children:
        if callee_name(node.named_children[0]) == PAGE_META_MACRO:
            return StatementKind.PAGE_META_DECL

    if declaration.type in _BINDINGS:
        declarator = first_declarator(declaration)
        value = declarator.child_by_field_name("value") if declarator is not None else None
        macro, _ = macro_call(value)
        if macro == INPUT_MACRO:
            return StatementKind.INPUT_CONTRACT_DECL
        if macro == OUTPUT_MACRO:
            return StatementKind.OUTPUT_CONTRACT_DECL
        if macro == SLOT_MACRO:
            return StatementKind.SLOT_CONTRACT_DECL

    return StatementKind.OTHER


def has_uncovered_text(root: Node, source: bytes) -> bool:
    """True if non-whitespace source bytes fall outside every top-level child."""
    pos = 0
    for child in root.children:
        if source[pos : child.start_byte].strip():
            return True
        pos = max(pos, child.end_byte)
    return bool(source[pos:].strip())


def collect_items(root: Node) -> list[TopLevelItem]:
    """Group the program's children into classified top-level items.

    Stale region markers are dropped, as are placeholder templates that
    make up the whole content of a marked region.
    """
    items: list[TopLevelItem] = []
    pending: list[str] = []
    open_region: str | None = None
    region_mark: int | None = None
    previous: Node | None = None

    for child in root.children:
        if child.type != "comment":
            items.append(TopLevelItem(node=child, leading=pending, kind=classify_statement(child)))
            pending = []
            region_mark = None
            previous = child
            continue

        text = node_text(child)
        if previous is not None and not pending and child.start_point[0] == previous.end_point[0]:
            last = items[-1]
            last.trailing = f"{last.trailing} {text}" if last.trailing else text
            continue
        previous = None

        if is_region_marker(text):
            name = marker_region_name(text)
            if name is not None:
                open_region, region_mark = name, len(pending)
            elif is_end_marker(text):
                if open_region is not None and region_mark is not None:
                    if is_placeholder(open_region, pending[region_mark:]):
                        del pending[region_mark:]
                open_region, region_mark = None, None
            continue
        pending.append(text)

    if pending:
        items.append(TopLevelItem(node=None, leading=pending))
    return items
