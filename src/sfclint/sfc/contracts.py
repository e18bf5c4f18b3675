"""Contract extraction and normalization.

Rewrites the input contract (``defineProps``) and output contract
(``defineEmits``) of a logic block into one canonical shape:

    export type UserCardProps = { id: number }
    const { id } = defineProps<UserCardProps>()

    export type UserCardEmits = {
      change: [id: number]
    }
    const emit = defineEmits<UserCardEmits>()

Every transform has a safety gate. When a declaration cannot be rewritten
without risking a wrong contract (runtime declarations, unknown types,
non-literal event names, bindings used as a whole, member names that
are already bound) the statement is left alone and gains a single
manual-conversion comment instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from tree_sitter import Node

from sfclint.sfc.classify import (
    INPUT_MACRO,
    OUTPUT_MACRO,
    StatementKind,
    TopLevelItem,
    callee_name,
    macro_call,
)
from sfclint.sfc.core import node_text, unwrap_export
from sfclint.sfc.edits import Edit
from sfclint.sfc.naming import emits_type_name, props_type_name
from sfclint.sfc.rename import (
    find_binding_uses,
    member_access_edits,
    top_level_declarations,
    type_reference_edits,
)

logger = logging.getLogger(__name__)

RULE_NAME = "vue-script-regions"
MANUAL_MARK = "sfclint: manual conversion required"
MANUAL_NOTE = f"// {MANUAL_MARK} ({RULE_NAME})"
UNRESOLVED_MARKER = "/* sfclint: unresolved event signature: {signature} */"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_BINDINGS = frozenset({"lexical_declaration", "variable_declaration"})
_TYPE_DECLARATIONS = frozenset({"interface_declaration", "type_alias_declaration"})


@dataclass
class ContractDeclaration:
    """A ``defineProps``/``defineEmits`` binding and the parts it is built from.

    Attributes:
        macro: INPUT_MACRO or OUTPUT_MACRO
        item: The top-level item holding the binding statement
        declarators: Every declarator of the binding statement
        pattern: Binding pattern of the first declarator
        call: The macro call (inside ``withDefaults`` if wrapped)
        type_node: The macro's type argument, None if absent
        defaults: Second argument of ``withDefaults``, None if absent
    """

    macro: str
    item: TopLevelItem
    declarators: list[Node]
    pattern: Node | None
    call: Node
    type_node: Node | None
    defaults: Node | None

    @property
    def shape(self) -> str:
        if self.type_node is None:
            return "missing"
        if self.type_node.type == "object_type":
            return "literal"
        if self.type_node.type == "type_identifier":
            return "named"
        return "other"

    @property
    def runtime_arguments(self) -> list[Node]:
        arguments = self.call.child_by_field_name("arguments")
        if arguments is None:
            return []
        return [a for a in arguments.named_children if a.type != "comment"]


@dataclass
class _Context:
    root: Node
    name: str
    items: list[TopLevelItem]
    declared: dict[str, TopLevelItem]
    presentation: str | None


@dataclass
class _EmitsBody:
    text: str
    unresolved: bool


def _type_argument(call: Node) -> Node | None:
    arguments = call.child_by_field_name("type_arguments")
    if arguments is None:
        arguments = next((c for c in call.children if c.type == "type_arguments"), None)
    if arguments is None or not arguments.named_children:
        return None
    return arguments.named_children[0]


def extract_contract(item: TopLevelItem, macro: str) -> ContractDeclaration | None:
    """Build the ContractDeclaration for a binding item invoking ``macro``."""
    if item.node is None:
        return None
    declaration = unwrap_export(item.node)
    if declaration.type not in _BINDINGS:
        return None
    declarators = [c for c in declaration.named_children if c.type == "variable_declarator"]
    if not declarators:
        return None
    value = declarators[0].child_by_field_name("value")
    found, call = macro_call(value)
    if found != macro or call is None:
        return None
    defaults = None
    if call is not value:
        arguments = value.child_by_field_name("arguments")
        rest = [a for a in arguments.named_children if a.type != "comment"][1:]
        defaults = rest[0] if rest else None
    return ContractDeclaration(
        macro=macro,
        item=item,
        declarators=declarators,
        pattern=declarators[0].child_by_field_name("name"),
        call=call,
        type_node=_type_argument(call),
        defaults=defaults,
    )


def find_contract(items: list[TopLevelItem], macro: str) -> ContractDeclaration | None:
    """First binding in the block that invokes ``macro``."""
    for item in items:
        contract = extract_contract(item, macro)
        if contract is not None:
            return contract
    return None


def declared_types(items: list[TopLevelItem]) -> dict[str, TopLevelItem]:
    """Top-level interface/type alias declarations by name, first one wins."""
    declared: dict[str, TopLevelItem] = {}
    for item in items:
        if item.node is None:
            continue
        declaration = unwrap_export(item.node)
        if declaration.type not in _TYPE_DECLARATIONS:
            continue
        name = declaration.child_by_field_name("name")
        if name is not None:
            declared.setdefault(node_text(name), item)
    return declared


def declaration_body(item: TopLevelItem) -> Node | None:
    """Object-type body of a named declaration whose members are all local.

    Interfaces with an ``extends`` clause and aliases of anything but a
    plain object type have no usable body.
    """
    declaration = unwrap_export(item.node)
    if declaration.type == "interface_declaration":
        if any(c.type in ("extends_type_clause", "extends_clause") for c in declaration.children):
            return None
        return declaration.child_by_field_name("body")
    value = declaration.child_by_field_name("value")
    if value is not None and value.type == "object_type":
        return value
    return None


def member_names(body: Node | None) -> list[str] | None:
    """Destructurable member names of an object type, None if any is not."""
    if body is None:
        return None
    names = []
    for member in body.named_children:
        if member.type == "comment":
            continue
        if member.type not in ("property_signature", "method_signature"):
            return None
        key = member.child_by_field_name("name")
        if key is None or key.type != "property_identifier":
            return None
        if node_text(key) not in names:
            names.append(node_text(key))
    return names


def default_values(defaults: Node | None) -> dict[str, str] | None:
    """Default expressions from a ``withDefaults`` object literal.

    Returns None when the defaults are not a plain object of
    ``key: value`` pairs with identifier keys.
    """
    if defaults is None:
        return {}
    if defaults.type != "object":
        return None
    values: dict[str, str] = {}
    for child in defaults.named_children:
        if child.type == "comment":
            continue
        if child.type != "pair":
            return None
        key = child.child_by_field_name("key")
        value = child.child_by_field_name("value")
        if key is None or value is None or key.type != "property_identifier":
            return None
        values[node_text(key)] = node_text(value)
    return values


def add_manual_note(item: TopLevelItem, reason: str) -> list[Edit]:
    """Attach the manual-conversion comment to item, at most once."""
    logger.info(f"Leaving contract untouched: {reason}")
    if not any(MANUAL_MARK in comment for comment in item.leading):
        item.leading.append(MANUAL_NOTE)
    return []


def _insert_before(ctx: _Context, anchor: TopLevelItem, item: TopLevelItem) -> None:
    index = next(i for i, candidate in enumerate(ctx.items) if candidate is anchor)
    ctx.items.insert(index, item)


def _export_edit(item: TopLevelItem) -> list[Edit]:
    if item.node.type == "export_statement":
        return []
    return [Edit(item.node.start_byte, item.node.start_byte, "export ")]


def _references_binding(presentation: str | None, binding: str) -> bool:
    if not presentation:
        return False
    pattern = rf"(?<![\w$.]){re.escape(binding)}(?![\w$])"
    return re.search(pattern, presentation) is not None


def _statement_prefix(node: Node) -> str:
    return "export " if node.type == "export_statement" else ""


def _statement_suffix(node: Node) -> str:
    return ";" if node_text(node).rstrip().endswith(";") else ""


def normalize_input_contract(ctx: _Context, contract: ContractDeclaration) -> list[Edit]:
    """Canonicalize the ``defineProps`` binding."""
    item = contract.item
    node = item.node
    expected = props_type_name(ctx.name)
    if node.has_error:
        return []
    if len(contract.declarators) != 1:
        return add_manual_note(item, "props binding declares several variables")
    if contract.runtime_arguments:
        return add_manual_note(item, "props declared with runtime arguments")
    if contract.shape not in ("literal", "named"):
        return add_manual_note(item, f"props type argument has shape {contract.shape}")

    defaults = default_values(contract.defaults)
    if defaults is None:
        return add_manual_note(item, "withDefaults defaults are not a plain object")

    pattern = contract.pattern
    if pattern is None or pattern.type not in ("identifier", "object_pattern"):
        return add_manual_note(item, "props binding pattern is not an identifier")
    if pattern.type == "object_pattern" and contract.defaults is not None:
        return add_manual_note(item, "destructured props binding wrapped in withDefaults")

    type_node = contract.type_node
    edits: list[Edit] = []
    if contract.shape == "literal":
        if expected in ctx.declared:
            return add_manual_note(item, f"{expected} is declared but not referenced")
        members = member_names(type_node)
        _insert_before(
            ctx,
            item,
            TopLevelItem(
                node=None,
                kind=StatementKind.INPUT_CONTRACT_DECL,
                synthesized=f"export type {expected} = {node_text(type_node)}",
            ),
        )
        edits.append(Edit(type_node.start_byte, type_node.end_byte, expected))
    else:
        current = node_text(type_node)
        target = ctx.declared.get(current)
        if current != expected:
            if target is None:
                return add_manual_note(item, f"props type {current} is not declared in this block")
            if expected in ctx.declared:
                return add_manual_note(item, f"both {current} and {expected} are declared")
            edits.extend(type_reference_edits(ctx.root, current, expected))
            edits.extend(_export_edit(target))
            target.kind = StatementKind.INPUT_CONTRACT_DECL
        members = member_names(declaration_body(target)) if target is not None else None

    if pattern.type == "object_pattern":
        return edits

    binding = node_text(pattern)
    if members is None:
        add_manual_note(item, "props members cannot be destructured")
        return edits
    names = members + [name for name in defaults if name not in members]
    taken = sorted(top_level_declarations(ctx.root, node).intersection(names))
    if taken:
        add_manual_note(item, f"props member names already declared: {', '.join(taken)}")
        return edits
    uses = find_binding_uses(ctx.root, binding, set(names), node)
    if uses.shadowed:
        add_manual_note(item, "props member names redeclared in a nested scope")
        return edits
    if uses.other_uses or _references_binding(ctx.presentation, binding):
        add_manual_note(item, f"'{binding}' is used as a whole object")
        return edits

    entries = [f"{name} = {defaults[name]}" if name in defaults else name for name in names]
    destructure = "{ " + ", ".join(entries) + " }" if entries else "{}"
    replacement = (
        f"{_statement_prefix(node)}const {destructure} = "
        f"{INPUT_MACRO}<{expected}>(){_statement_suffix(node)}"
    )
    edits.append(Edit(node.start_byte, node.end_byte, replacement))
    edits.extend(member_access_edits(uses.accesses))
    return edits


def _string_literal(annotation: Node | None) -> Node | None:
    if annotation is None or not annotation.named_children:
        return None
    literal = annotation.named_children[0]
    if literal.type == "literal_type" and literal.named_children:
        literal = literal.named_children[0]
    return literal if literal.type == "string" else None


def event_signature(member: Node) -> tuple[str, list[str]] | None:
    """Event key and tuple elements of ``(e: 'name', ...rest): void``.

    Returns None when the event name is not a single string literal.
    """
    parameters = member.child_by_field_name("parameters")
    if parameters is None:
        return None
    params = [p for p in parameters.named_children if p.type != "comment"]
    if not params or params[0].type != "required_parameter":
        return None
    string = _string_literal(params[0].child_by_field_name("type"))
    if string is None:
        return None
    raw = node_text(string)
    if "\\" in raw or len(raw) < 2:
        return None
    event = raw[1:-1]
    key = event if _IDENTIFIER.match(event) else raw
    return key, [node_text(p) for p in params[1:]]


def has_call_signatures(body: Node) -> bool:
    return any(member.type == "call_signature" for member in body.named_children)


def convert_emits_body(body: Node) -> _EmitsBody:
    """Render an emits object type in property-tuple form."""
    lines: list[str] = []
    unresolved = False
    for member in body.named_children:
        if member.type in ("property_signature", "comment"):
            lines.append(node_text(member))
            continue
        signature = event_signature(member) if member.type == "call_signature" else None
        if signature is None:
            lines.append(UNRESOLVED_MARKER.format(signature=" ".join(node_text(member).split())))
            unresolved = True
            continue
        key, elements = signature
        lines.append(f"{key}: [{', '.join(elements)}]")
    if not lines:
        return _EmitsBody("{}", unresolved)
    return _EmitsBody("{\n" + "\n".join(f"  {line}" for line in lines) + "\n}", unresolved)


def _is_plain_declaration(item: TopLevelItem) -> bool:
    declaration = unwrap_export(item.node)
    return declaration.child_by_field_name("type_parameters") is None


def normalize_output_contract(ctx: _Context, contract: ContractDeclaration) -> list[Edit]:
    """Canonicalize the ``defineEmits`` binding and its event type."""
    item = contract.item
    node = item.node
    expected = emits_type_name(ctx.name)
    if node.has_error:
        return []
    if len(contract.declarators) != 1:
        return add_manual_note(item, "emits binding declares several variables")
    if contract.runtime_arguments:
        return add_manual_note(item, "emits declared with runtime arguments")
    type_node = contract.type_node

    if contract.shape == "literal":
        if expected in ctx.declared:
            return add_manual_note(item, f"{expected} is declared but not referenced")
        converted = convert_emits_body(type_node)
        _insert_before(
            ctx,
            item,
            TopLevelItem(
                node=None,
                kind=StatementKind.OUTPUT_CONTRACT_DECL,
                synthesized=f"export type {expected} = {converted.text}",
            ),
        )
        if converted.unresolved:
            return add_manual_note(item, "emits signature without a literal event name")
        return [Edit(type_node.start_byte, type_node.end_byte, expected)]

    if contract.shape != "named":
        return add_manual_note(item, f"emits type argument has shape {contract.shape}")

    current = node_text(type_node)
    target = ctx.declared.get(current)
    if target is None:
        if current == expected:
            return []
        return add_manual_note(item, f"emits type {current} is not declared in this block")
    if current != expected and expected in ctx.declared:
        return add_manual_note(item, f"both {current} and {expected} are declared")

    body = declaration_body(target)
    if body is None or not has_call_signatures(body):
        if current == expected:
            return []
        target.kind = StatementKind.OUTPUT_CONTRACT_DECL
        return type_reference_edits(ctx.root, current, expected) + _export_edit(target)

    if not _is_plain_declaration(target):
        return add_manual_note(item, f"emits type {current} is generic")
    converted = convert_emits_body(body)
    if converted.unresolved:
        if current != expected:
            _insert_before(
                ctx,
                item,
                TopLevelItem(
                    node=None,
                    kind=StatementKind.OUTPUT_CONTRACT_DECL,
                    synthesized=f"export type {expected} = {converted.text}",
                ),
            )
        return add_manual_note(item, "emits signature without a literal event name")

    target.kind = StatementKind.OUTPUT_CONTRACT_DECL
    edits = [Edit(target.node.start_byte, target.node.end_byte, f"export type {expected} = {converted.text}")]
    if current != expected:
        edits.extend(type_reference_edits(ctx.root, current, expected))
    return edits


def normalize_contracts(
    root: Node,
    items: list[TopLevelItem],
    name: str,
    presentation: str | None = None,
) -> list[Edit]:
    """Run the input and output contract transforms over a logic block.

    Synthesized type declarations are inserted into ``items`` right
    before their binding; items whose kind changes (a renamed declaration)
    are updated in place.

    Args:
        root: Program node of the logic block
        items: Classified top-level items, mutated in place
        name: Component name
        presentation: Presentation block text (FullFile mode) or None

    Returns:
        Edits to apply when rendering the items
    """
    ctx = _Context(
        root=root,
        name=name,
        items=items,
        declared=declared_types(items),
        presentation=presentation,
    )
    edits: list[Edit] = []
    props = find_contract(items, INPUT_MACRO)
    if props is not None:
        edits.extend(normalize_input_contract(ctx, props))
    emits = find_contract(items, OUTPUT_MACRO)
    if emits is not None:
        edits.extend(normalize_output_contract(ctx, emits))
    return edits


__all__ = [
    "ContractDeclaration",
    "MANUAL_NOTE",
    "UNRESOLVED_MARKER",
    "callee_name",
    "convert_emits_body",
    "event_signature",
    "extract_contract",
    "normalize_contracts",
]
