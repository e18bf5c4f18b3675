"""Scoped renames inside a logic block.

Two passes live here:
- member access rename: ``props.title`` -> ``title`` for a destructured
  input contract, skipping nested scopes that redeclare the binding and
  flagging accesses whose member name is redeclared around them
- type reference rename: every ``OldProps`` type identifier -> new name
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from tree_sitter import Node

from sfclint.sfc.core import node_text, same_node, unwrap_export
from sfclint.sfc.edits import Edit

_FUNCTIONS = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "arrow_function",
        "method_definition",
        "generator_function",
        "generator_function_declaration",
    }
)
_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})
_NAMED_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
        "abstract_class_declaration",
        "enum_declaration",
    }
)


def pattern_names(pattern: Node | None) -> set[str]:
    """Identifiers bound by a binding pattern.

    Object pattern keys and default values do not bind names; only the
    identifier leaves of the pattern do.
    """
    names: set[str] = set()
    if pattern is None:
        return names
    if pattern.type in ("identifier", "shorthand_property_identifier_pattern"):
        names.add(node_text(pattern))
    elif pattern.type == "pair_pattern":
        names |= pattern_names(pattern.child_by_field_name("value"))
    elif pattern.type in ("assignment_pattern", "object_assignment_pattern"):
        names |= pattern_names(pattern.child_by_field_name("left"))
    elif pattern.type in ("required_parameter", "optional_parameter"):
        names |= pattern_names(pattern.child_by_field_name("pattern"))
    else:
        for child in pattern.named_children:
            names |= pattern_names(child)
    return names


def _statement_declarations(statements: list[Node]) -> set[str]:
    names: set[str] = set()
    for statement in statements:
        if statement.type in _DECLARATIONS:
            for declarator in statement.named_children:
                if declarator.type == "variable_declarator":
                    names |= pattern_names(declarator.child_by_field_name("name"))
        elif statement.type in _NAMED_DECLARATIONS:
            name = statement.child_by_field_name("name")
            if name is not None:
                names.add(node_text(name))
    return names


def _block_declarations(block: Node | None) -> set[str]:
    if block is None or block.type != "statement_block":
        return set()
    return _statement_declarations(block.named_children)


def import_names(statement: Node) -> set[str]:
    """Local names bound by an import statement."""
    names: set[str] = set()
    clause = next((c for c in statement.children if c.type == "import_clause"), None)
    if clause is None:
        return names
    for child in clause.named_children:
        if child.type == "identifier":
            names.add(node_text(child))
        elif child.type == "namespace_import":
            names |= {node_text(c) for c in child.named_children if c.type == "identifier"}
        elif child.type == "named_imports":
            for specifier in child.named_children:
                if specifier.type != "import_specifier":
                    continue
                bound = specifier.child_by_field_name("alias")
                if bound is None:
                    bound = specifier.child_by_field_name("name")
                if bound is not None:
                    names.add(node_text(bound))
    return names


def top_level_declarations(root: Node, exclude: Node | None = None) -> set[str]:
    """Names bound at the top level of a logic block.

    Covers variable, function, class and enum declarations (exported or
    not) and imports. The statement ``exclude`` is not counted.
    """
    names: set[str] = set()
    statements = []
    for child in root.named_children:
        if exclude is not None and same_node(child, exclude):
            continue
        if child.type == "import_statement":
            names |= import_names(child)
        else:
            statements.append(unwrap_export(child))
    return names | _statement_declarations(statements)


def scope_declarations(node: Node) -> set[str]:
    """Names a nested scope node declares for its own body."""
    names: set[str] = set()
    if node.type in _FUNCTIONS:
        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            names |= pattern_names(parameters)
        parameter = node.child_by_field_name("parameter")
        if parameter is not None:
            names |= pattern_names(parameter)
        if node.type in ("function_expression", "function"):
            own_name = node.child_by_field_name("name")
            if own_name is not None:
                names.add(node_text(own_name))
        names |= _block_declarations(node.child_by_field_name("body"))
    elif node.type == "statement_block":
        names |= _block_declarations(node)
    elif node.type == "for_statement":
        initializer = node.child_by_field_name("initializer")
        if initializer is not None and initializer.type in _DECLARATIONS:
            for declarator in initializer.named_children:
                if declarator.type == "variable_declarator":
                    names |= pattern_names(declarator.child_by_field_name("name"))
    elif node.type == "for_in_statement":
        names |= pattern_names(node.child_by_field_name("left"))
    elif node.type == "catch_clause":
        names |= pattern_names(node.child_by_field_name("parameter"))
    return names


def walk_unshadowed(root: Node, name: str) -> Iterator[Node]:
    """Yield root's descendants, skipping scopes that redeclare ``name``."""
    stack = [root]
    while stack:
        current = stack.pop()
        if current is not root and name in scope_declarations(current):
            continue
        yield current
        stack.extend(reversed(current.children))


@dataclass
class BindingUses:
    """How a binding identifier is used outside its declaration.

    Attributes:
        accesses: ``binding.member`` expressions on known members
        shadowed: member accesses inside a scope that declares the
            member name itself
        other_uses: every other reference to the binding
    """

    accesses: list[Node] = field(default_factory=list)
    shadowed: list[Node] = field(default_factory=list)
    other_uses: list[Node] = field(default_factory=list)


def declared_in_enclosing_scope(node: Node, name: str) -> bool:
    """True if a nested scope around node declares ``name``."""
    ancestor = node.parent
    while ancestor is not None:
        if name in scope_declarations(ancestor):
            return True
        ancestor = ancestor.parent
    return False


def find_binding_uses(root: Node, binding: str, members: set[str], declaration: Node) -> BindingUses:
    """Collect references to ``binding`` outside ``declaration``.

    Args:
        root: Program node of the logic block
        binding: Identifier bound to the contract macro's result
        members: Contract member names that may be accessed
        declaration: The binding statement itself (ignored)
    """
    uses = BindingUses()
    for node in walk_unshadowed(root, binding):
        if node.type not in ("identifier", "shorthand_property_identifier"):
            continue
        if node_text(node) != binding:
            continue
        if declaration.start_byte <= node.start_byte and node.end_byte <= declaration.end_byte:
            continue
        parent = node.parent
        if (
            node.type == "identifier"
            and parent is not None
            and parent.type == "member_expression"
            and same_node(parent.child_by_field_name("object"), node)
        ):
            prop = parent.child_by_field_name("property")
            if prop is not None and prop.type == "property_identifier" and node_text(prop) in members:
                if declared_in_enclosing_scope(parent, node_text(prop)):
                    uses.shadowed.append(parent)
                else:
                    uses.accesses.append(parent)
                continue
        uses.other_uses.append(node)
    return uses


def member_access_edits(accesses: list[Node]) -> list[Edit]:
    """Replace each ``binding.member`` expression with the bare member."""
    edits = []
    for access in accesses:
        prop = access.child_by_field_name("property")
        edits.append(Edit(access.start_byte, access.end_byte, node_text(prop)))
    return edits


def type_reference_edits(root: Node, old: str, new: str) -> list[Edit]:
    """Rename every type identifier ``old`` in the block to ``new``."""
    edits = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "type_identifier" and node_text(node) == old:
            edits.append(Edit(node.start_byte, node.end_byte, new))
        stack.extend(node.children)
    return edits
