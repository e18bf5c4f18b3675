"""Canonical rewriter: buckets statements into regions and serializes them.

The pipeline for one file is

    split_file -> collect_items (classify) -> normalize_contracts -> serialize

and the output, fed back in, reproduces itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sfclint.sfc.blocks import ComponentFile, split_file
from sfclint.sfc.classify import StatementKind, TopLevelItem, collect_items, has_uncovered_text
from sfclint.sfc.contracts import normalize_contracts
from sfclint.sfc.core import parse_source
from sfclint.sfc.edits import Edit, apply_edits
from sfclint.sfc.naming import component_name
from sfclint.sfc.regions import REGION_END, REGION_ORDER, Region, placeholder, start_marker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogicStatement:
    """One rendered top-level statement and its kind."""

    kind: StatementKind
    text: str


def render_item(item: TopLevelItem, source: bytes, edits: list[Edit]) -> str:
    """Render an item with its comments and any edits inside its span."""
    if item.synthesized is not None:
        body = item.synthesized
    elif item.node is not None:
        body = apply_edits(source, item.node.start_byte, item.node.end_byte, edits)
    else:
        body = None
    lines = list(item.leading)
    if body is not None:
        lines.append(f"{body} {item.trailing}" if item.trailing else body)
    return "\n".join(lines)


def bucket(statements: list[LogicStatement]) -> dict[Region, list[LogicStatement]]:
    """Group statements by region, keeping source order within a region."""
    buckets: dict[Region, list[LogicStatement]] = {region: [] for region in REGION_ORDER}
    for statement in statements:
        buckets[statement.kind.region].append(statement)
    return buckets


def serialize(buckets: dict[Region, list[LogicStatement]], name: str) -> str:
    """Join regions in canonical order, filling empty ones with placeholders."""
    parts = []
    imports = [s.text.strip() for s in buckets[Region.IMPORTS]]
    if imports:
        parts.append("\n".join(imports))
    for region in REGION_ORDER:
        if not region.has_markers:
            continue
        statements = buckets[region]
        if statements:
            content = "\n\n".join(s.text.strip() for s in statements)
        else:
            content = placeholder(region, name)
        parts.append(f"{start_marker(region)}\n{content}\n{REGION_END}")
    return "\n\n".join(parts).strip() + "\n"


def rewrite_logic(
    code: str,
    name: str,
    lang: str | None = None,
    presentation: str | None = None,
) -> str | None:
    """Rewrite logic-block text into canonical region form.

    Args:
        code: Logic-block inner text
        name: Component name used for contract type names and templates
        lang: ``lang`` attribute of the block, selects the grammar
        presentation: Presentation block text, consulted by the props
            rename safety check

    Returns:
        The canonical text, or None if the block holds text the parser
        could not attribute to any statement
    """
    source = code.encode("utf-8")
    tree = parse_source(source, lang)
    root = tree.root_node
    if has_uncovered_text(root, source):
        logger.info("Logic block has text outside any statement, passing it through")
        return None
    items = collect_items(root)
    edits = normalize_contracts(root, items, name, presentation)
    statements = [LogicStatement(item.kind, render_item(item, source, edits)) for item in items]
    return serialize(bucket(statements), name)


def rewrite(component: ComponentFile) -> str:
    """Rewrite a split component file, in the mode it arrived in."""
    if component.malformed or component.logic is None:
        return component.text
    presentation = component.presentation.body if component.presentation else None
    body = rewrite_logic(
        component.logic.body,
        component_name(component.filename),
        component.logic.lang,
        presentation,
    )
    if body is None:
        return component.text
    return component.with_logic_body(body)


def rewrite_text(text: str, filename: str = "") -> str:
    """Split and rewrite raw file text.

    Example:
        >>> print(rewrite_text("const a = 1\\n", "a.ts").splitlines()[-3:])
        ['/* region Logic & State */', 'const a = 1', '/* endregion */']
    """
    return rewrite(split_file(text, filename))
