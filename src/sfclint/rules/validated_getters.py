"""prefer-validated-getters: flag unvalidated request getters.

Calls to ``getQuery(...)`` should be ``getValidatedQuery(...)``; calls to
``readBody(...)`` or ``getBody(...)`` should be ``readValidatedBody(...)``.
"""

import logging

from sfclint.config import FileScope
from sfclint.models import Diagnostic, Severity
from sfclint.sfc.blocks import Block, Mode, split_file
from sfclint.sfc.classify import callee_name
from sfclint.sfc.core import line_col, parse_source, walk

logger = logging.getLogger(__name__)

NAME = "prefer-validated-getters"
SCOPE = FileScope(suffixes=(".vue", ".ts", ".tsx", ".js", ".jsx"))

MESSAGES = {
    "preferValidatedQuery": (
        "Use getValidatedQuery(event, schema) instead of getQuery(event) for better type safety."
    ),
    "preferValidatedBody": (
        "Use readValidatedBody(event, schema) instead of {getter}(event) for better type safety."
    ),
}

GETTERS = {
    "getQuery": "preferValidatedQuery",
    "readBody": "preferValidatedBody",
    "getBody": "preferValidatedBody",
}


def _script_blocks(text: str, path: str) -> list[Block]:
    component = split_file(text, path)
    if component.mode is Mode.FRAGMENT_ONLY:
        return [component.logic] if component.logic is not None else []
    return [b for b in component.blocks if b.tag == "script"]


def check_validated_getters(text: str, path: str, severity: Severity = "warn") -> list[Diagnostic]:
    """Report each unvalidated getter call in the file's logic code.

    In a full component file every ``<script>`` block is scanned; other
    files are scanned whole. Positions refer to the complete file text.
    """
    diagnostics = []
    for block in _script_blocks(text, path):
        source = block.body.encode("utf-8")
        tree = parse_source(source, block.lang)
        for node in walk(tree.root_node):
            if node.type != "call_expression":
                continue
            getter = callee_name(node)
            message_id = GETTERS.get(getter or "")
            if message_id is None:
                continue
            offset = block.body_start + len(source[: node.start_byte].decode("utf-8"))
            line, column = line_col(text, offset)
            diagnostics.append(
                Diagnostic(
                    rule=NAME,
                    message_id=message_id,
                    message=MESSAGES[message_id].format(getter=getter),
                    severity=severity,
                    line=line,
                    column=column,
                )
            )
    logger.debug(f"{path}: {len(diagnostics)} unvalidated getter call(s)")
    return diagnostics
