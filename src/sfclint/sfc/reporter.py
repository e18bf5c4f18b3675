"""Diagnostic reporter for the canonical rewrite.

Emits at most one diagnostic per file, carrying the whole rewritten text
as an atomic fix. Purely cosmetic whitespace differences are ignored so a
fix can never loop.
"""

from __future__ import annotations

import re

from sfclint.models import Diagnostic, Fix, Severity
from sfclint.sfc.blocks import ComponentFile
from sfclint.sfc.contracts import RULE_NAME
from sfclint.sfc.naming import component_name

MESSAGE_ID = "invalidOrder"
MESSAGES = {
    MESSAGE_ID: (
        "Script block of '{component}' is not organized according to the "
        "standard regions and contract shapes."
    ),
}

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def equivalent(original: str, rewritten: str) -> bool:
    """Whitespace-insensitive equality."""
    return collapse_whitespace(original) == collapse_whitespace(rewritten)


def report(component: ComponentFile, rewritten: str, severity: Severity = "warn") -> Diagnostic | None:
    """Compare a file against its rewrite.

    Args:
        component: The split input file
        rewritten: Output of the canonical rewriter for that file
        severity: Severity to stamp on the diagnostic

    Returns:
        None when the texts are equivalent, otherwise one diagnostic
        positioned at the start of the file whose fix replaces the whole
        text
    """
    if component.logic is None or equivalent(component.text, rewritten):
        return None
    return Diagnostic(
        rule=RULE_NAME,
        message_id=MESSAGE_ID,
        message=MESSAGES[MESSAGE_ID].format(component=component_name(component.filename)),
        severity=severity,
        line=1,
        column=1,
        fix=Fix(start=0, end=len(component.text), text=rewritten),
    )
