"""Lint rules for component definition files.

Exposes the rule registry consumed by the engine and the individual checks.
Every check has the signature ``(text, path, severity) -> list[Diagnostic]``.
"""

from collections.abc import Callable
from dataclasses import dataclass

from sfclint.config import FileScope
from sfclint.models import Diagnostic, Severity
from sfclint.rules import icons, region_order, script_regions, validated_getters
from sfclint.rules.icons import check_icons
from sfclint.rules.region_order import audit_regions, check_component_structure, check_page_structure
from sfclint.rules.script_regions import check_script_regions
from sfclint.rules.validated_getters import check_validated_getters

Check = Callable[[str, str, Severity], list[Diagnostic]]


@dataclass(frozen=True)
class Rule:
    """A registered rule: its name, the files it sees, and its check."""

    name: str
    scope: FileScope
    check: Check
    fixable: bool = False


RULES: tuple[Rule, ...] = (
    Rule(script_regions.NAME, script_regions.SCOPE, check_script_regions, fixable=True),
    Rule(region_order.COMPONENT_RULE, region_order.COMPONENT_SCOPE, check_component_structure),
    Rule(region_order.PAGE_RULE, region_order.PAGE_SCOPE, check_page_structure),
    Rule(icons.NAME, icons.SCOPE, check_icons, fixable=True),
    Rule(validated_getters.NAME, validated_getters.SCOPE, check_validated_getters),
)


def get_rule(name: str) -> Rule:
    """Look up a registered rule by name; KeyError if unknown."""
    for rule in RULES:
        if rule.name == name:
            return rule
    raise KeyError(name)


__all__ = [
    "RULES",
    "Rule",
    "audit_regions",
    "check_component_structure",
    "check_icons",
    "check_page_structure",
    "check_script_regions",
    "check_validated_getters",
    "get_rule",
]
