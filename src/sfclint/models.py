"""Pydantic result models shared by every sfclint rule.

- Fix: a single atomic text replacement
- Diagnostic: one finding, optionally carrying a Fix
- LintResult: all findings for one file
"""

from typing import Literal

from pydantic import BaseModel

Severity = Literal["off", "warn", "error"]


class Fix(BaseModel):
    """Replace ``text[start:end]`` with ``text``.

    Attributes:
        start: Character offset where the replaced span begins
        end: Character offset where the replaced span ends (exclusive)
        text: Replacement text
    """

    start: int
    end: int
    text: str


class Diagnostic(BaseModel):
    """A single finding from a rule.

    Attributes:
        rule: Rule name (e.g., "vue-script-regions")
        message_id: Message template key within the rule
        message: Template-filled, human-readable message
        severity: "warn" | "error"
        line: Line number in the linted text (1-based)
        column: Column number (1-based)
        fix: Atomic fix, None for report-only rules
    """

    rule: str
    message_id: str
    message: str
    severity: Severity = "warn"
    line: int = 1
    column: int = 1
    fix: Fix | None = None


class LintResult(BaseModel):
    """Findings for one file.

    Attributes:
        path: Path (or name) of the linted file
        valid: True if no error-severity diagnostic and no parse error
        diagnostics: Findings in rule order
        parse_error: Error message if a rule failed on this file
    """

    path: str
    valid: bool
    diagnostics: list[Diagnostic]
    parse_error: str | None = None

    @property
    def fixable(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.fix is not None]


def apply_fixes(text: str, diagnostics: list[Diagnostic]) -> str:
    """Apply every non-overlapping fix, later spans first.

    Args:
        text: The text the diagnostics were computed against
        diagnostics: Diagnostics, with or without fixes

    Returns:
        Text with fixes applied; a fix overlapping one already applied
        is skipped (it will be recomputed on the next pass)
    """
    fixes = sorted((d.fix for d in diagnostics if d.fix is not None), key=lambda f: (f.start, f.end))
    result = text
    limit = len(text) + 1
    for fix in reversed(fixes):
        if fix.end > limit:
            continue
        result = result[: fix.start] + fix.text + result[fix.end :]
        limit = fix.start
    return result
