"""Tests for result models and fix application."""

from sfclint.models import Diagnostic, Fix, LintResult, apply_fixes


def _diagnostic(start: int, end: int, text: str) -> Diagnostic:
    return Diagnostic(
        rule="test-rule",
        message_id="m",
        message="m",
        fix=Fix(start=start, end=end, text=text),
    )


def test_diagnostic_defaults():
    """Diagnostics default to warn at 1:1 without a fix."""
    diagnostic = Diagnostic(rule="r", message_id="m", message="msg")
    assert diagnostic.severity == "warn"
    assert (diagnostic.line, diagnostic.column) == (1, 1)
    assert diagnostic.fix is None


def test_apply_fixes_non_overlapping():
    """All non-overlapping fixes are applied regardless of order."""
    text = "aaa bbb ccc"
    diagnostics = [_diagnostic(8, 11, "C"), _diagnostic(0, 3, "A")]
    assert apply_fixes(text, diagnostics) == "A bbb C"


def test_apply_fixes_skips_overlap():
    """A fix overlapping a later one is skipped."""
    text = "aaa bbb"
    diagnostics = [_diagnostic(0, 7, "whole"), _diagnostic(4, 7, "B")]
    assert apply_fixes(text, diagnostics) == "aaa B"


def test_apply_fixes_ignores_report_only():
    """Diagnostics without fixes leave the text alone."""
    diagnostic = Diagnostic(rule="r", message_id="m", message="msg")
    assert apply_fixes("abc", [diagnostic]) == "abc"


def test_lint_result_fixable():
    """fixable lists only diagnostics that carry a fix."""
    result = LintResult(
        path="a.vue",
        valid=True,
        diagnostics=[Diagnostic(rule="r", message_id="m", message="msg"), _diagnostic(0, 1, "x")],
    )
    assert len(result.fixable) == 1
    assert result.parse_error is None


def test_lint_result_serializes():
    """LintResult round-trips through JSON like every pydantic model."""
    result = LintResult(path="a.vue", valid=False, diagnostics=[_diagnostic(0, 1, "x")])
    assert LintResult.model_validate_json(result.model_dump_json()) == result
