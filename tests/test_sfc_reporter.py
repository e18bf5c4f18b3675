"""Tests for the region diagnostic reporter."""

from sfclint.models import apply_fixes
from sfclint.sfc.blocks import split_file
from sfclint.sfc.reporter import collapse_whitespace, equivalent, report
from sfclint.sfc.rewriter import rewrite


def _report(text: str, filename: str, severity="warn"):
    component = split_file(text, filename)
    return report(component, rewrite(component), severity)


def test_collapse_whitespace():
    """Runs of whitespace collapse to one space and ends are trimmed."""
    assert collapse_whitespace("  a\n\n  b\tc \n") == "a b c"


def test_equivalent_ignores_blank_lines():
    """Blank-line and indentation differences are not violations."""
    assert equivalent("a\n\n\nb\n", "a\nb")
    assert not equivalent("a b", "a c")


def test_canonical_file_reports_nothing(read_fixture):
    """A file already in canonical form has no diagnostic."""
    assert _report(read_fixture("user-card.expected.vue"), "user-card.vue") is None


def test_whitespace_only_difference_reports_nothing(read_fixture):
    """Extra blank lines inside the logic block are cosmetic."""
    text = read_fixture("user-card.expected.vue").replace(
        "/* endregion */\n\n/* region Emits */", "/* endregion */\n\n\n\n/* region Emits */"
    )
    assert _report(text, "user-card.vue") is None


def test_non_canonical_file_reports_once(read_fixture):
    """A non-canonical file gets one diagnostic at the file root."""
    text = read_fixture("user-card.vue")
    diagnostic = _report(text, "user-card.vue", severity="error")
    assert diagnostic is not None
    assert diagnostic.rule == "vue-script-regions"
    assert diagnostic.message_id == "invalidOrder"
    assert diagnostic.severity == "error"
    assert "UserCard" in diagnostic.message
    assert (diagnostic.line, diagnostic.column) == (1, 1)


def test_fix_replaces_whole_text(read_fixture):
    """Applying the fix yields the rewritten file."""
    text = read_fixture("user-card.vue")
    diagnostic = _report(text, "user-card.vue")
    assert (diagnostic.fix.start, diagnostic.fix.end) == (0, len(text))
    assert apply_fixes(text, [diagnostic]) == read_fixture("user-card.expected.vue")


def test_fragment_diagnostic_at_start():
    """Fragments are reported at the first position."""
    diagnostic = _report("const a = 1\nimport b from 'b'\n", "a.ts")
    assert (diagnostic.line, diagnostic.column) == (1, 1)


def test_malformed_file_reports_nothing(read_fixture):
    """Files the splitter could not parse are never reported."""
    assert _report(read_fixture("unterminated.vue"), "unterminated.vue") is None
