"""Tests for the lint engine."""

from dataclasses import replace

from sfclint import engine
from sfclint.config import FileScope, LintConfig
from sfclint.engine import fix_file, fix_text, iter_source_files, lint_file, lint_text
from sfclint.rules import RULES, Rule


def _config(**overrides) -> LintConfig:
    config = LintConfig()
    return replace(config, rules={**config.rules, **overrides})


# ============================================================================
# lint_text
# ============================================================================


def test_lint_text_clean_file(read_fixture):
    """A canonical component with standard icons is valid with no findings."""
    text = read_fixture("user-card.expected.vue").replace("i-lucide-user", "lucide:user")
    result = lint_text(text, "src/user-card.vue")
    assert result.valid
    assert result.diagnostics == []
    assert result.parse_error is None


def test_lint_text_collects_all_rules(read_fixture):
    """Findings of every applicable rule are collected."""
    result = lint_text(read_fixture("user-card.vue"), "src/components/user-card.vue")
    rules = {d.rule for d in result.diagnostics}
    assert rules == {"vue-script-regions", "vue-component-structure", "iconify-standard-format"}
    assert result.valid


def test_lint_text_error_severity_invalidates(read_fixture):
    """An error-severity finding makes the result invalid."""
    config = _config(**{"vue-script-regions": "error"})
    result = lint_text(read_fixture("user-card.vue"), "src/user-card.vue", config)
    assert not result.valid
    assert any(d.severity == "error" for d in result.diagnostics)


def test_lint_text_rule_off(read_fixture):
    """Rules set to off are not run."""
    config = _config(**{"vue-script-regions": "off", "iconify-standard-format": "off"})
    result = lint_text(read_fixture("user-card.vue"), "src/user-card.vue", config)
    assert result.diagnostics == []


def test_lint_text_rule_failure_is_captured(monkeypatch):
    """A crashing rule is recorded on parse_error; other rules still run."""

    def explode(text, path, severity):
        raise RuntimeError("boom")

    broken = Rule("broken", FileScope(suffixes=(".ts",)), explode)
    monkeypatch.setattr(engine, "RULES", (broken, *RULES))
    config = _config(broken="warn")
    result = lint_text("const q = getQuery(event)\n", "server/a.ts", config)
    assert not result.valid
    assert result.parse_error == "broken: boom"
    assert [d.rule for d in result.diagnostics] == ["prefer-validated-getters"]


# ============================================================================
# lint_file / fix
# ============================================================================


def test_lint_file_reports_given_path(tmp_path, read_fixture):
    """lint_file keeps the path as given on the result."""
    path = tmp_path / "user-card.vue"
    path.write_text(read_fixture("user-card.vue"), encoding="utf-8")
    result = lint_file(path)
    assert result.path == str(path)
    assert any(d.rule == "vue-script-regions" for d in result.diagnostics)


def test_lint_file_missing(tmp_path):
    """Unreadable files become a parse_error result instead of raising."""
    result = lint_file(tmp_path / "missing.vue")
    assert not result.valid
    assert result.parse_error is not None


def test_fix_text_applies_overlapping_fixes(read_fixture):
    """Fixes that overlap the full rewrite are applied on later passes."""
    fixed, applied = fix_text(read_fixture("user-card.vue"), "src/user-card.vue")
    assert applied > 0
    expected = read_fixture("user-card.expected.vue").replace('"i-lucide-user"', '"lucide:user"')
    assert fixed == expected
    assert lint_text(fixed, "src/user-card.vue").fixable == []


def test_fix_text_clean_input(read_fixture):
    """Clean input is returned unchanged with no fixes."""
    text = read_fixture("user-card.expected.vue").replace("i-lucide-user", "lucide:user")
    assert fix_text(text, "src/user-card.vue") == (text, 0)


def test_fix_file_writes_back(tmp_path, read_fixture):
    """fix_file rewrites the file in place."""
    path = tmp_path / "user-card.vue"
    path.write_text(read_fixture("user-card.vue"), encoding="utf-8")
    assert fix_file(path) > 0
    assert "/* region Props */" in path.read_text(encoding="utf-8")


# ============================================================================
# iter_source_files
# ============================================================================


def test_iter_source_files_walks_and_ignores(tmp_path):
    """Directories are walked; ignored and non-source files are skipped."""
    for name in ("a.vue", "b.ts", "notes.md", "backups/old.vue", "node_modules/lib/x.ts"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
    found = [p.relative_to(tmp_path).as_posix() for p in iter_source_files([tmp_path])]
    assert found == ["a.vue", "b.ts"]


def test_iter_source_files_explicit_file(tmp_path):
    """Explicitly named files are yielded as-is."""
    path = tmp_path / "notes.md"
    path.write_text("", encoding="utf-8")
    assert list(iter_source_files([path])) == [path]
