"""Tests for lint configuration."""

from pathlib import Path

import pytest

from sfclint.config import (
    DEFAULT_IGNORE_PATTERNS,
    ConfigError,
    FileScope,
    LintConfig,
    load_config,
    resolve_log_dir,
    resolve_log_level,
)


# ============================================================================
# LintConfig / FileScope
# ============================================================================


def test_default_config():
    """Every rule defaults to warn."""
    config = LintConfig()
    assert set(config.rules.values()) == {"warn"}
    assert config.ignore_patterns == DEFAULT_IGNORE_PATTERNS


def test_unknown_rule_severity_is_off():
    """Rules missing from the mapping are off."""
    assert LintConfig().severity("no-such-rule") == "off"


def test_is_ignored():
    """Ignore patterns match path substrings."""
    config = LintConfig()
    assert config.is_ignored("app/.drizzle/schema.ts")
    assert config.is_ignored("app\\src-tauri\\main.ts")
    assert not config.is_ignored("app/src/main.ts")


def test_file_scope():
    """FileScope checks suffix, required and excluded segments."""
    scope = FileScope(suffixes=(".vue",), require_segment="/pages/", exclude_segment="/components/")
    assert scope.includes("src/pages/index.vue")
    assert not scope.includes("src/pages/index.ts")
    assert not scope.includes("src/views/index.vue")
    assert not scope.includes("src/pages/components/row.vue")


# ============================================================================
# load_config
# ============================================================================


def test_load_config_without_pyproject(tmp_path):
    """No pyproject.toml means defaults."""
    assert load_config(tmp_path) == LintConfig()


def test_load_config_overrides(tmp_path):
    """[tool.sfclint] overrides severities and ignore patterns."""
    (tmp_path / "pyproject.toml").write_text(
        "[tool.sfclint]\n"
        'ignore-patterns = ["generated/"]\n'
        "\n"
        "[tool.sfclint.rules]\n"
        'vue-script-regions = "error"\n'
        'prefer-validated-getters = "off"\n',
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config.severity("vue-script-regions") == "error"
    assert config.severity("prefer-validated-getters") == "off"
    assert config.severity("iconify-standard-format") == "warn"
    assert config.ignore_patterns == ("generated/",)


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("[tool.sfclint.rules]\nno-such-rule = 'warn'\n", "unknown rule"),
        ("[tool.sfclint.rules]\nvue-script-regions = 'loud'\n", "invalid severity"),
        ("[tool.sfclint]\nignore-patterns = 'backups/'\n", "list of strings"),
        ("[tool.sfclint\n", "invalid TOML"),
    ],
)
def test_load_config_errors(tmp_path, content, message):
    """Bad configuration raises ConfigError naming the file."""
    (tmp_path / "pyproject.toml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=message) as exc_info:
        load_config(tmp_path)
    assert exc_info.value.path == tmp_path / "pyproject.toml"


# ============================================================================
# Environment resolution
# ============================================================================


def test_resolve_log_level_flag_takes_priority(monkeypatch):
    """CLI flag overrides SFCLINT_LOG_LEVEL env var."""
    monkeypatch.setenv("SFCLINT_LOG_LEVEL", "debug")
    assert resolve_log_level("error") == "error"


def test_resolve_log_level_env_var_fallback(monkeypatch):
    """SFCLINT_LOG_LEVEL env var used when no flag provided."""
    monkeypatch.setenv("SFCLINT_LOG_LEVEL", "debug")
    assert resolve_log_level(None) == "debug"


def test_resolve_log_level_default(monkeypatch):
    """Returns 'warning' when no flag or env var set."""
    monkeypatch.delenv("SFCLINT_LOG_LEVEL", raising=False)
    assert resolve_log_level(None) == "warning"


def test_resolve_log_dir(monkeypatch, tmp_path):
    """Flag beats SFCLINT_LOG_DIR, which beats the default."""
    monkeypatch.setenv("SFCLINT_LOG_DIR", str(tmp_path / "env"))
    assert resolve_log_dir(tmp_path / "flag") == tmp_path / "flag"
    assert resolve_log_dir(None) == tmp_path / "env"
    monkeypatch.delenv("SFCLINT_LOG_DIR")
    assert resolve_log_dir(None) == Path("~/.sfclint/logs")
