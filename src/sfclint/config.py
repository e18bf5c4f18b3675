"""Lint configuration.

Provides the LintConfig frozen dataclass (rule severities and ignore
patterns), per-rule FileScope inclusion predicates, and the resolution
helpers used by the CLI. Values come from an optional ``[tool.sfclint]``
table in pyproject.toml, for example:

    [tool.sfclint]
    ignore-patterns = ["backups/"]

    [tool.sfclint.rules]
    vue-script-regions = "error"
    prefer-validated-getters = "off"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import get_args

from sfclint.models import Severity

SEVERITIES: tuple[str, ...] = get_args(Severity)

DEFAULT_SEVERITIES: dict[str, Severity] = {
    "vue-script-regions": "warn",
    "vue-component-structure": "warn",
    "vue-page-structure": "warn",
    "iconify-standard-format": "warn",
    "prefer-validated-getters": "warn",
}

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (".drizzle/", "src-tauri/", "backups/", "node_modules/")

DEFAULT_LOG_DIR = "~/.sfclint/logs"
DEFAULT_LOG_LEVEL = "warning"


class ConfigError(Exception):
    """Raised when the ``[tool.sfclint]`` table cannot be used.

    Attributes:
        path: The configuration file that failed
    """

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


@dataclass(frozen=True)
class FileScope:
    """File-inclusion predicate for one rule.

    A path is included when it ends with one of ``suffixes``, contains
    ``require_segment`` (if set) and does not contain ``exclude_segment``
    (if set). Paths are compared with forward slashes.
    """

    suffixes: tuple[str, ...] = (".vue",)
    require_segment: str | None = None
    exclude_segment: str | None = None

    def includes(self, path: str) -> bool:
        normalized = path.replace("\\", "/")
        if self.suffixes and not normalized.endswith(self.suffixes):
            return False
        if self.require_segment and self.require_segment not in normalized:
            return False
        if self.exclude_segment and self.exclude_segment in normalized:
            return False
        return True


@dataclass(frozen=True)
class LintConfig:
    """Configuration consumed by the lint engine.

    Frozen dataclass; build a modified copy with dataclasses.replace.
    """

    rules: dict[str, Severity] = field(default_factory=lambda: dict(DEFAULT_SEVERITIES))
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS

    def severity(self, rule: str) -> Severity:
        return self.rules.get(rule, "off")

    def is_ignored(self, path: str) -> bool:
        normalized = path.replace("\\", "/")
        return any(pattern in normalized for pattern in self.ignore_patterns)


def load_config(project_root: Path) -> LintConfig:
    """Load LintConfig from ``project_root/pyproject.toml``.

    Args:
        project_root: Directory that may hold a pyproject.toml

    Returns:
        LintConfig with defaults overlaid by the ``[tool.sfclint]`` table

    Raises:
        ConfigError: On unreadable TOML, unknown rule names or severities
    """
    pyproject = project_root / "pyproject.toml"
    if not pyproject.is_file():
        return LintConfig()
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(pyproject, f"invalid TOML ({exc})") from exc

    table = data.get("tool", {}).get("sfclint", {})
    rules = dict(DEFAULT_SEVERITIES)
    for name, severity in table.get("rules", {}).items():
        if name not in DEFAULT_SEVERITIES:
            raise ConfigError(pyproject, f"unknown rule {name!r}")
        if severity not in SEVERITIES:
            raise ConfigError(pyproject, f"rule {name!r} has invalid severity {severity!r}")
        rules[name] = severity

    ignore_patterns = table.get("ignore-patterns", list(DEFAULT_IGNORE_PATTERNS))
    if not isinstance(ignore_patterns, list) or not all(isinstance(p, str) for p in ignore_patterns):
        raise ConfigError(pyproject, "ignore-patterns must be a list of strings")
    return LintConfig(rules=rules, ignore_patterns=tuple(ignore_patterns))


def resolve_log_level(level_flag: str | None) -> str:
    """Resolve log level from CLI flag, env var, or default.

    Priority: CLI flag > SFCLINT_LOG_LEVEL env var > "warning" default.
    """
    if level_flag:
        return level_flag
    return os.getenv("SFCLINT_LOG_LEVEL", DEFAULT_LOG_LEVEL)


def resolve_log_dir(dir_flag: Path | None) -> Path:
    """Resolve log directory from CLI flag, env var, or default.

    Priority: CLI flag > SFCLINT_LOG_DIR env var > ~/.sfclint/logs default.
    """
    if dir_flag is not None:
        return dir_flag
    return Path(os.getenv("SFCLINT_LOG_DIR", DEFAULT_LOG_DIR))
