"""Lint engine: dispatches registered rules over files.

Rule failures never escape: like the code tools they are captured on the
result's ``parse_error`` so one bad file (or one buggy rule) cannot abort
a run over a whole tree.
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from sfclint.config import LintConfig
from sfclint.models import LintResult, apply_fixes
from sfclint.rules import RULES

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".vue", ".ts", ".tsx", ".js", ".jsx")
MAX_FIX_PASSES = 5


def lint_text(text: str, path: str, config: LintConfig | None = None) -> LintResult:
    """Run every enabled rule whose scope includes ``path``.

    Args:
        text: File text
        path: File path; selects rules by scope and names the component
        config: LintConfig, defaults when None

    Returns:
        LintResult with the diagnostics of all rules in registry order
    """
    config = config or LintConfig()
    diagnostics = []
    errors = []
    for rule in RULES:
        severity = config.severity(rule.name)
        if severity == "off" or not rule.scope.includes(path):
            continue
        try:
            diagnostics.extend(rule.check(text, path, severity))
        except Exception as e:
            logger.exception(f"Rule {rule.name} failed on {path}")
            errors.append(f"{rule.name}: {e}")

    parse_error = "; ".join(errors) or None
    valid = parse_error is None and not any(d.severity == "error" for d in diagnostics)
    return LintResult(path=path, valid=valid, diagnostics=diagnostics, parse_error=parse_error)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def lint_file(path: Path, config: LintConfig | None = None) -> LintResult:
    """Lint one file from disk; unreadable files become a parse_error result."""
    try:
        text = _read(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read {path}: {e}")
        return LintResult(path=str(path), valid=False, diagnostics=[], parse_error=str(e))
    result = lint_text(text, path.resolve().as_posix(), config)
    return result.model_copy(update={"path": str(path)})


def fix_text(text: str, path: str, config: LintConfig | None = None) -> tuple[str, int]:
    """Apply fixes until the text stops changing.

    Fixes from different rules may overlap (the region rewrite spans the
    whole file), so overlapping ones are deferred to the next pass.

    Returns:
        (fixed text, number of fixes applied)
    """
    applied = 0
    for _ in range(MAX_FIX_PASSES):
        result = lint_text(text, path, config)
        if not result.fixable:
            break
        fixed = apply_fixes(text, result.diagnostics)
        if fixed == text:
            break
        applied += len(result.fixable)
        text = fixed
    return text, applied


def fix_file(path: Path, config: LintConfig | None = None) -> int:
    """Fix one file in place.

    Returns:
        Number of fixes applied (0 if the file was left untouched)
    """
    try:
        text = _read(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read {path}: {e}")
        return 0
    fixed, applied = fix_text(text, path.resolve().as_posix(), config)
    if fixed != text:
        path.write_text(fixed, encoding="utf-8")
        logger.info(f"Fixed {path} ({applied} fix(es))")
    return applied


def iter_source_files(paths: Iterable[Path], config: LintConfig | None = None) -> Iterator[Path]:
    """Yield lintable files, walking directories and honoring ignore patterns.

    Explicitly named files are yielded even if their suffix is unknown;
    files found by walking a directory must have a source suffix.
    """
    config = config or LintConfig()
    for path in paths:
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if not child.is_file() or child.suffix not in SOURCE_SUFFIXES:
                    continue
                if config.is_ignored(child.as_posix()):
                    logger.debug(f"Ignoring {child}")
                    continue
                yield child
        elif not config.is_ignored(path.as_posix()):
            yield path
