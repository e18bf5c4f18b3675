"""Typer-based CLI for sfclint.

stdout carries diagnostics and normalized text (``normalize`` is meant for
editor pipes). All logging goes to files (~/.sfclint/logs/sfclint.log);
only CRITICAL records reach stderr.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import typer

from sfclint import __version__
from sfclint.config import ConfigError, load_config, resolve_log_dir, resolve_log_level
from sfclint.engine import fix_file, iter_source_files, lint_file
from sfclint.sfc.rewriter import rewrite_text
from sfclint.sync import DEFAULT_SHARED_ROOT, SyncError, sync_shared_configs

app = typer.Typer(
    name="sfclint",
    help="Region and contract linter for Vue single-file components",
    add_completion=False,
)

logger = logging.getLogger(__name__)


LOG_FILE = "sfclint.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 3


def _log_file_handler(path: Path) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    return handler


def setup_logging(log_dir: Path, log_level: str) -> None:
    """Send all log records to ``<log_dir>/sfclint.log``.

    Any handlers already on the root logger are replaced, so repeated
    calls never duplicate output. stderr only sees CRITICAL records and
    stdout is left to diagnostics and ``normalize``.

    Args:
        log_dir: Directory for log files (created if missing)
        log_level: Logging level name (debug, info, warning, error, critical)
    """
    log_dir = log_dir.expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.CRITICAL)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(log_level.upper())
    root.handlers[:] = [_log_file_handler(log_dir / LOG_FILE), console]


def _load_config_or_exit(project_root: Path):
    try:
        return load_config(project_root)
    except ConfigError as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_dir: Path | None = typer.Option(
        None,
        "--log-dir",
        help="Directory for log files (overrides SFCLINT_LOG_DIR env var)",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (overrides SFCLINT_LOG_LEVEL env var)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Print version and exit",
    ),
) -> None:
    """Lint and normalize Vue single-file components."""
    if version:
        typer.echo(f"sfclint {__version__}", err=True)
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    setup_logging(resolve_log_dir(log_dir), resolve_log_level(log_level))


@app.command()
def check(
    paths: list[Path] = typer.Argument(
        ...,
        help="Files or directories to lint",
        exists=True,
    ),
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        help="Directory holding pyproject.toml with [tool.sfclint]",
    ),
) -> None:
    """Lint files and print one line per diagnostic.

    Exits 1 if any file has an error-severity diagnostic or failed to lint.
    """
    config = _load_config_or_exit(project_root)

    failed = False
    count = 0
    for path in iter_source_files(paths, config):
        result = lint_file(path, config)
        for d in result.diagnostics:
            typer.echo(f"{result.path}:{d.line}:{d.column}: {d.severity} {d.rule} {d.message}")
            count += 1
        if result.parse_error:
            typer.secho(f"{result.path}: failed to lint: {result.parse_error}", fg=typer.colors.RED, err=True)
        failed = failed or not result.valid

    if count:
        typer.secho(f"{count} problem(s) found", fg=typer.colors.YELLOW, err=True)
    if failed:
        raise typer.Exit(1)


@app.command()
def fix(
    paths: list[Path] = typer.Argument(
        ...,
        help="Files or directories to fix in place",
        exists=True,
    ),
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        help="Directory holding pyproject.toml with [tool.sfclint]",
    ),
) -> None:
    """Apply every available fix and write files back."""
    config = _load_config_or_exit(project_root)

    total = 0
    files = 0
    for path in iter_source_files(paths, config):
        applied = fix_file(path, config)
        if applied:
            typer.echo(f"Fixed {path} ({applied} fix(es))")
            total += applied
            files += 1

    typer.secho(f"Applied {total} fix(es) to {files} file(s)", fg=typer.colors.GREEN)


@app.command()
def normalize(
    filename: str = typer.Option(
        ...,
        "--filename",
        help="File name the text came from; its base name gives the component name",
    ),
) -> None:
    """Read a component (or bare logic block) from stdin and print it normalized."""
    text = sys.stdin.read()
    logger.info(f"Normalizing {len(text)} characters as {filename}")
    typer.echo(rewrite_text(text, filename), nl=False)


@app.command()
def sync(
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        help="Destination directory",
    ),
    shared_root: Path | None = typer.Option(
        None,
        "--shared-root",
        help=f"Source directory (default: PROJECT_ROOT/{DEFAULT_SHARED_ROOT})",
    ),
) -> None:
    """Copy shared config files (.gitignore, .editorconfig, bunfig.toml)."""
    try:
        outcomes = sync_shared_configs(project_root, shared_root)
    except SyncError as e:
        typer.secho(f"{e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    for outcome in outcomes:
        if outcome.copied:
            typer.secho(f"Synced {outcome.name}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"Skipped {outcome.name} ({outcome.error})", fg=typer.colors.YELLOW)
