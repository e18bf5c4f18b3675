"""Shared-config file copy.

Copies repository-wide config files (ignore rules, editor settings, bun
settings) from a shared root directory into a project root.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SHARED_ROOT = ".sfclint-shared"
FILES_TO_SYNC = (".gitignore", ".editorconfig", "bunfig.toml")


class SyncError(Exception):
    """Raised when the shared root directory does not exist."""


@dataclass(frozen=True)
class SyncOutcome:
    """Result of copying one file.

    Attributes:
        name: File name relative to both roots
        copied: True if the file was written to the project root
        error: Reason the file was skipped, None on success
    """

    name: str
    copied: bool
    error: str | None = None


def sync_shared_configs(
    project_root: Path,
    shared_root: Path | None = None,
    files: tuple[str, ...] = FILES_TO_SYNC,
) -> list[SyncOutcome]:
    """Copy each shared file into the project root, overwriting.

    Args:
        project_root: Destination directory
        shared_root: Source directory, ``project_root/.sfclint-shared`` if None
        files: File names to copy

    Returns:
        One SyncOutcome per file; missing or uncopyable files are logged
        as warnings and skipped

    Raises:
        SyncError: If shared_root is not a directory
    """
    shared = shared_root if shared_root is not None else project_root / DEFAULT_SHARED_ROOT
    if not shared.is_dir():
        raise SyncError(f"Shared config directory not found: {shared}")

    outcomes = []
    for name in files:
        source = shared / name
        if not source.is_file():
            logger.warning(f"Shared config {source} does not exist, skipping")
            outcomes.append(SyncOutcome(name=name, copied=False, error="missing"))
            continue
        try:
            shutil.copyfile(source, project_root / name)
        except OSError as e:
            logger.warning(f"Could not copy {source}: {e}")
            outcomes.append(SyncOutcome(name=name, copied=False, error=str(e)))
            continue
        logger.info(f"Synced {name} from {shared}")
        outcomes.append(SyncOutcome(name=name, copied=True))
    return outcomes
