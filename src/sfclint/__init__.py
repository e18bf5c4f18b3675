"""sfclint: region and contract linter for Vue single-file components.

This package provides:
- sfc: tree-sitter based normalizer for ``<script setup>`` logic blocks
- rules: the lint rules and their registry
- engine: rule dispatch over text, files and directory trees
- sync: shared-config file copy
"""

from sfclint.config import ConfigError, FileScope, LintConfig, load_config
from sfclint.engine import fix_file, fix_text, iter_source_files, lint_file, lint_text
from sfclint.models import Diagnostic, Fix, LintResult, apply_fixes
from sfclint.sfc.rewriter import rewrite, rewrite_text
from sfclint.sync import SyncError, sync_shared_configs

__all__ = [
    # Configuration
    "ConfigError",
    "FileScope",
    "LintConfig",
    "load_config",
    # Engine
    "fix_file",
    "fix_text",
    "iter_source_files",
    "lint_file",
    "lint_text",
    # Models
    "Diagnostic",
    "Fix",
    "LintResult",
    "apply_fixes",
    # Normalizer
    "rewrite",
    "rewrite_text",
    # Sync
    "SyncError",
    "sync_shared_configs",
]
__version__ = "0.1.0"
