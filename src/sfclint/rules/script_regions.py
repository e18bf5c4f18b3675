"""vue-script-regions: canonical regions and contract shapes for the logic block."""

from sfclint.config import FileScope
from sfclint.models import Diagnostic, Severity
from sfclint.sfc.blocks import split_file
from sfclint.sfc.contracts import RULE_NAME
from sfclint.sfc.reporter import report
from sfclint.sfc.rewriter import rewrite

NAME = RULE_NAME
SCOPE = FileScope(suffixes=(".vue",))


def check_script_regions(text: str, path: str, severity: Severity = "warn") -> list[Diagnostic]:
    """Run split -> classify -> contracts -> rewrite -> report on one file.

    Args:
        text: File text (full component file or bare logic block)
        path: File path, its base name gives the component name
        severity: Severity for the diagnostic

    Returns:
        Zero or one diagnostic; the diagnostic's fix is the full rewrite
    """
    component = split_file(text, path)
    diagnostic = report(component, rewrite(component), severity)
    return [diagnostic] if diagnostic is not None else []
