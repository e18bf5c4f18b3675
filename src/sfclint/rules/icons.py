"""iconify-standard-format: ``i-prefix-name`` icon literals -> ``prefix:name``.

A stateless regex substitution over the file text. It covers template
attributes (``icon="i-mdi-home"``, ``trailing-icon="..."``) and object
properties (``{ icon: 'i-mdi-home' }``); the original quote is kept.
"""

import re

from sfclint.config import FileScope
from sfclint.models import Diagnostic, Fix, Severity
from sfclint.sfc.core import line_col

NAME = "iconify-standard-format"
SCOPE = FileScope(suffixes=(".vue", ".ts", ".tsx", ".js", ".jsx"))

MESSAGES = {
    "useStandardFormat": "Icon '{icon}' should use the 'prefix:name' format.",
}

_ICON_KEY = r"(?:name|icon|[\w$-]*Icon|[\w-]+-icon)"
_ICON_VALUE = r"(?P<quote>[\"'`])(?P<value>i-(?P<prefix>[a-z0-9]+)-(?P<name>[^\"'`\s]+))(?P=quote)"
ICON_ATTRIBUTE = re.compile(rf"(?<![\w:@.-]){_ICON_KEY}\s*=\s*{_ICON_VALUE}")
ICON_PROPERTY = re.compile(rf"(?<![\w$.-])[\"']?{_ICON_KEY}[\"']?\s*:\s*{_ICON_VALUE}")


def standard_icon(value: str) -> str | None:
    """``i-mdi-home`` -> ``mdi:home``; None if value is not in that form."""
    match = re.fullmatch(r"i-([a-z0-9]+)-(.+)", value)
    if match is None:
        return None
    return f"{match.group(1)}:{match.group(2)}"


def check_icons(text: str, path: str, severity: Severity = "warn") -> list[Diagnostic]:
    """One diagnostic per non-standard icon literal, each with its own fix."""
    diagnostics = []
    seen: set[int] = set()
    for pattern in (ICON_ATTRIBUTE, ICON_PROPERTY):
        for match in pattern.finditer(text):
            start = match.start("quote")
            if start in seen:
                continue
            seen.add(start)
            quote = match.group("quote")
            replacement = f"{quote}{match.group('prefix')}:{match.group('name')}{quote}"
            line, column = line_col(text, start)
            diagnostics.append(
                Diagnostic(
                    rule=NAME,
                    message_id="useStandardFormat",
                    message=MESSAGES["useStandardFormat"].format(icon=match.group("value")),
                    severity=severity,
                    line=line,
                    column=column,
                    fix=Fix(start=start, end=match.end(), text=replacement),
                )
            )
    diagnostics.sort(key=lambda d: d.fix.start)
    return diagnostics
