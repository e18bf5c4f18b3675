"""vue-component-structure / vue-page-structure: region marker audits.

Report-only rules that check the region markers a file already carries.
Components must have every contract region plus Logic & State, pages
must have Page Meta and Logic & State, each in canonical order.
"""

from sfclint.config import FileScope
from sfclint.models import Diagnostic, Severity
from sfclint.sfc.core import line_col
from sfclint.sfc.regions import REGION_START, Region

COMPONENT_RULE = "vue-component-structure"
PAGE_RULE = "vue-page-structure"

COMPONENT_SCOPE = FileScope(suffixes=(".vue",), require_segment="/components/")
PAGE_SCOPE = FileScope(suffixes=(".vue",), require_segment="/pages/", exclude_segment="/components/")

COMPONENT_REGIONS = (
    Region.INPUT_CONTRACT,
    Region.OUTPUT_CONTRACT,
    Region.SLOT_CONTRACT,
    Region.LOGIC,
)
PAGE_REGIONS = (Region.PAGE_META, Region.LOGIC)

MESSAGES = {
    "missingRegion": "Missing or misspelled region: /* region {region} */",
    "invalidOrder": (
        "Region /* region {current} */ is out of order. "
        "It should appear after /* region {previous} */"
    ),
}


def audit_regions(
    text: str,
    expected: tuple[Region, ...],
    rule: str,
    severity: Severity = "warn",
) -> list[Diagnostic]:
    """Report missing and out-of-order region markers.

    Args:
        text: File text
        expected: Regions that must appear, in order
        rule: Rule name stamped on the diagnostics
        severity: Severity stamped on the diagnostics
    """
    diagnostics = []
    last_index = -1
    present: list[Region] = []
    for region in expected:
        marker = REGION_START.format(name=region.display_name)
        index = text.find(marker)
        if index == -1:
            diagnostics.append(
                Diagnostic(
                    rule=rule,
                    message_id="missingRegion",
                    message=MESSAGES["missingRegion"].format(region=region.display_name),
                    severity=severity,
                )
            )
            continue
        if index < last_index:
            previous = present[-1] if present else expected[0]
            line, column = line_col(text, index)
            diagnostics.append(
                Diagnostic(
                    rule=rule,
                    message_id="invalidOrder",
                    message=MESSAGES["invalidOrder"].format(
                        current=region.display_name, previous=previous.display_name
                    ),
                    severity=severity,
                    line=line,
                    column=column,
                )
            )
        last_index = max(last_index, index)
        present.append(region)
    return diagnostics


def check_component_structure(text: str, path: str, severity: Severity = "warn") -> list[Diagnostic]:
    return audit_regions(text, COMPONENT_REGIONS, COMPONENT_RULE, severity)


def check_page_structure(text: str, path: str, severity: Severity = "warn") -> list[Diagnostic]:
    return audit_regions(text, PAGE_REGIONS, PAGE_RULE, severity)
