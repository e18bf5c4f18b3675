"""Canonical regions of a logic block.

Regions serialize in the order they are declared here. Every region
except IMPORTS is wrapped in ``/* region <display name> */`` and
``/* endregion */`` markers; an empty region gets a commented template.
"""

from __future__ import annotations

import re
from enum import Enum

from sfclint.sfc.naming import emits_type_name, props_type_name

REGION_START = "/* region {name} */"
REGION_END = "/* endregion */"

_REGION_START_RE = re.compile(r"^/\*\s*region\s+(?P<name>.*?)\s*\*/$", re.DOTALL)
_REGION_END_RE = re.compile(r"^/\*\s*endregion\s*\*/$")

# Stand-in for the component name while building placeholder patterns.
_NAME_SLOT = "\x00"


class Region(Enum):
    """Canonical regions, in serialization order."""

    IMPORTS = "Imports"
    PAGE_META = "Page Meta"
    INPUT_CONTRACT = "Props"
    OUTPUT_CONTRACT = "Emits"
    SLOT_CONTRACT = "Slots"
    LOGIC = "Logic & State"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def has_markers(self) -> bool:
        return self is not Region.IMPORTS


REGION_ORDER: tuple[Region, ...] = tuple(Region)


def start_marker(region: Region) -> str:
    return REGION_START.format(name=region.display_name)


def is_region_marker(comment: str) -> bool:
    """True for any ``/* region ... */`` or ``/* endregion */`` comment."""
    comment = comment.strip()
    return bool(_REGION_START_RE.match(comment) or _REGION_END_RE.match(comment))


def marker_region_name(comment: str) -> str | None:
    """Display name carried by a start marker, None for anything else."""
    match = _REGION_START_RE.match(comment.strip())
    return match.group("name") if match else None


def is_end_marker(comment: str) -> bool:
    return bool(_REGION_END_RE.match(comment.strip()))


def placeholder(region: Region, name: str) -> str:
    """Commented template for an empty region of component ``name``."""
    if region is Region.PAGE_META:
        return '// definePageMeta({\n//   layout: "default"\n// })'
    if region is Region.INPUT_CONTRACT:
        props = props_type_name(name)
        return (
            f"// export type {props} = {{\n"
            "//   sample: string\n"
            "// }\n"
            f"// const {{ sample }} = defineProps<{props}>()"
        )
    if region is Region.OUTPUT_CONTRACT:
        emits = emits_type_name(name)
        return (
            f"// export type {emits} = {{\n"
            "//   change: [id: number]\n"
            "// }\n"
            f"// const emit = defineEmits<{emits}>()"
        )
    if region is Region.SLOT_CONTRACT:
        return "// const slots = defineSlots<{ default(props: { msg: string }): any }>()"
    if region is Region.LOGIC:
        return "// Logic"
    return ""


def _placeholder_patterns(region: Region) -> list[re.Pattern[str]]:
    lines = placeholder(region, _NAME_SLOT).split("\n")
    return [
        re.compile("^" + re.escape(line).replace(re.escape(_NAME_SLOT), r"\w*") + "$")
        for line in lines
    ]


_PLACEHOLDERS: dict[str, list[re.Pattern[str]]] = {
    region.display_name: _placeholder_patterns(region) for region in REGION_ORDER if region.has_markers
}


def is_placeholder(display_name: str, comments: list[str]) -> bool:
    """True if comments are exactly the template of the named region.

    The component name inside the template may differ, so a file renamed
    after normalization still has its old placeholders recognized.
    """
    patterns = _PLACEHOLDERS.get(display_name)
    if not patterns or len(patterns) != len(comments):
        return False
    return all(p.match(c.strip()) for p, c in zip(patterns, comments))
