"""Block splitting for component definition files.

A component file is either a full single-file component (``<template>``,
``<script setup>`` and ``<style>`` blocks at column 0) or a bare fragment
holding only the logic block's inner text. split_file sniffs which one it
got and locates the block bodies with a boundary scanner that counts
nested ``<template>`` pairs instead of relying on greedy/lazy regex spans.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath

logger = logging.getLogger(__name__)

_ATTRS = r"(?P<attrs>(?:[^>\"']|\"[^\"]*\"|'[^']*')*)"
_MODE_SNIFF = re.compile(r"^<(?:template|script|style)\b", re.MULTILINE)
_TOP_LEVEL_TAG = re.compile(rf"<!--.*?-->|<(?P<tag>template|script|style)\b{_ATTRS}>", re.DOTALL)
_TEMPLATE_TAG = re.compile(rf"<!--.*?-->|<(?P<close>/?)template\b{_ATTRS}>", re.DOTALL)
_LANG_ATTR = re.compile(r"\blang\s*=\s*[\"']?(?P<lang>[\w-]+)")
_SETUP_ATTR = re.compile(r"(?:^|\s)setup(?:\s|=|/|$)")


class Mode(str, Enum):
    """How the logic block arrived."""

    FULL_FILE = "full-file"
    FRAGMENT_ONLY = "fragment-only"


@dataclass(frozen=True)
class Block:
    """One top-level block of a component file.

    Offsets are character offsets into the file text. ``start``/``end``
    include the opening and closing tags, ``body_start``/``body_end``
    delimit the inner text.
    """

    tag: str
    attrs: str
    start: int
    body_start: int
    body_end: int
    end: int
    body: str

    @property
    def lang(self) -> str | None:
        match = _LANG_ATTR.search(self.attrs)
        return match.group("lang") if match else None

    @property
    def is_setup(self) -> bool:
        return bool(_SETUP_ATTR.search(self.attrs))


@dataclass(frozen=True)
class ComponentFile:
    """Raw text of one component file plus its inferred structure.

    Attributes:
        text: The complete input text
        filename: Path or base name, used for the component name
        mode: FULL_FILE or FRAGMENT_ONLY
        blocks: Top-level blocks in document order (FULL_FILE only)
        logic: The logic block to normalize, None if there is none
        malformed: True if a block was left unterminated
    """

    text: str
    filename: str
    mode: Mode
    blocks: tuple[Block, ...] = field(default_factory=tuple)
    logic: Block | None = None
    malformed: bool = False

    @property
    def presentation(self) -> Block | None:
        return next((b for b in self.blocks if b.tag == "template"), None)

    @property
    def styles(self) -> tuple[Block, ...]:
        return tuple(b for b in self.blocks if b.tag == "style")

    def with_logic_body(self, body: str) -> str:
        """Return the file text with the logic block body replaced.

        In FRAGMENT_ONLY mode the body is the whole text, so no block
        markers are ever added or removed.
        """
        if self.logic is None:
            return self.text
        if self.mode is Mode.FRAGMENT_ONLY:
            return body
        return self.text[: self.logic.body_start] + "\n" + body + self.text[self.logic.body_end :]


def detect_mode(text: str) -> Mode:
    """Sniff whether text holds full file structure or a bare fragment."""
    if _MODE_SNIFF.search(text):
        return Mode.FULL_FILE
    return Mode.FRAGMENT_ONLY


def _fragment_lang(filename: str) -> str | None:
    suffix = PurePath(filename).suffix.lstrip(".").lower()
    return suffix or None


def _scan_template(text: str, body_start: int) -> tuple[int, int] | None:
    depth = 1
    for match in _TEMPLATE_TAG.finditer(text, body_start):
        if match.group("close") is None:
            continue
        if match.group("close"):
            depth -= 1
            if depth == 0:
                return match.start(), match.end()
        elif not match.group("attrs").rstrip().endswith("/"):
            depth += 1
    return None


def _scan_blocks(text: str) -> tuple[list[Block], bool]:
    blocks: list[Block] = []
    pos = 0
    while True:
        match = _TOP_LEVEL_TAG.search(text, pos)
        if match is None:
            return blocks, False
        tag = match.group("tag")
        if tag is None:
            pos = match.end()
            continue
        attrs = match.group("attrs")
        if attrs.rstrip().endswith("/"):
            pos = match.end()
            continue
        body_start = match.end()
        if tag == "template":
            bounds = _scan_template(text, body_start)
        else:
            close = re.compile(rf"</{tag}\s*>").search(text, body_start)
            bounds = (close.start(), close.end()) if close else None
        if bounds is None:
            logger.info(f"Unterminated <{tag}> block at offset {match.start()}")
            return blocks, True
        body_end, end = bounds
        blocks.append(
            Block(
                tag=tag,
                attrs=attrs,
                start=match.start(),
                body_start=body_start,
                body_end=body_end,
                end=end,
                body=text[body_start:body_end],
            )
        )
        pos = end


def split_file(text: str, filename: str = "") -> ComponentFile:
    """Split raw file text into its blocks.

    Args:
        text: Complete file text, or bare logic-block text
        filename: File path or base name

    Returns:
        ComponentFile. Malformed input never raises: an unterminated block
        yields ``malformed=True`` and no logic block, so nothing downstream
        rewrites it.

    Example:
        >>> split_file("const a = 1\\n", "a.ts").mode
        <Mode.FRAGMENT_ONLY: 'fragment-only'>
    """
    mode = detect_mode(text)
    if mode is Mode.FRAGMENT_ONLY:
        lang = _fragment_lang(filename)
        attrs = f' lang="{lang}"' if lang else ""
        logic = Block("script", attrs, 0, 0, len(text), len(text), text)
        return ComponentFile(text=text, filename=filename, mode=mode, logic=logic)

    blocks, malformed = _scan_blocks(text)
    if malformed:
        return ComponentFile(
            text=text, filename=filename, mode=mode, blocks=tuple(blocks), malformed=True
        )
    logic = next((b for b in blocks if b.tag == "script" and b.is_setup), None)
    if logic is None:
        logger.debug(f"No <script setup> block in {filename or '<text>'}")
    return ComponentFile(text=text, filename=filename, mode=mode, blocks=tuple(blocks), logic=logic)
