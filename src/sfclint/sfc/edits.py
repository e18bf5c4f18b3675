"""Byte-range edits against a parsed logic block."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Edit:
    """Replace source bytes ``[start, end)`` with ``text``."""

    start: int
    end: int
    text: str


def apply_edits(source: bytes, start: int, end: int, edits: Iterable[Edit]) -> str:
    """Render ``source[start:end]`` with every edit inside that span applied.

    Edits nested inside an earlier, wider edit are dropped: the wider
    replacement already owns those bytes.

    Args:
        source: Full logic-block source
        start: Span start (byte offset)
        end: Span end (byte offset)
        edits: Candidate edits; ones outside the span are ignored

    Returns:
        The rendered span as text
    """
    inside = sorted(
        (e for e in edits if e.start >= start and e.end <= end),
        key=lambda e: (e.start, -(e.end - e.start)),
    )
    out: list[bytes] = []
    pos = start
    for edit in inside:
        if edit.start < pos:
            continue
        out.append(source[pos : edit.start])
        out.append(edit.text.encode("utf-8"))
        pos = edit.end
    out.append(source[pos:end])
    return b"".join(out).decode("utf-8")
