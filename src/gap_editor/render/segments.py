"""Split buffer text around the cursor into line-oriented display segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

BEFORE = "before"
CURSOR = "cursor"
AFTER = "after"
CURSOR_CELL = " "


@dataclass(frozen=True, slots=True)
class CursorSegments:
    before: str
    at: str
    after: str


@dataclass(frozen=True, slots=True)
class Segment:
    text: str
    role: str


def split_at_cursor(text: str, cursor: int) -> CursorSegments:
    """Return the text before, under, and after ``cursor``.

    ``at`` is empty when the cursor sits past the last character.
    """

    if not 0 <= cursor <= len(text):
        raise ValueError(f"cursor {cursor} outside text of length {len(text)}")
    return CursorSegments(
        before=text[:cursor],
        at=text[cursor : cursor + 1],
        after=text[cursor + 1 :],
    )


def layout_lines(text: str, cursor: int) -> List[List[Segment]]:
    """Lay ``text`` out as display lines, tagging each run with its role.

    The cursor is always drawn as one cell. On a line break or at the end of
    the text that cell is a blank, and a line break under it still ends the
    line.
    """

    parts = split_at_cursor(text, cursor)
    lines: List[List[Segment]] = [[]]

    def append(chunk: str, role: str) -> None:
        for index, piece in enumerate(chunk.split("\n")):
            if index:
                lines.append([])
            if piece:
                lines[-1].append(Segment(piece, role))

    append(parts.before, BEFORE)
    if parts.at in ("", "\n"):
        lines[-1].append(Segment(CURSOR_CELL, CURSOR))
        if parts.at:
            lines.append([])
    else:
        lines[-1].append(Segment(parts.at, CURSOR))
    append(parts.after, AFTER)
    return lines
