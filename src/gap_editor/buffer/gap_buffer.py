"""Fixed-capacity gap buffer.

The backing store is a list of ``capacity`` slots split into three regions::

    [0, gap_start)          text before the cursor
    [gap_start, gap_end]    the gap, every slot holds EMPTY
    (gap_end, capacity)     text after the cursor

``gap_start`` doubles as the cursor. Inserting writes into the left end of the
gap; moving the cursor relocates the gap one character at a time, so the cost
is proportional to the distance moved rather than to the text length.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from gap_editor.runtime import telemetry

from .state import GapLayout
from .sync import BufferMirror, BufferOverflowError, BufferValidationError
from .validation import ensure_char, ensure_index

DEFAULT_CAPACITY = 1024
DEBUG_GAP_WIDTH = 3
EMPTY = None


class GapBuffer:
    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise BufferValidationError(
                f"capacity must be a positive int, got {capacity!r}"
            )
        self._capacity = capacity
        self._slots: List[Optional[str]] = [EMPTY] * capacity
        self._length = 0
        self._gap_start = 0
        self._gap_end = capacity - 1

    @classmethod
    def from_text(cls, text: str, *, capacity: int = DEFAULT_CAPACITY) -> "GapBuffer":
        buffer = cls(capacity)
        buffer.insert_str(text)
        return buffer

    # -- read-only bookkeeping -------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def length(self) -> int:
        return self._length

    @property
    def gap_start(self) -> int:
        return self._gap_start

    @property
    def gap_end(self) -> int:
        return self._gap_end

    @property
    def gap_size(self) -> int:
        return self._gap_end - self._gap_start + 1

    @property
    def cursor(self) -> int:
        return self._gap_start

    @property
    def is_full(self) -> bool:
        return self.gap_size == 0

    def __len__(self) -> int:
        return self._length

    def layout(self) -> GapLayout:
        return GapLayout(
            capacity=self._capacity,
            length=self._length,
            gap_start=self._gap_start,
            gap_end=self._gap_end,
        )

    def slots(self) -> Tuple[Optional[str], ...]:
        """Return a copy of the raw backing store, gap slots included."""

        return tuple(self._slots)

    # -- editing -----------------------------------------------------------------

    def insert(self, char: str) -> None:
        """Insert ``char`` at the cursor and advance past it."""

        ensure_char(char)
        self._reserve(1)
        self._slots[self._gap_start] = char
        self._gap_start += 1
        self._length += 1

    def insert_str(self, text: str) -> None:
        """Insert every character of ``text`` at the cursor, or none of them."""

        if not isinstance(text, str):
            raise BufferValidationError(f"Expected a str, got {text!r}")
        count = len(text)
        if not count:
            return
        self._reserve(count)
        with telemetry.span("gap_buffer::insert_str", metadata={"chars": count}):
            start = self._gap_start
            self._slots[start : start + count] = list(text)
            self._gap_start = start + count
            self._length += count

    def remove(self) -> bool:
        """Delete the character before the cursor.

        Returns ``False`` (and changes nothing) when the cursor is at 0.
        """

        if self._gap_start == 0:
            return False
        self._gap_start -= 1
        self._slots[self._gap_start] = EMPTY
        self._length -= 1
        return True

    def remove_n(self, n: int) -> int:
        """Delete up to ``n`` characters before the cursor.

        ``n`` is clamped to the cursor position; the number of characters
        actually removed is returned.
        """

        ensure_index(n, label="n")
        count = min(n, self._gap_start)
        if count < n:
            telemetry.record_event(
                "gap_buffer.remove_clamped",
                level="debug",
                data={"requested": n, "removed": count},
            )
        if not count:
            return 0
        start = self._gap_start - count
        self._slots[start : self._gap_start] = [EMPTY] * count
        self._gap_start = start
        self._length -= count
        return count

    def clear(self) -> None:
        self._slots = [EMPTY] * self._capacity
        self._length = 0
        self._gap_start = 0
        self._gap_end = self._capacity - 1

    # -- gap relocation ------------------------------------------------------------

    def move_to(self, new_idx: int) -> int:
        """Move the gap (and cursor) so that ``gap_start == new_idx``.

        Targets past the end of the text are clamped to ``length``. Returns the
        resulting cursor position.
        """

        ensure_index(new_idx, label="new_idx")
        if new_idx > self._length:
            telemetry.record_event(
                "gap_buffer.move_clamped",
                level="debug",
                data={"requested": new_idx, "length": self._length},
            )
            new_idx = self._length
        if new_idx == self._gap_start:
            return new_idx

        with telemetry.span(
            "gap_buffer::move_to",
            metadata={"from": self._gap_start, "to": new_idx},
        ):
            if new_idx < self._gap_start:
                self._shift_gap_left(self._gap_start - new_idx)
            else:
                self._shift_gap_right(new_idx - self._gap_start)
        return self._gap_start

    def _shift_gap_left(self, shift: int) -> None:
        # Walk right to left: each destination is either a gap slot or a
        # source slot that was already copied and cleared.
        if self.gap_size:
            slots = self._slots
            src = self._gap_start - 1
            dst = self._gap_end
            for _ in range(shift):
                slots[dst] = slots[src]
                slots[src] = EMPTY
                src -= 1
                dst -= 1
        self._gap_start -= shift
        self._gap_end -= shift

    def _shift_gap_right(self, shift: int) -> None:
        # Mirror image of _shift_gap_left, walking left to right.
        if self.gap_size:
            slots = self._slots
            src = self._gap_end + 1
            dst = self._gap_start
            for _ in range(shift):
                slots[dst] = slots[src]
                slots[src] = EMPTY
                src += 1
                dst += 1
        self._gap_start += shift
        self._gap_end += shift

    def _reserve(self, count: int) -> None:
        available = self.gap_size
        if count > available:
            telemetry.record_event(
                "gap_buffer.overflow",
                level="warning",
                data={"requested": count, "available": available},
            )
            raise BufferOverflowError(requested=count, available=available)

    # -- rendering -------------------------------------------------------------------

    def to_string(self) -> str:
        before = self._slots[: self._gap_start]
        after = self._slots[self._gap_end + 1 :]
        return "".join(before) + "".join(after)  # type: ignore[arg-type]

    def debug_string(self) -> str:
        """Text with the gap drawn as dots (at most ``DEBUG_GAP_WIDTH``)."""

        before = "".join(self._slots[: self._gap_start])  # type: ignore[arg-type]
        after = "".join(self._slots[self._gap_end + 1 :])  # type: ignore[arg-type]
        return before + "." * min(self.gap_size, DEBUG_GAP_WIDTH) + after

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.to_string(),
            cursor=self._gap_start,
            attributes=dict(attributes or {}),
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        text = self.to_string()
        preview = text if len(text) <= 50 else text[:50] + "..."
        return (
            f"GapBuffer(text={preview!r}, cursor={self._gap_start}, "
            f"gap_size={self.gap_size})"
        )
