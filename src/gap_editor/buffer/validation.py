"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from .state import GapLayout
from .sync import BufferInvariantError, BufferValidationError

if TYPE_CHECKING:
    from .gap_buffer import GapBuffer


def ensure_index(index: int, *, label: str = "index") -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise BufferValidationError(f"{label} must be an int, got {index!r}")
    if index < 0:
        raise BufferValidationError(f"{label} must not be negative", index=index)
    return index


def ensure_char(char: str) -> str:
    if not isinstance(char, str) or len(char) != 1:
        raise BufferValidationError(f"Expected a single character, got {char!r}")
    return char


def check_layout(
    layout: GapLayout, slots: Sequence[Optional[str]], *, empty: object = None
) -> None:
    """Raise :class:`BufferInvariantError` for the first broken invariant."""

    capacity = layout.capacity
    if len(slots) != capacity:
        raise BufferInvariantError(
            f"backing store has {len(slots)} slots, expected {capacity}",
            invariant="capacity",
        )
    if not 0 <= layout.gap_start <= layout.gap_end + 1 <= capacity:
        raise BufferInvariantError(
            f"gap [{layout.gap_start}, {layout.gap_end}] outside [0, {capacity})",
            invariant="bounds",
        )
    if layout.length + layout.gap_size != capacity:
        raise BufferInvariantError(
            f"length {layout.length} + gap {layout.gap_size} != {capacity}",
            invariant="accounting",
        )
    for index in range(layout.gap_start, layout.gap_end + 1):
        if slots[index] is not empty:
            raise BufferInvariantError(
                f"slot {index} inside the gap holds {slots[index]!r}",
                invariant="clean-gap",
            )
    live = list(range(layout.gap_start)) + list(range(layout.gap_end + 1, capacity))
    for index in live:
        if slots[index] is empty:
            raise BufferInvariantError(
                f"slot {index} outside the gap is empty", invariant="dense-text"
            )


def check_invariants(buffer: "GapBuffer") -> None:
    check_layout(buffer.layout(), buffer.slots())
