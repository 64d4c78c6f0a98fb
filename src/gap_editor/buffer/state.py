"""Index bookkeeping snapshot for gap buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GapLayout:
    """The three cooperating indices of a gap buffer plus its capacity."""

    capacity: int
    length: int
    gap_start: int
    gap_end: int

    @property
    def gap_size(self) -> int:
        return self.gap_end - self.gap_start + 1

    @property
    def cursor(self) -> int:
        return self.gap_start
