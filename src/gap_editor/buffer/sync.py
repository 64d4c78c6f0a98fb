"""Host-facing snapshot types and the buffer error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol


@dataclass(slots=True)
class BufferMirror:
    """Snapshot a host renders: the logical text plus the cursor offset."""

    text: str
    cursor: int
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How hosts pull the latest buffer state for rendering."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...


class GapBufferError(RuntimeError):
    """Base class for every error raised by the gap buffer."""


class BufferOverflowError(GapBufferError):
    """Raised when an insert needs more slots than the gap has left.

    The buffer is left exactly as it was before the call.
    """

    def __init__(self, *, requested: int, available: int) -> None:
        super().__init__(
            f"Cannot insert {requested} character(s): only {available} slot(s) free"
        )
        self.requested = requested
        self.available = available


class BufferValidationError(GapBufferError):
    """Raised when a caller passes an argument the buffer cannot address."""

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class BufferInvariantError(GapBufferError):
    """Raised by invariant checks when the gap bookkeeping is inconsistent."""

    def __init__(self, message: str, *, invariant: str) -> None:
        super().__init__(f"{invariant}: {message}")
        self.invariant = invariant
