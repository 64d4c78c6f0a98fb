"""Fixed-capacity gap buffer, its snapshots and error types."""

from .gap_buffer import DEBUG_GAP_WIDTH, DEFAULT_CAPACITY, EMPTY, GapBuffer
from .state import GapLayout
from .sync import (
    BufferInvariantError,
    BufferMirror,
    BufferOverflowError,
    BufferSync,
    BufferValidationError,
    GapBufferError,
)
from .validation import check_invariants, check_layout, ensure_char, ensure_index

__all__ = [
    "DEBUG_GAP_WIDTH",
    "DEFAULT_CAPACITY",
    "EMPTY",
    "GapBuffer",
    "GapLayout",
    "BufferMirror",
    "BufferSync",
    "GapBufferError",
    "BufferOverflowError",
    "BufferValidationError",
    "BufferInvariantError",
    "check_invariants",
    "check_layout",
    "ensure_char",
    "ensure_index",
]
