"""Turn buffer text plus a cursor into display segments."""

from .segments import CursorSegments, Segment, layout_lines, split_at_cursor

__all__ = ["CursorSegments", "Segment", "layout_lines", "split_at_cursor"]
