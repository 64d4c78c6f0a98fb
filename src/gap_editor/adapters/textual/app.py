"""Executable Textual app that edits a gap buffer."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use gap_editor.adapters.textual.app"
    ) from exc

from gap_editor.buffer import DEFAULT_CAPACITY, BufferMirror, GapBuffer
from gap_editor.render import layout_lines
from gap_editor.render.segments import CURSOR
from gap_editor.runtime import telemetry

from .controller import GapBufferController, TextualUIHooks

TEXT_STYLE = "bold italic yellow"
CURSOR_STYLE = "reverse"


def render_mirror(mirror: BufferMirror) -> Text:
    """Build a styled ``Text`` with the cursor cell highlighted."""

    rendered = Text()
    for row, line in enumerate(layout_lines(mirror.text, mirror.cursor)):
        if row:
            rendered.append("\n")
        for segment in line:
            style = CURSOR_STYLE if segment.role == CURSOR else TEXT_STYLE
            rendered.append(segment.text, style=style)
    return rendered


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""


class GapEditorApp(App[None]):
    """Minimal Textual UI around a single gap buffer."""

    TITLE = "Gap Buffer Example"

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY, text: str = "") -> None:
        super().__init__()
        self._state = UIState()
        self._capacity = capacity
        self._initial_text = text
        self.controller: GapBufferController | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        buffer = GapBuffer.from_text(self._initial_text, capacity=self._capacity)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
        )
        self.controller = GapBufferController(buffer, hooks)
        telemetry.record_event(
            "app.mount", data={"capacity": self._capacity, "length": len(buffer)}
        )

    def on_key(self, event: events.Key) -> None:
        if not self.controller:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text = normalized
        result = self.controller.handle_key(key, text=text)
        if result.consumed:
            event.stop()
        if result.exit:
            self.exit()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = mirror.text
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))
        length = mirror.attributes.get("length", str(len(mirror.text)))
        capacity = mirror.attributes.get("capacity", "?")
        self.sub_title = f"{mirror.cursor} | {length}/{capacity}"

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    @staticmethod
    def _normalize_key(event: events.Key) -> Optional[Tuple[str, Optional[str]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key == "escape":
            return ("ESC", None)
        if key in {"enter", "return"}:
            return ("ENTER", None)
        if event.is_printable and event.character:
            return (key.upper(), event.character)
        return (key.upper(), None)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit text in a fixed-capacity gap buffer.")
    parser.add_argument(
        "--capacity",
        type=int,
        default=_env_int("GAP_EDITOR_CAPACITY", DEFAULT_CAPACITY),
        help=f"Number of character slots (default: {DEFAULT_CAPACITY})",
    )
    parser.add_argument(
        "--text",
        default="",
        help="Initial buffer contents; the cursor starts at the end",
    )
    args = parser.parse_args(argv)
    if args.capacity < 1:
        parser.error("--capacity must be at least 1")
    if len(args.text) > args.capacity:
        parser.error("--text does not fit in --capacity")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = GapEditorApp(capacity=args.capacity, text=args.text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
