"""Key dispatch that maps host key presses onto gap buffer operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from gap_editor.buffer import BufferMirror, BufferOverflowError, GapBuffer
from gap_editor.runtime import telemetry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class KeyResult:
    consumed: bool
    status: str = ""
    exit: bool = False


class GapBufferController:
    """Translates normalized key names into buffer edits and UI refreshes.

    Keys are the upper-cased names used by the app (``ENTER``, ``BACKSPACE``,
    ``LEFT``, ``RIGHT``, ``HOME``, ``END``, ``ESC``); anything else is treated
    as printable when ``text`` carries exactly one character.
    """

    def __init__(self, buffer: GapBuffer, hooks: TextualUIHooks) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self._handlers: Dict[str, Callable[[], str]] = {
            "ENTER": self._newline,
            "BACKSPACE": self._backspace,
            "LEFT": self._left,
            "RIGHT": self._right,
            "HOME": self._home,
            "END": self._end,
        }
        self.refresh()

    def handle_key(self, key: str, *, text: Optional[str] = None) -> KeyResult:
        normalized = key.upper()
        if normalized in {"ESC", "ESCAPE"}:
            result = KeyResult(consumed=True, status="exit", exit=True)
            self._log(normalized, result)
            return result

        handler = self._handlers.get(normalized)
        if handler is None and text is not None and len(text) == 1 and text.isprintable():
            handler = lambda: self._insert(text)  # noqa: E731
        if handler is None:
            result = KeyResult(consumed=False, status="ignored")
            self._log(normalized, result)
            return result

        try:
            status = handler()
        except BufferOverflowError as exc:
            telemetry.record_event(
                "controller.overflow",
                level="warning",
                data={"requested": exc.requested, "available": exc.available},
            )
            status = "overflow"
        result = KeyResult(consumed=True, status=status)
        self.hooks.update_status(status)
        self.refresh()
        self._log(normalized, result)
        return result

    def pull_buffer(self) -> BufferMirror:
        return self.buffer.mirror(
            attributes={
                "length": str(len(self.buffer)),
                "capacity": str(self.buffer.capacity),
            }
        )

    def refresh(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _insert(self, char: str) -> str:
        self.buffer.insert(char)
        return "insert"

    def _newline(self) -> str:
        self.buffer.insert("\n")
        return "newline"

    def _backspace(self) -> str:
        return "remove" if self.buffer.remove() else "noop"

    def _left(self) -> str:
        if self.buffer.cursor == 0:
            return "noop"
        self.buffer.move_to(self.buffer.cursor - 1)
        return "move"

    def _right(self) -> str:
        before = self.buffer.cursor
        return "move" if self.buffer.move_to(before + 1) != before else "noop"

    def _home(self) -> str:
        self.buffer.move_to(0)
        return "move"

    def _end(self) -> str:
        self.buffer.move_to(len(self.buffer))
        return "move"

    def _log(self, key: str, result: KeyResult) -> None:
        telemetry.record_event(
            "controller.key",
            level="debug",
            data={
                "key": key,
                "status": result.status,
                "cursor": self.buffer.cursor,
                "length": len(self.buffer),
            },
        )
        self.hooks.log(
            f"key -> {key!r} status={result.status!r} "
            f"cursor={self.buffer.cursor} length={len(self.buffer)}"
        )


__all__ = ["GapBufferController", "KeyResult", "TextualUIHooks"]
