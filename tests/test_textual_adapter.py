from __future__ import annotations

from typing import List, Optional, Tuple

from gap_editor.adapters.textual import GapBufferController, TextualUIHooks
from gap_editor.buffer import BufferMirror, GapBuffer


def make_controller(
    text: str = "", *, capacity: int = 32
) -> Tuple[GapBufferController, List[BufferMirror], List[str]]:
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_status=statuses.append,
    )
    controller = GapBufferController(
        GapBuffer.from_text(text, capacity=capacity), hooks
    )
    return controller, mirrors, statuses


def type_keys(controller: GapBufferController, *keys: Tuple[str, Optional[str]]) -> None:
    for key, text in keys:
        controller.handle_key(key, text=text)


def test_controller_pushes_initial_mirror() -> None:
    _, mirrors, _ = make_controller("abc")

    assert mirrors[-1].text == "abc"
    assert mirrors[-1].cursor == 3
    assert mirrors[-1].attributes["capacity"] == "32"


def test_printable_keys_insert_at_cursor() -> None:
    controller, mirrors, statuses = make_controller()

    type_keys(controller, ("H", "h"), ("I", "i"), ("ENTER", None), ("SPACE", " "))

    assert mirrors[-1].text == "hi\n "
    assert mirrors[-1].cursor == 4
    assert statuses == ["insert", "insert", "newline", "insert"]


def test_navigation_and_backspace() -> None:
    controller, mirrors, _ = make_controller("abcd")

    type_keys(controller, ("LEFT", None), ("LEFT", None), ("BACKSPACE", None))
    assert mirrors[-1].text == "acd"
    assert mirrors[-1].cursor == 1

    type_keys(controller, ("RIGHT", None), ("X", "x"))
    assert mirrors[-1].text == "acxd"

    type_keys(controller, ("HOME", None), ("Y", "y"), ("END", None), ("Z", "z"))
    assert mirrors[-1].text == "yacxdz"


def test_edges_are_noops() -> None:
    controller, _, statuses = make_controller("ab")

    type_keys(controller, ("RIGHT", None), ("HOME", None), ("LEFT", None), ("BACKSPACE", None))

    assert statuses == ["noop", "move", "noop", "noop"]
    assert controller.buffer.to_string() == "ab"
    assert controller.buffer.cursor == 0


def test_overflow_is_reported() -> None:
    controller, mirrors, statuses = make_controller("abc", capacity=3)

    result = controller.handle_key("D", text="d")

    assert result.consumed is True
    assert result.status == "overflow"
    assert statuses[-1] == "overflow"
    assert mirrors[-1].text == "abc"


def test_escape_requests_exit() -> None:
    controller, _, _ = make_controller("abc")

    result = controller.handle_key("ESC")

    assert result.exit is True
    assert controller.buffer.to_string() == "abc"


def test_unknown_keys_are_not_consumed() -> None:
    controller, _, statuses = make_controller()

    result = controller.handle_key("F5")

    assert result.consumed is False
    assert statuses == []


def test_controller_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, log=logs.append)
    controller = GapBufferController(GapBuffer(8), hooks)

    controller.handle_key("A", text="a")

    assert any(line.startswith("key ->") for line in logs)
