"""Textual host for the gap buffer.

Only the controller is imported eagerly; ``app`` needs ``textual`` installed.
"""

from .controller import GapBufferController, KeyResult, TextualUIHooks

__all__ = ["GapBufferController", "KeyResult", "TextualUIHooks"]
