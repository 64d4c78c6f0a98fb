"""Fixed-capacity gap buffer for text editing, with an optional Textual host."""

__all__ = [
    "adapters",
    "buffer",
    "render",
    "runtime",
]

__version__ = "0.1.0"
