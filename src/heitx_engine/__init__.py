"""Text model and lexical highlighting for a terminal text editor."""

__all__ = [
    "adapters",
    "buffer",
    "filetypes",
    "highlight",
    "runtime",
]

__version__ = "0.1.0"
