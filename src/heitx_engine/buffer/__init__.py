"""Text model: grapheme-addressed lines and the document that owns them."""

from .document import Document, open_document, save_document
from .graphemes import grapheme_count, split_graphemes
from .line import Line
from .state import Position, SearchDirection
from .storage import DocumentIOError

__all__ = [
    "Document",
    "DocumentIOError",
    "Line",
    "Position",
    "SearchDirection",
    "grapheme_count",
    "open_document",
    "save_document",
    "split_graphemes",
]
