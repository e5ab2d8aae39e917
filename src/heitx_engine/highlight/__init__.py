"""Lexical highlighting: labels, styles and the line scanner."""

from .labels import LABEL_STYLES, Label, style_for
from .scanner import HighlightResult, highlight_line, is_separator

__all__ = [
    "HighlightResult",
    "LABEL_STYLES",
    "Label",
    "highlight_line",
    "is_separator",
    "style_for",
]
