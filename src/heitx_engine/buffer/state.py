"""Cursor positions and search direction shared by buffer operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Position:
    """Edit point: ``column`` counts grapheme clusters, ``line`` is the row index."""

    column: int = 0
    line: int = 0

    def with_column(self, column: int) -> "Position":
        return Position(column=column, line=self.line)


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


__all__ = ["Position", "SearchDirection"]
