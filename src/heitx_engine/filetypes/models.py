"""Immutable language profiles consumed by the highlighter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


def _normalize_words(words: Iterable[str]) -> tuple[str, ...]:
    # Order is precedence for keyword matching, so keep the first occurrence.
    return tuple(dict.fromkeys(word for word in words if word))


def _normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    values = []
    for ext in extensions:
        cleaned = ext.strip()
        if not cleaned:
            continue
        values.append(cleaned if cleaned.startswith(".") else f".{cleaned}")
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True, slots=True)
class HighlightingOptions:
    """Which lexical classes are enabled, plus the ordered keyword lists."""

    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False
    multiline_comments: bool = False
    primary_keywords: tuple[str, ...] = ()
    secondary_keywords: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "primary_keywords", _normalize_words(self.primary_keywords)
        )
        object.__setattr__(
            self, "secondary_keywords", _normalize_words(self.secondary_keywords)
        )


@dataclass(frozen=True, slots=True)
class FileType:
    """A named language profile selected by filename suffix."""

    name: str
    options: HighlightingOptions = field(default_factory=HighlightingOptions)
    extensions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("file type name cannot be empty")
        object.__setattr__(self, "extensions", _normalize_extensions(self.extensions))

    @classmethod
    def default(cls) -> "FileType":
        return cls(name="No filetype")

    def matches(self, filename: str) -> bool:
        return any(filename.endswith(ext) for ext in self.extensions)


__all__ = ["HighlightingOptions", "FileType"]
