"""Single-pass lexical scanner producing one label per code point.

The scanner works on Unicode scalar values (Python ``str`` indices), which
is narrower than the grapheme clusters used for editing. A cluster made of
several scalars therefore receives several labels; callers rendering by
cluster index will see labels shift after such a cluster.

At every position the matchers run in a fixed order and the first one that
consumes input wins: character literal, line comment, block comment,
string, number, primary keyword, secondary keyword. A position nothing
claims is labelled ``Label.NONE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from heitx_engine.filetypes.models import HighlightingOptions

from .labels import Label

_ASCII_PUNCTUATION = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")
_ASCII_WHITESPACE = frozenset(" \t\n\r\x0c")
_DIGITS = frozenset("0123456789")

BLOCK_OPEN = "/*"
BLOCK_CLOSE = "*/"


def is_separator(ch: str) -> bool:
    return ch in _ASCII_PUNCTUATION or ch in _ASCII_WHITESPACE


@dataclass(frozen=True, slots=True)
class HighlightResult:
    labels: tuple[Label, ...]
    carry: bool = False


class _Scanner:
    def __init__(self, text: str, options: HighlightingOptions) -> None:
        self.text = text
        self.options = options
        self.labels: List[Label] = []
        self.index = 0
        self.open_comment = False

    def _mark(self, end: int, label: Label) -> None:
        count = end - self.index
        self.labels.extend([label] * count)
        self.index = end

    def _prev_is_separator(self) -> bool:
        return self.index == 0 or is_separator(self.text[self.index - 1])

    def _peek(self, offset: int = 1) -> Optional[str]:
        pos = self.index + offset
        return self.text[pos] if pos < len(self.text) else None

    def resume_block_comment(self) -> None:
        close = self.text.find(BLOCK_CLOSE)
        if close < 0:
            self._mark(len(self.text), Label.BLOCK_COMMENT)
            self.open_comment = True
        else:
            self._mark(close + len(BLOCK_CLOSE), Label.BLOCK_COMMENT)

    def character(self, ch: str) -> bool:
        if not self.options.characters or ch != "'":
            return False
        following = self._peek()
        if following is None:
            return False
        closing = self.index + (3 if following == "\\" else 2)
        if closing < len(self.text) and self.text[closing] == "'":
            self._mark(closing + 1, Label.CHARACTER)
            return True
        return False

    def line_comment(self, ch: str) -> bool:
        if self.options.comments and ch == "/" and self._peek() == "/":
            self._mark(len(self.text), Label.COMMENT)
            return True
        return False

    def block_comment(self, ch: str) -> bool:
        if not (self.options.multiline_comments and ch == "/" and self._peek() == "*"):
            return False
        close = self.text.find(BLOCK_CLOSE, self.index + len(BLOCK_OPEN))
        if close < 0:
            self._mark(len(self.text), Label.BLOCK_COMMENT)
            self.open_comment = True
        else:
            self._mark(close + len(BLOCK_CLOSE), Label.BLOCK_COMMENT)
        return True

    def string(self, ch: str) -> bool:
        if not self.options.strings or ch != '"':
            return False
        close = self.text.find('"', self.index + 1)
        self._mark(len(self.text) if close < 0 else close + 1, Label.STRING)
        return True

    def number(self, ch: str) -> bool:
        if not self.options.numbers or ch not in _DIGITS:
            return False
        if not self._prev_is_separator():
            return False
        end = self.index + 1
        while end < len(self.text) and (
            self.text[end] in _DIGITS or self.text[end] == "."
        ):
            end += 1
        self._mark(end, Label.NUMBER)
        return True

    def keyword(self, keywords: Sequence[str], label: Label) -> bool:
        if not keywords or not self._prev_is_separator():
            return False
        for word in keywords:
            end = self.index + len(word)
            if not self.text.startswith(word, self.index):
                continue
            if end < len(self.text) and not is_separator(self.text[end]):
                continue
            self._mark(end, label)
            return True
        return False

    def step(self) -> None:
        ch = self.text[self.index]
        if (
            self.character(ch)
            or self.line_comment(ch)
            or self.block_comment(ch)
            or self.string(ch)
            or self.number(ch)
            or self.keyword(self.options.primary_keywords, Label.PRIMARY_KEYWORD)
            or self.keyword(self.options.secondary_keywords, Label.SECONDARY_KEYWORD)
        ):
            return
        self._mark(self.index + 1, Label.NONE)

    def overlay_matches(self, word: str) -> None:
        start = self.text.find(word)
        while start >= 0:
            end = start + len(word)
            self.labels[start:end] = [Label.MATCH] * len(word)
            start = self.text.find(word, end)


def highlight_line(
    text: str,
    options: HighlightingOptions,
    *,
    carry: bool = False,
    word: Optional[str] = None,
) -> HighlightResult:
    """Label every code point of ``text``.

    ``carry`` says the previous line ended inside ``/* ...``; the returned
    ``HighlightResult.carry`` says the same for this line and seeds the next.
    Occurrences of ``word`` are relabelled ``Label.MATCH`` after the lexical
    pass.
    """

    scanner = _Scanner(text, options)
    if carry and options.multiline_comments:
        scanner.resume_block_comment()
    while scanner.index < len(text):
        scanner.step()
    if word:
        scanner.overlay_matches(word)
    return HighlightResult(labels=tuple(scanner.labels), carry=scanner.open_comment)


__all__ = ["HighlightResult", "highlight_line", "is_separator"]
