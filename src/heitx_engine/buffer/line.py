"""A single row of text addressed by grapheme-cluster column."""

from __future__ import annotations

from typing import List, Optional, Sequence

from rich.text import Text

from heitx_engine.filetypes.models import HighlightingOptions
from heitx_engine.highlight import Label, highlight_line, style_for

from .graphemes import grapheme_count, iter_cluster_offsets, split_graphemes
from .state import SearchDirection


class Line:
    """Owned text plus the labels from the last highlight pass.

    Every column argument is a grapheme-cluster index. ``labels`` holds one
    entry per code point and is emptied by edits until the document
    highlights again.
    """

    def __init__(self, content: str = "") -> None:
        if "\n" in content:
            raise ValueError("a line cannot contain a newline")
        self._content = content
        self._count = grapheme_count(content)
        self._labels: List[Label] = []

    @classmethod
    def from_text(cls, text: str) -> "Line":
        return cls(text)

    def __repr__(self) -> str:
        return f"Line({self._content!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._content == other._content

    def __len__(self) -> int:
        return self._count

    @property
    def length(self) -> int:
        return self._count

    @property
    def content(self) -> str:
        return self._content

    @property
    def labels(self) -> Sequence[Label]:
        return tuple(self._labels)

    def is_empty(self) -> bool:
        return self._count == 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, pos: int, ch: str) -> None:
        """Insert ``ch`` before cluster ``pos``; past the end it is appended.

        ``ch`` must be a single code point; an empty string is ignored. The
        cached length always grows by one, even when ``ch`` is a combining
        mark that joins the neighbouring cluster.
        """

        if not ch:
            return
        if len(ch) != 1:
            raise ValueError("insert one character at a time")
        if ch == "\n":
            raise ValueError("use Document.insert_newline to break a line")
        if pos >= self._count:
            self._content += ch
        else:
            clusters = split_graphemes(self._content)
            clusters.insert(max(pos, 0), ch)
            self._content = "".join(clusters)
        self._count += 1
        self._labels = []

    def delete(self, pos: int) -> None:
        if pos < 0 or pos >= self._count:
            return
        clusters = split_graphemes(self._content)
        if pos < len(clusters):
            del clusters[pos]
            self._content = "".join(clusters)
        # a combining-mark insert can leave the cache above the true count
        self._count = len(clusters)
        self._labels = []

    def split(self, pos: int) -> "Line":
        """Keep clusters ``[0, pos)`` here and return a Line holding the rest."""

        clusters = split_graphemes(self._content)
        pos = max(pos, 0)
        head, tail = clusters[:pos], clusters[pos:]
        self._content = "".join(head)
        self._count = len(head)
        self._labels = []
        return Line("".join(tail))

    def append(self, other: "Line") -> None:
        self._content += other._content
        self._count += other._count
        self._labels = []

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def as_text(self) -> str:
        return self._content

    def as_bytes(self) -> bytes:
        return self._content.encode("utf-8")

    def render(self, start: int, end: int) -> Text:
        """Styled text for clusters ``[start, end)``, one cell per cluster.

        Only the first code point of each cluster is drawn and tabs become a
        single space. Labels are looked up by cluster index.
        """

        end = max(0, min(end, self._count))
        start = max(0, min(start, end))
        result = Text(end="")
        run: List[str] = []
        run_label: Optional[Label] = None
        clusters = split_graphemes(self._content)
        for index in range(start, min(end, len(clusters))):
            first = clusters[index][0]
            label = self._labels[index] if index < len(self._labels) else Label.NONE
            if label is not run_label and run:
                result.append("".join(run), style=style_for(run_label or Label.NONE))
                run = []
            run_label = label
            run.append(" " if first == "\t" else first)
        if run:
            result.append("".join(run), style=style_for(run_label or Label.NONE))
        return result

    def render_plain(self, start: int, end: int) -> str:
        return self.render(start, end).plain

    # ------------------------------------------------------------------
    # Search and highlighting
    # ------------------------------------------------------------------

    def search(
        self,
        query: str,
        after: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Column of the first (forward) or last (backward) match of ``query``.

        Forward looks at clusters ``[after, length)``, backward at
        ``[0, after)``. A match starting inside a cluster is not reported.
        """

        if not query or after < 0 or after > self._count:
            return None
        if direction is SearchDirection.FORWARD:
            start, end = after, self._count
        else:
            start, end = 0, after
        window = split_graphemes(self._content)[start:end]
        haystack = "".join(window)
        if direction is SearchDirection.FORWARD:
            found = haystack.find(query)
        else:
            found = haystack.rfind(query)
        if found < 0:
            return None
        for index, offset in iter_cluster_offsets(window):
            if offset == found:
                return start + index
        return None

    def highlight(
        self,
        options: HighlightingOptions,
        word: Optional[str] = None,
        carry: bool = False,
    ) -> bool:
        """Relabel this line and return whether it ends inside a block comment."""

        result = highlight_line(self._content, options, carry=carry, word=word)
        self._labels = list(result.labels)
        return result.carry


__all__ = ["Line"]
