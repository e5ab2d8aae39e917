"""Ordered collection of lines with cross-line edits, search and highlighting."""

from __future__ import annotations

import os
from typing import Iterator, List, Optional

from heitx_engine.filetypes import FileType, FileTypeRegistry, default_registry
from heitx_engine.runtime.telemetry import record_event, span

from .line import Line
from .state import Position, SearchDirection
from .storage import DocumentIOError, PathLike, read_text, write_lines


class Document:
    """The editable buffer behind one file.

    Lines never contain ``\\n``; on disk the document is its lines joined by
    ``\\n`` plus a trailing ``\\n``. Position arguments outside the document
    are ignored rather than rejected.
    """

    def __init__(
        self,
        lines: Optional[List[Line]] = None,
        *,
        filename: Optional[str] = None,
        registry: Optional[FileTypeRegistry] = None,
    ) -> None:
        self._lines: List[Line] = list(lines or [])
        self.filename = filename
        self._registry = registry if registry is not None else default_registry()
        self._file_type = self._registry.resolve(filename)
        self._dirty = False

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        filename: Optional[str] = None,
        registry: Optional[FileTypeRegistry] = None,
    ) -> "Document":
        segments = text.split("\n")
        if segments[-1] == "":
            # a final "\n" terminates the last line instead of opening a new one
            segments.pop()
        return cls(
            [Line(segment) for segment in segments],
            filename=filename,
            registry=registry,
        )

    @classmethod
    def open(
        cls, path: PathLike, *, registry: Optional[FileTypeRegistry] = None
    ) -> "Document":
        filename = os.fspath(path)
        with span(
            "document::open",
            component="buffer",
            metadata={"filename": filename},
        ) as handle:
            try:
                text = read_text(filename)
            except DocumentIOError as exc:
                record_event(
                    "document.open_failed",
                    level="error",
                    data={"filename": filename, "reason": str(exc)},
                )
                raise
            document = cls.from_text(text, filename=filename, registry=registry)
            handle.add_metadata("lines", document.line_count)
            handle.add_metadata("file_type", document.file_type_name)
        return document

    @classmethod
    def open_or_empty(
        cls, path: PathLike, *, registry: Optional[FileTypeRegistry] = None
    ) -> "Document":
        """Open ``path``, or return an empty buffer that will save to it."""

        try:
            return cls.open(path, registry=registry)
        except DocumentIOError:
            return cls(filename=os.fspath(path), registry=registry)

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def file_type(self) -> FileType:
        return self._file_type

    @property
    def file_type_name(self) -> str:
        return self._file_type.name

    def row(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def as_text(self) -> str:
        return "".join(f"{line.as_text()}\n" for line in self._lines)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, pos: Position, ch: str) -> None:
        """Insert one character at ``pos``; ``""`` and out-of-range lines are ignored."""

        if not ch or pos.line < 0 or pos.line > len(self._lines):
            return
        if ch == "\n":
            self.insert_newline(pos)
            return
        if pos.line == len(self._lines):
            line = Line()
            line.insert(0, ch)
            self._lines.append(line)
        else:
            self._lines[pos.line].insert(pos.column, ch)
        self._dirty = True

    def insert_newline(self, pos: Position) -> None:
        if pos.line < 0 or pos.line > len(self._lines):
            return
        if pos.line == len(self._lines):
            self._lines.append(Line())
        else:
            tail = self._lines[pos.line].split(pos.column)
            self._lines.insert(pos.line + 1, tail)
        self._dirty = True

    def delete(self, pos: Position) -> None:
        """Delete the cluster at ``pos``, or join the next line at end of line.

        A delete that changes nothing, such as one at the end of the last
        line, leaves the dirty flag as it was.
        """

        if pos.line < 0 or pos.line >= len(self._lines):
            return
        line = self._lines[pos.line]
        if pos.column == len(line) and pos.line + 1 < len(self._lines):
            line.append(self._lines.pop(pos.line + 1))
            self._dirty = True
        elif 0 <= pos.column < len(line):
            line.delete(pos.column)
            self._dirty = True

    # ------------------------------------------------------------------
    # Search and highlighting
    # ------------------------------------------------------------------

    def search(
        self,
        query: str,
        after: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """First match of ``query`` from ``after`` in ``direction``.

        Only the starting line is searched from ``after.column``; later lines
        start at column 0 going forward and at their end going backward.
        """

        if not query or after.line < 0 or after.line >= len(self._lines):
            return None
        if direction is SearchDirection.FORWARD:
            indices = range(after.line, len(self._lines))
        else:
            indices = range(after.line, -1, -1)
        for index in indices:
            line = self._lines[index]
            if index == after.line:
                column = after.column
            elif direction is SearchDirection.FORWARD:
                column = 0
            else:
                column = len(line)
            found = line.search(query, column, direction)
            if found is not None:
                return Position(column=found, line=index)
        return None

    def highlight(self, word: Optional[str] = None, until: Optional[int] = None) -> None:
        """Relabel lines ``[0, until]`` (all when ``until`` is None).

        The open-block-comment flag is threaded from each line into the next;
        lines past ``until`` keep their previous labels.
        """

        if until is None:
            bound = len(self._lines)
        else:
            bound = max(0, min(until + 1, len(self._lines)))
        options = self._file_type.options
        with span(
            "document::highlight",
            component="highlight",
            metadata={"lines": bound, "file_type": self._file_type.name},
        ):
            carry = False
            for line in self._lines[:bound]:
                carry = line.highlight(options, word, carry)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Write to ``filename`` and pick the file type again from its suffix.

        Raises ``DocumentIOError`` with the buffer and dirty flag untouched
        when there is no filename or the write fails.
        """

        if not self.filename:
            raise DocumentIOError("no filename to save to")
        filename = self.filename
        with span(
            "document::save",
            component="buffer",
            metadata={"filename": filename},
        ) as handle:
            try:
                written = write_lines(filename, (line.as_text() for line in self._lines))
            except DocumentIOError as exc:
                record_event(
                    "document.save_failed",
                    level="error",
                    data={"filename": filename, "reason": str(exc)},
                )
                raise
            handle.add_metadata("bytes", written)
        self._file_type = self._registry.resolve(filename)
        self._dirty = False

    def save_as(self, path: PathLike) -> None:
        previous = self.filename
        self.filename = os.fspath(path)
        try:
            self.save()
        except DocumentIOError:
            self.filename = previous
            raise


def open_document(
    path: PathLike, *, registry: Optional[FileTypeRegistry] = None
) -> Document:
    return Document.open(path, registry=registry)


def save_document(document: Document) -> None:
    document.save()


__all__ = ["Document", "open_document", "save_document"]
