"""UI-free controller translating key names into document edits and rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from rich.text import Text

from heitx_engine import __version__
from heitx_engine.buffer import Document, DocumentIOError, Position, SearchDirection
from heitx_engine.runtime.telemetry import record_event


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the controller uses to push state to the host widgets."""

    update_rows: Callable[[List[Text]], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


MOVEMENT_KEYS = frozenset(
    {"up", "down", "left", "right", "home", "end", "pageup", "pagedown"}
)


class EditorController:
    """Owns the cursor and viewport for one document.

    The controller re-highlights the whole document after every edit and
    hands the visible rows to ``hooks.update_rows``. Cursor columns are
    grapheme clusters, the same unit ``Document`` uses.
    """

    def __init__(
        self,
        document: Document,
        hooks: TextualUIHooks,
        *,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.document = document
        self.hooks = hooks
        self.cursor = Position()
        self.width = max(width, 1)
        self.height = max(height, 1)
        self.row_offset = 0
        self.col_offset = 0
        self.search_word: Optional[str] = None
        self.document.highlight(self.search_word)
        self.refresh()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Apply one key press; returns False when the key is not handled."""

        self.hooks.log(f"key -> {key!r} text={text!r}")
        if key in MOVEMENT_KEYS:
            self.move_cursor(key)
        elif key == "enter":
            self.document.insert(self.cursor, "\n")
            self.cursor = Position(column=0, line=self.cursor.line + 1)
            self._after_edit()
        elif key == "backspace":
            if self.cursor.column > 0 or self.cursor.line > 0:
                self.move_cursor("left")
                self.document.delete(self.cursor)
                self._after_edit()
        elif key == "delete":
            self.document.delete(self.cursor)
            self._after_edit()
        elif key == "tab":
            self._insert_text("\t")
        elif text and text.isprintable():
            self._insert_text(text)
        else:
            return False
        self.refresh()
        return True

    def _insert_text(self, text: str) -> None:
        for ch in text:
            self.document.insert(self.cursor, ch)
            self.cursor = self.cursor.with_column(self.cursor.column + 1)
        self._after_edit()

    def _after_edit(self) -> None:
        self.document.highlight(self.search_word)

    def move_cursor(self, key: str) -> None:
        column, line = self.cursor.column, self.cursor.line
        last_line = self.document.line_count
        row = self.document.row(line)
        length = len(row) if row is not None else 0

        if key == "up":
            line = max(line - 1, 0)
        elif key == "down":
            line = min(line + 1, last_line)
        elif key == "left":
            if column > 0:
                column -= 1
            elif line > 0:
                line -= 1
                previous = self.document.row(line)
                column = len(previous) if previous is not None else 0
        elif key == "right":
            if column < length:
                column += 1
            elif line < last_line:
                line += 1
                column = 0
        elif key == "pageup":
            line = max(line - self.height, 0)
        elif key == "pagedown":
            line = min(line + self.height, last_line)
        elif key == "home":
            column = 0
        elif key == "end":
            column = length

        target = self.document.row(line)
        column = min(column, len(target) if target is not None else 0)
        self.cursor = Position(column=column, line=line)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def search(
        self, query: str, direction: SearchDirection = SearchDirection.FORWARD
    ) -> Optional[Position]:
        """Move to the next match of ``query`` and highlight all matches."""

        start = self.cursor
        if direction is SearchDirection.FORWARD and query:
            start = start.with_column(start.column + 1)
        found = self.document.search(query, start, direction)
        self.search_word = query or None
        self.document.highlight(self.search_word)
        if found is None:
            self.refresh(f"no match for {query!r}")
        else:
            self.cursor = found
            self.refresh(f"match at {found.line + 1}:{found.column + 1}")
        return found

    def clear_search(self) -> None:
        self.search_word = None
        self.document.highlight()
        self.refresh()

    def save(self) -> bool:
        try:
            self.document.save()
        except DocumentIOError as exc:
            self.refresh(f"save failed: {exc}")
            return False
        record_event(
            "controller.saved",
            data={"filename": self.document.filename, "lines": self.document.line_count},
        )
        self.refresh(
            f"wrote {self.document.line_count} lines to {self.document.filename}"
        )
        return True

    def resize(self, width: int, height: int) -> None:
        self.width = max(width, 1)
        self.height = max(height, 1)
        self.refresh()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def status_line(self) -> str:
        name = self.document.filename or "[No Name]"
        modified = " (modified)" if self.document.is_dirty else ""
        return (
            f"{name} - {self.document.line_count} lines{modified} | "
            f"{self.document.file_type_name} | "
            f"{self.cursor.line + 1}/{self.document.line_count}"
        )

    def _scroll(self) -> None:
        if self.cursor.line < self.row_offset:
            self.row_offset = self.cursor.line
        elif self.cursor.line >= self.row_offset + self.height:
            self.row_offset = self.cursor.line - self.height + 1
        if self.cursor.column < self.col_offset:
            self.col_offset = self.cursor.column
        elif self.cursor.column >= self.col_offset + self.width:
            self.col_offset = self.cursor.column - self.width + 1

    def _welcome(self) -> Text:
        message = f"heitx editor -- version {__version__}"
        padding = max(self.width - len(message), 0) // 2
        return Text(f"~{' ' * max(padding - 1, 0)}{message}"[: self.width])

    def rows(self) -> List[Text]:
        self._scroll()
        rendered: List[Text] = []
        for screen_row in range(self.height):
            row = self.document.row(self.row_offset + screen_row)
            if row is not None:
                rendered.append(row.render(self.col_offset, self.col_offset + self.width))
            elif self.document.is_empty() and screen_row == self.height // 3:
                rendered.append(self._welcome())
            else:
                rendered.append(Text("~"))
        return rendered

    def refresh(self, message: Optional[str] = None) -> None:
        self.hooks.update_rows(self.rows())
        self.hooks.update_status(message or self.status_line())


__all__ = ["EditorController", "TextualUIHooks", "MOVEMENT_KEYS"]
