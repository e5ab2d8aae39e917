"""Executable Textual app hosting a single document."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Input, Static

from heitx_engine.buffer import Document, SearchDirection
from heitx_engine.runtime import telemetry

from .controller import EditorController, TextualUIHooks


class HeitxApp(App[None]):
    """Full-screen editor: buffer view, status line and a search prompt."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#search-input {
		display: none;
	}

	#search-input.-active {
		display: block;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+s", "save", "Save"),
        ("ctrl+f", "find", "Find"),
    ]

    def __init__(self, document: Document) -> None:
        super().__init__()
        self.document = document
        self.controller: EditorController | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._search_widget: Input | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._search_widget = Input(placeholder="Search (Esc to cancel)", id="search-input")
        yield self._buffer_widget
        yield self._status_widget
        yield self._search_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_rows=self._update_rows,
            update_status=self._update_status,
            log=self.log.debug,
        )
        width, height = self.size
        self.controller = EditorController(
            self.document, hooks, width=width, height=max(height - 1, 1)
        )

    def on_resize(self, event: events.Resize) -> None:
        if self.controller:
            self.controller.resize(event.size.width, max(event.size.height - 1, 1))

    def on_key(self, event: events.Key) -> None:
        if self._searching():
            if event.key == "escape":
                self._close_search()
                event.stop()
            return
        if not self.controller:
            return
        if event.key == "escape":
            self.controller.clear_search()
        elif self.controller.handle_key(event.key, text=event.character):
            event.stop()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.controller:
            self.controller.search(event.value, SearchDirection.FORWARD)
        self._close_search()

    def action_save(self) -> None:
        if self.controller:
            self.controller.save()

    def action_find(self) -> None:
        if self._search_widget:
            self._search_widget.add_class("-active")
            self._search_widget.value = ""
            self._search_widget.focus()

    def _searching(self) -> bool:
        return bool(self._search_widget and self._search_widget.has_class("-active"))

    def _close_search(self) -> None:
        if self._search_widget:
            self._search_widget.remove_class("-active")
            self.set_focus(None)

    def _update_rows(self, rows: List[Text]) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(Text("\n").join(rows))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file with heitx.")
    parser.add_argument("filename", nargs="?", help="File to open (created on save)")
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="telelog preset; defaults to HEITX_ENGINE_* environment settings",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    if args.filename:
        document = Document.open_or_empty(args.filename)
    else:
        document = Document()
    HeitxApp(document).run()


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
