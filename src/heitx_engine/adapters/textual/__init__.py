"""Textual host: UI-free controller plus the runnable app in ``app``."""

from .controller import EditorController, TextualUIHooks

__all__ = ["EditorController", "TextualUIHooks"]
