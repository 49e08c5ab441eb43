"""Textual host integration."""

from .controller import TextualHighlightController, TextualUIHooks

__all__ = ["TextualHighlightController", "TextualUIHooks"]
