"""Textual adapter; ``app`` (the runnable demo) is imported lazily."""

from .controller import TextualHistoryAdapter, TextualHistoryHooks

__all__ = ["TextualHistoryAdapter", "TextualHistoryHooks"]
