"""Textual-facing controller that drives a HistoryTracker through UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ref_history.cells import Subscription
from ref_history.history import HistoryRecord, HistoryTracker


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualHistoryHooks:
    """Callbacks the adapter invokes to update Textual widgets."""

    update_value: Callable[[Any], None]
    update_history: Callable[[Tuple[HistoryRecord[Any], ...]], None] = _noop
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback for debug lines
    log: Callable[[str], None] = _noop


UNDO_KEYS = frozenset({"u", "ctrl+z"})
REDO_KEYS = frozenset({"r", "ctrl+r", "ctrl+y"})
NEXT_KEYS = frozenset({"n", "space"})
CLEAR_KEYS = frozenset({"c"})


class TextualHistoryAdapter:
    """Maps key presses onto tracker operations and mirrors state to hooks.

    The adapter listens to the tracked source directly, so values restored by
    ``undo``/``redo`` refresh the UI just like ordinary writes.
    """

    def __init__(
        self,
        tracker: HistoryTracker[Any],
        hooks: TextualHistoryHooks,
        *,
        choices: Optional[Sequence[Any]] = None,
    ) -> None:
        self.tracker = tracker
        self.hooks = hooks
        self.choices = tuple(choices or ())
        self._subscription: Optional[Subscription] = tracker.source.subscribe(
            self._on_source_change
        )
        self._refresh()

    def handle_textual_key(self, key: str) -> str:
        """Dispatch a Textual key name; returns the resulting status label."""

        normalized = key.lower()
        self._log_state("key ->", key=normalized)
        if normalized in UNDO_KEYS:
            status = "undo" if self.tracker.undo() else "nothing_to_undo"
        elif normalized in REDO_KEYS:
            status = "redo" if self.tracker.redo() else "nothing_to_redo"
        elif normalized in NEXT_KEYS:
            status = self._advance()
        elif normalized in CLEAR_KEYS:
            self.tracker.clear()
            self._refresh()
            status = "cleared"
        else:
            return "ignored"
        self.hooks.update_status(status)
        self._log_state("result <-", status=status)
        return status

    def dispose(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _advance(self) -> str:
        if not self.choices:
            return "no_choices"
        current = self.tracker.source.value
        try:
            index = self.choices.index(current) + 1
        except ValueError:
            index = 0
        self.tracker.source.value = self.choices[index % len(self.choices)]
        return "changed"

    def _on_source_change(self, old: Any, new: Any) -> None:
        self._log_state("change ->", old=old, new=new)
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.update_value(self.tracker.source.value)
        self.hooks.update_history(self.tracker.history)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update(fields)
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "tracker": self.tracker.name,
            "value": self.tracker.source.value,
            "records": len(self.tracker.history),
            "can_redo": self.tracker.can_redo,
        }


__all__ = ["TextualHistoryAdapter", "TextualHistoryHooks"]
