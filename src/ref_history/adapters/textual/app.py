"""Executable Textual demo: undo/redo over a tracked theme name."""

from __future__ import annotations

import argparse
import os
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use ref_history.adapters.textual.app"
    ) from exc

from ref_history.cells import ValueCell
from ref_history.history import HistoryRecord, HistoryTracker

from .controller import TextualHistoryAdapter, TextualHistoryHooks

DEFAULT_THEMES = ("light", "dark", "coffee", "brown")


class HistoryDemoApp(App[None]):
    """Shows a tracked value, its history, and the last action."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#value-view {
		height: 3;
		border: round $accent;
		padding: 0 1;
	}

	#history-view {
		height: 1fr;
		border: round $primary;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        capacity: int = 10,
        choices: Sequence[str] = DEFAULT_THEMES,
    ) -> None:
        super().__init__()
        self.cell: ValueCell[str] = ValueCell(choices[0])
        self.tracker: HistoryTracker[str] = HistoryTracker(
            self.cell, capacity, name="demo"
        )
        self.choices = tuple(choices)
        self.adapter: TextualHistoryAdapter | None = None
        self._value_widget: Static | None = None
        self._history_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="history-area"):
            self._value_widget = Static("", id="value-view")
            self._history_widget = Static("", id="history-view")
            yield self._value_widget
            yield self._history_widget
        self._status_widget = Static(
            "n: next  u: undo  r: redo  c: clear", id="status-line"
        )
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualHistoryHooks(
            update_value=self._update_value,
            update_history=self._update_history,
            update_status=self._update_status,
        )
        self.adapter = TextualHistoryAdapter(
            self.tracker, hooks, choices=self.choices
        )

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.dispose()
        self.tracker.dispose()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        if self.adapter.handle_textual_key(event.key) != "ignored":
            event.stop()

    def _update_value(self, value: Any) -> None:
        if self._value_widget:
            self._value_widget.update(f"current: {value}")

    def _update_history(self, records: Tuple[HistoryRecord[Any], ...]) -> None:
        if self._history_widget:
            lines = [f"{index}: {record.value}" for index, record in enumerate(records)]
            self._history_widget.update("\n".join(lines) or "(empty)")

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the ref-history Textual demo.")
    parser.add_argument(
        "--capacity",
        type=int,
        default=_env_int("REF_HISTORY_DEMO_CAPACITY", 10),
        help="History capacity (default: 10)",
    )
    parser.add_argument(
        "--choices",
        nargs="+",
        default=list(DEFAULT_THEMES),
        help="Values cycled by the 'n' key",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    HistoryDemoApp(capacity=args.capacity, choices=args.choices).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
