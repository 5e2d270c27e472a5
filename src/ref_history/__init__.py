"""Bounded undo/redo history for a single observable value."""

from .cells import Subscription, ValueCell
from .history import (
    DEFAULT_CAPACITY,
    CapacityError,
    HistoryRecord,
    HistoryTracker,
    use_ref_history,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "CapacityError",
    "HistoryRecord",
    "HistoryTracker",
    "Subscription",
    "ValueCell",
    "use_ref_history",
]

__version__ = "0.1.0"
