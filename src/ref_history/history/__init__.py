"""History records, capacity handling, and the undo/redo tracker."""

from .capacity import (
    DEFAULT_CAPACITY,
    CapacityError,
    CapacitySource,
    FALLBACK_CAPACITY,
    capacity_resolver,
    parse_capacity,
    resolve_capacity,
    validate_capacity,
)
from .record import HistoryRecord
from .tracker import HistoryTracker, use_ref_history

__all__ = [
    "DEFAULT_CAPACITY",
    "CapacityError",
    "CapacitySource",
    "FALLBACK_CAPACITY",
    "HistoryRecord",
    "HistoryTracker",
    "capacity_resolver",
    "parse_capacity",
    "resolve_capacity",
    "use_ref_history",
    "validate_capacity",
]
