"""History record type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HistoryRecord(Generic[T]):
    """Snapshot of a source value taken at the moment it was superseded."""

    value: T
    timestamp: float
