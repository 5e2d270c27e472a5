"""Bounded undo/redo history over a single observable value."""

from __future__ import annotations

import time
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from ref_history.cells import Subscription, ValueCell, same_value
from ref_history.runtime.telemetry import record_event, span

from .capacity import (
    DEFAULT_CAPACITY,
    CapacityError,
    CapacitySource,
    capacity_resolver,
    validate_capacity,
)
from .record import HistoryRecord

T = TypeVar("T")

_EMPTY = object()


class HistoryTracker(Generic[T]):
    """Records superseded values of ``source`` and rewinds/replays them.

    ``history`` is newest-first and never holds the live value right after a
    write. ``undo`` moves the newest record back into the source and keeps the
    displaced live value in a single redo slot; ``redo`` consumes that slot.
    Any tracked write clears the slot, so history never branches.

    Writes performed by ``undo``/``redo`` still reach every other subscriber of
    the source but are not recorded by the tracker itself.
    """

    def __init__(
        self,
        source: ValueCell[T],
        capacity: CapacitySource = DEFAULT_CAPACITY,
        *,
        clock: Callable[[], float] = time.time,
        name: str = "history",
        logger_name: Optional[str] = None,
    ) -> None:
        self.source = source
        self.name = name
        self._clock = clock
        self._logger_name = logger_name
        self._capacity_of = capacity_resolver(capacity)
        validate_capacity(self._capacity_of())

        self._records: List[HistoryRecord[T]] = []
        self._redo: object = _EMPTY
        self._replaying = False
        self._subscriptions: List[Subscription] = [
            source.subscribe(self._on_source_change)
        ]
        if isinstance(capacity, ValueCell):
            self._subscriptions.append(capacity.subscribe(self._on_capacity_change))

    def __repr__(self) -> str:
        return (
            f"HistoryTracker(name={self.name!r}, records={len(self._records)}, "
            f"can_redo={self.can_redo})"
        )

    @property
    def history(self) -> Tuple[HistoryRecord[T], ...]:
        return tuple(self._records)

    @property
    def values(self) -> Tuple[T, ...]:
        return tuple(record.value for record in self._records)

    @property
    def capacity(self) -> int:
        return self._resolve_capacity()

    @property
    def can_undo(self) -> bool:
        return bool(self._records)

    @property
    def can_redo(self) -> bool:
        return self._redo is not _EMPTY

    @property
    def disposed(self) -> bool:
        return not self._subscriptions

    def undo(self) -> bool:
        """Restore the newest recorded value; ``False`` when history is empty."""

        if not self._records:
            return False
        with span(
            "history::undo",
            logger_name=self._logger_name,
            component="history",
            metadata={"tracker": self.name, "records": len(self._records)},
        ):
            record = self._records.pop(0)
            self._redo = self.source.value
            self._write(record.value)
        return True

    def redo(self) -> bool:
        """Re-apply the value displaced by the last ``undo``, at most once."""

        if self._redo is _EMPTY:
            return False
        with span(
            "history::redo",
            logger_name=self._logger_name,
            component="history",
            metadata={"tracker": self.name, "records": len(self._records)},
        ):
            value, self._redo = self._redo, _EMPTY
            self._push(self.source.value)
            self._write(value)  # type: ignore[arg-type]
        return True

    def trim(self) -> int:
        """Re-read the capacity and drop overflowing records; returns the count."""

        with span(
            "history::trim",
            logger_name=self._logger_name,
            component="history",
            metadata={"tracker": self.name},
        ):
            return self._truncate()

    def clear(self) -> None:
        self._records.clear()
        self._redo = _EMPTY

    def dispose(self) -> None:
        """Stop observing the source (and capacity cell, if any)."""

        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.cancel()

    def _on_source_change(self, old: T, new: T) -> None:
        if self._replaying or self.disposed or same_value(old, new):
            return
        self._redo = _EMPTY
        self._push(old)
        record_event(
            "history.record",
            level="debug",
            data={"tracker": self.name, "records": len(self._records)},
            logger_name=self._logger_name,
        )

    def _on_capacity_change(self, old: object, new: object) -> None:
        del old, new
        self._truncate()

    def _push(self, value: T) -> None:
        self._records.insert(0, HistoryRecord(value=value, timestamp=self._clock()))
        self._truncate()

    def _write(self, value: T) -> None:
        self._replaying = True
        try:
            self.source.value = value
        finally:
            self._replaying = False

    def _truncate(self) -> int:
        limit = self._resolve_capacity()
        dropped = len(self._records) - limit
        if dropped <= 0:
            return 0
        del self._records[limit:]
        record_event(
            "history.truncate",
            level="debug",
            data={"tracker": self.name, "capacity": limit, "dropped": dropped},
            logger_name=self._logger_name,
        )
        return dropped

    def _resolve_capacity(self) -> int:
        raw = self._capacity_of()
        try:
            return validate_capacity(raw)
        except CapacityError as exc:
            record_event(
                "history.capacity_clamped",
                level="warning",
                data={"tracker": self.name, "value": raw, "reason": str(exc)},
                logger_name=self._logger_name,
            )
            return 1


def use_ref_history(
    source: ValueCell[T],
    capacity: CapacitySource = DEFAULT_CAPACITY,
    *,
    clock: Callable[[], float] = time.time,
    name: str = "history",
    logger_name: Optional[str] = None,
) -> HistoryTracker[T]:
    """Start tracking ``source``; shorthand for ``HistoryTracker(source, capacity)``."""

    return HistoryTracker(
        source, capacity, clock=clock, name=name, logger_name=logger_name
    )


__all__ = ["HistoryTracker", "use_ref_history"]
