"""Observable single-value cell used as the source of tracked history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")

ChangeCallback = Callable[[T, T], None]


@dataclass(slots=True, eq=False)
class Subscription:
    """Handle returned from ``ValueCell.subscribe``."""

    _detach: Optional[Callable[[], None]] = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._detach is not None

    def cancel(self) -> None:
        detach, self._detach = self._detach, None
        if detach is not None:
            detach()


class ValueCell(Generic[T]):
    """Mutable value that notifies subscribers with ``(old, new)`` on writes.

    The new value is visible through ``value`` before any subscriber runs.
    Subscribers are called synchronously, in subscription order, once per
    write. Writes made from inside a subscriber are queued and delivered
    after the current notification, so every subscriber sees changes in the
    order the writes happened. Assigning a value equal to the current one is
    silent unless the cell was built with ``always_notify=True``.
    """

    def __init__(self, initial: T, *, always_notify: bool = False) -> None:
        self._value = initial
        self.always_notify = always_notify
        self._subscribers: List[ChangeCallback[T]] = []
        self._pending: Deque[Tuple[T, T]] = deque()
        self._flushing = False

    def __repr__(self) -> str:
        return f"ValueCell({self._value!r})"

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new: T) -> None:
        self.set(new)

    def get(self) -> T:
        return self._value

    def set(self, new: T) -> bool:
        """Store ``new`` and notify; returns ``False`` for a silent no-op write."""

        old = self._value
        if not self.always_notify and same_value(old, new):
            return False
        self._value = new
        self._pending.append((old, new))
        if not self._flushing:
            self._flush()
        return True

    def _flush(self) -> None:
        self._flushing = True
        try:
            while self._pending:
                old, new = self._pending.popleft()
                for callback in tuple(self._subscribers):
                    callback(old, new)
        finally:
            self._pending.clear()
            self._flushing = False

    def subscribe(self, callback: ChangeCallback[T]) -> Subscription:
        self._subscribers.append(callback)

        def detach() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return Subscription(detach)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


def same_value(old: object, new: object) -> bool:
    if old is new:
        return True
    try:
        return bool(old == new)
    except Exception:  # values with ambiguous equality (e.g. arrays)
        return False
