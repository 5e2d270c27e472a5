"""Capacity sources and their resolution.

A capacity may be given as a plain ``int``, a zero-argument callable, or a
``ValueCell`` holding an int. Every form collapses into a resolver that is
called whenever the tracker needs the current bound.
"""

from __future__ import annotations

import os
from typing import Callable, Optional, Union

from ref_history.cells import ValueCell

FALLBACK_CAPACITY = 10

CapacitySource = Union[int, Callable[[], int], ValueCell[int]]


class CapacityError(ValueError):
    """Raised when a capacity source does not yield a positive integer."""

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message)
        self.value = value


def validate_capacity(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CapacityError(
            f"Capacity must be an int, got {type(value).__name__}", value=value
        )
    if value <= 0:
        raise CapacityError(f"Capacity must be positive, got {value}", value=value)
    return value


def parse_capacity(raw: Optional[str], fallback: int = FALLBACK_CAPACITY) -> int:
    """Parse a configured capacity, keeping ``fallback`` for unset or bad values."""

    if raw is None or not raw.strip():
        return fallback
    try:
        return validate_capacity(int(raw))
    except ValueError:
        return fallback


DEFAULT_CAPACITY = parse_capacity(os.getenv("REF_HISTORY_DEFAULT_CAPACITY"))


def capacity_resolver(source: CapacitySource) -> Callable[[], object]:
    """Return a zero-argument callable yielding the raw capacity of ``source``."""

    if isinstance(source, ValueCell):
        return source.get
    if callable(source):
        return source
    return lambda: source


def resolve_capacity(source: CapacitySource) -> int:
    return validate_capacity(capacity_resolver(source)())


__all__ = [
    "DEFAULT_CAPACITY",
    "CapacityError",
    "CapacitySource",
    "FALLBACK_CAPACITY",
    "capacity_resolver",
    "parse_capacity",
    "resolve_capacity",
    "validate_capacity",
]
