import pytest

from ref_history.cells import ValueCell
from ref_history.history import (
    DEFAULT_CAPACITY,
    CapacityError,
    capacity_resolver,
    parse_capacity,
    resolve_capacity,
    validate_capacity,
)


def test_static_capacity_resolves_to_itself() -> None:
    assert resolve_capacity(3) == 3


def test_callable_capacity_is_read_on_demand() -> None:
    limit = {"value": 5}
    resolver = capacity_resolver(lambda: limit["value"])

    assert resolver() == 5
    limit["value"] = 2
    assert resolver() == 2


def test_cell_capacity_tracks_cell_value() -> None:
    capacity = ValueCell(10)
    resolver = capacity_resolver(capacity)

    capacity.value = 4

    assert resolver() == 4


@pytest.mark.parametrize("value", [0, -1, True, 2.5, "3", None])
def test_invalid_capacity_rejected(value: object) -> None:
    with pytest.raises(CapacityError) as info:
        validate_capacity(value)

    assert info.value.value == value


def test_capacity_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        resolve_capacity(0)


def test_default_capacity_is_positive() -> None:
    assert validate_capacity(DEFAULT_CAPACITY) == DEFAULT_CAPACITY


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("25", 25),
        (" 4 ", 4),
        (None, 10),
        ("", 10),
        ("ten", 10),
        ("0", 10),
        ("-2", 10),
    ],
)
def test_parse_capacity_falls_back_on_bad_config(
    raw: str | None, expected: int
) -> None:
    assert parse_capacity(raw, fallback=10) == expected
