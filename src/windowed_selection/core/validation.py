"""Input validation and range normalisation for the selection engine."""

from __future__ import annotations

from numbers import Integral
from typing import Any


RowRange = tuple[int, int]


def normalize_range(
    row_range: Any,
    upper: int | None = None,
) -> RowRange | None:
    """Clamp a half-open [start, end) position range.

    Returns None when no range was given or either bound is not an
    integer. Negative starts clamp to 0, ends clamp to ``upper`` when it
    is known, and reversed ranges collapse to an empty range at ``start``.
    """
    if row_range is None:
        return None
    try:
        start, end = row_range
    except (TypeError, ValueError):
        return None
    if not (is_valid_id(start) and is_valid_id(end)):
        return None
    start, end = int(start), int(end)
    start = max(0, start)
    if upper is not None:
        end = min(upper, end)
    if end < start:
        end = start
    return (start, end)


def is_valid_id(value: Any) -> bool:
    """True for integer ids. Booleans are rejected."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_position(position: Any) -> int:
    """Validate a window slot position."""
    if not is_valid_id(position):
        raise TypeError(
            f"Positions must be integers, got {type(position).__name__}."
        )
    position = int(position)
    if position < 0:
        raise ValueError(f"Positions must be non-negative, got {position}.")
    return position


def validate_total(total: Any) -> int | None:
    """Validate a total row count. None means not yet known."""
    if total is None:
        return None
    if not is_valid_id(total):
        raise TypeError(
            f"Total must be an integer or None, got {type(total).__name__}."
        )
    total = int(total)
    if total < 0:
        raise ValueError(f"Total must be non-negative, got {total}.")
    return total


def validate_unique_ids(id_positions: dict, new_id: Any, position: int) -> None:
    """Raise if ``new_id`` already occupies a different position."""
    existing = id_positions.get(new_id)
    if existing is not None and existing != position:
        raise ValueError(
            f"Record IDs must be unique. ID {new_id!r} is loaded at "
            f"positions {existing} and {position}."
        )
