"""LoadedWindow: the partially loaded, position-indexed view of a dataset.

Maps between row positions and record IDs for whatever rows have been
fetched so far. Immutable: every data-loading transform returns a new
LoadedWindow.
"""

from __future__ import annotations

from collections.abc import Mapping
from operator import attrgetter, itemgetter
from typing import Any, Callable, Hashable, Iterable, Protocol

import numpy as np
import pandas as pd

from .validation import (
    normalize_range,
    validate_position,
    validate_total,
    validate_unique_ids,
)


class HasId(Protocol):
    id: int


IdGetter = Callable[[Any], Hashable]


def default_id_getter(record: HasId | Mapping) -> Hashable:
    """Read ``record["id"]`` from mappings, ``record.id`` otherwise."""
    if isinstance(record, Mapping):
        return record["id"]
    return record.id


def attr_id_getter(name: str) -> IdGetter:
    """Accessor for records whose identifier lives in attribute ``name``."""
    return attrgetter(name)


def key_id_getter(name: str) -> IdGetter:
    """Accessor for mapping records whose identifier lives under ``name``."""
    return itemgetter(name)


class LoadedWindow:
    """Sparse view of the rows loaded so far.

    Only resolved slots are stored; every other position below
    ``extent`` is pending. ``total`` is the dataset row count reported by
    the data-loading collaborator, or None while it is still unknown.
    """

    __slots__ = ("_records", "_id_positions", "_positions", "_total", "_id_getter")

    def __init__(
        self,
        records_by_position: Mapping[int, Any] | None = None,
        total: int | None = None,
        id_getter: IdGetter = default_id_getter,
    ) -> None:
        total = validate_total(total)
        records: dict[int, Any] = {}
        id_positions: dict[Hashable, int] = {}
        for position, record in (records_by_position or {}).items():
            position = validate_position(position)
            if total is not None and position >= total:
                continue
            if record is None:
                continue
            record_id = id_getter(record)
            validate_unique_ids(id_positions, record_id, position)
            records[position] = record
            id_positions[record_id] = position

        self._records = records
        self._id_positions = id_positions
        self._positions = np.array(sorted(records), dtype=np.int64)
        self._total = total
        self._id_getter = id_getter

    @classmethod
    def from_records(
        cls,
        records: Iterable[Any],
        total: int | None = None,
        offset: int = 0,
        id_getter: IdGetter = default_id_getter,
    ) -> LoadedWindow:
        """Create a window from a contiguous page of records.

        ``None`` entries are treated as pending slots.
        """
        return cls(
            {offset + i: record for i, record in enumerate(records)},
            total=total,
            id_getter=id_getter,
        )

    @classmethod
    def pending(
        cls,
        total: int | None = None,
        id_getter: IdGetter = default_id_getter,
    ) -> LoadedWindow:
        """A window with nothing loaded yet."""
        return cls({}, total=total, id_getter=id_getter)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        id_column: str = "id",
        total: int | None = None,
        offset: int = 0,
    ) -> LoadedWindow:
        """Create a window from a page held in a DataFrame.

        Each row becomes a dict record. Rows whose ID is missing (NaN)
        are pending slots.
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError(
                f"Expected a pandas DataFrame, got {type(df).__name__}."
            )
        if id_column not in df.columns:
            raise KeyError(
                f"Column '{id_column}' not found. Available: {list(df.columns)}"
            )
        records: dict[int, Any] = {}
        for i, row in enumerate(df.to_dict(orient="records")):
            if pd.isna(row[id_column]):
                continue
            row[id_column] = int(row[id_column])
            records[offset + i] = row
        return cls(records, total=total, id_getter=itemgetter(id_column))

    @property
    def size(self) -> int | None:
        """Total row count, or None while unknown."""
        return self._total

    @property
    def total_known(self) -> bool:
        return self._total is not None

    @property
    def extent(self) -> int:
        """Number of positions known to exist.

        The total when known, otherwise one past the last loaded position.
        """
        if self._total is not None:
            return self._total
        if len(self._positions) == 0:
            return 0
        return int(self._positions[-1]) + 1

    @property
    def n_loaded(self) -> int:
        return len(self._positions)

    @property
    def id_getter(self) -> IdGetter:
        return self._id_getter

    @property
    def loaded_positions(self) -> np.ndarray:
        """Sorted positions of resolved slots (read-only)."""
        v = self._positions.view()
        v.flags.writeable = False
        return v

    @property
    def records(self) -> list:
        """Loaded records in window order."""
        return [self._records[int(p)] for p in self._positions]

    @property
    def loaded_ids(self) -> list:
        """IDs of loaded records in window order."""
        return [self._id_getter(r) for r in self.records]

    def id_of(self, record: Any) -> Hashable:
        return self._id_getter(record)

    def index_of(self, record_id: Hashable) -> int | None:
        """Return the position of a loaded ID, or None if not loaded."""
        return self._id_positions.get(record_id)

    def is_loaded(self, position: int) -> bool:
        return position in self._records

    def record_at(self, position: int) -> Any | None:
        """Return the record at ``position``, or None if pending."""
        return self._records.get(position)

    def _slice_positions(self, start: int, end: int) -> np.ndarray:
        lo = int(np.searchsorted(self._positions, start, side="left"))
        hi = int(np.searchsorted(self._positions, end, side="left"))
        return self._positions[lo:hi]

    def records_in_range(self, start: int, end: int) -> list:
        """Loaded records in the half-open range [start, end).

        Pending slots are skipped. Out-of-bounds ranges are clamped.
        """
        clamped = normalize_range((start, end), self._total)
        if clamped is None or clamped[0] >= clamped[1]:
            return []
        return [
            self._records[int(p)] for p in self._slice_positions(*clamped)
        ]

    def ids_in_range(self, start: int, end: int) -> list:
        """IDs of loaded records in the half-open range [start, end).

        O(loaded slots in range), independent of the range width.
        """
        return [self._id_getter(r) for r in self.records_in_range(start, end)]

    def with_page(self, offset: int, records: Iterable[Any]) -> LoadedWindow:
        """Return a new window with a fetched page resolved at ``offset``.

        IDs previously loaded elsewhere are moved to their new position.
        ``None`` entries in the page mark slots as pending again.
        """
        offset = validate_position(offset)
        page = list(records)
        merged = dict(self._records)
        page_ids = set()
        for i, record in enumerate(page):
            merged.pop(offset + i, None)
            if record is not None:
                page_ids.add(self._id_getter(record))
        merged = {
            pos: rec for pos, rec in merged.items()
            if self._id_getter(rec) not in page_ids
        }
        for i, record in enumerate(page):
            if record is not None:
                merged[offset + i] = record
        return LoadedWindow(merged, total=self._total, id_getter=self._id_getter)

    def with_total(self, total: int | None) -> LoadedWindow:
        """Return a new window with an updated total row count.

        Loaded positions at or beyond a smaller total are dropped.
        """
        return LoadedWindow(self._records, total=total, id_getter=self._id_getter)

    def with_pending(self, start: int, end: int) -> LoadedWindow:
        """Return a new window with [start, end) marked pending again."""
        clamped = normalize_range((start, end))
        if clamped is None or clamped[0] >= clamped[1]:
            return self
        kept = {
            pos: rec for pos, rec in self._records.items()
            if not clamped[0] <= pos < clamped[1]
        }
        return LoadedWindow(kept, total=self._total, id_getter=self._id_getter)

    def __len__(self) -> int:
        return self.extent

    def __repr__(self) -> str:
        total = "unknown" if self._total is None else self._total
        return f"LoadedWindow(loaded={self.n_loaded}, total={total})"
