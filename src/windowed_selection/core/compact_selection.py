"""CompactSelection: an immutable set of row positions stored as intervals.

A selection over millions of rows is a handful of [start, end) runs, so
"select all then deselect three" costs four intervals instead of millions
of booleans. Every operation returns a new CompactSelection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union

import numpy as np


Slice = Union[int, tuple[int, int]]


def _as_bounds(item: Slice) -> tuple[int, int]:
    if isinstance(item, tuple):
        start, end = int(item[0]), int(item[1])
    else:
        start = int(item)
        end = start + 1
    return start, end


class CompactSelection:
    """Sorted, disjoint, non-adjacent half-open intervals.

    ``starts`` and ``ends`` are parallel int64 arrays; adjacent runs are
    always merged so equal sets have equal arrays.
    """

    __slots__ = ("_starts", "_ends")

    def __init__(
        self,
        starts: np.ndarray | None = None,
        ends: np.ndarray | None = None,
    ) -> None:
        if starts is None:
            starts = np.empty(0, dtype=np.int64)
        if ends is None:
            ends = np.empty(0, dtype=np.int64)
        starts = np.asarray(starts, dtype=np.int64)
        ends = np.asarray(ends, dtype=np.int64)
        if starts.shape != ends.shape:
            raise ValueError("starts and ends must have the same length.")
        self._starts = starts
        self._ends = ends

    @classmethod
    def empty(cls) -> CompactSelection:
        return cls()

    @classmethod
    def from_range(cls, start: int, end: int) -> CompactSelection:
        """Selection covering [start, end). Empty if end <= start."""
        if end <= start:
            return cls()
        return cls(np.array([start]), np.array([end]))

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> CompactSelection:
        """Build a selection from arbitrary positions in one pass.

        Sorts and de-duplicates, then splits into runs wherever two
        consecutive positions differ by more than one.
        """
        arr = np.unique(np.fromiter(indices, dtype=np.int64))
        if len(arr) == 0:
            return cls()
        breaks = np.flatnonzero(np.diff(arr) > 1)
        starts = np.concatenate(([arr[0]], arr[breaks + 1]))
        ends = np.concatenate((arr[breaks] + 1, [arr[-1] + 1]))
        return cls(starts, ends)

    @property
    def starts(self) -> np.ndarray:
        return self._starts

    @property
    def ends(self) -> np.ndarray:
        return self._ends

    @property
    def length(self) -> int:
        """Number of selected positions."""
        return int((self._ends - self._starts).sum())

    def __len__(self) -> int:
        return self.length

    def __bool__(self) -> bool:
        return len(self._starts) > 0

    def first(self) -> int | None:
        if len(self._starts) == 0:
            return None
        return int(self._starts[0])

    def last(self) -> int | None:
        if len(self._ends) == 0:
            return None
        return int(self._ends[-1]) - 1

    def ranges(self) -> list[tuple[int, int]]:
        """The intervals as [(start, end), ...]."""
        return [(int(s), int(e)) for s, e in zip(self._starts, self._ends)]

    def add(self, item: Slice) -> CompactSelection:
        """Return a new selection with a position or [start, end) added."""
        start, end = _as_bounds(item)
        if end <= start:
            return self
        # Runs touching [start, end) (including adjacent ones) merge with it
        lo = int(np.searchsorted(self._ends, start, side="left"))
        hi = int(np.searchsorted(self._starts, end, side="right"))
        if lo < hi:
            start = min(start, int(self._starts[lo]))
            end = max(end, int(self._ends[hi - 1]))
        starts = np.concatenate((self._starts[:lo], [start], self._starts[hi:]))
        ends = np.concatenate((self._ends[:lo], [end], self._ends[hi:]))
        return CompactSelection(starts, ends)

    def remove(self, item: Slice) -> CompactSelection:
        """Return a new selection with a position or [start, end) removed."""
        start, end = _as_bounds(item)
        if end <= start or len(self._starts) == 0:
            return self
        lo = int(np.searchsorted(self._ends, start, side="right"))
        hi = int(np.searchsorted(self._starts, end, side="left"))
        if lo >= hi:
            return self
        new_starts: list[int] = []
        new_ends: list[int] = []
        first_start = int(self._starts[lo])
        last_end = int(self._ends[hi - 1])
        if first_start < start:
            new_starts.append(first_start)
            new_ends.append(start)
        if last_end > end:
            new_starts.append(end)
            new_ends.append(last_end)
        starts = np.concatenate(
            (self._starts[:lo], np.array(new_starts, dtype=np.int64), self._starts[hi:])
        )
        ends = np.concatenate(
            (self._ends[:lo], np.array(new_ends, dtype=np.int64), self._ends[hi:])
        )
        return CompactSelection(starts, ends)

    def remove_indices(self, indices: Iterable[int]) -> CompactSelection:
        """Remove many positions at once.

        A single sweep over the combined run boundaries: each segment
        between consecutive boundaries is kept if it lies in this
        selection and outside the removed runs, and kept segments that
        touch are joined back into runs.
        """
        removed = CompactSelection.from_indices(indices)
        if not removed or not self:
            return self
        bounds = np.unique(np.concatenate(
            (self._starts, self._ends, removed._starts, removed._ends)
        ))
        segments = bounds[:-1]
        keep = self._covers(segments) & ~removed._covers(segments)
        edges = np.diff(np.concatenate(([0], keep.astype(np.int8), [0])))
        starts = bounds[np.flatnonzero(edges == 1)]
        ends = bounds[np.flatnonzero(edges == -1)]
        return CompactSelection(starts, ends)

    def _covers(self, positions: np.ndarray) -> np.ndarray:
        # Inside a run iff more runs start than end at or before the position
        opened = np.searchsorted(self._starts, positions, side="right")
        closed = np.searchsorted(self._ends, positions, side="right")
        return opened > closed

    def has_index(self, index: int) -> bool:
        i = int(np.searchsorted(self._starts, index, side="right")) - 1
        return i >= 0 and index < int(self._ends[i])

    def has_all(self, item: Slice) -> bool:
        """True if every position in the position or [start, end) is selected."""
        start, end = _as_bounds(item)
        if end <= start:
            return True
        i = int(np.searchsorted(self._starts, start, side="right")) - 1
        return i >= 0 and end <= int(self._ends[i])

    def offset(self, delta: int) -> CompactSelection:
        """Shift every interval by ``delta`` positions."""
        return CompactSelection(self._starts + delta, self._ends + delta)

    def __iter__(self) -> Iterator[int]:
        for start, end in self.ranges():
            yield from range(start, end)

    def to_list(self) -> list[int]:
        """Every selected position. Only sensible for small selections."""
        return list(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompactSelection):
            return NotImplemented
        return (
            np.array_equal(self._starts, other._starts)
            and np.array_equal(self._ends, other._ends)
        )

    def __hash__(self) -> int:
        return hash((self._starts.tobytes(), self._ends.tobytes()))

    def __repr__(self) -> str:
        return f"CompactSelection({self.ranges()})"


@dataclass(frozen=True)
class GridSelection:
    """Physical selection handed to the grid renderer."""

    rows: CompactSelection = field(default_factory=CompactSelection.empty)
    columns: CompactSelection = field(default_factory=CompactSelection.empty)

    def to_dict(self) -> dict:
        """Serialize for JSON transfer to the renderer."""
        return {
            "rows": [list(r) for r in self.rows.ranges()],
            "columns": [list(r) for r in self.columns.ranges()],
        }
