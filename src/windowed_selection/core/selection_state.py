"""SelectionState: the logical, ID-based row selection.

Exactly one of two immutable variants:

- ``Inclusion``: the selected rows are exactly ``ids``.
- ``Exclusion``: every row is selected except ``ids``.

Both hold O(k) IDs regardless of how many rows the dataset has.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, Union


ONLY_IN = "ONLY_IN"
ALL_EXCEPT = "ALL_EXCEPT"


@dataclass(frozen=True)
class Inclusion:
    """Selected rows are exactly ``ids``."""

    ids: frozenset = field(default_factory=frozenset)

    type = ONLY_IN

    def __post_init__(self) -> None:
        if not isinstance(self.ids, frozenset):
            object.__setattr__(self, "ids", frozenset(self.ids))

    def is_member(self, record_id: Hashable) -> bool:
        return record_id in self.ids

    @property
    def is_empty(self) -> bool:
        return not self.ids

    def with_ids(self, ids: Iterable[Hashable]) -> Inclusion:
        return Inclusion(frozenset(ids))

    def __repr__(self) -> str:
        return f"Inclusion(n_ids={len(self.ids)})"


@dataclass(frozen=True)
class Exclusion:
    """Every row is selected except ``ids``."""

    ids: frozenset = field(default_factory=frozenset)

    type = ALL_EXCEPT

    def __post_init__(self) -> None:
        if not isinstance(self.ids, frozenset):
            object.__setattr__(self, "ids", frozenset(self.ids))

    def is_member(self, record_id: Hashable) -> bool:
        return record_id not in self.ids

    @property
    def is_empty(self) -> bool:
        # "All except" always denotes a selection, even over zero rows
        return False

    def with_ids(self, ids: Iterable[Hashable]) -> Exclusion:
        return Exclusion(frozenset(ids))

    def __repr__(self) -> str:
        return f"Exclusion(n_ids={len(self.ids)})"


SelectionState = Union[Inclusion, Exclusion]

DEFAULT_SELECTION: SelectionState = Inclusion()
SELECT_ALL: SelectionState = Exclusion()
