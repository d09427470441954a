"""SelectionQuery: read-only views derived from (SelectionState, LoadedWindow)."""

from __future__ import annotations

from typing import Any

from ..core.loaded_window import LoadedWindow
from ..core.selection_state import Inclusion, SelectionState
from ..core.validation import normalize_range


def row_range_to_ids(window: LoadedWindow, row_range: Any) -> list:
    """IDs of the loaded rows in the half-open ``row_range``.

    Missing or malformed ranges resolve to no IDs.
    """
    row_range = normalize_range(row_range)
    if row_range is None:
        return []
    return window.ids_in_range(*row_range)


def is_range_selected(
    state: SelectionState,
    window: LoadedWindow,
    row_range: Any,
) -> bool:
    """True iff every loaded row in ``row_range`` is selected.

    A range with no loaded rows is vacuously selected.
    """
    return all(state.is_member(i) for i in row_range_to_ids(window, row_range))


def selection_size(state: SelectionState, window: LoadedWindow) -> int:
    """Number of selected rows.

    Exclusion with a known total: ``max(0, total - len(exclusions))``.
    Exclusion while the total is unknown: a lower bound, the positions
    known so far minus every excluded ID. Pending positions may hold
    excluded IDs too, and each ID removes at most one row.
    """
    if isinstance(state, Inclusion):
        return len(state.ids)
    if window.total_known:
        return max(0, window.size - len(state.ids))
    return max(0, window.extent - len(state.ids))


def is_size_exact(state: SelectionState, window: LoadedWindow) -> bool:
    """False while ``selection_size`` is only a lower bound."""
    return isinstance(state, Inclusion) or window.total_known


def has_selection(state: SelectionState) -> bool:
    """True if anything is (or may be) selected."""
    return not state.is_empty


def loaded_selected_records(state: SelectionState, window: LoadedWindow) -> list:
    """Loaded records that are selected, in window order."""
    return [r for r in window.records if state.is_member(window.id_of(r))]


def loaded_selected_ids(state: SelectionState, window: LoadedWindow) -> list:
    """IDs of the loaded selected records, in window order."""
    return [window.id_of(r) for r in loaded_selected_records(state, window)]
