"""SelectionMutator: range-scoped user actions on a SelectionState.

Every function takes the current state and returns a new one; states
are never modified in place. Ranges are half-open [start, end) row
positions. Only IDs already loaded in the window are affected; pending
positions inside a range are skipped.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.loaded_window import LoadedWindow
from ..core.selection_state import (
    DEFAULT_SELECTION,
    SELECT_ALL,
    Exclusion,
    Inclusion,
    SelectionState,
)
from ..core.validation import RowRange, normalize_range
from .query import row_range_to_ids

logger = logging.getLogger(__name__)

ADD = "add"
ADD_ALL = "add-all"
REMOVE = "remove"
REMOVE_ALL = "remove-all"
SET = "set"

ACTIONS = (ADD, ADD_ALL, REMOVE, REMOVE_ALL, SET)


def add(
    state: SelectionState,
    window: LoadedWindow,
    row_range: RowRange | None,
) -> SelectionState:
    """Select the loaded rows in ``row_range``.

    Inclusion grows its ID set; Exclusion re-includes the rows by
    dropping them from its exclusions. No range: no-op.
    """
    row_range = normalize_range(row_range)
    if row_range is None:
        return state
    ids = row_range_to_ids(window, row_range)
    if isinstance(state, Exclusion):
        return state.with_ids(state.ids.difference(ids))
    return state.with_ids(state.ids.union(ids))


def remove(
    state: SelectionState,
    window: LoadedWindow,
    row_range: RowRange | None,
) -> SelectionState:
    """Deselect the loaded rows in ``row_range``."""
    row_range = normalize_range(row_range)
    if row_range is None:
        return state
    ids = row_range_to_ids(window, row_range)
    if isinstance(state, Exclusion):
        return state.with_ids(state.ids.union(ids))
    return state.with_ids(state.ids.difference(ids))


def set_range(
    state: SelectionState,
    window: LoadedWindow,
    row_range: RowRange | None,
) -> SelectionState:
    """Replace the selection with exactly the loaded rows in ``row_range``."""
    row_range = normalize_range(row_range)
    if row_range is None:
        return state
    return Inclusion(frozenset(row_range_to_ids(window, row_range)))


def add_all(state: SelectionState | None = None) -> SelectionState:
    """Select every row, loaded or not."""
    return SELECT_ALL


def remove_all(state: SelectionState | None = None) -> SelectionState:
    """Clear the selection."""
    return DEFAULT_SELECTION


def apply(
    state: SelectionState,
    action: str,
    window: LoadedWindow,
    row_range: Any = None,
) -> SelectionState:
    """Dispatch a renderer gesture to the matching mutation.

    ``action`` is one of ``"add"``, ``"add-all"``, ``"remove"``,
    ``"remove-all"``, ``"set"``. A malformed range is treated like a
    missing one.
    """
    if action == ADD:
        new_state = add(state, window, row_range)
    elif action == REMOVE:
        new_state = remove(state, window, row_range)
    elif action == SET:
        new_state = set_range(state, window, row_range)
    elif action == ADD_ALL:
        new_state = add_all(state)
    elif action == REMOVE_ALL:
        new_state = remove_all(state)
    else:
        raise ValueError(
            f"Unknown selection action '{action}'. Expected one of {list(ACTIONS)}."
        )
    logger.debug("Applied %s %s: %r -> %r", action, row_range, state, new_state)
    return new_state
