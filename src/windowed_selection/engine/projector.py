"""SelectionProjector: logical selection to physical grid positions."""

from __future__ import annotations

import logging

from ..core.compact_selection import CompactSelection, GridSelection
from ..core.loaded_window import LoadedWindow
from ..core.selection_state import Exclusion, Inclusion, SelectionState

logger = logging.getLogger(__name__)


def _loaded_positions(ids, window: LoadedWindow) -> list[int]:
    """Positions of the IDs that are currently loaded. Others are skipped."""
    positions = []
    for record_id in ids:
        index = window.index_of(record_id)
        if index is not None:
            positions.append(index)
    return positions


def project_rows(state: SelectionState, window: LoadedWindow) -> CompactSelection:
    """Project a selection onto row positions of the loaded window.

    Inclusion: the positions of selected IDs that are loaded. Selected
    IDs that are not loaded stay in the state and show up once their
    row resolves.

    Exclusion: the full range [0, N) minus the positions of loaded
    excluded IDs. While N is unknown the range is [0, window.extent),
    i.e. every position the window already knows exists.

    Cost is O(len(state.ids) log k), never O(N).
    """
    if isinstance(state, Inclusion):
        return CompactSelection.from_indices(_loaded_positions(state.ids, window))
    if isinstance(state, Exclusion):
        if not window.total_known:
            logger.debug(
                "Projecting exclusion over %d known rows; total not yet known",
                window.extent,
            )
        full = CompactSelection.from_range(0, window.extent)
        return full.remove_indices(_loaded_positions(state.ids, window))
    raise TypeError(f"Unknown selection state: {type(state).__name__}")


def project(state: SelectionState, window: LoadedWindow) -> GridSelection:
    """Project a selection into the renderer-facing GridSelection.

    Only rows are ever selected; ``columns`` is always empty.
    """
    return GridSelection(rows=project_rows(state, window))
