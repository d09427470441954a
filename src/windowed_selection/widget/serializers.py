"""Serializers: convert selection objects to and from renderer JSON."""

from __future__ import annotations

import json
import logging

from ..core.compact_selection import GridSelection
from ..core.validation import RowRange, normalize_range
from ..engine.mutator import ACTIONS

logger = logging.getLogger(__name__)


def serialize_grid_selection(grid: GridSelection) -> str:
    """Serialize a GridSelection as a JSON string of [start, end) runs."""
    return json.dumps(grid.to_dict())


def serialize_selection_summary(
    size: int,
    exact: bool,
    loaded_ids: list,
) -> str:
    """Serialize the header/status summary shown next to the grid."""
    return json.dumps({
        "size": size,
        "exact": exact,
        "loadedSelectedIds": list(loaded_ids),
    })


def parse_selection_gesture(text: str) -> tuple[str, RowRange | None] | None:
    """Parse a renderer gesture ``{"action": ..., "range": [start, end]}``.

    Returns ``(action, range_or_None)``, or None for a malformed gesture.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Ignoring selection gesture with invalid JSON: %r", text)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring selection gesture that is not an object: %r", data)
        return None
    action = data.get("action")
    if action not in ACTIONS:
        logger.warning("Ignoring unknown selection gesture %r", action)
        return None
    return action, normalize_range(data.get("range"))
