"""Settings codec: SelectionState <-> persisted settings record.

The record shape is::

    {"type": "ONLY_IN", "selections": [id, ...]}
    {"type": "ALL_EXCEPT", "exclusions": [id, ...]}

Decoding fails closed: anything unrecognised becomes the default empty
selection and is logged, never raised to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.selection_state import (
    ALL_EXCEPT,
    DEFAULT_SELECTION,
    ONLY_IN,
    Exclusion,
    Inclusion,
    SelectionState,
)
from ..core.validation import is_valid_id

logger = logging.getLogger(__name__)

_ARRAY_KEYS = {ONLY_IN: "selections", ALL_EXCEPT: "exclusions"}


def encode_selection(state: SelectionState) -> dict:
    """Encode a selection as a settings record. IDs are sorted."""
    if isinstance(state, Inclusion):
        return {"type": ONLY_IN, "selections": sorted(state.ids)}
    if isinstance(state, Exclusion):
        return {"type": ALL_EXCEPT, "exclusions": sorted(state.ids)}
    raise TypeError(f"Unknown selection state: {type(state).__name__}")


def _fail_closed(reason: str) -> SelectionState:
    logger.warning("Discarding persisted selection: %s", reason)
    return DEFAULT_SELECTION


def decode_selection(record: Any) -> SelectionState:
    """Decode a settings record (dict or JSON string) into a selection."""
    if record is None:
        return DEFAULT_SELECTION
    if isinstance(record, (str, bytes)):
        try:
            record = json.loads(record)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return _fail_closed(f"invalid JSON ({e})")
    if not isinstance(record, dict):
        return _fail_closed(f"expected an object, got {type(record).__name__}")

    kind = record.get("type")
    key = _ARRAY_KEYS.get(kind) if isinstance(kind, str) else None
    if key is None:
        return _fail_closed(f"unrecognised type {kind!r}")

    ids = record.get(key)
    if not isinstance(ids, list):
        return _fail_closed(f"'{key}' must be a list, got {type(ids).__name__}")
    bad = [i for i in ids if not is_valid_id(i)]
    if bad:
        return _fail_closed(f"non-integer IDs in '{key}': {bad[:5]}")

    ids = frozenset(int(i) for i in ids)
    if kind == ONLY_IN:
        return Inclusion(ids)
    return Exclusion(ids)


def dumps_selection(state: SelectionState) -> str:
    """Encode a selection as a JSON string."""
    return json.dumps(encode_selection(state))


def loads_selection(text: str) -> SelectionState:
    """Decode a JSON string; alias of ``decode_selection`` for symmetry."""
    return decode_selection(text)
