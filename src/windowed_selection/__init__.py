"""windowed-selection: row selection over huge, partially loaded tables."""

from ._version import __version__
from .core.compact_selection import CompactSelection, GridSelection
from .core.loaded_window import (
    LoadedWindow,
    attr_id_getter,
    default_id_getter,
    key_id_getter,
)
from .core.selection_state import (
    DEFAULT_SELECTION,
    SELECT_ALL,
    Exclusion,
    Inclusion,
    SelectionState,
)
from .engine import (
    apply,
    is_range_selected,
    loaded_selected_records,
    project,
    selection_size,
)
from .settings.codec import decode_selection, encode_selection


def controller(window=None, settings=None, **params):
    """Create a SelectionController, optionally rehydrated from settings.

    Requires the ``param`` dependency; imported lazily so the pure
    engine stays usable on its own.
    """
    from .controller.selection_controller import SelectionController

    return SelectionController.from_settings(settings, window=window, **params)


__all__ = [
    "__version__",
    "CompactSelection",
    "GridSelection",
    "LoadedWindow",
    "attr_id_getter",
    "default_id_getter",
    "key_id_getter",
    "DEFAULT_SELECTION",
    "SELECT_ALL",
    "Exclusion",
    "Inclusion",
    "SelectionState",
    "apply",
    "is_range_selected",
    "loaded_selected_records",
    "project",
    "selection_size",
    "decode_selection",
    "encode_selection",
    "controller",
]
