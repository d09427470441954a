"""SelectionController: reactive owner of one view's row selection."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

import param

from ..core.compact_selection import GridSelection
from ..core.loaded_window import LoadedWindow
from ..core.selection_state import (
    DEFAULT_SELECTION,
    Exclusion,
    Inclusion,
    SelectionState,
)
from ..engine import mutator, query
from ..engine.projector import project
from ..settings.codec import decode_selection, encode_selection
from ..widget.serializers import (
    parse_selection_gesture,
    serialize_grid_selection,
    serialize_selection_summary,
)

logger = logging.getLogger(__name__)

SettingsCallback = Callable[[dict], Any]


class SelectionController(param.Parameterized):
    """Holds the selection for one grid and keeps derived views current.

    ``window`` is published by the data-loading side and ``selection`` is
    changed through ``handle_selection_change``. Whenever either changes,
    the derived parameters (grid selection, size, loaded selected
    records) are recomputed, and settings callbacks receive the encoded
    selection record for persistence.
    """

    # --- Inputs ---
    window = param.ClassSelector(
        class_=LoadedWindow, default=LoadedWindow.pending(), instantiate=False,
        doc="Rows loaded so far, published by the data-loading collaborator.",
    )
    selection = param.ClassSelector(
        class_=(Inclusion, Exclusion), default=DEFAULT_SELECTION, instantiate=False,
        doc="Logical selection; replace, never mutate.",
    )

    # --- Config ---
    page_limit = param.Integer(
        default=100, bounds=(1, None),
        doc="Rows covered by the 'Select all' header menu action.",
    )
    preset_counts = param.List(
        default=[5, 10, 25], item_type=int,
        doc="Sizes offered as 'Select first N' header menu actions.",
    )

    # --- Derived (recomputed from window + selection) ---
    grid_selection = param.ClassSelector(
        class_=GridSelection, default=GridSelection(), instantiate=False,
    )
    selection_size = param.Integer(default=0)
    size_is_exact = param.Boolean(default=True)
    loaded_selected_records = param.List(default=[])
    loaded_selected_ids = param.List(default=[])

    def __init__(self, **params):
        super().__init__(**params)
        self._callbacks: list[SettingsCallback] = []

    @classmethod
    def from_settings(
        cls,
        record: Any,
        window: LoadedWindow | None = None,
        **params,
    ) -> SelectionController:
        """Rehydrate a controller from a persisted settings record."""
        if window is not None:
            params["window"] = window
        return cls(selection=decode_selection(record), **params)

    @property
    def settings(self) -> dict:
        """The current selection as a settings record."""
        return encode_selection(self.selection)

    @param.depends("window", "selection", watch=True, on_init=True)
    def _recompute(self) -> None:
        """Recompute every derived view from (selection, window)."""
        state, window = self.selection, self.window
        records = query.loaded_selected_records(state, window)
        self.param.update(
            grid_selection=project(state, window),
            selection_size=query.selection_size(state, window),
            size_is_exact=query.is_size_exact(state, window),
            loaded_selected_records=records,
            loaded_selected_ids=[window.id_of(r) for r in records],
        )
        logger.debug(
            "Recomputed selection views: size=%d exact=%s rows=%r",
            self.selection_size, self.size_is_exact, self.grid_selection.rows,
        )

    @param.depends("selection", watch=True)
    def _notify_settings(self) -> None:
        record = self.settings
        for cb in self._callbacks:
            cb(record)

    def on_settings_change(self, callback: SettingsCallback) -> None:
        """Register a callback: fn(settings_record). Called on every change."""
        self._callbacks.append(callback)

    # --- Renderer bridge ---

    def handle_selection_change(
        self,
        action: str,
        row_range: tuple[int, int] | None = None,
    ) -> SelectionState:
        """Apply a grid gesture and publish the resulting selection."""
        new_state = mutator.apply(self.selection, action, self.window, row_range)
        if new_state != self.selection:
            self.selection = new_state
        return self.selection

    def handle_gesture_json(self, gesture_json: str) -> SelectionState:
        """Apply a JSON gesture from the renderer. Malformed ones are ignored."""
        gesture = parse_selection_gesture(gesture_json)
        if gesture is None:
            return self.selection
        action, row_range = gesture
        return self.handle_selection_change(action, row_range)

    def grid_selection_json(self) -> str:
        """The physical selection as renderer JSON."""
        return serialize_grid_selection(self.grid_selection)

    def summary_json(self) -> str:
        """Size and loaded selected IDs for the status bar."""
        return serialize_selection_summary(
            self.selection_size, self.size_is_exact, self.loaded_selected_ids,
        )

    def is_range_selected(self, row_range: tuple[int, int]) -> bool:
        return query.is_range_selected(self.selection, self.window, row_range)

    def row_range_to_ids(self, row_range: tuple[int, int]) -> list:
        return query.row_range_to_ids(self.window, row_range)

    # --- Data-loading bridge ---

    def update_window(self, window: LoadedWindow) -> None:
        """Publish a new loaded window."""
        self.window = window

    def load_page(self, offset: int, records: Iterable[Any]) -> None:
        """Resolve a fetched page into the current window."""
        self.window = self.window.with_page(offset, records)

    def set_total(self, total: int | None) -> None:
        self.window = self.window.with_total(total)

    def reset_selection(self) -> None:
        """Drop the selection, e.g. after the filter changes."""
        if self.selection != DEFAULT_SELECTION:
            self.selection = DEFAULT_SELECTION

    # --- Header menu ---

    def header_menu_items(self) -> list[dict]:
        """Menu entries for the selection column header.

        "Clear selected" appears only when something is selected.
        """
        items: list[dict] = []
        if query.has_selection(self.selection):
            items.append({
                "key": "select-none",
                "label": "Clear selected",
                "action": mutator.REMOVE_ALL,
                "range": None,
            })
        for n in self.preset_counts:
            items.append({
                "key": f"select-{n}",
                "label": f"Select first {n}",
                "action": mutator.SET,
                "range": (0, n),
            })
        items.append({
            "key": "select-all",
            "label": "Select all",
            "action": mutator.SET,
            "range": (0, self.page_limit),
        })
        return items

    def run_menu_item(self, key: str) -> SelectionState:
        """Apply the header menu entry with the given key."""
        for item in self.header_menu_items():
            if item["key"] == key:
                return self.handle_selection_change(item["action"], item["range"])
        raise KeyError(f"No header menu item '{key}'.")

    def __repr__(self) -> str:
        return (
            f"SelectionController(selection={self.selection!r}, "
            f"window={self.window!r})"
        )
