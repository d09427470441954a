"""Selection engine: projection, mutation and queries."""

from .projector import project, project_rows
from .mutator import (
    ACTIONS,
    add,
    add_all,
    apply,
    remove,
    remove_all,
    set_range,
)
from .query import (
    has_selection,
    is_range_selected,
    is_size_exact,
    loaded_selected_ids,
    loaded_selected_records,
    row_range_to_ids,
    selection_size,
)

__all__ = [
    "project",
    "project_rows",
    "ACTIONS",
    "add",
    "add_all",
    "apply",
    "remove",
    "remove_all",
    "set_range",
    "has_selection",
    "is_range_selected",
    "is_size_exact",
    "loaded_selected_ids",
    "loaded_selected_records",
    "row_range_to_ids",
    "selection_size",
]
