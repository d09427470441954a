"""Tests for projecting logical selections onto grid positions."""

from windowed_selection.core.compact_selection import CompactSelection
from windowed_selection.core.loaded_window import LoadedWindow
from windowed_selection.core.selection_state import (
    DEFAULT_SELECTION,
    SELECT_ALL,
    Exclusion,
    Inclusion,
)
from windowed_selection.engine.projector import project, project_rows

from conftest import Run


class TestProjectInclusion:
    def test_default_projects_empty(self, five_window):
        assert project_rows(DEFAULT_SELECTION, five_window).length == 0

    def test_loaded_ids_map_to_positions(self, five_window):
        rows = project_rows(Inclusion(frozenset({10, 11, 14})), five_window)
        assert rows.ranges() == [(0, 2), (4, 5)]

    def test_unloaded_ids_are_invisible(self, five_window):
        rows = project_rows(Inclusion(frozenset({12, 999})), five_window)
        assert rows.to_list() == [2]

    def test_columns_always_empty(self, five_window):
        grid = project(Inclusion(frozenset({10})), five_window)
        assert grid.columns == CompactSelection.empty()


class TestProjectExclusion:
    def test_select_all_covers_total(self, five_window):
        assert project_rows(SELECT_ALL, five_window).ranges() == [(0, 5)]

    def test_loaded_exclusions_removed(self, five_window):
        rows = project_rows(Exclusion(frozenset({11, 13})), five_window)
        assert rows.to_list() == [0, 2, 4]

    def test_unloaded_exclusions_ignored(self, five_window):
        rows = project_rows(Exclusion(frozenset({999})), five_window)
        assert rows.ranges() == [(0, 5)]

    def test_huge_total_stays_compact(self, sparse_window):
        rows = project_rows(Exclusion(frozenset({101, 902})), sparse_window)
        assert rows.ranges() == [(0, 1), (2, 1_000_002), (1_000_003, 5_000_000)]
        assert rows.length == 4_999_998

    def test_many_scattered_exclusions(self):
        window = LoadedWindow.from_records([Run(i) for i in range(60_000)], total=60_000)
        state = Exclusion(frozenset(range(0, 60_000, 2)))
        rows = project_rows(state, window)
        assert len(rows.starts) == 30_000
        assert rows.length == 30_000
        assert rows.to_list()[:3] == [1, 3, 5]

    def test_pending_rows_are_selected(self, sparse_window):
        rows = project_rows(SELECT_ALL, sparse_window)
        assert rows.has_index(3_000_000)

    def test_unknown_total_uses_known_extent(self):
        window = LoadedWindow.from_records([Run(1), Run(2), Run(3)])
        rows = project_rows(Exclusion(frozenset({2})), window)
        assert rows.ranges() == [(0, 1), (2, 3)]

    def test_unknown_total_nothing_loaded(self):
        rows = project_rows(SELECT_ALL, LoadedWindow.pending())
        assert rows.length == 0


class TestProjectionFollowsWindow:
    def test_resort_moves_selection(self, five_window):
        state = Inclusion(frozenset({10}))
        resorted = LoadedWindow.from_records(
            list(reversed(five_window.records)), total=5,
        )
        assert project_rows(state, five_window).to_list() == [0]
        assert project_rows(state, resorted).to_list() == [4]

    def test_refilter_total_change(self, five_window):
        state = Exclusion(frozenset({14}))
        refiltered = five_window.with_total(3)
        assert project_rows(state, refiltered).ranges() == [(0, 3)]
        assert state.ids == frozenset({14})
