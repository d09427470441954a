"""Tests for CompactSelection: the interval set behind physical selections."""

import numpy as np
import pytest

from windowed_selection.core.compact_selection import CompactSelection, GridSelection


class TestCompactSelectionCreation:
    def test_empty(self):
        sel = CompactSelection.empty()
        assert sel.length == 0
        assert not sel
        assert sel.first() is None
        assert sel.last() is None

    def test_from_range(self):
        sel = CompactSelection.from_range(2, 5)
        assert sel.ranges() == [(2, 5)]
        assert sel.length == 3

    def test_from_empty_range(self):
        assert CompactSelection.from_range(4, 4) == CompactSelection.empty()

    def test_from_indices_groups_runs(self):
        sel = CompactSelection.from_indices([7, 1, 2, 3, 9, 8, 2])
        assert sel.ranges() == [(1, 4), (7, 10)]

    def test_from_indices_empty(self):
        assert CompactSelection.from_indices([]).length == 0

    def test_mismatched_arrays_raise(self):
        with pytest.raises(ValueError, match="same length"):
            CompactSelection(np.array([0, 1]), np.array([1]))


class TestCompactSelectionAdd:
    def test_add_index(self):
        sel = CompactSelection.empty().add(3)
        assert sel.ranges() == [(3, 4)]

    def test_add_merges_adjacent(self):
        sel = CompactSelection.from_range(0, 3).add((3, 5))
        assert sel.ranges() == [(0, 5)]

    def test_add_bridges_runs(self):
        sel = CompactSelection.from_indices([0, 1, 5, 6]).add((2, 5))
        assert sel.ranges() == [(0, 7)]

    def test_add_disjoint_keeps_order(self):
        sel = CompactSelection.from_range(10, 12).add(2).add((20, 22))
        assert sel.ranges() == [(2, 3), (10, 12), (20, 22)]

    def test_add_is_immutable(self):
        sel = CompactSelection.empty()
        sel.add(1)
        assert sel.length == 0


class TestCompactSelectionRemove:
    def test_remove_point_splits_run(self):
        sel = CompactSelection.from_range(0, 5).remove(2)
        assert sel.ranges() == [(0, 2), (3, 5)]

    def test_remove_range_across_runs(self):
        sel = CompactSelection.from_indices([0, 1, 2, 5, 6, 7]).remove((1, 6))
        assert sel.ranges() == [(0, 1), (6, 8)]

    def test_remove_whole_run(self):
        sel = CompactSelection.from_indices([0, 4]).remove(4)
        assert sel.ranges() == [(0, 1)]

    def test_remove_missing_is_noop(self):
        sel = CompactSelection.from_range(0, 3)
        assert sel.remove(10) is sel

    def test_remove_indices(self):
        sel = CompactSelection.from_range(0, 10).remove_indices([9, 0, 4, 5])
        assert sel.ranges() == [(1, 4), (6, 9)]

    def test_select_all_minus_three_stays_small(self):
        sel = CompactSelection.from_range(0, 5_000_000).remove_indices([10, 20, 30])
        assert len(sel.ranges()) == 4
        assert sel.length == 4_999_997

    def test_remove_indices_across_runs(self):
        sel = CompactSelection.from_indices([0, 1, 2, 3, 10, 11, 12, 13])
        assert sel.remove_indices([2, 3, 4, 10]).ranges() == [(0, 2), (11, 14)]

    def test_remove_indices_everything(self):
        sel = CompactSelection.from_range(3, 6).remove_indices([5, 4, 3])
        assert not sel
        assert sel == CompactSelection.empty()

    def test_remove_indices_nothing(self):
        sel = CompactSelection.from_range(0, 4)
        assert sel.remove_indices([]) is sel
        assert CompactSelection.empty().remove_indices([1, 2]).ranges() == []

    def test_remove_many_scattered_indices(self):
        # Every other position removed: one run per survivor
        sel = CompactSelection.from_range(0, 400_000).remove_indices(
            range(0, 400_000, 2)
        )
        assert len(sel.starts) == 200_000
        assert sel.length == 200_000
        assert sel.ranges()[:2] == [(1, 2), (3, 4)]
        assert sel.last() == 399_999


class TestCompactSelectionQueries:
    def test_has_index(self):
        sel = CompactSelection.from_indices([1, 2, 7])
        assert sel.has_index(1)
        assert sel.has_index(7)
        assert not sel.has_index(0)
        assert not sel.has_index(3)

    def test_has_all(self):
        sel = CompactSelection.from_indices([1, 2, 3, 7])
        assert sel.has_all((1, 4))
        assert not sel.has_all((1, 5))
        assert sel.has_all((5, 5))

    def test_first_last(self):
        sel = CompactSelection.from_indices([4, 9, 10])
        assert sel.first() == 4
        assert sel.last() == 10

    def test_iteration(self):
        assert CompactSelection.from_indices([3, 1, 2, 8]).to_list() == [1, 2, 3, 8]

    def test_offset(self):
        assert CompactSelection.from_range(0, 2).offset(5).ranges() == [(5, 7)]

    def test_matches_python_set(self):
        rng = np.random.default_rng(42)
        sel = CompactSelection.empty()
        expected: set[int] = set()
        for _ in range(200):
            start = int(rng.integers(0, 60))
            end = start + int(rng.integers(0, 8))
            if rng.random() < 0.5:
                sel = sel.add((start, end))
                expected.update(range(start, end))
            else:
                sel = sel.remove((start, end))
                expected.difference_update(range(start, end))
        assert sel.to_list() == sorted(expected)
        assert sel == CompactSelection.from_indices(expected)


class TestGridSelection:
    def test_default_is_empty(self):
        grid = GridSelection()
        assert grid.rows.length == 0
        assert grid.columns.length == 0

    def test_to_dict(self):
        grid = GridSelection(rows=CompactSelection.from_indices([0, 1, 4]))
        assert grid.to_dict() == {"rows": [[0, 2], [4, 5]], "columns": []}
