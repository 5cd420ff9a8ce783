"""Tests for assign_one_to_one (scipy linear_sum_assignment wrapper)."""

import numpy as np

from feed_structure.mapping.matcher import assign_one_to_one

INF = np.inf


class TestAssignOneToOne:
    def test_empty_matrix(self) -> None:
        assert assign_one_to_one(np.empty((0, 0))) == []
        assert assign_one_to_one(np.empty((3, 0))) == []

    def test_all_forbidden(self) -> None:
        assert assign_one_to_one(np.full((2, 2), INF)) == []

    def test_diagonal(self) -> None:
        assert assign_one_to_one(np.array([[1.0, 2.0], [2.0, 1.0]])) == [(0, 0), (1, 1)]

    def test_forbidden_pairs_are_dropped(self) -> None:
        cost = np.array([[1.0, INF], [INF, INF]])
        assert assign_one_to_one(cost) == [(0, 0)]

    def test_guard_never_beats_feasible_pair(self) -> None:
        cost = np.array([[1.0, INF], [1.0, 1.0]])
        assert assign_one_to_one(cost) == [(0, 0), (1, 1)]

    def test_more_rows_than_columns(self) -> None:
        cost = np.array([[5.0, 1.0], [1.0, 5.0], [3.0, 3.0]])
        assert assign_one_to_one(cost) == [(0, 1), (1, 0)]

    def test_columns_are_unique(self) -> None:
        cost = np.array([[1.0, INF, INF], [1.0, INF, INF], [1.0, 2.0, INF]])
        pairs = assign_one_to_one(cost)
        columns = [c for _, c in pairs]
        assert len(columns) == len(set(columns))
        assert pairs == [(0, 0), (2, 1)] or pairs == [(1, 0), (2, 1)]

    def test_accepts_nested_lists(self) -> None:
        assert assign_one_to_one([[0.0]]) == [(0, 0)]  # type: ignore[arg-type]
