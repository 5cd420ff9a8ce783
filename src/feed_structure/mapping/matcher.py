"""assign_one_to_one: optimal source-to-target assignment with forbidden cells.

Wraps scipy's ``linear_sum_assignment`` for auto-mapping.  Rows are source
fields, columns are target fields, and ``np.inf`` marks a pair that must
never be proposed (no keyword relates them).  The solver cannot take
infinite costs, so forbidden cells are replaced by a guard value larger
than any feasible total and the pairs that land on them are dropped.

Guard value formula: ``finite_max * 2.0 + 1.0``
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["assign_one_to_one"]


def assign_one_to_one(cost_matrix: np.ndarray) -> list[tuple[int, int]]:
    """Return ``(row, column)`` pairs of a minimum-cost one-to-one assignment.

    Args:
        cost_matrix: 2-D array of shape ``(sources, targets)``.  ``np.inf``
            marks forbidden pairs.

    Returns:
        Assigned pairs sorted by row, excluding forbidden pairs.  Empty when
        the matrix is empty or entirely forbidden.
    """
    cost = np.asarray(cost_matrix, dtype=float)
    if cost.size == 0:
        return []

    forbidden = np.isinf(cost)
    if forbidden.all():
        return []
    if forbidden.any():
        guard = float(cost[~forbidden].max()) * 2.0 + 1.0
        cost = np.where(forbidden, guard, cost)

    rows, cols = linear_sum_assignment(cost)
    return sorted(
        (int(r), int(c)) for r, c in zip(rows, cols, strict=True) if not forbidden[r, c]
    )
