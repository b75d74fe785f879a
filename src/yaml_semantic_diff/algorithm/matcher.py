"""Greedy bipartite matching over a similarity matrix.

Used for rename detection, where the result must be reproducible and easy
to explain rather than globally optimal: pairs are taken in order of
score descending, then earliest row, then earliest column, skipping any
pair whose row or column is already taken.

Cells holding ``-np.inf`` (or anything below ``threshold``) are never
assigned.
"""

from __future__ import annotations

import numpy as np

__all__ = ["greedy_match"]


def greedy_match(
    score_matrix: np.ndarray,
    threshold: float = 0.0,
) -> list[tuple[int, int, float]]:
    """Assign rows to columns greedily by descending score.

    Args:
        score_matrix: 2-D matrix of shape ``(m, n)``.  ``-np.inf`` marks
            forbidden pairs.
        threshold: Minimum score a pair needs to be assigned.

    Returns:
        List of ``(row, col, score)`` triples in assignment order.  Empty
        when no cell qualifies.
    """
    scores = np.asarray(score_matrix, dtype=float)
    if scores.size == 0:
        return []

    eligible = np.isfinite(scores) & (scores >= threshold)
    rows, cols = np.nonzero(eligible)
    if rows.size == 0:
        return []

    values = scores[rows, cols]
    # lexsort sorts by the last key first: score desc, then row asc, then col asc
    order = np.lexsort((cols, rows, -values))

    used_rows: set[int] = set()
    used_cols: set[int] = set()
    assigned: list[tuple[int, int, float]] = []
    for k in order:
        row, col = int(rows[k]), int(cols[k])
        if row in used_rows or col in used_cols:
            continue
        used_rows.add(row)
        used_cols.add(col)
        assigned.append((row, col, float(values[k])))
    return assigned
