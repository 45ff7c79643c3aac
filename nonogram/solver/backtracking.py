"""
Bounded backtracking solver for nonogram clue sets.

The search visits cells in row-major order (pos = r * N + c), tries FILLED
then EMPTY for each cell, and prunes a branch as soon as the row or column
of the cell just assigned can no longer match its clue:

  - complete line: its actual clue must equal the expected clue exactly
  - incomplete line: the runs of known FILLED cells must be no more numerous
    than the clue entries, and each run must not exceed the clue entry with
    the same index (UNKNOWN cells neither extend nor break a run)

The partial test deliberately ignores run order and remaining capacity, so
some dead branches survive until their line completes. A full re-check of
every row and column runs at each leaf, which keeps the result exact.

Enumeration stops as soon as max_solutions grids are collected. With
max_solutions=2 the caller learns "exactly one" vs "more than one" without
enumerating the full solution set.

No state survives between calls: each solve() owns its working grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import numpy as np

from nonogram.core.grid_types import Grid, UNKNOWN, EMPTY, FILLED
from nonogram.core.clues import ClueSet, InvalidClueSetError, line_clue, clues_match
from nonogram.constraints.indexing import index_to_cell


logger = logging.getLogger(__name__)

# Working grid: list of rows, each a list of UNKNOWN / EMPTY / FILLED
WorkGrid = List[List[int]]


@dataclass
class SolveResult:
    """
    Outcome of one solver invocation.

    Attributes:
        solutions: Grids satisfying the clue set, in search order
                   (at most max_solutions of them)
        nodes_visited: Number of search positions entered
        cancelled: True if a should_stop hook interrupted the search
    """
    solutions: List[Grid] = field(default_factory=list)
    nodes_visited: int = 0
    cancelled: bool = False

    @property
    def unique(self) -> bool:
        """Exactly one solution found within the bound."""
        return len(self.solutions) == 1

    @property
    def solvable(self) -> bool:
        """At least one solution found."""
        return len(self.solutions) > 0


def can_match_clue(line: Sequence[int], clue: Sequence[int]) -> bool:
    """
    Weak feasibility test for a partially assigned line.

    Collects the runs of known FILLED cells. An EMPTY cell closes a run;
    an UNKNOWN cell is skipped without closing or extending it.

    Returns:
        False if there are more runs than clue entries, or a run is longer
        than the clue entry at the same index; True otherwise

    Example:
        >>> can_match_clue([1, 1, -1, -1], [2, 1])
        True
        >>> can_match_clue([1, 1, 1, -1], [2, 1])
        False
    """
    runs: List[int] = []
    in_run = False

    for value in line:
        if value == FILLED:
            if not in_run:
                runs.append(0)
                in_run = True
            runs[-1] += 1
        elif value == EMPTY:
            in_run = False

    if len(runs) > len(clue):
        return False

    for run, expected in zip(runs, clue):
        if run > expected:
            return False

    return True


def _column(grid: WorkGrid, c: int) -> List[int]:
    return [row[c] for row in grid]


def _line_ok(line: Sequence[int], clue: Sequence[int]) -> bool:
    if UNKNOWN not in line:
        return clues_match(line_clue(line), clue)
    return can_match_clue(line, clue)


def is_valid_partial(
    grid: WorkGrid,
    row_clues: Sequence[Sequence[int]],
    col_clues: Sequence[Sequence[int]],
    r: int,
    c: int,
) -> bool:
    """Check the row and column through (r, c) can still match their clues."""
    if not _line_ok(grid[r], row_clues[r]):
        return False
    return _line_ok(_column(grid, c), col_clues[c])


def is_valid_solution(
    grid: WorkGrid,
    row_clues: Sequence[Sequence[int]],
    col_clues: Sequence[Sequence[int]],
) -> bool:
    """Exact check of every row and column of a fully assigned grid."""
    size = len(grid)
    for r in range(size):
        if not clues_match(line_clue(grid[r]), row_clues[r]):
            return False
    for c in range(size):
        if not clues_match(line_clue(_column(grid, c)), col_clues[c]):
            return False
    return True


def solve(
    row_clues: Sequence[Sequence[int]],
    col_clues: Sequence[Sequence[int]],
    max_solutions: int = 2,
    should_stop: Optional[Callable[[], bool]] = None,
) -> SolveResult:
    """
    Enumerate up to max_solutions grids satisfying the given clues.

    Args:
        row_clues: N clues, one per row
        col_clues: N clues, one per column
        max_solutions: Stop as soon as this many solutions are found (>= 1).
                       Use 2 to decide uniqueness.
        should_stop: Optional zero-argument callable checked once per search
                     position; returning True aborts the search and marks the
                     result as cancelled.

    Returns:
        SolveResult with the solutions found (numpy grids of 0/1) and
        unique / solvable flags. An unsolvable clue set is not an error:
        it yields an empty solutions list.

    Raises:
        InvalidClueSetError: If the clue set is empty or not square
        ValueError: If max_solutions < 1

    Example:
        >>> result = solve([[1], [1]], [[2], [0]])
        >>> result.unique
        True
        >>> result.solutions[0].tolist()
        [[1, 0], [1, 0]]
    """
    size = len(row_clues)
    if len(col_clues) != size:
        raise InvalidClueSetError(
            f"Grid must be square: got {size} row clues and {len(col_clues)} column clues"
        )
    if size == 0:
        raise InvalidClueSetError("Clue set is empty")
    if max_solutions < 1:
        raise ValueError(f"max_solutions must be >= 1, got {max_solutions}")

    rows = [list(clue) for clue in row_clues]
    cols = [list(clue) for clue in col_clues]
    grid: WorkGrid = [[UNKNOWN] * size for _ in range(size)]
    total = size * size
    result = SolveResult()

    def backtrack(pos: int) -> bool:
        # False propagates "stop" up through every ancestor frame
        if len(result.solutions) >= max_solutions:
            return False
        if should_stop is not None and should_stop():
            result.cancelled = True
            return False

        result.nodes_visited += 1

        if pos >= total:
            if is_valid_solution(grid, rows, cols):
                result.solutions.append(np.array(grid, dtype=int))
            return len(result.solutions) < max_solutions

        r, c = index_to_cell(pos, size)

        for value in (FILLED, EMPTY):
            grid[r][c] = value
            if is_valid_partial(grid, rows, cols, r, c):
                if not backtrack(pos + 1):
                    grid[r][c] = UNKNOWN
                    return False

        grid[r][c] = UNKNOWN
        return True

    backtrack(0)

    logger.debug(
        "solve: size=%d max_solutions=%d found=%d nodes=%d cancelled=%s",
        size, max_solutions, len(result.solutions), result.nodes_visited, result.cancelled,
    )

    return result


def solve_clue_set(
    clue_set: ClueSet,
    max_solutions: int = 2,
    should_stop: Optional[Callable[[], bool]] = None,
) -> SolveResult:
    """Convenience wrapper around solve() for a ClueSet."""
    return solve(clue_set.row_clues, clue_set.col_clues, max_solutions, should_stop)
