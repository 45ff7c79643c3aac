"""
Result and diagnostics structures for puzzle verification and play checks.

Key components:
  - VerifyDiagnostics: Complete verification record for one puzzle
  - normalize_player_grid: Player grid -> 0/1 grid (MARKED reads as EMPTY)
  - line_satisfaction: Per-row / per-column clue satisfaction of a player grid
  - compute_grid_mismatches: Per-cell diff between solution and player grid
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

import numpy as np

from nonogram.core.grid_types import Grid, FILLED, EMPTY
from nonogram.core.clues import ClueSet, line_clue, clues_match


VerifyStatus = Literal["ok", "ambiguous", "unsolvable", "invalid", "cross_check_failed", "error"]


@dataclass
class VerifyDiagnostics:
    """
    Diagnostics for a single puzzle verification.

    Attributes:
        puzzle_id: File stem or caller-chosen identifier
        status: Verification outcome - one of:
            - "ok": clues have exactly one solution and it is the stored one
            - "ambiguous": clues admit more than one solution
            - "unsolvable": no grid satisfies the clues (or the stored
              solution is not among the solutions)
            - "invalid": the record failed validation
            - "cross_check_failed": the ILP solver disagrees with backtracking
            - "error": unexpected error during verification
        size: Grid size N (0 if unknown)
        num_solutions: Solutions found within the bound
        nodes_visited: Backtracking positions entered
        solution_mismatches: Cell diffs between the stored solution and the
            solver's first solution (only when they differ)
        error_message: Reason for "invalid" / "error"
    """
    puzzle_id: str
    status: VerifyStatus
    size: int = 0
    num_solutions: int = 0
    nodes_visited: int = 0
    solution_mismatches: List[Dict] = field(default_factory=list)
    error_message: Optional[str] = None

    def to_record(self) -> Dict:
        return {
            "puzzle_id": self.puzzle_id,
            "status": self.status,
            "size": self.size,
            "num_solutions": self.num_solutions,
            "nodes_visited": self.nodes_visited,
            "solution_mismatches": self.solution_mismatches,
            "error_message": self.error_message,
        }


def normalize_player_grid(grid: Grid) -> Grid:
    """
    Map a player grid onto {EMPTY, FILLED}.

    Anything that is not FILLED (EMPTY, MARKED, UNKNOWN) becomes EMPTY.

    Example:
        >>> normalize_player_grid(np.array([[1, 2], [0, 1]])).tolist()
        [[1, 0], [0, 1]]
    """
    return np.where(np.asarray(grid) == FILLED, FILLED, EMPTY).astype(int)


def line_satisfaction(player_grid: Grid, clue_set: ClueSet) -> Tuple[List[bool], List[bool]]:
    """
    Which rows and columns of a player grid already match their clues.

    Returns:
        (rows_ok, cols_ok) lists of booleans, one per line
    """
    grid = normalize_player_grid(player_grid)
    rows_ok = [
        clues_match(line_clue(grid[r]), clue)
        for r, clue in enumerate(clue_set.row_clues)
    ]
    cols_ok = [
        clues_match(line_clue(grid[:, c]), clue)
        for c, clue in enumerate(clue_set.col_clues)
    ]
    return rows_ok, cols_ok


def compute_grid_mismatches(solution: Grid, player_grid: Grid) -> List[Dict]:
    """
    Compute per-cell mismatches between a solution and a player grid.

    The player grid is normalized first, so MARKED cells count as EMPTY.

    Returns:
        Either:
          - Empty list if the grids agree
          - List of {"r", "c", "expected", "actual"} records
          - Single {"shape_mismatch": True, ...} record if shapes differ

    Example:
        >>> compute_grid_mismatches(np.array([[1, 0]]), np.array([[1, 1]]))
        [{'r': 0, 'c': 1, 'expected': 0, 'actual': 1}]
    """
    player = normalize_player_grid(player_grid)

    if solution.shape != player.shape:
        return [{
            "shape_mismatch": True,
            "expected_shape": tuple(solution.shape),
            "actual_shape": tuple(player.shape),
        }]

    mismatch_coords = np.argwhere(solution != player)

    diff_cells = []
    for coord in mismatch_coords:
        r, c = int(coord[0]), int(coord[1])
        diff_cells.append({
            "r": r,
            "c": c,
            "expected": int(solution[r, c]),
            "actual": int(player[r, c]),
        })

    return diff_cells


def is_solved(solution: Grid, player_grid: Grid) -> bool:
    """True iff the player grid (MARKED as EMPTY) equals the solution."""
    return not compute_grid_mismatches(solution, player_grid)
