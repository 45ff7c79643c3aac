"""
Catalog types for nonogram puzzles.

A Puzzle stores only its solution grid. Clues are always derived from the
solution (see Puzzle.clues), never stored alongside it.
"""

from dataclasses import dataclass
from datetime import date

from nonogram.core.grid_types import Grid
from nonogram.core.clues import ClueSet, all_clues


def today_string() -> str:
    """Current date as "YYYY-MM-DD"."""
    return date.today().isoformat()


@dataclass
class Puzzle:
    """
    A nonogram puzzle.

    Attributes:
        size: Grid size N (the solution is N x N)
        solution: (N, N) numpy grid of 0 (empty) / 1 (filled)
        name: Display name, e.g. "Random 10×10"
        created: Creation date as "YYYY-MM-DD"

    Example:
        >>> p = Puzzle(size=2, solution=np.array([[1, 0], [1, 1]]), name="tiny", created="2024-01-01")
        >>> p.clues().row_clues
        [[1], [2]]
    """
    size: int
    solution: Grid
    name: str
    created: str

    def clues(self) -> ClueSet:
        return all_clues(self.solution)
