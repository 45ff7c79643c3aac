"""
Clue calculation for nonogram grids.

A clue is the left-to-right (top-to-bottom for columns) list of lengths of
maximal runs of FILLED cells in one line. A line with no filled cell has the
clue [0], never an empty list.

Every value other than FILLED ends a run, so EMPTY, MARKED and UNKNOWN cells
all read as "not filled" here. This is what lets the player surface compare
an in-progress grid (with MARKED annotations) against the expected clues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from nonogram.core.grid_types import Grid, FILLED


Clue = List[int]


class InvalidClueSetError(ValueError):
    """Raised when a clue set cannot describe a square grid."""
    pass


def line_clue(line: Sequence[int]) -> Clue:
    """
    Compute the run-length clue of a single row or column.

    Args:
        line: Sequence of cell states (list, tuple or 1D numpy array)

    Returns:
        List of run lengths, or [0] if the line has no FILLED cell

    Example:
        >>> line_clue([1, 1, 0, 1, 0, 0, 1, 1, 1, 0])
        [2, 1, 3]
        >>> line_clue([0, 0, 0, 0])
        [0]
    """
    clue: Clue = []
    count = 0

    for value in line:
        if value == FILLED:
            count += 1
        elif count > 0:
            clue.append(count)
            count = 0

    # Close a run that touches the end of the line
    if count > 0:
        clue.append(count)

    return clue if clue else [0]


def row_clues(grid: Grid) -> List[Clue]:
    """Clue of every row, in row order."""
    return [line_clue(row) for row in grid]


def col_clues(grid: Grid) -> List[Clue]:
    """Clue of every column, in column order."""
    return [line_clue(grid[:, c]) for c in range(grid.shape[1])]


def clues_match(actual: Sequence[int], expected: Sequence[int]) -> bool:
    """True iff both clues have the same entries in the same order."""
    if len(actual) != len(expected):
        return False
    return all(a == e for a, e in zip(actual, expected))


def line_fits(clue: Sequence[int], length: int) -> bool:
    """
    Check that a clue can be realised in a line of the given length.

    Runs need at least one empty cell between them, so a clue fits iff
    sum(clue) + len(clue) - 1 <= length. The [0] sentinel always fits.
    """
    if list(clue) == [0]:
        return True
    return sum(clue) + len(clue) - 1 <= length


@dataclass
class ClueSet:
    """
    Row and column clues of one puzzle.

    Clues are always derived from a solution grid (see all_clues) or supplied
    by a caller holding a bare clue set. The grid is square, so both sides
    have the same length N.

    Attributes:
        row_clues: N clues, one per row (top to bottom)
        col_clues: N clues, one per column (left to right)
    """
    row_clues: List[Clue] = field(default_factory=list)
    col_clues: List[Clue] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.row_clues)

    def validate(self) -> None:
        """
        Check the clue set describes a square N x N puzzle.

        Raises:
            InvalidClueSetError: On mismatched row/column counts, an empty
                clue set, an empty clue, non-positive run lengths, or a clue
                that does not fit in N cells
        """
        n_rows = len(self.row_clues)
        n_cols = len(self.col_clues)
        if n_rows != n_cols:
            raise InvalidClueSetError(
                f"Grid must be square: got {n_rows} row clues and {n_cols} column clues"
            )
        if n_rows == 0:
            raise InvalidClueSetError("Clue set is empty")

        for kind, clues in (("row", self.row_clues), ("column", self.col_clues)):
            for i, clue in enumerate(clues):
                if len(clue) == 0:
                    raise InvalidClueSetError(
                        f"{kind} {i}: clue is empty (use [0] for a blank line)"
                    )
                if list(clue) != [0] and any(v <= 0 for v in clue):
                    raise InvalidClueSetError(
                        f"{kind} {i}: run lengths must be positive, got {list(clue)}"
                    )
                if not line_fits(clue, n_rows):
                    raise InvalidClueSetError(
                        f"{kind} {i}: clue {list(clue)} does not fit in {n_rows} cells"
                    )


def all_clues(grid: Grid) -> ClueSet:
    """
    Derive the full clue set of a grid.

    Args:
        grid: 2D numpy array of cell states

    Returns:
        ClueSet with row and column clues

    Example:
        >>> cs = all_clues(np.eye(3, dtype=int))
        >>> cs.row_clues, cs.col_clues
        ([[1], [1], [1]], [[1], [1], [1]])
    """
    return ClueSet(row_clues=row_clues(grid), col_clues=col_clues(grid))
