"""
Core grid types and utilities for the nonogram toolkit.

This module defines the fundamental Grid representation and the cell states
shared by the clue calculator, the solver and the generator.

Grid: always shape (N, N), dtype=int
Cells: indexed as (row, col) tuples or as flat row-major indices in [0, N*N-1]

Cell states:
  UNKNOWN (-1): not yet assigned (solver working state only)
  EMPTY    (0): blank cell
  FILLED   (1): filled cell
  MARKED   (2): player annotation "known empty"; compared as EMPTY
"""

import numpy as np
from typing import TypeAlias, Tuple


Grid: TypeAlias = np.ndarray  # shape: (N, N), dtype: int
Cell: TypeAlias = Tuple[int, int]  # (row, col)

UNKNOWN = -1
EMPTY = 0
FILLED = 1
MARKED = 2


def as_grid(data) -> Grid:
    """
    Convert nested lists (or an existing array) into a 2D int Grid.

    Args:
        data: list of lists of ints, or a 2D numpy array

    Returns:
        A new numpy array with dtype=int

    Raises:
        ValueError: If the data is not 2-dimensional
    """
    grid = np.array(data, dtype=int)
    if grid.ndim != 2:
        raise ValueError(f"Grid must be 2D, got {grid.ndim}D")
    return grid


def print_grid(grid: Grid) -> None:
    """
    Print a small ASCII representation of the grid for debugging.

    FILLED prints as '#', EMPTY as '.', MARKED as 'x' and UNKNOWN as '?'.

    Args:
        grid: Grid to print (must be 2D numpy array)

    Raises:
        AssertionError: If grid is not 2-dimensional

    Example:
        >>> print_grid(np.array([[1, 0], [0, 1]]))
        # .
        . #
    """
    assert grid.ndim == 2, f"Grid must be 2D, got {grid.ndim}D"

    symbols = {FILLED: "#", EMPTY: ".", MARKED: "x", UNKNOWN: "?"}
    for row in grid:
        print(' '.join(symbols.get(int(val), str(int(val))) for val in row))


if __name__ == "__main__":
    grid = as_grid([[1, 0, 1], [0, 2, 0], [1, 1, 1]])
    print("Grid:")
    print_grid(grid)
    assert grid.shape == (3, 3)
    try:
        as_grid([1, 0, 1])
        raise AssertionError("Expected ValueError for 1D input")
    except ValueError:
        pass
    print("grid_types self-test passed.")
