"""
Indexing helpers shared by the backtracking search and the ILP formulation.

This module provides canonical mappings between:
  - Cell coordinates (r, c) <-> flat cell index (0..N*N-1)
  - A block of a line clue <-> the range of cells where it may start

Conventions:
  - Grid shape: (N, N)
  - Cell ordering: row-major, idx = r * N + c
  - All indices are 0-based

This is pure indexing math with no dependencies on constraints or solver.
"""

from typing import Sequence, Tuple


def cell_index(r: int, c: int, n: int) -> int:
    """
    Convert row/col coordinates to a flat cell index (0 .. N*N-1).

    Example:
        >>> cell_index(1, 2, 4)
        6
    """
    if r < 0 or c < 0:
        raise ValueError(f"Cell coordinates must be non-negative, got r={r}, c={c}")
    return r * n + c


def index_to_cell(idx: int, n: int) -> Tuple[int, int]:
    """
    Inverse of cell_index: given flat idx and grid size, return (row, col).

    Example:
        >>> index_to_cell(6, 4)
        (1, 2)
    """
    if idx < 0:
        raise ValueError(f"Index must be non-negative, got idx={idx}")
    return (idx // n, idx % n)


def line_cells(kind: str, i: int, n: int) -> list:
    """
    Flat indices of the cells of row i (kind="row") or column i (kind="col").

    Example:
        >>> line_cells("col", 1, 3)
        [1, 4, 7]
    """
    if kind == "row":
        return [cell_index(i, c, n) for c in range(n)]
    if kind == "col":
        return [cell_index(r, i, n) for r in range(n)]
    raise ValueError(f"Unknown line kind: {kind}")


def block_start_range(clue: Sequence[int], k: int, n: int) -> range:
    """
    Positions where block k of a clue may start in a line of length n.

    Block k must leave room for every earlier block (plus one separator each)
    before it and every later block after it.

    Args:
        clue: Run lengths of the line (not the [0] sentinel)
        k: Block index, 0 <= k < len(clue)
        n: Line length

    Returns:
        range of valid start positions (empty if the clue does not fit)

    Example:
        >>> list(block_start_range([2, 1], 0, 5))
        [0, 1]
        >>> list(block_start_range([2, 1], 1, 5))
        [3, 4]
    """
    earliest = sum(clue[:k]) + k
    after = clue[k + 1:]
    latest = n - clue[k] - (sum(after) + len(after))
    return range(earliest, latest + 1)
