"""
Linear constraint builder for the integer-programming view of a clue set.

Variables (all binary):
  - x[idx] for every cell, idx = r * N + c (1 = FILLED)
  - s[line, k, j] for every block k of every line and every position j
    where that block may start (1 = block k starts at j)

Constraints have the form:
    sum_i coeffs[i] * v[indices[i]]  (sense)  rhs      with sense in {"==", "<=", ">="}

For each line with clue [b_0, ..., b_m]:
  - each block starts exactly once:         sum_j s[k, j] = 1
  - blocks keep their order and a gap:      sum_j j*s[k+1, j] - sum_j j*s[k, j] >= b_k + 1
  - each cell is covered by its blocks:     x[cell] - sum_{k, j <= p < j+b_k} s[k, j] = 0
A [0] line forces every cell to 0. Because blocks never overlap, the
coverage equality makes x exactly the line's filled cells.

No solver logic here; see nonogram.solver.lp_solver.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from nonogram.core.clues import ClueSet, InvalidClueSetError, line_fits
from nonogram.constraints.indexing import line_cells, block_start_range


@dataclass
class LinearConstraint:
    """
    A single linear constraint over the variable vector v.

    Attributes:
        indices: Indices into v
        coeffs: Coefficients (same length as indices)
        rhs: Right-hand side value
        sense: "==", "<=" or ">="

    Example:
        # v[5] - v[10] = 0
        LinearConstraint(indices=[5, 10], coeffs=[1.0, -1.0], rhs=0.0)
    """
    indices: List[int]
    coeffs: List[float]
    rhs: float
    sense: str = "=="


@dataclass
class ConstraintBuilder:
    """
    Collects linear constraints and allocates block-start variables.

    Attributes:
        num_cells: Number of cell variables (N*N); they occupy v[0 .. N*N-1]
        num_vars: Total number of variables allocated so far
        constraints: List of LinearConstraint objects
        block_vars: (line kind, line index, block index) -> [(start, var index), ...]
        infeasible: Set when a clue cannot be placed at all
        notes: Human-readable reasons for infeasibility
    """
    num_cells: int = 0
    num_vars: int = 0
    constraints: List[LinearConstraint] = field(default_factory=list)
    block_vars: Dict[Tuple[str, int, int], List[Tuple[int, int]]] = field(default_factory=dict)
    infeasible: bool = False
    notes: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.num_vars < self.num_cells:
            self.num_vars = self.num_cells

    def new_var(self) -> int:
        idx = self.num_vars
        self.num_vars += 1
        return idx

    def _add(self, indices: List[int], coeffs: List[float], rhs: float, sense: str) -> None:
        assert len(indices) == len(coeffs), \
            f"indices and coeffs must have same length, got {len(indices)} != {len(coeffs)}"
        self.constraints.append(
            LinearConstraint(indices=indices, coeffs=coeffs, rhs=rhs, sense=sense)
        )

    def add_eq(self, indices: List[int], coeffs: List[float], rhs: float) -> None:
        self._add(indices, coeffs, rhs, "==")

    def add_le(self, indices: List[int], coeffs: List[float], rhs: float) -> None:
        self._add(indices, coeffs, rhs, "<=")

    def add_ge(self, indices: List[int], coeffs: List[float], rhs: float) -> None:
        self._add(indices, coeffs, rhs, ">=")

    def fix_cell(self, idx: int, value: int) -> None:
        """Force cell variable idx to 0 or 1."""
        self.add_eq(indices=[idx], coeffs=[1.0], rhs=float(value))

    def mark_infeasible(self, reason: str) -> None:
        self.infeasible = True
        self.notes.append(reason)

    def add_line(self, kind: str, i: int, clue: Sequence[int], n: int) -> None:
        """
        Add the placement constraints of one row or column.

        Args:
            kind: "row" or "col"
            i: Line index
            clue: Expected clue of the line
            n: Grid size
        """
        cells = line_cells(kind, i, n)

        if list(clue) == [0]:
            for idx in cells:
                self.fix_cell(idx, 0)
            return

        if len(clue) == 0 or not line_fits(clue, n) or any(b <= 0 for b in clue):
            self.mark_infeasible(f"{kind} {i}: clue {list(clue)} cannot be placed in {n} cells")
            return

        # 1. Allocate start variables; each block starts exactly once
        for k in range(len(clue)):
            starts = [(j, self.new_var()) for j in block_start_range(clue, k, n)]
            self.block_vars[(kind, i, k)] = starts
            self.add_eq(
                indices=[v for _, v in starts],
                coeffs=[1.0] * len(starts),
                rhs=1.0,
            )

        # 2. Order and separation between consecutive blocks
        for k in range(len(clue) - 1):
            cur = self.block_vars[(kind, i, k)]
            nxt = self.block_vars[(kind, i, k + 1)]
            self.add_ge(
                indices=[v for _, v in nxt] + [v for _, v in cur],
                coeffs=[float(j) for j, _ in nxt] + [-float(j) for j, _ in cur],
                rhs=float(clue[k] + 1),
            )

        # 3. Cell coverage
        for p, idx in enumerate(cells):
            covering = [
                v
                for k, b in enumerate(clue)
                for j, v in self.block_vars[(kind, i, k)]
                if j <= p < j + b
            ]
            self.add_eq(
                indices=[idx] + covering,
                coeffs=[1.0] + [-1.0] * len(covering),
                rhs=0.0,
            )


def build_clue_constraints(clue_set: ClueSet) -> ConstraintBuilder:
    """
    Build the full constraint system of a clue set.

    Args:
        clue_set: Square clue set (row and column counts must match)

    Returns:
        ConstraintBuilder whose first N*N variables are the cells

    Raises:
        InvalidClueSetError: If the clue set is not square
    """
    n = clue_set.size
    if n == 0 or len(clue_set.col_clues) != n:
        raise InvalidClueSetError(
            f"Grid must be square and non-empty: got {n} row clues "
            f"and {len(clue_set.col_clues)} column clues"
        )

    builder = ConstraintBuilder(num_cells=n * n)
    for r, clue in enumerate(clue_set.row_clues):
        builder.add_line("row", r, clue, n)
    for c, clue in enumerate(clue_set.col_clues):
        builder.add_line("col", c, clue, n)
    return builder
