"""
ILP cross-check solver for nonogram clue sets.

This module provides an independent integer-programming solver that:
  - Takes constraints from build_clue_constraints
  - Creates binary variables v[i] in {0,1} (cells first, then block starts)
  - Solves using PuLP's CBC solver
  - Returns an (N, N) numpy grid

Uniqueness is decided by re-solving with a no-good cut that excludes each
solution found, up to max_solutions. The backtracking solver remains the
reference; this one exists so verification tooling can confirm its answers
with an unrelated method.
"""

from typing import List, Tuple

import numpy as np
import pulp

from nonogram.core.grid_types import Grid
from nonogram.core.clues import ClueSet
from nonogram.constraints.builder import ConstraintBuilder, build_clue_constraints
from nonogram.solver.backtracking import SolveResult


class InfeasibleModelError(Exception):
    """Raised when the ILP model is infeasible or not optimal."""
    pass


def _build_problem(
    builder: ConstraintBuilder,
    objective: str = "min_sum",
) -> Tuple[pulp.LpProblem, List[pulp.LpVariable]]:
    prob = pulp.LpProblem("nonogram_ilp", pulp.LpMinimize)

    v = [
        pulp.LpVariable(f"v_{i}", lowBound=0, upBound=1, cat=pulp.LpBinary)
        for i in range(builder.num_vars)
    ]

    for lc in builder.constraints:
        expr = pulp.lpSum(coeff * v[idx] for idx, coeff in zip(lc.indices, lc.coeffs))
        if lc.sense == "==":
            prob += (expr == lc.rhs)
        elif lc.sense == "<=":
            prob += (expr <= lc.rhs)
        elif lc.sense == ">=":
            prob += (expr >= lc.rhs)
        else:
            raise ValueError(f"Unknown constraint sense: {lc.sense}")

    if objective == "min_sum":
        # Minimize the number of filled cells (any solution is optimal for a unique puzzle)
        prob += pulp.lpSum(v[: builder.num_cells])
    elif objective == "none":
        prob += 0
    else:
        raise ValueError(f"Unknown objective: {objective}")

    return prob, v


def _solve_once(prob: pulp.LpProblem, v: List[pulp.LpVariable], n: int) -> Grid:
    status = prob.solve(pulp.PULP_CBC_CMD(msg=False))

    if pulp.LpStatus[status] != "Optimal":
        raise InfeasibleModelError(
            f"Solver status: {pulp.LpStatus[status]}. "
            f"Clue set may be contradictory."
        )

    grid = np.zeros((n, n), dtype=int)
    for idx in range(n * n):
        val = pulp.value(v[idx])
        # Guard against None or float noise
        grid[idx // n, idx % n] = 1 if val is not None and val > 0.5 else 0
    return grid


def _exclude_solution(prob: pulp.LpProblem, v: List[pulp.LpVariable], grid: Grid) -> None:
    """Add the no-good cut: at least one cell must differ from grid."""
    flat = grid.flatten()
    ones = int(flat.sum())
    prob += (
        pulp.lpSum(v[i] for i in range(flat.size) if flat[i] == 0)
        - pulp.lpSum(v[i] for i in range(flat.size) if flat[i] == 1)
        >= 1 - ones
    )


def solve_clues_ilp(clue_set: ClueSet, objective: str = "min_sum") -> Grid:
    """
    Find one grid satisfying the clue set.

    Args:
        clue_set: Square clue set
        objective: "min_sum" (fewest filled cells) or "none" (feasibility only)

    Returns:
        (N, N) numpy grid of 0/1

    Raises:
        InfeasibleModelError: If no grid satisfies the clues
        InvalidClueSetError: If the clue set is not square

    Example:
        >>> grid = solve_clues_ilp(ClueSet([[1], [1]], [[2], [0]]))
        >>> grid.tolist()
        [[1, 0], [1, 0]]
    """
    builder = build_clue_constraints(clue_set)
    if builder.infeasible:
        raise InfeasibleModelError("; ".join(builder.notes))

    prob, v = _build_problem(builder, objective)
    return _solve_once(prob, v, clue_set.size)


def enumerate_solutions_ilp(clue_set: ClueSet, max_solutions: int = 2) -> SolveResult:
    """
    Enumerate up to max_solutions distinct grids satisfying the clue set.

    Each found grid is excluded with a no-good cut before re-solving.
    The order of solutions is whatever CBC returns, so only the set of
    solutions (and its size) is comparable with the backtracking solver.
    nodes_visited counts ILP solves.

    Returns:
        SolveResult (never cancelled)

    Raises:
        ValueError: If max_solutions < 1
    """
    if max_solutions < 1:
        raise ValueError(f"max_solutions must be >= 1, got {max_solutions}")

    result = SolveResult()
    builder = build_clue_constraints(clue_set)
    if builder.infeasible:
        return result

    prob, v = _build_problem(builder, objective="none")

    while len(result.solutions) < max_solutions:
        result.nodes_visited += 1
        try:
            grid = _solve_once(prob, v, clue_set.size)
        except InfeasibleModelError:
            break
        result.solutions.append(grid)
        _exclude_solution(prob, v, grid)

    return result
