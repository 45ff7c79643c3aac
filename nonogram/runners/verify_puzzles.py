"""
Puzzle verification sweep.

This script loops over the puzzle records of a catalog directory, validates
each record, and checks with the bounded backtracking solver that the clues
derived from the stored solution have exactly one solution. Optionally the
answer is cross-checked with the ILP solver.

Usage:
    # Verify every puzzle in the default catalog
    python -m nonogram.runners.verify_puzzles

    # Verify the first 5 puzzles and cross-check with the ILP solver
    python -m nonogram.runners.verify_puzzles --max-puzzles 5 --cross-check

    # Custom paths
    python -m nonogram.runners.verify_puzzles \
        --catalog-dir catalog/puzzles \
        --failure-log logs/verify_failures.jsonl

Output:
    - Appends failure diagnostics to the failure log (JSONL)
    - Logs a summary
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import numpy as np

from nonogram.catalog.types import Puzzle
from nonogram.catalog.store import (
    ALLOWED_SIZES,
    DEFAULT_CATALOG_DIR,
    PuzzleValidationError,
    list_puzzle_paths,
    load_puzzle,
)
from nonogram.solver.backtracking import solve_clue_set
from nonogram.solver.lp_solver import enumerate_solutions_ilp
from nonogram.runners.results import VerifyDiagnostics, compute_grid_mismatches


# Logger for this module
logger = logging.getLogger(__name__)


def verify_puzzle(
    puzzle: Puzzle,
    puzzle_id: str = "",
    cross_check: bool = False,
    should_stop: Optional[Callable[[], bool]] = None,
) -> VerifyDiagnostics:
    """
    Verify that a puzzle is well-posed.

    Args:
        puzzle: Puzzle to verify
        puzzle_id: Identifier used in diagnostics
        cross_check: If True, also enumerate solutions with the ILP solver
                     and require the same count (and grid, when unique)
        should_stop: Optional cancellation hook for the backtracking solver

    Returns:
        VerifyDiagnostics with status "ok", "ambiguous", "unsolvable",
        "cross_check_failed" or "error" (cancelled search)
    """
    clue_set = puzzle.clues()
    result = solve_clue_set(clue_set, max_solutions=2, should_stop=should_stop)

    diag = VerifyDiagnostics(
        puzzle_id=puzzle_id,
        status="ok",
        size=puzzle.size,
        num_solutions=len(result.solutions),
        nodes_visited=result.nodes_visited,
    )

    if result.cancelled:
        diag.status = "error"
        diag.error_message = "Verification cancelled"
        return diag

    if not result.solvable:
        diag.status = "unsolvable"
        return diag

    if not result.unique:
        diag.status = "ambiguous"
        return diag

    diag.solution_mismatches = compute_grid_mismatches(puzzle.solution, result.solutions[0])
    if diag.solution_mismatches:
        # A derived clue set is always satisfied by its own solution
        diag.status = "unsolvable"
        return diag

    if cross_check:
        ilp = enumerate_solutions_ilp(clue_set, max_solutions=2)
        if len(ilp.solutions) != len(result.solutions) or not np.array_equal(
            ilp.solutions[0], result.solutions[0]
        ):
            diag.status = "cross_check_failed"
            diag.error_message = (
                f"ILP found {len(ilp.solutions)} solution(s), "
                f"backtracking found {len(result.solutions)}"
            )

    return diag


def sweep_catalog(
    catalog_dir: Path,
    failure_log_path: Path,
    cross_check: bool = False,
    max_puzzles: Optional[int] = None,
    allowed_sizes: Optional[Iterable[int]] = ALLOWED_SIZES,
) -> List[VerifyDiagnostics]:
    """
    Verify every puzzle file in a catalog directory and log failures.

    Args:
        catalog_dir: Directory containing puzzle JSON files
        failure_log_path: JSONL file where failure records are appended
        cross_check: Forwarded to verify_puzzle
        max_puzzles: If not None, limit to the first max_puzzles files
        allowed_sizes: Sizes accepted when loading records (None = any)

    Returns:
        One VerifyDiagnostics per processed file, in file order
    """
    # 1. Collect puzzle files
    logger.info("Loading puzzle files from %s", catalog_dir)
    paths = list_puzzle_paths(catalog_dir)
    logger.info("Found %d puzzle files", len(paths))

    if max_puzzles is not None:
        paths = paths[:max_puzzles]
        logger.info("Limiting to first %d puzzles", max_puzzles)

    # 2. Open failure log for appending (JSONL format)
    failure_log_path.parent.mkdir(parents=True, exist_ok=True)
    all_diagnostics: List[VerifyDiagnostics] = []

    with failure_log_path.open("a", encoding="utf-8") as failure_log_file:
        for path in paths:
            puzzle_id = path.stem
            logger.info("Verifying puzzle_id=%s", puzzle_id)

            try:
                puzzle = load_puzzle(path, allowed_sizes=allowed_sizes)
                diagnostics = verify_puzzle(puzzle, puzzle_id=puzzle_id, cross_check=cross_check)
            except PuzzleValidationError as e:
                logger.warning("  ✗ Invalid record puzzle_id=%s: %s", puzzle_id, e)
                diagnostics = VerifyDiagnostics(
                    puzzle_id=puzzle_id, status="invalid", error_message=str(e)
                )
            except Exception as e:
                logger.exception("Error while verifying puzzle_id=%s: %s", puzzle_id, e)
                diagnostics = VerifyDiagnostics(
                    puzzle_id=puzzle_id, status="error", error_message=str(e)
                )

            all_diagnostics.append(diagnostics)

            if diagnostics.status == "ok":
                logger.info("  ✓ OK for puzzle_id=%s (%d nodes)", puzzle_id, diagnostics.nodes_visited)
                continue

            if diagnostics.status not in ("invalid", "error"):
                logger.warning(
                    "  ✗ Failure for puzzle_id=%s: status=%s, solutions=%d",
                    puzzle_id,
                    diagnostics.status,
                    diagnostics.num_solutions,
                )

            failure_log_file.write(json.dumps(diagnostics.to_record()) + "\n")
            failure_log_file.flush()

    # 3. Summary
    counts = Counter(d.status for d in all_diagnostics)
    logger.info("")
    logger.info("=" * 70)
    logger.info("VERIFY SUMMARY")
    logger.info("=" * 70)
    logger.info("Total puzzles: %d", len(all_diagnostics))
    for status in ("ok", "ambiguous", "unsolvable", "invalid", "cross_check_failed", "error"):
        logger.info("  %s: %d", status, counts.get(status, 0))
    logger.info("=" * 70)

    return all_diagnostics


def main():
    """CLI entrypoint for the verification sweep."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Verify that catalog puzzles have a unique solution."
    )
    parser.add_argument(
        "--catalog-dir",
        type=Path,
        default=DEFAULT_CATALOG_DIR,
        help="Directory containing puzzle JSON files.",
    )
    parser.add_argument(
        "--failure-log",
        type=Path,
        default=Path("logs/verify_failures.jsonl"),
        help="Path to JSONL file where failure diagnostics will be logged.",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Also enumerate solutions with the ILP solver and compare.",
    )
    parser.add_argument(
        "--max-puzzles",
        type=int,
        default=None,
        help="Optional limit on number of puzzles to verify (for quick tests).",
    )
    parser.add_argument(
        "--any-size",
        action="store_true",
        help="Accept puzzle records of any size, not just 10 or 15.",
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    diagnostics = sweep_catalog(
        catalog_dir=args.catalog_dir,
        failure_log_path=args.failure_log,
        cross_check=args.cross_check,
        max_puzzles=args.max_puzzles,
        allowed_sizes=None if args.any_size else ALLOWED_SIZES,
    )

    if any(d.status != "ok" for d in diagnostics):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
