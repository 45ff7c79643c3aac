"""
Random puzzle generator with unique solution validation.

Each attempt samples a fill ratio, fills every cell independently with that
probability, derives the clues, and asks the backtracking solver for at most
two solutions. The first candidate whose clues have exactly one solution is
returned as a Puzzle; candidates with several solutions are discarded.

The attempt budget and fill range are tuned defaults that shape how puzzles
feel; they are kept as configuration rather than derived.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from nonogram.core.grid_types import Grid
from nonogram.core.clues import all_clues
from nonogram.catalog.types import Puzzle, today_string
from nonogram.solver.backtracking import solve_clue_set


logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """
    Tuning knobs of the accept/reject sampling loop.

    Attributes:
        max_attempts: Candidate grids tried before giving up
        fill_min: Lower bound of the per-attempt fill ratio
        fill_max: Upper bound of the per-attempt fill ratio
        max_solutions: Solver bound; 2 is the smallest that decides uniqueness
    """
    max_attempts: int = 50
    fill_min: float = 0.4
    fill_max: float = 0.7
    max_solutions: int = 2


def make_rng(rng=None):
    """Accept None, an int seed or an existing random generator."""
    if rng is None or isinstance(rng, (int, np.integer)):
        return np.random.default_rng(rng)
    return rng


def random_grid(size: int, fill_ratio: float, rng=None) -> Grid:
    """
    Sample a grid where each cell is FILLED with probability fill_ratio.

    Example:
        >>> random_grid(3, 1.0).tolist()
        [[1, 1, 1], [1, 1, 1], [1, 1, 1]]
    """
    rng = make_rng(rng)
    return (np.asarray(rng.random((size, size))) < fill_ratio).astype(int)


def generate(
    size: int,
    max_attempts: Optional[int] = None,
    rng=None,
    config: Optional[GeneratorConfig] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> Optional[Puzzle]:
    """
    Generate a random puzzle whose clues have a unique solution.

    Args:
        size: Grid size N
        max_attempts: Candidate grids to try (defaults to config.max_attempts, 50)
        rng: numpy Generator, int seed, or None for fresh entropy
        config: Sampling configuration (defaults to GeneratorConfig())
        should_stop: Optional cancellation hook forwarded to the solver;
                     once it fires, generation gives up and returns None

    Returns:
        Puzzle named "Random N×N" dated today, or None if every attempt
        produced an ambiguous puzzle. None is an expected outcome, not an error.

    Raises:
        ValueError: If size < 1 or max_attempts < 0
    """
    config = config or GeneratorConfig()
    attempts = config.max_attempts if max_attempts is None else max_attempts

    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    if attempts < 0:
        raise ValueError(f"max_attempts must be >= 0, got {attempts}")

    rng = make_rng(rng)

    for attempt in range(attempts):
        fill_ratio = float(rng.uniform(config.fill_min, config.fill_max))
        grid = random_grid(size, fill_ratio, rng)
        clue_set = all_clues(grid)

        result = solve_clue_set(clue_set, max_solutions=config.max_solutions, should_stop=should_stop)

        logger.debug(
            "attempt %d/%d: fill=%.2f solutions=%d nodes=%d",
            attempt + 1, attempts, fill_ratio, len(result.solutions), result.nodes_visited,
        )

        if result.cancelled:
            logger.info("Generation of %dx%d puzzle cancelled after %d attempts", size, size, attempt + 1)
            return None

        if result.unique:
            logger.info("Generated unique %dx%d puzzle on attempt %d", size, size, attempt + 1)
            return Puzzle(
                size=size,
                solution=grid,
                name=f"Random {size}×{size}",
                created=today_string(),
            )

    logger.info("No unique %dx%d puzzle found in %d attempts", size, size, attempts)
    return None
