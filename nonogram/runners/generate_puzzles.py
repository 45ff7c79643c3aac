"""
Random puzzle catalog builder.

Generates uniquely solvable random puzzles and stores them as puzzle records
in the catalog directory.

Usage:
    # Five 10x10 puzzles into the default catalog
    python -m nonogram.runners.generate_puzzles --count 5 --size 10

    # Reproducible run
    python -m nonogram.runners.generate_puzzles --count 3 --size 15 --seed 7
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from nonogram.catalog.store import ALLOWED_SIZES, DEFAULT_CATALOG_DIR, save_puzzle
from nonogram.core.grid_types import print_grid
from nonogram.generator.random_puzzle import GeneratorConfig, generate, make_rng


logger = logging.getLogger(__name__)


def generate_catalog(
    count: int,
    size: int,
    catalog_dir: Path = DEFAULT_CATALOG_DIR,
    max_attempts: Optional[int] = None,
    seed: Optional[int] = None,
    config: Optional[GeneratorConfig] = None,
    show: bool = False,
) -> List[Path]:
    """
    Generate up to count puzzles and save each one to the catalog.

    A generation that exhausts its attempts is logged and skipped; the
    returned list may therefore be shorter than count.

    Returns:
        Paths of the written puzzle files
    """
    rng = make_rng(seed)
    written: List[Path] = []
    num_failed = 0

    for i in range(count):
        logger.info("Generating puzzle %d/%d (%dx%d)", i + 1, count, size, size)
        puzzle = generate(size, max_attempts=max_attempts, rng=rng, config=config)

        if puzzle is None:
            logger.warning("  ✗ No unique puzzle found, skipping")
            num_failed += 1
            continue

        path = save_puzzle(puzzle, catalog_dir)
        logger.info("  ✓ Saved %s", path)
        if show:
            print_grid(puzzle.solution)
        written.append(path)

    logger.info("Generated %d puzzles, %d attempts exhausted", len(written), num_failed)
    return written


def main():
    """CLI entrypoint for random catalog generation."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate uniquely solvable random nonograms."
    )
    parser.add_argument("--count", type=int, default=1, help="Number of puzzles to generate.")
    parser.add_argument(
        "--size",
        type=int,
        choices=ALLOWED_SIZES,
        default=10,
        help="Grid size.",
    )
    parser.add_argument(
        "--catalog-dir",
        type=Path,
        default=DEFAULT_CATALOG_DIR,
        help="Directory where puzzle JSON files are written.",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Candidate grids per puzzle (default 50).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print each accepted solution grid.",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    generate_catalog(
        count=args.count,
        size=args.size,
        catalog_dir=args.catalog_dir,
        max_attempts=args.max_attempts,
        seed=args.seed,
        show=args.show,
    )


if __name__ == "__main__":
    main()
