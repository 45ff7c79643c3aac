"""
Puzzle record validation and catalog storage.

A puzzle record is the structured form of a Puzzle exchanged with other
tools:

    {
      "size": 10,                      # 10 or 15
      "solution": [[0, 1, ...], ...],  # N x N matrix of 0 (empty) / 1 (filled)
      "name": "Random 10×10",
      "created": "2024-05-01"          # YYYY-MM-DD
    }

Records are validated where they enter the toolkit (puzzle_from_record);
a bad record raises PuzzleValidationError with the reason and is never
silently coerced.

Storage structure:
    catalog/puzzles/{stem}.json
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from nonogram.catalog.types import Puzzle, today_string


# Sizes accepted in puzzle records
ALLOWED_SIZES = (10, 15)

# Default catalog directory
DEFAULT_CATALOG_DIR = Path("catalog/puzzles")


class PuzzleValidationError(ValueError):
    """Raised when a puzzle record is malformed."""
    pass


def puzzle_to_record(puzzle: Puzzle) -> Dict[str, Any]:
    """
    Serialize a Puzzle into a JSON-friendly record.

    Example:
        >>> rec = puzzle_to_record(Puzzle(2, np.eye(2, dtype=int), "t", "2024-01-01"))
        >>> rec["solution"]
        [[1, 0], [0, 1]]
    """
    return {
        "size": int(puzzle.size),
        "solution": [[int(v) for v in row] for row in puzzle.solution],
        "name": puzzle.name,
        "created": puzzle.created,
    }


def puzzle_from_record(
    data: Any,
    allowed_sizes: Optional[Iterable[int]] = ALLOWED_SIZES,
) -> Puzzle:
    """
    Validate a puzzle record and build a Puzzle from it.

    Args:
        data: Parsed JSON record
        allowed_sizes: Accepted grid sizes, or None to accept any positive size

    Returns:
        Puzzle with a numpy solution grid

    Raises:
        PuzzleValidationError: If the record is missing size/solution, the size
            is not allowed, the solution is not N x N, a cell is not 0/1, or
            the created date is not YYYY-MM-DD

    Notes:
        - Missing name defaults to "Puzzle NxN"
        - Missing created defaults to today
    """
    if not isinstance(data, dict):
        raise PuzzleValidationError(f"Puzzle record must be an object, got {type(data).__name__}")

    size = data.get("size")
    solution = data.get("solution")
    if not size or not solution:
        raise PuzzleValidationError("Invalid puzzle format: 'size' and 'solution' are required")

    if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
        raise PuzzleValidationError(f"Puzzle size must be a positive integer, got {size!r}")

    if allowed_sizes is not None:
        allowed = tuple(allowed_sizes)
        if size not in allowed:
            sizes_str = " or ".join(str(s) for s in allowed)
            raise PuzzleValidationError(f"Puzzle size must be {sizes_str}, got {size}")

    if not isinstance(solution, list) or any(not isinstance(row, list) for row in solution):
        raise PuzzleValidationError("Puzzle solution must be a list of rows")

    if len(solution) != size or any(len(row) != size for row in solution):
        row_lengths = sorted({len(row) for row in solution})
        raise PuzzleValidationError(
            f"Puzzle dimensions do not match specified size {size}: "
            f"{len(solution)} rows with lengths {row_lengths}"
        )

    for r, row in enumerate(solution):
        for c, value in enumerate(row):
            if isinstance(value, bool) or value not in (0, 1):
                raise PuzzleValidationError(
                    f"Solution cell ({r}, {c}) must be 0 or 1, got {value!r}"
                )

    name = data.get("name") or f"Puzzle {size}x{size}"
    created = data.get("created") or today_string()
    try:
        datetime.strptime(created, "%Y-%m-%d")
    except (TypeError, ValueError):
        raise PuzzleValidationError(f"Puzzle created date must be YYYY-MM-DD, got {created!r}")

    return Puzzle(
        size=size,
        solution=np.array(solution, dtype=int),
        name=str(name),
        created=created,
    )


def load_puzzle(
    path: Path,
    allowed_sizes: Optional[Iterable[int]] = ALLOWED_SIZES,
) -> Puzzle:
    """
    Load and validate a puzzle record from a JSON file.

    Raises:
        PuzzleValidationError: If the file is not valid JSON or the record is malformed
        OSError: If the file cannot be read
    """
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise PuzzleValidationError(f"Invalid JSON file {path}: {e}") from e

    return puzzle_from_record(data, allowed_sizes=allowed_sizes)


def save_puzzle(
    puzzle: Puzzle,
    catalog_dir: Path = DEFAULT_CATALOG_DIR,
    stem: Optional[str] = None,
) -> Path:
    """
    Save a puzzle record to the catalog.

    Creates the catalog directory if it doesn't exist.
    Overwrites any existing file with the same stem.

    Args:
        puzzle: Puzzle to save
        catalog_dir: Directory to store puzzle files
        stem: File name without extension (defaults to
              "nonogram_{N}x{N}_{created}_{k}" with the first free k)

    Returns:
        Path of the written file
    """
    catalog_dir = Path(catalog_dir)
    catalog_dir.mkdir(parents=True, exist_ok=True)

    if stem is None:
        k = 0
        while True:
            stem = f"nonogram_{puzzle.size}x{puzzle.size}_{puzzle.created}_{k}"
            if not (catalog_dir / f"{stem}.json").exists():
                break
            k += 1

    path = catalog_dir / f"{stem}.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump(puzzle_to_record(puzzle), f, indent=2, ensure_ascii=False)

    return path


def list_puzzle_paths(catalog_dir: Path = DEFAULT_CATALOG_DIR) -> List[Path]:
    """All *.json files in the catalog, sorted for deterministic order."""
    catalog_dir = Path(catalog_dir)
    if not catalog_dir.exists():
        return []
    return sorted(catalog_dir.glob("*.json"))
