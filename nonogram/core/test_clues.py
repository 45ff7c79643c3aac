"""
Smoke tests for clue calculation.

Covers:
  - Literal line clues (runs, trailing runs, the [0] sentinel)
  - Non-filled states (MARKED, UNKNOWN) ending runs
  - Row / column / full clue sets on small grids
  - ClueSet validation errors
"""

import numpy as np

from nonogram.core.grid_types import FILLED, MARKED, UNKNOWN, as_grid
from nonogram.core.clues import (
    ClueSet,
    InvalidClueSetError,
    all_clues,
    clues_match,
    col_clues,
    line_clue,
    line_fits,
    row_clues,
)


def test_line_clue_literals():
    """Literal cases for single lines."""
    assert line_clue([1, 1, 0, 1, 0, 0, 1, 1, 1, 0]) == [2, 1, 3]
    assert line_clue([0, 0, 0, 0]) == [0]
    assert line_clue([1, 1, 1, 1]) == [4]
    assert line_clue([0, 1, 0, 1]) == [1, 1]
    assert line_clue([1]) == [1]
    assert line_clue([0]) == [0]
    print("  ✓ test_line_clue_literals: PASSED")


def test_line_clue_non_filled_states_end_runs():
    """MARKED and UNKNOWN read as not filled."""
    assert line_clue([FILLED, MARKED, FILLED]) == [1, 1]
    assert line_clue([FILLED, UNKNOWN, FILLED, FILLED]) == [1, 2]
    assert line_clue([MARKED, MARKED]) == [0]


def test_line_clue_accepts_numpy_and_is_pure():
    line = np.array([1, 1, 0, 1, 0, 0, 1, 1, 1, 0])
    before = line.copy()
    first = line_clue(line)
    second = line_clue(line)
    assert first == second == [2, 1, 3]
    assert np.array_equal(line, before), "line_clue must not modify its input"


def test_row_and_col_clues():
    """
    Grid:
        # # .
        . # .
        # . #
    """
    grid = as_grid([[1, 1, 0], [0, 1, 0], [1, 0, 1]])

    assert row_clues(grid) == [[2], [1], [1, 1]]
    assert col_clues(grid) == [[1, 1], [2], [1]]

    cs = all_clues(grid)
    assert cs.row_clues == [[2], [1], [1, 1]]
    assert cs.col_clues == [[1, 1], [2], [1]]
    assert cs.size == 3

    # Pure function of the grid
    assert all_clues(grid) == cs


def test_empty_grid_clues_are_zero_sentinels():
    cs = all_clues(np.zeros((10, 10), dtype=int))
    assert cs.row_clues == [[0]] * 10
    assert cs.col_clues == [[0]] * 10


def test_diagonal_clues():
    cs = all_clues(np.eye(5, dtype=int))
    assert cs.row_clues == [[1]] * 5
    assert cs.col_clues == [[1]] * 5


def test_clues_match():
    assert clues_match([2, 1], [2, 1])
    assert not clues_match([2, 1], [1, 2])
    assert not clues_match([2], [2, 1])
    assert clues_match([0], [0])


def test_line_fits():
    assert line_fits([0], 1)
    assert line_fits([5], 5)
    assert line_fits([2, 2], 5)
    assert not line_fits([3, 2], 5)
    assert not line_fits([6], 5)


def test_clue_set_validate():
    """Shape and content violations raise InvalidClueSetError."""
    print("\n" + "=" * 70)
    print("TEST: ClueSet validation")
    print("=" * 70)

    # Valid
    ClueSet(row_clues=[[1], [1]], col_clues=[[2], [0]]).validate()

    bad_sets = {
        "mismatched counts": ClueSet([[1], [1]], [[1]]),
        "empty": ClueSet([], []),
        "empty clue": ClueSet([[1], []], [[1], [0]]),
        "zero inside clue": ClueSet([[0, 1], [0]], [[0], [1]]),
        "negative run": ClueSet([[-1], [0]], [[0], [0]]),
        "does not fit": ClueSet([[2, 1], [0]], [[1], [1]]),
    }

    for label, clue_set in bad_sets.items():
        try:
            clue_set.validate()
            raise AssertionError(f"Expected InvalidClueSetError for {label}")
        except InvalidClueSetError as e:
            print(f"  ✓ {label}: {e}")

    assert issubclass(InvalidClueSetError, ValueError)


if __name__ == "__main__":
    print("\n" + "=" * 70)
    print("CLUE CALCULATION SMOKE TEST SUITE")
    print("=" * 70)

    test_line_clue_literals()
    test_line_clue_non_filled_states_end_runs()
    test_line_clue_accepts_numpy_and_is_pure()
    test_row_and_col_clues()
    test_empty_grid_clues_are_zero_sentinels()
    test_diagonal_clues()
    test_clues_match()
    test_line_fits()
    test_clue_set_validate()

    print("\n✓ ALL TESTS PASSED")
