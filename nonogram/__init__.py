"""
Nonogram toolkit: clue calculation, bounded backtracking solver,
uniqueness-checked random puzzle generation and puzzle verification.
"""
