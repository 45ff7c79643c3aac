"""
Solver module for nonogram clue sets.

This module provides the bounded backtracking solver used for uniqueness
checks and an ILP formulation (pulp/CBC) used to cross-check it.
"""
