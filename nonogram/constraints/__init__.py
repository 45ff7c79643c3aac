"""
Constraint plumbing for the integer-programming formulation of a clue set.
"""
