"""
Core nonogram types: grid representation, cell states and clue calculation.
"""
