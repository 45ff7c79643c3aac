"""
Random nonogram generation.
"""

from nonogram.generator.random_puzzle import GeneratorConfig, generate, random_grid

__all__ = [
    "GeneratorConfig",
    "generate",
    "random_grid",
]
