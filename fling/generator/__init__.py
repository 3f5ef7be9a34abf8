"""Generator module for creating Fling puzzles."""

from .generator import PuzzleGenerator, Difficulty

__all__ = ["PuzzleGenerator", "Difficulty"]
