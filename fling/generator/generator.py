"""Fling puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import os
from enum import Enum
from typing import List, Tuple, Optional
import numpy as np

from ..core.board import CELL_COUNT, Move, to_string, format_board
from ..solvers import DFSSolver


class Difficulty(Enum):
    """Difficulty levels for Fling puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def unit_range(self) -> Tuple[int, int]:
        """Get the range of starting units for this difficulty (min, max)."""
        ranges = {
            Difficulty.EASY: (3, 4),
            Difficulty.MEDIUM: (5, 6),
            Difficulty.HARD: (7, 8),
            Difficulty.EXPERT: (9, 10),
        }
        return ranges[self]


class PuzzleGenerator:
    """
    Generator for Fling puzzles with various difficulty levels.

    Algorithm:
    1. Pick a unit count from the difficulty's range
    2. Scatter that many units over distinct random cells
    3. Keep the board only if the solver finds a solution, else resample
    """

    def __init__(self, seed: Optional[int] = None, max_attempts: int = 2000):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            max_attempts: Boards to sample per puzzle before giving up.
        """
        self.rng = np.random.default_rng(seed)
        self.max_attempts = max_attempts
        self.solver = DFSSolver(memoize=True, track_memory=False)

    def random_board(self, units: int) -> int:
        """Place `units` units on distinct random cells."""
        if not 1 <= units <= CELL_COUNT:
            raise ValueError(f"Unit count must be 1-{CELL_COUNT}, got {units}")

        board = 0
        for index in self.rng.choice(CELL_COUNT, size=units, replace=False):
            board |= 1 << int(index)
        return board

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM, solvable: bool = True) -> int:
        """
        Generate a Fling puzzle with the specified difficulty.

        Args:
            difficulty: Desired difficulty level.
            solvable: If True, only return boards the solver can clear.

        Returns:
            The puzzle board.
        """
        puzzle, _ = self._sample(difficulty, solvable)
        return puzzle

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM) -> List[int]:
        """
        Generate multiple solvable puzzles of the same difficulty.

        Args:
            count: Number of puzzles to generate.
            difficulty: Desired difficulty level.

        Returns:
            List of puzzle boards.
        """
        return [self.generate(difficulty) for _ in range(count)]

    def generate_with_solution(self, difficulty: Difficulty = Difficulty.MEDIUM) -> Tuple[int, List[Move]]:
        """
        Generate a puzzle along with the solution the solver found.

        Returns:
            Tuple of (puzzle, moves).
        """
        puzzle, solution = self._sample(difficulty, True)
        return puzzle, solution

    def _sample(self, difficulty: Difficulty, solvable: bool) -> Tuple[int, Optional[List[Move]]]:
        min_units, max_units = difficulty.unit_range

        for _ in range(self.max_attempts):
            units = int(self.rng.integers(min_units, max_units + 1))
            board = self.random_board(units)
            if not solvable:
                return board, None

            solution = self.solver.find_solution(board)
            if solution is not None:
                return board, solution

        raise RuntimeError(
            f"No solvable {difficulty.value} puzzle found in {self.max_attempts} attempts"
        )

    @staticmethod
    def save_to_folder(puzzles: List[int], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: List of boards.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(to_string(puzzle))
                f.write("\n\nPretty format:\n")
                f.write(format_board(puzzle))
                f.write("\n")
