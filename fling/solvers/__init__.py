"""Solvers module for Fling puzzles."""

from typing import List, Optional

from .base_solver import BaseSolver, SearchTimeout, SolverStats
from .dfs_solver import DFSSolver
from .stack_solver import StackSolver
from ..core.board import Move


# CLI/benchmark name -> factory
SOLVERS = {
    "dfs": lambda: DFSSolver(),
    "dfs-memo": lambda: DFSSolver(memoize=True),
    "stack": lambda: StackSolver(),
    "stack-memo": lambda: StackSolver(memoize=True),
}


def make_solver(algorithm: str) -> BaseSolver:
    """Create a solver by its registry name."""
    try:
        return SOLVERS[algorithm]()
    except KeyError:
        raise ValueError(
            f"Unknown algorithm {algorithm!r}, expected one of {sorted(SOLVERS)}"
        ) from None


def solve(board: int) -> Optional[List[Move]]:
    """
    Find a move sequence that leaves a single unit on the board.

    Returns:
        The moves in play order, [] if the board is already solved, or
        None if exhaustive search shows no sequence works.
    """
    return DFSSolver(track_memory=False).find_solution(board)


__all__ = [
    "BaseSolver",
    "SearchTimeout",
    "SolverStats",
    "DFSSolver",
    "StackSolver",
    "SOLVERS",
    "make_solver",
    "solve",
]
