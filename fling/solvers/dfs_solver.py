"""Depth-First Search solver with plain backtracking."""

from __future__ import annotations
from typing import Optional, List, Set

from .base_solver import BaseSolver
from ..core.board import Move
from ..core.moves import legal_moves, apply_move
from ..core.validator import is_solved


class DFSSolver(BaseSolver):
    """
    Depth-First Search solver using recursive backtracking.

    Moves are tried in generator order and the first solution found is
    returned, so the result is deterministic but not necessarily the
    shortest. Recursion depth is bounded by the unit count (at most 56).

    Features:
    - No heuristics or move ordering beyond the generator's
    - Optional dead-board memo keyed by the raw board bits
    - Node and backtrack counters for performance analysis
    """

    name = "DFS+Backtracking"

    def __init__(self, memoize: bool = False, track_memory: bool = True):
        """
        Initialize the DFS solver.

        Args:
            memoize: If True, remember boards proven unsolvable and skip
                     them when they come up again on another branch. This
                     prunes repeated work without changing the solution.
        """
        super().__init__(track_memory=track_memory)
        self.memoize = memoize
        if memoize:
            self.name = "DFS+Memo"
            self.stats.algorithm = self.name
        self._dead: Set[int] = set()

    def _solve(self, board: int) -> Optional[List[Move]]:
        """Solve using DFS with backtracking."""
        self._dead = set()
        moves: List[Move] = []

        if self._backtrack(board, moves, 0):
            moves.reverse()
            self.stats.extra["memo_size"] = len(self._dead)
            return moves

        self.stats.extra["memo_size"] = len(self._dead)
        return None

    def _backtrack(self, board: int, moves: List[Move], depth: int) -> bool:
        """
        Recursive backtracking algorithm.

        On success the winning moves are appended deepest first, so the
        caller reverses the list once at the top.

        Returns True if solution found, False otherwise.
        """
        self.stats.nodes_explored += 1
        self._check_deadline()
        if depth > self.stats.max_depth:
            self.stats.max_depth = depth

        if is_solved(board):
            return True

        if self.memoize and board in self._dead:
            self.stats.extra["memo_hits"] = self.stats.extra.get("memo_hits", 0) + 1
            return False

        for move in legal_moves(board):
            if self._backtrack(apply_move(board, move), moves, depth + 1):
                moves.append(move)
                return True

        self.stats.backtracks += 1
        if self.memoize:
            self._dead.add(board)
        return False
