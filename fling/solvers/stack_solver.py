"""Depth-First Search solver driven by an explicit work stack."""

from __future__ import annotations
from typing import Optional, List, Set, Tuple, Iterator

from .base_solver import BaseSolver
from ..core.board import Move
from ..core.moves import legal_moves, apply_move
from ..core.validator import is_solved


class StackSolver(BaseSolver):
    """
    Iterative version of the DFS search.

    Each stack frame holds a board and the live move generator for it, so
    the visiting order (and therefore the solution) matches DFSSolver
    exactly. Depth is limited only by memory, not the interpreter's
    recursion limit.
    """

    name = "DFS+Stack"

    def __init__(self, memoize: bool = False, track_memory: bool = True):
        super().__init__(track_memory=track_memory)
        self.memoize = memoize
        if memoize:
            self.name = "DFS+Stack+Memo"
            self.stats.algorithm = self.name

    def _solve(self, board: int) -> Optional[List[Move]]:
        self.stats.nodes_explored = 1
        self._check_deadline()
        if is_solved(board):
            return []

        dead: Set[int] = set()
        path: List[Move] = []
        stack: List[Tuple[int, Iterator[Move]]] = [(board, legal_moves(board))]

        while stack:
            current, moves = stack[-1]
            move = next(moves, None)

            if move is None:
                # Every move from this board failed.
                stack.pop()
                self.stats.backtracks += 1
                if self.memoize:
                    dead.add(current)
                if path:
                    path.pop()
                continue

            child = apply_move(current, move)
            self.stats.nodes_explored += 1
            self._check_deadline()
            path.append(move)

            if is_solved(child):
                self.stats.max_depth = max(self.stats.max_depth, len(path))
                return path

            if self.memoize and child in dead:
                self.stats.extra["memo_hits"] = self.stats.extra.get("memo_hits", 0) + 1
                path.pop()
                continue

            stack.append((child, legal_moves(child)))
            self.stats.max_depth = max(self.stats.max_depth, len(path))

        return None
