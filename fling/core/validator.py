"""Validation utilities for Fling boards and solutions."""

from __future__ import annotations
from typing import Iterable, Optional, TYPE_CHECKING

from .board import FULL_MASK
from .moves import legal_moves, apply_move

if TYPE_CHECKING:
    from .board import Move


def is_solved(board: int) -> bool:
    """
    Check if at most one unit is left.

    Assumes at least one unit is on the board; the empty board passes
    this test as well.
    """
    return (board & (board - 1)) == 0


def is_valid_board(board: int) -> bool:
    """Check that the board only uses the 56 grid bits."""
    return 0 <= board and (board & ~FULL_MASK) == 0


def is_legal_move(board: int, move: Move) -> bool:
    """Check that a move is one the generator offers for this board."""
    return move in set(legal_moves(board))


def verify_solution(board: int, moves: Optional[Iterable[Move]]) -> bool:
    """
    Check that a move sequence is playable and ends with one unit.

    Args:
        board: The starting board.
        moves: The candidate solution. None is never a valid solution.

    Returns:
        True if every move is legal when played and the final board
        holds a single unit.
    """
    if moves is None:
        return False

    for move in moves:
        if not is_legal_move(board, move):
            return False
        board = apply_move(board, move)

    return board != 0 and is_solved(board)
