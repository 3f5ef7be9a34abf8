"""Fling puzzle engine: bit-packed 7x8 board, move physics and solver."""

from .core.board import Direction, Location, Move, is_occupied, with_unit
from .core.moves import legal_moves, apply_move
from .solvers import solve

__all__ = [
    "Direction",
    "Location",
    "Move",
    "is_occupied",
    "with_unit",
    "legal_moves",
    "apply_move",
    "solve",
]
