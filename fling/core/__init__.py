"""Core module for Fling board representation, moves and validation."""

from .board import (
    WIDTH, HEIGHT, CELL_COUNT, Direction, Location, Move,
    is_occupied, with_unit, count_units, iter_units,
    from_cells, from_string, to_string, from_array, to_array, format_board,
)
from .moves import legal_moves, apply_move, apply_moves, replay
from .validator import is_solved, is_valid_board, is_legal_move, verify_solution

__all__ = [
    "WIDTH", "HEIGHT", "CELL_COUNT", "Direction", "Location", "Move",
    "is_occupied", "with_unit", "count_units", "iter_units",
    "from_cells", "from_string", "to_string", "from_array", "to_array", "format_board",
    "legal_moves", "apply_move", "apply_moves", "replay",
    "is_solved", "is_valid_board", "is_legal_move", "verify_solution",
]
