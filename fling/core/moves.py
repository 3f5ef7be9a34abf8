"""Move generation and move resolution for Fling boards."""

from __future__ import annotations
from typing import Iterable, Iterator, List, Tuple

from .board import (
    WIDTH, HEIGHT, BITMASKS,
    Direction, Location, Move,
    is_occupied, with_unit,
)


# Each line is (cells, masks, forward) where forward points from the
# start of the line towards its end. Columns come first, then rows.
Line = Tuple[Tuple[Location, ...], Tuple[int, ...], Direction]

COLUMNS: Tuple[Line, ...] = tuple(
    (
        tuple(Location(x, y) for y in range(HEIGHT)),
        tuple(BITMASKS[y][x] for y in range(HEIGHT)),
        Direction.DOWN,
    )
    for x in range(WIDTH)
)

ROWS: Tuple[Line, ...] = tuple(
    (
        tuple(Location(x, y) for x in range(WIDTH)),
        tuple(BITMASKS[y][x] for x in range(WIDTH)),
        Direction.RIGHT,
    )
    for y in range(HEIGHT)
)

LINES: Tuple[Line, ...] = COLUMNS + ROWS


def _gap_pairs(board: int, masks: Tuple[int, ...]) -> Iterator[Tuple[int, int]]:
    """
    Yield (near, far) indices of neighbouring units along one line that
    have at least one empty cell between them.

    Only nearest neighbours pair up: with units at p1 < p2 < p3 the
    pairs are (p1, p2) and (p2, p3), never (p1, p3).
    """
    cursor = None
    for index, mask in enumerate(masks):
        if not board & mask:
            continue
        if cursor is not None and index - cursor > 1:
            yield cursor, index
        cursor = index


def legal_moves(board: int) -> Iterator[Move]:
    """
    Generate every legal move for a board.

    Columns are scanned left to right, each from the top down, and then
    rows top to bottom, each from the left. For every gap pair the near
    unit is flung towards the far one first, then the far unit back
    towards the near one. The order is fixed because the solver returns
    the first solution it reaches.
    """
    for cells, masks, forward in LINES:
        backward = forward.opposite
        for near, far in _gap_pairs(board, masks):
            yield Move(cells[near], forward)
            yield Move(cells[far], backward)


def apply_move(board: int, move: Move) -> int:
    """
    Resolve a single fling and return the resulting board.

    The moving unit slides until the cell before the first unit in its
    path, or leaves the grid if nothing is in the way. The unit it hits
    is then flung in the same direction against the updated board, so
    along a line the momentum passes down the chain and the last unit
    flies off the edge.

    Args:
        board: Board the move is legal for.
        move: Move produced by legal_moves for this board.

    Returns:
        The new board. The input board is not modified.
    """
    loc = move.location
    assert is_occupied(board, loc.x, loc.y), f"no unit at {loc}"

    dx, dy = move.direction.delta
    new_board = with_unit(board, loc.x, loc.y, False)

    x, y = loc.x + dx, loc.y + dy
    while 0 <= x < WIDTH and 0 <= y < HEIGHT:
        if is_occupied(board, x, y):
            new_board = with_unit(new_board, x - dx, y - dy)
            return apply_move(new_board, Move(Location(x, y), move.direction))
        x += dx
        y += dy

    # Nothing ahead: the unit slid off the grid.
    return new_board


def apply_moves(board: int, moves: Iterable[Move]) -> int:
    """Apply a sequence of moves in order."""
    for move in moves:
        board = apply_move(board, move)
    return board


def replay(board: int, moves: Iterable[Move]) -> List[int]:
    """Get every board along a move sequence, starting with the initial one."""
    boards = [board]
    for move in moves:
        board = apply_move(board, move)
        boards.append(board)
    return boards
