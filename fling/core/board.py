"""Bit-packed 7x8 Fling board representation."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple
import numpy as np


WIDTH = 7
HEIGHT = 8
CELL_COUNT = WIDTH * HEIGHT
FULL_MASK = (1 << CELL_COUNT) - 1

# BITMASKS[y][x] is the single bit for cell (x, y); row-major, bit index y * 7 + x.
BITMASKS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(1 << (y * WIDTH + x) for x in range(WIDTH))
    for y in range(HEIGHT)
)

EMPTY_CHARS = frozenset("0.")
UNIT_CHARS = frozenset("1oOxX#")
SEPARATOR_CHARS = frozenset(" \t\r\n/|")


class Direction(Enum):
    """Directions a unit can be flung in. Row 0 is the top of the grid."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        """Get the (dx, dy) step for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
        }
        return deltas[self]

    @property
    def opposite(self) -> Direction:
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
        }
        return opposites[self]


@dataclass(frozen=True)
class Location:
    """A single grid cell, 0 <= x < 7 and 0 <= y < 8."""
    x: int
    y: int

    def __post_init__(self):
        if not (0 <= self.x < WIDTH and 0 <= self.y < HEIGHT):
            raise ValueError(f"Location ({self.x}, {self.y}) is outside the {WIDTH}x{HEIGHT} grid")

    def step(self, direction: Direction) -> Optional[Location]:
        """Get the neighbouring cell in a direction, or None past the edge."""
        dx, dy = direction.delta
        x, y = self.x + dx, self.y + dy
        if 0 <= x < WIDTH and 0 <= y < HEIGHT:
            return Location(x, y)
        return None

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Move:
    """The unit currently at `location` slides in `direction`."""
    location: Location
    direction: Direction

    def __str__(self) -> str:
        return f"{self.location} {self.direction.value}"


def is_occupied(board: int, x: int, y: int) -> bool:
    """Check whether cell (x, y) holds a unit."""
    assert x >= 0 and y >= 0, f"negative coordinate ({x}, {y})"
    return (board & BITMASKS[y][x]) != 0


def with_unit(board: int, x: int, y: int, occupied: bool = True) -> int:
    """Return a copy of the board with cell (x, y) set or cleared."""
    assert x >= 0 and y >= 0, f"negative coordinate ({x}, {y})"
    if occupied:
        return board | BITMASKS[y][x]
    return board & ~BITMASKS[y][x]


def count_units(board: int) -> int:
    """Count the units on the board."""
    return bin(board).count("1")


def iter_units(board: int) -> Iterator[Location]:
    """Iterate over occupied cells in row-major order."""
    for y in range(HEIGHT):
        for x in range(WIDTH):
            if board & BITMASKS[y][x]:
                yield Location(x, y)


def from_cells(cells: Iterable[Tuple[int, int]]) -> int:
    """Build a board from (x, y) pairs."""
    board = 0
    for x, y in cells:
        loc = Location(x, y)
        board = with_unit(board, loc.x, loc.y)
    return board


def from_string(s: str) -> int:
    """
    Create a board from a string representation.

    Args:
        s: 56 cell characters in row-major order. 0 or . for empty,
           1, o, x or # for a unit. Spaces, newlines, / and | are
           ignored so rows can be written separately.
    """
    cells = []
    for c in s:
        if c in SEPARATOR_CHARS:
            continue
        if c in EMPTY_CHARS:
            cells.append(False)
        elif c in UNIT_CHARS:
            cells.append(True)
        else:
            raise ValueError(f"Unexpected board character {c!r}")

    if len(cells) != CELL_COUNT:
        raise ValueError(f"Board must have {CELL_COUNT} cells, got {len(cells)}")

    board = 0
    for index, occupied in enumerate(cells):
        if occupied:
            board |= 1 << index
    return board


def to_string(board: int) -> str:
    """Convert board to a 56 character string of 0s and 1s."""
    return ''.join(
        '1' if board & BITMASKS[y][x] else '0'
        for y in range(HEIGHT)
        for x in range(WIDTH)
    )


def from_array(arr) -> int:
    """Create a board from an 8x7 array-like of truthy/falsy cells."""
    grid = np.asarray(arr)
    if grid.shape != (HEIGHT, WIDTH):
        raise ValueError(f"Grid shape must be ({HEIGHT}, {WIDTH}), got {grid.shape}")

    board = 0
    for y, x in zip(*np.nonzero(grid)):
        board |= BITMASKS[int(y)][int(x)]
    return board


def to_array(board: int) -> np.ndarray:
    """Convert board to an 8x7 int8 array, 1 where a unit sits."""
    grid = np.zeros((HEIGHT, WIDTH), dtype=np.int8)
    for loc in iter_units(board):
        grid[loc.y, loc.x] = 1
    return grid


def format_board(board: int, highlight: Optional[Move] = None) -> str:
    """Pretty-print the board, optionally marking the unit about to move."""
    arrows = {
        Direction.UP: '^',
        Direction.DOWN: 'v',
        Direction.LEFT: '<',
        Direction.RIGHT: '>',
    }
    border = '+' + '-' * (WIDTH * 2 + 1) + '+'
    lines = [border]
    for y in range(HEIGHT):
        row_str = '|'
        for x in range(WIDTH):
            if highlight is not None and highlight.location == Location(x, y):
                row_str += ' ' + arrows[highlight.direction]
            elif board & BITMASKS[y][x]:
                row_str += ' o'
            else:
                row_str += ' .'
        lines.append(row_str + ' |')
    lines.append(border)
    return '\n'.join(lines)
