"""Directions and coordinate conversions.

Grid indices are (col, row) with row 0 at the top. Positions are centered
coordinates with (0, 0) at the middle of the board and y pointing up::

    size = 3
      (0,0) (1,0) (2,0)      (-1, 1) (0, 1) (1, 1)
      (0,1) (1,1) (2,1)  ->  (-1, 0) (0, 0) (1, 0)
      (0,2) (1,2) (2,2)      (-1,-1) (0,-1) (1,-1)
"""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

from .constants import MIN_BOARD_SIZE


class Direction(IntEnum):
    UP = 0
    LEFT = 1
    DOWN = 2
    RIGHT = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    @property
    def delta(self) -> Tuple[int, int]:
        """(drow, dcol) step for one turn of movement."""
        return _DELTAS[self]

    @property
    def projectile_bit(self) -> int:
        return 1 << (int(self) + 1)


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.LEFT: (0, -1),
    Direction.DOWN: (1, 0),
    Direction.RIGHT: (0, 1),
}

DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)


def validate_size(size: int) -> int:
    if size < MIN_BOARD_SIZE or size % 2 == 0:
        raise ValueError(f"Board size must be odd and >= {MIN_BOARD_SIZE}, got {size}")
    return size


def index_to_position(idx: Tuple[int, int], size: int) -> Tuple[int, int]:
    """Convert a (col, row) grid index into centered (x, y) coordinates."""
    center = size // 2
    col, row = idx
    return col - center, center - row


def position_to_index(pos: Tuple[int, int], size: int) -> Tuple[int, int]:
    """Convert centered (x, y) coordinates into a (col, row) grid index."""
    center = size // 2
    x, y = pos
    return int(x) + center, center - int(y)


def in_bounds(row: int, col: int, size: int) -> bool:
    return 0 <= row < size and 0 <= col < size


def in_inner(row: int, col: int, size: int) -> bool:
    """True for cells the player may occupy (everything but the spawn ring)."""
    return 1 <= row < size - 1 and 1 <= col < size - 1


__all__ = [
    "Direction",
    "DIRECTIONS",
    "validate_size",
    "index_to_position",
    "position_to_index",
    "in_bounds",
    "in_inner",
]
