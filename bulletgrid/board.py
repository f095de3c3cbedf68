"""Board model and one-turn simulator.

A board is an immutable square grid of bitmask cells (see ``constants``):
bit 0 marks the player, bits 1-4 mark projectiles travelling up, left, down
and right. One cell may hold several projectiles at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .constants import CELL_PLAYER, CELL_PROJECTILE_ANY
from .geometry import DIRECTIONS, Direction, in_bounds, position_to_index, validate_size


class PlayerNotFoundError(RuntimeError):
    """Raised when a board that must contain the player has no player cell."""


@dataclass(frozen=True)
class Projectile:
    position: Tuple[int, int]  # centered (x, y)
    direction: Direction

    def __post_init__(self):
        object.__setattr__(self, "position", (int(self.position[0]), int(self.position[1])))
        object.__setattr__(self, "direction", Direction(self.direction))


@dataclass(frozen=True)
class Board:
    size: int
    cells: Tuple[int, ...]  # row-major, len == size * size

    @classmethod
    def empty(cls, size: int) -> "Board":
        return cls(size, (0,) * (size * size))

    def cell(self, row: int, col: int) -> int:
        return self.cells[row * self.size + col]

    def has_projectile(self, row: int, col: int) -> bool:
        return (self.cell(row, col) & CELL_PROJECTILE_ANY) != 0

    def projectile_count(self) -> int:
        return sum(bin(c & CELL_PROJECTILE_ANY).count("1") for c in self.cells)

    def player_cell(self) -> Tuple[int, int]:
        """Return (row, col) of the player."""
        for i, c in enumerate(self.cells):
            if c & CELL_PLAYER:
                return divmod(i, self.size)
        raise PlayerNotFoundError("Player not found on board")

    def iter_projectiles(self) -> Iterator[Tuple[int, int, Direction]]:
        """Yield (row, col, direction) for every projectile bit on the board."""
        for i, c in enumerate(self.cells):
            if not c & CELL_PROJECTILE_ANY:
                continue
            row, col = divmod(i, self.size)
            for d in DIRECTIONS:
                if c & d.projectile_bit:
                    yield row, col, d


def to_board(player_pos: Tuple[int, int], projectiles: Iterable[Projectile], size: int) -> Board:
    """Build a board from centered player/projectile positions.

    Projectiles outside the grid are dropped; they can never reach the inner
    area again so they have no effect on planning.
    """
    validate_size(size)
    cells = [0] * (size * size)
    p_col, p_row = position_to_index(player_pos, size)
    if not in_bounds(p_row, p_col, size):
        raise ValueError(f"Player position {tuple(player_pos)} is outside a {size}x{size} board")
    cells[p_row * size + p_col] |= CELL_PLAYER
    for proj in projectiles:
        col, row = position_to_index(proj.position, size)
        if in_bounds(row, col, size):
            cells[row * size + col] |= Direction(proj.direction).projectile_bit
    return Board(size, tuple(cells))


def advance(board: Board) -> Board:
    """Move every projectile one cell along its heading.

    Projectiles leaving the grid vanish. The player bit stays where it is;
    player movement is modelled by the reachability graph, not here.
    """
    n = board.size
    nxt = [c & CELL_PLAYER for c in board.cells]
    for row, col, d in board.iter_projectiles():
        drow, dcol = d.delta
        r, c = row + drow, col + dcol
        if in_bounds(r, c, n):
            nxt[r * n + c] |= d.projectile_bit
    return Board(n, tuple(nxt))


def simulate(board: Board, turns: int) -> List[Board]:
    """Return ``[board, advance(board), ...]`` with ``turns`` entries."""
    boards = [board]
    for _ in range(turns - 1):
        boards.append(advance(boards[-1]))
    return boards


__all__ = ["Board", "Projectile", "PlayerNotFoundError", "to_board", "advance", "simulate"]
