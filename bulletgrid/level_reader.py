"""Level file reader.

A level is a CSV file with one header row naming four columns followed by
rows of four integers::

    x,y,direction,turn
    -3,1,3,0
    0,3,2,2

``x``/``y`` are centered board coordinates, ``direction`` is 0-3 (up, left,
down, right) and ``turn`` is the turn the projectile appears on. A malformed
file is logged and yields no data; callers carry on without it.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from typing import Iterable, List, Optional

from bulletgrid.board import Projectile
from bulletgrid.geometry import Direction
from bulletgrid.logger import get_logger

log = get_logger("level_reader")

LEVEL_COLUMNS = 4


class LevelFormatError(ValueError):
    def __init__(self, message: str, line: int):
        super().__init__(f"line {line}: {message}")
        self.line = line


@dataclass(frozen=True)
class LevelSpawn:
    x: int
    y: int
    direction: Direction
    turn: int

    def to_projectile(self) -> Projectile:
        return Projectile((self.x, self.y), self.direction)


def _parse_row(values: List[str], line: int) -> LevelSpawn:
    if len(values) != LEVEL_COLUMNS:
        raise LevelFormatError(f"expected {LEVEL_COLUMNS} values, got {len(values)}", line)
    ints = []
    for raw in values:
        try:
            ints.append(int(raw.strip()))
        except ValueError:
            raise LevelFormatError(f"failed to parse value {raw!r} as an integer", line) from None
    x, y, direction, turn = ints
    if not 0 <= direction <= 3:
        raise LevelFormatError(f"direction must be 0-3, got {direction}", line)
    if turn < 0:
        raise LevelFormatError(f"turn must be >= 0, got {turn}", line)
    return LevelSpawn(x, y, Direction(direction), turn)


def parse_level(lines: Iterable[str]) -> List[LevelSpawn]:
    """Parse level rows. Raises ``LevelFormatError`` on the first bad row."""
    reader = csv.reader(lines)
    header = next(reader, None)
    if header is None:
        raise LevelFormatError("missing header row", 1)
    if len(header) != LEVEL_COLUMNS:
        raise LevelFormatError(f"header must name {LEVEL_COLUMNS} columns, got {len(header)}", 1)
    spawns = []
    for values in reader:
        if not values or all(not v.strip() for v in values):
            continue
        spawns.append(_parse_row(values, reader.line_num))
    return spawns


def read_level(path: str) -> Optional[List[LevelSpawn]]:
    """Load a level file; ``None`` if it cannot be read or is malformed."""
    try:
        with open(path, "r", newline="", encoding="utf-8") as f:
            spawns = parse_level(f)
    except OSError as e:
        log.error(f"Failed to open level file {path}: {e}")
        return None
    except (LevelFormatError, UnicodeDecodeError, csv.Error) as e:
        log.error(f"Level file {path} is not formatted correctly ({e})")
        return None
    log.debug(f"Loaded {len(spawns)} spawns from {path}")
    return spawns


def projectiles_for_turn(spawns: Iterable[LevelSpawn], turn: int) -> List[Projectile]:
    return [s.to_projectile() for s in spawns if s.turn == turn]


__all__ = ["LevelSpawn", "LevelFormatError", "parse_level", "read_level", "projectiles_for_turn"]
