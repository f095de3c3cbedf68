"""Board and trajectory rendering onto an off-screen pygame surface.

Layer order (bottom -> top):
1. Clear
2. Spawn ring
3. Grid lines
4. Planned trajectories (rasterized spawn-to-exit cells)
5. Existing projectiles
6. Player

Only ``pygame.Surface`` drawing is used, so no display needs to be open.
``capture_sequence`` records executed layers for tests.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import pygame

from bulletgrid.board import Projectile
from bulletgrid.constants import (
    RENDER_BG_COLOR,
    RENDER_CELL_PX,
    RENDER_GRID_COLOR,
    RENDER_PLAYER_COLOR,
    RENDER_PROJECTILE_COLOR,
    RENDER_RING_COLOR,
    RENDER_TRAJECTORY_COLOR,
)
from bulletgrid.geometry import in_inner, position_to_index, validate_size
from bulletgrid.logger import get_logger
from bulletgrid.raster import bresenham_line

log = get_logger("renderer")


def trajectory_cells(projectile: Projectile, size: int) -> List[Tuple[int, int]]:
    """(col, row) cells a projectile crosses from its position to the board edge."""
    col, row = position_to_index(projectile.position, size)
    drow, dcol = projectile.direction.delta
    steps = 0
    while 0 <= row + drow * (steps + 1) < size and 0 <= col + dcol * (steps + 1) < size:
        steps += 1
    return bresenham_line((col, row), (col + dcol * steps, row + drow * steps))


class BoardRenderer:
    def __init__(self, size: int, cell_px: int = RENDER_CELL_PX):
        self.size = validate_size(size)
        self.cell_px = cell_px

    @property
    def surface_size(self) -> Tuple[int, int]:
        side = self.size * self.cell_px
        return side, side

    def cell_rect(self, col: int, row: int) -> pygame.Rect:
        return pygame.Rect(col * self.cell_px, row * self.cell_px, self.cell_px, self.cell_px)

    def cell_center(self, col: int, row: int) -> Tuple[int, int]:
        return self.cell_rect(col, row).center

    def render(
        self,
        player_pos: Tuple[int, int],
        projectiles: Iterable[Projectile] = (),
        planned: Iterable[Projectile] = (),
        surface: Optional[pygame.Surface] = None,
        capture_sequence: Optional[List[str]] = None,
    ) -> pygame.Surface:
        def mark(step: str):
            if capture_sequence is not None:
                capture_sequence.append(step)

        if surface is None:
            surface = pygame.Surface(self.surface_size)
        n = self.size

        surface.fill(RENDER_BG_COLOR)
        mark("clear")

        for row in range(n):
            for col in range(n):
                if not in_inner(row, col, n):
                    surface.fill(RENDER_RING_COLOR, self.cell_rect(col, row))
        mark("ring")

        side = n * self.cell_px
        for i in range(n + 1):
            offset = i * self.cell_px
            pygame.draw.line(surface, RENDER_GRID_COLOR, (offset, 0), (offset, side))
            pygame.draw.line(surface, RENDER_GRID_COLOR, (0, offset), (side, offset))
        mark("grid")

        inset = self.cell_px // 4
        for proj in planned:
            for col, row in trajectory_cells(proj, n):
                surface.fill(RENDER_TRAJECTORY_COLOR, self.cell_rect(col, row).inflate(-inset * 2, -inset * 2))
        mark("trajectories")

        radius = max(2, self.cell_px // 3)
        for proj in projectiles:
            col, row = position_to_index(proj.position, n)
            if 0 <= row < n and 0 <= col < n:
                pygame.draw.circle(surface, RENDER_PROJECTILE_COLOR, self.cell_center(col, row), radius)
        mark("projectiles")

        col, row = position_to_index(player_pos, n)
        surface.fill(RENDER_PLAYER_COLOR, self.cell_rect(col, row).inflate(-2, -2))
        mark("player")
        return surface

    @staticmethod
    def save(surface: pygame.Surface, path: str) -> None:
        pygame.image.save(surface, path)
        log.info(f"Board image written to {path}")


__all__ = ["BoardRenderer", "trajectory_cells"]
