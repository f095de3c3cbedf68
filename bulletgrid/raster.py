"""Integer line rasterization (Bresenham).

Lines are normalized by octant: shallow lines walk x from the endpoint with
the smaller x, steep lines walk y from the endpoint with the smaller y, so a
segment yields the same ordered cells whichever end it is given from.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

Point = Tuple[int, int]


def _plot(x0: int, y0: int, x1: int, y1: int, steep: bool) -> List[Point]:
    # Walks the major axis from (x0, y0) to (x1, y1); x is the major axis here.
    dx = x1 - x0
    dy = y1 - y0
    yi = 1
    if dy < 0:
        yi = -1
        dy = -dy
    err = 2 * dy - dx
    y = y0
    cells = []
    for x in range(x0, x1 + 1):
        cells.append((y, x) if steep else (x, y))
        if err > 0:
            y += yi
            err += 2 * (dy - dx)
        else:
            err += 2 * dy
    return cells


def bresenham_line(start: Sequence[float], end: Sequence[float]) -> List[Point]:
    """Cells on the segment from ``start`` to ``end``, both endpoints included."""
    x0, y0 = round(start[0]), round(start[1])
    x1, y1 = round(end[0]), round(end[1])
    if abs(y1 - y0) < abs(x1 - x0):
        if x0 > x1:
            return _plot(x1, y1, x0, y0, steep=False)
        return _plot(x0, y0, x1, y1, steep=False)
    if y0 > y1:
        return _plot(y1, x1, y0, x0, steep=True)
    return _plot(y0, x0, y1, x1, steep=True)


__all__ = ["bresenham_line", "Point"]
