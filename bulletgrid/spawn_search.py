"""Spawn search over the reachability graph.

Projectiles may only enter from the outer ring (corners excluded), heading
straight inward. ``try_place`` is the shared validity check: it removes every
player move the new projectile would invalidate, cascades the loss of
reachability forward through later turns, and reports whether the last turn
can still be reached.

Two strategies build on it:

* ``choose_spawn_sets`` (exhaustive) grows every compatible candidate set one
  member per round and returns the whole family of maximal sets. Rounds can
  fan out over a process pool; each plan carries its own graph copy.
* ``iterate_spawn_set`` (randomized incremental) keeps one running set and
  lets a selection policy pick among the candidates that still fit.
"""

from __future__ import annotations

import multiprocessing
from collections import deque
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, List, Sequence, Tuple

from .board import Projectile
from .geometry import Direction, index_to_position
from .graph import ReachabilityGraph
from .logger import get_logger

log = get_logger("spawn_search")


class SpawnSetMismatchError(RuntimeError):
    """Surviving spawn sets ended up with different sizes."""


@dataclass(frozen=True)
class SpawnCandidate:
    index: int  # position in the fixed candidate ordering
    row: int
    col: int
    direction: Direction

    def trajectory(self, turns: int) -> List[Tuple[int, int]]:
        """(row, col) occupied on each of ``turns`` turns, starting at the spawn cell."""
        drow, dcol = self.direction.delta
        return [(self.row + drow * t, self.col + dcol * t) for t in range(turns)]

    def to_projectile(self, size: int) -> Projectile:
        return Projectile(index_to_position((self.col, self.row), size), self.direction)


@dataclass(frozen=True)
class SpawnPlan:
    indices: Tuple[int, ...]
    graph: ReachabilityGraph

    @property
    def size(self) -> int:
        return len(self.indices)

    @property
    def last(self) -> int:
        return self.indices[-1] if self.indices else -1


SelectFn = Callable[[Sequence[SpawnPlan]], SpawnPlan]


def _inward_direction(row: int, col: int, size: int) -> Direction:
    if col == 0:
        return Direction.RIGHT
    if col == size - 1:
        return Direction.LEFT
    if row == 0:
        return Direction.DOWN
    return Direction.UP


@lru_cache(maxsize=None)
def spawn_candidates(size: int) -> Tuple[SpawnCandidate, ...]:
    """Edge cells (no corners) in row-major order with their inward heading."""
    out = []
    last = size - 1
    for row in range(size):
        for col in range(size):
            on_edge = row in (0, last) or col in (0, last)
            corner = row in (0, last) and col in (0, last)
            if not on_edge or corner:
                continue
            out.append(SpawnCandidate(len(out), row, col, _inward_direction(row, col, size)))
    return tuple(out)


def _cut_trajectory(graph: ReachabilityGraph, candidate: SpawnCandidate) -> bool:
    path = candidate.trajectory(graph.turns)
    toward_spawn = candidate.direction.opposite
    queue = deque()
    for turn, (row, col) in enumerate(path):
        if graph.cut_incoming(turn, row, col):
            queue.append((turn, row, col))
        if turn == 0:
            continue
        # Player stepping from the projectile's next cell into its previous one.
        prow, pcol = path[turn - 1]
        if graph.remove_edge(turn - 1, row, col, toward_spawn) and graph.prev_mask(turn, prow, pcol) == 0:
            queue.append((turn, prow, pcol))

    while queue:
        queue.extend(graph.cut_outgoing(*queue.popleft()))
    return graph.is_solvable()


def try_place(graph: ReachabilityGraph, candidate: SpawnCandidate) -> Tuple[bool, ReachabilityGraph]:
    """Check whether ``candidate`` keeps the board solvable.

    Works on a copy; ``graph`` is left untouched so several branches can
    explore from the same base. Returns (valid, pruned copy).
    """
    pruned = graph.copy()
    return _cut_trajectory(pruned, candidate), pruned


def _extend_plan(args: Tuple[SpawnPlan, Sequence[SpawnCandidate]]) -> List[SpawnPlan]:
    plan, candidates = args
    grown = []
    for cand in candidates:
        if cand.index <= plan.last:
            continue
        ok, graph = try_place(plan.graph, cand)
        if ok:
            grown.append(SpawnPlan(plan.indices + (cand.index,), graph))
    return grown


def _run_round(family: List[SpawnPlan], candidates: Sequence[SpawnCandidate], pool=None) -> List[SpawnPlan]:
    tasks = [(plan, candidates) for plan in family]
    if pool is None:
        results = [_extend_plan(t) for t in tasks]
    else:
        results = pool.map(_extend_plan, tasks)
    return [plan for batch in results for plan in batch]


def _check_uniform(family: List[SpawnPlan]) -> None:
    sizes = {plan.size for plan in family}
    if len(sizes) > 1:
        raise SpawnSetMismatchError(f"Spawn sets have different sizes: {sorted(sizes)}")


def choose_spawn_sets(
    graph: ReachabilityGraph,
    candidates: Sequence[SpawnCandidate],
    count: int,
    workers: int = 1,
) -> List[SpawnPlan]:
    """Return every maximal compatible spawn set of size ``<= count``.

    ``candidates`` may be any subset of ``spawn_candidates(size)`` in index
    order; sets are built in increasing ``index`` order.

    All returned plans have the same size. Returns ``[]`` when the base graph
    is unsolvable, ``count`` is zero, or no single candidate fits.
    """
    if count <= 0 or not graph.is_solvable():
        return []

    family = _extend_plan((SpawnPlan((), graph), candidates))
    if not family:
        return []

    if workers > 1:
        with multiprocessing.Pool(processes=workers) as pool:
            family = _grow(family, candidates, count, pool)
    else:
        family = _grow(family, candidates, count)

    _check_uniform(family)
    log.debug(f"Found {len(family)} valid spawn sets of size {family[0].size}")
    return family


def _grow(family: List[SpawnPlan], candidates: Sequence[SpawnCandidate], count: int, pool=None) -> List[SpawnPlan]:
    while family[0].size < count:
        grown = _run_round(family, candidates, pool)
        if not grown:
            break
        family = grown
        log.debug(f"Round complete: {len(family)} sets of size {family[0].size}")
    return family


def iterate_spawn_set(
    graph: ReachabilityGraph,
    candidates: Sequence[SpawnCandidate],
    count: int,
    select: SelectFn,
) -> SpawnPlan:
    """Greedily add one fitting candidate at a time, chosen by ``select``."""
    running = SpawnPlan((), graph)
    if count <= 0 or not graph.is_solvable():
        return running

    while running.size < count:
        used = set(running.indices)
        options = []
        for cand in candidates:
            if cand.index in used:
                continue
            ok, pruned = try_place(running.graph, cand)
            if ok:
                options.append(SpawnPlan(running.indices + (cand.index,), pruned))
        if not options:
            break
        running = select(options)
    return running


__all__ = [
    "SpawnCandidate",
    "SpawnPlan",
    "SpawnSetMismatchError",
    "SelectFn",
    "spawn_candidates",
    "try_place",
    "choose_spawn_sets",
    "iterate_spawn_set",
]
