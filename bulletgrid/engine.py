"""Spawn planning entry point.

Pipeline: player + projectiles -> board -> simulated turns -> reachability
graph -> spawn search -> new projectiles.

The graph spans ``size - 1`` turns: after ``size - 2`` advances every
projectile spawned this turn has crossed the board and left it, and the
extra layer is the current turn.

Example::

    planner = SpawnPlanner(board_size=7, strategy="choose")
    spawns = planner.plan((0, 0), existing, count=3)
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

from bulletgrid.board import Projectile, simulate, to_board
from bulletgrid.constants import DEFAULT_BOARD_SIZE, DEFAULT_STRATEGY, DEFAULT_WORKERS
from bulletgrid.graph import ReachabilityGraph, build_graph
from bulletgrid.logger import get_logger
from bulletgrid.policies import get_policy
from bulletgrid.rng_service import RNGService
from bulletgrid.settings import STRATEGIES, PlannerSettings
from bulletgrid.spawn_search import (
    SelectFn,
    SpawnPlan,
    choose_spawn_sets,
    iterate_spawn_set,
    spawn_candidates,
)

log = get_logger("engine")

PolicyArg = Union[str, SelectFn, None]


def _resolve_policy(select: PolicyArg) -> SelectFn:
    if select is None:
        return get_policy("random")
    if isinstance(select, str):
        return get_policy(select)
    return select


def build_reachability(
    player_pos: Tuple[int, int], projectiles: Iterable[Projectile], size: int = DEFAULT_BOARD_SIZE
) -> ReachabilityGraph:
    """Board -> simulated turns -> reachability graph for the given state."""
    board = to_board(player_pos, projectiles, size)
    boards = simulate(board, size - 1)
    return build_graph(boards, board.player_cell())


def plan_spawn_sets(
    player_pos: Tuple[int, int],
    projectiles: Iterable[Projectile],
    size: int = DEFAULT_BOARD_SIZE,
    count: int = 1,
    workers: int = DEFAULT_WORKERS,
) -> List[SpawnPlan]:
    """Exhaustive search only: the full family of maximal compatible sets."""
    if count < 0:
        raise ValueError(f"Spawn count must be >= 0, got {count}")
    graph = build_reachability(player_pos, projectiles, size)
    if not graph.is_solvable():
        log.info("Player is stuck, no projectiles can be spawned")
        return []
    return choose_spawn_sets(graph, spawn_candidates(size), count, workers=workers)


def plan_spawns(
    player_pos: Tuple[int, int],
    projectiles: Iterable[Projectile],
    size: int = DEFAULT_BOARD_SIZE,
    count: int = 1,
    strategy: str = DEFAULT_STRATEGY,
    select: PolicyArg = None,
    workers: int = DEFAULT_WORKERS,
) -> List[Projectile]:
    """Return up to ``count`` new edge projectiles that keep the board solvable.

    Args:
        player_pos: Player position in centered coordinates.
        projectiles: Projectiles already on the board.
        size: Board size (odd, >= 5).
        count: Number of projectiles wanted.
        strategy: "choose" (exhaustive) or "iterate" (randomized incremental).
        select: Policy name or callable choosing among equally valid plans.
        workers: Process count for exhaustive search rounds.

    Returns:
        New projectiles (edge cell + inward direction). Fewer than ``count``
        if the board cannot take more, empty if the player is already stuck.

    Raises:
        PlayerNotFoundError: The board has no player cell.
        SpawnSetMismatchError: Exhaustive search produced uneven set sizes.
        ValueError: Bad size, count, strategy or policy name.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown spawn strategy '{strategy}', expected one of {STRATEGIES}")
    if count < 0:
        raise ValueError(f"Spawn count must be >= 0, got {count}")
    policy = _resolve_policy(select)
    candidates = spawn_candidates(size)

    graph = build_reachability(player_pos, projectiles, size)
    if not graph.is_solvable():
        log.info("Player is stuck, no projectiles can be spawned")
        return []
    if count == 0:
        return []

    if strategy == "choose":
        family = choose_spawn_sets(graph, candidates, count, workers=workers)
        if not family:
            return []
        log.info(f"Found {len(family)} valid spawn sets of size {family[0].size}")
        plan = policy(family)
    else:
        plan = iterate_spawn_set(graph, candidates, count, policy)

    return [candidates[i].to_projectile(size) for i in plan.indices]


class SpawnPlanner:
    """Settings-bound front end over ``plan_spawns``."""

    def __init__(
        self,
        board_size: int = DEFAULT_BOARD_SIZE,
        strategy: str = DEFAULT_STRATEGY,
        select: PolicyArg = None,
        workers: int = DEFAULT_WORKERS,
    ):
        self.board_size = board_size
        self.strategy = strategy
        self.select = _resolve_policy(select)
        self.workers = workers

    @classmethod
    def from_settings(cls, settings: PlannerSettings) -> "SpawnPlanner":
        if settings.seed is not None:
            RNGService.initialize(settings.seed)
        return cls(
            board_size=settings.board_size,
            strategy=settings.strategy,
            select=settings.policy,
            workers=settings.workers,
        )

    def plan(
        self, player_pos: Tuple[int, int], projectiles: Sequence[Projectile], count: int = 1
    ) -> List[Projectile]:
        return plan_spawns(
            player_pos,
            projectiles,
            size=self.board_size,
            count=count,
            strategy=self.strategy,
            select=self.select,
            workers=self.workers,
        )


__all__ = ["plan_spawns", "plan_spawn_sets", "build_reachability", "SpawnPlanner"]
