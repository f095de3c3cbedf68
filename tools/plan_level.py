#!/usr/bin/env python3
"""
Spawn planning tool.

Usage:
    python3 tools/plan_level.py data/levels/level1.csv --turn 0 --count 3 --png out.png

Reads the projectiles a level places on ``--turn``, plans up to ``--count``
new edge spawns that keep the player solvable, prints them and optionally
renders the board with the planned trajectories.
"""

import argparse
import os
import sys

# Ensure we can import the package from the repository root
current_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(current_dir)
sys.path.insert(0, root_dir)

from bulletgrid.engine import SpawnPlanner  # noqa: E402
from bulletgrid.level_reader import projectiles_for_turn, read_level  # noqa: E402
from bulletgrid.rng_service import RNGService  # noqa: E402
from bulletgrid.settings import STRATEGIES, get_settings  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    p = argparse.ArgumentParser(description="Plan solvable projectile spawns for a level turn.")
    p.add_argument("level", nargs="?", help="Level CSV (x,y,direction,turn). Omit for an empty board.")
    p.add_argument("--turn", type=int, default=0, help="Level turn whose projectiles are on the board.")
    p.add_argument("--player", type=int, nargs=2, default=(0, 0), metavar=("X", "Y"), help="Player position.")
    p.add_argument("--count", type=int, default=settings.spawn_count, help="Projectiles to spawn.")
    p.add_argument("--size", type=int, default=settings.board_size, help="Board size (odd, >= 5).")
    p.add_argument("--strategy", choices=STRATEGIES, default=settings.strategy)
    p.add_argument("--policy", default=settings.policy, help="random, first, hardest or easiest.")
    p.add_argument("--workers", type=int, default=settings.workers)
    p.add_argument("--seed", type=int, default=settings.seed)
    p.add_argument("--png", help="Write a rendered board to this path.")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.seed is not None:
        RNGService.initialize(args.seed)

    existing = []
    if args.level:
        spawns = read_level(args.level)
        if spawns is None:
            print(f"Could not load level {args.level}; planning on an empty board.")
        else:
            existing = projectiles_for_turn(spawns, args.turn)

    planner = SpawnPlanner(
        board_size=args.size, strategy=args.strategy, select=args.policy, workers=args.workers
    )
    player = tuple(args.player)
    planned = planner.plan(player, existing, count=args.count)

    print(f"Planned {len(planned)} of {args.count} spawns:")
    for proj in planned:
        print(f"  ({proj.position[0]:>2}, {proj.position[1]:>2}) heading {proj.direction.name.lower()}")

    if args.png:
        from bulletgrid.renderer import BoardRenderer

        renderer = BoardRenderer(args.size)
        surface = renderer.render(player, existing, planned)
        renderer.save(surface, args.png)
    return 0


if __name__ == "__main__":
    sys.exit(main())
