import pytest

from bulletgrid.board import Projectile
from bulletgrid.engine import SpawnPlanner, build_reachability, plan_spawn_sets, plan_spawns
from bulletgrid.geometry import Direction, position_to_index
from bulletgrid.rng_service import RNGService
from bulletgrid.settings import PlannerSettings

BOXED_IN_5 = [
    Projectile((0, 2), Direction.DOWN),
    Projectile((-2, 0), Direction.RIGHT),
    Projectile((0, -2), Direction.UP),
    Projectile((2, 0), Direction.LEFT),
]


def inward(col, row, size):
    last = size - 1
    if col == 0:
        return Direction.RIGHT
    if col == last:
        return Direction.LEFT
    if row == 0:
        return Direction.DOWN
    assert row == last
    return Direction.UP


def assert_on_perimeter(projectiles, size):
    last = size - 1
    for proj in projectiles:
        col, row = position_to_index(proj.position, size)
        assert row in (0, last) or col in (0, last)
        assert (row, col) not in {(0, 0), (0, last), (last, 0), (last, last)}
        assert proj.direction is inward(col, row, size)


def test_three_spawns_on_empty_7x7_keep_a_path():
    RNGService.get().seed(7)
    spawns = plan_spawns((0, 0), [], size=7, count=3, strategy="choose")
    assert len(spawns) == 3
    assert len({p.position for p in spawns}) == 3
    assert_on_perimeter(spawns, 7)

    graph = build_reachability((0, 0), spawns, 7)
    assert graph.is_solvable()
    for turn in range(graph.turns):
        assert graph.reached_count(turn) > 0


def test_boxed_in_player_gets_no_spawns():
    assert not build_reachability((0, 0), BOXED_IN_5, 5).is_solvable()
    for count in (0, 1, 3):
        assert plan_spawns((0, 0), BOXED_IN_5, size=5, count=count) == []
        assert plan_spawns((0, 0), BOXED_IN_5, size=5, count=count, strategy="iterate") == []


def test_single_spawn_family_on_empty_7x7():
    family = plan_spawn_sets((0, 0), [], size=7, count=1)
    assert len(family) == 20
    assert all(plan.size == 1 for plan in family)


def test_zero_count_returns_nothing():
    assert plan_spawns((0, 0), [], size=7, count=0) == []


def test_iterate_strategy_with_existing_projectiles():
    existing = [Projectile((-3, 1), Direction.RIGHT), Projectile((1, 3), Direction.DOWN)]
    spawns = plan_spawns((0, 0), existing, size=7, count=4, strategy="iterate", select="first")
    assert 0 < len(spawns) <= 4
    assert_on_perimeter(spawns, 7)
    assert build_reachability((0, 0), existing + spawns, 7).is_solvable()


def test_capacity_limits_result():
    spawns = plan_spawns((0, 0), [], size=5, count=12, select="first")
    assert 0 < len(spawns) < 12
    assert build_reachability((0, 0), spawns, 5).is_solvable()


def test_choose_is_deterministic_with_first_policy():
    a = plan_spawns((1, 1), [], size=7, count=2, select="first")
    b = plan_spawns((1, 1), [], size=7, count=2, select="first")
    assert a == b


def test_custom_callable_policy():
    seen = []

    def pick_last(options):
        seen.append(len(options))
        return options[-1]

    spawns = plan_spawns((0, 0), [], size=7, count=1, select=pick_last)
    assert seen == [20]
    # Last candidate in row-major order: bottom row, second column from the right.
    assert spawns == [Projectile((2, -3), Direction.UP)]


def test_invalid_arguments():
    with pytest.raises(ValueError):
        plan_spawns((0, 0), [], size=7, strategy="bogus")
    with pytest.raises(ValueError):
        plan_spawns((0, 0), [], size=7, count=-1)
    with pytest.raises(ValueError):
        plan_spawns((0, 0), [], size=8)
    with pytest.raises(ValueError):
        plan_spawns((0, 0), [], size=7, select="nope")


def test_planner_from_settings(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text('{"board_size": 5, "strategy": "iterate", "policy": "first", "seed": 3}')
    planner = SpawnPlanner.from_settings(PlannerSettings(str(path)))
    assert planner.board_size == 5
    assert planner.strategy == "iterate"
    spawns = planner.plan((0, 0), [], count=2)
    assert len(spawns) == 2
    assert_on_perimeter(spawns, 5)
