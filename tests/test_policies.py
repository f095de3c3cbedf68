import pytest

from bulletgrid.engine import build_reachability
from bulletgrid.policies import (
    FirstPolicy,
    LeastConstrainingPolicy,
    MostConstrainingPolicy,
    PolicyRegistry,
    RandomPolicy,
    get_policy,
)
from bulletgrid.rng_service import RNGService
from bulletgrid.spawn_search import SpawnPlan, spawn_candidates, try_place


def single_spawn_options(size=7):
    graph = build_reachability((0, 0), [], size)
    options = []
    for cand in spawn_candidates(size):
        ok, pruned = try_place(graph, cand)
        if ok:
            options.append(SpawnPlan((cand.index,), pruned))
    return options


def last_turn_reach(plan):
    return plan.graph.reached_count(plan.graph.turns - 1)


def test_registry_defaults():
    assert isinstance(get_policy("random"), RandomPolicy)
    assert isinstance(get_policy("first"), FirstPolicy)
    assert isinstance(get_policy("hardest"), MostConstrainingPolicy)
    assert isinstance(get_policy("easiest"), LeastConstrainingPolicy)
    assert set(PolicyRegistry.names()) >= {"random", "first", "hardest", "easiest"}


def test_unknown_policy_raises():
    with pytest.raises(ValueError):
        get_policy("does-not-exist")


def test_empty_options_rejected():
    with pytest.raises(ValueError):
        FirstPolicy()([])


def test_random_policy_is_seeded():
    options = single_spawn_options()
    rng = RNGService(123)
    picks_a = [RandomPolicy(rng)(options).indices for _ in range(5)]
    rng.seed(123)
    picks_b = [RandomPolicy(rng)(options).indices for _ in range(5)]
    assert picks_a == picks_b
    assert all(p in [o.indices for o in options] for p in picks_a)


def test_constraining_policies_order_by_final_reach():
    options = single_spawn_options()
    hardest = MostConstrainingPolicy()(options)
    easiest = LeastConstrainingPolicy()(options)
    reaches = [last_turn_reach(o) for o in options]
    assert last_turn_reach(hardest) == min(reaches)
    assert last_turn_reach(easiest) == max(reaches)
