"""Selection policies for choosing among equally valid spawn plans.

Both search strategies hand the policy a non-empty list of ``SpawnPlan``
options and use whatever it returns. Policies are plain callables, so a
lambda works too; the named ones here are what settings and the CLI refer to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from bulletgrid.rng_service import RNGService
from bulletgrid.spawn_search import SpawnPlan


class SelectionPolicy(ABC):
    @abstractmethod
    def select(self, options: Sequence[SpawnPlan]) -> SpawnPlan:
        pass

    def __call__(self, options: Sequence[SpawnPlan]) -> SpawnPlan:
        if not options:
            raise ValueError("Cannot select from an empty option list")
        return self.select(options)


class RandomPolicy(SelectionPolicy):
    """Uniform pick. Uses the shared RNGService unless given its own."""

    def __init__(self, rng: Optional[RNGService] = None):
        self.rng = rng

    def select(self, options: Sequence[SpawnPlan]) -> SpawnPlan:
        rng = self.rng or RNGService.get()
        return options[rng.randrange(len(options))]


class FirstPolicy(SelectionPolicy):
    def select(self, options: Sequence[SpawnPlan]) -> SpawnPlan:
        return options[0]


def _last_turn_reach(plan: SpawnPlan) -> int:
    return plan.graph.reached_count(plan.graph.turns - 1)


class MostConstrainingPolicy(SelectionPolicy):
    """Leave the player the fewest reachable cells on the final turn (harder)."""

    def select(self, options: Sequence[SpawnPlan]) -> SpawnPlan:
        return min(options, key=lambda p: (_last_turn_reach(p), p.graph.reached_count()))


class LeastConstrainingPolicy(SelectionPolicy):
    """Keep as many final-turn cells open as possible (easier)."""

    def select(self, options: Sequence[SpawnPlan]) -> SpawnPlan:
        return max(options, key=lambda p: (_last_turn_reach(p), p.graph.reached_count()))


class PolicyRegistry:
    _policies: Dict[str, SelectionPolicy] = {}

    @classmethod
    def register(cls, name: str, policy: SelectionPolicy) -> None:
        cls._policies[name] = policy

    @classmethod
    def get(cls, name: str) -> SelectionPolicy:
        if name not in cls._policies:
            raise ValueError(f"Selection policy '{name}' not found in registry.")
        return cls._policies[name]

    @classmethod
    def names(cls):
        return sorted(cls._policies)


PolicyRegistry.register("random", RandomPolicy())
PolicyRegistry.register("first", FirstPolicy())
PolicyRegistry.register("hardest", MostConstrainingPolicy())
PolicyRegistry.register("easiest", LeastConstrainingPolicy())


def get_policy(name: str) -> SelectionPolicy:
    return PolicyRegistry.get(name)


__all__ = [
    "SelectionPolicy",
    "RandomPolicy",
    "FirstPolicy",
    "MostConstrainingPolicy",
    "LeastConstrainingPolicy",
    "PolicyRegistry",
    "get_policy",
]
