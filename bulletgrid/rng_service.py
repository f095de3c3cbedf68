"""Process-wide seeded random source for spawn selection.

Random selection policies draw from here instead of the global ``random``
module so that a planning session can be replayed from its seed
(``BULLETGRID_SEED`` or ``RNGService.initialize``).
"""

import os
import random

from bulletgrid.logger import get_logger

log = get_logger("rng")

Seed = int | float | str | bytes | bytearray | None


def _env_seed() -> Seed:
    raw = os.environ.get("BULLETGRID_SEED")
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


class RNGService:
    _instance: "RNGService | None" = None

    def __init__(self, seed: Seed = None):
        self._generator = random.Random(seed)
        self._seed_val = seed
        log.debug(f"RNG initialized with seed: {seed!r}")

    @classmethod
    def get(cls) -> "RNGService":
        if cls._instance is None:
            cls._instance = cls(_env_seed())
        return cls._instance

    @classmethod
    def initialize(cls, seed: Seed = None) -> None:
        cls._instance = cls(seed)

    @property
    def seed_value(self) -> Seed:
        return self._seed_val

    def seed(self, a: Seed = None) -> None:
        self._seed_val = a
        self._generator.seed(a)
        log.debug(f"RNG re-seeded: {a!r}")

    def randrange(self, stop: int) -> int:
        """Return a random index in ``range(stop)``."""
        return self._generator.randrange(stop)
