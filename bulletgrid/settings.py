import json
import os

from bulletgrid.constants import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_POLICY,
    DEFAULT_SPAWN_COUNT,
    DEFAULT_STRATEGY,
    DEFAULT_WORKERS,
    MIN_BOARD_SIZE,
)
from bulletgrid.logger import get_logger

log = get_logger("settings")

STRATEGIES = ("choose", "iterate")


class PlannerSettings:
    SETTINGS_FILE = "data/planner.json"

    def __init__(self, path: str | None = None):
        self.path = path or os.environ.get("BULLETGRID_SETTINGS", self.SETTINGS_FILE)
        self._board_size = DEFAULT_BOARD_SIZE
        self._spawn_count = DEFAULT_SPAWN_COUNT
        self._strategy = DEFAULT_STRATEGY
        self._policy = DEFAULT_POLICY
        self._workers = DEFAULT_WORKERS
        self.seed = None
        self._dirty = False
        self.load_settings()

    @property
    def board_size(self) -> int:
        return self._board_size

    @board_size.setter
    def board_size(self, value: int) -> None:
        new_val = max(MIN_BOARD_SIZE, int(value))
        if new_val % 2 == 0:
            new_val += 1
        if new_val != self._board_size:
            self._board_size = new_val
            self._dirty = True

    @property
    def spawn_count(self) -> int:
        return self._spawn_count

    @spawn_count.setter
    def spawn_count(self, value: int) -> None:
        new_val = max(0, int(value))
        if new_val != self._spawn_count:
            self._spawn_count = new_val
            self._dirty = True

    @property
    def strategy(self) -> str:
        return self._strategy

    @strategy.setter
    def strategy(self, value: str) -> None:
        if value in STRATEGIES and value != self._strategy:
            self._strategy = value
            self._dirty = True

    @property
    def policy(self) -> str:
        return self._policy

    @policy.setter
    def policy(self, value: str) -> None:
        value = str(value)
        if value != self._policy:
            self._policy = value
            self._dirty = True

    @property
    def workers(self) -> int:
        return self._workers

    @workers.setter
    def workers(self, value: int) -> None:
        new_val = max(1, int(value))
        if new_val != self._workers:
            self._workers = new_val
            self._dirty = True

    def load_settings(self):
        """Load settings from the JSON file; keep defaults for anything missing."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log.warn("Error loading planner settings; using defaults", e)
            return
        if not isinstance(data, dict):
            log.warn(f"Planner settings in {self.path} must be a JSON object; using defaults")
            return
        # Go through the setters so file values get the same clamping.
        for key in ("board_size", "spawn_count", "strategy", "policy", "workers"):
            if key not in data:
                continue
            try:
                setattr(self, key, data[key])
            except (TypeError, ValueError):
                log.warn(f"Ignoring invalid {key} {data[key]!r} in {self.path}; keeping {getattr(self, key)!r}")
        seed = data.get("seed", self.seed)
        if seed is None or isinstance(seed, (int, str)):
            self.seed = seed
        else:
            log.warn(f"Ignoring invalid seed {seed!r} in {self.path}")
        self._dirty = False

    def to_dict(self) -> dict:
        return {
            "board_size": self._board_size,
            "spawn_count": self._spawn_count,
            "strategy": self._strategy,
            "policy": self._policy,
            "workers": self._workers,
            "seed": self.seed,
        }

    def flush(self):
        """Write settings to disk if dirty and clear dirty flag."""
        if not self._dirty:
            return
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(self.to_dict(), f, indent=4)
            self._dirty = False
            log.debug("Planner settings flushed")
        except IOError as e:
            log.error("Error saving planner settings", e)


_settings: PlannerSettings | None = None


def get_settings() -> PlannerSettings:
    global _settings
    if _settings is None:
        _settings = PlannerSettings()
    return _settings


__all__ = ["PlannerSettings", "get_settings", "STRATEGIES"]
