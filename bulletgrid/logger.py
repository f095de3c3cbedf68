"""Leveled logging wrapper for the planner.

Minimum level comes from ``BULLETGRID_LOG_LEVEL`` (DEBUG, INFO, WARN, ERROR).
Each module grabs its own named logger at import time.
"""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from typing import TextIO

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_DEFAULT_LEVEL_NAME = os.environ.get("BULLETGRID_LOG_LEVEL", "INFO").upper()
_MIN_LEVEL = _LEVELS.get(_DEFAULT_LEVEL_NAME, 20)


@dataclass
class Logger:
    name: str
    stream: TextIO | None = None
    min_level: int | None = None

    def _log(self, level: str, *parts):
        numeric = _LEVELS[level]
        threshold = _MIN_LEVEL if self.min_level is None else self.min_level
        if numeric < threshold:
            return
        stream = self.stream if self.stream is not None else sys.stdout
        if stream is None:
            return
        ts = time.strftime("%H:%M:%S")
        msg = " ".join(str(p) for p in parts)
        line = f"[{ts}] {level:<5} {self.name}: {msg}\n"
        try:
            stream.write(line)
            stream.flush()
        except (OSError, ValueError):
            # Closed or detached stream (pythonw, pool workers at shutdown).
            return

    def debug(self, *parts):
        self._log("DEBUG", *parts)

    def info(self, *parts):
        self._log("INFO", *parts)

    def warn(self, *parts):
        self._log("WARN", *parts)

    def error(self, *parts):
        self._log("ERROR", *parts)


def get_logger(name: str = "bulletgrid") -> Logger:
    return Logger(name)


__all__ = ["get_logger", "Logger"]
