"""Worst-case timing probes for expensive history-source calls."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class Timing:
    """Longest observed duration of one named operation."""

    name: str
    index: int = 0
    duration: float = 0.0
    samples: int = 0

    def record_max(self, started: float, index: int) -> None:
        """Fold in one measurement that began at ``started`` (``time.perf_counter``)."""
        elapsed = time.perf_counter() - started
        self.samples += 1
        if elapsed > self.duration:
            self.duration = elapsed
            self.index = index
            logger.debug("new worst %s", self)

    def __str__(self) -> str:
        return f"{self.name}: {self.duration * 1000.0:.0f}ms (index {self.index})"


class Timings:
    """Named collection of ``Timing`` probes in registration order."""

    def __init__(self) -> None:
        self._timings: dict[str, Timing] = {}

    def get(self, name: str) -> Timing:
        timing = self._timings.get(name)
        if timing is None:
            timing = Timing(name)
            self._timings[name] = timing
        return timing

    def lines(self) -> list[str]:
        return [str(timing) for timing in self._timings.values() if timing.samples]


__all__ = ["Timing", "Timings"]
