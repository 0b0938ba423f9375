"""Bounded, newest-first log of simulation runs (process lifetime only)."""

from __future__ import annotations

from collections import deque

from .entities import SimulationResult

DEFAULT_HISTORY_SIZE = 5


class SimulationHistory:
    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE):
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self.capacity = capacity
        # appendleft + maxlen drops the oldest entry from the right
        self._entries: deque[SimulationResult] = deque(maxlen=capacity)

    def record(self, result: SimulationResult) -> None:
        self._entries.appendleft(result)

    def list(self) -> tuple[SimulationResult, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
