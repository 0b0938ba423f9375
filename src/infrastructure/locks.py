"""
In-process busy guard.

The simulation engine does not serialise calls itself.  The API layer
holds one ``BusyGuard`` so a second simulation submitted while one is
still running is rejected instead of queued, the same way the UI
disables its button while busy.

Acquire never waits: it either takes the guard or reports it as held.
"""

from __future__ import annotations

import asyncio


class SimulationInProgress(RuntimeError):
    """Raised when the guard is already held."""


class BusyGuard:
    def __init__(self, name: str = "simulation"):
        self.name = name
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def acquire(self) -> bool:
        """Try to acquire. Returns True on success."""
        if self._lock.locked():
            return False
        await self._lock.acquire()
        return True

    def release(self) -> None:
        if self._lock.locked():
            self._lock.release()

    # context-manager support
    async def __aenter__(self):
        acquired = await self.acquire()
        if not acquired:
            raise SimulationInProgress(f"A {self.name} is already running")
        return self

    async def __aexit__(self, *args):
        self.release()
