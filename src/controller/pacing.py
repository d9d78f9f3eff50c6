"""Scheduling layer: named UX latencies and the search debouncer.

The short delays make loading/filtering states perceptible; they never
guard correctness. Controllers take a Pacing so tests can shrink them.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

log = logging.getLogger(__name__)

# Quiet period after the last search keystroke
SEARCH_DEBOUNCE = 0.3
# "Applying filters..." placeholder on large collections
FILTER_PLACEHOLDER_DELAY = 0.1
# "Resetting filters..." placeholder
RESET_PLACEHOLDER_DELAY = 0.15
# Wait before merging session user info into a freshly opened form
AUX_FILL_DELAY = 0.1


@dataclass(frozen=True)
class Pacing:
    search_debounce: float = SEARCH_DEBOUNCE
    filter_placeholder: float = FILTER_PLACEHOLDER_DELAY
    reset_placeholder: float = RESET_PLACEHOLDER_DELAY
    aux_fill: float = AUX_FILL_DELAY

    @classmethod
    def instant(cls) -> Pacing:
        return cls(0.0, 0.0, 0.0, 0.0)


DEFAULT_PACING = Pacing()


async def pause(delay: float) -> None:
    """Artificial latency; a zero delay still yields to the event loop once."""
    await asyncio.sleep(max(0.0, delay))


class Debouncer:
    """Coalesce rapid triggers into one callback with the latest value.

    Usage:
        debouncer = Debouncer(0.3, apply_search)
        debouncer.trigger("m")       # each keystroke restarts the timer
        debouncer.trigger("ma")
        await debouncer.flush("mar") # Enter: run now, drop the pending one
    """

    def __init__(self, delay: float, callback: Callable[[str], Awaitable[None] | None]) -> None:
        self.delay = delay
        self.callback = callback
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, value: str) -> None:
        """Restart the quiet period; must be called from a running event loop."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire_later(value))

    async def flush(self, value: str) -> None:
        self.cancel()
        await self._invoke(value)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _fire_later(self, value: str) -> None:
        await pause(self.delay)
        self._task = None
        await self._invoke(value)

    async def _invoke(self, value: str) -> None:
        result = self.callback(value)
        if inspect.isawaitable(result):
            await result
