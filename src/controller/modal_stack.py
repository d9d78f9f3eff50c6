"""Reference-counted modal stack.

Replaces a single global scroll lock: the lock holds while at least one
modal is open, so closing an inner modal does not unlock the screen under
an outer one.
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable

log = logging.getLogger(__name__)


class ModalStack:
    """Tracks open modals by owner; `on_change(locked)` fires on lock flips."""

    def __init__(self, on_change: Callable[[bool], None] | None = None) -> None:
        self._owners: list[Hashable] = []
        self.on_change = on_change

    @property
    def depth(self) -> int:
        return len(self._owners)

    @property
    def locked(self) -> bool:
        return bool(self._owners)

    @property
    def top(self) -> Hashable | None:
        return self._owners[-1] if self._owners else None

    def push(self, owner: Hashable) -> None:
        """Register an open modal. Pushing the same owner twice is a no-op."""
        if owner in self._owners:
            return
        was_locked = self.locked
        self._owners.append(owner)
        log.debug(f"modal stack push {owner!r} (depth {self.depth})")
        if not was_locked:
            self._notify()

    def pop(self, owner: Hashable) -> None:
        """Unregister a modal. Popping an owner that is not open is a no-op."""
        if owner not in self._owners:
            return
        self._owners.remove(owner)
        log.debug(f"modal stack pop {owner!r} (depth {self.depth})")
        if not self.locked:
            self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.locked)
