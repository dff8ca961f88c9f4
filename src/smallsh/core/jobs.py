"""Fixed-capacity table of background job pids."""

from __future__ import annotations

import logging
from collections.abc import Iterator

logger = logging.getLogger(__name__)

# Hard limit on concurrently tracked background jobs. Launches past this
# point still run; they are simply never reported.
MAX_JOBS = 100

_EMPTY = 0


class JobTable:
    """Slot array of background pids; a slot's index never changes."""

    def __init__(self, capacity: int = MAX_JOBS) -> None:
        self.capacity = capacity
        self._slots: list[int] = [_EMPTY] * capacity

    def insert(self, pid: int) -> int | None:
        """Store pid in the first free slot. Returns the slot, or None if full."""
        for slot, current in enumerate(self._slots):
            if current == _EMPTY:
                self._slots[slot] = pid
                return slot
        logger.debug("Job table full, pid %d is untracked", pid)
        return None

    def remove(self, pid: int) -> bool:
        """Clear the slot holding pid. Returns True if pid was tracked."""
        for slot, current in enumerate(self._slots):
            if current == pid:
                self._slots[slot] = _EMPTY
                return True
        return False

    def clear(self) -> None:
        self._slots = [_EMPTY] * self.capacity

    def __contains__(self, pid: object) -> bool:
        return pid != _EMPTY and pid in self._slots

    def __iter__(self) -> Iterator[int]:
        # Snapshot so callers may remove while iterating
        return iter([pid for pid in self._slots if pid != _EMPTY])

    def __len__(self) -> int:
        return sum(1 for pid in self._slots if pid != _EMPTY)
