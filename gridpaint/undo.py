"""Bounded undo history of canvas snapshots."""

import logging
from collections import deque

from . import config

log = logging.getLogger("gridpaint")


class UndoStack:
    """Fixed-capacity LIFO of opaque snapshots.

    Pushing past ``capacity`` silently drops the oldest entry.  Snapshots are
    stored as given; the stack never looks inside them.
    """

    def __init__(self, capacity=config.UNDO_CAPACITY):
        self.capacity = max(0, capacity)
        self._entries = deque(maxlen=self.capacity)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        """Oldest first."""
        return iter(self._entries)

    def __bool__(self):
        return bool(self._entries)

    def push(self, snapshot):
        if len(self._entries) == self.capacity and self.capacity:
            log.debug("[undo] capacity reached, dropping oldest snapshot")
        self._entries.append(snapshot)

    def pop(self):
        if not self._entries:
            return None
        return self._entries.pop()

    def undo(self, canvas):
        """Restore the newest snapshot onto ``canvas``.

        Returns False, leaving everything untouched, when there is nothing
        to undo.
        """
        if not self._entries:
            log.info("[undo] Nothing to undo")
            return False
        snapshot = self._entries.pop()
        canvas.write_region(snapshot, 0, 0)
        log.info(f"[undo] restored, {len(self._entries)} left")
        return True

    def clear(self):
        self._entries.clear()
