"""Channel carrying probe updates from worker threads to the selector."""

import queue
import threading
from typing import List, Optional

from vibe_sessions.models.updates import Update


class UpdateChannel:
    """
    Multi-producer, single-consumer channel of immutable updates.

    Any number of worker threads may ``send``; only the selector thread calls
    ``drain``, which never blocks. Producers call ``close`` once every probe
    has finished or been skipped. The consumer does not need to know how many
    producers exist and never waits for closure.
    """

    def __init__(self) -> None:
        self._q: "queue.SimpleQueue[Update]" = queue.SimpleQueue()
        self._closed = threading.Event()

    def send(self, update: Update) -> None:
        self._q.put(update)

    def close(self) -> None:
        self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def exhausted(self) -> bool:
        """True once the channel is closed and everything sent has been drained."""
        return self.closed and self._q.empty()

    def drain(self, max_items: Optional[int] = None) -> List[Update]:
        """Return every update available right now, in arrival order."""
        out: List[Update] = []
        while max_items is None or len(out) < max_items:
            try:
                out.append(self._q.get_nowait())
            except queue.Empty:
                break
        return out
