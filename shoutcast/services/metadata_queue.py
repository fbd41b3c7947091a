from __future__ import annotations

import queue
import threading
from collections.abc import Iterator

from shoutcast.models.metadata import Metadata


class MetadataQueue:
    """Hands metadata snapshots from the reading thread to a consumer.

    Use an instance as ``on_metadata_change``. Putting never blocks: when
    the queue is full the oldest snapshot is dropped. Snapshots keep stream
    order, but a consumer that falls behind misses intermediate ones. The
    plain inline callback never drops anything and stalls the stream
    instead.
    """

    def __init__(self, maxsize: int = 16) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._queue: queue.Queue[Metadata | None] = queue.Queue(maxsize)
        self._put_lock = threading.Lock()
        self.dropped = 0

    def __call__(self, metadata: Metadata) -> None:
        self._put(metadata)

    def close(self) -> None:
        """Wake the consumer; iteration stops after the queued snapshots."""
        self._put(None)

    def get(self, timeout: float | None = None) -> Metadata | None:
        """Next snapshot, or ``None`` once closed.

        Raises :class:`queue.Empty` when ``timeout`` expires first.
        """
        return self._queue.get(timeout=timeout)

    def __iter__(self) -> Iterator[Metadata]:
        while True:
            item = self._queue.get()
            if item is None:
                return
            yield item

    def _put(self, item: Metadata | None) -> None:
        with self._put_lock:
            while True:
                try:
                    self._queue.put_nowait(item)
                    return
                except queue.Full:
                    pass
                try:
                    self._queue.get_nowait()
                    self.dropped += 1
                except queue.Empty:
                    pass
