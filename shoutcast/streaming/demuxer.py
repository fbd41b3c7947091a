from __future__ import annotations

import enum
import io
import threading
from collections import deque
from collections.abc import Callable, Iterator

from shoutcast.models.metadata import BLOCK_UNIT, Metadata
from shoutcast.models.station import StationInfo
from shoutcast.streaming.observer import NullObserver, StreamObserver
from shoutcast.streaming.sources.base import ByteSource

MetadataCallback = Callable[[Metadata], None]


class State(enum.Enum):
    AUDIO = "audio"
    LENGTH = "length"
    METADATA = "metadata"


class IcyStream(io.RawIOBase):
    """Audio-only view of an ICY stream.

    The source delivers ``metaint`` audio bytes, one length byte and
    ``length * 16`` bytes of metadata text, over and over. Reads write the
    raw bytes straight into the caller's buffer and compact the audio in
    place, so only audio is returned. Metadata blocks may be split over any
    number of reads, and one read may cross any number of blocks.

    ``on_metadata_change`` is called on the reading thread, inside the read
    that completed the block, once per distinct snapshot and in stream
    order. A slow callback stalls the stream; hand the snapshot off (see
    :class:`shoutcast.services.metadata_queue.MetadataQueue`) if that
    matters. An exception raised by the callback propagates out of the read
    and the audio of that read is lost. Snapshots decoded in the same read
    but not yet delivered are delivered at the start of the next read.

    Not safe for concurrent reads. :meth:`close` may be called from any
    thread, including while a read is blocked, and releases the source
    exactly once.
    """

    def __init__(
        self,
        source: ByteSource,
        metaint: int,
        *,
        station: StationInfo | None = None,
        on_metadata_change: MetadataCallback | None = None,
        observer: StreamObserver | None = None,
    ) -> None:
        super().__init__()
        self._close_lock = threading.Lock()
        self._released = True
        if metaint < 1:
            raise ValueError(f"metaint must be positive, got {metaint}")

        self._source = source
        self._metaint = metaint
        self._observer: StreamObserver = observer or NullObserver()
        self.station = station
        self.on_metadata_change = on_metadata_change
        self.metadata: Metadata | None = None

        self._pos = 0
        self._state = State.AUDIO
        self._block_len = 0
        self._pending = bytearray()
        self._decoded: deque[Metadata] = deque()
        self._released = False

    @property
    def metaint(self) -> int:
        return self._metaint

    @property
    def pos(self) -> int:
        """Audio bytes read since the last metadata block."""
        return self._pos

    @property
    def state(self) -> State:
        return self._state

    @property
    def name(self) -> str:
        return self.station.name if self.station else ""

    @property
    def genre(self) -> str:
        return self.station.genre if self.station else ""

    @property
    def description(self) -> str:
        return self.station.description if self.station else ""

    @property
    def url(self) -> str:
        return self.station.url if self.station else ""

    @property
    def bitrate(self) -> int:
        return self.station.bitrate if self.station else 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int | None:
        if self.closed:
            raise ValueError("I/O operation on closed stream")

        with memoryview(buffer).cast("B") as view:
            if not len(view):
                return 0
            self._deliver()
            while True:
                n = self._source.readinto(view)
                if n is None:
                    return None
                if n == 0:
                    self._end_of_stream()
                    return 0

                written = self._demux(view, n)
                self._deliver()
                # A read that was all metadata must not look like EOF.
                if written:
                    return written

    def chunks(self, size: int = io.DEFAULT_BUFFER_SIZE) -> Iterator[bytes]:
        """Yield audio in pieces of at most ``size`` bytes until EOF."""
        buffer = bytearray(size)
        while True:
            n = self.readinto(buffer)
            if not n:
                return
            yield bytes(buffer[:n])

    def close(self) -> None:
        with self._close_lock:
            release = not self._released
            self._released = True
        if not release:
            super().close()
            return
        try:
            self._observer.closing(self.station)
            self._source.close()
        finally:
            super().close()

    def _demux(self, view: memoryview, n: int) -> int:
        src = 0
        dst = 0
        while src < n:
            if self._state is State.AUDIO:
                take = min(self._metaint - self._pos, n - src)
                if dst != src:
                    view[dst : dst + take] = view[src : src + take]
                src += take
                dst += take
                self._pos += take
                if self._pos == self._metaint:
                    self._state = State.LENGTH

            elif self._state is State.LENGTH:
                self._block_len = view[src] * BLOCK_UNIT
                src += 1
                self._pos = 0
                if self._block_len:
                    self._state = State.METADATA
                else:
                    self._state = State.AUDIO

            else:
                take = min(self._block_len - len(self._pending), n - src)
                self._pending += view[src : src + take]
                src += take
                if len(self._pending) == self._block_len:
                    self._decoded.append(Metadata.from_bytes(self._pending))
                    self._pending.clear()
                    self._state = State.AUDIO
        return dst

    def _deliver(self) -> None:
        while self._decoded:
            metadata = self._decoded.popleft()
            if metadata != self.metadata:
                self.metadata = metadata
                self._notify(metadata)

    def _notify(self, metadata: Metadata) -> None:
        self._observer.metadata_changed(metadata)
        callback = self.on_metadata_change
        if callback is not None:
            callback(metadata)

    def _end_of_stream(self) -> None:
        if self._state is State.METADATA:
            self._observer.truncated(len(self._pending), self._block_len)
            self._pending.clear()
            self._state = State.AUDIO
