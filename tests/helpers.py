from __future__ import annotations

from shoutcast.models.metadata import encode_block


class ChunkedSource:
    """In-memory source handing out at most ``max_chunk`` bytes per read."""

    def __init__(self, data: bytes, max_chunk: int | None = None) -> None:
        self._data = data
        self._offset = 0
        self._max_chunk = max_chunk
        self.reads: list[int] = []
        self.close_calls = 0

    def readinto(self, buffer) -> int:
        n = min(len(buffer), len(self._data) - self._offset)
        if self._max_chunk is not None:
            n = min(n, self._max_chunk)
        buffer[:n] = self._data[self._offset : self._offset + n]
        self._offset += n
        self.reads.append(n)
        return n

    def close(self) -> None:
        self.close_calls += 1


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def opening(self, url):
        self.events.append(("opening", url))

    def connected(self, station, headers):
        self.events.append(("connected", station.name))

    def metadata_changed(self, metadata):
        self.events.append(("metadata_changed", metadata.stream_title))

    def truncated(self, pending, expected):
        self.events.append(("truncated", pending, expected))

    def closing(self, station):
        self.events.append(("closing",))


def icy_body(metaint: int, cycles) -> bytes:
    """Interleave audio and metadata.

    ``cycles`` holds ``(audio, title)`` pairs; ``audio`` must be ``metaint``
    bytes long except for the last one, ``title=None`` writes a zero length
    byte.
    """
    out = bytearray()
    for audio, title in cycles:
        out += audio
        if len(audio) < metaint:
            break
        if title is None:
            out += b"\x00"
        else:
            out += encode_block({"StreamTitle": title})
    return bytes(out)
