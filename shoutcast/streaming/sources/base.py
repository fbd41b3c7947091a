from __future__ import annotations

from typing import Protocol

import requests


class ByteSource(Protocol):
    """Raw byte stream the demuxer pulls from.

    ``readinto`` returns the number of bytes written, ``0`` at end of stream
    or ``None`` when a non-blocking source has nothing yet. Any binary file
    object opened for reading satisfies it.
    """

    def readinto(self, buffer: memoryview) -> int | None:
        ...

    def close(self) -> None:
        ...


class ResponseSource:
    """Body of a streaming ``requests`` response.

    Reads go through ``read1`` so a live stream hands over whatever has
    arrived instead of blocking until the buffer is full.
    """

    def __init__(self, response: requests.Response) -> None:
        self._response = response
        self._raw = response.raw

    def readinto(self, buffer: memoryview) -> int:
        data = self._raw.read1(len(buffer))
        n = len(data)
        buffer[:n] = data
        return n

    def close(self) -> None:
        self._response.close()
