from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from shoutcast.models.metadata import Metadata
from shoutcast.models.station import StationInfo

log = logging.getLogger(__name__)


class StreamObserver(Protocol):
    """Receives lifecycle events of a stream.

    The demuxer and the connection code report through this instead of
    logging themselves.
    """

    def opening(self, url: str) -> None:
        ...

    def connected(self, station: StationInfo, headers: Mapping[str, str]) -> None:
        ...

    def metadata_changed(self, metadata: Metadata) -> None:
        ...

    def truncated(self, pending: int, expected: int) -> None:
        ...

    def closing(self, station: StationInfo | None) -> None:
        ...


class NullObserver:
    def opening(self, url: str) -> None:
        pass

    def connected(self, station: StationInfo, headers: Mapping[str, str]) -> None:
        pass

    def metadata_changed(self, metadata: Metadata) -> None:
        pass

    def truncated(self, pending: int, expected: int) -> None:
        pass

    def closing(self, station: StationInfo | None) -> None:
        pass


class LoggingObserver:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or log

    def opening(self, url: str) -> None:
        self._log.info("Opening %s", url)

    def connected(self, station: StationInfo, headers: Mapping[str, str]) -> None:
        for key, value in headers.items():
            self._log.debug("HTTP header %s: %s", key, value)
        self._log.info(
            "Connected to %r (%d kbit/s, metaint %d)",
            station.name,
            station.bitrate,
            station.metaint,
        )

    def metadata_changed(self, metadata: Metadata) -> None:
        self._log.debug("Metadata changed: %r", metadata)

    def truncated(self, pending: int, expected: int) -> None:
        self._log.warning(
            "Stream ended inside a metadata block (%d of %d bytes)", pending, expected
        )

    def closing(self, station: StationInfo | None) -> None:
        self._log.info("Closing %s", station.url if station else "stream")
