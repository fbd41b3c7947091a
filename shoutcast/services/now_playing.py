from __future__ import annotations

import threading

from shoutcast.models.metadata import Metadata
from shoutcast.models.station import NowPlaying, StationInfo


class NowPlayingState:
    """Latest announcement and station, shared between threads.

    Callable, so it can be set directly as a stream's
    ``on_metadata_change``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: NowPlaying | None = None
        self._station: StationInfo | None = None

    def __call__(self, metadata: Metadata) -> None:
        self.set(NowPlaying.from_metadata(metadata))

    def set(self, value: NowPlaying) -> None:
        with self._lock:
            self._current = value

    def get(self) -> NowPlaying | None:
        with self._lock:
            return self._current

    def set_station(self, station: StationInfo | None) -> None:
        with self._lock:
            self._station = station

    def station(self) -> StationInfo | None:
        with self._lock:
            return self._station
