from __future__ import annotations

from collections.abc import Callable, Iterator

from shoutcast.services.now_playing import NowPlayingState
from shoutcast.settings import Settings
from shoutcast.streaming.connection import open_stream
from shoutcast.streaming.demuxer import IcyStream

Opener = Callable[..., IcyStream]


class Relay:
    """Re-serves an upstream ICY station as plain audio."""

    def __init__(self, settings: Settings, opener: Opener = open_stream) -> None:
        self._settings = settings
        self._open = opener
        self.now_playing = NowPlayingState()

    def configured(self) -> bool:
        return bool(self._settings.stream_url)

    def connect(self) -> IcyStream:
        if not self._settings.stream_url:
            raise RuntimeError("No upstream stream URL configured")

        upstream = self._open(
            self._settings.stream_url,
            settings=self._settings,
            on_metadata_change=self.now_playing,
        )
        self.now_playing.set_station(upstream.station)
        return upstream

    def stream(self, upstream: IcyStream) -> Iterator[bytes]:
        # One upstream connection per listener, closed when the listener goes.
        with upstream:
            yield from upstream.chunks(self._settings.chunk_size)
