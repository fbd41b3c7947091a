from __future__ import annotations

import pytest

from helpers import ChunkedSource
from shoutcast.models.station import StationInfo
from shoutcast.streaming.demuxer import IcyStream


@pytest.fixture
def station() -> StationInfo:
    return StationInfo(
        name="Test FM",
        genre="Rock",
        description="Testing",
        url="http://radio.test",
        bitrate=128,
        metaint=10,
        content_type="audio/mpeg",
    )


@pytest.fixture
def make_stream(station):
    def factory(data: bytes, metaint: int = 10, max_chunk: int | None = None, **kwargs):
        source = ChunkedSource(data, max_chunk=max_chunk)
        kwargs.setdefault("station", station.model_copy(update={"metaint": metaint}))
        return IcyStream(source, metaint, **kwargs), source

    return factory
