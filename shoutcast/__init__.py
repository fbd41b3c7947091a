from shoutcast.errors import MetadataError, ShoutcastError, StreamHeaderError
from shoutcast.models.metadata import Metadata
from shoutcast.models.station import NowPlaying, StationInfo
from shoutcast.streaming.connection import open_stream
from shoutcast.streaming.demuxer import IcyStream

__all__ = [
    "IcyStream",
    "Metadata",
    "MetadataError",
    "NowPlaying",
    "ShoutcastError",
    "StationInfo",
    "StreamHeaderError",
    "open_stream",
]
