from __future__ import annotations

from pydantic import BaseModel, Field

from shoutcast.models.metadata import Metadata


class StationInfo(BaseModel):
    """Descriptive ICY response headers of one connection."""

    name: str = ""
    genre: str = ""
    description: str = ""
    url: str = ""
    bitrate: int
    metaint: int = Field(ge=1)
    content_type: str = "audio/mpeg"


class NowPlaying(BaseModel):
    stream_title: str | None = None
    artist: str | None = None
    title: str | None = None
    stream_url: str | None = None
    icy_fields: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_metadata(cls, metadata: Metadata) -> NowPlaying:
        return cls(
            stream_title=metadata.stream_title,
            artist=metadata.artist,
            title=metadata.title,
            stream_url=metadata.stream_url,
            icy_fields=metadata.to_dict(),
        )
