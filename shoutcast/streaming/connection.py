from __future__ import annotations

import re
from collections.abc import Mapping

import requests

from shoutcast.errors import StreamHeaderError
from shoutcast.models.station import StationInfo
from shoutcast.settings import Settings
from shoutcast.streaming.demuxer import IcyStream, MetadataCallback
from shoutcast.streaming.observer import LoggingObserver, StreamObserver
from shoutcast.streaming.sources.base import ResponseSource

_plain_int = re.compile(r"\s*(\d+)\s*\Z")
# some servers send "128,128" for icy-br
_leading_int = re.compile(r"\s*(\d+)\s*(?:,|\Z)")


def request_headers(user_agent: str) -> dict[str, str]:
    return {
        "Accept": "*/*",
        "User-Agent": user_agent,
        "Icy-MetaData": "1",
    }


def _required_int(
    headers: Mapping[str, str], name: str, pattern: re.Pattern[str] = _plain_int
) -> int:
    value = headers.get(name)
    if value is None:
        raise StreamHeaderError(name, None)
    match = pattern.match(value)
    if match is None:
        raise StreamHeaderError(name, value)
    return int(match.group(1))


def parse_station(headers: Mapping[str, str]) -> StationInfo:
    """Build the station description from ICY response headers.

    ``icy-br`` and ``icy-metaint`` are required, the descriptive headers
    default to empty strings. ``headers`` should be case-insensitive.
    """
    bitrate = _required_int(headers, "icy-br", _leading_int)
    metaint = _required_int(headers, "icy-metaint")
    if metaint < 1:
        raise StreamHeaderError("icy-metaint", headers.get("icy-metaint"))

    return StationInfo(
        name=headers.get("icy-name", ""),
        genre=headers.get("icy-genre", ""),
        description=headers.get("icy-description", ""),
        url=headers.get("icy-url", ""),
        bitrate=bitrate,
        metaint=metaint,
        content_type=headers.get("content-type", "audio/mpeg"),
    )


def open_stream(
    url: str,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
    on_metadata_change: MetadataCallback | None = None,
    observer: StreamObserver | None = None,
) -> IcyStream:
    """Connect to an ICY server and return an audio-only stream.

    Only establishing the connection is bounded by
    ``settings.connect_timeout``; reading the body never times out.
    Transport errors and non-2xx responses propagate from ``requests``,
    missing or malformed ``icy-br`` / ``icy-metaint`` headers raise
    :class:`StreamHeaderError`.
    """
    settings = settings or Settings()
    observer = observer or LoggingObserver()
    http = session or requests

    observer.opening(url)
    response = http.get(
        url,
        headers=request_headers(settings.user_agent),
        stream=True,
        timeout=(settings.connect_timeout, None),
    )
    try:
        response.raise_for_status()
        station = parse_station(response.headers)
    except Exception:
        response.close()
        raise

    observer.connected(station, response.headers)
    return IcyStream(
        ResponseSource(response),
        station.metaint,
        station=station,
        on_metadata_change=on_metadata_change,
        observer=observer,
    )
