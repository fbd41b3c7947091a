from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

import requests

from shoutcast.errors import ShoutcastError
from shoutcast.models.metadata import Metadata
from shoutcast.settings import Settings
from shoutcast.streaming.connection import open_stream


def _print_metadata(metadata: Metadata) -> None:
    stamp = datetime.now().isoformat(timespec="seconds")
    print(f"{stamp}\t{metadata.stream_title or dict(metadata)}", flush=True)


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m shoutcast",
        description=(
            "Listen to an ICY (SHOUTcast/Icecast) stream and print every "
            "metadata change. Optionally save the audio without metadata."
        ),
    )
    parser.add_argument("url", help="Stream URL")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the metadata-free audio to this file",
    )
    parser.add_argument(
        "--user-agent",
        default=settings.user_agent,
        help="User-Agent sent to the server (or env SHOUTCAST_USER_AGENT)",
    )
    parser.add_argument(
        "--connect-timeout",
        type=float,
        default=settings.connect_timeout,
        help="Seconds allowed for connecting (or env SHOUTCAST_CONNECT_TIMEOUT)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=settings.chunk_size,
        help="Bytes per read (or env SHOUTCAST_CHUNK_SIZE)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _pump(stream, chunk_size: int, out: BinaryIO | None) -> None:
    for chunk in stream.chunks(chunk_size):
        if out is not None:
            out.write(chunk)


def main(argv: list[str] | None = None) -> None:
    settings = Settings()
    args = _build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.connect_timeout <= 0:
        raise SystemExit("--connect-timeout must be positive")
    if args.chunk_size < 1:
        raise SystemExit("--chunk-size must be a positive integer")

    settings = settings.model_copy(
        update={
            "user_agent": args.user_agent,
            "connect_timeout": args.connect_timeout,
            "chunk_size": args.chunk_size,
        }
    )

    try:
        stream = open_stream(args.url, settings=settings, on_metadata_change=_print_metadata)
    except (requests.RequestException, ShoutcastError) as exc:
        raise SystemExit(f"Cannot open {args.url}: {exc}") from exc

    station = stream.station
    print(f"Station: {station.name!r} genre={station.genre!r} bitrate={station.bitrate}")
    if station.description:
        print(f"Description: {station.description}")
    if station.url:
        print(f"Homepage: {station.url}")

    with stream:
        try:
            if args.output is not None:
                with args.output.open("wb") as out:
                    _pump(stream, settings.chunk_size, out)
            else:
                _pump(stream, settings.chunk_size, None)
        except KeyboardInterrupt:
            pass


if __name__ == "__main__":
    main()
