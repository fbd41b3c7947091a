from __future__ import annotations

import pytest
import requests

import shoutcast.__main__ as cli
from helpers import ChunkedSource, icy_body
from shoutcast.streaming.demuxer import IcyStream


@pytest.fixture
def fake_open(monkeypatch, station):
    body = icy_body(10, [(b"a" * 10, "Artist - One"), (b"b" * 10, "Artist - Two"), (b"c" * 2, None)])
    opened = {}

    def fake(url, *, settings, on_metadata_change):
        opened["url"] = url
        opened["settings"] = settings
        opened["source"] = ChunkedSource(body, max_chunk=6)
        return IcyStream(
            opened["source"], 10, station=station, on_metadata_change=on_metadata_change
        )

    monkeypatch.setattr(cli, "open_stream", fake)
    return opened


def test_prints_station_and_changes(fake_open, capsys):
    cli.main(["http://radio.test/live", "--chunk-size", "4", "--user-agent", "test/1.0"])

    out = capsys.readouterr().out
    assert "Station: 'Test FM'" in out
    assert "Homepage: http://radio.test" in out
    lines = [line.split("\t", 1)[1] for line in out.splitlines() if "\t" in line]
    assert lines == ["Artist - One", "Artist - Two"]

    assert fake_open["settings"].chunk_size == 4
    assert fake_open["settings"].user_agent == "test/1.0"
    assert fake_open["source"].close_calls == 1


def test_writes_audio(fake_open, tmp_path):
    target = tmp_path / "out.mp3"

    cli.main(["http://radio.test/live", "-o", str(target)])

    assert target.read_bytes() == b"a" * 10 + b"b" * 10 + b"cc"


def test_open_failure_exits(monkeypatch):
    def broken(url, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(cli, "open_stream", broken)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["http://radio.test/live"])

    assert "refused" in str(excinfo.value)


def test_rejects_bad_chunk_size(fake_open):
    with pytest.raises(SystemExit):
        cli.main(["http://radio.test/live", "--chunk-size", "0"])
