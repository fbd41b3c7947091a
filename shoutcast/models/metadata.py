from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from shoutcast.errors import MetadataError

# The length byte counts 16-byte units, so a block is at most 255 * 16 bytes.
BLOCK_UNIT = 16
MAX_BLOCK_SIZE = 255 * BLOCK_UNIT

_QUOTES = ("'", '"')


def decode_text(raw: bytes) -> str:
    raw = raw.rstrip(b"\x00")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def parse_icy(text: str, *, strict: bool = False) -> list[tuple[str, str]]:
    """Split ICY metadata text into ``(key, value)`` pairs.

    ICY values are not escaped, a quoted value simply runs until the first
    closing quote followed by ``;``. Titles containing apostrophes therefore
    parse as expected. Unquoted values run until the next ``;``.

    Text that cannot be parsed ends the scan. With ``strict`` a
    :class:`MetadataError` is raised instead.
    """
    text = text.rstrip("\x00")
    elements: list[tuple[str, str]] = []
    pos = 0
    while pos < len(text):
        if text[pos] == ";" or text[pos].isspace():
            pos += 1
            continue

        eq = text.find("=", pos)
        if eq == -1:
            if strict:
                raise MetadataError(f"expected key=value at {pos} in {text!r}")
            break
        key = text[pos:eq].strip()
        pos = eq + 1

        quote = text[pos : pos + 1]
        if quote in _QUOTES:
            end = text.find(quote + ";", pos + 1)
            if end == -1:
                # last segment without its terminator
                if text.endswith(quote) and len(text) - 1 > pos:
                    end = len(text) - 1
                elif strict:
                    raise MetadataError(f"unterminated value at {pos} in {text!r}")
                else:
                    break
            value = text[pos + 1 : end]
            pos = end + 2
        else:
            end = text.find(";", pos)
            if end == -1:
                end = len(text)
            value = text[pos:end]
            pos = end + 1

        if key:
            elements.append((key, value))
        elif strict:
            raise MetadataError(f"empty key in {text!r}")
    return elements


def encode_block(fields: Iterable[tuple[str, str]] | Mapping[str, str]) -> bytes:
    """Build a complete metadata block: length byte plus null-padded text."""
    if isinstance(fields, Mapping):
        fields = fields.items()
    text = "".join(f"{key}='{value}';" for key, value in fields)
    payload = text.encode("utf-8")
    if len(payload) > MAX_BLOCK_SIZE:
        raise MetadataError(
            f"metadata is {len(payload)} bytes, at most {MAX_BLOCK_SIZE} fit in a block"
        )
    units = -(-len(payload) // BLOCK_UNIT)
    return bytes([units]) + payload.ljust(units * BLOCK_UNIT, b"\x00")


class Metadata(Mapping[str, str]):
    """One decoded metadata announcement.

    Snapshots compare by their decoded fields, so two blocks that differ
    only in padding are equal.
    """

    __slots__ = ("_fields", "_raw")

    def __init__(
        self,
        fields: Mapping[str, str] | Iterable[tuple[str, str]] = (),
        raw: bytes = b"",
    ) -> None:
        self._fields = MappingProxyType(dict(fields))
        self._raw = raw

    @property
    def raw(self) -> bytes:
        """The block as received, padding included."""
        return self._raw

    @classmethod
    def from_bytes(cls, raw: bytes, *, strict: bool = False) -> Metadata:
        return cls(parse_icy(decode_text(raw), strict=strict), raw=bytes(raw))

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __hash__(self) -> int:
        return hash(frozenset(self._fields.items()))

    def __repr__(self) -> str:
        return f"Metadata({dict(self._fields)!r})"

    def __str__(self) -> str:
        return self.stream_title or ""

    @property
    def stream_title(self) -> str | None:
        return self._fields.get("StreamTitle")

    @property
    def stream_url(self) -> str | None:
        return self._fields.get("StreamUrl")

    @property
    def artist(self) -> str | None:
        title = self.stream_title
        if title and " - " in title:
            return title.split(" - ", 1)[0].strip()
        return None

    @property
    def title(self) -> str | None:
        title = self.stream_title
        if title and " - " in title:
            return title.split(" - ", 1)[1].strip()
        return title

    def to_dict(self) -> dict[str, str]:
        return dict(self._fields)

    def to_bytes(self) -> bytes:
        return encode_block(self._fields)
