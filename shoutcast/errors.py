from __future__ import annotations


class ShoutcastError(Exception):
    """Base class for errors raised by this package."""


class StreamHeaderError(ShoutcastError, ValueError):
    """A required ICY response header is missing or malformed."""

    def __init__(self, header: str, value: str | None) -> None:
        self.header = header
        self.value = value
        if value is None:
            message = f"missing {header} header"
        else:
            message = f"cannot parse {header} header: {value!r}"
        super().__init__(message)


class MetadataError(ShoutcastError, ValueError):
    """Metadata text cannot be encoded or strictly decoded."""
