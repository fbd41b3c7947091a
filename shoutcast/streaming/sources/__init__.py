from shoutcast.streaming.sources.base import ByteSource, ResponseSource

__all__ = ["ByteSource", "ResponseSource"]
