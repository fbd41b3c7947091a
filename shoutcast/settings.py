from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Some servers only send metadata (or stream at all) to clients they know.
DEFAULT_USER_AGENT = (
    "iTunes/12.9.2 (Macintosh; OS X 10.14.3) AppleWebKit/606.4.5"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHOUTCAST_",
        case_sensitive=False,
        env_ignore_empty=True,
    )

    # Upstream station for the relay app
    stream_url: str | None = None

    user_agent: str = DEFAULT_USER_AGENT
    connect_timeout: float = Field(default=5.0, gt=0)

    chunk_size: int = Field(default=8192, ge=1)

    relay_title: str = "ICY relay"
