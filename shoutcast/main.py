from __future__ import annotations

from fastapi import FastAPI

from shoutcast.api.routes import router
from shoutcast.settings import Settings
from shoutcast.streaming.connection import open_stream
from shoutcast.streaming.relay import Opener, Relay


def create_app(settings: Settings | None = None, opener: Opener = open_stream) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(title=settings.relay_title)

    app.state.settings = settings
    app.state.relay = Relay(settings=settings, opener=opener)

    app.include_router(router)
    return app


application = create_app()
