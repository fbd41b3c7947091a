from __future__ import annotations

import requests
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask
from starlette.responses import StreamingResponse

from shoutcast.errors import ShoutcastError
from shoutcast.models.station import NowPlaying, StationInfo

router = APIRouter()

_NO_CACHE = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
}


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/now-playing", response_model=NowPlaying)
async def now_playing(request: Request) -> JSONResponse:
    relay = request.app.state.relay
    current = relay.now_playing.get()

    if current is None:
        # nothing announced yet
        current = NowPlaying()

    return JSONResponse(content=current.model_dump(), headers=_NO_CACHE)


@router.get("/api/station", response_model=StationInfo)
async def station(request: Request) -> JSONResponse:
    current = request.app.state.relay.now_playing.station()
    if current is None:
        raise HTTPException(status_code=404, detail="Not connected yet")
    return JSONResponse(content=current.model_dump())


@router.get("/stream")
def stream(request: Request) -> StreamingResponse:
    relay = request.app.state.relay
    if not relay.configured():
        raise HTTPException(status_code=503, detail="No upstream configured")

    try:
        upstream = relay.connect()
    except (requests.RequestException, ShoutcastError) as exc:
        raise HTTPException(status_code=502, detail=f"Upstream failed: {exc}") from exc

    media_type = upstream.station.content_type if upstream.station else "audio/mpeg"
    # releases upstream even if the body generator never starts
    return StreamingResponse(
        relay.stream(upstream),
        media_type=media_type,
        headers=_NO_CACHE,
        background=BackgroundTask(upstream.close),
    )
