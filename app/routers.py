from typing import Annotated
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.dependencies import get_access_gate, get_playlist_cache
from app.exceptions import PlaylistProxyError
from app.schemas import ErrorResponse, PlayerApiResponse
from app.services import (
    AccessGate,
    PlaylistCache,
    ACCESS_DENIED_PLAYLIST,
    build_player_api_response,
    error_playlist,
    personalize_playlist,
    playlist_media_type,
)
from app.utils.timezone import utc_now


logger = logging.getLogger(__name__)

main_router = APIRouter()

CacheDep = Annotated[PlaylistCache, Depends(get_playlist_cache)]
GateDep = Annotated[AccessGate, Depends(get_access_gate)]


@main_router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Root endpoint with usage hints"""
    return (
        "Xtream Proxy OK\n\n"
        "Try:\n"
        "/get.php?username=test&password=test&type=m3u_plus\n"
        "/player_api.php?username=test&password=test\n"
    )


@main_router.get("/health")
async def health_check(cache: CacheDep) -> dict:
    """Health check endpoint"""
    record = cache.record
    last_fetch = None
    if record.fetched_at_ms:
        last_fetch = datetime.fromtimestamp(record.fetched_at_ms / 1000, tz=timezone.utc).isoformat()

    return {
        "status": "ok",
        "source_configured": bool(cache.source_url),
        "cache_fresh": cache.is_fresh(),
        "cached_entries": len(record.entries or ()),
        "last_fetch": last_fetch,
    }


@main_router.get("/get.php")
async def get_playlist(
    cache: CacheDep,
    gate: GateDep,
    username: str = "",
    password: str = "",
    playlist_type: Annotated[str, Query(alias="type")] = "m3u_plus",
    output: Annotated[str | None, Query(description="Accepted for client compatibility")] = None,
) -> Response:
    """
    Return the upstream playlist personalised for the caller

    {{username}} and {{password}} tokens in the playlist are replaced with the
    request credentials.
    """
    if not gate.is_authorized(username, password):
        logger.info(f"Playlist request denied for user '{username}'")
        return PlainTextResponse(ACCESS_DENIED_PLAYLIST, status_code=401)

    try:
        playlist = await cache.get_playlist()
        return Response(
            content=personalize_playlist(playlist, username, password),
            media_type=playlist_media_type(playlist_type),
        )
    except PlaylistProxyError as e:
        logger.error(f"Playlist request failed: {e}")
        return PlainTextResponse(error_playlist(str(e)), status_code=500)
    except Exception as e:
        logger.error(f"Unexpected error serving playlist: {e}", exc_info=True)
        return PlainTextResponse(error_playlist(str(e)), status_code=500)


@main_router.get(
    "/player_api.php",
    response_model=PlayerApiResponse,
    responses={500: {"model": ErrorResponse}},
)
async def player_api(
    request: Request,
    cache: CacheDep,
    gate: GateDep,
    username: str = "",
    password: str = "",
):
    """
    Xtream player API login and channel listing

    The user_info.auth flag reflects the access gate. Channels are only
    listed for authorized callers.
    """
    allowed = gate.is_authorized(username, password)
    if not allowed:
        logger.info(f"Player API request denied for user '{username}'")

    try:
        entries = await cache.get_entries() if allowed else []
        return build_player_api_response(
            username,
            password,
            allowed,
            request.headers,
            entries,
            utc_now(),
        )
    except PlaylistProxyError as e:
        logger.error(f"Player API request failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Unexpected error in player API: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e) or type(e).__name__})
