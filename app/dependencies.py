"""
Dependency Injection Configuration

Builds the playlist cache and access gate once at startup and exposes them
to route handlers through FastAPI dependencies. Tests replace them with
app.dependency_overrides.
"""
import logging

from fastapi import FastAPI, Request

from app.config import CustomSettings
from app.services.access_gate import AccessGate, parse_allow_users
from app.services.playlist_cache_service import PlaylistCache
from app.utils.http_fetch import make_fetcher


logger = logging.getLogger(__name__)


def build_services(app: FastAPI, config: CustomSettings) -> None:
    """
    Create the shared service instances and attach them to app.state

    Args:
        app: FastAPI application
        config: Loaded settings
    """
    app.state.playlist_cache = PlaylistCache(
        config.source_m3u_url,
        make_fetcher(config.upstream_timeout_sec),
        ttl_ms=config.cache_ttl_ms,
    )
    logger.debug("Registered playlist cache (ttl=%sms)", config.cache_ttl_ms)

    app.state.access_gate = AccessGate(parse_allow_users(config.allow_users))
    logger.debug("Registered access gate (open mode: %s)", app.state.access_gate.open_mode)


def get_playlist_cache(request: Request) -> PlaylistCache:
    """Playlist cache shared by all requests"""
    return request.app.state.playlist_cache


def get_access_gate(request: Request) -> AccessGate:
    """Access gate shared by all requests"""
    return request.app.state.access_gate
