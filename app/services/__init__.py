"""
Services package for the Xtream M3U proxy

This package contains the playlist parsing, caching, access and response
shaping logic.
"""
from app.services.access_gate import AccessGate, parse_allow_users
from app.services.playlist_cache_service import PlaylistCache
from app.services.playlist_parser_service import parse_m3u
from app.services.xtream_service import (
    ACCESS_DENIED_PLAYLIST,
    build_player_api_response,
    error_playlist,
    personalize_playlist,
    playlist_media_type,
)

__all__ = [
    'AccessGate',
    'parse_allow_users',
    'PlaylistCache',
    'parse_m3u',
    'ACCESS_DENIED_PLAYLIST',
    'build_player_api_response',
    'error_playlist',
    'personalize_playlist',
    'playlist_media_type',
]
