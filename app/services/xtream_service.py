"""
Xtream Response Service

Shapes the cached playlist into the two Xtream-Codes style outputs:
the personalised raw playlist and the player_api JSON envelope.
"""
from collections.abc import Mapping, Sequence
from datetime import datetime

from app.schemas import LiveChannel, PlayerApiResponse, ServerInfo, UserInfo
from app.services.fetch_types import PlaylistEntry
from app.utils.timezone import to_added_format, to_epoch_seconds, to_iso8601


PLAYLIST_HEADER = "#EXTM3U"
ACCESS_DENIED_PLAYLIST = f"{PLAYLIST_HEADER}\n# Access denied"
USERNAME_TOKEN = "{{username}}"
PASSWORD_TOKEN = "{{password}}"


def personalize_playlist(text: str, username: str, password: str) -> str:
    """
    Substitute caller credentials into the playlist and ensure the M3U header

    Args:
        text: Raw upstream playlist
        username: Value for {{username}} tokens
        password: Value for {{password}} tokens

    Returns:
        Playlist text starting with #EXTM3U
    """
    output = text.replace(USERNAME_TOKEN, username).replace(PASSWORD_TOKEN, password)
    if not output.startswith(PLAYLIST_HEADER):
        output = f"{PLAYLIST_HEADER}\n{output}"
    return output


def playlist_media_type(playlist_type: str) -> str:
    """Content type for the requested playlist flavour"""
    return "application/x-mpegURL" if playlist_type == "m3u_plus" else "text/plain"


def error_playlist(message: str) -> str:
    """Playlist-shaped body reporting an error"""
    return f"{PLAYLIST_HEADER}\n# Error: {message}"


def build_user_info(username: str, password: str, allowed: bool, now: datetime) -> UserInfo:
    return UserInfo(
        username=username,
        password=password,
        auth=1 if allowed else 0,
        status="Active" if allowed else "Disabled",
        created_at=to_epoch_seconds(now),
    )


def build_server_info(headers: Mapping[str, str], now: datetime) -> ServerInfo:
    """
    Describe this server as seen by the client

    Honors X-Forwarded-Host and X-Forwarded-Proto so the advertised URL is
    correct behind a reverse proxy.
    """
    host = headers.get("x-forwarded-host") or headers.get("host") or "localhost"
    proto = (headers.get("x-forwarded-proto") or "http").split(",")[0].strip() or "http"

    return ServerInfo(
        url=f"{proto}://{host}",
        server_protocol=proto,
        timestamp_now=to_epoch_seconds(now),
        time_now=to_iso8601(now),
        port=443 if proto == "https" else 80,
    )


def build_available_channels(entries: Sequence[PlaylistEntry], now: datetime) -> list[LiveChannel]:
    """Map parsed playlist entries to Xtream live channels"""
    added = to_added_format(now)
    return [
        LiveChannel(
            name=entry.name,
            stream_id=entry.sequence_id,
            stream_icon=entry.logo_url,
            epg_channel_id=entry.channel_id,
            added=added,
            category_id=entry.category_name,
            direct_source=entry.media_url,
        )
        for entry in entries
    ]


def build_player_api_response(
    username: str,
    password: str,
    allowed: bool,
    headers: Mapping[str, str],
    entries: Sequence[PlaylistEntry],
    now: datetime
) -> PlayerApiResponse:
    """
    Build the player_api envelope

    Args:
        username: Requested username
        password: Requested password
        allowed: Outcome of the access gate
        headers: Inbound request headers
        entries: Parsed catalog; ignored when not allowed
        now: Response time

    Returns:
        Envelope with user_info, server_info and available_channels
    """
    return PlayerApiResponse(
        user_info=build_user_info(username, password, allowed, now),
        server_info=build_server_info(headers, now),
        available_channels=build_available_channels(entries, now) if allowed else [],
    )
