"""
Shared dataclasses used across the playlist fetch and parse pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PlaylistEntry:
    """One playable item parsed from the upstream playlist."""
    name: str
    title: str
    media_url: str
    sequence_id: int
    category_name: str
    channel_id: str | None = None
    logo_url: str | None = None


@dataclass(frozen=True, slots=True)
class CacheRecord:
    """Raw playlist text together with its parse, replaced as a unit."""
    raw_text: str | None = None
    entries: tuple[PlaylistEntry, ...] | None = None
    fetched_at_ms: int = 0


__all__ = ["PlaylistEntry", "CacheRecord"]
