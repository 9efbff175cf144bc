"""
Playlist Cache

Owns the lifecycle of the single upstream playlist: retrieval, memoization
of the raw text together with its parse, and TTL-based invalidation.
"""
import asyncio
import logging
import time
from time import perf_counter
from typing import Callable

import httpx

from app.exceptions import ConfigurationError, FetchError
from app.services.fetch_types import CacheRecord, PlaylistEntry
from app.services.playlist_parser_service import parse_m3u
from app.utils.http_fetch import Fetcher
from app.utils.logging_helpers import log_fetch_end, log_fetch_start, sanitize_url_for_logging


logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 5 * 60 * 1000


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class PlaylistCache:
    """
    In-memory cache of the upstream playlist.

    Refreshes are coalesced with an internal asyncio.Lock: callers that find
    the cache stale while another refresh is running wait for it and reuse
    its result instead of fetching again. A failed refresh leaves the stored
    record untouched and is reported only to the caller that triggered it.
    """

    def __init__(
        self,
        source_url: str | None,
        fetcher: Fetcher,
        *,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = _wall_clock_ms
    ):
        """
        Args:
            source_url: Upstream playlist location
            fetcher: Async callable returning (status_code, body_text) for a URL
            ttl_ms: Maximum age of the cached playlist in milliseconds
            clock: Returns the current time in milliseconds
        """
        self.source_url = source_url
        self.ttl_ms = ttl_ms
        self._fetcher = fetcher
        self._clock = clock
        self._record = CacheRecord()
        self._refresh_lock = asyncio.Lock()

    @property
    def record(self) -> CacheRecord:
        """Current cache record snapshot"""
        return self._record

    def is_fresh(self) -> bool:
        """Check whether a fetched playlist exists and is younger than the TTL"""
        record = self._record
        if record.raw_text is None:
            return False
        return self._clock() - record.fetched_at_ms < self.ttl_ms

    async def get_playlist(self) -> str:
        """
        Get the raw playlist text, refreshing it when stale

        Returns:
            Raw playlist body as last fetched

        Raises:
            ConfigurationError: If no source URL is configured
            FetchError: If a required refresh fails
        """
        return (await self._get_record()).raw_text

    async def get_entries(self) -> list[PlaylistEntry]:
        """Get the parsed entries paired with the current raw text"""
        record = await self._get_record()
        return list(record.entries or ())

    async def _get_record(self) -> CacheRecord:
        if self.is_fresh():
            return self._record

        if self._refresh_lock.locked():
            logger.debug("Playlist refresh already in progress, waiting for it")

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited
            if self.is_fresh():
                return self._record
            return await self._refresh()

    async def _refresh(self) -> CacheRecord:
        if not self.source_url:
            raise ConfigurationError("SOURCE_M3U_URL is not configured")

        log_fetch_start(logger, self.source_url)
        started = perf_counter()
        now = self._clock()

        try:
            status_code, text = await self._fetcher(self.source_url)
        except (httpx.HTTPError, OSError) as e:
            logger.error(
                f"Playlist fetch failed for {sanitize_url_for_logging(self.source_url)}: "
                f"{type(e).__name__}: {e}"
            )
            raise FetchError(f"Upstream M3U fetch failed: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected error while fetching playlist: {type(e).__name__}: {e}", exc_info=True)
            raise FetchError(f"Upstream M3U fetch failed: {e}") from e

        if status_code >= 400:
            logger.error(f"Playlist fetch returned HTTP {status_code}")
            raise FetchError(f"Upstream M3U fetch failed: {status_code}", status_code=status_code)

        entries = tuple(parse_m3u(text))
        self._record = CacheRecord(raw_text=text, entries=entries, fetched_at_ms=now)

        log_fetch_end(
            logger,
            len(entries),
            len(text.encode("utf-8")),
            int((perf_counter() - started) * 1000),
        )
        return self._record
