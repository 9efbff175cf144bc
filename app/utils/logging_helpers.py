"""
Logging helpers for consistent log formatting.
"""
import logging


def sanitize_url_for_logging(url: str | None) -> str:
    """Remove credentials from URL for safe logging."""
    if not url:
        return "<not configured>"
    if "://" not in url:
        return url
    try:
        protocol, rest = url.split("://", 1)
        if "@" in rest:
            rest = rest.split("@", 1)[1]
            return f"{protocol}://***:***@{rest}"
        return url
    except (ValueError, IndexError):
        return url


def log_fetch_start(logger: logging.Logger, url: str | None) -> None:
    """Log playlist refresh start."""
    logger.info(f"Playlist refresh started: {sanitize_url_for_logging(url)}")


def log_fetch_end(
    logger: logging.Logger,
    entries_count: int,
    size_bytes: int,
    duration_ms: int
) -> None:
    """
    Log playlist refresh summary.

    Args:
        logger: Logger instance
        entries_count: Number of parsed entries
        size_bytes: Size of the raw playlist body
        duration_ms: Time spent fetching and parsing
    """
    logger.info(
        f"Playlist refresh completed: {entries_count} entries, "
        f"{size_bytes / 1024:.1f} KB in {duration_ms} ms"
    )
