import logging
import re

from app.services.fetch_types import PlaylistEntry

logger = logging.getLogger(__name__)

EXTINF_MARKER = "#EXTINF:"
DEFAULT_NAME = "Unnamed"
DEFAULT_CATEGORY = "Other"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_ATTRIBUTE_RE = re.compile(r'(\w[\w-]*)="([^"]*)"')


def parse_m3u(text: str) -> list[PlaylistEntry]:
    """
    Parse IPTV-style M3U text into an ordered list of playlist entries

    Each #EXTINF line opens a pending entry which is closed by the next
    non-comment line (its media URL). A pending entry that is followed by
    another #EXTINF line is dropped. Malformed input never raises; anything
    that does not fit the pattern is skipped.

    Args:
        text: Raw playlist body

    Returns:
        Entries in playlist order, sequence ids starting at 1
    """
    entries: list[PlaylistEntry] = []
    pending: tuple[dict[str, str], str] | None = None

    for raw_line in _LINE_BREAK_RE.split(text or ""):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(EXTINF_MARKER):
            if pending is not None:
                logger.debug(f"Dropping #EXTINF entry without media URL: {pending[1]}")
            pending = parse_extinf(line)
        elif pending is not None and not line.startswith("#"):
            attrs, title = pending
            entries.append(_build_entry(attrs, title, line, len(entries) + 1))
            pending = None

    logger.debug(f"Parsed {len(entries)} playlist entries")
    return entries


def parse_extinf(line: str) -> tuple[dict[str, str], str]:
    """
    Split an #EXTINF line into its attributes and trailing title

    The title is everything after the first comma. Attributes are read from
    the part before it.
    """
    body = line[len(EXTINF_MARKER):] if line.startswith(EXTINF_MARKER) else line
    meta, comma, title = body.partition(",")
    return parse_attributes(meta.strip()), title.strip() if comma else ""


def parse_attributes(text: str) -> dict[str, str]:
    """Extract key="value" pairs; a repeated key keeps its last value"""
    return {key: value for key, value in _ATTRIBUTE_RE.findall(text)}


def _build_entry(attrs: dict[str, str], title: str, media_url: str, sequence_id: int) -> PlaylistEntry:
    """Resolve display fields for a completed entry"""
    name = attrs.get("tvg-name") or title or attrs.get("tvg-id") or DEFAULT_NAME

    return PlaylistEntry(
        name=name,
        title=title,
        media_url=media_url,
        sequence_id=sequence_id,
        category_name=attrs.get("group-title") or DEFAULT_CATEGORY,
        channel_id=attrs.get("tvg-id") or None,
        logo_url=attrs.get("tvg-logo") or None,
    )
