"""
Text parsing for incoming messages.
Extracts YouTube links and start/end timestamps from free-form text.
"""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# watch?...v=ID, youtu.be/ID, shorts/ID, live/ID; scheme and www. are optional
YOUTUBE_URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:watch\?\S*?v=[^\s&]+|shorts/[^\s?]+|live/[^\s?]+)"
    r"|youtu\.be/[^\s?]+)"
    r"\S*",
    re.IGNORECASE,
)

# "20.50", "1:02:15", "21:30"
TIMESTAMP_PATTERN = re.compile(r"\d{1,2}(?:[:.]\d{1,2}){1,2}")

_SEPARATOR = re.compile(r"[:.]")
_DIGITS = re.compile(r"\d+")


def extract_youtube_url(text: str) -> Optional[str]:
    """
    Extract the first YouTube URL from text.

    The match is returned exactly as it appears in the text, since it is
    handed to yt-dlp unchanged.

    Args:
        text: Free-form message text

    Returns:
        Matched URL or None if the text has no YouTube link
    """
    match = YOUTUBE_URL_PATTERN.search(text)
    return match.group(0) if match else None


def normalize_timestamp(raw: str) -> Optional[str]:
    """
    Normalize a timestamp string to HH:MM:SS.

    Groups are read right to left as seconds, minutes and hours:
    "5" -> "00:00:05", "20.50" -> "00:20:50", "1:02:15" -> "01:02:15".

    Args:
        raw: Timestamp with ':' or '.' separators

    Returns:
        Canonical timestamp or None if invalid
    """
    parts = _SEPARATOR.split(raw.strip())

    if len(parts) > 3 or not all(_DIGITS.fullmatch(part) for part in parts):
        return None

    values = [int(part) for part in parts]
    hours, minutes, seconds = [0] * (3 - len(values)) + values

    if not 0 <= minutes <= 59 or not 0 <= seconds <= 59 or hours < 0:
        return None

    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def extract_timestamps(text: str) -> Optional[tuple[str, str]]:
    """
    Extract a (start, end) timestamp pair from natural text.

    The first two timestamp-looking substrings are taken as start and end,
    whatever words surround them ("from X to Y", "X - Y", "cut X to Y").

    Args:
        text: Free-form message text

    Returns:
        Tuple of normalized (start, end) or None if fewer than two valid
        timestamps are found
    """
    matches = TIMESTAMP_PATTERN.findall(text)
    if len(matches) < 2:
        return None

    start = normalize_timestamp(matches[0])
    end = normalize_timestamp(matches[1])

    if start is None or end is None:
        logger.debug(f"Rejected timestamp pair {matches[0]!r}, {matches[1]!r}")
        return None

    return start, end


def to_seconds(timestamp: str) -> int:
    """Convert a canonical HH:MM:SS timestamp to total seconds."""
    hours, minutes, seconds = (int(part) for part in timestamp.split(":"))
    return hours * 3600 + minutes * 60 + seconds
