"""
Configuration management for the bot.
Handles environment variables and settings.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

# Paths
TEMP_DIR = Path(
    os.getenv("CLIPCUT_TEMP_DIR", str(Path(tempfile.gettempdir()) / "clipcut"))
)

# Telegram settings
TELEGRAM_BOT_TOKEN: Optional[str] = os.getenv("TELEGRAM_BOT_TOKEN") or os.getenv(
    "BOT_TOKEN"
)

# External tools
YTDLP_BINARY: str = os.getenv("YTDLP_BINARY", "yt-dlp")
FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY", "ffmpeg")

# Clip settings
AUDIO_BITRATE: str = "192k"
MAX_FILE_SIZE: int = 50 * 1024 * 1024  # Telegram Bot API upload limit

# Logging settings
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None


def validate_config() -> None:
    """
    Validate required configuration parameters.
    Raises ValueError if required parameters are missing.
    """
    if not TELEGRAM_BOT_TOKEN:
        raise ValueError("TELEGRAM_BOT_TOKEN is required")

    # Create temp directory if it doesn't exist
    TEMP_DIR.mkdir(parents=True, exist_ok=True)
