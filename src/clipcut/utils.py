"""
Utility functions for the bot.
Helper functions for common operations.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    # aiogram logs every handled update at INFO
    logging.getLogger("aiogram.event").setLevel(logging.WARNING)


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} TB"


def remove_file(file_path: Path) -> None:
    """Delete a file if it exists. Errors are logged, never raised."""
    try:
        if file_path.is_file():
            file_path.unlink()
            logger.info(f"Cleaned up temp file: {file_path}")
    except Exception as e:
        logger.error(f"Error cleaning up file {file_path}: {e}")


def cleanup_temp_files(temp_dir: Path, pattern: str = "*") -> None:
    """
    Clean up temporary files in directory.

    Args:
        temp_dir: Directory to clean
        pattern: File pattern to match (default: all files)
    """
    try:
        for file_path in temp_dir.glob(pattern):
            remove_file(file_path)
    except Exception as e:
        logger.error(f"Error cleaning temp files: {e}")
