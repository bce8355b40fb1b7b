#!/usr/bin/env python3
"""
Main entry point for the ClipCut Telegram bot.
"""

import asyncio
import logging
import sys

# Load environment variables from .env file before config is read
from dotenv import load_dotenv

load_dotenv()

from .config import validate_config, LOG_LEVEL, LOG_FILE  # noqa: E402
from .bot import run_bot  # noqa: E402
from .utils import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


async def main():
    """
    Main application entry point.
    """
    setup_logging(level=LOG_LEVEL, log_file=LOG_FILE)
    logger.info("Starting ClipCut bot...")

    try:
        validate_config()

        await run_bot()

    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Critical error: {e}")
        sys.exit(1)


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
