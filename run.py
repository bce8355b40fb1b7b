#!/usr/bin/env python3
"""
Simple launcher script for the ClipCut Telegram bot.
Runs from a source checkout without installing the package.
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from clipcut.main import main  # noqa: E402

if __name__ == "__main__":
    print("🤖 Starting ClipCut bot...")
    print("✂️ Send a YouTube link + timestamps to get a trimmed clip")
    print("=" * 60)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n👋 Bot stopped by user")
    except Exception as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)
