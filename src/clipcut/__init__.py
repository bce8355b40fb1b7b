"""
ClipCut: Telegram bot that cuts audio and video clips from YouTube links.
"""

__version__ = "1.0.0"
