"""
Telegram bot implementation using aiogram.
Routes text messages and format choices to the clip pipeline.
"""

import html
import logging
from typing import Optional

from aiogram import Bot, Dispatcher, types, F
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest

from .config import TELEGRAM_BOT_TOKEN
from .parsing import extract_timestamps, extract_youtube_url, to_seconds
from .pipeline import ClipPipeline, ClipRequest, PipelineState
from .sessions import PendingRequest, SessionStore
from .video_processor import ClipMode, VideoProcessor

logger = logging.getLogger(__name__)

# Global instances
video_processor: Optional[VideoProcessor] = None
pending_requests = SessionStore()

FORMAT_CALLBACKS = {
    "format_audio": ClipMode.AUDIO,
    "format_video": ClipMode.VIDEO,
}

HELP_TEXT = (
    "👋 Hi! I'm <b>ClipCut</b>. I cut clips from YouTube videos.\n\n"
    "<b>How to use me:</b>\n"
    "Send a message with a YouTube link and the start/end times.\n\n"
    "<b>Examples:</b>\n"
    "• <code>https://youtube.com/watch?v=abc from 1:20 to 2:45</code>\n"
    "• <code>https://youtu.be/abc 20.50 to 21.30</code>\n"
    "• <code>Please cut from 0:10 to 0:40 https://youtube.com/watch?v=abc</code>\n\n"
    "I'll then ask if you want 🎵 audio or 🎬 video!"
)

MISSING_TIMESTAMPS_TEXT = (
    "👍 I see the YouTube link!\n\n"
    "Now please also include the <b>start</b> and <b>end</b> timestamps.\n\n"
    "Examples:\n"
    "• <code>from 1:20 to 2:45</code>\n"
    "• <code>20.50 to 21.30</code>\n"
    "• <code>0:00 to 0:30</code>\n\n"
    "You can include everything in one message, like:\n"
    "<code>https://youtube.com/... from 1:20 to 2:45</code>"
)

MISSING_URL_TEXT = (
    "👍 I see the timestamps!\n\n"
    "Please also include a <b>YouTube link</b> in your message.\n\n"
    "Example:\n"
    "<code>https://youtube.com/watch?v=... from 1:20 to 2:45</code>"
)

NO_PENDING_TEXT = (
    "⚠️ I don't have a pending request for you.\n\n"
    "Please send a YouTube link with timestamps first."
)


def build_format_keyboard() -> types.InlineKeyboardMarkup:
    return types.InlineKeyboardMarkup(
        inline_keyboard=[
            [
                types.InlineKeyboardButton(
                    text="🎵 Audio only", callback_data="format_audio"
                ),
                types.InlineKeyboardButton(
                    text="🎬 Video clip", callback_data="format_video"
                ),
            ]
        ]
    )


async def start_command(message: types.Message) -> None:
    """Handle /start command."""
    await message.answer(HELP_TEXT)
    logger.info(f"User {message.from_user.id} started bot")


async def help_command(message: types.Message) -> None:
    """Handle /help command."""
    await message.answer(HELP_TEXT)
    logger.info(f"User {message.from_user.id} requested help")


async def handle_message(message: types.Message) -> None:
    """
    Handle incoming text messages.

    A message with both a link and a valid time range is stored and answered
    with the format keyboard; anything less gets guidance.
    """
    chat_id = message.chat.id
    text = message.text.strip()

    logger.info(f"Received message in chat {chat_id}: {text}")

    url = extract_youtube_url(text)
    timestamps = extract_timestamps(text)

    if url and timestamps:
        start_time, end_time = timestamps

        if to_seconds(start_time) >= to_seconds(end_time):
            await message.answer(
                "⚠️ The start time must be before the end time.\n\n"
                f"You sent: {start_time} → {end_time}\n\n"
                "Please try again."
            )
            return

        pending_requests.put(chat_id, PendingRequest(url, start_time, end_time))

        await message.answer(
            "🎯 Got it!\n\n"
            f"📎 {html.escape(url)}\n"
            f"⏱ {start_time} → {end_time}\n\n"
            "What format do you want?",
            reply_markup=build_format_keyboard(),
        )
        return

    if url:
        await message.answer(MISSING_TIMESTAMPS_TEXT)
        return

    if timestamps:
        await message.answer(MISSING_URL_TEXT)
        return

    await message.answer(HELP_TEXT)


def get_video_processor() -> VideoProcessor:
    """Create the shared processor on first use, which also creates the temp dir."""
    global video_processor
    if video_processor is None:
        video_processor = VideoProcessor()
    return video_processor


async def process_clip(
    request: ClipRequest, status_message: types.Message
) -> PipelineState:
    """Run the clip pipeline, reporting through the status message."""
    return await ClipPipeline(get_video_processor(), status_message).run(request)


async def handle_format_choice(callback: types.CallbackQuery) -> None:
    """Handle the audio/video button press."""
    # Acknowledge first so the button doesn't look stuck
    await callback.answer()

    mode = FORMAT_CALLBACKS.get(callback.data)
    if mode is None:
        logger.warning(f"Unknown callback data: {callback.data!r}")
        return

    chat_id = callback.message.chat.id
    pending = pending_requests.take(chat_id)
    if pending is None:
        await callback.message.answer(NO_PENDING_TEXT)
        return

    try:
        await callback.message.edit_reply_markup(reply_markup=None)
    except TelegramBadRequest as e:
        logger.debug(f"Could not remove format keyboard: {e}")

    status_message = await callback.message.answer("⏳ Processing your clip…")

    request = ClipRequest(
        url=pending.url,
        start_time=pending.start_time,
        end_time=pending.end_time,
        mode=mode,
    )
    state = await process_clip(request, status_message)
    logger.info(f"Clip for chat {chat_id} finished with state {state.value}")


async def error_handler(event: types.ErrorEvent) -> bool:
    """Log errors raised by handlers."""
    logger.error(f"Update handling failed: {event.exception}", exc_info=event.exception)
    return True


def create_dispatcher() -> Dispatcher:
    """Create dispatcher with all handlers registered."""
    dp = Dispatcher()

    dp.message.register(start_command, F.text.startswith("/start"))
    dp.message.register(help_command, F.text.startswith("/help"))
    dp.message.register(handle_message, F.text)
    dp.callback_query.register(handle_format_choice, F.data.startswith("format_"))
    dp.errors.register(error_handler)

    return dp


async def run_bot() -> None:
    """Run the Telegram bot using aiogram."""
    get_video_processor()

    bot = Bot(
        token=TELEGRAM_BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = create_dispatcher()

    logger.info("🤖 ClipCut bot is running with aiogram...")

    try:
        await dp.start_polling(bot)
    except Exception as e:
        logger.error(f"Bot polling error: {e}")
        raise
    finally:
        await bot.session.close()
