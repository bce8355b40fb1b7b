"""
Clip pipeline.
Runs download -> cut -> size check -> upload for one request, reporting
progress by editing a single status message.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from aiogram import types
from aiogram.exceptions import TelegramAPIError

from .config import MAX_FILE_SIZE
from .parsing import to_seconds
from .utils import format_file_size
from .video_processor import ClipMode, ToolError, VideoProcessor

logger = logging.getLogger(__name__)

STATUS_DOWNLOADING = "⬇️ Downloading from YouTube…"
STATUS_CUTTING = "✂️ Cutting your clip…"
STATUS_CHECKING_SIZE = "📏 Checking clip size…"
STATUS_UPLOADING = "📤 Uploading your clip…"
STATUS_DONE = "✅ Done! Enjoy your clip."
STATUS_TOO_LARGE = (
    "⚠️ The clip is too large to send via Telegram (> 50 MB).\n"
    "Try a shorter segment or choose audio-only for a smaller file."
)

FAILURE_PREFIX = "❌ Something went wrong while processing your clip.\n\n"
DOWNLOAD_FAILED = (
    "Could not download from YouTube. Please check that the link is valid "
    "and the video is publicly available."
)
CUT_FAILED = "Failed to cut the clip. The timestamps might be outside the video duration."


class PipelineState(str, Enum):
    DOWNLOADING = "downloading"
    CUTTING = "cutting"
    SIZE_CHECK = "size_check"
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"
    TOO_LARGE = "too_large"


@dataclass(frozen=True)
class ClipRequest:
    """Everything needed to produce one clip."""

    url: str
    start_time: str
    end_time: str
    mode: ClipMode

    @property
    def duration(self) -> int:
        return to_seconds(self.end_time) - to_seconds(self.start_time)


def describe_failure(error: Exception) -> str:
    """Translate a pipeline exception into a message for the user."""
    if isinstance(error, ToolError) and error.tool == "yt-dlp":
        return FAILURE_PREFIX + DOWNLOAD_FAILED
    if isinstance(error, ToolError) and error.tool == "ffmpeg":
        return FAILURE_PREFIX + CUT_FAILED
    return FAILURE_PREFIX + f"Error: {error}"


class ClipPipeline:
    """
    Produces and delivers one clip.

    The status message is edited in place at every step and the clip is sent
    to the same chat.
    """

    def __init__(self, processor: VideoProcessor, status_message: types.Message):
        self.processor = processor
        self.status_message = status_message
        self.state = PipelineState.DOWNLOADING

    async def _update_status(self, text: str) -> None:
        try:
            await self.status_message.edit_text(text, parse_mode=None)
        except TelegramAPIError as e:
            # "message is not modified", flood control, network timeouts
            logger.warning(f"Status update skipped: {e}")

    async def _enter(self, state: PipelineState, status_text: str = None) -> None:
        logger.info(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state
        if status_text:
            await self._update_status(status_text)

    async def run(self, request: ClipRequest) -> PipelineState:
        """
        Run the pipeline to a terminal state.

        Args:
            request: Resolved clip request

        Returns:
            DONE, TOO_LARGE or FAILED
        """
        files = self.processor.new_clip_files(request.mode)
        logger.info(
            f"Processing {request.mode.value} clip {files.uid}: {request.url} "
            f"({request.start_time} -> {request.end_time})"
        )

        try:
            await self._enter(PipelineState.DOWNLOADING, STATUS_DOWNLOADING)
            source_path = await self.processor.download(
                request.url, request.mode, files.download_path
            )

            await self._enter(PipelineState.CUTTING, STATUS_CUTTING)
            clip_path = await self.processor.trim(
                source_path,
                request.start_time,
                request.end_time,
                request.mode,
                files.output_path,
            )

            await self._enter(PipelineState.SIZE_CHECK, STATUS_CHECKING_SIZE)
            file_size = clip_path.stat().st_size
            if file_size == 0:
                raise ToolError(
                    "ffmpeg",
                    "output file is empty, the timestamps may be outside the video duration",
                )
            if file_size > MAX_FILE_SIZE:
                logger.warning(
                    f"Clip {files.uid} is too large: {format_file_size(file_size)}"
                )
                await self._enter(PipelineState.TOO_LARGE, STATUS_TOO_LARGE)
                return self.state

            await self._enter(PipelineState.UPLOADING, STATUS_UPLOADING)
            await self._send_clip(clip_path, request)

            await self._enter(PipelineState.DONE, STATUS_DONE)
            return self.state

        except Exception as e:
            logger.error(f"Processing error for clip {files.uid}: {e}")
            await self._enter(PipelineState.FAILED, describe_failure(e))
            return self.state

        finally:
            self.processor.cleanup(files)

    async def _send_clip(self, clip_path: Path, request: ClipRequest) -> None:
        duration = request.duration if request.duration > 0 else None
        clip_file = types.FSInputFile(clip_path)

        if request.mode == ClipMode.AUDIO:
            await self.status_message.answer_audio(
                audio=clip_file,
                caption=f"🎵 Audio clip ({request.start_time} → {request.end_time})",
                duration=duration,
            )
        else:
            await self.status_message.answer_video(
                video=clip_file,
                caption=f"🎬 Video clip ({request.start_time} → {request.end_time})",
                duration=duration,
                supports_streaming=True,
            )
