"""
Video processing module.
Handles downloading with yt-dlp, trimming with FFmpeg and temp file cleanup.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import AUDIO_BITRATE, FFMPEG_BINARY, TEMP_DIR, YTDLP_BINARY
from .utils import cleanup_temp_files, remove_file

logger = logging.getLogger(__name__)

# Extensions yt-dlp may pick for the final file
DOWNLOAD_EXTENSIONS = [".mp4", ".webm", ".mkv", ".m4a", ".opus", ".mp3", ".ogg"]


class ClipMode(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"


class ToolError(Exception):
    """An external tool failed or did not produce its output file."""

    def __init__(self, tool: str, message: str):
        super().__init__(f"{tool} failed: {message}")
        self.tool = tool
        self.message = message


@dataclass
class CommandResult:
    """Outcome of one external command."""

    success: bool
    output: str
    error_text: str
    returncode: Optional[int] = None


@dataclass
class ClipFiles:
    """Temp files owned by one clip request."""

    uid: str
    download_path: Path
    output_path: Path


class VideoProcessor:
    """
    Runs the external tools for one clip: yt-dlp, then FFmpeg.
    """

    def __init__(
        self,
        temp_dir: Optional[Path] = None,
        ytdlp_binary: str = YTDLP_BINARY,
        ffmpeg_binary: str = FFMPEG_BINARY,
    ):
        """Initialize video processor."""
        self.temp_dir = Path(temp_dir or TEMP_DIR)
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        self.ytdlp_binary = ytdlp_binary
        self.ffmpeg_binary = ffmpeg_binary
        logger.info(f"VideoProcessor initialized with temp dir: {self.temp_dir}")

    def new_clip_files(self, mode: ClipMode) -> ClipFiles:
        """
        Allocate temp file paths for a new request.

        Names come from a random identifier so concurrent requests never
        share a file.
        """
        uid = uuid.uuid4().hex[:12]
        is_audio = mode == ClipMode.AUDIO
        return ClipFiles(
            uid=uid,
            download_path=self.temp_dir / f"{uid}_raw.{'webm' if is_audio else 'mp4'}",
            output_path=self.temp_dir / f"{uid}_clip.{'mp3' if is_audio else 'mp4'}",
        )

    async def run_command(self, cmd: str, args: list[str]) -> CommandResult:
        """
        Run an external command without blocking the event loop.

        Args:
            cmd: Executable name or path
            args: Command arguments

        Returns:
            CommandResult with decoded stdout and stderr
        """
        logger.info(f"Running command: {cmd} {' '.join(args)}")

        try:
            process = await asyncio.create_subprocess_exec(
                cmd,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Could not start {cmd}: {e}")
            return CommandResult(success=False, output="", error_text=str(e))

        stdout, stderr = await process.communicate()
        output = stdout.decode(errors="replace").strip()
        error_text = stderr.decode(errors="replace").strip()

        if process.returncode != 0:
            logger.error(f"{cmd} exited with code {process.returncode}")
            logger.error(f"{cmd} stderr: {error_text}")

        return CommandResult(
            success=process.returncode == 0,
            output=output,
            error_text=error_text,
            returncode=process.returncode,
        )

    def _get_yt_dlp_args(self, url: str, mode: ClipMode, download_path: Path) -> list:
        """
        Get yt-dlp arguments for downloading.

        Audio takes the best audio-only stream. Video prefers an MP4 video
        plus M4A audio pair and falls back to the best single file.
        """
        if mode == ClipMode.AUDIO:
            format_args = ["-f", "bestaudio"]
        else:
            format_args = [
                "-f",
                "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best",
                "--merge-output-format",
                "mp4",
            ]

        return [
            *format_args,
            "-o",
            str(download_path),
            "--no-playlist",
            "--no-warnings",
            url,
        ]

    async def download(self, url: str, mode: ClipMode, download_path: Path) -> Path:
        """
        Download the media stream needed for the clip.

        Args:
            url: YouTube URL, as sent by the user
            mode: Audio or video clip
            download_path: Expected output path

        Returns:
            Path of the file yt-dlp actually produced

        Raises:
            ToolError: yt-dlp failed or produced no file
        """
        logger.info(f"Starting {mode.value} download from: {url}")

        result = await self.run_command(
            self.ytdlp_binary, self._get_yt_dlp_args(url, mode, download_path)
        )
        if not result.success:
            raise ToolError("yt-dlp", result.error_text or "download failed")

        actual_path = self.find_downloaded_file(download_path)
        if actual_path is None:
            raise ToolError("yt-dlp", "download completed but file not found on disk")

        logger.info(
            f"Downloaded successfully: {actual_path} ({actual_path.stat().st_size} bytes)"
        )
        return actual_path

    def find_downloaded_file(self, expected_path: Path) -> Optional[Path]:
        """
        Locate the downloaded file.

        yt-dlp may replace the extension we asked for, so every known
        extension is tried on the same stem.
        """
        if expected_path.exists():
            return expected_path

        for ext in DOWNLOAD_EXTENSIONS:
            candidate = expected_path.with_suffix(ext)
            if candidate.exists():
                logger.info(f"Found download under variant extension: {candidate}")
                return candidate

        return None

    def _get_ffmpeg_args(
        self,
        input_path: Path,
        start_time: str,
        end_time: str,
        mode: ClipMode,
        output_path: Path,
    ) -> list:
        args = [
            "-hide_banner",
            "-loglevel",
            "error",
            "-y",
            "-i",
            str(input_path),
            "-ss",
            start_time,
            "-to",
            end_time,
        ]

        if mode == ClipMode.AUDIO:
            # MP3 re-encode, video stream dropped
            args += ["-vn", "-acodec", "libmp3lame", "-ab", AUDIO_BITRATE]
        else:
            args += ["-c", "copy", "-avoid_negative_ts", "make_zero"]

        args.append(str(output_path))
        return args

    async def trim(
        self,
        input_path: Path,
        start_time: str,
        end_time: str,
        mode: ClipMode,
        output_path: Path,
    ) -> Path:
        """
        Trim media to the requested range using FFmpeg.

        Args:
            input_path: Downloaded media file
            start_time: Start as HH:MM:SS
            end_time: End as HH:MM:SS
            mode: Stream copy for video, MP3 re-encode for audio
            output_path: Where to write the clip

        Returns:
            Path to the trimmed file

        Raises:
            ToolError: FFmpeg failed or wrote no file
        """
        logger.info(f"Trimming {input_path} from {start_time} to {end_time}")

        result = await self.run_command(
            self.ffmpeg_binary,
            self._get_ffmpeg_args(input_path, start_time, end_time, mode, output_path),
        )
        if not result.success:
            raise ToolError("ffmpeg", result.error_text or "trim failed")

        if not output_path.exists():
            raise ToolError("ffmpeg", "FFmpeg completed but output file is missing")

        logger.info(f"Trimmed successfully: {output_path}")
        return output_path

    def cleanup(self, files: ClipFiles) -> None:
        """
        Remove every temp file of a request.

        Also catches extension variants of the download. Never raises.
        """
        remove_file(files.output_path)
        remove_file(files.download_path)
        cleanup_temp_files(files.download_path.parent, f"{files.uid}_raw.*")
