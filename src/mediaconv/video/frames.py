"""Still-frame extraction with ffmpeg."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from mediaconv.converter.errors import InvalidArgumentError, UnsupportedTypeError
from mediaconv.converter.invoker import ToolInvoker, prepare_output_dir
from mediaconv.converter.models import FrameRequest
from mediaconv.core.file_utils import extension_of
from mediaconv.core.formatting import format_timestamp
from mediaconv.formats.registry import Category, FormatRegistry, get_default_registry

logger = logging.getLogger(__name__)

FFMPEG = "ffmpeg"

# File name pattern for interval extraction; ffmpeg numbers from 1.
FRAME_PATTERN = "frame_%04d.jpg"
FRAME_GLOB = "frame_[0-9][0-9][0-9][0-9]*.jpg"

MIN_FRAME_QUALITY = 1
MAX_FRAME_QUALITY = 31

_SECONDS_PATTERN = re.compile(r"^\d+(\.\d+)?$")
_CLOCK_PATTERN = re.compile(r"^\d{1,2}:[0-5]\d:[0-5]\d(\.\d{1,6})?$")


def normalize_timestamp(value: str) -> str:
    """Return an ffmpeg seek position for a user-supplied timestamp.

    Bare seconds ("5", "2.5") become HH:MM:SS(.fff); HH:MM:SS(.fff) is
    returned unchanged.

    Raises:
        InvalidArgumentError: For any other form, including negative values.
    """
    value = str(value).strip()
    if _SECONDS_PATTERN.match(value):
        return format_timestamp(float(value))
    if _CLOCK_PATTERN.match(value):
        return value
    raise InvalidArgumentError(
        f"timestamp must be seconds or HH:MM:SS, got {value!r}", field="timestamp"
    )


def scale_filter(width: int | None, height: int | None) -> str | None:
    """Return a scale filter for the requested size, -1 keeping aspect."""
    if width is None and height is None:
        return None
    parts = []
    for value, field in ((width, "width"), (height, "height")):
        if value is None:
            parts.append("-1")
        elif isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidArgumentError(
                f"{field} must be a positive integer, got {value!r}", field=field
            )
        else:
            parts.append(str(value))
    return f"scale={parts[0]}:{parts[1]}"


class FrameExtractor:
    """Grab frames from videos.

    Args:
        invoker: Invoker bound to the startup tool registry.
        registry: Format registry used to validate extensions.
    """

    def __init__(
        self, invoker: ToolInvoker, registry: FormatRegistry | None = None
    ) -> None:
        self.invoker = invoker
        self.registry = registry or get_default_registry()

    def extract_frame(self, request: FrameRequest) -> list[str]:
        """Write the frame at request.timestamp to request.output_path.

        Returns:
            The executed argument vector.

        Raises:
            ConversionError: Any subclass; see ToolInvoker.invoke.
        """
        self._check_video(request.input_path)
        output_ext = extension_of(request.output_path)
        if not self.registry.supports_output(Category.IMAGE, output_ext):
            raise UnsupportedTypeError(
                f"Cannot write a frame as {output_ext or '(no extension)'}",
                extension=output_ext,
            )
        timestamp = normalize_timestamp(request.timestamp)
        tool_path = self.invoker.require(FFMPEG)

        # -ss before -i seeks on the input, which is fast on long files.
        command = [
            str(tool_path),
            "-hide_banner",
            "-ss",
            timestamp,
            "-i",
            str(request.input_path),
            "-frames:v",
            "1",
        ]
        scale = scale_filter(request.width, request.height)
        if scale:
            command.extend(["-vf", scale])
        if (
            request.quality is not None
            and MIN_FRAME_QUALITY <= request.quality <= MAX_FRAME_QUALITY
        ):
            command.extend(["-q:v", str(request.quality)])
        command.extend(["-y", str(request.output_path)])

        prepare_output_dir(request.output_path.parent)
        self.invoker.invoke(tool_path, command[1:])
        logger.info(
            "Extracted frame at %s from %s", timestamp, request.input_path
        )
        return command

    def extract_frames(
        self, video: Path, output_dir: Path, interval_seconds: float
    ) -> list[Path]:
        """Write one JPEG every interval_seconds of video into output_dir.

        Existing frame_NNNN.jpg files in output_dir are deleted first, the
        same way -y overwrites them.

        Returns:
            The frame files in output_dir, sorted by name.
        """
        video = Path(video)
        output_dir = Path(output_dir)
        self._check_video(video)
        try:
            interval = float(interval_seconds)
        except (TypeError, ValueError):
            interval = 0.0
        if interval <= 0:
            raise InvalidArgumentError(
                f"interval must be a positive number of seconds, "
                f"got {interval_seconds!r}",
                field="interval",
            )
        tool_path = self.invoker.require(FFMPEG)

        prepare_output_dir(output_dir)
        self._clear_frames(output_dir)
        self.invoker.invoke(
            tool_path,
            [
                "-hide_banner",
                "-i",
                str(video),
                "-vf",
                f"fps=1/{interval:g}",
                "-y",
                str(output_dir / FRAME_PATTERN),
            ],
        )
        frames = sorted(output_dir.glob(FRAME_GLOB))
        logger.info(
            "Extracted %d frame(s) from %s into %s", len(frames), video, output_dir
        )
        return frames

    @staticmethod
    def _clear_frames(output_dir: Path) -> None:
        """Remove frames left by an earlier run so only new ones are listed."""
        stale = sorted(output_dir.glob(FRAME_GLOB))
        if not stale:
            return
        logger.info("Removing %d old frame(s) from %s", len(stale), output_dir)
        for path in stale:
            try:
                path.unlink()
            except OSError as e:
                raise InvalidArgumentError(
                    f"Cannot remove old frame {path}: {e.strerror or e}",
                    field="output_dir",
                ) from e

    def _check_video(self, path: Path) -> None:
        ext = extension_of(path)
        if self.registry.resolve(ext) != Category.VIDEO:
            raise UnsupportedTypeError(f"Not a video file: {path}", extension=ext)
