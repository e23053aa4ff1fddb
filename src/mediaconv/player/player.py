"""Open media in the platform's player and build preview summaries."""

from __future__ import annotations

import logging
import shutil
import subprocess  # nosec B404 - launching the desktop media player
import sys
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from mediaconv.converter.errors import (
    ConversionError,
    ToolExecutionError,
    ToolMissingError,
    UnsupportedTypeError,
)
from mediaconv.converter.invoker import ToolInvoker
from mediaconv.converter.models import FrameRequest
from mediaconv.core.file_utils import extension_of
from mediaconv.core.formatting import format_duration, format_file_size
from mediaconv.formats.registry import Category, FormatRegistry, get_default_registry
from mediaconv.introspector.ffprobe import (
    DEFAULT_PROBE_TIMEOUT,
    FFprobeProbe,
    MediaProbeError,
)
from mediaconv.introspector.models import MediaInfo
from mediaconv.tools.models import ToolRegistry
from mediaconv.video.frames import FrameExtractor

logger = logging.getLogger(__name__)

# Linux players in order of preference; xdg-open is the fallback.
LINUX_PLAYERS = ("vlc", "mpv", "mplayer", "totem", "gnome-mpv")

PLAYABLE_VIDEO_EXTENSIONS = frozenset(
    {
        ".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv", ".webm", ".m4v",
        ".3gp", ".ogv", ".ts", ".mts", ".m2ts",
    }
)
PLAYABLE_AUDIO_EXTENSIONS = frozenset(
    {
        ".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma",
        ".opus", ".aiff", ".au", ".ra", ".amr", ".ac3",
    }
)
# Players handle more containers than the converters accept
PLAYABLE_EXTENSIONS = PLAYABLE_VIDEO_EXTENSIONS | PLAYABLE_AUDIO_EXTENSIONS

THUMBNAIL_TIMESTAMP = "1"
THUMBNAIL_QUALITY = 2


def detect_launcher(
    platform: str | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> list[str]:
    """Return the command prefix that opens a file in a media player.

    Args:
        platform: sys.platform value; defaults to the running platform.
        which: PATH lookup, replaceable in tests.
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return ["open"]
    if platform == "win32":
        # The empty string is the window title expected by start.
        return ["cmd", "/c", "start", ""]
    for name in LINUX_PLAYERS:
        found = which(name)
        if found:
            return [found]
    return ["xdg-open"]


@dataclass(frozen=True)
class PreviewInfo:
    """Summary of a media file for display before playing it.

    Fields other than path and format stay None when the value could not be
    determined.
    """

    path: Path
    format: str
    file_size: str | None = None
    duration: str | None = None
    resolution: str | None = None
    title: str | None = None
    artist: str | None = None
    thumbnail: Path | None = None
    media_info: MediaInfo | None = None


class MediaPlayer:
    """Launch the system media player and produce previews.

    Args:
        tools: Tool registry built at startup (ffprobe and ffmpeg are used
            for previews).
        launcher: Command prefix used to open files. Detected when None.
        registry: Format registry; only registered formats are probed and
            thumbnailed.
        probe_timeout: Timeout for ffprobe and thumbnail extraction.
    """

    def __init__(
        self,
        tools: ToolRegistry,
        launcher: list[str] | None = None,
        registry: FormatRegistry | None = None,
        probe_timeout: float | None = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self.registry = registry or get_default_registry()
        self.launcher = launcher if launcher is not None else self.detect()
        self.probe = FFprobeProbe(tools, timeout=probe_timeout, registry=self.registry)
        self.frames = FrameExtractor(
            ToolInvoker(tools, timeout=probe_timeout), self.registry
        )

    @staticmethod
    def detect() -> list[str]:
        """Detect the launcher for the running platform."""
        return detect_launcher()

    def is_playable(self, path: Path | str) -> bool:
        return extension_of(path) in PLAYABLE_EXTENSIONS

    def play(self, path: Path) -> list[str]:
        """Open path in the player without waiting for it to exit.

        Returns:
            The launched command.

        Raises:
            UnsupportedTypeError: path is not a video or audio file.
            ToolMissingError: The player executable does not exist.
            ToolExecutionError: The player could not be started.
        """
        path = Path(path)
        self._require_playable(path)
        command = [*self.launcher, str(path)]
        logger.info("Opening %s with %s", path, self.launcher[0])
        try:
            subprocess.Popen(  # nosec B603 - launcher is a fixed program list
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=sys.platform != "win32",
            )
        except FileNotFoundError as e:
            raise ToolMissingError(self.launcher[0]) from e
        except OSError as e:
            raise ToolExecutionError(self.launcher[0], -1, str(e)) from e
        return command

    def preview(self, path: Path, thumbnail_dir: Path | None = None) -> PreviewInfo:
        """Gather size, probe metadata and (for videos) a thumbnail.

        Probe and thumbnail failures are logged and leave the fields empty.

        Args:
            path: Media file.
            thumbnail_dir: Where to write the thumbnail; a new temporary
                directory when None.

        Raises:
            UnsupportedTypeError: path is not a video or audio file.
        """
        path = Path(path)
        category = self._require_playable(path)

        file_size = None
        try:
            file_size = format_file_size(path.stat().st_size)
        except OSError as e:
            logger.warning("Cannot stat %s: %s", path, e)

        info = None
        thumbnail = None
        if self.registry.resolve_path(path) != category:
            logger.debug("No probe or thumbnail for %s: unregistered format", path)
        else:
            try:
                info = self.probe.probe(path)
            except MediaProbeError as e:
                logger.warning("Probe failed for %s: %s", path, e.message)
            if category == Category.VIDEO:
                thumbnail = self._thumbnail(path, thumbnail_dir)

        resolution = None
        if info is not None and info.width and info.height:
            resolution = f"{info.width}x{info.height}"

        return PreviewInfo(
            path=path,
            format=extension_of(path).lstrip("."),
            file_size=file_size,
            duration=format_duration(info.duration) if info is not None else None,
            resolution=resolution,
            title=info.title if info is not None else None,
            artist=info.artist if info is not None else None,
            thumbnail=thumbnail,
            media_info=info,
        )

    def _thumbnail(self, path: Path, thumbnail_dir: Path | None) -> Path | None:
        if thumbnail_dir is None:
            thumbnail_dir = Path(tempfile.mkdtemp(prefix="mediaconv-preview-"))
        output = thumbnail_dir / f"{path.stem}_thumb.jpg"
        try:
            self.frames.extract_frame(
                FrameRequest(
                    input_path=path,
                    output_path=output,
                    timestamp=THUMBNAIL_TIMESTAMP,
                    quality=THUMBNAIL_QUALITY,
                )
            )
        except ConversionError as e:
            logger.warning("Thumbnail extraction failed for %s: %s", path, e.message)
            return None
        return output

    @staticmethod
    def _require_playable(path: Path) -> Category:
        ext = extension_of(path)
        if ext in PLAYABLE_VIDEO_EXTENSIONS:
            return Category.VIDEO
        if ext in PLAYABLE_AUDIO_EXTENSIONS:
            return Category.AUDIO
        raise UnsupportedTypeError(
            f"Not a supported media file: {ext or path.name}", extension=ext
        )
