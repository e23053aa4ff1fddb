"""ffprobe-based media probe."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from mediaconv.converter.errors import ConversionError, ErrorKind
from mediaconv.converter.invoker import ToolInvoker
from mediaconv.core.file_utils import extension_of
from mediaconv.formats.registry import Category, FormatRegistry, get_default_registry
from mediaconv.introspector.models import MediaInfo
from mediaconv.introspector.parsers import FFprobeOutputError, parse_ffprobe_output
from mediaconv.tools.models import ToolRegistry

logger = logging.getLogger(__name__)

FFPROBE = "ffprobe"
DEFAULT_PROBE_TIMEOUT = 60.0

FFPROBE_ARGS = [
    "-v",
    "error",
    "-print_format",
    "json",
    "-show_format",
    "-show_streams",
]


class MediaProbeError(ConversionError):
    """Probing failed; kind says why."""

    def __init__(self, message: str, kind: ErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


class FFprobeProbe:
    """Read container and stream metadata with ffprobe's JSON output.

    Args:
        tools: Tool registry built at startup.
        timeout: Seconds before ffprobe is killed. None waits indefinitely.
        registry: Format registry used to reject non-media files.
    """

    def __init__(
        self,
        tools: ToolRegistry,
        timeout: float | None = DEFAULT_PROBE_TIMEOUT,
        registry: FormatRegistry | None = None,
    ) -> None:
        self.invoker = ToolInvoker(tools, timeout=timeout)
        self.registry = registry or get_default_registry()

    def probe(self, path: Path) -> MediaInfo:
        """Probe a video, audio or image file.

        The file is not checked for existence first; ffprobe's own error
        ("No such file or directory") is reported instead.

        Raises:
            MediaProbeError: UNSUPPORTED_TYPE for documents and unregistered
                extensions, TOOL_MISSING when ffprobe was not found,
                TOOL_EXECUTION_FAILED for a non-zero exit or unreadable
                output, TIMEOUT when ffprobe was killed.
        """
        path = Path(path)
        ext = extension_of(path)
        category = self.registry.resolve(ext)
        if category is None or category == Category.DOCUMENT:
            raise MediaProbeError(
                f"Cannot probe {ext or 'files without an extension'}: "
                "not a video, audio or image file",
                ErrorKind.UNSUPPORTED_TYPE,
            )

        try:
            tool_path = self.invoker.require(FFPROBE)
            output = self.invoker.invoke(tool_path, [*FFPROBE_ARGS, str(path)])
        except ConversionError as e:
            raise MediaProbeError(e.message, e.kind) from e

        try:
            data = json.loads(output.stdout)
            info = parse_ffprobe_output(path, data)
        except json.JSONDecodeError as e:
            raise MediaProbeError(
                f"Invalid ffprobe output for {path}: {e}",
                ErrorKind.TOOL_EXECUTION_FAILED,
            ) from e
        except FFprobeOutputError as e:
            raise MediaProbeError(str(e), ErrorKind.TOOL_EXECUTION_FAILED) from e

        logger.debug(
            "Probed %s: %s, %d stream(s)", path, info.format_name, info.streams
        )
        return info
