"""External tool detection and version parsing.

Each tool is located once (configured path first, then the PATH search)
and asked for its version. The results are frozen into a ToolRegistry.
"""

import logging
import re
import shutil
import subprocess  # nosec B404 - subprocess is required for tool detection
from datetime import datetime, timezone
from pathlib import Path

from mediaconv.core.subprocess_utils import run_command
from mediaconv.tools.models import (
    ToolDetectionConfig,
    ToolInfo,
    ToolRegistry,
    ToolStatus,
)

logger = logging.getLogger(__name__)

# Timeout for version detection commands (seconds)
DETECTION_TIMEOUT = 10

FFMPEG_DETECTION = ToolDetectionConfig(
    name="ffmpeg",
    version_flag="-version",
    version_pattern=r"ffmpeg version (\S+)",
)
FFPROBE_DETECTION = ToolDetectionConfig(
    name="ffprobe",
    version_flag="-version",
    version_pattern=r"ffprobe version (\S+)",
)
MAGICK_DETECTION = ToolDetectionConfig(
    name="magick",
    version_flag="-version",
    version_pattern=r"Version: ImageMagick (\S+)",
)
PANDOC_DETECTION = ToolDetectionConfig(
    name="pandoc",
    version_flag="--version",
    version_pattern=r"pandoc(?:\.exe)? (\S+)",
)


def parse_version_string(version_str: str) -> tuple[int, ...] | None:
    """Parse a version string into a comparable tuple.

    Handles various version formats:
    - "6.1.1" -> (6, 1, 1)
    - "n6.1.1" -> (6, 1, 1)  (ffmpeg nightlies)
    - "7.1.1-15" -> (7, 1, 1)  (ImageMagick patch level)
    - "3.1.11.1" -> (3, 1, 11, 1)  (pandoc)

    Args:
        version_str: Version string to parse.

    Returns:
        Tuple of version components, or None if parsing fails.
    """
    if not version_str:
        return None

    version_str = version_str.lstrip("nv")

    match = re.match(r"(\d+(?:\.\d+)*)", version_str)
    if not match:
        return None

    return tuple(int(p) for p in match.group(1).split("."))


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        configured_path = configured_path.expanduser()
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def detect_tool(
    config: ToolDetectionConfig,
    configured_path: Path | None = None,
) -> ToolInfo:
    """Locate a tool and read its version.

    Args:
        config: Tool-specific detection configuration.
        configured_path: Optional configured path to the tool.

    Returns:
        ToolInfo with the detection outcome. Never raises for a missing
        or broken tool; the status carries the problem instead.
    """
    now = datetime.now(timezone.utc)

    path = find_tool(config.name, configured_path)
    if not path:
        return ToolInfo(
            name=config.name,
            status=ToolStatus.MISSING,
            status_message=f"{config.name} not found in PATH",
            detected_at=now,
        )

    try:
        output = run_command([path, config.version_flag], timeout=DETECTION_TIMEOUT)
    except subprocess.TimeoutExpired:
        return ToolInfo(
            name=config.name,
            path=path,
            status=ToolStatus.ERROR,
            status_message=f"{config.name} version check timed out",
            detected_at=now,
        )
    except OSError as e:
        return ToolInfo(
            name=config.name,
            path=path,
            status=ToolStatus.ERROR,
            status_message=f"Failed to run {config.name}: {e}",
            detected_at=now,
        )

    if output.returncode != 0:
        return ToolInfo(
            name=config.name,
            path=path,
            status=ToolStatus.ERROR,
            status_message=(
                f"Failed to get {config.name} version: {output.stderr.strip()}"
            ),
            detected_at=now,
        )

    version = None
    version_tuple = None
    version_match = re.search(config.version_pattern, output.stdout)
    if version_match:
        version = version_match.group(1)
        version_tuple = parse_version_string(version)
        if version_tuple is None:
            logger.warning(
                "Could not parse %s version '%s' into comparable tuple",
                config.name,
                version,
            )

    return ToolInfo(
        name=config.name,
        path=path,
        version=version,
        version_tuple=version_tuple,
        status=ToolStatus.AVAILABLE,
        detected_at=now,
    )


def detect_ffmpeg(configured_path: Path | None = None) -> ToolInfo:
    return detect_tool(FFMPEG_DETECTION, configured_path)


def detect_ffprobe(configured_path: Path | None = None) -> ToolInfo:
    return detect_tool(FFPROBE_DETECTION, configured_path)


def detect_magick(configured_path: Path | None = None) -> ToolInfo:
    return detect_tool(MAGICK_DETECTION, configured_path)


def detect_pandoc(configured_path: Path | None = None) -> ToolInfo:
    return detect_tool(PANDOC_DETECTION, configured_path)


def detect_all_tools(
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    magick_path: Path | None = None,
    pandoc_path: Path | None = None,
) -> ToolRegistry:
    """Detect every supported tool and return the frozen registry.

    Args:
        ffmpeg_path: Optional configured path to ffmpeg.
        ffprobe_path: Optional configured path to ffprobe.
        magick_path: Optional configured path to magick.
        pandoc_path: Optional configured path to pandoc.

    Returns:
        ToolRegistry with detection results for all tools.
    """
    registry = ToolRegistry(
        ffmpeg=detect_ffmpeg(ffmpeg_path),
        ffprobe=detect_ffprobe(ffprobe_path),
        magick=detect_magick(magick_path),
        pandoc=detect_pandoc(pandoc_path),
    )
    missing = registry.get_missing_tools()
    if missing:
        logger.info("Tools not available: %s", ", ".join(missing))
    return registry
