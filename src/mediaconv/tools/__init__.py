"""External tool detection and requirement checks.

This package locates ffmpeg, ffprobe, magick and pandoc, records their
versions in an immutable ToolRegistry, and maps media categories to the
tool that handles them.
"""

from mediaconv.tools.detection import (
    detect_all_tools,
    detect_ffmpeg,
    detect_ffprobe,
    detect_magick,
    detect_pandoc,
    detect_tool,
    find_tool,
    parse_version_string,
)
from mediaconv.tools.models import (
    TOOL_NAMES,
    ToolDetectionConfig,
    ToolInfo,
    ToolRegistry,
    ToolStatus,
)
from mediaconv.tools.requirements import (
    RequirementLevel,
    RequirementsReport,
    ToolRequirement,
    check_requirements,
    get_install_hint,
    get_missing_tool_hints,
    get_upgrade_suggestions,
    tool_for_category,
)

__all__ = [
    # Models
    "TOOL_NAMES",
    "ToolDetectionConfig",
    "ToolInfo",
    "ToolRegistry",
    "ToolStatus",
    # Detection
    "detect_all_tools",
    "detect_ffmpeg",
    "detect_ffprobe",
    "detect_magick",
    "detect_pandoc",
    "detect_tool",
    "find_tool",
    "parse_version_string",
    # Requirements
    "RequirementLevel",
    "RequirementsReport",
    "ToolRequirement",
    "check_requirements",
    "get_install_hint",
    "get_missing_tool_hints",
    "get_upgrade_suggestions",
    "tool_for_category",
]
