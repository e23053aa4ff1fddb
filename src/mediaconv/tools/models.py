"""Data models for detected external tools.

A ToolRegistry is built once at startup and never refreshed; it is passed
explicitly to everything that runs a tool. Tests build one directly with
ToolRegistry.from_paths().
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

# Names of the tools mediaconv knows how to drive, in display order.
TOOL_NAMES: tuple[str, ...] = ("ffmpeg", "ffprobe", "magick", "pandoc")


class ToolStatus(Enum):
    """Status of an external tool."""

    AVAILABLE = "available"  # Tool found and runs
    MISSING = "missing"  # Tool not found in PATH or configured location
    ERROR = "error"  # Tool found but version check failed


@dataclass(frozen=True)
class ToolInfo:
    """Detection result for one external tool."""

    name: str
    path: Path | None = None
    version: str | None = None
    version_tuple: tuple[int, ...] | None = None  # Parsed version for comparison
    status: ToolStatus = ToolStatus.MISSING
    status_message: str | None = None
    detected_at: datetime | None = None

    def is_available(self) -> bool:
        """Return True if the tool is available and usable."""
        return self.status == ToolStatus.AVAILABLE and self.path is not None

    def meets_version(self, min_version: tuple[int, ...]) -> bool:
        """Check if tool version meets minimum requirement.

        Args:
            min_version: Minimum version as tuple (e.g., (6, 0) for 6.0).

        Returns:
            True if tool version >= min_version, False otherwise.
        """
        if self.version_tuple is None:
            return False
        max_len = max(len(self.version_tuple), len(min_version))
        v1 = self.version_tuple + (0,) * (max_len - len(self.version_tuple))
        v2 = min_version + (0,) * (max_len - len(min_version))
        return v1 >= v2


@dataclass(frozen=True)
class ToolDetectionConfig:
    """How to find and version-check a specific tool."""

    name: str  # Binary name looked up on PATH (e.g., "ffmpeg")
    version_flag: str  # Flag that prints the version ("-version" or "--version")
    version_pattern: str  # Regex with one group capturing the version


@dataclass(frozen=True)
class ToolRegistry:
    """Immutable snapshot of the external tools located at startup."""

    ffmpeg: ToolInfo = field(default_factory=lambda: ToolInfo(name="ffmpeg"))
    ffprobe: ToolInfo = field(default_factory=lambda: ToolInfo(name="ffprobe"))
    magick: ToolInfo = field(default_factory=lambda: ToolInfo(name="magick"))
    pandoc: ToolInfo = field(default_factory=lambda: ToolInfo(name="pandoc"))

    detected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_paths(cls, **paths: Path | str | None) -> ToolRegistry:
        """Build a registry marking the given tools available at the given paths.

        Tools that are not passed, or passed as None, are recorded as missing.

        Example:
            registry = ToolRegistry.from_paths(ffmpeg="/usr/bin/ffmpeg")
        """
        unknown = set(paths) - set(TOOL_NAMES)
        if unknown:
            raise ValueError(f"Unknown tool name(s): {', '.join(sorted(unknown))}")
        tools = {}
        for name in TOOL_NAMES:
            path = paths.get(name)
            if path is None:
                tools[name] = ToolInfo(name=name)
            else:
                tools[name] = ToolInfo(
                    name=name, path=Path(path), status=ToolStatus.AVAILABLE
                )
        return cls(**tools)

    def get_tool(self, name: str) -> ToolInfo | None:
        """Get tool info by name, or None for an unknown tool name."""
        name = name.casefold()
        if name not in TOOL_NAMES:
            return None
        return getattr(self, name)

    def get_path(self, name: str) -> Path | None:
        """Return the path of an available tool, or None."""
        tool = self.get_tool(name)
        if tool is not None and tool.is_available():
            return tool.path
        return None

    def is_available(self, name: str) -> bool:
        tool = self.get_tool(name)
        return tool is not None and tool.is_available()

    def get_available_tools(self) -> list[str]:
        return [name for name in TOOL_NAMES if self.is_available(name)]

    def get_missing_tools(self) -> list[str]:
        return [name for name in TOOL_NAMES if not self.is_available(name)]

    def with_tool(self, info: ToolInfo) -> ToolRegistry:
        """Return a copy of this registry with one tool replaced."""
        if info.name not in TOOL_NAMES:
            raise ValueError(f"Unknown tool name: {info.name}")
        return replace(self, **{info.name: info})

    def summary(self) -> dict[str, dict[str, str | bool]]:
        """Get summary of all tools for display."""

        def tool_summary(tool: ToolInfo) -> dict[str, str | bool]:
            return {
                "available": tool.is_available(),
                "version": tool.version or "not found",
                "path": str(tool.path) if tool.path else "not found",
                "status": tool.status.value,
            }

        return {name: tool_summary(getattr(self, name)) for name in TOOL_NAMES}
