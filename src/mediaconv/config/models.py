"""Configuration data models.

This module defines dataclasses for mediaconv configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None
    magick: Path | None = None
    pandoc: Path | None = None


@dataclass
class ConversionConfig:
    """Defaults applied to every conversion."""

    timeout_seconds: float | None = 3600.0
    """Seconds a conversion may run before the tool is killed. None = no limit."""

    probe_timeout_seconds: float | None = 60.0
    """Seconds an ffprobe call may run. None = no limit."""

    workers: int = 1
    """Parallel workers for batch and bulk runs (1 = sequential)."""

    image_quality: int = 95
    """ImageMagick -quality used when a request does not set one."""

    pdf_engine: str = "pdflatex"
    """LaTeX engine pandoc renders PDF output with."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("timeout_seconds", "probe_timeout_seconds"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if not 1 <= self.image_quality <= 100:
            raise ValueError(
                f"image_quality must be between 1 and 100, got {self.image_quality}"
            )
        if not self.pdf_engine.strip():
            raise ValueError("pdf_engine must not be empty")


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class MediaconvConfig:
    """Main configuration container.

    Aggregates all configuration sections.
    """

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def get_tool_path(self, tool_name: str) -> Path | None:
        """Get configured path for a tool.

        Args:
            tool_name: Name of the tool (ffmpeg, ffprobe, magick, pandoc).

        Returns:
            Configured path or None if not configured.
        """
        return getattr(self.tools, tool_name.lower(), None)
