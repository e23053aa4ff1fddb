"""Configuration builder with explicit layering.

Each source (config file, environment, CLI flags) is turned into a
ConfigSource; ConfigBuilder applies them in precedence order and fills in
defaults for whatever no source set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from mediaconv.config.env import EnvReader
from mediaconv.config.models import (
    ConversionConfig,
    LoggingConfig,
    MediaconvConfig,
    ToolPathsConfig,
)

logger = logging.getLogger(__name__)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tool paths
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None
    magick_path: Path | None = None
    pandoc_path: Path | None = None

    # Conversion config (timeouts of 0 mean "no limit")
    timeout_seconds: float | None = None
    probe_timeout_seconds: float | None = None
    workers: int | None = None
    image_quality: int | None = None
    pdf_engine: str | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds MediaconvConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply a source, overriding values set by earlier sources.

        Args:
            source: Configuration source to apply.
            source_name: Label used in debug logging.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                logger.debug("Config %s set by %s", field_obj.name, source_name)

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> MediaconvConfig:
        """Build the final MediaconvConfig with defaults for unset values.

        Raises:
            ValueError: If a layered value fails section validation.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_path", None),
            ffprobe=self._get("ffprobe_path", None),
            magick=self._get("magick_path", None),
            pandoc=self._get("pandoc_path", None),
        )

        # 0 disables the timeout
        timeout = self._get("timeout_seconds", 3600.0)
        probe_timeout = self._get("probe_timeout_seconds", 60.0)
        conversion = ConversionConfig(
            timeout_seconds=float(timeout) if timeout else None,
            probe_timeout_seconds=float(probe_timeout) if probe_timeout else None,
            workers=self._get("workers", 1),
            image_quality=self._get("image_quality", 95),
            pdf_engine=self._get("pdf_engine", "pdflatex"),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "warning"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        return MediaconvConfig(
            tools=tools,
            conversion=conversion,
            logging=logging_config,
        )


def _optional_path(value: Any) -> Path | None:
    return Path(str(value)).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed TOML config file.

    Expected layout::

        [tools]
        ffmpeg = "/usr/local/bin/ffmpeg"

        [conversion]
        timeout_seconds = 600
        workers = 2

        [logging]
        level = "info"
    """
    tools = file_config.get("tools", {})
    conversion = file_config.get("conversion", {})
    logging_conf = file_config.get("logging", {})

    return ConfigSource(
        # Tool paths
        ffmpeg_path=_optional_path(tools.get("ffmpeg")),
        ffprobe_path=_optional_path(tools.get("ffprobe")),
        magick_path=_optional_path(tools.get("magick")),
        pandoc_path=_optional_path(tools.get("pandoc")),
        # Conversion
        timeout_seconds=conversion.get("timeout_seconds"),
        probe_timeout_seconds=conversion.get("probe_timeout_seconds"),
        workers=conversion.get("workers"),
        image_quality=conversion.get("image_quality"),
        pdf_engine=conversion.get("pdf_engine"),
        # Logging
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from MEDIACONV_* environment variables."""
    return ConfigSource(
        ffmpeg_path=reader.get_path("MEDIACONV_FFMPEG_PATH"),
        ffprobe_path=reader.get_path("MEDIACONV_FFPROBE_PATH"),
        magick_path=reader.get_path("MEDIACONV_MAGICK_PATH"),
        pandoc_path=reader.get_path("MEDIACONV_PANDOC_PATH"),
        timeout_seconds=reader.get_float("MEDIACONV_TIMEOUT"),
        workers=reader.get_int("MEDIACONV_WORKERS"),
        logging_level=reader.get_str("MEDIACONV_LOG_LEVEL"),
    )
