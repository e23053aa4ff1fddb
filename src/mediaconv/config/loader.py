"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (MEDIACONV_*)
3. Config file (~/.mediaconv/config.toml)
4. Default values

Environment variables:
- MEDIACONV_FFMPEG_PATH: Path to ffmpeg executable
- MEDIACONV_FFPROBE_PATH: Path to ffprobe executable
- MEDIACONV_MAGICK_PATH: Path to ImageMagick's magick executable
- MEDIACONV_PANDOC_PATH: Path to pandoc executable
- MEDIACONV_TIMEOUT: Conversion timeout in seconds (0 = no limit)
- MEDIACONV_WORKERS: Default worker count for batch runs
- MEDIACONV_LOG_LEVEL: Log level (debug, info, warning, error)
- MEDIACONV_CONFIG_PATH: Path to config file (overrides default location)
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from mediaconv.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediaconv.config.env import EnvReader
from mediaconv.config.models import LoggingConfig, MediaconvConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mediaconv"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# path -> (parsed dict, mtime); reloaded when the file changes
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


class ConfigError(ValueError):
    """The configuration file is unreadable or holds invalid values."""


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, honouring MEDIACONV_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    return reader.get_path("MEDIACONV_CONFIG_PATH") or DEFAULT_CONFIG_FILE


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: Raise ConfigError instead of returning {} when the file is
            missing or cannot be parsed.

    Returns:
        Parsed dictionary, or {} when the file does not exist.
    """
    if not path.exists():
        if strict:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("TOML file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        logger.warning("Failed to load TOML file %s: %s", path, e)
        return {}

    logger.debug("Loaded TOML config from %s", path)
    return config


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from a TOML file, cached by modification time.

    Args:
        path: Path to config file. If None, uses the default location.
        strict: See load_toml_file.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    magick_path: Path | None = None,
    pandoc_path: Path | None = None,
    timeout_seconds: float | None = None,
    workers: int | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MediaconvConfig:
    """Get mediaconv configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MEDIACONV_CONFIG_PATH).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.
        magick_path: CLI override for magick path.
        pandoc_path: CLI override for pandoc path.
        timeout_seconds: CLI override for the conversion timeout.
        workers: CLI override for the batch worker count.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: Raise ConfigError for a missing or unparseable config file.

    Returns:
        MediaconvConfig with merged configuration.

    Raises:
        ConfigError: When a value fails validation, or (strict only) the
            config file cannot be read.
    """
    reader = env_reader or EnvReader()
    if config_path is None:
        config_path = get_default_config_path(reader)

    file_config = load_config_file(config_path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(
        ConfigSource(
            ffmpeg_path=ffmpeg_path,
            ffprobe_path=ffprobe_path,
            magick_path=magick_path,
            pandoc_path=pandoc_path,
            timeout_seconds=timeout_seconds,
            workers=workers,
        ),
        source_name="cli",
    )

    try:
        return builder.build()
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Build LoggingConfig by merging base config with CLI overrides.

    Returns:
        New LoggingConfig; validation runs in __post_init__, so invalid
        values raise ValueError.
    """
    return LoggingConfig(
        level=level if level is not None else base.level,
        file=file if file is not None else base.file,
        format=format if format is not None else base.format,
        include_stderr=(
            include_stderr if include_stderr is not None else base.include_stderr
        ),
        max_bytes=base.max_bytes,
        backup_count=base.backup_count,
    )
