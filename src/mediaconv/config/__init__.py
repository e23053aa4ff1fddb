"""Configuration management for mediaconv.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (MEDIACONV_*)
3. Config file (~/.mediaconv/config.toml)
4. Default values (lowest priority)
"""

from mediaconv.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediaconv.config.env import EnvReader
from mediaconv.config.loader import (
    ConfigError,
    build_logging_config,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
    load_toml_file,
)
from mediaconv.config.models import (
    ConversionConfig,
    LoggingConfig,
    MediaconvConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "ConversionConfig",
    "LoggingConfig",
    "MediaconvConfig",
    "ToolPathsConfig",
    # Loader
    "ConfigError",
    "build_logging_config",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "load_toml_file",
    # Layering
    "ConfigBuilder",
    "ConfigSource",
    "EnvReader",
    "source_from_env",
    "source_from_file",
]
