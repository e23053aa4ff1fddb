"""CLI module for mediaconv."""

import logging
from pathlib import Path

import click

from mediaconv.cli.exit_codes import ExitCode
from mediaconv.cli.output import error_exit
from mediaconv.config import (
    ConfigError,
    MediaconvConfig,
    build_logging_config,
    get_config,
)
from mediaconv.logging import configure_logging

logger = logging.getLogger(__name__)


def _load_config(config_path: Path | None) -> MediaconvConfig:
    """Load configuration, failing hard only when a file was named explicitly."""
    try:
        return get_config(config_path, strict=config_path is not None)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)


def _configure_logging(
    config: MediaconvConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the config file merged with CLI options.

    Args:
        config: Effective configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    try:
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        error_exit(f"Invalid logging configuration: {e}", ExitCode.CONFIG_ERROR)
    configure_logging(logging_config)


def _log_startup_settings(config: MediaconvConfig, config_path: Path | None) -> None:
    """Log key settings at startup."""
    logger.info(
        "mediaconv starting: config=%s, timeout=%s, workers=%d, log_level=%s",
        config_path or "default",
        config.conversion.timeout_seconds or "none",
        config.conversion.workers,
        config.logging.level,
    )


@click.group()
@click.version_option(package_name="mediaconv")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.mediaconv/config.toml).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """mediaconv - Convert, inspect and play media files."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        ctx.obj["config"] = _load_config(config_path)
    config = ctx.obj["config"]

    _configure_logging(config, log_level, log_file, log_json)
    _log_startup_settings(config, config_path)


# Defer import to avoid circular dependency
def _register_commands():
    from mediaconv.cli.batch import batch_command
    from mediaconv.cli.convert import convert_command
    from mediaconv.cli.doctor import doctor_command
    from mediaconv.cli.formats import formats_command
    from mediaconv.cli.frame import frame_command
    from mediaconv.cli.image import (
        crop_command,
        flip_command,
        resize_command,
        rotate_command,
    )
    from mediaconv.cli.info import info_command
    from mediaconv.cli.play import play_command

    main.add_command(convert_command)
    main.add_command(frame_command)
    main.add_command(crop_command)
    main.add_command(resize_command)
    main.add_command(rotate_command)
    main.add_command(flip_command)
    main.add_command(info_command)
    main.add_command(batch_command)
    main.add_command(play_command)
    main.add_command(doctor_command)
    main.add_command(formats_command)


_register_commands()
