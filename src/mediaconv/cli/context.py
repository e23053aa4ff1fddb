"""Shared state for CLI commands.

The main group stores the effective configuration in ctx.obj; the tool
registry is detected on first use so that commands which never run a tool
(formats, --help) do not spawn version probes. Tests may pre-populate
either key through CliRunner.invoke(obj=...).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click

from mediaconv.config import MediaconvConfig
from mediaconv.converter.dispatcher import Converter
from mediaconv.tools import ToolRegistry, detect_all_tools

logger = logging.getLogger(__name__)


def get_cli_config(ctx: click.Context) -> MediaconvConfig:
    """Return the configuration loaded by the main group."""
    obj = ctx.find_root().ensure_object(dict)
    config = obj.get("config")
    if config is None:
        config = MediaconvConfig()
        obj["config"] = config
    return config


def get_tools(ctx: click.Context) -> ToolRegistry:
    """Return the tool registry, detecting tools on first call."""
    obj = ctx.find_root().ensure_object(dict)
    tools = obj.get("tools")
    if tools is None:
        paths = get_cli_config(ctx).tools
        tools = detect_all_tools(
            ffmpeg_path=paths.ffmpeg,
            ffprobe_path=paths.ffprobe,
            magick_path=paths.magick,
            pandoc_path=paths.pandoc,
        )
        logger.debug(
            "Detected tools: available=%s missing=%s",
            tools.get_available_tools(),
            tools.get_missing_tools(),
        )
        obj["tools"] = tools
    return tools


def get_converter(ctx: click.Context, timeout: float | None = None) -> Converter:
    """Build a Converter from the CLI config.

    Args:
        ctx: Click context.
        timeout: Per-invocation timeout override; 0 removes the limit.
    """
    conversion = get_cli_config(ctx).conversion
    if timeout is not None:
        conversion = replace(conversion, timeout_seconds=timeout or None)
    return Converter(get_tools(ctx), conversion)


def require_existing(path: Path, json_output: bool = False) -> None:
    """Exit with TARGET_NOT_FOUND when path does not exist."""
    from mediaconv.cli.exit_codes import ExitCode
    from mediaconv.cli.output import error_exit

    if not path.exists():
        error_exit(f"File not found: {path}", ExitCode.TARGET_NOT_FOUND, json_output)
