"""CLI info command: media metadata via ffprobe."""

import logging
from pathlib import Path

import click

from mediaconv.cli.context import get_cli_config, get_tools, require_existing
from mediaconv.cli.exit_codes import exit_code_for
from mediaconv.cli.output import error_exit
from mediaconv.introspector import (
    FFprobeProbe,
    MediaProbeError,
    format_human,
    format_json,
)

logger = logging.getLogger(__name__)


@click.command("info")
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(path_type=Path),
    required=True,
    help="Media file to inspect.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def info_command(ctx: click.Context, input_path: Path, output_format: str) -> None:
    """Show duration, resolution, codecs and streams of a media file."""
    json_output = output_format == "json"
    require_existing(input_path, json_output)

    probe = FFprobeProbe(
        get_tools(ctx),
        timeout=get_cli_config(ctx).conversion.probe_timeout_seconds,
    )
    try:
        info = probe.probe(input_path)
    except MediaProbeError as e:
        logger.debug("Probe of %s failed: %s", input_path, e)
        error_exit(e.message, exit_code_for(e.kind), json_output)

    if json_output:
        click.echo(format_json(info))
    else:
        click.echo(format_human(info))
