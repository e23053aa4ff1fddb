"""CLI play command: open a file in the desktop media player."""

from pathlib import Path

import click

from mediaconv.cli.context import get_cli_config, get_tools, require_existing
from mediaconv.cli.exit_codes import exit_code_for
from mediaconv.cli.output import error_exit
from mediaconv.converter import ConversionError
from mediaconv.player import MediaPlayer, PreviewInfo


def format_preview(preview: PreviewInfo) -> str:
    """Render a preview as aligned "Label: value" lines."""
    rows = [
        ("File", str(preview.path)),
        ("Format", preview.format.upper()),
        ("Size", preview.file_size),
        ("Duration", preview.duration),
        ("Resolution", preview.resolution),
        ("Title", preview.title),
        ("Artist", preview.artist),
        ("Thumbnail", str(preview.thumbnail) if preview.thumbnail else None),
    ]
    return "\n".join(f"{label + ':':<12}{value}" for label, value in rows if value)


@click.command("play")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--preview",
    is_flag=True,
    help="Print size, duration and metadata (and a video thumbnail) first.",
)
@click.pass_context
def play_command(ctx: click.Context, file: Path, preview: bool) -> None:
    """Open FILE in the system media player.

    The player is started in the background; mediaconv does not wait for
    it to exit.
    """
    require_existing(file)

    player = MediaPlayer(
        get_tools(ctx),
        probe_timeout=get_cli_config(ctx).conversion.probe_timeout_seconds,
    )
    try:
        if preview:
            click.echo(format_preview(player.preview(file)))
            click.echo()
        command = player.play(file)
    except ConversionError as e:
        error_exit(e.message, exit_code_for(e.kind))

    click.echo(f"Playing {file} with {Path(command[0]).name}")
