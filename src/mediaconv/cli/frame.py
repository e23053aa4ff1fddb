"""CLI frame command: still images from a video."""

from pathlib import Path

import click

from mediaconv.cli.context import get_converter
from mediaconv.cli.exit_codes import exit_code_for
from mediaconv.cli.output import error_exit, report_result
from mediaconv.converter import ConversionError, FrameRequest


@click.command("frame")
@click.argument("timestamp", required=False)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(path_type=Path),
    required=True,
    help="Video file.",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Image file for a single frame.",
)
@click.option("--width", type=click.IntRange(min=1), default=None)
@click.option("--height", type=click.IntRange(min=1), default=None)
@click.option(
    "--quality",
    type=click.IntRange(1, 31),
    default=None,
    help="JPEG quality, 1 (best) to 31.",
)
@click.option(
    "--every",
    "interval",
    type=float,
    default=None,
    help="Extract one frame every N seconds instead of a single frame.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for --every frames.",
)
@click.pass_context
def frame_command(
    ctx: click.Context,
    timestamp: str | None,
    input_path: Path,
    output_path: Path | None,
    width: int | None,
    height: int | None,
    quality: int | None,
    interval: float | None,
    output_dir: Path | None,
) -> None:
    """Extract the frame at TIMESTAMP (seconds or HH:MM:SS[.fff]).

    \b
    Examples:
      mediaconv frame 00:01:30 -i movie.mp4 -o still.jpg --width 640
      mediaconv frame --every 10 -i movie.mp4 --output-dir frames/
    """
    converter = get_converter(ctx)

    if interval is not None:
        if output_dir is None:
            raise click.UsageError("--every requires --output-dir")
        try:
            frames = converter.frames.extract_frames(input_path, output_dir, interval)
        except ConversionError as e:
            error_exit(e.message, exit_code_for(e.kind))
        click.echo(f"Extracted {len(frames)} frame(s) to {output_dir}")
        return

    if timestamp is None or output_path is None:
        raise click.UsageError("frame requires TIMESTAMP and -o/--output")

    request = FrameRequest(
        input_path=input_path,
        output_path=output_path,
        timestamp=timestamp,
        width=width,
        height=height,
        quality=quality,
    )
    report_result(converter.run(request))
