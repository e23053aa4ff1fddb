"""CLI image editing commands: crop, resize, rotate, flip."""

from pathlib import Path

import click

from mediaconv.cli.context import get_converter
from mediaconv.cli.output import report_result
from mediaconv.converter import CropRequest, FlipRequest, ResizeRequest, RotateRequest


def _io_options(func):
    """Attach the -i/-o/-q options every image command takes."""
    func = click.option(
        "--quality",
        "-q",
        type=click.IntRange(1, 100),
        default=None,
        help="Output quality 1-100 (default from config).",
    )(func)
    func = click.option(
        "--output",
        "-o",
        "output_path",
        type=click.Path(path_type=Path),
        required=True,
        help="Destination image.",
    )(func)
    func = click.option(
        "--input",
        "-i",
        "input_path",
        type=click.Path(path_type=Path),
        required=True,
        help="Source image.",
    )(func)
    return func


@click.command("crop")
@click.argument("x", type=click.IntRange(min=0))
@click.argument("y", type=click.IntRange(min=0))
@click.argument("width", type=click.IntRange(min=1))
@click.argument("height", type=click.IntRange(min=1))
@_io_options
@click.pass_context
def crop_command(
    ctx: click.Context,
    x: int,
    y: int,
    width: int,
    height: int,
    input_path: Path,
    output_path: Path,
    quality: int | None,
) -> None:
    """Crop a WIDTHxHEIGHT region whose top-left corner is at X,Y."""
    request = CropRequest(input_path, output_path, x, y, width, height, quality)
    report_result(get_converter(ctx).run(request))


@click.command("resize")
@click.argument("width", type=click.IntRange(min=1))
@click.argument("height", type=click.IntRange(min=1))
@_io_options
@click.option(
    "--exact",
    is_flag=True,
    help="Stretch to exactly WIDTHxHEIGHT instead of fitting inside it.",
)
@click.pass_context
def resize_command(
    ctx: click.Context,
    width: int,
    height: int,
    input_path: Path,
    output_path: Path,
    quality: int | None,
    exact: bool,
) -> None:
    """Resize an image to fit within WIDTHxHEIGHT."""
    request = ResizeRequest(
        input_path, output_path, width, height, quality=quality, exact=exact
    )
    report_result(get_converter(ctx).run(request))


@click.command("rotate", context_settings={"ignore_unknown_options": True})
@click.argument("degrees", type=float)
@_io_options
@click.option(
    "--background",
    default="none",
    show_default=True,
    help="Fill colour for exposed corners (name or #RRGGBB).",
)
@click.pass_context
def rotate_command(
    ctx: click.Context,
    degrees: float,
    input_path: Path,
    output_path: Path,
    quality: int | None,
    background: str,
) -> None:
    """Rotate an image clockwise by DEGREES (negative turns counter-clockwise)."""
    request = RotateRequest(
        input_path, output_path, degrees, quality=quality, background=background
    )
    report_result(get_converter(ctx).run(request))


@click.command("flip")
@_io_options
@click.option(
    "--vertical",
    is_flag=True,
    help="Mirror top-to-bottom instead of left-to-right.",
)
@click.pass_context
def flip_command(
    ctx: click.Context,
    input_path: Path,
    output_path: Path,
    quality: int | None,
    vertical: bool,
) -> None:
    """Mirror an image horizontally (default) or vertically."""
    request = FlipRequest(
        input_path, output_path, horizontal=not vertical, quality=quality
    )
    report_result(get_converter(ctx).run(request))
