"""CLI convert command: single files or whole directories."""

from pathlib import Path

import click

from mediaconv.batch import discover_bulk_requests
from mediaconv.cli.context import get_converter
from mediaconv.cli.exit_codes import ExitCode, exit_code_for
from mediaconv.cli.output import error_exit, report_result
from mediaconv.converter import ConversionError, ConversionRequest, ConversionResult


def _parse_options(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Parse repeated KEY=VALUE options into a dict."""
    options: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        options[key] = value.strip()
    return options


def _build_options(
    extra: dict[str, str],
    quality: str | None,
    bitrate: str | None,
    fps: int | None,
    width: int | None,
    height: int | None,
    sample_rate: int | None,
) -> dict[str, str]:
    options = dict(extra)
    named = {
        "quality": quality,
        "bitrate": bitrate,
        "fps": fps,
        "width": width,
        "height": height,
        "sample_rate": sample_rate,
    }
    for key, value in named.items():
        if value is not None:
            options[key] = str(value)
    return options


def format_result_line(result: ConversionResult) -> str:
    """One line per batch item: a mark, the input and the outcome."""
    if result.success:
        return f"  ✓ {result.request.input_path} -> {result.output_path}"
    kind = result.error_kind.value if result.error_kind else "error"
    return f"  ✗ {result.request.input_path}: [{kind}] {result.message}"


def report_batch(results: list[ConversionResult]) -> None:
    """Print per-item lines and a summary; exit OPERATION_FAILED on failure."""
    for result in results:
        click.echo(format_result_line(result))
    failed = [r for r in results if not r.success]
    click.echo(f"Completed {len(results) - len(failed)}/{len(results)} job(s).")
    if failed:
        error_exit(
            f"{len(failed)} of {len(results)} job(s) failed",
            ExitCode.OPERATION_FAILED,
        )


@click.command("convert")
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(path_type=Path),
    default=None,
    help="File to convert.",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Destination file; its extension selects the target format.",
)
@click.option(
    "--quality",
    "-q",
    default=None,
    help="Quality: CRF for video (lower is better), 1-100 for images.",
)
@click.option("--bitrate", default=None, help="Audio bitrate, e.g. 192k.")
@click.option(
    "--fps", type=click.IntRange(min=1), default=None, help="GIF frame rate."
)
@click.option(
    "--width", type=click.IntRange(min=1), default=None, help="Output width."
)
@click.option(
    "--height", type=click.IntRange(min=1), default=None, help="Output height."
)
@click.option(
    "--sample-rate",
    type=click.IntRange(min=1),
    default=None,
    help="Audio sample rate in Hz.",
)
@click.option(
    "--option",
    "extra_options",
    multiple=True,
    callback=_parse_options,
    metavar="KEY=VALUE",
    help="Additional conversion option (repeatable).",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds before the tool is killed (0 = no limit).",
)
@click.option(
    "--bulk",
    "bulk_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Convert every supported file under this directory.",
)
@click.option(
    "--format",
    "target_format",
    default=None,
    help="Target extension for --bulk, e.g. mp4.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where --bulk writes outputs (default: next to each input).",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Parallel conversions for --bulk (capped at half the CPU cores).",
)
@click.pass_context
def convert_command(
    ctx: click.Context,
    input_path: Path | None,
    output_path: Path | None,
    quality: str | None,
    bitrate: str | None,
    fps: int | None,
    width: int | None,
    height: int | None,
    sample_rate: int | None,
    extra_options: dict[str, str],
    timeout: float | None,
    bulk_dir: Path | None,
    target_format: str | None,
    output_dir: Path | None,
    workers: int | None,
) -> None:
    """Convert a file to the format named by the output extension.

    \b
    Examples:
      mediaconv convert -i clip.mov -o clip.mp4 -q 23
      mediaconv convert -i clip.mp4 -o clip.gif --fps 12 --width 320
      mediaconv convert --bulk ./photos --format webp --workers 4
    """
    options = _build_options(
        extra_options, quality, bitrate, fps, width, height, sample_rate
    )
    converter = get_converter(ctx, timeout)

    if bulk_dir is not None:
        if not target_format:
            raise click.UsageError("--bulk requires --format")
        if input_path is not None or output_path is not None:
            raise click.UsageError("--bulk cannot be combined with -i/-o")
        try:
            requests = discover_bulk_requests(
                bulk_dir,
                target_format,
                output_dir=output_dir,
                options=options,
                registry=converter.registry,
            )
        except ConversionError as e:
            error_exit(e.message, exit_code_for(e.kind))
        if not requests:
            click.echo(f"No files to convert under {bulk_dir}.")
            return
        report_batch(converter.batch_convert(requests, workers))
        return

    if input_path is None or output_path is None:
        raise click.UsageError("convert requires -i/--input and -o/--output")

    request = ConversionRequest(input_path, output_path, options)
    report_result(converter.convert(request))
