"""CLI batch command: run every job in a YAML manifest."""

import json
import logging
from pathlib import Path

import click

from mediaconv.batch import ManifestError, load_manifest
from mediaconv.cli.context import get_converter
from mediaconv.cli.convert import report_batch
from mediaconv.cli.exit_codes import ExitCode
from mediaconv.cli.output import error_exit, result_to_dict

logger = logging.getLogger(__name__)


@click.command("batch")
@click.argument("manifest", type=click.Path(path_type=Path))
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Parallel jobs (overrides the manifest; capped at half the CPU cores).",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def batch_command(
    ctx: click.Context, manifest: Path, workers: int | None, json_output: bool
) -> None:
    """Run the conversion and editing jobs listed in MANIFEST.

    \b
    MANIFEST is a YAML file:
      workers: 2
      jobs:
        - type: convert
          input: clip.mov
          output: clip.mp4
          options: {quality: 23}
        - type: resize
          input: photo.png
          output: thumb.png
          width: 200
          height: 200

    Jobs run independently; a failing job does not stop the others.
    """
    try:
        loaded = load_manifest(manifest)
    except ManifestError as e:
        error_exit(str(e), ExitCode.MANIFEST_INVALID, json_output)

    effective_workers = workers if workers is not None else loaded.workers
    logger.info(
        "Loaded %d job(s) from %s", len(loaded.requests), loaded.path or manifest
    )
    results = get_converter(ctx).run_batch(loaded.requests, effective_workers)

    if not json_output:
        report_batch(results)
        return

    failed = sum(1 for r in results if not r.success)
    click.echo(
        json.dumps(
            {
                "status": "completed" if not failed else "failed",
                "total": len(results),
                "failed": failed,
                "results": [result_to_dict(r) for r in results],
            },
            indent=2,
        )
    )
    if failed:
        raise SystemExit(int(ExitCode.OPERATION_FAILED))
