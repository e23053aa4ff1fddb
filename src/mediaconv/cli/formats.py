"""CLI formats command: list supported input and output extensions."""

import json

import click

from mediaconv.formats import get_default_registry
from mediaconv.tools import tool_for_category


def _strip(extensions) -> str:
    return ", ".join(ext.lstrip(".") for ext in sorted(extensions))


@click.command("formats")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
def formats_command(json_output: bool) -> None:
    """List the file formats each media category reads and writes."""
    registry = get_default_registry()

    if json_output:
        data = {
            spec.category.value: {
                "tool": tool_for_category(spec.category),
                "inputs": sorted(spec.input_extensions),
                "outputs": sorted(spec.output_extensions),
            }
            for spec in registry.specs
        }
        click.echo(json.dumps(data, indent=2))
        return

    for spec in registry.specs:
        click.echo(
            f"{spec.category.value.capitalize()} "
            f"({tool_for_category(spec.category)}):"
        )
        click.echo(f"  Input:  {_strip(spec.input_extensions)}")
        click.echo(f"  Output: {_strip(spec.output_extensions)}")
        click.echo()
