"""mediaconv doctor command for checking external tool health.

This module provides the 'mediaconv doctor' command to check external tool
availability and versions, with install hints for anything missing.
"""

import sys

import click

from mediaconv.cli.context import get_cli_config, get_tools
from mediaconv.cli.exit_codes import ExitCode
from mediaconv.cli.output import CLIResult, success_output
from mediaconv.tools import (
    TOOL_NAMES,
    RequirementLevel,
    ToolRegistry,
    check_requirements,
    get_missing_tool_hints,
    get_upgrade_suggestions,
)


def _format_status(available: bool) -> str:
    """Format status for display."""
    return "✓" if available else "✗"


def _format_version(version: str | None) -> str:
    """Format version for display."""
    return version if version else "not found"


def _exit_code(registry: ToolRegistry) -> ExitCode:
    report = check_requirements(registry)
    if not report.required_satisfied:
        return ExitCode.CRITICAL
    if report.get_unsatisfied(RequirementLevel.RECOMMENDED):
        return ExitCode.WARNINGS
    return ExitCode.SUCCESS


def _output_json(registry: ToolRegistry, code: ExitCode) -> None:
    """Output tool status as JSON."""
    result = CLIResult(
        success=True,
        message="Tool check complete",
        data={
            "tools": registry.summary(),
            "missing": get_missing_tool_hints(registry),
            "suggestions": get_upgrade_suggestions(registry),
            "health": code.name.lower(),
        },
    )
    success_output(result, json_output=True)


@click.command("doctor")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show tool paths and configured overrides",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def doctor_command(ctx: click.Context, verbose: bool, json_output: bool) -> None:
    """Check external tool availability and versions.

    Verifies that ffmpeg, ffprobe, ImageMagick (magick) and pandoc are
    installed and reports their versions.

    \b
    Exit codes:
      0  - All tools available and requirements met
      60 - Warnings (outdated versions)
      61 - Critical issues (tools missing)
    """
    registry = get_tools(ctx)
    code = _exit_code(registry)

    if json_output:
        _output_json(registry, code)
        sys.exit(code)

    click.echo("mediaconv External Tool Health Check")
    click.echo("=" * 40)
    click.echo()

    hints = get_missing_tool_hints(registry)
    for name in TOOL_NAMES:
        tool = getattr(registry, name)
        status = _format_status(tool.is_available())
        version = _format_version(tool.version)
        path_info = f" ({tool.path})" if tool.path and verbose else ""
        click.echo(f"  {status} {name + ':':<9}{version}{path_info}")
        if name in hints:
            click.echo(f"    └─ {hints[name]}")
    click.echo()

    report = check_requirements(registry)
    critical_issues = report.get_unsatisfied(RequirementLevel.REQUIRED)
    if critical_issues:
        click.echo("Unavailable Features:")
        click.echo("-" * 20)
        for result in critical_issues:
            click.echo(f"  ✗ {result.requirement.feature_name}")
        click.echo()

    suggestions = get_upgrade_suggestions(registry)
    if suggestions:
        click.echo("Upgrade Suggestions:")
        click.echo("-" * 20)
        for suggestion in suggestions:
            click.echo(f"  → {suggestion}")
        click.echo()

    if verbose:
        tools = get_cli_config(ctx).tools
        click.echo("Configuration:")
        click.echo("-" * 20)
        configured = False
        for name in TOOL_NAMES:
            path = getattr(tools, name)
            if path:
                click.echo(f"  {name} path: {path}")
                configured = True
        if not configured:
            click.echo("  (using system PATH)")
        click.echo()

    available = registry.get_available_tools()
    click.echo("Summary:")
    click.echo("-" * 20)
    click.echo(
        f"  Available: {len(available)}/{len(TOOL_NAMES)} "
        f"({', '.join(available) or 'none'})"
    )
    click.echo()

    if code == ExitCode.CRITICAL:
        click.echo("⚠ Some tools are missing. The features above will not work.")
    elif code == ExitCode.WARNINGS:
        click.echo("Note: Some tools are older than recommended.")
    else:
        click.echo("✓ All tools available and ready.")
    sys.exit(code)
