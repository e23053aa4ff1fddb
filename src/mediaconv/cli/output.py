"""Printing helpers shared by every command.

Failures go through error_exit() so that the "Error: ..." line, the JSON
error object and the process exit status always agree.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NoReturn

import click

from mediaconv.cli.exit_codes import ExitCode, exit_code_for

if TYPE_CHECKING:
    from mediaconv.converter.models import ConversionResult


def _code_name(code: ExitCode | int) -> str:
    return code.name if isinstance(code, ExitCode) else "UNKNOWN_ERROR"


def _failure_payload(message: str, code: ExitCode | int) -> dict[str, Any]:
    return {
        "status": "failed",
        "error": {"code": _code_name(code), "message": message},
    }


@dataclass
class CLIResult:
    """Outcome of a command that reports a single summary.

    data is merged into the top level of the JSON document.
    """

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    exit_code: ExitCode | int = ExitCode.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            payload: dict[str, Any] = {"status": "completed", "message": self.message}
        else:
            payload = _failure_payload(self.message, self.exit_code)
        payload.update(self.data)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Print an error to stderr and terminate with code.

    Args:
        message: Text shown after "Error: " (or as error.message in JSON).
        code: Process exit status.
        json_output: Emit a JSON error object instead of plain text.
    """
    if json_output:
        click.echo(json.dumps(_failure_payload(message, code)), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def success_output(result: CLIResult, json_output: bool = False) -> None:
    click.echo(result.to_json() if json_output else result.message)


def result_to_dict(result: ConversionResult) -> dict[str, Any]:
    """Serialize a ConversionResult for JSON output."""
    return {
        "input": str(result.request.input_path),
        "output": str(result.request.output_path),
        "success": result.success,
        "error_kind": result.error_kind.value if result.error_kind else None,
        "message": result.message,
        "elapsed_seconds": round(result.elapsed_seconds, 3),
    }


def report_result(result: ConversionResult) -> None:
    """Print a single-file result, exiting with its mapped code on failure."""
    if not result.success:
        error_exit(result.message, exit_code_for(result.error_kind))
    click.echo(result.message)
