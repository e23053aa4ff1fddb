"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (arguments, config, manifest)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
    60-69: Warning states (doctor)
"""

from enum import IntEnum

from mediaconv.converter.errors import ErrorKind


class ExitCode(IntEnum):
    """Exit codes for mediaconv CLI commands.

    Organized by category with reserved ranges for future expansion.
    """

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    INVALID_ARGUMENTS = 10
    CONFIG_ERROR = 11
    UNSUPPORTED_TYPE = 12
    MANIFEST_INVALID = 13

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    OPERATION_FAILED = 40
    TIMED_OUT = 41

    # Warning states (60-69)
    WARNINGS = 60
    CRITICAL = 61


ERROR_KIND_EXIT_CODES: dict[ErrorKind, ExitCode] = {
    ErrorKind.UNSUPPORTED_TYPE: ExitCode.UNSUPPORTED_TYPE,
    ErrorKind.INVALID_ARGUMENT: ExitCode.INVALID_ARGUMENTS,
    ErrorKind.TOOL_MISSING: ExitCode.TOOL_NOT_AVAILABLE,
    ErrorKind.TOOL_EXECUTION_FAILED: ExitCode.OPERATION_FAILED,
    ErrorKind.TIMEOUT: ExitCode.TIMED_OUT,
}


def exit_code_for(kind: ErrorKind | None) -> ExitCode:
    """Map an error kind to the exit code the CLI reports for it."""
    if kind is None:
        return ExitCode.GENERAL_ERROR
    return ERROR_KIND_EXIT_CODES.get(kind, ExitCode.GENERAL_ERROR)
