"""Error types for conversion, image, frame and probe operations.

Every failure carries an ErrorKind so callers (the CLI, batch summaries)
can react to the category of failure without string matching.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Category of a conversion failure."""

    UNSUPPORTED_TYPE = "unsupported_type"
    TOOL_MISSING = "tool_missing"
    TOOL_EXECUTION_FAILED = "tool_execution_failed"
    INVALID_ARGUMENT = "invalid_argument"
    TIMEOUT = "timeout"


class ConversionError(Exception):
    """Base class for failures reported by mediaconv operations."""

    kind: ErrorKind = ErrorKind.TOOL_EXECUTION_FAILED

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnsupportedTypeError(ConversionError):
    """The file extension is not in the format registry."""

    kind = ErrorKind.UNSUPPORTED_TYPE

    def __init__(self, message: str, extension: str = "") -> None:
        self.extension = extension
        super().__init__(message)


class ToolMissingError(ConversionError):
    """The external tool needed for the operation was not found at startup."""

    kind = ErrorKind.TOOL_MISSING

    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        self.hint = hint
        message = f"{tool} not found."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class ToolExecutionError(ConversionError):
    """The external tool ran and exited with a non-zero status."""

    kind = ErrorKind.TOOL_EXECUTION_FAILED

    def __init__(self, tool: str, returncode: int, output: str = "") -> None:
        self.tool = tool
        self.returncode = returncode
        self.output = output
        message = f"{tool} exited with status {returncode}"
        detail = _last_lines(output)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidArgumentError(ConversionError):
    """An option or dimension was malformed or out of range."""

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class ToolTimeoutError(ConversionError):
    """The external tool ran past its timeout and was killed."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, tool: str, timeout: float) -> None:
        self.tool = tool
        self.timeout = timeout
        super().__init__(f"{tool} timed out after {timeout:g}s and was terminated")


def _last_lines(text: str, count: int = 5) -> str:
    """Return the last non-empty lines of tool output for error messages."""
    lines = [line for line in text.strip().splitlines() if line.strip()]
    return "\n".join(lines[-count:])
