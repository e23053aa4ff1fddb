"""Subprocess wrapper used for every external tool invocation.

All calls to ffmpeg, ffprobe, magick and pandoc go through run_command so
that encoding, timeout handling and logging are consistent.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for tool invocation
import time
from pathlib import Path
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)


class CommandOutput(NamedTuple):
    """Captured output of a finished command."""

    stdout: str
    stderr: str
    returncode: int
    elapsed: float

    @property
    def combined(self) -> str:
        """Return stdout and stderr joined, skipping empty parts."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


def command_name(args: list[str]) -> str:
    """Return the executable's base name for log context."""
    if not args:
        return "unknown"
    return Path(args[0]).name


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
    errors: str = "replace",
    **kwargs: Any,
) -> CommandOutput:
    """Run an external command, wait for it, and capture its output.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Seconds to wait before killing the child. None waits forever.
        errors: Error handling mode for text decoding (default "replace").
        **kwargs: Additional subprocess.run arguments.

    Returns:
        CommandOutput with stdout, stderr, return code and elapsed seconds.

    Raises:
        subprocess.TimeoutExpired: If the command ran longer than timeout.
            subprocess.run() kills the child before raising.
        FileNotFoundError: If the executable does not exist.
    """
    str_args = [str(arg) for arg in args]
    name = command_name(str_args)

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()
    try:
        result = subprocess.run(  # nosec B603 - args built from fixed flags
            str_args,
            capture_output=True,
            text=True,
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(time.monotonic() - start_time, 3),
            },
        )
        raise

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": result.returncode,
        },
    )
    return CommandOutput(
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        returncode=result.returncode,
        elapsed=elapsed,
    )
