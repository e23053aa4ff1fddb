"""Run located tools and turn their exit status into errors."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - needed for TimeoutExpired
from pathlib import Path

from mediaconv.converter.errors import (
    InvalidArgumentError,
    ToolExecutionError,
    ToolMissingError,
    ToolTimeoutError,
)
from mediaconv.core.subprocess_utils import CommandOutput, run_command
from mediaconv.tools.models import ToolRegistry
from mediaconv.tools.requirements import get_install_hint

logger = logging.getLogger(__name__)

_UNSET = object()


def prepare_output_dir(directory: Path) -> None:
    """Create the directory a tool writes into, parents included.

    Raises:
        InvalidArgumentError: A component of the path is an existing file or
            the directory cannot be created.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InvalidArgumentError(
            f"Cannot create output directory {directory}: {e.strerror or e}",
            field="output",
        ) from e


class ToolInvoker:
    """Resolve tools against a ToolRegistry and run them synchronously.

    Args:
        tools: Registry built at startup. Never refreshed.
        timeout: Default timeout in seconds for each invocation. None means
            wait for the tool indefinitely.
    """

    def __init__(self, tools: ToolRegistry, timeout: float | None = None) -> None:
        self.tools = tools
        self.timeout = timeout

    def require(self, tool_name: str) -> Path:
        """Return the path of a tool, or raise ToolMissingError with a hint."""
        path = self.tools.get_path(tool_name)
        if path is None:
            raise ToolMissingError(tool_name, get_install_hint(tool_name))
        return path

    def invoke(
        self,
        path: Path,
        args: list[str],
        timeout: float | None | object = _UNSET,
    ) -> CommandOutput:
        """Run the tool at path with args and wait for it to exit.

        Args:
            path: Executable to run.
            args: Arguments after the executable.
            timeout: Override of the invoker's default timeout.

        Returns:
            CommandOutput of a run that exited 0.

        Raises:
            ToolExecutionError: Non-zero exit; carries stdout and stderr.
            ToolTimeoutError: The tool outlived the timeout and was killed.
            ToolMissingError: The executable disappeared since startup.
        """
        effective_timeout = self.timeout if timeout is _UNSET else timeout
        tool = path.stem
        try:
            output = run_command([path, *args], timeout=effective_timeout)
        except subprocess.TimeoutExpired as e:
            raise ToolTimeoutError(tool, e.timeout) from e
        except FileNotFoundError as e:
            raise ToolMissingError(tool, get_install_hint(tool)) from e
        except OSError as e:
            # Not executable, or the exec itself failed
            raise ToolExecutionError(tool, -1, str(e)) from e

        if output.returncode != 0:
            logger.info(
                "%s failed with exit code %d",
                tool,
                output.returncode,
                extra={"command": tool, "returncode": output.returncode},
            )
            raise ToolExecutionError(tool, output.returncode, output.combined)
        return output
