"""Unit tests for ToolInvoker and run_command timeout handling."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from mediaconv.converter import (
    ErrorKind,
    InvalidArgumentError,
    ToolExecutionError,
    ToolInvoker,
    ToolMissingError,
    ToolTimeoutError,
)
from mediaconv.converter.invoker import prepare_output_dir
from mediaconv.core.subprocess_utils import CommandOutput

FFMPEG = Path("/usr/bin/ffmpeg")


class TestRequire:
    def test_available_tool(self, fake_tools):
        assert ToolInvoker(fake_tools).require("ffmpeg") == FFMPEG

    def test_missing_tool_has_install_hint(self, no_tools):
        with pytest.raises(ToolMissingError) as exc_info:
            ToolInvoker(no_tools).require("magick")

        error = exc_info.value
        assert error.kind == ErrorKind.TOOL_MISSING
        assert error.tool == "magick"
        assert "imagemagick.org" in error.message


class TestInvoke:
    def test_success_returns_output(self, fake_tools, mock_run):
        mock_run.return_value = CommandOutput("ok", "", 0, 0.2)

        output = ToolInvoker(fake_tools, timeout=30).invoke(FFMPEG, ["-version"])

        assert output.stdout == "ok"
        mock_run.assert_called_once_with([FFMPEG, "-version"], timeout=30)

    def test_timeout_override(self, fake_tools, mock_run):
        ToolInvoker(fake_tools, timeout=30).invoke(FFMPEG, [], timeout=None)

        assert mock_run.call_args.kwargs["timeout"] is None

    def test_nonzero_exit_carries_output(self, fake_tools, mock_run):
        mock_run.return_value = CommandOutput(
            "", "missing.mp4: No such file or directory", 1, 0.1
        )

        with pytest.raises(ToolExecutionError) as exc_info:
            ToolInvoker(fake_tools).invoke(FFMPEG, ["-i", "missing.mp4"])

        error = exc_info.value
        assert error.kind == ErrorKind.TOOL_EXECUTION_FAILED
        assert error.returncode == 1
        assert "No such file or directory" in error.output
        assert "No such file or directory" in error.message

    def test_timeout_is_reported(self, fake_tools, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ffmpeg", timeout=5)

        with pytest.raises(ToolTimeoutError) as exc_info:
            ToolInvoker(fake_tools, timeout=5).invoke(FFMPEG, [])

        assert exc_info.value.kind == ErrorKind.TIMEOUT
        assert "timed out after 5s" in exc_info.value.message

    def test_vanished_executable(self, fake_tools, mock_run):
        mock_run.side_effect = FileNotFoundError("ffmpeg")

        with pytest.raises(ToolMissingError):
            ToolInvoker(fake_tools).invoke(FFMPEG, [])

    def test_not_executable(self, fake_tools, mock_run):
        mock_run.side_effect = PermissionError(13, "Permission denied")

        with pytest.raises(ToolExecutionError) as exc_info:
            ToolInvoker(fake_tools).invoke(FFMPEG, [])

        error = exc_info.value
        assert error.tool == "ffmpeg"
        assert error.returncode == -1
        assert "Permission denied" in error.message


class TestPrepareOutputDir:
    def test_creates_nested_directories(self, temp_dir):
        target = temp_dir / "a" / "b"

        prepare_output_dir(target)
        prepare_output_dir(target)

        assert target.is_dir()

    @pytest.mark.parametrize("relative", ["blocker", "blocker/nested"])
    def test_file_in_the_way(self, make_file, relative):
        blocker = make_file("blocker")

        with pytest.raises(InvalidArgumentError) as exc_info:
            prepare_output_dir(blocker.parent / relative)

        assert exc_info.value.field == "output"
        assert "Cannot create output directory" in exc_info.value.message


class TestRunCommandTimeout:
    """The child is killed on timeout and the expiry propagates."""

    def test_timeout_propagates(self):
        from mediaconv.core.subprocess_utils import run_command

        with patch("mediaconv.core.subprocess_utils.subprocess.run") as mock_sp:
            mock_sp.side_effect = subprocess.TimeoutExpired(cmd="sleep", timeout=1)
            with pytest.raises(subprocess.TimeoutExpired):
                run_command(["sleep", "10"], timeout=1)

        assert mock_sp.call_args.kwargs["timeout"] == 1

    def test_end_to_end_timeout_through_invoker(self, fake_tools):
        with patch("mediaconv.core.subprocess_utils.subprocess.run") as mock_sp:
            mock_sp.side_effect = subprocess.TimeoutExpired(cmd="ffmpeg", timeout=2)
            with pytest.raises(ToolTimeoutError):
                ToolInvoker(fake_tools, timeout=2).invoke(FFMPEG, ["-i", "a.mov"])
