"""Tests for CLI output helpers."""

import json

import pytest

from mediaconv.cli.exit_codes import ExitCode
from mediaconv.cli.output import (
    CLIResult,
    error_exit,
    report_result,
    result_to_dict,
    success_output,
)
from mediaconv.converter import (
    ConversionRequest,
    ConversionResult,
    ToolTimeoutError,
)


class TestCLIResult:
    def test_success_json(self):
        result = CLIResult(success=True, message="done", data={"count": 2})

        data = json.loads(result.to_json())

        assert data == {"status": "completed", "message": "done", "count": 2}

    def test_failure_json(self):
        result = CLIResult(
            success=False, message="nope", exit_code=ExitCode.TOOL_NOT_AVAILABLE
        )

        data = json.loads(result.to_json())

        assert data["status"] == "failed"
        assert data["error"] == {"code": "TOOL_NOT_AVAILABLE", "message": "nope"}

    def test_failure_with_plain_int(self):
        data = json.loads(CLIResult(False, "x", exit_code=7).to_json())
        assert data["error"]["code"] == "UNKNOWN_ERROR"


class TestErrorExit:
    def test_text(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            error_exit("File not found: a.mp4", ExitCode.TARGET_NOT_FOUND)

        assert exc_info.value.code == 20
        assert capsys.readouterr().err.strip() == "Error: File not found: a.mp4"

    def test_json(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            error_exit("bad", ExitCode.MANIFEST_INVALID, json_output=True)

        assert exc_info.value.code == 13
        data = json.loads(capsys.readouterr().err)
        assert data["error"]["code"] == "MANIFEST_INVALID"


def test_success_output_text(capsys):
    success_output(CLIResult(True, "All good"))
    assert capsys.readouterr().out == "All good\n"


class TestResults:
    def _request(self) -> ConversionRequest:
        return ConversionRequest("in.mov", "out.mp4")

    def test_result_to_dict(self):
        result = ConversionResult(
            success=False,
            request=self._request(),
            error=ToolTimeoutError("ffmpeg", 5),
            elapsed_seconds=5.00049,
        )

        d = result_to_dict(result)

        assert d["input"] == "in.mov"
        assert d["output"] == "out.mp4"
        assert d["success"] is False
        assert d["error_kind"] == "timeout"
        assert d["elapsed_seconds"] == 5.0

    def test_report_success(self, capsys):
        request = self._request()
        result = ConversionResult(
            success=True, request=request, output_path=request.output_path
        )

        report_result(result)

        assert capsys.readouterr().out.strip() == "Wrote out.mp4"

    def test_report_failure_exit_code(self, capsys):
        result = ConversionResult(
            success=False, request=self._request(), error=ToolTimeoutError("ffmpeg", 5)
        )

        with pytest.raises(SystemExit) as exc_info:
            report_result(result)

        assert exc_info.value.code == ExitCode.TIMED_OUT
        assert "timed out" in capsys.readouterr().err
