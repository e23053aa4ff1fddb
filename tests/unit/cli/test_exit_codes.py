"""Tests for CLI exit codes."""

import pytest

from mediaconv.cli.exit_codes import ERROR_KIND_EXIT_CODES, ExitCode, exit_code_for
from mediaconv.converter import ErrorKind


class TestExitCodeRanges:
    """Codes stay inside their documented ranges."""

    def test_success(self):
        assert ExitCode.SUCCESS == 0

    @pytest.mark.parametrize(
        "code,low,high",
        [
            (ExitCode.INVALID_ARGUMENTS, 10, 19),
            (ExitCode.CONFIG_ERROR, 10, 19),
            (ExitCode.UNSUPPORTED_TYPE, 10, 19),
            (ExitCode.MANIFEST_INVALID, 10, 19),
            (ExitCode.TARGET_NOT_FOUND, 20, 29),
            (ExitCode.TOOL_NOT_AVAILABLE, 30, 39),
            (ExitCode.OPERATION_FAILED, 40, 49),
            (ExitCode.TIMED_OUT, 40, 49),
            (ExitCode.WARNINGS, 60, 69),
            (ExitCode.CRITICAL, 60, 69),
        ],
    )
    def test_range(self, code, low, high):
        assert low <= code <= high

    def test_values_unique(self):
        values = [code.value for code in ExitCode]
        assert len(values) == len(set(values))


class TestExitCodeFor:
    def test_every_kind_is_mapped(self):
        assert set(ERROR_KIND_EXIT_CODES) == set(ErrorKind)

    @pytest.mark.parametrize(
        "kind,expected",
        [
            (ErrorKind.UNSUPPORTED_TYPE, 12),
            (ErrorKind.INVALID_ARGUMENT, 10),
            (ErrorKind.TOOL_MISSING, 30),
            (ErrorKind.TOOL_EXECUTION_FAILED, 40),
            (ErrorKind.TIMEOUT, 41),
        ],
    )
    def test_mapping(self, kind, expected):
        assert exit_code_for(kind) == expected

    def test_none_is_general_error(self):
        assert exit_code_for(None) == ExitCode.GENERAL_ERROR
