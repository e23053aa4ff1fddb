"""Tests for display formatting helpers."""

import pytest

from mediaconv.core import format_duration, format_file_size, format_timestamp


class TestFormatFileSize:
    @pytest.mark.parametrize(
        "size,expected",
        [
            (512, "512 B"),
            (2048, "2.0 KB"),
            (134217728, "128.0 MB"),
            (4509715660, "4.2 GB"),
        ],
    )
    def test_units(self, size, expected):
        assert format_file_size(size) == expected


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "00:00"),
            (59.6, "01:00"),
            (754, "12:34"),
            (3725, "1:02:05"),
            (None, "unknown"),
            (-1, "unknown"),
        ],
    )
    def test_values(self, seconds, expected):
        assert format_duration(seconds) == expected


class TestFormatTimestamp:
    def test_whole_seconds(self):
        assert format_timestamp(3725) == "01:02:05"

    def test_milliseconds(self):
        assert format_timestamp(2.5) == "00:00:02.500"
