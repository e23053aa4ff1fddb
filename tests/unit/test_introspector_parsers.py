"""Unit tests for ffprobe JSON parsing."""

import json
from pathlib import Path

import pytest

from mediaconv.introspector import FFprobeOutputError, parse_ffprobe_output
from mediaconv.introspector.parsers import (
    parse_duration,
    parse_int,
    parse_stream,
    sanitize_string,
)


class TestParseDuration:
    def test_string(self):
        assert parse_duration("3600.500") == 3600.5

    @pytest.mark.parametrize("value", [None, "N/A", "abc", "-1"])
    def test_unusable(self, value):
        assert parse_duration(value) is None


class TestParseInt:
    def test_string_and_int(self):
        assert parse_int("48000") == 48000
        assert parse_int(2) == 2

    @pytest.mark.parametrize("value", [None, "N/A", "x", -3])
    def test_unusable(self, value):
        assert parse_int(value, "width") is None


class TestParseStream:
    def test_video_prefers_average_frame_rate(self):
        stream = parse_stream(
            {
                "index": 0,
                "codec_type": "video",
                "codec_name": "hevc",
                "r_frame_rate": "60/1",
                "avg_frame_rate": "24000/1001",
            }
        )
        assert stream.frame_rate == "24000/1001"

    def test_video_skips_zero_average(self):
        stream = parse_stream(
            {
                "index": 0,
                "codec_type": "video",
                "r_frame_rate": "25/1",
                "avg_frame_rate": "0/0",
            }
        )
        assert stream.frame_rate == "25/1"

    def test_audio_channel_layout_from_count(self):
        stream = parse_stream({"index": 1, "codec_type": "audio", "channels": 6})
        assert stream.channel_layout == "5.1"

    def test_missing_codec_type(self):
        stream = parse_stream({"index": 3})
        assert stream.codec_type == "unknown"
        assert stream.frame_rate is None

    def test_language_tag_case_insensitive(self):
        stream = parse_stream(
            {"index": 1, "codec_type": "audio", "tags": {"LANGUAGE": "fre"}}
        )
        assert stream.language == "fre"


class TestParseFfprobeOutput:
    def test_video_file(self, ffprobe_video_json):
        info = parse_ffprobe_output(Path("movie.mp4"), json.loads(ffprobe_video_json))

        assert info.path == Path("movie.mp4")
        assert info.format_name.startswith("mov,mp4")
        assert info.duration == pytest.approx(120.12)
        assert (info.width, info.height) == (1920, 1080)
        assert info.fps == pytest.approx(29.97, rel=1e-3)
        assert info.video_codec == "h264"
        assert info.audio_codec == "aac"
        assert info.bit_rate == 1047552
        assert info.file_size == 15728640
        assert info.title == "Test Movie"
        assert info.artist == "Someone"
        assert info.streams == 3

    def test_cover_art_is_not_the_video_stream(self, ffprobe_video_json):
        data = json.loads(ffprobe_video_json)
        data["streams"] = [data["streams"][2], data["streams"][1]]

        info = parse_ffprobe_output(Path("song.m4a"), data)

        assert info.video_codec is None
        assert info.width is None
        assert info.tracks[0].is_attached_picture

    def test_duration_falls_back_to_stream(self, ffprobe_audio_json):
        info = parse_ffprobe_output(Path("a.mp3"), json.loads(ffprobe_audio_json))

        assert info.duration == 61.5
        assert info.audio_codec == "mp3"
        assert info.tracks[0].channel_layout == "mono"
        assert info.bit_rate is None

    @pytest.mark.parametrize("missing", ["format", "streams"])
    def test_missing_section(self, ffprobe_audio_json, missing):
        data = json.loads(ffprobe_audio_json)
        del data[missing]

        with pytest.raises(FFprobeOutputError, match=missing):
            parse_ffprobe_output(Path("a.mp3"), data)

    def test_not_an_object(self):
        with pytest.raises(FFprobeOutputError):
            parse_ffprobe_output(Path("a.mp3"), [])


def test_sanitize_string_replaces_surrogates():
    assert sanitize_string("caf\udce9") == "caf?"
    assert sanitize_string(None) is None
