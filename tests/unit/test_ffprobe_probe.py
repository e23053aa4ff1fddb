"""Unit tests for FFprobeProbe."""

import subprocess
from pathlib import Path

import pytest

from mediaconv.converter import ErrorKind
from mediaconv.core.subprocess_utils import CommandOutput
from mediaconv.introspector import FFprobeProbe, MediaProbeError


@pytest.fixture
def probe(fake_tools) -> FFprobeProbe:
    return FFprobeProbe(fake_tools, timeout=15)


class TestProbe:
    def test_returns_media_info(self, probe, mock_run, ffprobe_video_json):
        mock_run.return_value = CommandOutput(ffprobe_video_json, "", 0, 0.05)

        info = probe.probe(Path("movie.mp4"))

        assert info.video_codec == "h264"
        assert info.streams == 3
        args = mock_run.call_args[0][0]
        assert args[0] == Path("/usr/bin/ffprobe")
        assert args[-1] == "movie.mp4"
        assert "-show_streams" in args
        assert mock_run.call_args.kwargs["timeout"] == 15

    def test_image_is_probed(self, probe, mock_run):
        mock_run.return_value = CommandOutput(
            '{"streams": [{"index": 0, "codec_type": "video", '
            '"codec_name": "png", "width": 16, "height": 16}], '
            '"format": {"format_name": "png_pipe"}}',
            "",
            0,
            0.01,
        )

        info = probe.probe(Path("icon.png"))

        assert (info.width, info.height) == (16, 16)

    def test_missing_file_reports_ffprobe_error(self, probe, mock_run):
        mock_run.return_value = CommandOutput(
            "", "missing.mp4: No such file or directory", 1, 0.01
        )

        with pytest.raises(MediaProbeError) as exc_info:
            probe.probe(Path("missing.mp4"))

        assert exc_info.value.kind == ErrorKind.TOOL_EXECUTION_FAILED
        assert "No such file or directory" in exc_info.value.message

    def test_invalid_json(self, probe, mock_run):
        mock_run.return_value = CommandOutput("not json", "", 0, 0.01)

        with pytest.raises(MediaProbeError) as exc_info:
            probe.probe(Path("movie.mp4"))

        assert exc_info.value.kind == ErrorKind.TOOL_EXECUTION_FAILED
        assert "Invalid ffprobe output" in exc_info.value.message

    def test_missing_sections(self, probe, mock_run):
        mock_run.return_value = CommandOutput('{"streams": []}', "", 0, 0.01)

        with pytest.raises(MediaProbeError) as exc_info:
            probe.probe(Path("movie.mp4"))

        assert "format" in exc_info.value.message

    @pytest.mark.parametrize("name", ["report.pdf", "notes.md", "data.xyz", "noext"])
    def test_unsupported_types(self, probe, mock_run, name):
        with pytest.raises(MediaProbeError) as exc_info:
            probe.probe(Path(name))

        assert exc_info.value.kind == ErrorKind.UNSUPPORTED_TYPE
        mock_run.assert_not_called()

    def test_missing_ffprobe(self, no_tools, mock_run):
        with pytest.raises(MediaProbeError) as exc_info:
            FFprobeProbe(no_tools).probe(Path("movie.mp4"))

        assert exc_info.value.kind == ErrorKind.TOOL_MISSING
        assert "ffprobe" in exc_info.value.message

    def test_timeout(self, probe, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ffprobe", timeout=15)

        with pytest.raises(MediaProbeError) as exc_info:
            probe.probe(Path("movie.mkv"))

        assert exc_info.value.kind == ErrorKind.TIMEOUT
