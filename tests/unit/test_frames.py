"""Unit tests for frame extraction."""

import pytest

from mediaconv.converter import (
    FrameRequest,
    InvalidArgumentError,
    ToolInvoker,
    UnsupportedTypeError,
)
from mediaconv.video import FrameExtractor, normalize_timestamp, scale_filter


@pytest.fixture
def extractor(fake_tools) -> FrameExtractor:
    return FrameExtractor(ToolInvoker(fake_tools))


class TestNormalizeTimestamp:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("5", "00:00:05"),
            ("2.5", "00:00:02.500"),
            ("3725", "01:02:05"),
            ("00:01:30", "00:01:30"),
            ("1:02:03.25", "1:02:03.25"),
        ],
    )
    def test_valid(self, value, expected):
        assert normalize_timestamp(value) == expected

    @pytest.mark.parametrize("value", ["-5", "abc", "00:61:00", "1:2:3", ""])
    def test_invalid(self, value):
        with pytest.raises(InvalidArgumentError) as exc_info:
            normalize_timestamp(value)
        assert exc_info.value.field == "timestamp"


class TestScaleFilter:
    def test_both(self):
        assert scale_filter(640, 360) == "scale=640:360"

    def test_width_only_keeps_aspect(self):
        assert scale_filter(640, None) == "scale=640:-1"

    def test_none(self):
        assert scale_filter(None, None) is None

    def test_invalid(self):
        with pytest.raises(InvalidArgumentError):
            scale_filter(0, 100)


class TestExtractFrame:
    def test_command(self, extractor, mock_run, temp_dir):
        request = FrameRequest(
            temp_dir / "movie.mp4",
            temp_dir / "still.jpg",
            "90",
            width=320,
            quality=2,
        )

        command = extractor.extract_frame(request)

        assert command == [
            "/usr/bin/ffmpeg",
            "-hide_banner",
            "-ss",
            "00:01:30",
            "-i",
            str(temp_dir / "movie.mp4"),
            "-frames:v",
            "1",
            "-vf",
            "scale=320:-1",
            "-q:v",
            "2",
            "-y",
            str(temp_dir / "still.jpg"),
        ]

    def test_out_of_range_quality_ignored(self, extractor, mock_run, temp_dir):
        request = FrameRequest(
            temp_dir / "movie.mkv", temp_dir / "still.png", "1", quality=50
        )

        assert "-q:v" not in extractor.extract_frame(request)

    def test_non_video_input(self, extractor, mock_run):
        with pytest.raises(UnsupportedTypeError):
            extractor.extract_frame(FrameRequest("song.mp3", "cover.jpg", "1"))
        mock_run.assert_not_called()

    def test_non_image_output(self, extractor, mock_run):
        with pytest.raises(UnsupportedTypeError):
            extractor.extract_frame(FrameRequest("movie.mp4", "frame.mp4", "1"))


class TestExtractFrames:
    def test_interval_extraction(self, extractor, mock_run, temp_dir):
        output_dir = temp_dir / "frames"

        def fake_ffmpeg(args, timeout=None):
            for n in (2, 1):
                (output_dir / f"frame_{n:04d}.jpg").write_bytes(b"")
            (output_dir / "notes.txt").write_text("")
            return mock_run.return_value

        mock_run.side_effect = fake_ffmpeg

        frames = extractor.extract_frames(temp_dir / "movie.mp4", output_dir, 10)

        assert [f.name for f in frames] == ["frame_0001.jpg", "frame_0002.jpg"]
        args = mock_run.call_args[0][0]
        assert "fps=1/10" in args
        assert str(output_dir / "frame_%04d.jpg") in args

    def test_old_frames_are_not_returned(self, extractor, mock_run, temp_dir):
        output_dir = temp_dir / "frames"
        output_dir.mkdir()
        old = output_dir / "frame_0042.jpg"
        old.write_bytes(b"old")
        keep = output_dir / "cover.jpg"
        keep.write_bytes(b"")

        def fake_ffmpeg(args, timeout=None):
            (output_dir / "frame_0001.jpg").write_bytes(b"")
            return mock_run.return_value

        mock_run.side_effect = fake_ffmpeg

        frames = extractor.extract_frames(temp_dir / "movie.mp4", output_dir, 10)

        assert frames == [output_dir / "frame_0001.jpg"]
        assert not old.exists()
        assert keep.exists()

    def test_nothing_written(self, extractor, mock_run, temp_dir):
        output_dir = temp_dir / "frames"
        output_dir.mkdir()
        (output_dir / "frame_0042.jpg").write_bytes(b"old")

        assert extractor.extract_frames(temp_dir / "movie.mp4", output_dir, 10) == []

    def test_output_dir_is_a_file(self, extractor, mock_run, make_file):
        blocker = make_file("frames")

        with pytest.raises(InvalidArgumentError) as exc_info:
            extractor.extract_frames(blocker.parent / "movie.mp4", blocker, 10)

        assert exc_info.value.field == "output"
        mock_run.assert_not_called()

    @pytest.mark.parametrize("interval", [0, -1, "soon"])
    def test_invalid_interval(self, extractor, mock_run, temp_dir, interval):
        with pytest.raises(InvalidArgumentError) as exc_info:
            extractor.extract_frames(temp_dir / "movie.mp4", temp_dir, interval)
        assert exc_info.value.field == "interval"
