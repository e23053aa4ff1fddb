"""Unit tests for option translation."""

import pytest

from mediaconv.converter import (
    ErrorKind,
    InvalidArgumentError,
    resolve_image_quality,
    translate_audio,
    translate_document,
    translate_image,
    translate_options,
    translate_video,
)
from mediaconv.converter.options import (
    DEFAULT_IMAGE_QUALITY,
    build_gif_filter,
    parse_bitrate,
    parse_positive_int,
)
from mediaconv.formats import Category


class TestTranslateVideo:
    """Tests for ffmpeg video arguments."""

    def test_quality_becomes_crf(self):
        assert translate_video({"quality": "23"}, ".mp4") == ["-crf", "23"]

    def test_no_options(self):
        assert translate_video({}, ".mkv") == []

    def test_bitrate(self):
        assert translate_video({"bitrate": "2M"}, ".mp4") == ["-b:v", "2M"]

    def test_audio_extraction(self):
        """Audio-only outputs drop video and pick an encoder."""
        assert translate_video({}, ".mp3") == [
            "-vn",
            "-acodec",
            "libmp3lame",
            "-b:a",
            "192k",
        ]

    def test_audio_extraction_codec_per_container(self):
        assert translate_video({"bitrate": "320k"}, "flac")[2] == "flac"
        assert translate_video({}, ".ogg")[2] == "libvorbis"

    def test_gif_defaults(self):
        args = translate_video({}, ".gif")
        assert args == ["-vf", build_gif_filter(10, "480:-1"), "-loop", "0"]

    def test_gif_filter_uses_palette(self):
        graph = build_gif_filter(12, "320:-1")
        assert graph.startswith("fps=12,scale=320:-1:flags=lanczos,")
        assert "split[s0][s1];[s0]palettegen[p];[s1][p]paletteuse" in graph

    def test_gif_scale_from_height_only(self):
        args = translate_video({"height": "200", "fps": "5"}, ".gif")
        assert "fps=5,scale=-1:200" in args[1]

    @pytest.mark.parametrize("quality", ["abc", "-1", "64", "2.5"])
    def test_invalid_quality(self, quality):
        with pytest.raises(InvalidArgumentError) as exc_info:
            translate_video({"quality": quality}, ".mp4")
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT
        assert exc_info.value.field == "quality"

    def test_invalid_gif_fps(self):
        with pytest.raises(InvalidArgumentError, match="fps"):
            translate_video({"fps": "0"}, ".gif")


class TestTranslateImage:
    """Tests for ImageMagick arguments."""

    def test_quality(self):
        assert translate_image({"quality": "80"}, ".jpg") == ["-quality", "80"]

    @pytest.mark.parametrize("quality", [None, "0", "150", "high"])
    def test_quality_falls_back_to_default(self, quality):
        options = {} if quality is None else {"quality": quality}
        assert translate_image(options, ".png") == [
            "-quality",
            str(DEFAULT_IMAGE_QUALITY),
        ]

    def test_resize_both(self):
        args = translate_image({"width": "640", "height": "480"}, ".png")
        assert args[-2:] == ["-resize", "640x480"]

    def test_resize_height_only(self):
        assert translate_image({"height": "300"}, ".png")[-1] == "x300"

    def test_invalid_width(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            translate_image({"width": "wide"}, ".png")
        assert exc_info.value.field == "width"


class TestTranslateAudio:
    def test_bitrate_and_sample_rate(self):
        args = translate_audio({"bitrate": "128k", "sample_rate": "44100"}, ".mp3")
        assert args == ["-b:a", "128k", "-ar", "44100"]

    def test_invalid_bitrate(self):
        with pytest.raises(InvalidArgumentError):
            translate_audio({"bitrate": "fast"}, ".mp3")


class TestTranslateDocument:
    def test_pdf_engine_default(self):
        assert translate_document({}, ".pdf") == ["--pdf-engine=pdflatex"]

    def test_pdf_engine_option(self):
        assert translate_document({"pdf_engine": "xelatex"}, "pdf") == [
            "--pdf-engine=xelatex"
        ]

    def test_non_pdf_has_no_args(self):
        assert translate_document({"pdf_engine": "xelatex"}, ".html") == []

    def test_engine_must_be_program_name(self):
        with pytest.raises(InvalidArgumentError):
            translate_document({"pdf_engine": "xelatex; rm -rf /"}, ".pdf")


class TestHelpers:
    def test_translate_options_dispatches_by_category(self):
        assert translate_options(Category.VIDEO, {"quality": "18"}, ".mp4") == [
            "-crf",
            "18",
        ]

    def test_unknown_keys_ignored(self):
        assert translate_audio({"colour": "blue"}, ".wav") == []

    def test_resolve_image_quality(self):
        assert resolve_image_quality(50) == 50
        assert resolve_image_quality("100") == 100
        assert resolve_image_quality(101) == DEFAULT_IMAGE_QUALITY

    def test_parse_positive_int(self):
        assert parse_positive_int(" 12 ", "fps") == 12
        with pytest.raises(InvalidArgumentError):
            parse_positive_int("0", "fps")

    @pytest.mark.parametrize("value", ["192k", "2M", "128000", "1.5m"])
    def test_parse_bitrate_accepts(self, value):
        assert parse_bitrate(value) == value
