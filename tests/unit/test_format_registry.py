"""Unit tests for the extension-to-category registry."""

from pathlib import Path

import pytest

from mediaconv.formats import (
    Category,
    FormatRegistry,
    FormatSpec,
    get_default_registry,
    resolve_category,
)


class TestResolve:
    """Tests for category resolution."""

    @pytest.mark.parametrize(
        "extension,category",
        [
            (".mp4", Category.VIDEO),
            ("MOV", Category.VIDEO),
            (".png", Category.IMAGE),
            ("jpeg", Category.IMAGE),
            (".flac", Category.AUDIO),
            (".md", Category.DOCUMENT),
            (".DOCX", Category.DOCUMENT),
        ],
    )
    def test_known_extensions(self, extension, category):
        """Extensions resolve case-insensitively, with or without a dot."""
        assert resolve_category(extension) == category

    def test_unknown_extension(self):
        assert resolve_category(".xyz") is None
        assert resolve_category("") is None

    def test_resolve_path(self):
        registry = get_default_registry()
        assert registry.resolve_path(Path("/music/Song.MP3")) == Category.AUDIO
        assert registry.resolve_path("README") is None

    def test_is_supported(self):
        registry = get_default_registry()
        assert registry.is_supported("webm")
        assert not registry.is_supported(".exe")


class TestOutputs:
    """Tests for output extension queries."""

    def test_video_can_produce_gif_and_audio(self):
        registry = get_default_registry()
        assert registry.supports_output(Category.VIDEO, ".gif")
        assert registry.supports_output(Category.VIDEO, "mp3")

    def test_audio_cannot_produce_video(self):
        registry = get_default_registry()
        assert not registry.supports_output(Category.AUDIO, ".mp4")

    def test_image_can_produce_pdf(self):
        assert get_default_registry().supports_output(Category.IMAGE, ".pdf")

    def test_output_extensions_for(self):
        registry = get_default_registry()
        outputs = registry.output_extensions_for(".wav")
        assert ".mp3" in outputs
        assert outputs == sorted(outputs)
        assert registry.output_extensions_for(".xyz") == []

    def test_input_extensions_by_category(self):
        registry = get_default_registry()
        audio = registry.input_extensions(Category.AUDIO)
        assert ".wma" in audio
        assert ".mp4" not in audio
        assert set(audio) < set(registry.all_input_extensions())


class TestConstruction:
    """Tests for building custom registries."""

    def test_overlapping_input_extension_rejected(self):
        """An extension may belong to only one category."""
        specs = [
            FormatSpec.create(Category.VIDEO, [".webm", ".mp4"], [".mp4"]),
            FormatSpec.create(Category.AUDIO, ["WEBM"], [".mp3"]),
        ]
        with pytest.raises(ValueError, match=r"\.webm"):
            FormatRegistry(specs)

    def test_custom_registry(self):
        registry = FormatRegistry(
            [FormatSpec.create(Category.IMAGE, ["heic"], ["jpg"])]
        )
        assert registry.resolve(".heic") == Category.IMAGE
        assert registry.supports_output(Category.IMAGE, ".jpg")
        assert registry.resolve(".png") is None
        assert registry.spec_for(Category.VIDEO) is None

    def test_default_registry_has_no_overlaps(self):
        """Every default input extension maps to exactly one category."""
        registry = get_default_registry()
        seen: dict[str, Category] = {}
        for spec in registry.specs:
            for ext in spec.input_extensions:
                assert ext not in seen
                seen[ext] = spec.category
