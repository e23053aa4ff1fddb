"""Option translators: generic option bag -> tool arguments.

Every translator is pure. It receives the request's options and the output
extension and returns the arguments that go between the input and the
output path on the tool's command line. Unknown option keys are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping

from mediaconv.converter.errors import InvalidArgumentError
from mediaconv.core.file_utils import normalize_extension
from mediaconv.formats.registry import AUDIO_ONLY_EXTENSIONS, Category

DEFAULT_AUDIO_BITRATE = "192k"
DEFAULT_GIF_FPS = 10
DEFAULT_GIF_WIDTH = 480
DEFAULT_IMAGE_QUALITY = 95
DEFAULT_PDF_ENGINE = "pdflatex"

MAX_CRF = 63

# Encoder used when a video's audio is extracted into each container.
AUDIO_EXTRACTION_CODECS: dict[str, str] = {
    ".mp3": "libmp3lame",
    ".wav": "pcm_s16le",
    ".flac": "flac",
    ".aac": "aac",
    ".m4a": "aac",
    ".ogg": "libvorbis",
}

_BITRATE_PATTERN = re.compile(r"^\d+(\.\d+)?[kKmM]?$")
_PDF_ENGINE_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

Translator = Callable[[Mapping[str, str], str], list[str]]


def parse_positive_int(value: str | int, field: str) -> int:
    """Parse an option that must be a positive integer.

    Raises:
        InvalidArgumentError: If value is not an integer > 0.
    """
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(
            f"{field} must be a positive integer, got {value!r}", field=field
        ) from None
    if number <= 0:
        raise InvalidArgumentError(
            f"{field} must be a positive integer, got {value!r}", field=field
        )
    return number


def parse_bitrate(value: str, field: str = "bitrate") -> str:
    """Validate a bitrate such as "192k", "2M" or "128000"."""
    value = str(value).strip()
    if not _BITRATE_PATTERN.match(value):
        raise InvalidArgumentError(
            f"{field} must look like 192k, 2M or 128000, got {value!r}",
            field=field,
        )
    return value


def resolve_image_quality(value: str | int | None) -> int:
    """Return the image quality to use.

    Values in 1..100 are used as given; anything else (absent, 0, 150,
    non-numeric) resolves to DEFAULT_IMAGE_QUALITY.
    """
    if value is None:
        return DEFAULT_IMAGE_QUALITY
    try:
        quality = int(str(value).strip())
    except ValueError:
        return DEFAULT_IMAGE_QUALITY
    if 1 <= quality <= 100:
        return quality
    return DEFAULT_IMAGE_QUALITY


def _parse_crf(value: str) -> int:
    try:
        crf = int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(
            f"quality must be an integer CRF value, got {value!r}", field="quality"
        ) from None
    if not 0 <= crf <= MAX_CRF:
        raise InvalidArgumentError(
            f"quality must be between 0 and {MAX_CRF}, got {crf}", field="quality"
        )
    return crf


def _gif_scale(options: Mapping[str, str]) -> str:
    width = options.get("width")
    height = options.get("height")
    if width is not None and height is not None:
        return (
            f"{parse_positive_int(width, 'width')}:"
            f"{parse_positive_int(height, 'height')}"
        )
    if width is not None:
        return f"{parse_positive_int(width, 'width')}:-1"
    if height is not None:
        return f"-1:{parse_positive_int(height, 'height')}"
    return f"{DEFAULT_GIF_WIDTH}:-1"


def build_gif_filter(fps: int, scale: str) -> str:
    """Build the two-pass palette filter graph used for GIF output."""
    return (
        f"fps={fps},scale={scale}:flags=lanczos,"
        "split[s0][s1];[s0]palettegen[p];[s1][p]paletteuse"
    )


def translate_video(options: Mapping[str, str], output_ext: str) -> list[str]:
    """Translate options for an ffmpeg video conversion.

    Three shapes, picked by output extension:
    - audio-only container: drop video, choose an audio encoder, bitrate
      defaults to 192k
    - .gif: palette-based filter graph, fps defaults to 10 and scale to 480:-1
    - anything else: quality -> -crf, bitrate -> -b:v
    """
    output_ext = normalize_extension(output_ext)

    if output_ext in AUDIO_ONLY_EXTENSIONS:
        bitrate = parse_bitrate(options.get("bitrate", DEFAULT_AUDIO_BITRATE))
        return [
            "-vn",
            "-acodec",
            AUDIO_EXTRACTION_CODECS[output_ext],
            "-b:a",
            bitrate,
        ]

    if output_ext == ".gif":
        fps = parse_positive_int(options.get("fps", DEFAULT_GIF_FPS), "fps")
        return [
            "-vf",
            build_gif_filter(fps, _gif_scale(options)),
            "-loop",
            "0",
        ]

    args: list[str] = []
    if "quality" in options:
        args.extend(["-crf", str(_parse_crf(options["quality"]))])
    if "bitrate" in options:
        args.extend(["-b:v", parse_bitrate(options["bitrate"])])
    return args


def translate_image(options: Mapping[str, str], output_ext: str) -> list[str]:
    """Translate options for an ImageMagick conversion."""
    args = ["-quality", str(resolve_image_quality(options.get("quality")))]

    width = options.get("width")
    height = options.get("height")
    if width is not None and height is not None:
        geometry = (
            f"{parse_positive_int(width, 'width')}x"
            f"{parse_positive_int(height, 'height')}"
        )
        args.extend(["-resize", geometry])
    elif width is not None:
        args.extend(["-resize", str(parse_positive_int(width, "width"))])
    elif height is not None:
        args.extend(["-resize", f"x{parse_positive_int(height, 'height')}"])
    return args


def translate_audio(options: Mapping[str, str], output_ext: str) -> list[str]:
    """Translate options for an ffmpeg audio conversion."""
    args: list[str] = []
    if "bitrate" in options:
        args.extend(["-b:a", parse_bitrate(options["bitrate"])])
    if "sample_rate" in options:
        rate = parse_positive_int(options["sample_rate"], "sample_rate")
        args.extend(["-ar", str(rate)])
    return args


def translate_document(options: Mapping[str, str], output_ext: str) -> list[str]:
    """Translate options for a pandoc conversion.

    Only PDF output takes an argument: the LaTeX engine pandoc renders with.
    """
    if normalize_extension(output_ext) != ".pdf":
        return []
    engine = options.get("pdf_engine", DEFAULT_PDF_ENGINE)
    if not _PDF_ENGINE_PATTERN.match(engine):
        raise InvalidArgumentError(
            f"pdf_engine is not a valid program name: {engine!r}", field="pdf_engine"
        )
    return [f"--pdf-engine={engine}"]


TRANSLATORS: dict[Category, Translator] = {
    Category.VIDEO: translate_video,
    Category.IMAGE: translate_image,
    Category.AUDIO: translate_audio,
    Category.DOCUMENT: translate_document,
}


def translate_options(
    category: Category, options: Mapping[str, str], output_ext: str
) -> list[str]:
    """Translate options with the translator for category."""
    return TRANSLATORS[category](options, output_ext)
