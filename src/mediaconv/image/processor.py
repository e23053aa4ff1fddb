"""Image editing through ImageMagick.

Each operation validates its request, builds a magick command line and runs
it through the shared ToolInvoker. The executed argument vector is returned
so callers can report it.
"""

from __future__ import annotations

import logging
import re

from mediaconv.config.models import ConversionConfig
from mediaconv.converter.errors import InvalidArgumentError, UnsupportedTypeError
from mediaconv.converter.invoker import ToolInvoker, prepare_output_dir
from mediaconv.converter.models import (
    CropRequest,
    FlipRequest,
    ResizeRequest,
    RotateRequest,
)
from mediaconv.converter.options import resolve_image_quality
from mediaconv.core.file_utils import extension_of
from mediaconv.formats.registry import Category, FormatRegistry

logger = logging.getLogger(__name__)

MAGICK = "magick"

# Colour names ("none", "white"), #RGB/#RRGGBB[AA] and rgb()/rgba() forms.
_COLOR_PATTERN = re.compile(
    r"^(?:[A-Za-z]+[0-9]*|#[0-9A-Fa-f]{3,8}|rgba?\([0-9., %]+\))$"
)

ImageRequest = CropRequest | ResizeRequest | RotateRequest | FlipRequest


def _require_positive(value: int, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(
            f"{field} must be a positive integer, got {value!r}", field=field
        )
    return value


def _require_non_negative(value: int, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(
            f"{field} must be a non-negative integer, got {value!r}", field=field
        )
    return value


def crop_geometry(request: CropRequest) -> str:
    """Return the WxH+X+Y geometry for a crop request."""
    width = _require_positive(request.width, "width")
    height = _require_positive(request.height, "height")
    x = _require_non_negative(request.x, "x")
    y = _require_non_negative(request.y, "y")
    return f"{width}x{height}+{x}+{y}"


def resize_geometry(request: ResizeRequest) -> str:
    """Return the WxH geometry for a resize request (WxH! when exact)."""
    width = _require_positive(request.width, "width")
    height = _require_positive(request.height, "height")
    geometry = f"{width}x{height}"
    if request.exact:
        geometry += "!"
    return geometry


class ImageProcessor:
    """Crop, resize, rotate and flip images with magick.

    Args:
        invoker: Invoker bound to the startup tool registry.
        registry: Format registry used to validate extensions.
        config: Conversion defaults; supplies image_quality.
    """

    def __init__(
        self,
        invoker: ToolInvoker,
        registry: FormatRegistry,
        config: ConversionConfig | None = None,
    ) -> None:
        self.invoker = invoker
        self.registry = registry
        self.config = config or ConversionConfig()

    def crop(self, request: CropRequest) -> list[str]:
        """Cut a region out of an image. +repage drops the old canvas offset."""
        geometry = crop_geometry(request)
        return self._run(request, ["-crop", geometry, "+repage"])

    def resize(self, request: ResizeRequest) -> list[str]:
        return self._run(request, ["-resize", resize_geometry(request)])

    def rotate(self, request: RotateRequest) -> list[str]:
        """Rotate clockwise; uncovered corners are filled with background."""
        try:
            degrees = float(request.degrees)
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                f"degrees must be a number, got {request.degrees!r}", field="degrees"
            ) from None
        if not _COLOR_PATTERN.match(request.background):
            raise InvalidArgumentError(
                f"background is not a valid colour: {request.background!r}",
                field="background",
            )
        return self._run(
            request,
            ["-background", request.background, "-rotate", f"{degrees:g}"],
        )

    def flip(self, request: FlipRequest) -> list[str]:
        # ImageMagick's -flop mirrors left-right, -flip mirrors top-bottom.
        return self._run(request, ["-flop" if request.horizontal else "-flip"])

    def _run(self, request: ImageRequest, operation: list[str]) -> list[str]:
        self._check_extensions(request)
        tool_path = self.invoker.require(MAGICK)
        quality = resolve_image_quality(
            request.quality
            if request.quality is not None
            else self.config.image_quality
        )
        command = [
            str(tool_path),
            str(request.input_path),
            *operation,
            "-quality",
            str(quality),
            str(request.output_path),
        ]
        prepare_output_dir(request.output_path.parent)
        output = self.invoker.invoke(tool_path, command[1:])
        logger.info(
            "%s %s -> %s",
            type(request).__name__.removesuffix("Request").lower(),
            request.input_path,
            request.output_path,
            extra={"elapsed_seconds": round(output.elapsed, 3)},
        )
        return command

    def _check_extensions(self, request: ImageRequest) -> None:
        input_ext = extension_of(request.input_path)
        if self.registry.resolve(input_ext) != Category.IMAGE:
            raise UnsupportedTypeError(
                f"Not an image file: {request.input_path}", extension=input_ext
            )
        output_ext = extension_of(request.output_path)
        if not self.registry.supports_output(Category.IMAGE, output_ext):
            raise UnsupportedTypeError(
                f"Cannot write image as {output_ext or '(no extension)'}",
                extension=output_ext,
            )
