"""Image editing operations (crop, resize, rotate, flip)."""

from mediaconv.image.processor import (
    ImageProcessor,
    crop_geometry,
    resize_geometry,
)

__all__ = [
    "ImageProcessor",
    "crop_geometry",
    "resize_geometry",
]
