"""Video frame extraction."""

from mediaconv.video.frames import (
    FRAME_PATTERN,
    FrameExtractor,
    normalize_timestamp,
    scale_filter,
)

__all__ = [
    "FRAME_PATTERN",
    "FrameExtractor",
    "normalize_timestamp",
    "scale_filter",
]
