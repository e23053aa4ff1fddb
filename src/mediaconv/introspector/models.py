"""Media metadata types produced by the probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


def frame_rate_to_float(frame_rate: str | None) -> float | None:
    """Convert an "N/D" or decimal frame rate string to a float."""
    if not frame_rate:
        return None
    try:
        if "/" in frame_rate:
            num, denom = frame_rate.split("/", 1)
            return int(num) / int(denom)
        return float(frame_rate)
    except (ValueError, ZeroDivisionError):
        return None


@dataclass(frozen=True)
class StreamInfo:
    """One stream of a media file, as reported by ffprobe."""

    index: int
    codec_type: str
    codec: str | None = None
    width: int | None = None
    height: int | None = None
    frame_rate: str | None = None
    channels: int | None = None
    channel_layout: str | None = None
    sample_rate: int | None = None
    language: str | None = None
    duration: float | None = None
    is_attached_picture: bool = False


@dataclass(frozen=True)
class MediaInfo:
    """Metadata of one media file.

    Derived from ffprobe on every probe and never cached. Video fields come
    from the first video stream that is not embedded cover art; audio_codec
    from the first audio stream.
    """

    path: Path
    format_name: str | None = None
    duration: float | None = None  # seconds
    width: int | None = None
    height: int | None = None
    frame_rate: str | None = None  # ratio as reported, e.g. "30000/1001"
    video_codec: str | None = None
    audio_codec: str | None = None
    bit_rate: int | None = None  # bits per second
    file_size: int | None = None  # bytes
    title: str | None = None
    artist: str | None = None
    streams: int = 0
    tracks: tuple[StreamInfo, ...] = field(default_factory=tuple)

    @property
    def fps(self) -> float | None:
        """Frame rate as a float, or None if unknown."""
        return frame_rate_to_float(self.frame_rate)

