"""Pure parsing functions for ffprobe JSON output.

These functions transform ffprobe JSON data into MediaInfo objects.
All functions are pure (no I/O, no side effects) for easy testing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mediaconv.introspector.models import MediaInfo, StreamInfo

logger = logging.getLogger(__name__)

# Common channel counts and their conventional layout names.
_CHANNEL_LAYOUTS = {1: "mono", 2: "stereo", 6: "5.1", 8: "7.1"}


class FFprobeOutputError(ValueError):
    """ffprobe JSON lacks the sections every probe result must have."""


def sanitize_string(value: str | None) -> str | None:
    """Replace characters that cannot round-trip through UTF-8."""
    if value is None:
        return None
    return value.encode("utf-8", errors="replace").decode("utf-8")


def parse_duration(value: Any) -> float | None:
    """Parse a duration string from ffprobe ("3600.000") into seconds.

    Returns None for missing, non-numeric or negative values.
    """
    if value is None:
        return None
    try:
        duration = float(value)
    except (ValueError, TypeError):
        return None
    if duration < 0:
        return None
    return duration


def parse_int(value: Any, field_name: str = "value") -> int | None:
    """Parse an ffprobe integer field, which may arrive as int or string.

    Negative and non-numeric values are logged and dropped.
    """
    if value is None or value == "N/A":
        return None
    try:
        number = int(value)
    except (ValueError, TypeError):
        logger.debug("Ignoring non-integer %s: %r", field_name, value)
        return None
    if number < 0:
        logger.debug("Ignoring negative %s: %d", field_name, number)
        return None
    return number


def _tag(tags: dict, name: str) -> str | None:
    """Case-insensitive tag lookup (containers disagree on TITLE vs title)."""
    for key, value in tags.items():
        if key.casefold() == name:
            return sanitize_string(str(value))
    return None


def parse_stream(stream: dict) -> StreamInfo:
    """Parse a single ffprobe stream dict into a StreamInfo."""
    codec_type = stream.get("codec_type") or "unknown"
    tags = stream.get("tags") or {}
    disposition = stream.get("disposition") or {}

    frame_rate = None
    if codec_type == "video":
        # avg_frame_rate is the real rate; r_frame_rate is the timebase guess
        for key in ("avg_frame_rate", "r_frame_rate"):
            candidate = stream.get(key)
            if candidate and candidate != "0/0":
                frame_rate = candidate
                break

    channels = parse_int(stream.get("channels"), "channels")
    channel_layout = stream.get("channel_layout")
    if channel_layout is None and channels is not None:
        channel_layout = _CHANNEL_LAYOUTS.get(channels)

    return StreamInfo(
        index=parse_int(stream.get("index"), "index") or 0,
        codec_type=codec_type,
        codec=stream.get("codec_name"),
        width=parse_int(stream.get("width"), "width"),
        height=parse_int(stream.get("height"), "height"),
        frame_rate=frame_rate,
        channels=channels,
        channel_layout=channel_layout,
        sample_rate=parse_int(stream.get("sample_rate"), "sample_rate"),
        language=_tag(tags, "language"),
        duration=parse_duration(stream.get("duration")),
        is_attached_picture=disposition.get("attached_pic", 0) == 1,
    )


def parse_ffprobe_output(path: Path, data: dict) -> MediaInfo:
    """Parse ffprobe JSON output into MediaInfo.

    Args:
        path: Path of the probed file.
        data: Parsed output of ffprobe -show_format -show_streams.

    Returns:
        MediaInfo for the file.

    Raises:
        FFprobeOutputError: If the "format" or "streams" section is missing.
    """
    if not isinstance(data, dict):
        raise FFprobeOutputError("ffprobe output is not a JSON object")
    for section in ("format", "streams"):
        if section not in data:
            raise FFprobeOutputError(
                f"Missing '{section}' in ffprobe output for {path}. "
                "File may be corrupted or not a valid media file."
            )

    format_info = data["format"] or {}
    tracks = tuple(parse_stream(s) for s in data["streams"] or [])

    video = next(
        (t for t in tracks if t.codec_type == "video" and not t.is_attached_picture),
        None,
    )
    audio = next((t for t in tracks if t.codec_type == "audio"), None)

    duration = parse_duration(format_info.get("duration"))
    if duration is None:
        duration = next((t.duration for t in tracks if t.duration is not None), None)

    tags = format_info.get("tags") or {}

    return MediaInfo(
        path=path,
        format_name=format_info.get("format_name"),
        duration=duration,
        width=video.width if video else None,
        height=video.height if video else None,
        frame_rate=video.frame_rate if video else None,
        video_codec=video.codec if video else None,
        audio_codec=audio.codec if audio else None,
        bit_rate=parse_int(format_info.get("bit_rate"), "bit_rate"),
        file_size=parse_int(format_info.get("size"), "size"),
        title=_tag(tags, "title"),
        artist=_tag(tags, "artist"),
        streams=len(tracks),
        tracks=tracks,
    )
