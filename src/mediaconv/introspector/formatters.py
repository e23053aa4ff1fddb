"""Formatters for probe results.

Shared by the info command and the play --preview summary.
"""

import json
from typing import Any

from mediaconv.core.formatting import format_duration, format_file_size
from mediaconv.introspector.models import MediaInfo, StreamInfo, frame_rate_to_float


def frame_rate_to_fps(frame_rate: str | None) -> str | None:
    """Format a frame rate for display ("30000/1001" -> "29.97")."""
    fps = frame_rate_to_float(frame_rate)
    if fps is None:
        return None
    if fps == int(fps):
        return str(int(fps))
    return f"{fps:.3f}".rstrip("0").rstrip(".")


def format_bit_rate(bit_rate: int | None) -> str | None:
    if bit_rate is None:
        return None
    if bit_rate >= 1_000_000:
        return f"{bit_rate / 1_000_000:.1f} Mb/s"
    return f"{bit_rate // 1000} kb/s"


def format_stream_line(stream: StreamInfo) -> str:
    """Format a single stream for human output."""
    parts = [f"#{stream.index}", f"[{stream.codec_type}]"]

    if stream.codec:
        parts.append(stream.codec)

    if stream.codec_type == "video":
        if stream.width and stream.height:
            parts.append(f"{stream.width}x{stream.height}")
        fps = frame_rate_to_fps(stream.frame_rate)
        if fps:
            parts.append(f"@ {fps}fps")
        if stream.is_attached_picture:
            parts.append("(cover art)")

    if stream.codec_type == "audio":
        if stream.channel_layout:
            parts.append(stream.channel_layout)
        if stream.sample_rate:
            parts.append(f"{stream.sample_rate} Hz")

    if stream.language and stream.language != "und":
        parts.append(stream.language)

    return " ".join(parts)


def format_human(info: MediaInfo) -> str:
    """Format a MediaInfo for terminal output."""
    lines = [f"File: {info.path}"]
    if info.format_name:
        lines.append(f"Format: {info.format_name}")
    lines.append(f"Duration: {format_duration(info.duration)}")
    if info.file_size is not None:
        lines.append(f"Size: {format_file_size(info.file_size)}")
    if (bit_rate := format_bit_rate(info.bit_rate)) is not None:
        lines.append(f"Bit rate: {bit_rate}")
    if info.width and info.height:
        lines.append(f"Resolution: {info.width}x{info.height}")
    if (fps := frame_rate_to_fps(info.frame_rate)) is not None:
        lines.append(f"Frame rate: {fps} fps")
    if info.video_codec:
        lines.append(f"Video codec: {info.video_codec}")
    if info.audio_codec:
        lines.append(f"Audio codec: {info.audio_codec}")
    if info.title:
        lines.append(f"Title: {info.title}")
    if info.artist:
        lines.append(f"Artist: {info.artist}")

    lines.append("")
    lines.append(f"Streams ({info.streams}):")
    if info.tracks:
        for stream in info.tracks:
            lines.append(f"  {format_stream_line(stream)}")
    else:
        lines.append("  (no streams found)")

    return "\n".join(lines)


def stream_to_dict(stream: StreamInfo) -> dict[str, Any]:
    """Convert StreamInfo to a JSON-serializable dict, omitting unset fields."""
    d: dict[str, Any] = {
        "index": stream.index,
        "type": stream.codec_type,
        "codec": stream.codec,
    }
    optional_fields = (
        "width",
        "height",
        "frame_rate",
        "channels",
        "channel_layout",
        "sample_rate",
        "language",
        "duration",
    )
    for field in optional_fields:
        if (value := getattr(stream, field)) is not None:
            d[field] = value
    if stream.is_attached_picture:
        d["attached_picture"] = True
    return d


def info_to_dict(info: MediaInfo) -> dict[str, Any]:
    return {
        "path": str(info.path),
        "format_name": info.format_name,
        "duration": info.duration,
        "width": info.width,
        "height": info.height,
        "frame_rate": info.frame_rate,
        "fps": info.fps,
        "video_codec": info.video_codec,
        "audio_codec": info.audio_codec,
        "bit_rate": info.bit_rate,
        "file_size": info.file_size,
        "title": info.title,
        "artist": info.artist,
        "streams": info.streams,
        "tracks": [stream_to_dict(s) for s in info.tracks],
    }


def format_json(info: MediaInfo) -> str:
    """Format a MediaInfo as indented JSON."""
    return json.dumps(info_to_dict(info), indent=2)
