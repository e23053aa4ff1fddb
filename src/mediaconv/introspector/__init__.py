"""Media probing with ffprobe.

- FFprobeProbe: runs ffprobe in JSON mode and returns MediaInfo
- MediaProbeError: probe failure carrying an ErrorKind
- parse_ffprobe_output: pure JSON -> MediaInfo parser
- format_human / format_json: display formatters
"""

from mediaconv.introspector.ffprobe import FFprobeProbe, MediaProbeError
from mediaconv.introspector.formatters import (
    format_human,
    format_json,
    format_stream_line,
    frame_rate_to_fps,
    info_to_dict,
)
from mediaconv.introspector.models import MediaInfo, StreamInfo
from mediaconv.introspector.parsers import FFprobeOutputError, parse_ffprobe_output

__all__ = [
    "FFprobeOutputError",
    "FFprobeProbe",
    "MediaInfo",
    "MediaProbeError",
    "StreamInfo",
    "parse_ffprobe_output",
    # Formatters
    "format_human",
    "format_json",
    "format_stream_line",
    "frame_rate_to_fps",
    "info_to_dict",
]
