"""Media playback through the desktop player, and previews."""

from mediaconv.player.player import (
    LINUX_PLAYERS,
    MediaPlayer,
    PreviewInfo,
    detect_launcher,
)

__all__ = [
    "LINUX_PLAYERS",
    "MediaPlayer",
    "PreviewInfo",
    "detect_launcher",
]
