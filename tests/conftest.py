"""Shared test fixtures for mediaconv."""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from mediaconv.core.subprocess_utils import CommandOutput
from mediaconv.tools.models import ToolRegistry

FAKE_TOOL_PATHS = {
    "ffmpeg": "/usr/bin/ffmpeg",
    "ffprobe": "/usr/bin/ffprobe",
    "magick": "/usr/bin/magick",
    "pandoc": "/usr/bin/pandoc",
}


def command_output(
    stdout: str = "", stderr: str = "", returncode: int = 0, elapsed: float = 0.01
) -> CommandOutput:
    """Build a CommandOutput as run_command would return it."""
    return CommandOutput(
        stdout=stdout, stderr=stderr, returncode=returncode, elapsed=elapsed
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by configure_logging() or the CLI."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep the user's config file and MEDIACONV_* variables out of tests."""
    from mediaconv.config import clear_config_cache

    monkeypatch.setenv("MEDIACONV_CONFIG_PATH", str(tmp_path / "no-config.toml"))
    for var in (
        "MEDIACONV_FFMPEG_PATH",
        "MEDIACONV_FFPROBE_PATH",
        "MEDIACONV_MAGICK_PATH",
        "MEDIACONV_PANDOC_PATH",
        "MEDIACONV_TIMEOUT",
        "MEDIACONV_WORKERS",
        "MEDIACONV_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for test isolation."""
    return tmp_path


@pytest.fixture
def fake_tools() -> ToolRegistry:
    """Registry in which every tool is available at a fixed path."""
    return ToolRegistry.from_paths(**FAKE_TOOL_PATHS)


@pytest.fixture
def no_tools() -> ToolRegistry:
    """Registry in which no tool was found."""
    return ToolRegistry.from_paths()


@pytest.fixture
def mock_run():
    """Patch the tool invoker's run_command; every call succeeds by default."""
    with patch("mediaconv.converter.invoker.run_command") as mock:
        mock.return_value = command_output()
        yield mock


@pytest.fixture
def make_file(temp_dir: Path) -> Callable[[str], Path]:
    """Factory creating small placeholder files under temp_dir."""

    def _make(name: str, content: bytes = b"\x00" * 16) -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def ffprobe_video_json() -> str:
    """ffprobe output for an H.264 video with AAC audio and cover art."""
    return json.dumps(
        {
            "streams": [
                {
                    "index": 0,
                    "codec_name": "h264",
                    "codec_type": "video",
                    "width": 1920,
                    "height": 1080,
                    "r_frame_rate": "30000/1001",
                    "avg_frame_rate": "30000/1001",
                    "duration": "120.120000",
                    "disposition": {"default": 1, "attached_pic": 0},
                },
                {
                    "index": 1,
                    "codec_name": "aac",
                    "codec_type": "audio",
                    "sample_rate": "48000",
                    "channels": 2,
                    "channel_layout": "stereo",
                    "tags": {"language": "eng"},
                },
                {
                    "index": 2,
                    "codec_name": "mjpeg",
                    "codec_type": "video",
                    "width": 600,
                    "height": 600,
                    "disposition": {"attached_pic": 1},
                },
            ],
            "format": {
                "filename": "movie.mp4",
                "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
                "duration": "120.120000",
                "size": "15728640",
                "bit_rate": "1047552",
                "tags": {"title": "Test Movie", "ARTIST": "Someone"},
            },
        }
    )


@pytest.fixture
def ffprobe_audio_json() -> str:
    """ffprobe output for an MP3 file with no format-level duration."""
    return json.dumps(
        {
            "streams": [
                {
                    "index": 0,
                    "codec_name": "mp3",
                    "codec_type": "audio",
                    "sample_rate": "44100",
                    "channels": 1,
                    "duration": "61.5",
                }
            ],
            "format": {"format_name": "mp3", "size": "984000"},
        }
    )
