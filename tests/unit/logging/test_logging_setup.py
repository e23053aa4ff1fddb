"""Tests for configure_logging."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from mediaconv.config import LoggingConfig
from mediaconv.logging import JSONFormatter, configure_logging, job_context


class TestConfigureLogging:
    def test_stderr_only_by_default(self):
        configure_logging(LoggingConfig(level="info"))

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert not isinstance(root.handlers[0], RotatingFileHandler)

    def test_replaces_existing_handlers(self):
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())

        assert len(logging.getLogger().handlers) == 1

    def test_rotating_file(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "mediaconv.log"

        configure_logging(
            LoggingConfig(level="debug", file=log_file, max_bytes=1000, backup_count=2)
        )

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        handler = handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1000
        assert handler.backupCount == 2
        assert log_file.parent.is_dir()

    def test_file_and_stderr(self, tmp_path: Path):
        configure_logging(LoggingConfig(file=tmp_path / "m.log", include_stderr=True))

        assert len(logging.getLogger().handlers) == 2

    def test_json_file_output_carries_job(self, tmp_path: Path):
        log_file = tmp_path / "m.log"
        configure_logging(LoggingConfig(level="info", file=log_file, format="json"))
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

        with job_context("J004", "c.flac"):
            logging.getLogger("mediaconv.batch").info("converting")
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "converting"
        assert entry["context"]["job_id"] == "J004"

    def test_text_format_has_job_tag(self, tmp_path: Path):
        log_file = tmp_path / "m.log"
        configure_logging(LoggingConfig(level="info", file=log_file))

        with job_context("J005"):
            logging.getLogger("mediaconv.batch").warning("slow")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "[J005] mediaconv.batch - WARNING - slow" in log_file.read_text()

    def test_unwritable_file_falls_back_to_stderr(self, tmp_path: Path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        configure_logging(LoggingConfig(file=blocker / "m.log"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], RotatingFileHandler)
        assert "Could not open log file" in capsys.readouterr().err
