"""Tests for the daily/size rotating file handler and sink selection."""

import logging
import os
from datetime import datetime
from pathlib import Path

import pytest

from config.settings import Settings
from velox_logger.handlers import DailyRotatingFileHandler, create_handler
from velox_logger.models import LoggerConfiguration


def _record(message: str) -> logging.LogRecord:
    return logging.makeLogRecord(
        {"name": "test", "msg": message, "levelno": logging.INFO, "levelname": "INFO"}
    )


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "app.log"


def test_writes_to_active_file(log_path):
    handler = DailyRotatingFileHandler(str(log_path))
    try:
        handler.emit(_record("first entry"))
    finally:
        handler.close()

    assert "first entry" in log_path.read_text(encoding="utf-8")
    assert handler.rotated_files() == []


def test_rolls_over_on_size(log_path):
    handler = DailyRotatingFileHandler(str(log_path), max_bytes=200, backup_count=10)
    try:
        for i in range(12):
            handler.emit(_record(f"entry {i:02d} " + "x" * 30))
        period = handler.period
    finally:
        handler.close()

    assert Path(f"{log_path}.{period}").exists()
    assert Path(f"{log_path}.{period}.1").exists()
    assert log_path.stat().st_size < 200


def test_rolls_over_when_day_changes(log_path):
    handler = DailyRotatingFileHandler(str(log_path))
    try:
        handler.emit(_record("yesterday"))
        handler.period = "2000-01-01"
        handler.emit(_record("today"))
        current = handler.period
    finally:
        handler.close()

    rotated = Path(f"{log_path}.2000-01-01")
    assert rotated.exists()
    assert "yesterday" in rotated.read_text(encoding="utf-8")
    assert "today" in log_path.read_text(encoding="utf-8")
    assert "yesterday" not in log_path.read_text(encoding="utf-8")
    assert current == datetime.now().strftime("%Y-%m-%d")


def test_existing_file_from_previous_day_rolls_over(log_path):
    log_path.write_text("old entry\n", encoding="utf-8")
    old = datetime(2000, 1, 1, 12, 0).timestamp()
    os.utime(log_path, (old, old))

    handler = DailyRotatingFileHandler(str(log_path))
    try:
        assert handler.period == "2000-01-01"
        handler.emit(_record("new entry"))
    finally:
        handler.close()

    assert Path(f"{log_path}.2000-01-01").read_text(encoding="utf-8") == "old entry\n"
    assert "new entry" in log_path.read_text(encoding="utf-8")


def test_keeps_at_most_backup_count_files(log_path):
    handler = DailyRotatingFileHandler(str(log_path), backup_count=2)
    try:
        handler.emit(_record("a"))
        for day in ("2000-01-01", "2000-01-02", "2000-01-03"):
            handler.period = day
            handler.emit(_record(day))
        rotated = handler.rotated_files()
    finally:
        handler.close()

    names = sorted(path.name for path in rotated)
    assert names == ["app.log.2000-01-02", "app.log.2000-01-03"]


def test_custom_date_format(log_path):
    handler = DailyRotatingFileHandler(str(log_path), date_format="%Y%m%d")
    try:
        assert handler.period == datetime.now().strftime("%Y%m%d")
    finally:
        handler.close()


def test_create_handler_console():
    handler = create_handler(LoggerConfiguration(level="info"))
    try:
        assert isinstance(handler, logging.StreamHandler)
        assert not isinstance(handler, logging.FileHandler)
    finally:
        handler.close()


def test_create_handler_file_uses_rotation_settings(tmp_path):
    settings = Settings(_env_file=None)
    log_dir = tmp_path / "nested" / "logs"
    config = LoggerConfiguration(level="debug", log_dir=str(log_dir), filename="svc.log")

    handler = create_handler(config, settings)
    try:
        assert isinstance(handler, DailyRotatingFileHandler)
        assert handler.baseFilename == str(log_dir / "svc.log")
        assert handler.maxBytes == 5_000_000
        assert handler.backupCount == 120
        assert log_dir.is_dir()
    finally:
        handler.close()


def test_retention_leaves_sibling_logs_alone(tmp_path):
    sibling = tmp_path / "app.debug"
    sibling.write_text("other logger\n", encoding="utf-8")
    sibling_rotated = tmp_path / "app.debug.2000-01-01"
    sibling_rotated.write_text("other logger, rotated\n", encoding="utf-8")
    unrelated = tmp_path / "app.2000-01-01.bak"
    unrelated.write_text("backup\n", encoding="utf-8")

    handler = DailyRotatingFileHandler(str(tmp_path / "app"), backup_count=1)
    try:
        handler.emit(_record("a"))
        for day in ("2000-01-01", "2000-01-02"):
            handler.period = day
            handler.emit(_record(day))
        rotated = handler.rotated_files()
    finally:
        handler.close()

    assert [path.name for path in rotated] == ["app.2000-01-02"]
    assert sibling.read_text(encoding="utf-8") == "other logger\n"
    assert sibling_rotated.exists()
    assert unrelated.exists()


def test_rotated_files_ordered_by_period_and_counter(log_path):
    for name in ("app.log.2000-01-02", "app.log.2000-01-01.10", "app.log.2000-01-01.2", "app.log.2000-01-01"):
        (log_path.parent / name).write_text("x\n", encoding="utf-8")

    handler = DailyRotatingFileHandler(str(log_path))
    try:
        names = [path.name for path in handler.rotated_files()]
    finally:
        handler.close()

    assert names == ["app.log.2000-01-01", "app.log.2000-01-01.2", "app.log.2000-01-01.10", "app.log.2000-01-02"]
