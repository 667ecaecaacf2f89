"""Console and rotating-file sinks for registry loggers."""

import logging
import os
import sys
import time
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Tuple

from config.settings import Settings, settings as default_settings
from velox_logger.models import LoggerConfiguration

ENTRY_FORMAT = "%(asctime)s - %(levelname)s: [%(name)s] %(message)s"


def build_formatter() -> logging.Formatter:
    """Timestamped, human-readable line format shared by every sink."""
    return logging.Formatter(ENTRY_FORMAT)


class DailyRotatingFileHandler(RotatingFileHandler):
    """Rotate a log file once per day and whenever it grows past ``maxBytes``.

    The active file keeps its configured name. Rotated files are named
    ``<filename>.<date>`` after the day their entries were written, with a
    ``.<n>`` counter appended when a day rolls over more than once. At most
    ``backupCount`` rotated files are kept; the oldest are removed first.
    """

    def __init__(
        self,
        filename: str,
        max_bytes: int = 5_000_000,
        backup_count: int = 120,
        date_format: str = "%Y-%m-%d",
        encoding: str = "utf-8",
    ):
        self.date_format = date_format
        super().__init__(
            filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding,
            delay=True,
        )
        # An existing file from a previous day rolls over on the first write.
        if os.path.isfile(self.baseFilename):
            self.period = self._period_of(os.path.getmtime(self.baseFilename))
        else:
            self.period = self.current_period()

    def _period_of(self, timestamp: float) -> str:
        return datetime.fromtimestamp(timestamp).strftime(self.date_format)

    def current_period(self) -> str:
        return self._period_of(time.time())

    def shouldRollover(self, record: logging.LogRecord) -> bool:
        if self.current_period() != self.period:
            return True
        return bool(super().shouldRollover(record))

    def doRollover(self) -> None:
        if self.stream:
            self.stream.close()
            self.stream = None
        if os.path.isfile(self.baseFilename) and os.path.getsize(self.baseFilename) > 0:
            self.rotate(self.baseFilename, self._next_rotated_name())
        self.period = self.current_period()
        self._purge_rotated()
        if not self.delay:
            self.stream = self._open()

    def _next_rotated_name(self) -> str:
        dated = f"{self.baseFilename}.{self.period}"
        candidate = dated
        index = 0
        while os.path.exists(candidate):
            index += 1
            candidate = f"{dated}.{index}"
        return candidate

    def _rotation_key(self, suffix: str) -> Optional[Tuple[datetime, int]]:
        """``(period, counter)`` for a ``<period>`` or ``<period>.<n>`` suffix, else None."""
        period, counter = suffix, "0"
        head, _, tail = suffix.rpartition(".")
        if head and tail.isdigit():
            period, counter = head, tail
        for candidate, index in ((period, counter), (suffix, "0")):
            try:
                return datetime.strptime(candidate, self.date_format), int(index)
            except ValueError:
                continue
        return None

    def rotated_files(self) -> List[Path]:
        """Rotated files of this handler, oldest first."""
        base = Path(self.baseFilename)
        keyed = []
        for path in base.parent.glob(base.name + ".*"):
            if not path.is_file():
                continue
            key = self._rotation_key(path.name[len(base.name) + 1 :])
            if key is not None:
                keyed.append((key, path))
        return [path for _, path in sorted(keyed)]

    def _purge_rotated(self) -> None:
        if self.backupCount <= 0:
            return
        files = self.rotated_files()
        for path in files[: max(0, len(files) - self.backupCount)]:
            path.unlink()


def console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter())
    return handler


def file_handler(
    configuration: LoggerConfiguration, settings: Optional[Settings] = None
) -> DailyRotatingFileHandler:
    """Rotating file sink writing ``<log_dir>/<filename>``."""
    settings = settings or default_settings
    log_dir = Path(configuration.log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = DailyRotatingFileHandler(
        str(log_dir / configuration.filename),
        max_bytes=settings.rotation_max_bytes,
        backup_count=settings.rotation_max_files,
        date_format=settings.rotation_date_format,
    )
    handler.setFormatter(build_formatter())
    return handler


def create_handler(
    configuration: LoggerConfiguration, settings: Optional[Settings] = None
) -> logging.Handler:
    """Pick the sink a configuration asks for."""
    if configuration.logs_to_file:
        return file_handler(configuration, settings)
    return console_handler()
