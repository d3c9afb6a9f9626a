# robot_math/logger/logger.py
from __future__ import annotations

import logging
import threading
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..config.settings import LoggingSettings

PACKAGE_LOGGER = "robot_math"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class DedupFilter(logging.Filter):
    """
    Drop a record when it repeats the previous message of the same
    (logger, level) pair. With cooldown_s > 0 the repeat is let through again
    once that many seconds have passed; with 0 it is dropped until a different
    message arrives.
    """
    def __init__(self, cooldown_s: float = 0.0) -> None:
        super().__init__()
        self.cooldown_s = float(cooldown_s)
        self._lock = threading.Lock()
        self._seen: Dict[Tuple[str, int], Tuple[str, float]] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        key = (record.name, record.levelno)
        text = record.getMessage()
        now = time.monotonic()

        with self._lock:
            previous = self._seen.get(key)
            if previous is not None and previous[0] == text:
                if self.cooldown_s <= 0.0 or now - previous[1] < self.cooldown_s:
                    return False
            self._seen[key] = (text, now)
        return True


def _attach(
    target: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
    cooldown_s: float,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(DedupFilter(cooldown_s=cooldown_s))
    target.addHandler(handler)


class Logger:
    """
    Size-rotated log file for a logger (the package logger by default),
    optionally mirrored to stderr. Every handler gets its own DedupFilter.

    Handlers are only attached the first time a given logger is set up, so
    building a second Logger for the same name reuses the existing file.
    """
    def __init__(
        self,
        log_file: str,
        logger_name: str = PACKAGE_LOGGER,
        log_dir: str = "logs",
        level: int = logging.INFO,
        timestamp_format: str = "%Y-%m-%d %H:%M:%S",
        propagate: bool = False,
        max_bytes: int = 5_000_000,
        backup_count: int = 5,
        console: bool = False,
        dedup_cooldown_s: float = 0.0,
    ) -> None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        self.path = str(directory / log_file)

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(level)
        self._logger.propagate = propagate

        if not self._logger.handlers:
            formatter = logging.Formatter(LOG_FORMAT, datefmt=timestamp_format)
            rotating = RotatingFileHandler(
                self.path,
                maxBytes=int(max_bytes),
                backupCount=int(backup_count),
                encoding="utf-8",
            )
            _attach(self._logger, rotating, level, formatter, dedup_cooldown_s)
            if console:
                _attach(self._logger, logging.StreamHandler(), level, formatter, dedup_cooldown_s)

        self._logger.debug("logging '%s' to %s", logger_name, self.path)

    def get_logger(self) -> logging.Logger:
        return self._logger

    def close(self) -> None:
        """Detach and close every handler on the underlying logger."""
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()


def configure_logging(settings: Optional[LoggingSettings] = None) -> Logger:
    """
    Set up the package logger from LoggingSettings.

    Module loggers (robot_math.control.riccati, robot_math.trajectory.codec,
    ...) are children of it and write through its handlers.
    """
    settings = settings or LoggingSettings()
    return Logger(
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        level=settings.level_no,
        console=settings.console,
        dedup_cooldown_s=settings.dedup_cooldown_s,
    )
