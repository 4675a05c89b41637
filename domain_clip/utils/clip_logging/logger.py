"""
Logging for domain_clip.

All package loggers live under the ``domain_clip`` namespace and are handed out
by ``ClipLogger``, which owns one set of handler settings and re-applies them
to every logger it has created whenever ``configure_logging`` is called.
Console output is coloured with colorlog; an optional plain-text file handler
mirrors it.

Per-domain messages go through ``DomainLoggerAdapter`` so that a line logged
from a worker thread still says which domain it belongs to.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar

import colorlog

ROOT_LOGGER_NAME = "domain_clip"
EXTERNAL_LOGGERS = ("pyvista", "vtk")

_MESSAGE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%H:%M:%S"
_LEVEL_COLORS = {
    "DEBUG": "blue",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


class ClipFormatter(logging.Formatter):
    """Plain or coloured formatter, optionally suffixed with ``[file:line]``."""

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        pattern = _MESSAGE_FORMAT + (" [%(filename)s:%(lineno)d]" if include_location else "")
        super().__init__(pattern, datefmt=_DATE_FORMAT)
        self.use_colors = use_colors
        self.include_location = include_location
        self._colored = (
            colorlog.ColoredFormatter("%(log_color)s" + pattern, datefmt=_DATE_FORMAT, log_colors=_LEVEL_COLORS)
            if use_colors
            else None
        )

    def format(self, record: logging.LogRecord) -> str:
        if self._colored is not None:
            return self._colored.format(record)
        return super().format(record)


@dataclass
class LoggingSettings:
    """Handler settings shared by every domain_clip logger."""

    level: int = logging.INFO
    use_colors: bool = True
    include_location: bool = False
    log_file: Path | None = None

    def build_handlers(self) -> list[logging.Handler]:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(ClipFormatter(self.use_colors, self.include_location))
        handlers: list[logging.Handler] = [console]

        if self.log_file is not None:
            # never colour the file output
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setFormatter(ClipFormatter(False, self.include_location))
            handlers.append(file_handler)

        for handler in handlers:
            handler.setLevel(self.level)
        return handlers


def _default_log_file() -> Path:
    log_dir = Path.cwd() / "logs"
    log_dir.mkdir(exist_ok=True)
    return log_dir / f"domain_clip_{datetime.now():%Y%m%d_%H%M%S}.log"


class ClipLogger:
    """
    Process-wide registry of domain_clip loggers.

    Loggers are created under a lock so that worker threads clipping domains
    in parallel never attach duplicate handlers.
    """

    _instance: ClassVar[ClipLogger | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()
    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    settings: ClassVar[LoggingSettings] = LoggingSettings()

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def configure(
        cls,
        level: str | int = "INFO",
        log_to_file: bool = False,
        log_file_path: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
        suppress_external: bool = True,
    ) -> None:
        """
        Replace the shared settings and re-apply them to existing loggers.

        Args:
            level: Level name or number
            log_to_file: Also write to a log file
            log_file_path: File to write to; defaults to ``./logs/domain_clip_<timestamp>.log``
            use_colors: Colour console output
            include_location: Append source file and line to each message
            suppress_external: Raise the pyvista/vtk loggers to WARNING
        """
        numeric_level = logging.getLevelName(level.upper()) if isinstance(level, str) else int(level)
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown log level: {level!r}")

        log_file = None
        if log_to_file:
            log_file = Path(log_file_path) if log_file_path is not None else _default_log_file()
            log_file.parent.mkdir(parents=True, exist_ok=True)

        with cls._lock:
            cls.settings = LoggingSettings(numeric_level, use_colors, include_location, log_file)
            for logger in cls._loggers.values():
                cls._attach_handlers(logger)

        if suppress_external:
            for name in EXTERNAL_LOGGERS:
                logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        logger = cls._loggers.get(name)
        if logger is not None:
            return logger

        with cls._lock:
            if name not in cls._loggers:
                logger = logging.getLogger(name)
                cls._attach_handlers(logger)
                cls._loggers[name] = logger
        return cls._loggers[name]

    @classmethod
    def _attach_handlers(cls, logger: logging.Logger) -> None:
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        for handler in cls.settings.build_handlers():
            logger.addHandler(handler)
        logger.setLevel(cls.settings.level)
        logger.propagate = False


class DomainLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the domain it concerns."""

    def process(self, msg, kwargs):
        return f"[domain {self.extra['domain_id']}] {msg}", kwargs


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger ``name`` (the package root logger if None)."""
    return ClipLogger.get_logger(name or ROOT_LOGGER_NAME)


def get_domain_logger(logger: logging.Logger, domain_id: int) -> DomainLoggerAdapter:
    return DomainLoggerAdapter(logger, {"domain_id": domain_id})


def configure_logging(**kwargs) -> None:
    """Keyword front-end for ``ClipLogger.configure``."""
    ClipLogger.configure(**kwargs)


def log_filter_configuration(logger: logging.Logger, filter_name: str, config: dict[str, Any]) -> None:
    """Log, at DEBUG, the parameters a filter is about to run with."""
    logger.debug(f"{filter_name} configuration:")
    width = max((len(key) for key in config), default=0)
    for key, value in config.items():
        logger.debug(f"  {key:<{width}} = {value}")


def log_performance_metric(
    logger: logging.Logger,
    operation: str,
    duration: float,
    additional_metrics: dict[str, Any] | None = None,
) -> None:
    details = ""
    if additional_metrics:
        details = " (" + ", ".join(f"{key}={value}" for key, value in additional_metrics.items()) + ")"
    logger.info(f"{operation} took {duration:.3f}s{details}")


class LoggedOperation:
    """
    Time a block and log its start, completion or failure.

    Exceptions are logged at ERROR and always re-raised.

    Example:
        >>> with LoggedOperation(logger, "Clip on 4 domains") as op:
        ...     run()
        >>> op.duration
    """

    def __init__(self, logger: logging.Logger, operation_name: str, log_level: int = logging.INFO):
        self.logger = logger
        self.operation_name = operation_name
        self.log_level = log_level
        self._started: float | None = None
        self.duration: float | None = None

    def __enter__(self) -> LoggedOperation:
        self.logger.log(self.log_level, f"{self.operation_name}: started")
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.duration = time.perf_counter() - self._started
        if exc_type is not None:
            self.logger.error(f"{self.operation_name}: failed after {self.duration:.3f}s ({exc_type.__name__}: {exc_val})")
        else:
            self.logger.log(self.log_level, f"{self.operation_name}: finished in {self.duration:.3f}s")
        return False
