"""
Logging utilities for domain_clip.

Usage:
    >>> from domain_clip.utils.clip_logging import get_logger, configure_logging
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("Clipping 4 domains...")
"""

from __future__ import annotations

from .logger import (
    ClipFormatter,
    ClipLogger,
    DomainLoggerAdapter,
    LoggedOperation,
    LoggingSettings,
    configure_logging,
    get_domain_logger,
    get_logger,
    log_filter_configuration,
    log_performance_metric,
)

__all__ = [
    "ClipFormatter",
    "ClipLogger",
    "DomainLoggerAdapter",
    "LoggedOperation",
    "LoggingSettings",
    "configure_logging",
    "get_domain_logger",
    "get_logger",
    "log_filter_configuration",
    "log_performance_metric",
]
