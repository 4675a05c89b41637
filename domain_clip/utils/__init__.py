"""Shared utilities: structured exceptions and logging."""

from .clip_logging import LoggedOperation, configure_logging, get_logger
from .exceptions import (
    ClipExecutionError,
    ClipFilterError,
    DimensionMismatchError,
    FilterStateError,
    GeometryContractError,
    validate_vector3,
)

__all__ = [
    "ClipExecutionError",
    "ClipFilterError",
    "DimensionMismatchError",
    "FilterStateError",
    "GeometryContractError",
    "LoggedOperation",
    "configure_logging",
    "get_logger",
    "validate_vector3",
]
