"""Shared primitives: errors, logging and settings."""

from ottl_playground.core.errors import (
    ConfigError,
    ConfigParseError,
    DuplicateExecutorError,
    ErrorCategory,
    ExecutionError,
    ExecutorNotFoundError,
    InvalidExecutorError,
    PayloadError,
    PlaygroundError,
    RequestError,
    UnsupportedSignalKindError,
)
from ottl_playground.core.logging import configure_logging, get_logger

__all__ = [
    "ErrorCategory",
    "PlaygroundError",
    "ConfigError",
    "DuplicateExecutorError",
    "InvalidExecutorError",
    "RequestError",
    "ExecutorNotFoundError",
    "UnsupportedSignalKindError",
    "ExecutionError",
    "ConfigParseError",
    "PayloadError",
    "configure_logging",
    "get_logger",
]
