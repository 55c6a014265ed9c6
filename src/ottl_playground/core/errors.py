"""
Structured error types for the playground.

Every error raised by this package extends :class:`PlaygroundError`, which
carries a category, free-form context and an optional chained cause so the
HTTP and CLI layers can serialize failures uniformly.

Manifesto:
    - **Typed hierarchy:** configuration, request and execution failures are
      distinct classes so callers can branch on them
    - **Represent, don't crash:** the dispatcher turns request and execution
      errors into result envelopes; only configuration errors propagate
    - **Chaining:** wrapped exceptions are kept as ``cause``

Architecture:
    ::

        PlaygroundError
        ├── ConfigError
        │   ├── DuplicateExecutorError
        │   └── InvalidExecutorError
        ├── RequestError
        │   ├── ExecutorNotFoundError
        │   └── UnsupportedSignalKindError
        └── ExecutionError
            ├── ConfigParseError
            └── PayloadError

Tags:
    errors, exception-hierarchy, ottl-playground

Doc-Types:
    api-reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification and HTTP mapping."""

    CONFIG = "CONFIG"          # Registry wiring, startup configuration
    REQUEST = "REQUEST"        # Caller supplied an unknown id or kind
    EXECUTION = "EXECUTION"    # Executor rejected the statements or payload
    INTERNAL = "INTERNAL"      # Bugs, unexpected state


class PlaygroundError(Exception):
    """
    Base exception for all playground errors.

    Attributes:
        message: Human-readable message, also returned by ``str()``
        category: ErrorCategory for routing
        context: Extra structured metadata (executor id, signal kind, ...)
        cause: Underlying exception, also set as ``__cause__``

    Example:
        >>> err = PlaygroundError("boom").with_context(executor="noop")
        >>> err.to_dict()["context"]
        {'executor': 'noop'}
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PlaygroundError:
        """Add context to this error (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(PlaygroundError):
    """Startup configuration error. Must be fixed, never reported per call."""

    default_category = ErrorCategory.CONFIG


class DuplicateExecutorError(ConfigError):
    """An executor with the same id is already registered."""

    def __init__(self, executor_id: str):
        self.executor_id = executor_id
        super().__init__(
            f"executor {executor_id!r} is already registered",
            context={"executor": executor_id},
        )


class InvalidExecutorError(ConfigError):
    """Object offered for registration does not implement the executor protocol."""

    def __init__(self, obj: Any):
        super().__init__(
            f"{type(obj).__name__} does not implement the executor protocol",
            context={"type": type(obj).__name__},
        )


# =============================================================================
# REQUEST ERRORS
# =============================================================================


class RequestError(PlaygroundError):
    """Caller supplied inputs this layer cannot route."""

    default_category = ErrorCategory.REQUEST


class ExecutorNotFoundError(RequestError):
    """No executor registered under the requested id."""

    def __init__(self, executor_id: str):
        self.executor_id = executor_id
        super().__init__(f"unsupported evaluator {executor_id}", context={"executor": executor_id})


class UnsupportedSignalKindError(RequestError):
    """Signal kind outside {logs, traces, metrics}."""

    def __init__(self, signal_kind: Any):
        self.signal_kind = signal_kind
        super().__init__(
            f"unsupported OTLP data type {signal_kind}",
            context={"signal_kind": str(signal_kind)},
        )


# =============================================================================
# EXECUTION ERRORS
# =============================================================================


class ExecutionError(PlaygroundError):
    """Executor could not run the statements."""

    default_category = ErrorCategory.EXECUTION


class ConfigParseError(ExecutionError):
    """Executor configuration text is malformed or semantically invalid."""


class PayloadError(ExecutionError):
    """Payload is not valid OTLP/JSON for the requested signal kind."""


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
]
