"""
Statement dispatcher: resolve the executor, route by signal kind, normalize the outcome.

``StatementDispatcher.execute`` is the single entry point hosts use to run
statements. It never raises for a bad request or a failing executor: the
caller always gets an :class:`ExecutionResult`.

Flow:
    1. Resolve ``executor_id`` in the registry.
       Missing → ``unsupported evaluator <id>``, empty logs.
    2. Parse ``signal_kind``.
       Unknown → ``unsupported OTLP data type <kind>``, empty logs; the
       executor is neither invoked nor drained.
    3. Invoke the matching ``execute_*`` method, then drain observed logs.
       Raised → ``unable to run <kind> statements. Error: <exc>``.
       Returned → output as ``value``, no error.
       A drain that raises yields empty ``logs``; the outcome is kept.

Calls against the same executor are serialized by a per-executor lock held
across execution and drain, so one call never drains entries produced by
another call's statements. Calls against different executors run
concurrently.
"""

from __future__ import annotations

import threading
import time

from ottl_playground.core.errors import ExecutorNotFoundError, UnsupportedSignalKindError
from ottl_playground.core.logging import get_logger
from ottl_playground.execution.protocol import Executor
from ottl_playground.execution.registry import ExecutorRegistry
from ottl_playground.execution.result import (
    ExecutionResult,
    decode_output,
    error_result,
    new_result,
    render_logs,
)
from ottl_playground.execution.signals import SignalKind

log = get_logger(__name__)


class StatementDispatcher:
    """Dispatcher for statement executions against a registry.

    Example:
        >>> dispatcher = StatementDispatcher(build_default_registry())
        >>> result = dispatcher.execute("noop", "logs", "", '{"resourceLogs":[]}')
        >>> result.to_dict()["value"]
        '{"resourceLogs":[]}'
    """

    def __init__(self, registry: ExecutorRegistry) -> None:
        self._registry = registry
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def registry(self) -> ExecutorRegistry:
        return self._registry

    def execute(
        self,
        executor_id: str,
        signal_kind: SignalKind | str,
        config: str,
        payload: str,
    ) -> ExecutionResult:
        """Run statements and return the normalized result."""
        executor = self._registry.lookup(executor_id)
        if executor is None:
            error = ExecutorNotFoundError(executor_id)
            log.warning("dispatch.rejected", executor=executor_id, reason=error.message)
            return error_result(error.message)

        try:
            kind = SignalKind.parse(signal_kind)
        except UnsupportedSignalKindError as error:
            log.warning(
                "dispatch.rejected",
                executor=executor_id,
                signal_kind=str(signal_kind),
                reason=error.message,
            )
            return error_result(error.message)

        started = time.perf_counter()
        with self._lock_for(executor_id):
            try:
                output = self._invoke(executor, kind, config, payload)
            except Exception as e:
                logs = self._drain(executor, executor_id)
                log.warning(
                    "dispatch.completed",
                    executor=executor_id,
                    signal_kind=kind.value,
                    status="failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    duration_ms=_elapsed_ms(started),
                )
                return error_result(f"unable to run {kind.value} statements. Error: {e}", logs)

            logs = self._drain(executor, executor_id)

        log.info(
            "dispatch.completed",
            executor=executor_id,
            signal_kind=kind.value,
            status="ok",
            duration_ms=_elapsed_ms(started),
        )
        return new_result(decode_output(output), None, logs)

    def _invoke(self, executor: Executor, kind: SignalKind, config: str, payload: str) -> str | bytes:
        match kind:
            case SignalKind.LOGS:
                return executor.execute_log_statements(config, payload)
            case SignalKind.TRACES:
                return executor.execute_trace_statements(config, payload)
            case SignalKind.METRICS:
                return executor.execute_metric_statements(config, payload)

    def _drain(self, executor: Executor, executor_id: str) -> str:
        """Rendered observed logs; empty when the executor fails to hand them over."""
        try:
            return render_logs(executor.drain_observed_logs())
        except Exception as e:
            log.warning(
                "dispatch.drain_failed",
                executor=executor_id,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return ""

    def _lock_for(self, executor_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(executor_id)
            if lock is None:
                lock = self._locks[executor_id] = threading.Lock()
            return lock


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


__all__ = ["StatementDispatcher"]
