"""
Execution core: registry, dispatch and result normalization.

Usage:
    from ottl_playground.execution import ExecutorRegistry, StatementDispatcher

    registry = ExecutorRegistry([MyExecutor()])
    dispatcher = StatementDispatcher(registry)
    result = dispatcher.execute("my-executor", "logs", config, payload)
    if result.error is not None:
        ...
"""

from ottl_playground.execution.dispatcher import StatementDispatcher
from ottl_playground.execution.metadata import list_executors
from ottl_playground.execution.observed import ObservedEntry, ObservedLogs
from ottl_playground.execution.protocol import Executor, ExecutorMetadata
from ottl_playground.execution.registry import ExecutorRegistry
from ottl_playground.execution.result import ExecutionResult, error_result, new_result
from ottl_playground.execution.signals import PAYLOAD_EXAMPLES, SignalKind, detect_signal_kind

__all__ = [
    # Protocol
    "Executor",
    "ExecutorMetadata",
    # Registry
    "ExecutorRegistry",
    "list_executors",
    # Dispatch
    "StatementDispatcher",
    "ExecutionResult",
    "new_result",
    "error_result",
    # Diagnostics
    "ObservedEntry",
    "ObservedLogs",
    # Signals
    "SignalKind",
    "detect_signal_kind",
    "PAYLOAD_EXAMPLES",
]
