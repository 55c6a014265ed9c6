"""
OTTL Playground: run telemetry statements against interchangeable executors.

A host (browser UI, terminal, embedding process) picks an executor by id,
hands it a configuration and an OTLP/JSON payload for one signal kind, and
gets back a uniform ``{value, logs, error?}`` result.

Example:
    ```python
    from ottl_playground import StatementDispatcher, build_default_registry

    dispatcher = StatementDispatcher(build_default_registry())
    result = dispatcher.execute("attributes", "logs", config, payload)
    if result.error is not None:
        print(result.error)
    print(result.logs)
    ```
"""

__version__ = "0.1.0"

from ottl_playground.execution import (  # noqa: E402
    PAYLOAD_EXAMPLES,
    ExecutionResult,
    Executor,
    ExecutorMetadata,
    ExecutorRegistry,
    ObservedLogs,
    SignalKind,
    StatementDispatcher,
    detect_signal_kind,
    list_executors,
)
from ottl_playground.executors import build_default_registry  # noqa: E402

__all__ = [
    "Executor",
    "ExecutorMetadata",
    "ExecutorRegistry",
    "StatementDispatcher",
    "ExecutionResult",
    "ObservedLogs",
    "SignalKind",
    "detect_signal_kind",
    "PAYLOAD_EXAMPLES",
    "list_executors",
    "build_default_registry",
    "__version__",
]
