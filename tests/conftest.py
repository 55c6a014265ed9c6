"""
Shared pytest fixtures for ottl-playground tests.

This module provides:
- Stub executors with scripted outputs and failures
- Isolated registries built per test
- Example payloads for each signal kind
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ottl_playground.core import logging as playground_logging
from ottl_playground.execution.observed import ObservedLogs
from ottl_playground.execution.protocol import ExecutorMetadata
from ottl_playground.execution.registry import ExecutorRegistry
from ottl_playground.execution.signals import PAYLOAD_EXAMPLES, SignalKind


# =============================================================================
# Logging isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _detach_playground_log_handler():
    """Drop the root handler ``configure_logging`` installs during a test.

    CLI invocations point it at the runner's temporary streams.
    """
    yield
    handler = playground_logging._HANDLER
    if handler is not None:
        logging.getLogger().removeHandler(handler)
        playground_logging._HANDLER = None


# =============================================================================
# Stub executors
# =============================================================================


class StubExecutor:
    """Executor recording every call and logging one entry per call.

    ``outputs`` maps method suffix (``log``/``trace``/``metric``) to the value
    returned; ``failures`` maps the suffix to an exception to raise after
    logging.
    """

    def __init__(
        self,
        executor_id: str = "stub",
        *,
        outputs: dict[str, str | bytes] | None = None,
        failures: dict[str, Exception] | None = None,
    ):
        self._meta = ExecutorMetadata(
            id=executor_id,
            name=f"Stub {executor_id}",
            version="1.2.3",
            path=f"stubs/{executor_id}",
            docs_url=f"https://example.test/{executor_id}",
        )
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, str, str]] = []
        self.drains = 0
        self.observed = ObservedLogs()
        self.log = self.observed.logger()

    def metadata(self) -> ExecutorMetadata:
        return self._meta

    def _call(self, kind: str, config: str, payload: str):
        self.calls.append((kind, config, payload))
        self.log.info("stub.called", kind=kind, call=len(self.calls))
        if kind in self.failures:
            raise self.failures[kind]
        return self.outputs.get(kind, payload)

    def execute_log_statements(self, config: str, payload: str):
        return self._call("log", config, payload)

    def execute_trace_statements(self, config: str, payload: str):
        return self._call("trace", config, payload)

    def execute_metric_statements(self, config: str, payload: str):
        return self._call("metric", config, payload)

    def drain_observed_logs(self):
        self.drains += 1
        return self.observed.take_all()


@pytest.fixture
def stub_executor() -> StubExecutor:
    return StubExecutor("ottlvm")


@pytest.fixture
def registry(stub_executor: StubExecutor) -> ExecutorRegistry:
    return ExecutorRegistry([stub_executor])


@pytest.fixture
def logs_payload() -> str:
    return PAYLOAD_EXAMPLES[SignalKind.LOGS]


@pytest.fixture
def traces_payload() -> str:
    return PAYLOAD_EXAMPLES[SignalKind.TRACES]


@pytest.fixture
def metrics_payload() -> str:
    return PAYLOAD_EXAMPLES[SignalKind.METRICS]


@pytest.fixture
def make_stub():
    """Factory for additional stub executors: ``make_stub("id", failures=...)``."""
    return StubExecutor
