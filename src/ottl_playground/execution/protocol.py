"""Executor Protocol: the capability set every executor exposes.

Manifesto:
The dispatcher does not care how statements are evaluated. It needs
five things from an executor: a descriptor, one entry point per signal
kind, and a way to drain whatever diagnostics the call produced.
``Executor`` is a ``typing.Protocol`` so any object with the right
methods satisfies it, no base class required.

ARCHITECTURE
────────────
::

    Executor (Protocol)
      ├── .metadata()                          ─ ExecutorMetadata
      ├── .execute_log_statements(cfg, data)    ─ str | bytes, raises on failure
      ├── .execute_trace_statements(cfg, data)  ─ str | bytes, raises on failure
      ├── .execute_metric_statements(cfg, data) ─ str | bytes, raises on failure
      └── .drain_observed_logs()                ─ [entry.console_encoded() -> str]

Related modules:
    registry.py:    ExecutorRegistry stores executors by id
    dispatcher.py:  StatementDispatcher routes calls to these methods

Tags:
    executor, protocol, interface, ottl-playground

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ExecutorMetadata:
    """Descriptor identifying an executor for discovery and UI population."""

    id: str
    name: str
    version: str
    path: str = ""
    docs_url: str = ""

    def to_dict(self) -> dict[str, str]:
        """Host-facing form. Key names match what browser hosts expect."""
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "docsURL": self.docs_url,
            "version": self.version,
        }


@runtime_checkable
class ConsoleEncodable(Protocol):
    """A drained log entry: anything that renders to one line of text."""

    def console_encoded(self) -> str: ...


@runtime_checkable
class Executor(Protocol):
    """Executor adapter: how statements get evaluated.

    Each ``execute_*`` method receives the executor configuration text and
    an OTLP/JSON payload and returns the transformed payload. Failures are
    raised as exceptions; the dispatcher turns them into result envelopes.

    Example implementation:
        >>> class EchoExecutor:
        ...     def metadata(self):
        ...         return ExecutorMetadata(id="echo", name="Echo", version="0.1.0")
        ...     def execute_log_statements(self, config, payload):
        ...         return payload
        ...     execute_trace_statements = execute_log_statements
        ...     execute_metric_statements = execute_log_statements
        ...     def drain_observed_logs(self):
        ...         return []
    """

    def metadata(self) -> ExecutorMetadata:
        """Return this executor's descriptor. Must be stable for the process lifetime."""
        ...

    def execute_log_statements(self, config: str, payload: str) -> str | bytes:
        """Run log statements against an OTLP/JSON logs payload."""
        ...

    def execute_trace_statements(self, config: str, payload: str) -> str | bytes:
        """Run trace statements against an OTLP/JSON traces payload."""
        ...

    def execute_metric_statements(self, config: str, payload: str) -> str | bytes:
        """Run metric statements against an OTLP/JSON metrics payload."""
        ...

    def drain_observed_logs(self) -> Sequence[ConsoleEncodable | Any]:
        """Destructively return buffered diagnostic entries in arrival order."""
        ...


__all__ = ["ExecutorMetadata", "ConsoleEncodable", "Executor"]
