"""Base class shared by the executors shipped with the playground.

``BaseExecutor`` owns the executor's :class:`ObservedLogs`, implements
``metadata()`` and ``drain_observed_logs()``, and funnels the three
per-signal entry points into a single ``_execute`` hook after the
validation every shipped executor needs:

- the configuration text is YAML and must be a mapping (empty → ``{}``)
- the payload is OTLP/JSON carrying the resource key of the requested kind

Subclasses return the transformed document; the base serializes it to
compact JSON.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

import yaml

from ottl_playground.core.errors import ConfigParseError, PayloadError
from ottl_playground.execution.observed import ObservedEntry, ObservedLogs
from ottl_playground.execution.protocol import ExecutorMetadata
from ottl_playground.execution.signals import SignalKind


class BaseExecutor(ABC):
    """Common plumbing for shipped executors."""

    id: str
    name: str
    version: str = "0.1.0"
    path: str = ""
    docs_url: str = ""

    def __init__(self) -> None:
        self._observed = ObservedLogs()
        self.log = self._observed.logger()

    def metadata(self) -> ExecutorMetadata:
        return ExecutorMetadata(
            id=self.id,
            name=self.name,
            version=self.version,
            path=self.path,
            docs_url=self.docs_url,
        )

    def drain_observed_logs(self) -> list[ObservedEntry]:
        return self._observed.take_all()

    def execute_log_statements(self, config: str, payload: str) -> str:
        return self._run(SignalKind.LOGS, config, payload)

    def execute_trace_statements(self, config: str, payload: str) -> str:
        return self._run(SignalKind.TRACES, config, payload)

    def execute_metric_statements(self, config: str, payload: str) -> str:
        return self._run(SignalKind.METRICS, config, payload)

    @abstractmethod
    def _execute(self, kind: SignalKind, config: dict[str, Any], document: dict[str, Any]) -> dict[str, Any]:
        """Transform ``document`` according to ``config``."""

    def _run(self, kind: SignalKind, config: str, payload: str) -> str:
        parsed_config = parse_config(config)
        document = parse_payload(kind, payload)
        self.log.debug(
            "payload.parsed",
            signal_kind=kind.value,
            resources=len(document[kind.resource_key]),
        )
        result = self._execute(kind, parsed_config, document)
        return json.dumps(result, separators=(",", ":"))


def parse_config(config: str) -> dict[str, Any]:
    """Parse executor configuration YAML into a mapping."""
    if not config or not config.strip():
        return {}
    try:
        parsed = yaml.safe_load(config)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"invalid configuration: {e}", cause=e) from e
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigParseError(
            f"invalid configuration: expected a mapping, got {type(parsed).__name__}"
        )
    return parsed


def parse_payload(kind: SignalKind, payload: str) -> dict[str, Any]:
    """Parse an OTLP/JSON payload and check it carries ``kind``."""
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as e:
        raise PayloadError(f"invalid OTLP JSON payload: {e}", cause=e) from e

    if not isinstance(document, dict):
        raise PayloadError("invalid OTLP JSON payload: expected a JSON object")

    resources = document.get(kind.resource_key)
    if resources is None:
        raise PayloadError(f"payload has no {kind.resource_key} for {kind.value} statements")
    if not isinstance(resources, list):
        raise PayloadError(f"{kind.resource_key} must be a list")
    return document


__all__ = ["BaseExecutor", "parse_config", "parse_payload"]
