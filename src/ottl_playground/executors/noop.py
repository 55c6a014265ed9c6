"""No-op executor: validates and echoes the payload."""

from __future__ import annotations

from typing import Any

from ottl_playground.execution.signals import SignalKind
from ottl_playground.executors.base import BaseExecutor


class NoopExecutor(BaseExecutor):
    """Returns the payload unchanged. Useful to check a payload parses."""

    id = "noop"
    name = "No-op processor"
    path = "processors/noop"

    def _execute(self, kind: SignalKind, config: dict[str, Any], document: dict[str, Any]) -> dict[str, Any]:
        if config:
            self.log.warning("config.ignored", keys=sorted(str(k) for k in config))
        self.log.info(
            "statements.skipped",
            signal_kind=kind.value,
            resources=len(document[kind.resource_key]),
        )
        return document
