"""Executor Registry: ordered, id-indexed, write-once.

Manifesto:
Hosts enumerate executors to populate a picker and then address one by
id. The registry keeps both views: a list in registration order for
enumeration and a dict for O(1) lookup. It is populated once at startup
and read concurrently afterwards, so there is no removal or update.

ARCHITECTURE
────────────
::

    ExecutorRegistry
      ├── .register(executor)  ─ append + index; duplicate id raises
      ├── .lookup(id)          ─ Executor | None
      ├── .get(id)             ─ Executor, raises ExecutorNotFoundError
      ├── .list()              ─ executors in registration order
      └── .ids()               ─ ids in registration order

BEST PRACTICES
──────────────
- Build one registry at process start (``build_default_registry()``) and
  pass it into ``StatementDispatcher``.
- Tests construct their own ``ExecutorRegistry`` with stub executors.

Tags:
    registry, executor, lookup, ottl-playground

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ottl_playground.core.errors import (
    DuplicateExecutorError,
    ExecutorNotFoundError,
    InvalidExecutorError,
)
from ottl_playground.core.logging import get_logger
from ottl_playground.execution.protocol import Executor

logger = get_logger(__name__)


class ExecutorRegistry:
    """Injectable executor registry.

    Example:
        >>> registry = ExecutorRegistry()
        >>> registry.register(NoopExecutor())
        >>> registry.lookup("noop").metadata().name
        'No-op processor'
        >>> registry.lookup("missing") is None
        True
    """

    def __init__(self, executors: Iterable[Executor] = ()):
        self._executors: list[Executor] = []
        self._lookup: dict[str, Executor] = {}
        for executor in executors:
            self.register(executor)

    def register(self, executor: Executor) -> None:
        """Register an executor under its ``metadata().id``.

        Raises:
            InvalidExecutorError: object does not implement the protocol
            DuplicateExecutorError: id already registered; registry unchanged
        """
        if not isinstance(executor, Executor):
            raise InvalidExecutorError(executor)

        meta = executor.metadata()
        if meta.id in self._lookup:
            raise DuplicateExecutorError(meta.id)

        self._executors.append(executor)
        self._lookup[meta.id] = executor
        logger.debug(
            "executor_registered",
            executor=meta.id,
            version=meta.version,
            position=len(self._executors) - 1,
        )

    def lookup(self, executor_id: str) -> Executor | None:
        """Resolve an executor by id, or None if absent."""
        return self._lookup.get(executor_id)

    def get(self, executor_id: str) -> Executor:
        """Resolve an executor by id.

        Raises:
            ExecutorNotFoundError: If no executor has that id
        """
        executor = self._lookup.get(executor_id)
        if executor is None:
            raise ExecutorNotFoundError(executor_id)
        return executor

    def list(self) -> list[Executor]:
        """Executors in registration order (a copy)."""
        return list(self._executors)

    def ids(self) -> list[str]:
        """Executor ids in registration order."""
        return [executor.metadata().id for executor in self._executors]

    def __contains__(self, executor_id: object) -> bool:
        return executor_id in self._lookup

    def __len__(self) -> int:
        return len(self._executors)

    def __iter__(self) -> Iterator[Executor]:
        return iter(list(self._executors))


__all__ = ["ExecutorRegistry"]
