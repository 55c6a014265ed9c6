"""Metadata listing for host-side discovery.

Hosts call :func:`list_executors` once to populate an executor picker.
It is a pure read of the registry and may be interleaved freely with
execute calls.
"""

from __future__ import annotations

from ottl_playground.execution.registry import ExecutorRegistry


def list_executors(registry: ExecutorRegistry) -> list[dict[str, str]]:
    """Descriptors of every registered executor, in registration order.

    Each item has the keys ``id``, ``name``, ``path``, ``docsURL`` and
    ``version``.
    """
    return [executor.metadata().to_dict() for executor in registry.list()]


__all__ = ["list_executors"]
