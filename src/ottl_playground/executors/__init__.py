"""
Executors shipped with the playground.

    NoopExecutor        ─ validates and echoes the payload
    AttributesExecutor  ─ insert/update/upsert/delete record attributes

``build_default_registry()`` registers them in a fixed order so the
enumeration hosts see is reproducible across processes.
"""

from ottl_playground.execution.protocol import Executor
from ottl_playground.execution.registry import ExecutorRegistry
from ottl_playground.executors.attributes import AttributesExecutor
from ottl_playground.executors.base import BaseExecutor
from ottl_playground.executors.noop import NoopExecutor


def default_executors() -> list[Executor]:
    """Fresh instances of every shipped executor, in registration order."""
    return [NoopExecutor(), AttributesExecutor()]


def build_default_registry() -> ExecutorRegistry:
    """Registry populated with the shipped executors."""
    return ExecutorRegistry(default_executors())


__all__ = [
    "BaseExecutor",
    "NoopExecutor",
    "AttributesExecutor",
    "default_executors",
    "build_default_registry",
]
