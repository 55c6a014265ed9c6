"""
FastAPI dependency injection: app-scoped singletons.

The registry and dispatcher are built once by ``create_app`` and stashed on
``app.state``; routers receive them through these dependencies so tests can
override them with ``app.dependency_overrides``.

Usage in routers::

    @router.get("/executors")
    def list_all(registry: Registry): ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from ottl_playground.core.settings import PlaygroundSettings
from ottl_playground.execution.dispatcher import StatementDispatcher
from ottl_playground.execution.registry import ExecutorRegistry


def get_app_settings(request: Request) -> PlaygroundSettings:
    return request.app.state.settings


def get_registry(request: Request) -> ExecutorRegistry:
    return request.app.state.registry


def get_dispatcher(request: Request) -> StatementDispatcher:
    return request.app.state.dispatcher


Settings = Annotated[PlaygroundSettings, Depends(get_app_settings)]
Registry = Annotated[ExecutorRegistry, Depends(get_registry)]
Dispatcher = Annotated[StatementDispatcher, Depends(get_dispatcher)]


__all__ = [
    "get_app_settings",
    "get_registry",
    "get_dispatcher",
    "Settings",
    "Registry",
    "Dispatcher",
]
