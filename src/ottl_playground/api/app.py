"""
FastAPI application factory.

``create_app()`` wires settings, the executor registry, the dispatcher,
middleware and routers into a single ``FastAPI`` instance.

Manifesto:
    The app factory is the single composition root. The registry is
    built here (or passed in by tests) and never reached through a
    module global.

Tags:
    api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ottl_playground import __version__
from ottl_playground.api.middleware import RequestIDMiddleware, unhandled_exception_handler
from ottl_playground.core.logging import get_logger
from ottl_playground.core.settings import PlaygroundSettings, get_settings
from ottl_playground.execution.dispatcher import StatementDispatcher
from ottl_playground.execution.registry import ExecutorRegistry


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup / shutdown hooks."""
    log = get_logger("ottl_playground.api")
    log.info(
        "api.starting",
        version=app.version,
        executors=app.state.registry.ids(),
    )
    yield
    log.info("api.stopping")


def create_app(
    settings: PlaygroundSettings | None = None,
    registry: ExecutorRegistry | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : PlaygroundSettings | None
        Override settings (useful for testing). When ``None`` the cached
        singleton from :func:`get_settings` is used.
    registry : ExecutorRegistry | None
        Executors to expose. When ``None`` the shipped executors are used.
    """
    settings = settings or get_settings()
    if registry is None:
        from ottl_playground.executors import build_default_registry

        registry = build_default_registry()

    app = FastAPI(
        title=settings.api_title,
        version=__version__,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.registry = registry
    app.state.dispatcher = StatementDispatcher(registry)

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from ottl_playground.api.routers import executors

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok", "executors": len(app.state.registry)}

    app.include_router(executors.router, prefix=settings.api_prefix, tags=["executors"])

    return app


__all__ = ["create_app"]
