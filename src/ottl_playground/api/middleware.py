"""
API middleware and error handlers.

- ``RequestIDMiddleware`` gives every request an ``X-Request-ID`` and binds
  it to the structlog context for the duration of the request.
- ``problem_response`` builds RFC 7807 bodies.
- ``unhandled_exception_handler`` is the catch-all 500.

Tags:
    api, middleware, request-id, errors

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
import uuid
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from ottl_playground.api.schemas import ProblemDetail
from ottl_playground.core.logging import LogContext, get_logger

log = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every request/response cycle."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        with LogContext(request_id=request_id):
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class ASCIIJSONResponse(JSONResponse):
    """JSON response with non-ASCII escaped.

    Lone surrogates from the request body survive into results; escaping
    keeps them encodable.
    """

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(title=title, status=status, detail=detail, instance=instance)
    return JSONResponse(
        status_code=status,
        content=body.model_dump(),
        media_type="application/problem+json",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: returns 500 with ProblemDetail."""
    log.error(
        "api.unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        error_message=str(exc),
    )
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred.",
        instance=str(request.url),
    )


__all__ = ["ASCIIJSONResponse", "RequestIDMiddleware", "problem_response", "unhandled_exception_handler"]
