"""
Executors router: discovery and statement execution.

Endpoints:
    GET  /executors                 List registered executors
    POST /execute                   Run statements, return {value, logs, error?}
    GET  /examples/{signal_kind}    Example OTLP/JSON payload for a kind

Execution failures (unknown executor, unknown signal kind, executor error)
are 200 responses carrying ``error``; only transport-level problems
(oversized body, unknown example kind) are RFC 7807 responses.

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from ottl_playground.api.deps import Dispatcher, Registry, Settings
from ottl_playground.api.middleware import ASCIIJSONResponse, problem_response
from ottl_playground.api.schemas import (
    ExecuteRequest,
    ExecuteResponse,
    ExecutorDescriptor,
    PayloadExample,
)
from ottl_playground.core.errors import UnsupportedSignalKindError
from ottl_playground.core.logging import get_logger
from ottl_playground.execution.metadata import list_executors
from ottl_playground.execution.signals import PAYLOAD_EXAMPLES, SignalKind

router = APIRouter()

log = get_logger(__name__)


@router.get(
    "/executors",
    response_model=list[ExecutorDescriptor],
    response_model_by_alias=True,
)
def get_executors(registry: Registry) -> list[dict[str, str]]:
    """List registered executors in registration order."""
    return list_executors(registry)


@router.post(
    "/execute",
    response_model=ExecuteResponse,
    response_model_exclude_none=True,
    responses={413: {"description": "Config and payload exceed max_payload_bytes"}},
)
def execute(body: ExecuteRequest, request: Request, dispatcher: Dispatcher, settings: Settings):
    """Run statements against one executor."""
    size = _encoded_size(body.config) + _encoded_size(body.payload)
    if size > settings.max_payload_bytes:
        log.warning("execute.too_large", size=size, limit=settings.max_payload_bytes)
        return problem_response(
            status=413,
            title="Payload Too Large",
            detail=f"config and payload are {size} bytes, limit is {settings.max_payload_bytes}",
            instance=str(request.url),
        )

    result = dispatcher.execute(body.executor, body.signal_kind, body.config, body.payload)
    return ASCIIJSONResponse(content=result.to_dict())


def _encoded_size(text: str) -> int:
    # JSON escapes may decode to lone surrogates
    return len(text.encode("utf-8", "surrogatepass"))


@router.get("/examples/{signal_kind}", response_model=PayloadExample)
def get_example(signal_kind: str, request: Request):
    """Example OTLP/JSON payload for ``signal_kind``."""
    try:
        kind = SignalKind.parse(signal_kind)
    except UnsupportedSignalKindError as e:
        return problem_response(
            status=404,
            title="Not Found",
            detail=e.message,
            instance=str(request.url),
        )
    return PayloadExample(signal_kind=kind.value, payload=PAYLOAD_EXAMPLES[kind])
