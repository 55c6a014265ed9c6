"""
API schemas: request/response models and RFC 7807 errors.

The execute envelope mirrors :class:`ExecutionResult`: ``error`` is absent
from the JSON body on success, so browser hosts can test for the key the
same way they test the in-process result.

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExecutorDescriptor(BaseModel):
    """One registered executor."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Stable executor identifier")
    name: str = Field(description="Human-readable name")
    path: str = Field(default="", description="Grouping or route hint")
    docs_url: str = Field(default="", alias="docsURL", description="Documentation link")
    version: str = Field(description="Executor version")


class ExecuteRequest(BaseModel):
    """Body of ``POST /execute``.

    ``signal_kind`` is a plain string so an unknown kind reaches the
    dispatcher and comes back as a normalized error instead of a 422.
    """

    executor: str = Field(description="Executor id, as listed by GET /executors")
    signal_kind: str = Field(description="logs, traces or metrics")
    config: str = Field(default="", description="Executor configuration text")
    payload: str = Field(description="OTLP/JSON payload")


class ExecuteResponse(BaseModel):
    """Normalized execution result."""

    value: str = Field(default="", description="Executor output on success, empty on failure")
    logs: str = Field(default="", description="Drained diagnostic log lines")
    error: str | None = Field(default=None, description="Present only when the call failed")


class PayloadExample(BaseModel):
    signal_kind: str
    payload: str


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Used for every non-2xx response. Execution failures are NOT problems:
    they are 200 responses carrying ``error``.
    """

    type: str = Field(default="about:blank", description="URI reference identifying the problem type")
    title: str = Field(description="Short human-readable summary")
    status: int = Field(description="HTTP status code")
    detail: str = Field(default="", description="Human-readable explanation")
    instance: str = Field(default="", description="URI of the request that failed")


__all__ = [
    "ExecutorDescriptor",
    "ExecuteRequest",
    "ExecuteResponse",
    "PayloadExample",
    "ProblemDetail",
]
