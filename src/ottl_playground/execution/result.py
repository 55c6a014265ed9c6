"""Result envelope returned to hosts for every execute call.

The envelope has three fields. ``value`` holds the executor output on
success and is empty on failure. ``logs`` holds the drained diagnostic
entries, concatenated in drain order. ``error`` is present only when the
call failed.

The presence of ``error`` is the success/failure discriminant. A
successful executor may legitimately return empty output, so hosts must
never infer failure from an empty ``value``.

Examples:
    >>> new_result('{"resourceLogs":[]}', None, "").to_dict()
    {'value': '{"resourceLogs":[]}', 'logs': ''}
    >>> error_result("unsupported evaluator x").to_dict()
    {'value': '', 'logs': '', 'error': 'unsupported evaluator x'}
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExecutionResult:
    """Uniform outcome of one execute call."""

    value: str = ""
    logs: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, str]:
        """Serializable form; the ``error`` key is omitted on success."""
        result = {"value": self.value, "logs": self.logs}
        if self.error is not None:
            result["error"] = self.error
        return result


def new_result(value: str, error: str | None, logs: str) -> ExecutionResult:
    """Build a result. An empty ``error`` string counts as no error."""
    return ExecutionResult(value=value, logs=logs, error=error or None)


def error_result(error: str, logs: str = "") -> ExecutionResult:
    """Build a failure result with empty ``value``."""
    return new_result("", error, logs)


def render_logs(entries: Iterable[Any]) -> str:
    """Concatenate drained entries' console encodings in drain order.

    Entries exposing ``console_encoded()`` are rendered through it; plain
    strings are taken as already encoded.
    """
    parts: list[str] = []
    for entry in entries:
        encode = getattr(entry, "console_encoded", None)
        parts.append(encode() if callable(encode) else str(entry))
    return "".join(parts)


def decode_output(output: str | bytes | None) -> str:
    """Executor output as text. Bytes are decoded as UTF-8."""
    if output is None:
        return ""
    if isinstance(output, (bytes, bytearray)):
        return bytes(output).decode("utf-8", errors="replace")
    return str(output)


__all__ = [
    "ExecutionResult",
    "new_result",
    "error_result",
    "render_logs",
    "decode_output",
]
