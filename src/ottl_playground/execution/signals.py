"""Telemetry signal kinds and OTLP/JSON payload helpers.

A statement set always targets exactly one signal kind. The kind is a
closed enumeration; hosts that pass free-form strings go through
:meth:`SignalKind.parse`, which rejects anything outside the set.

``detect_signal_kind`` inspects an OTLP/JSON document and reports which
kind it carries, so a host can pick the right execution method without
asking the user.
"""

from __future__ import annotations

import json
from enum import Enum

from ottl_playground.core.errors import PayloadError, UnsupportedSignalKindError


class SignalKind(str, Enum):
    """Category of telemetry data a statement set targets."""

    LOGS = "logs"
    TRACES = "traces"
    METRICS = "metrics"

    @classmethod
    def parse(cls, value: SignalKind | str) -> SignalKind:
        """Resolve a host-supplied value, raising on anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedSignalKindError(value) from None

    @property
    def resource_key(self) -> str:
        """Top-level OTLP/JSON key holding this kind's resources."""
        return _RESOURCE_KEYS[self]

    def __str__(self) -> str:
        return self.value


_RESOURCE_KEYS: dict[SignalKind, str] = {
    SignalKind.LOGS: "resourceLogs",
    SignalKind.TRACES: "resourceSpans",
    SignalKind.METRICS: "resourceMetrics",
}


def detect_signal_kind(payload: str) -> SignalKind:
    """Return the signal kind carried by an OTLP/JSON payload.

    Raises:
        PayloadError: payload is not a JSON object or carries no known
            resource key
    """
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as e:
        raise PayloadError(f"invalid OTLP JSON payload: {e}", cause=e) from e

    if not isinstance(document, dict):
        raise PayloadError("invalid OTLP JSON payload: expected a JSON object")

    for kind, key in _RESOURCE_KEYS.items():
        if key in document:
            return kind

    raise PayloadError(
        "invalid OTLP JSON payload: expected one of "
        + ", ".join(_RESOURCE_KEYS.values())
    )


PAYLOAD_EXAMPLES: dict[SignalKind, str] = {
    SignalKind.LOGS: json.dumps(
        {
            "resourceLogs": [
                {
                    "resource": {
                        "attributes": [
                            {"key": "service.name", "value": {"stringValue": "my.service"}}
                        ]
                    },
                    "scopeLogs": [
                        {
                            "scope": {"name": "my.library", "version": "1.0.0"},
                            "logRecords": [
                                {
                                    "timeUnixNano": "1544712660300000000",
                                    "observedTimeUnixNano": "1544712660300000000",
                                    "severityNumber": 10,
                                    "severityText": "Information",
                                    "traceId": "5b8efff798038103d269b633813fc60c",
                                    "spanId": "eee19b7ec3c1b174",
                                    "body": {"stringValue": "Example log record"},
                                    "attributes": [
                                        {"key": "string.attribute", "value": {"stringValue": "some string"}},
                                        {"key": "boolean.attribute", "value": {"boolValue": True}},
                                        {"key": "int.attribute", "value": {"intValue": "10"}},
                                        {"key": "double.attribute", "value": {"doubleValue": 637.704}},
                                    ],
                                }
                            ],
                        }
                    ],
                }
            ]
        }
    ),
    SignalKind.TRACES: json.dumps(
        {
            "resourceSpans": [
                {
                    "resource": {
                        "attributes": [
                            {"key": "service.name", "value": {"stringValue": "my.service"}}
                        ]
                    },
                    "scopeSpans": [
                        {
                            "scope": {"name": "my.library", "version": "1.0.0"},
                            "spans": [
                                {
                                    "traceId": "5b8efff798038103d269b633813fc60c",
                                    "spanId": "eee19b7ec3c1b174",
                                    "parentSpanId": "eee19b7ec3c1b173",
                                    "name": "I'm a server span",
                                    "startTimeUnixNano": "1544712660000000000",
                                    "endTimeUnixNano": "1544712661000000000",
                                    "kind": 2,
                                    "attributes": [
                                        {"key": "my.span.attr", "value": {"stringValue": "some value"}}
                                    ],
                                    "status": {},
                                }
                            ],
                        }
                    ],
                }
            ]
        }
    ),
    SignalKind.METRICS: json.dumps(
        {
            "resourceMetrics": [
                {
                    "resource": {
                        "attributes": [
                            {"key": "service.name", "value": {"stringValue": "my.service"}}
                        ]
                    },
                    "scopeMetrics": [
                        {
                            "scope": {"name": "my.library", "version": "1.0.0"},
                            "metrics": [
                                {
                                    "name": "my.counter",
                                    "unit": "1",
                                    "description": "I am a Counter",
                                    "sum": {
                                        "aggregationTemporality": 1,
                                        "isMonotonic": True,
                                        "dataPoints": [
                                            {
                                                "asDouble": 5,
                                                "startTimeUnixNano": "1544712660300000000",
                                                "timeUnixNano": "1544712660300000000",
                                                "attributes": [
                                                    {"key": "my.counter.attr", "value": {"stringValue": "some value"}}
                                                ],
                                            }
                                        ],
                                    },
                                },
                                {
                                    "name": "my.gauge",
                                    "unit": "1",
                                    "description": "I am a Gauge",
                                    "gauge": {
                                        "dataPoints": [
                                            {
                                                "asDouble": 10,
                                                "timeUnixNano": "1544712660300000000",
                                                "attributes": [
                                                    {"key": "my.gauge.attr", "value": {"stringValue": "some value"}}
                                                ],
                                            }
                                        ]
                                    },
                                },
                            ],
                        }
                    ],
                }
            ]
        }
    ),
}


__all__ = ["SignalKind", "detect_signal_kind", "PAYLOAD_EXAMPLES"]
