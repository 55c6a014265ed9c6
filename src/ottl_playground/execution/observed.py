"""Observed logs: in-memory capture of an executor's diagnostic entries.

Every executor owns one :class:`ObservedLogs`. It hands out structlog
loggers whose processor chain ends in the buffer itself: events are
stamped, recorded and then dropped, so they never reach the process log.
The dispatcher drains the buffer after each call and returns the entries
to the caller as console-encoded text.

ARCHITECTURE
────────────
::

    executor code ──log.info("statement.applied", ...)──►
        TimeStamper ─► add_log_level ─► ObservedLogs.__call__
                                              │ append ObservedEntry
                                              ▼
                                         DropEvent
    dispatcher ──take_all()──► [ObservedEntry, ...] ──console_encoded()──► text

Draining is destructive: ``take_all`` empties the buffer under a lock, so
two drains never return the same entry.

Tags:
    logging, structlog, capture, executor-diagnostics

Doc-Types:
    api-reference
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Any

import structlog
from structlog.types import EventDict, WrappedLogger

_RENDERER = structlog.dev.ConsoleRenderer(colors=False)


@dataclass(frozen=True)
class ObservedEntry:
    """One captured diagnostic entry."""

    timestamp: str
    level: str
    event: str
    fields: dict[str, Any] = field(default_factory=dict)

    def console_encoded(self) -> str:
        """Render as a single console-style line terminated by a newline."""
        event_dict = dict(self.fields)
        event_dict["timestamp"] = self.timestamp
        event_dict["level"] = self.level
        event_dict["event"] = self.event
        line = _RENDERER(None, self.level, event_dict)
        return line.rstrip() + "\n"


class ObservedLogs:
    """Thread-safe buffer of diagnostic entries fed by structlog loggers.

    Example:
        >>> observed = ObservedLogs()
        >>> log = observed.logger(executor="noop")
        >>> log.info("payload.parsed", resources=1)
        >>> [e.event for e in observed.take_all()]
        ['payload.parsed']
        >>> observed.take_all()
        []
    """

    def __init__(self, level: int = logging.DEBUG):
        self._level = level
        self._entries: list[ObservedEntry] = []
        self._lock = threading.Lock()

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        fields = dict(event_dict)
        timestamp = str(fields.pop("timestamp", ""))
        level = str(fields.pop("level", method_name))
        event = str(fields.pop("event", ""))
        error = _exception_from(fields.pop("exc_info", None))
        if error is not None:
            fields["error"] = repr(error)
        entry = ObservedEntry(timestamp=timestamp, level=level, event=event, fields=fields)
        with self._lock:
            self._entries.append(entry)
        raise structlog.DropEvent

    def logger(self, **initial_values: Any) -> Any:
        """Return a bound logger whose events are captured by this buffer."""
        return structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                self,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(self._level),
            context_class=dict,
            cache_logger_on_first_use=False,
            **initial_values,
        )

    def take_all(self) -> list[ObservedEntry]:
        """Return all buffered entries in arrival order and clear the buffer."""
        with self._lock:
            entries, self._entries = self._entries, []
        return entries

    def all(self) -> list[ObservedEntry]:
        """Non-destructive snapshot of the buffer."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _exception_from(exc_info: Any) -> BaseException | None:
    """Resolve an ``exc_info`` value the way structlog does.

    ``True`` means the exception currently being handled.
    """
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple):
        return exc_info[1] if len(exc_info) == 3 else None
    if exc_info:
        return sys.exc_info()[1]
    return None


__all__ = ["ObservedEntry", "ObservedLogs"]
