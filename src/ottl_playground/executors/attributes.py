"""
Attributes executor: insert, update, upsert or delete record attributes.

Configuration (YAML)::

    actions:
      - key: deployment.environment
        value: production
        action: insert
      - key: http.user_agent
        action: delete
      - key: peer.service
        from_attribute: server.address
        action: upsert

Actions apply, in order, to every log record, span, or metric data point
in the payload:

    insert  ─ set only when the key is absent
    update  ─ set only when the key is present
    upsert  ─ always set
    delete  ─ remove the key if present

``value`` is converted to an OTLP ``AnyValue``. ``from_attribute`` copies
the value of another attribute on the same item; items lacking the source
attribute are skipped.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from ottl_playground.core.errors import ConfigParseError, PayloadError
from ottl_playground.execution.signals import SignalKind
from ottl_playground.executors.base import BaseExecutor

ACTIONS = ("insert", "update", "upsert", "delete")

# Metric data types whose ``dataPoints`` carry attributes.
_METRIC_DATA_KEYS = ("sum", "gauge", "histogram", "exponentialHistogram", "summary")


@dataclass(frozen=True)
class AttributeAction:
    key: str
    action: str
    value: dict[str, Any] | None = None
    from_attribute: str | None = None


class AttributesExecutor(BaseExecutor):
    """Applies attribute actions to every record of the payload."""

    id = "attributes"
    name = "Attributes processor"
    path = "processors/attributes"
    docs_url = (
        "https://github.com/open-telemetry/opentelemetry-collector-contrib/"
        "tree/main/processor/attributesprocessor"
    )

    def _execute(self, kind: SignalKind, config: dict[str, Any], document: dict[str, Any]) -> dict[str, Any]:
        actions = parse_actions(config)
        items = list(iter_attribute_holders(kind, document))

        modified_items: set[int] = set()
        for action in actions:
            changed = 0
            for index, item in enumerate(items):
                if apply_action(item, action):
                    changed += 1
                    modified_items.add(index)
            self.log.debug(
                "action.applied",
                key=action.key,
                action=action.action,
                items=changed,
            )

        self.log.info(
            "actions.completed",
            signal_kind=kind.value,
            actions=len(actions),
            items=len(items),
            modified=len(modified_items),
        )
        return document


def parse_actions(config: dict[str, Any]) -> list[AttributeAction]:
    """Validate the ``actions`` list of an attributes configuration."""
    raw_actions = config.get("actions")
    if raw_actions is None:
        raise ConfigParseError("missing required field 'actions'")
    if not isinstance(raw_actions, list):
        raise ConfigParseError("'actions' must be a list")

    actions: list[AttributeAction] = []
    for position, raw in enumerate(raw_actions):
        if not isinstance(raw, dict):
            raise ConfigParseError(f"actions[{position}] must be a mapping")

        key = raw.get("key")
        if not isinstance(key, str) or not key:
            raise ConfigParseError(f"actions[{position}]: missing required field 'key'")

        action = raw.get("action")
        if action not in ACTIONS:
            raise ConfigParseError(
                f"actions[{position}]: unsupported action {action!r}, "
                f"expected one of {', '.join(ACTIONS)}"
            )

        if action == "delete":
            actions.append(AttributeAction(key=key, action=action))
            continue

        from_attribute = raw.get("from_attribute")
        if "value" in raw:
            actions.append(AttributeAction(key=key, action=action, value=to_any_value(raw["value"])))
        elif isinstance(from_attribute, str) and from_attribute:
            actions.append(AttributeAction(key=key, action=action, from_attribute=from_attribute))
        else:
            raise ConfigParseError(
                f"actions[{position}]: {action} requires 'value' or 'from_attribute'"
            )
    return actions


def to_any_value(value: Any) -> dict[str, Any]:
    """Convert a YAML scalar or collection into an OTLP/JSON AnyValue."""
    if isinstance(value, bool):
        return {"boolValue": value}
    if isinstance(value, int):
        # OTLP/JSON encodes 64-bit integers as strings
        return {"intValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, list):
        return {"arrayValue": {"values": [to_any_value(v) for v in value]}}
    if isinstance(value, dict):
        return {
            "kvlistValue": {
                "values": [{"key": str(k), "value": to_any_value(v)} for k, v in value.items()]
            }
        }
    raise ConfigParseError(f"unsupported attribute value {value!r}")


def iter_attribute_holders(kind: SignalKind, document: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield every log record, span, or metric data point in ``document``.

    Raises:
        PayloadError: a container is not a list, or a member is not a JSON
            object; the message carries the path of the offending item
    """
    resource_key = kind.resource_key
    for r, resource in _members(document, resource_key, ""):
        where = f"{resource_key}[{r}]"
        match kind:
            case SignalKind.LOGS:
                for s, scope in _members(resource, "scopeLogs", where):
                    yield from _holders(scope, "logRecords", f"{where}.scopeLogs[{s}]")
            case SignalKind.TRACES:
                for s, scope in _members(resource, "scopeSpans", where):
                    yield from _holders(scope, "spans", f"{where}.scopeSpans[{s}]")
            case SignalKind.METRICS:
                for s, scope in _members(resource, "scopeMetrics", where):
                    scope_where = f"{where}.scopeMetrics[{s}]"
                    for m, metric in _members(scope, "metrics", scope_where):
                        metric_where = f"{scope_where}.metrics[{m}]"
                        for data_key in _METRIC_DATA_KEYS:
                            data = metric.get(data_key)
                            if data is None:
                                continue
                            if not isinstance(data, dict):
                                raise PayloadError(f"{metric_where}.{data_key} must be a JSON object")
                            yield from _holders(data, "dataPoints", f"{metric_where}.{data_key}")


def _members(container: dict[str, Any], key: str, where: str) -> list[tuple[int, dict[str, Any]]]:
    """Indexed members of the list under ``key``, each checked to be an object."""
    path = f"{where}.{key}" if where else key
    members = container.get(key)
    if members is None:
        return []
    if not isinstance(members, list):
        raise PayloadError(f"{path} must be a list")
    for index, member in enumerate(members):
        if not isinstance(member, dict):
            raise PayloadError(f"{path}[{index}] must be a JSON object")
    return list(enumerate(members))


def _holders(container: dict[str, Any], key: str, where: str) -> Iterator[dict[str, Any]]:
    for index, item in _members(container, key, where):
        _members(item, "attributes", f"{where}.{key}[{index}]")
        yield item


def apply_action(item: dict[str, Any], action: AttributeAction) -> bool:
    """Apply one action to an item's ``attributes``. Returns True if changed."""
    attributes: list[dict[str, Any]] = item.get("attributes") or []
    index = _find(attributes, action.key)

    if action.action == "delete":
        if index is None:
            return False
        del attributes[index]
        return True

    if action.action == "insert" and index is not None:
        return False
    if action.action == "update" and index is None:
        return False

    value = action.value
    if action.from_attribute is not None:
        source = _find(attributes, action.from_attribute)
        if source is None:
            return False
        value = copy.deepcopy(attributes[source].get("value"))

    if index is None:
        attributes.append({"key": action.key, "value": value})
        item["attributes"] = attributes
    else:
        attributes[index] = {"key": action.key, "value": value}
    return True


def _find(attributes: list[dict[str, Any]], key: str) -> int | None:
    for index, attribute in enumerate(attributes):
        if attribute.get("key") == key:
            return index
    return None


__all__ = [
    "AttributesExecutor",
    "AttributeAction",
    "parse_actions",
    "to_any_value",
    "iter_attribute_holders",
    "apply_action",
]
