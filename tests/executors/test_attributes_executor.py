"""Tests for the shipped ``attributes`` executor."""

from __future__ import annotations

import json

import pytest

from ottl_playground.core.errors import ConfigParseError, PayloadError
from ottl_playground.execution.dispatcher import StatementDispatcher
from ottl_playground.execution.signals import SignalKind
from ottl_playground.executors import build_default_registry
from ottl_playground.executors.attributes import (
    AttributeAction,
    AttributesExecutor,
    apply_action,
    iter_attribute_holders,
    parse_actions,
    to_any_value,
)


def _attrs(item: dict) -> dict:
    return {a["key"]: a["value"] for a in item.get("attributes", [])}


@pytest.fixture()
def executor():
    return AttributesExecutor()


# ---------------------------------------------------------------------------
# Config parsing
# ---------------------------------------------------------------------------


class TestParseActions:
    def test_missing_actions(self):
        with pytest.raises(ConfigParseError, match="actions"):
            parse_actions({})

    def test_actions_must_be_list(self):
        with pytest.raises(ConfigParseError, match="must be a list"):
            parse_actions({"actions": {"key": "a"}})

    def test_unknown_action(self):
        with pytest.raises(ConfigParseError, match="unsupported action 'rename'"):
            parse_actions({"actions": [{"key": "a", "action": "rename", "value": 1}]})

    def test_missing_key(self):
        with pytest.raises(ConfigParseError, match="'key'"):
            parse_actions({"actions": [{"action": "delete"}]})

    def test_set_requires_value_or_source(self):
        with pytest.raises(ConfigParseError, match="requires 'value' or 'from_attribute'"):
            parse_actions({"actions": [{"key": "a", "action": "upsert"}]})

    def test_parsed_actions(self):
        actions = parse_actions(
            {
                "actions": [
                    {"key": "a", "action": "insert", "value": "x"},
                    {"key": "b", "action": "upsert", "from_attribute": "a"},
                    {"key": "c", "action": "delete"},
                ]
            }
        )
        assert actions == [
            AttributeAction(key="a", action="insert", value={"stringValue": "x"}),
            AttributeAction(key="b", action="upsert", from_attribute="a"),
            AttributeAction(key="c", action="delete"),
        ]


class TestToAnyValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("s", {"stringValue": "s"}),
            (True, {"boolValue": True}),
            (42, {"intValue": "42"}),
            (1.5, {"doubleValue": 1.5}),
            ([1, "a"], {"arrayValue": {"values": [{"intValue": "1"}, {"stringValue": "a"}]}}),
            ({"k": False}, {"kvlistValue": {"values": [{"key": "k", "value": {"boolValue": False}}]}}),
        ],
    )
    def test_conversions(self, value, expected):
        assert to_any_value(value) == expected

    def test_null_rejected(self):
        with pytest.raises(ConfigParseError):
            to_any_value(None)


# ---------------------------------------------------------------------------
# Action semantics
# ---------------------------------------------------------------------------


class TestApplyAction:
    def _item(self):
        return {"attributes": [{"key": "present", "value": {"stringValue": "old"}}]}

    def test_insert_only_when_absent(self):
        item = self._item()
        assert not apply_action(item, AttributeAction("present", "insert", {"stringValue": "new"}))
        assert apply_action(item, AttributeAction("added", "insert", {"stringValue": "new"}))
        assert _attrs(item) == {"present": {"stringValue": "old"}, "added": {"stringValue": "new"}}

    def test_update_only_when_present(self):
        item = self._item()
        assert not apply_action(item, AttributeAction("absent", "update", {"stringValue": "x"}))
        assert apply_action(item, AttributeAction("present", "update", {"stringValue": "x"}))
        assert _attrs(item) == {"present": {"stringValue": "x"}}

    def test_upsert_always(self):
        item = self._item()
        assert apply_action(item, AttributeAction("present", "upsert", {"intValue": "1"}))
        assert apply_action(item, AttributeAction("other", "upsert", {"intValue": "2"}))
        assert _attrs(item) == {"present": {"intValue": "1"}, "other": {"intValue": "2"}}

    def test_delete(self):
        item = self._item()
        assert apply_action(item, AttributeAction("present", "delete"))
        assert not apply_action(item, AttributeAction("present", "delete"))
        assert _attrs(item) == {}

    def test_delete_on_item_without_attributes_adds_nothing(self):
        item = {"name": "span"}
        assert not apply_action(item, AttributeAction("x", "delete"))
        assert "attributes" not in item

    def test_from_attribute(self):
        item = self._item()
        assert apply_action(item, AttributeAction("copy", "upsert", from_attribute="present"))
        assert _attrs(item)["copy"] == {"stringValue": "old"}

    def test_from_missing_attribute_skipped(self):
        item = self._item()
        assert not apply_action(item, AttributeAction("copy", "upsert", from_attribute="nope"))
        assert "copy" not in _attrs(item)


class TestIterAttributeHolders:
    def test_logs(self, logs_payload):
        items = list(iter_attribute_holders(SignalKind.LOGS, json.loads(logs_payload)))
        assert len(items) == 1
        assert items[0]["body"] == {"stringValue": "Example log record"}

    def test_traces(self, traces_payload):
        items = list(iter_attribute_holders(SignalKind.TRACES, json.loads(traces_payload)))
        assert [i["name"] for i in items] == ["I'm a server span"]

    def test_metrics_cover_every_data_point(self, metrics_payload):
        items = list(iter_attribute_holders(SignalKind.METRICS, json.loads(metrics_payload)))
        assert [i["asDouble"] for i in items] == [5, 10]


class TestMalformedPayloadShapes:
    @pytest.mark.parametrize(
        "kind,document,path",
        [
            (
                SignalKind.LOGS,
                {"resourceLogs": [{"scopeLogs": [{"logRecords": ["x"]}]}]},
                "resourceLogs[0].scopeLogs[0].logRecords[0] must be a JSON object",
            ),
            (SignalKind.TRACES, {"resourceSpans": [7]}, "resourceSpans[0] must be a JSON object"),
            (
                SignalKind.TRACES,
                {"resourceSpans": [{"scopeSpans": {"spans": []}}]},
                "resourceSpans[0].scopeSpans must be a list",
            ),
            (
                SignalKind.METRICS,
                {"resourceMetrics": [{"scopeMetrics": [{"metrics": [{"gauge": "g"}]}]}]},
                "resourceMetrics[0].scopeMetrics[0].metrics[0].gauge must be a JSON object",
            ),
            (
                SignalKind.LOGS,
                {"resourceLogs": [{"scopeLogs": [{"logRecords": [{"attributes": ["k"]}]}]}]},
                "resourceLogs[0].scopeLogs[0].logRecords[0].attributes[0] must be a JSON object",
            ),
        ],
    )
    def test_bad_shape_names_the_item(self, kind, document, path):
        with pytest.raises(PayloadError) as exc_info:
            list(iter_attribute_holders(kind, document))
        assert str(exc_info.value) == path

    def test_dispatcher_reports_the_path(self):
        payload = json.dumps({"resourceLogs": [{"scopeLogs": [{"logRecords": ["x"]}]}]})
        dispatcher = StatementDispatcher(build_default_registry())

        result = dispatcher.execute("attributes", "logs", CONFIG, payload)

        assert result.error == (
            "unable to run logs statements. Error: "
            "resourceLogs[0].scopeLogs[0].logRecords[0] must be a JSON object"
        )

    def test_nothing_modified_before_a_bad_item(self):
        good = {"attributes": []}
        document = {"resourceLogs": [{"scopeLogs": [{"logRecords": [good, "x"]}]}]}
        config = {"actions": [{"key": "a", "value": 1, "action": "upsert"}]}
        with pytest.raises(PayloadError):
            AttributesExecutor()._execute(SignalKind.LOGS, config, document)
        assert good == {"attributes": []}


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


CONFIG = """
actions:
  - key: env
    value: prod
    action: insert
  - key: my.span.attr
    action: delete
"""


class TestAttributesExecutor:
    def test_traces(self, executor, traces_payload):
        output = json.loads(executor.execute_trace_statements(CONFIG, traces_payload))
        span = output["resourceSpans"][0]["scopeSpans"][0]["spans"][0]
        assert _attrs(span) == {"env": {"stringValue": "prod"}}

    def test_logs_summary_entry(self, executor, logs_payload):
        executor.execute_log_statements(CONFIG, logs_payload)
        entries = executor.drain_observed_logs()
        summary = entries[-1]
        assert summary.event == "actions.completed"
        assert summary.fields["actions"] == 2
        assert summary.fields["modified"] == 1
        assert [e.event for e in entries].count("action.applied") == 2

    def test_bad_config_raises(self, executor, logs_payload):
        with pytest.raises(ConfigParseError):
            executor.execute_log_statements("actions: 3", logs_payload)

    def test_through_dispatcher(self, metrics_payload):
        dispatcher = StatementDispatcher(build_default_registry())
        result = dispatcher.execute("attributes", "metrics", CONFIG, metrics_payload)

        assert result.error is None
        points = list(iter_attribute_holders(SignalKind.METRICS, json.loads(result.value)))
        assert all(_attrs(p)["env"] == {"stringValue": "prod"} for p in points)
        assert "actions.completed" in result.logs

    def test_config_error_through_dispatcher(self, logs_payload):
        dispatcher = StatementDispatcher(build_default_registry())
        result = dispatcher.execute("attributes", "logs", "", logs_payload)

        assert result.error == (
            "unable to run logs statements. Error: missing required field 'actions'"
        )
        assert "payload.parsed" in result.logs
        assert result.value == ""
