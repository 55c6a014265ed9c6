"""Tests for ``ottl_playground.execution.registry``."""

from __future__ import annotations

import pytest

from ottl_playground.core.errors import (
    DuplicateExecutorError,
    ExecutorNotFoundError,
    InvalidExecutorError,
)
from ottl_playground.execution.metadata import list_executors
from ottl_playground.execution.registry import ExecutorRegistry
from ottl_playground.executors import build_default_registry


class TestRegister:
    def test_empty_registry(self):
        registry = ExecutorRegistry()
        assert len(registry) == 0
        assert registry.list() == []
        assert registry.lookup("anything") is None

    def test_register_indexes_by_metadata_id(self, make_stub):
        registry = ExecutorRegistry()
        a, b = make_stub("a"), make_stub("b")
        registry.register(a)
        registry.register(b)
        assert registry.lookup("a") is a
        assert registry.lookup("b") is b
        assert "a" in registry
        assert "c" not in registry

    def test_list_preserves_registration_order(self, make_stub):
        ids = ["zeta", "alpha", "mid", "beta"]
        registry = ExecutorRegistry(make_stub(i) for i in ids)
        assert [e.metadata().id for e in registry.list()] == ids
        assert registry.ids() == ids
        assert len(registry) == len(ids)

    def test_list_returns_a_copy(self, make_stub):
        registry = ExecutorRegistry([make_stub("a")])
        registry.list().clear()
        assert len(registry) == 1

    def test_duplicate_id_rejected_and_registry_unchanged(self, make_stub):
        first = make_stub("dup")
        registry = ExecutorRegistry([first])

        with pytest.raises(DuplicateExecutorError, match="dup"):
            registry.register(make_stub("dup"))

        assert registry.lookup("dup") is first
        assert len(registry) == 1

    def test_non_executor_rejected(self):
        registry = ExecutorRegistry()
        with pytest.raises(InvalidExecutorError):
            registry.register(object())  # type: ignore[arg-type]
        assert len(registry) == 0


class TestLookup:
    def test_lookup_matches_metadata_for_every_executor(self, make_stub):
        registry = ExecutorRegistry(make_stub(i) for i in ("x", "y", "z"))
        for executor in registry.list():
            assert registry.lookup(executor.metadata().id) is executor

    def test_get_raises_for_missing(self, registry):
        with pytest.raises(ExecutorNotFoundError, match="unsupported evaluator nope"):
            registry.get("nope")

    def test_get_returns_registered(self, registry, stub_executor):
        assert registry.get("ottlvm") is stub_executor


class TestListExecutors:
    def test_descriptor_shape(self, registry):
        assert list_executors(registry) == [
            {
                "id": "ottlvm",
                "name": "Stub ottlvm",
                "path": "stubs/ottlvm",
                "docsURL": "https://example.test/ottlvm",
                "version": "1.2.3",
            }
        ]

    def test_order_and_repeatability(self, make_stub):
        registry = ExecutorRegistry(make_stub(i) for i in ("b", "a", "c"))
        first = list_executors(registry)
        second = list_executors(registry)
        assert [d["id"] for d in first] == ["b", "a", "c"]
        assert first == second

    def test_listing_does_not_touch_executors(self, registry, stub_executor):
        list_executors(registry)
        assert stub_executor.calls == []
        assert stub_executor.drains == 0


class TestDefaultRegistry:
    def test_shipped_executors_in_fixed_order(self):
        assert build_default_registry().ids() == ["noop", "attributes"]

    def test_independent_instances(self):
        a = build_default_registry()
        b = build_default_registry()
        assert a.lookup("noop") is not b.lookup("noop")
