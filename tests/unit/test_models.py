"""Tests for tabletkeeper.models module."""

from __future__ import annotations

import dataclasses

import pytest

from tabletkeeper.models import (
    CancelRequest,
    CompactionRequest,
    CompactionStatus,
    IteratorSetting,
    StrategyDescriptor,
)


class TestCompactionStatus:
    def test_values(self):
        assert CompactionStatus.STARTED.value == "started"
        assert CompactionStatus.COMPLETED.value == "completed"
        assert CompactionStatus.CANCELED.value == "canceled"


class TestIteratorSetting:
    def test_from_dict(self):
        setting = IteratorSetting.from_dict(
            {"priority": "15", "name": "vers", "iterator_class": "x.Versioning", "options": {"maxVersions": 1}}
        )
        assert setting == IteratorSetting(
            priority=15, name="vers", iterator_class="x.Versioning", options={"maxVersions": "1"}
        )

    def test_from_dict_without_options(self):
        setting = IteratorSetting.from_dict({"priority": 1, "name": "a", "iterator_class": "x.A", "options": None})
        assert setting.options == {}

    def test_from_dict_missing_keys(self):
        with pytest.raises(ValueError, match="priority, name"):
            IteratorSetting.from_dict({"iterator_class": "x.A"})

    def test_options_read_only(self):
        setting = IteratorSetting(priority=1, name="a", iterator_class="x.A", options={"k": "v"})
        with pytest.raises(TypeError):
            setting.options["k"] = "other"

    def test_options_copied(self):
        options = {"k": "v"}
        setting = IteratorSetting(priority=1, name="a", iterator_class="x.A", options=options)
        options["k"] = "other"
        assert setting.options == {"k": "v"}


class TestCompactionRequest:
    def test_defaults(self):
        request = CompactionRequest(table_name="events")
        assert request.flush is True
        assert request.wait is False
        assert request.iterators == ()
        assert request.strategy is None
        assert request.is_bounded is False

    def test_is_bounded(self):
        assert CompactionRequest(table_name="t", start_row=b"a").is_bounded is True
        assert CompactionRequest(table_name="t", end_row=b"z").is_bounded is True

    def test_immutable(self):
        request = CompactionRequest(table_name="events")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.wait = True

    def test_with_strategy(self):
        strategy = StrategyDescriptor(name="x.Size", options={"size": "10M"})
        request = CompactionRequest(table_name="events", strategy=strategy)
        assert request.strategy.options["size"] == "10M"


class TestCancelRequest:
    def test_equality(self):
        assert CancelRequest(table_name="events") == CancelRequest(table_name="events")
        assert CancelRequest(table_name="events") != CompactionRequest(table_name="events")


class TestStrategyDescriptor:
    def test_options_copied(self):
        options = {"size": "10M"}
        strategy = StrategyDescriptor(name="x.Size", options=options)
        options["size"] = "1G"
        options["extra"] = "1"
        assert strategy.options == {"size": "10M"}

    def test_options_read_only(self):
        strategy = StrategyDescriptor(name="x.Size", options={"size": "10M"})
        with pytest.raises(TypeError):
            strategy.options["size"] = "1G"
