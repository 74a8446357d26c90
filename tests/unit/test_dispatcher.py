"""Tests for tabletkeeper.core.dispatcher module."""

from __future__ import annotations

import logging
from types import MappingProxyType

import pytest

from tabletkeeper.core.dispatcher import CompactionDispatcher, build_and_dispatch
from tabletkeeper.errors import (
    ConflictingOptionsError,
    OperationFailedError,
    TableNotFoundError,
    UnknownProfileError,
)
from tabletkeeper.models import CancelRequest, CompactionRequest, CompactionStatus
from tabletkeeper.options import OptionId


class TestCompactionDispatcher:
    @pytest.fixture
    def dispatcher(self, mock_table_ops):
        return CompactionDispatcher(mock_table_ops)

    def test_cancel(self, dispatcher, mock_table_ops):
        result = dispatcher.dispatch(CancelRequest(table_name="events"))

        mock_table_ops.cancel_compaction.assert_called_once_with("events")
        mock_table_ops.compact.assert_not_called()
        assert result.status == CompactionStatus.CANCELED
        assert result.table_name == "events"
        assert "canceled" in result.message.lower()

    def test_cancel_table_not_found(self, dispatcher, mock_table_ops):
        mock_table_ops.cancel_compaction.side_effect = TableNotFoundError("events")

        with pytest.raises(TableNotFoundError) as exc_info:
            dispatcher.dispatch(CancelRequest(table_name="events"))
        assert isinstance(exc_info.value, OperationFailedError)
        assert exc_info.value.table_name == "events"

    def test_cancel_other_failure_wrapped(self, dispatcher, mock_table_ops):
        mock_table_ops.cancel_compaction.side_effect = ConnectionError("tserver unreachable")

        with pytest.raises(OperationFailedError, match="tserver unreachable") as exc_info:
            dispatcher.dispatch(CancelRequest(table_name="events"))
        assert not isinstance(exc_info.value, TableNotFoundError)
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_compact_started(self, dispatcher, mock_table_ops):
        request = CompactionRequest(table_name="events")

        result = dispatcher.dispatch(request)

        mock_table_ops.compact.assert_called_once_with("events", request)
        mock_table_ops.cancel_compaction.assert_not_called()
        assert result.status == CompactionStatus.STARTED
        assert result.message == "Compaction of table events started for given range"

    def test_compact_completed_after_blocking_call(self, dispatcher, mock_table_ops):
        calls = []
        mock_table_ops.compact.side_effect = lambda table, request: calls.append(table)

        result = dispatcher.dispatch(CompactionRequest(table_name="events", wait=True))

        assert calls == ["events"]
        assert result.status == CompactionStatus.COMPLETED
        assert result.message == "Compaction of table events completed for given range"

    def test_compact_wait_logs_progress(self, dispatcher, caplog):
        with caplog.at_level(logging.INFO, logger="tabletkeeper.core.dispatcher"):
            dispatcher.dispatch(CompactionRequest(table_name="events", wait=True))
        assert "Compacting table ..." in caplog.text
        assert "completed" in caplog.text

    def test_compact_failure_wrapped(self, dispatcher, mock_table_ops):
        mock_table_ops.compact.side_effect = InterruptedError("interrupted")

        with pytest.raises(OperationFailedError, match="Compaction of table events failed") as exc_info:
            dispatcher.dispatch(CompactionRequest(table_name="events", wait=True))
        assert isinstance(exc_info.value.__cause__, InterruptedError)

    def test_compact_table_not_found_passes_through(self, dispatcher, mock_table_ops):
        mock_table_ops.compact.side_effect = TableNotFoundError("events")

        with pytest.raises(TableNotFoundError):
            dispatcher.dispatch(CompactionRequest(table_name="events"))

    def test_unsupported_intent(self, dispatcher):
        with pytest.raises(TypeError, match="Unsupported compaction intent"):
            dispatcher.dispatch("events")


class TestBuildAndDispatch:
    def test_compact(self, profiles, mock_table_ops, ageoff_iterators):
        options = MappingProxyType({OptionId.PROFILE: "ageoff", OptionId.WAIT: True})

        result = build_and_dispatch(options, "events", profiles, mock_table_ops)

        assert result.status == CompactionStatus.COMPLETED
        table, request = mock_table_ops.compact.call_args.args
        assert table == "events"
        assert request.iterators == tuple(ageoff_iterators)

    def test_cancel(self, profiles, mock_table_ops):
        result = build_and_dispatch(MappingProxyType({OptionId.CANCEL: True}), "events", profiles, mock_table_ops)

        assert result.status == CompactionStatus.CANCELED
        mock_table_ops.cancel_compaction.assert_called_once_with("events")

    def test_request_errors_have_no_remote_effect(self, profiles, mock_table_ops):
        with pytest.raises(UnknownProfileError):
            build_and_dispatch(MappingProxyType({OptionId.PROFILE: "missing"}), "events", profiles, mock_table_ops)

        with pytest.raises(ConflictingOptionsError):
            build_and_dispatch(
                MappingProxyType({OptionId.CANCEL: True, OptionId.NO_FLUSH: True}),
                "events",
                profiles,
                mock_table_ops,
            )

        mock_table_ops.compact.assert_not_called()
        mock_table_ops.cancel_compaction.assert_not_called()
