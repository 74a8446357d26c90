"""Routes compaction intents to the table operations backend."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from tabletkeeper.core.builder import build_intent
from tabletkeeper.errors import OperationFailedError
from tabletkeeper.models import CancelRequest, CompactionRequest, CompactionStatus, DispatchResult

if TYPE_CHECKING:
    from tabletkeeper.core.profiles import IteratorProfileRegistry
    from tabletkeeper.engine.base import TableOperations
    from tabletkeeper.models import CompactionIntent
    from tabletkeeper.options import OptionId, OptionValue

logger = logging.getLogger(__name__)


class CompactionDispatcher:
    """Invokes the remote operation matching a compaction intent.

    Holds no state between calls; failures are never retried here.
    """

    def __init__(self, table_ops: TableOperations) -> None:
        """Initialize the dispatcher.

        Args:
            table_ops: Backend performing the remote table operations.
        """
        self._table_ops = table_ops

    def dispatch(self, intent: CompactionIntent) -> DispatchResult:
        """Run a compaction intent against the backend.

        Args:
            intent: A CompactionRequest or a CancelRequest.

        Returns:
            DispatchResult describing what happened.

        Raises:
            TableNotFoundError: If the backend reports the table does not exist.
            OperationFailedError: If the backend operation fails for any other reason.
        """
        if isinstance(intent, CancelRequest):
            return self._cancel(intent)
        if isinstance(intent, CompactionRequest):
            return self._compact(intent)
        msg = f"Unsupported compaction intent: {type(intent).__name__}"
        raise TypeError(msg)

    def _cancel(self, request: CancelRequest) -> DispatchResult:
        table_name = request.table_name
        try:
            self._table_ops.cancel_compaction(table_name)
        except OperationFailedError:
            raise
        except Exception as e:
            msg = f"Cancel of compaction for table {table_name} failed: {e}"
            raise OperationFailedError(msg) from e

        message = f"Compaction canceled for table {table_name}"
        logger.info("%s", message)
        return DispatchResult(table_name=table_name, status=CompactionStatus.CANCELED, message=message)

    def _compact(self, request: CompactionRequest) -> DispatchResult:
        table_name = request.table_name
        if request.wait:
            logger.info("Compacting table ...")

        try:
            self._table_ops.compact(table_name, request)
        except OperationFailedError:
            raise
        except Exception as e:
            msg = f"Compaction of table {table_name} failed: {e}"
            raise OperationFailedError(msg) from e

        status = CompactionStatus.COMPLETED if request.wait else CompactionStatus.STARTED
        message = f"Compaction of table {table_name} {status.value} for given range"
        logger.info("%s", message)
        return DispatchResult(table_name=table_name, status=status, message=message)


def build_and_dispatch(
    options: Mapping[OptionId, OptionValue],
    table_name: str,
    profiles: IteratorProfileRegistry,
    table_ops: TableOperations,
) -> DispatchResult:
    """Build the intent for one table and dispatch it.

    Request errors are raised before the backend is contacted.
    """
    intent = build_intent(options, table_name, profiles)
    return CompactionDispatcher(table_ops).dispatch(intent)
