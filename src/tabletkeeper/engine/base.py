"""Abstract base class for table operations backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tabletkeeper.models import CompactionRequest


class TableOperations(ABC):
    """Abstract base class defining the remote table operations interface."""

    @abstractmethod
    def compact(self, table_name: str, request: CompactionRequest) -> None:
        """Start a compaction of a table.

        Blocks until the compaction finishes when ``request.wait`` is set.

        Args:
            table_name: Table name.
            request: Validated compaction request.

        Raises:
            TableNotFoundError: If the table does not exist.
            OperationFailedError: If the compaction could not be started or failed.
        """

    @abstractmethod
    def cancel_compaction(self, table_name: str) -> None:
        """Cancel user initiated compactions of a table.

        Args:
            table_name: Table name.

        Raises:
            TableNotFoundError: If the table does not exist.
        """

    @abstractmethod
    def list_tables(self) -> list[str]:
        """List the tables known to the backend.

        Returns:
            Sorted list of table names.
        """
