"""Scan session settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tabletkeeper.core.guard import MAX_INT, MAX_LONG, BoundedValueGuard

if TYPE_CHECKING:
    from tabletkeeper.config import TabletkeeperConfig

logger = logging.getLogger(__name__)

DEFAULT_READAHEAD_THRESHOLD = 3
DEFAULT_BATCH_SIZE = 1000


class ScanSettings:
    """Tuning parameters of a scan session on one table.

    Every setter validates before mutating, so a rejected value leaves the
    previous one in place.
    """

    def __init__(
        self,
        table_name: str,
        readahead_threshold: int = DEFAULT_READAHEAD_THRESHOLD,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.table_name = table_name
        self._readahead = BoundedValueGuard(0, MAX_LONG, readahead_threshold, name="readahead_threshold")
        self._batch_size = BoundedValueGuard(1, MAX_INT, batch_size, name="batch_size")

    @classmethod
    def from_config(cls, config: TabletkeeperConfig, table_name: str) -> ScanSettings:
        """Create scan settings for a table from configuration defaults."""
        return cls(
            table_name,
            readahead_threshold=config.readahead_threshold,
            batch_size=config.batch_size,
        )

    def get_readahead_threshold(self) -> int:
        """Number of batches fetched before prefetching starts."""
        return self._readahead.get()

    def set_readahead_threshold(self, batches: int) -> None:
        """Set the readahead threshold.

        Raises:
            OutOfRangeError: If ``batches`` is negative or above ``MAX_LONG``.
        """
        self._readahead.set(batches)
        logger.debug("Readahead threshold for %s set to %d", self.table_name, batches)

    readahead_threshold = property(get_readahead_threshold, set_readahead_threshold)

    def get_batch_size(self) -> int:
        return self._batch_size.get()

    def set_batch_size(self, size: int) -> None:
        """Set the number of entries fetched per batch.

        Raises:
            OutOfRangeError: If ``size`` is not positive or above ``MAX_INT``.
        """
        self._batch_size.set(size)
        logger.debug("Batch size for %s set to %d", self.table_name, size)

    batch_size = property(get_batch_size, set_batch_size)

    def as_dict(self) -> dict[str, int | str]:
        return {
            "table": self.table_name,
            "readahead_threshold": self.readahead_threshold,
            "batch_size": self.batch_size,
        }
