"""Table operations backed by a local YAML state file."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from tabletkeeper.engine.base import TableOperations
from tabletkeeper.errors import OperationFailedError, TableNotFoundError

if TYPE_CHECKING:
    from tabletkeeper.models import CompactionRequest

logger = logging.getLogger(__name__)


class LocalTableOperations(TableOperations):
    """Records compactions per table instead of running them.

    A compaction requested without ``wait`` is kept as running until it is
    canceled; one requested with ``wait`` is recorded as completed. State is
    written back after every change when a state file is configured.
    """

    def __init__(self, tables: Iterable[str] = (), state_file: str | Path | None = None) -> None:
        """Initialize the backend.

        Args:
            tables: Tables that exist in addition to those in the state file.
            state_file: YAML file to load state from and save it to.
        """
        self._state_file = Path(state_file) if state_file else None
        self._tables: dict[str, dict[str, Any]] = {}
        if self._state_file is not None and self._state_file.exists():
            self._load()
        for table in tables:
            self._tables.setdefault(table, _empty_state())

    def compact(self, table_name: str, request: CompactionRequest) -> None:
        state = self._table_state(table_name)
        entry = _describe(request)
        if request.wait:
            state["completed"].append(entry)
            logger.info("Recorded completed compaction of %s", table_name)
        else:
            state["running"].append(entry)
            logger.info("Recorded running compaction of %s", table_name)
        self._save()

    def cancel_compaction(self, table_name: str) -> None:
        state = self._table_state(table_name)
        canceled = len(state["running"])
        state["running"] = []
        logger.info("Canceled %d running compaction(s) of %s", canceled, table_name)
        self._save()

    def list_tables(self) -> list[str]:
        return sorted(self._tables)

    def running_compactions(self, table_name: str) -> list[dict[str, Any]]:
        """Return the compactions of a table that are still running."""
        return list(self._table_state(table_name)["running"])

    def completed_compactions(self, table_name: str) -> list[dict[str, Any]]:
        """Return the compactions of a table that have completed."""
        return list(self._table_state(table_name)["completed"])

    def _table_state(self, table_name: str) -> dict[str, Any]:
        state = self._tables.get(table_name)
        if state is None:
            raise TableNotFoundError(table_name)
        return state

    def _load(self) -> None:
        try:
            with open(self._state_file) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            msg = f"Could not read state file {self._state_file}: {e}"
            raise OperationFailedError(msg) from e

        if not isinstance(data, Mapping) or not isinstance(data.get("tables") or {}, Mapping):
            msg = f"Invalid state file {self._state_file}: expected a 'tables' mapping"
            raise OperationFailedError(msg)

        for table, state in (data.get("tables") or {}).items():
            state = state or {}
            if not isinstance(state, Mapping):
                msg = f"Invalid state file {self._state_file}: entry for table {table} is not a mapping"
                raise OperationFailedError(msg)
            running = state.get("running") or []
            completed = state.get("completed") or []
            if not isinstance(running, list) or not isinstance(completed, list):
                msg = f"Invalid state file {self._state_file}: compactions of table {table} must be lists"
                raise OperationFailedError(msg)
            self._tables[str(table)] = {"running": list(running), "completed": list(completed)}
        logger.debug("Loaded state for %d table(s) from %s", len(self._tables), self._state_file)

    def _save(self) -> None:
        if self._state_file is None:
            return
        try:
            with open(self._state_file, "w") as f:
                yaml.safe_dump({"tables": self._tables}, f, sort_keys=True)
        except OSError as e:
            msg = f"Could not write state file {self._state_file}: {e}"
            raise OperationFailedError(msg) from e


def _empty_state() -> dict[str, list]:
    return {"running": [], "completed": []}


def _describe(request: CompactionRequest) -> dict[str, Any]:
    """Plain mapping of a request suitable for YAML."""
    entry: dict[str, Any] = {
        "requested_at": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "flush": request.flush,
        "start_row": request.start_row.decode("utf-8", "replace") if request.start_row is not None else None,
        "end_row": request.end_row.decode("utf-8", "replace") if request.end_row is not None else None,
        "iterators": [it.name for it in request.iterators],
    }
    if request.strategy is not None:
        entry["strategy"] = {"name": request.strategy.name, "options": dict(request.strategy.options)}
    return entry
