"""Data models for compaction requests and their results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Union


class CompactionStatus(Enum):
    """Outcome of a dispatched compaction intent."""

    STARTED = "started"
    COMPLETED = "completed"
    CANCELED = "canceled"


@dataclass(frozen=True)
class IteratorSetting:
    """A server-side iterator stage applied while compacting."""

    priority: int
    name: str
    iterator_class: str
    options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _frozen_options(self.options))

    @classmethod
    def from_dict(cls, data: dict) -> IteratorSetting:
        """Create an iterator setting from a configuration mapping.

        Raises:
            ValueError: If a required key is missing.
        """
        missing = [k for k in ("priority", "name", "iterator_class") if k not in data]
        if missing:
            msg = f"Iterator setting is missing keys: {', '.join(missing)}"
            raise ValueError(msg)
        options = {str(k): str(v) for k, v in (data.get("options") or {}).items()}
        return cls(
            priority=int(data["priority"]),
            name=str(data["name"]),
            iterator_class=str(data["iterator_class"]),
            options=options,
        )


@dataclass(frozen=True)
class StrategyDescriptor:
    """Name and free-form options of a compaction strategy.

    Passed through to the compaction engine unchanged.
    """

    name: str
    options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _frozen_options(self.options))


@dataclass(frozen=True)
class CompactionRequest:
    """A fully validated request to compact one table."""

    table_name: str
    start_row: bytes | None = None
    end_row: bytes | None = None
    flush: bool = True
    wait: bool = False
    iterators: tuple[IteratorSetting, ...] = ()
    strategy: StrategyDescriptor | None = None

    @property
    def is_bounded(self) -> bool:
        """Whether the request covers only part of the table."""
        return self.start_row is not None or self.end_row is not None


@dataclass(frozen=True)
class CancelRequest:
    """A request to cancel user initiated compactions on one table."""

    table_name: str


CompactionIntent = Union[CompactionRequest, CancelRequest]


@dataclass
class DispatchResult:
    """Result of dispatching a compaction intent."""

    table_name: str
    status: CompactionStatus
    message: str


def _frozen_options(options: Mapping[str, str]) -> Mapping[str, str]:
    """Read-only copy of an options mapping."""
    return MappingProxyType(dict(options))
