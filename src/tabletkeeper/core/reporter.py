"""Reporting module for compaction requests and results."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tabletkeeper.models import CancelRequest

if TYPE_CHECKING:
    from tabletkeeper.core.profiles import IteratorProfileRegistry
    from tabletkeeper.core.scanner import ScanSettings
    from tabletkeeper.models import CompactionIntent, DispatchResult

logger = logging.getLogger(__name__)


def format_row(row: bytes | None) -> str:
    """Format a row bound for display.

    Args:
        row: Row bytes, or None for an unbounded side.

    Returns:
        The decoded row with non-UTF-8 bytes escaped, or a marker for an unbounded side.
    """
    if row is None:
        return "(unbounded)"
    return row.decode("utf-8", "backslashreplace")


def print_request_report(intent: CompactionIntent) -> str:
    """Generate a human-readable description of a compaction intent.

    Args:
        intent: Request built from the command options.

    Returns:
        Formatted report string.
    """
    lines = [
        f"{'=' * 60}",
        f"Table: {intent.table_name}",
        f"{'=' * 60}",
    ]

    if isinstance(intent, CancelRequest):
        lines.append("  Action:          cancel compactions")
    else:
        lines.extend(
            [
                "  Action:          compact",
                f"  Range:           {'given range' if intent.is_bounded else 'entire table'}",
                f"  Start row:       {format_row(intent.start_row)}",
                f"  End row:         {format_row(intent.end_row)}",
                f"  Flush:           {intent.flush}",
                f"  Wait:            {intent.wait}",
            ]
        )
        if intent.iterators:
            lines.append("  Iterators:")
            for it in intent.iterators:
                lines.append(f"    - {it.priority} {it.name} ({it.iterator_class})")
        if intent.strategy is not None:
            lines.append(f"  Strategy:        {intent.strategy.name}")
            for key, value in sorted(intent.strategy.options.items()):
                lines.append(f"    {key} = {value}")

    lines.append("")
    report = "\n".join(lines)
    logger.debug("\n%s", report)
    return report


def print_dispatch_report(result: DispatchResult) -> str:
    """Generate the status line of a dispatched intent."""
    return f"  [{result.status.value}] {result.message}"


def print_profiles_report(profiles: IteratorProfileRegistry) -> str:
    """Generate a listing of the configured iterator profiles."""
    if not len(profiles):
        return "No iterator profiles configured."

    lines = []
    for name in profiles.names():
        lines.append(f"{name}:")
        for it in profiles.lookup(name) or []:
            options = ", ".join(f"{k}={v}" for k, v in sorted(it.options.items()))
            suffix = f" [{options}]" if options else ""
            lines.append(f"  - {it.priority} {it.name} ({it.iterator_class}){suffix}")
    return "\n".join(lines)


def print_scan_settings_report(settings: ScanSettings) -> str:
    """Generate a listing of effective scan settings."""
    values = settings.as_dict()
    return "\n".join(
        [
            f"Scan settings for {values['table']}:",
            f"  Readahead threshold: {values['readahead_threshold']:,}",
            f"  Batch size:          {values['batch_size']:,}",
        ]
    )
