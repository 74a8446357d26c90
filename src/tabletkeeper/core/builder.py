"""Turns supplied compact-command options into a compaction intent."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from tabletkeeper.errors import ConflictingOptionsError, MalformedStrategyOptionError, UnknownProfileError
from tabletkeeper.models import CancelRequest, CompactionRequest, StrategyDescriptor
from tabletkeeper.options import COMPACTION_SHAPING_OPTIONS, OptionId

if TYPE_CHECKING:
    from tabletkeeper.core.profiles import IteratorProfileRegistry
    from tabletkeeper.models import CompactionIntent
    from tabletkeeper.options import OptionValue

logger = logging.getLogger(__name__)


def build_intent(
    options: Mapping[OptionId, OptionValue],
    table_name: str,
    profiles: IteratorProfileRegistry,
) -> CompactionIntent:
    """Build the compaction intent described by the supplied options.

    Args:
        options: Supplied options only; an absent key means the option was not given.
        table_name: Table the intent applies to.
        profiles: Registry used to resolve ``--profile``.

    Returns:
        A CancelRequest when ``--cancel`` is given, otherwise a CompactionRequest.

    Raises:
        ConflictingOptionsError: If ``--cancel`` is combined with compaction options.
        UnknownProfileError: If the named iterator profile does not exist.
        MalformedStrategyOptionError: If the strategy configuration cannot be parsed.
    """
    if not table_name:
        msg = "Table name must not be empty"
        raise ValueError(msg)

    if OptionId.CANCEL in options:
        conflicts = sorted(o.flag for o in COMPACTION_SHAPING_OPTIONS if o in options)
        if conflicts:
            msg = f"Can not specify other options with cancel: {', '.join(conflicts)}"
            raise ConflictingOptionsError(msg)
        return CancelRequest(table_name=table_name)

    iterators = ()
    if OptionId.PROFILE in options:
        profile = str(options[OptionId.PROFILE])
        found = profiles.lookup(profile)
        if found is None:
            raise UnknownProfileError(profile)
        iterators = tuple(found)

    strategy = None
    if OptionId.STRATEGY in options:
        strategy_options = {}
        if OptionId.STRATEGY_CONFIG in options:
            strategy_options = parse_strategy_options(str(options[OptionId.STRATEGY_CONFIG]))
        strategy = StrategyDescriptor(name=str(options[OptionId.STRATEGY]), options=strategy_options)
    elif OptionId.STRATEGY_CONFIG in options:
        logger.warning("Ignoring %s for %s: no --strategy given", OptionId.STRATEGY_CONFIG.flag, table_name)

    return CompactionRequest(
        table_name=table_name,
        start_row=_row(options.get(OptionId.BEGIN_ROW)),
        end_row=_row(options.get(OptionId.END_ROW)),
        flush=OptionId.NO_FLUSH not in options,
        wait=OptionId.WAIT in options,
        iterators=iterators,
        strategy=strategy,
    )


def parse_strategy_options(text: str) -> dict[str, str]:
    """Parse ``<prop>=<value>{,<prop>=<value>}`` into a mapping.

    Values may contain ``=``; empty tokens are skipped and later keys
    overwrite earlier ones.

    Raises:
        MalformedStrategyOptionError: If a token has no ``=`` or an empty key.
    """
    props: dict[str, str] = {}
    for token in text.split(","):
        if not token:
            continue
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise MalformedStrategyOptionError(token)
        props[key] = value
    return props


def _row(value: OptionValue | None) -> bytes | None:
    if value is None:
        return None
    return str(value).encode("utf-8")
