"""Recognized options of the compact command."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

OptionValue = Union[str, bool]


class OptionId(Enum):
    """Identifiers of the options that shape a compaction intent."""

    BEGIN_ROW = "begin_row"
    END_ROW = "end_row"
    NO_FLUSH = "no_flush"
    WAIT = "wait"
    PROFILE = "profile"
    STRATEGY = "strategy"
    STRATEGY_CONFIG = "strategy_config"
    CANCEL = "cancel"

    @property
    def flag(self) -> str:
        """Long command-line flag of the option."""
        return OPTION_FLAGS[self]


OPTION_FLAGS = {
    OptionId.BEGIN_ROW: "--begin-row",
    OptionId.END_ROW: "--end-row",
    OptionId.NO_FLUSH: "--noFlush",
    OptionId.WAIT: "--wait",
    OptionId.PROFILE: "--profile",
    OptionId.STRATEGY: "--strategy",
    OptionId.STRATEGY_CONFIG: "--strategyConfig",
    OptionId.CANCEL: "--cancel",
}

# Options that may not be combined with --cancel.
COMPACTION_SHAPING_OPTIONS = frozenset(
    {
        OptionId.BEGIN_ROW,
        OptionId.END_ROW,
        OptionId.NO_FLUSH,
        OptionId.WAIT,
        OptionId.PROFILE,
        OptionId.STRATEGY,
        OptionId.STRATEGY_CONFIG,
    }
)

BOOLEAN_OPTIONS = frozenset({OptionId.NO_FLUSH, OptionId.WAIT, OptionId.CANCEL})


def options_from_params(params: Mapping[str, Any]) -> Mapping[OptionId, OptionValue]:
    """Collect the supplied options from parsed command parameters.

    An option is present in the result only if it was supplied: boolean
    flags when true, valued options when not ``None``.

    Args:
        params: Parameter mapping keyed by ``OptionId`` values.

    Returns:
        A read-only mapping of the supplied options.
    """
    supplied: dict[OptionId, OptionValue] = {}
    for option in OptionId:
        value = params.get(option.value)
        if option in BOOLEAN_OPTIONS:
            if value:
                supplied[option] = True
        elif value is not None:
            supplied[option] = str(value)
    return MappingProxyType(supplied)
