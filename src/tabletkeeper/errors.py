"""Exception hierarchy for Tabletkeeper."""

from __future__ import annotations


class TabletkeeperError(Exception):
    """Base exception for all Tabletkeeper errors."""


class OutOfRangeError(TabletkeeperError, ValueError):
    """Raised when a bounded parameter is set outside its accepted range."""

    def __init__(self, name: str, value: object, minimum: object, maximum: object) -> None:
        self.name = name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"{name} must be between {minimum} and {maximum}, got {value}")


class RequestError(TabletkeeperError):
    """Raised when a compaction request cannot be built from the given options.

    Always detected before any remote call is made.
    """


class ConflictingOptionsError(RequestError):
    """Raised when cancel is combined with compaction-shaping options."""


class UnknownProfileError(RequestError):
    """Raised when a named iterator profile does not exist."""

    def __init__(self, profile: str) -> None:
        self.profile = profile
        super().__init__(f"Profile {profile} does not exist")


class MalformedStrategyOptionError(RequestError):
    """Raised when a strategy option token is not a key=value pair."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Malformed strategy option '{token}', expected <prop>=<value>")


class OperationFailedError(TabletkeeperError):
    """Raised when a table operation fails on the remote side."""


class TableNotFoundError(OperationFailedError):
    """Raised when the remote side reports that a table does not exist."""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        super().__init__(f"Table {table_name} does not exist")
