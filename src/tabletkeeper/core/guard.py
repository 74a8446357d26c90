"""Range-checked holder for a single tunable parameter."""

from __future__ import annotations

import numbers
from typing import Generic, TypeVar

from tabletkeeper.errors import OutOfRangeError

MAX_LONG = 2**63 - 1
MAX_INT = 2**31 - 1

T = TypeVar("T", int, float)


class BoundedValueGuard(Generic[T]):
    """Holds a value that must stay within ``[minimum, maximum]``, both inclusive.

    Not synchronized; callers sharing an instance across threads must
    serialize access themselves.
    """

    def __init__(self, minimum: T, maximum: T, value: T, name: str = "value") -> None:
        """Initialize the guard.

        Args:
            minimum: Smallest accepted value.
            maximum: Largest accepted value.
            value: Initial value, validated like any other.
            name: Parameter name used in error messages.

        Raises:
            ValueError: If ``minimum`` is greater than ``maximum``.
            OutOfRangeError: If the initial value is out of range.
        """
        if minimum > maximum:
            msg = f"Invalid range for {name}: [{minimum}, {maximum}]"
            raise ValueError(msg)
        self._minimum = minimum
        self._maximum = maximum
        self._name = name
        self._check(value)
        self._value = value

    @property
    def minimum(self) -> T:
        return self._minimum

    @property
    def maximum(self) -> T:
        return self._maximum

    def get(self) -> T:
        """Return the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the current value.

        Raises:
            TypeError: If the value is not a number of the guarded kind.
            OutOfRangeError: If the value is outside the accepted range.
        """
        self._check(value)
        self._value = value

    def _check(self, value: T) -> None:
        expected = numbers.Integral if isinstance(self._minimum, numbers.Integral) else numbers.Real
        # bool is an int subclass but never a meaningful setting
        if isinstance(value, bool) or not isinstance(value, expected):
            msg = f"{self._name} must be a number, got {type(value).__name__}"
            raise TypeError(msg)
        if not self._minimum <= value <= self._maximum:
            raise OutOfRangeError(self._name, value, self._minimum, self._maximum)

    def __repr__(self) -> str:
        return f"BoundedValueGuard({self._name}={self._value!r}, [{self._minimum}, {self._maximum}])"
