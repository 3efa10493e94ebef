"""Common utility types and functions for the ordsets library.

This module provides the protocol base classes and comparison helpers shared
by the index utilities and the set representations.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generator, List, cast, override

__all__ = [
    "Comparable",
    "Flip",
    "Impossible",
    "Iterating",
    "Ordering",
    "Sized",
    "compare",
]


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations, such as an unknown
    set kind reaching the end of a match.
    """

    pass


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Generator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Generator[U]:
        return self.iter()


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1


class Comparable[T](metaclass=ABCMeta):
    @abstractmethod
    def compare(self, other: T) -> Ordering: ...

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, type(self)):
            return self.compare(cast(T, other)) == Ordering.Eq
        else:
            return False

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __lt__(self, other: T) -> bool:
        return self.compare(other) == Ordering.Lt

    def __le__(self, other: T) -> bool:
        return not self.__gt__(other)

    def __gt__(self, other: T) -> bool:
        return self.compare(other) == Ordering.Gt

    def __ge__(self, other: T) -> bool:
        return not self.__lt__(other)


@dataclass(frozen=True, eq=False)
class Flip[T](Comparable["Flip[T]"]):
    """A wrapper that flips the comparison result of the wrapped value.

    Binary searches over descending sequences wrap both the probe and the
    sequence elements so that the standard ascending search applies.

    Example:
        >>> from ordsets.common import Flip, compare, Ordering
        >>> compare(1, 2)  # Normal comparison
        <Ordering.Lt: -1>
        >>> compare(Flip(1), Flip(2))  # Flipped comparison
        <Ordering.Gt: 1>
    """

    value: T

    @override
    def compare(self, other: Flip[T]) -> Ordering:
        """Compare by flipping the result of comparing the wrapped values."""
        result = compare(self.value, other.value)
        if result == Ordering.Lt:
            return Ordering.Gt
        elif result == Ordering.Gt:
            return Ordering.Lt
        else:
            return Ordering.Eq


def compare[T](a: T, b: T) -> Ordering:
    """Compare two values and return their ordering relationship.

    Uses the == and < operators, so mixed types such as int and float fall
    back to the reflected method instead of a NotImplemented result.

    Args:
        a: First value to compare.
        b: Second value to compare.

    Returns:
        Ordering indicating the relationship between a and b.
    """
    if a == b:
        return Ordering.Eq
    elif a < b:  # type: ignore[operator]
        return Ordering.Lt
    else:
        return Ordering.Gt
