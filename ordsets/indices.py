"""Index utilities over plain sequences.

Sort-indices, rank-indices and the ascending-sequence algorithms that the set
representations are built on. Everything here works on ordinary lists and
never mutates its arguments.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ordsets.common import Flip

__all__ = [
    "MinMax",
    "binary_search",
    "binary_search_indexed",
    "complement",
    "diff",
    "intersect",
    "invert",
    "linear_member",
    "merge",
    "merge_indexed",
    "minmax",
    "reverse",
    "sort_index",
    "trivial_index",
    "unindex",
]


@dataclass(frozen=True)
class MinMax[T]:
    """Minimum and maximum of a sequence, with their positions in it."""

    min: T
    minindex: int
    max: T
    maxindex: int


def trivial_index(ascending: bool, n: int) -> List[int]:
    """Index of a sequence that is already in the stated order.

    Args:
        ascending: True for 0..n-1, False for n-1..0.
        n: Length of the sequence.

    Returns:
        The identity or reverse-identity permutation of length n.

    Raises:
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError("Index length must be non-negative")
    if ascending:
        return list(range(n))
    else:
        return list(range(n - 1, -1, -1))


def sort_index[T](data: Sequence[T], ascending: bool = True) -> List[int]:
    """Stable sort-index of data.

    Reading data through the result yields it sorted. The descending index
    is the reversal of the ascending one.

    Time Complexity: O(n log n)
    """
    index = sorted(range(len(data)), key=data.__getitem__)
    if not ascending:
        index.reverse()
    return index


def invert(index: Sequence[int]) -> List[int]:
    """Functional inverse of a permutation (sort-index <-> rank-index).

    Time Complexity: O(n)
    """
    inverse = [0] * len(index)
    for position, entry in enumerate(index):
        inverse[entry] = position
    return inverse


def complement(ranks: Sequence[int]) -> List[int]:
    """Map each rank r to n-1-r, flipping the sense of a rank-index.

    Time Complexity: O(n)
    """
    last = len(ranks) - 1
    return [last - rank for rank in ranks]


def reverse[T](seq: Sequence[T]) -> List[T]:
    """Physically reversed copy of a sequence."""
    return list(reversed(seq))


def unindex[T](
    data: Sequence[T], index: Sequence[int], same_sense: bool = True
) -> List[T]:
    """Read data through index.

    Args:
        data: The values.
        index: A sort-index over data.
        same_sense: Read the index forwards if True, backwards otherwise.

    Returns:
        The values in the order denoted by the index (or its reversal).
    """
    if same_sense:
        return [data[i] for i in index]
    else:
        return [data[i] for i in reversed(index)]


def binary_search[T](data: Sequence[T], value: T, ascending: bool = True) -> range:
    """Locate the contiguous run of value in sorted data.

    Time Complexity: O(log n)

    Args:
        data: Values sorted in the order given by ascending.
        value: The value to search for.
        ascending: Sense of the sort.

    Returns:
        The range of matching positions. When value is absent the range is
        empty and its start is the insertion point.
    """
    if ascending:
        return range(bisect_left(data, value), bisect_right(data, value))
    else:
        probe = Flip(value)
        return range(
            bisect_left(data, probe, key=Flip), bisect_right(data, probe, key=Flip)
        )


def binary_search_indexed[T](
    data: Sequence[T], index: Sequence[int], value: T, ascending: bool = True
) -> range:
    """Locate the run of value in data read through a sort-index.

    Time Complexity: O(log n)

    Returns:
        The range of matching slots in index (not positions in data). When
        value is absent the range is empty and its start is the slot where
        it would be spliced in.
    """
    if ascending:
        key = data.__getitem__
        return range(
            bisect_left(index, value, key=key), bisect_right(index, value, key=key)
        )
    else:
        probe = Flip(value)

        def flipped(i: int) -> Flip[T]:
            return Flip(data[i])

        return range(
            bisect_left(index, probe, key=flipped),
            bisect_right(index, probe, key=flipped),
        )


def linear_member[T](data: Sequence[T], value: T) -> Optional[int]:
    """Position of the first occurrence of value, or None."""
    for position, item in enumerate(data):
        if item == value:
            return position
    return None


def minmax[T](data: Sequence[T]) -> Optional[MinMax[T]]:
    """Linear scan for the extremes, reporting their first occurrences."""
    if not data:
        return None
    lo = hi = data[0]
    lo_index = hi_index = 0
    for position in range(1, len(data)):
        item = data[position]
        if item < lo:
            lo, lo_index = item, position
        elif hi < item:
            hi, hi_index = item, position
    return MinMax(min=lo, minindex=lo_index, max=hi, maxindex=hi_index)


def merge[T](a: Sequence[T], b: Sequence[T]) -> List[T]:
    """Merge two ascending sequences, keeping all duplicates.

    On ties elements of a come first.

    Time Complexity: O(n + m)
    """
    result: List[T] = []
    i, j = 0, 0
    while i < len(a) and j < len(b):
        if b[j] < a[i]:
            result.append(b[j])
            j += 1
        else:
            result.append(a[i])
            i += 1
    result.extend(a[i:])
    result.extend(b[j:])
    return result


def intersect[T](a: Sequence[T], b: Sequence[T]) -> List[T]:
    """Elements of ascending a matched one-for-one in ascending b.

    Time Complexity: O(n + m)
    """
    result: List[T] = []
    i, j = 0, 0
    while i < len(a) and j < len(b):
        if a[i] < b[j]:
            i += 1
        elif b[j] < a[i]:
            j += 1
        else:
            result.append(a[i])
            i += 1
            j += 1
    return result


def diff[T](a: Sequence[T], b: Sequence[T]) -> List[T]:
    """Elements of ascending a left over after cancelling those in ascending b.

    Time Complexity: O(n + m)
    """
    result: List[T] = []
    i, j = 0, 0
    while i < len(a) and j < len(b):
        if a[i] < b[j]:
            result.append(a[i])
            i += 1
        elif b[j] < a[i]:
            j += 1
        else:
            i += 1
            j += 1
    result.extend(a[i:])
    return result


def merge_indexed[T](
    data_a: Sequence[T],
    index_a: Sequence[int],
    data_b: Sequence[T],
    index_b: Sequence[int],
) -> Tuple[List[T], List[int]]:
    """Merge two sets given as data plus ascending sort-index.

    Neither data sequence is reordered: the result data is data_a followed by
    data_b, and only the sort-indices are merged, with index_b shifted past
    the end of data_a.

    Time Complexity: O(n + m)

    Returns:
        The concatenated data and its ascending sort-index.
    """
    offset = len(data_a)
    data = list(data_a)
    data.extend(data_b)
    index: List[int] = []
    i, j = 0, 0
    while i < len(index_a) and j < len(index_b):
        if data_b[index_b[j]] < data_a[index_a[i]]:
            index.append(index_b[j] + offset)
            j += 1
        else:
            index.append(index_a[i])
            i += 1
    index.extend(index_a[i:])
    index.extend(entry + offset for entry in index_b[j:])
    return data, index
