"""In-place conversions, mutations and set algebra.

Every function here takes a Set and rewrites its fields so that the kind
invariant holds again on return. Data storage is reused where the shape
allows it; the auxiliary index is rebuilt only when its meaning changes.

Indexed and Ranked sets share one convention: the sort-index is primary.
Ranked mutations invert their ranks into a sort-index, apply the Indexed
operation and invert back.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from itertools import groupby
from typing import TYPE_CHECKING, Callable, List

from ordsets.common import Impossible
from ordsets.indices import (
    binary_search,
    binary_search_indexed,
    complement,
    diff,
    intersect,
    invert,
    linear_member,
    merge,
    merge_indexed,
    reverse,
    sort_index,
    trivial_index,
    unindex,
)
from ordsets.kind import SetKind

if TYPE_CHECKING:
    from ordsets.set import Set

__all__ = [
    "mset_dedup",
    "mset_delete",
    "mset_delete_all",
    "mset_difference",
    "mset_indexed",
    "mset_insert",
    "mset_intersection",
    "mset_ordered",
    "mset_ranked",
    "mset_reverse",
    "mset_same",
    "mset_union",
    "mset_unordered",
]

logger = logging.getLogger(__name__)


def _mset_clear[T](s: Set[T]) -> None:
    s.kind = SetKind.Empty
    s.ascending = True
    s.data.clear()
    s.aux_index.clear()


def _mset_settle[T](s: Set[T]) -> None:
    # A set that has run out of data is Empty, whatever it was before
    if s.kind != SetKind.Empty and not s.data:
        _mset_clear(s)


def _ascending_sort_index[T](s: Set[T]) -> List[int]:
    """Ascending sort-index over s.data, built as cheaply as the kind allows."""
    match s.kind:
        case SetKind.Empty:
            return []
        case SetKind.Unordered:
            return sort_index(s.data)
        case SetKind.Ordered:
            return trivial_index(s.ascending, len(s.data))
        case SetKind.Indexed:
            return list(s.aux_index) if s.ascending else reverse(s.aux_index)
        case SetKind.Ranked:
            index = invert(s.aux_index)
            if not s.ascending:
                index.reverse()
            return index
        case _:
            raise Impossible


def _ascending_view[T](s: Set[T]) -> List[T]:
    """The data of any ordered kind, read in ascending order."""
    match s.kind:
        case SetKind.Ordered:
            return list(s.data) if s.ascending else reverse(s.data)
        case SetKind.Indexed:
            return unindex(s.data, s.aux_index, s.ascending)
        case SetKind.Ranked:
            return unindex(s.data, invert(s.aux_index), s.ascending)
        case _:
            raise Impossible


def _with_sort_index[T, R](
    s: Set[T], op: Callable[[List[T], List[int], bool], R]
) -> R:
    sort = invert(s.aux_index)
    result = op(s.data, sort, s.ascending)
    s.aux_index[:] = invert(sort)
    return result


def mset_unordered[T](s: Set[T]) -> None:
    """Make s Unordered, keeping data in its physical order.

    The ascending flag is left as it was. Any index is thrown away.
    """
    match s.kind:
        case SetKind.Empty | SetKind.Unordered:
            return
        case SetKind.Ordered:
            pass
        case SetKind.Indexed | SetKind.Ranked:
            logger.warning(
                "Discarding %s index over %d elements", s.kind.name, len(s.data)
            )
            s.aux_index.clear()
        case _:
            raise Impossible
    s.kind = SetKind.Unordered


def mset_ordered[T](s: Set[T], ascending: bool) -> None:
    """Make s Ordered in the given sense."""
    match s.kind:
        case SetKind.Empty:
            return
        case SetKind.Unordered:
            logger.debug("Sorting %d elements", len(s.data))
            s.data.sort()
            if not ascending:
                s.data.reverse()
        case SetKind.Ordered:
            if s.ascending != ascending:
                s.data.reverse()
        case SetKind.Indexed:
            s.data[:] = unindex(s.data, s.aux_index, s.ascending == ascending)
            s.aux_index.clear()
        case SetKind.Ranked:
            s.data[:] = unindex(
                s.data, invert(s.aux_index), s.ascending == ascending
            )
            s.aux_index.clear()
        case _:
            raise Impossible
    s.kind = SetKind.Ordered
    s.ascending = ascending


def mset_indexed[T](s: Set[T], ascending: bool) -> None:
    """Make s Indexed in the given sense."""
    match s.kind:
        case SetKind.Empty:
            return
        case SetKind.Unordered:
            logger.debug("Building sort-index over %d elements", len(s.data))
            s.aux_index[:] = sort_index(s.data, ascending)
        case SetKind.Ordered:
            s.aux_index[:] = trivial_index(s.ascending == ascending, len(s.data))
        case SetKind.Indexed:
            if s.ascending != ascending:
                s.aux_index.reverse()
        case SetKind.Ranked:
            sort = invert(s.aux_index)
            if s.ascending != ascending:
                sort.reverse()
            s.aux_index[:] = sort
        case _:
            raise Impossible
    s.kind = SetKind.Indexed
    s.ascending = ascending


def mset_ranked[T](s: Set[T], ascending: bool) -> None:
    """Make s Ranked in the given sense."""
    match s.kind:
        case SetKind.Empty:
            return
        case SetKind.Unordered:
            logger.debug("Building rank-index over %d elements", len(s.data))
            s.aux_index[:] = invert(sort_index(s.data, ascending))
        case SetKind.Ordered:
            s.aux_index[:] = trivial_index(s.ascending == ascending, len(s.data))
        case SetKind.Indexed:
            if s.ascending != ascending:
                s.aux_index.reverse()
            s.aux_index[:] = invert(s.aux_index)
        case SetKind.Ranked:
            if s.ascending != ascending:
                s.aux_index[:] = complement(s.aux_index)
        case _:
            raise Impossible
    s.kind = SetKind.Ranked
    s.ascending = ascending


def _mset_convert[T](s: Set[T], kind: SetKind, ascending: bool) -> None:
    match kind:
        case SetKind.Empty:
            _mset_clear(s)
        case SetKind.Unordered:
            mset_unordered(s)
        case SetKind.Ordered:
            mset_ordered(s, ascending)
        case SetKind.Indexed:
            mset_indexed(s, ascending)
        case SetKind.Ranked:
            mset_ranked(s, ascending)
        case _:
            raise Impossible


def mset_same[T](s: Set[T], template: Set[T]) -> None:
    """Re-express s in the kind and order of template."""
    _mset_convert(s, template.kind, template.ascending)


def _indexed_insert[T](
    data: List[T], index: List[int], value: T, ascending: bool
) -> None:
    slot = binary_search_indexed(data, index, value, ascending).start
    data.append(value)
    index.insert(slot, len(data) - 1)


def _indexed_delete[T](
    data: List[T], index: List[int], value: T, ascending: bool
) -> bool:
    found = binary_search_indexed(data, index, value, ascending)
    if not found:
        return False
    # First match means the lowest position in data
    slot = min(found, key=index.__getitem__)
    removed = index.pop(slot)
    del data[removed]
    for k, entry in enumerate(index):
        if entry > removed:
            index[k] = entry - 1
    return True


def _indexed_delete_all[T](
    data: List[T], index: List[int], value: T, ascending: bool
) -> int:
    found = binary_search_indexed(data, index, value, ascending)
    if not found:
        return 0
    removed = sorted(index[found.start : found.stop])
    del index[found.start : found.stop]
    doomed = [False] * len(data)
    for position in removed:
        doomed[position] = True
    data[:] = [item for item, gone in zip(data, doomed) if not gone]
    # Each surviving position shifts down by the number removed below it
    for k, entry in enumerate(index):
        index[k] = entry - bisect_left(removed, entry)
    return len(removed)


def mset_insert[T](s: Set[T], value: T) -> None:
    """Insert value into s, keeping its representation valid.

    Inserting into an Empty set makes an ascending Ordered singleton.
    """
    match s.kind:
        case SetKind.Empty:
            s.kind = SetKind.Ordered
            s.ascending = True
            s.data.append(value)
        case SetKind.Unordered:
            s.data.append(value)
        case SetKind.Ordered:
            slot = binary_search(s.data, value, s.ascending).start
            s.data.insert(slot, value)
        case SetKind.Indexed:
            _indexed_insert(s.data, s.aux_index, value, s.ascending)
        case SetKind.Ranked:
            _with_sort_index(
                s, lambda data, index, asc: _indexed_insert(data, index, value, asc)
            )
        case _:
            raise Impossible


def mset_delete[T](s: Set[T], value: T) -> bool:
    """Delete the first occurrence of value from s.

    Returns:
        True if an element was removed, False if value was not found.
    """
    match s.kind:
        case SetKind.Empty:
            return False
        case SetKind.Unordered:
            position = linear_member(s.data, value)
            if position is None:
                return False
            last = s.data.pop()
            if position < len(s.data):
                s.data[position] = last
        case SetKind.Ordered:
            found = binary_search(s.data, value, s.ascending)
            if not found:
                return False
            del s.data[found.start]
        case SetKind.Indexed:
            if not _indexed_delete(s.data, s.aux_index, value, s.ascending):
                return False
        case SetKind.Ranked:
            if not _with_sort_index(
                s, lambda data, index, asc: _indexed_delete(data, index, value, asc)
            ):
                return False
        case _:
            raise Impossible
    _mset_settle(s)
    return True


def mset_delete_all[T](s: Set[T], value: T) -> int:
    """Delete every occurrence of value from s.

    Returns:
        The number of elements removed.
    """
    match s.kind:
        case SetKind.Empty:
            return 0
        case SetKind.Unordered:
            before = len(s.data)
            s.data[:] = [item for item in s.data if item != value]
            count = before - len(s.data)
        case SetKind.Ordered:
            found = binary_search(s.data, value, s.ascending)
            del s.data[found.start : found.stop]
            count = len(found)
        case SetKind.Indexed:
            count = _indexed_delete_all(s.data, s.aux_index, value, s.ascending)
        case SetKind.Ranked:
            count = _with_sort_index(
                s,
                lambda data, index, asc: _indexed_delete_all(data, index, value, asc),
            )
        case _:
            raise Impossible
    _mset_settle(s)
    return count


def mset_reverse[T](s: Set[T]) -> None:
    """Reverse the order sense of s.

    Ranked sets take the complement of their ranks, which is not the same
    as reversing the rank array.
    """
    match s.kind:
        case SetKind.Empty:
            return
        case SetKind.Unordered:
            s.data.reverse()
        case SetKind.Ordered:
            s.ascending = not s.ascending
            s.data.reverse()
        case SetKind.Indexed:
            s.ascending = not s.ascending
            s.aux_index.reverse()
        case SetKind.Ranked:
            s.ascending = not s.ascending
            s.aux_index[:] = complement(s.aux_index)
        case _:
            raise Impossible


def mset_dedup[T](s: Set[T]) -> None:
    """Drop repeated elements from s."""
    if len(s.data) < 2:
        return
    match s.kind:
        case SetKind.Unordered:
            s.data.sort()
            s.data[:] = [key for key, _ in groupby(s.data)]
        case SetKind.Ordered:
            unique = [key for key, _ in groupby(_ascending_view(s))]
            if not s.ascending:
                unique.reverse()
            s.data[:] = unique
        case SetKind.Indexed | SetKind.Ranked:
            # Sorted data is described by the trivial index in either role
            s.data[:] = [key for key, _ in groupby(_ascending_view(s))]
            s.aux_index[:] = trivial_index(s.ascending, len(s.data))
        case _:
            raise Impossible


def _mset_combine[T](
    s: Set[T], other: Set[T], op: Callable[[List[T], List[T]], List[T]]
) -> None:
    kind, ascending = s.kind, s.ascending
    theirs = other.to_ordered(True)
    mset_ordered(s, True)
    s.data[:] = op(s.data, theirs.data)
    _mset_convert(s, kind, ascending)
    if kind == SetKind.Unordered:
        s.ascending = ascending
    _mset_settle(s)


def mset_union[T](s: Set[T], other: Set[T]) -> None:
    """Union of s and other, assigned to s.

    Duplicates are kept. Empty is the identity on either side.
    """
    if other.null():
        return
    if s.kind == SetKind.Empty:
        s.kind = other.kind
        s.ascending = other.ascending
        s.data[:] = other.data
        s.aux_index[:] = other.aux_index
        return
    if s.kind.has_index:
        logger.debug(
            "Index-guided union of %d and %d elements", len(s.data), len(other.data)
        )
        data, index = merge_indexed(
            s.data, _ascending_sort_index(s), other.data, _ascending_sort_index(other)
        )
        if not s.ascending:
            index.reverse()
        s.data[:] = data
        s.aux_index[:] = index if s.kind == SetKind.Indexed else invert(index)
        return
    _mset_combine(s, other, merge)


def mset_intersection[T](s: Set[T], other: Set[T]) -> None:
    """Intersection of s and other, assigned to s."""
    if s.kind == SetKind.Empty:
        return
    _mset_combine(s, other, intersect)


def mset_difference[T](s: Set[T], other: Set[T]) -> None:
    """Remove the elements of other from s (s -= other)."""
    if s.kind == SetKind.Empty or other.null():
        return
    _mset_combine(s, other, diff)
