"""Sets held in one of four interchangeable representations.

A Set is a tagged value: its kind says how data is laid out and whether
aux_index holds a sort-index (Indexed) or a rank-index (Ranked). The
immutable methods copy and then delegate to the in-place functions in
ordsets.mutable; the queries pick the cheapest valid strategy per kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generator, Iterable, List, Optional, Type, override

from ordsets.common import Impossible, Iterating, Sized
from ordsets.indices import (
    MinMax,
    binary_search,
    binary_search_indexed,
    invert,
    linear_member,
    minmax,
    unindex,
)
from ordsets.kind import SetKind
from ordsets.mutable import (
    mset_dedup,
    mset_delete,
    mset_delete_all,
    mset_difference,
    mset_indexed,
    mset_insert,
    mset_intersection,
    mset_ordered,
    mset_ranked,
    mset_reverse,
    mset_same,
    mset_union,
    mset_unordered,
)

__all__ = ["Set"]


@dataclass
class Set[T](Sized, Iterating[T]):
    """A sequence of comparable elements plus a description of its order.

    Attributes:
        kind: The current representation.
        ascending: The order sense. Carried but meaningless for Unordered.
        data: The elements. Physically sorted only for Ordered.
        aux_index: Sort-index for Indexed, rank-index for Ranked, else empty.
    """

    kind: SetKind = SetKind.Empty
    ascending: bool = True
    data: List[T] = field(default_factory=list)
    aux_index: List[int] = field(default_factory=list)

    @staticmethod
    def new_empty() -> Set[T]:
        """Create a fresh Empty set."""
        return Set()

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> Set[T]:
        """Create an empty set.

        Args:
            _ty: Optional type hint (unused).

        Returns:
            The same as new_empty().
        """
        return Set.new_empty()

    @staticmethod
    def new(kind: SetKind, values: Iterable[T], ascending: bool = True) -> Set[T]:
        """Create a set of any kind from raw values.

        Args:
            kind: The representation to build.
            values: The elements, in any order.
            ascending: The order sense for Ordered, Indexed and Ranked.

        Returns:
            A set satisfying the invariant of kind, or Empty if there are
            no values or kind is Empty.
        """
        s: Set[T] = Set(kind=SetKind.Unordered, data=list(values))
        if not s.data or kind == SetKind.Empty:
            return Set()
        s.mconvert(kind, ascending)
        return s

    @staticmethod
    def new_unordered(values: Iterable[T]) -> Set[T]:
        return Set.new(SetKind.Unordered, values)

    @staticmethod
    def new_ordered(values: Iterable[T], ascending: bool = True) -> Set[T]:
        return Set.new(SetKind.Ordered, values, ascending)

    @staticmethod
    def new_indexed(values: Iterable[T], ascending: bool = True) -> Set[T]:
        return Set.new(SetKind.Indexed, values, ascending)

    @staticmethod
    def new_ranked(values: Iterable[T], ascending: bool = True) -> Set[T]:
        """Create a Ranked set, sorting once and inverting the sort-index."""
        return Set.new(SetKind.Ranked, values, ascending)

    @override
    def size(self) -> int:
        return len(self.data)

    @override
    def iter(self) -> Generator[T]:
        yield from self.data

    def copy(self) -> Set[T]:
        """Copy the set, sharing no storage with the original."""
        return Set(
            kind=self.kind,
            ascending=self.ascending,
            data=list(self.data),
            aux_index=list(self.aux_index),
        )

    def _sort_index(self) -> List[int]:
        # Only meaningful for Indexed and Ranked
        if self.kind == SetKind.Ranked:
            return invert(self.aux_index)
        return self.aux_index

    def ordered(self) -> List[T]:
        """The elements in the set's own order.

        Unordered sets return their data as stored.
        """
        match self.kind:
            case SetKind.Empty:
                return []
            case SetKind.Unordered | SetKind.Ordered:
                return list(self.data)
            case SetKind.Indexed | SetKind.Ranked:
                return unindex(self.data, self._sort_index())
            case _:
                raise Impossible

    # Conversions

    def munordered(self) -> None:
        """Make this set Unordered in place, discarding any index."""
        mset_unordered(self)

    def mordered(self, ascending: bool = True) -> None:
        mset_ordered(self, ascending)

    def mindexed(self, ascending: bool = True) -> None:
        mset_indexed(self, ascending)

    def mranked(self, ascending: bool = True) -> None:
        mset_ranked(self, ascending)

    def mconvert(self, kind: SetKind, ascending: bool = True) -> None:
        """Convert this set in place to the given kind and sense."""
        match kind:
            case SetKind.Empty:
                self.msame(Set())
            case SetKind.Unordered:
                self.munordered()
            case SetKind.Ordered:
                self.mordered(ascending)
            case SetKind.Indexed:
                self.mindexed(ascending)
            case SetKind.Ranked:
                self.mranked(ascending)
            case _:
                raise Impossible

    def msame(self, template: Set[T]) -> None:
        """Re-express this set in place in the kind and order of template."""
        mset_same(self, template)

    def to_unordered(self) -> Set[T]:
        """Copy as Unordered. Any index is thrown away."""
        result = self.copy()
        result.munordered()
        return result

    def to_ordered(self, ascending: bool = True) -> Set[T]:
        result = self.copy()
        result.mordered(ascending)
        return result

    def to_indexed(self, ascending: bool = True) -> Set[T]:
        result = self.copy()
        result.mindexed(ascending)
        return result

    def to_ranked(self, ascending: bool = True) -> Set[T]:
        result = self.copy()
        result.mranked(ascending)
        return result

    def to_same(self, template: Set[T]) -> Set[T]:
        """Copy in the kind and order of template.

        The template only supplies kind and sense; its data is not involved.
        """
        result = self.copy()
        result.msame(template)
        return result

    # Queries

    def infsup(self) -> Optional[MinMax[T]]:
        """Find the minimum and maximum with their positions in data.

        Time Complexity: O(n) for Unordered and Ranked, O(1) otherwise

        Returns:
            None if the set is empty, otherwise the extremes.
        """
        if self.null():
            return None
        last = len(self.data) - 1
        match self.kind:
            case SetKind.Unordered:
                return minmax(self.data)
            case SetKind.Ordered:
                if self.ascending:
                    return MinMax(self.data[0], 0, self.data[last], last)
                else:
                    return MinMax(self.data[last], last, self.data[0], 0)
            case SetKind.Indexed | SetKind.Ranked:
                index = self._sort_index()
                first, final = index[0], index[last]
                if self.ascending:
                    return MinMax(self.data[first], first, self.data[final], final)
                else:
                    return MinMax(self.data[final], final, self.data[first], first)
            case _:
                raise Impossible

    def _find(self, value: T) -> range:
        match self.kind:
            case SetKind.Ordered:
                return binary_search(self.data, value, self.ascending)
            case SetKind.Indexed | SetKind.Ranked:
                return binary_search_indexed(
                    self.data, self._sort_index(), value, self.ascending
                )
            case _:
                raise Impossible

    def search(self, value: T) -> Optional[int]:
        """Search for value.

        Time Complexity: O(n) for Unordered, O(log n) for Ordered and Indexed

        Returns:
            The lowest position in data holding value, or None if absent.
        """
        match self.kind:
            case SetKind.Empty:
                return None
            case SetKind.Unordered:
                return linear_member(self.data, value)
            case SetKind.Ordered:
                found = self._find(value)
                return found.start if found else None
            case SetKind.Indexed | SetKind.Ranked:
                index = self._sort_index()
                found = binary_search_indexed(self.data, index, value, self.ascending)
                return min(index[k] for k in found) if found else None
            case _:
                raise Impossible

    def member(self, value: T) -> bool:
        return self.search(value) is not None

    def __contains__(self, value: T) -> bool:
        return self.member(value)

    def position(self, value: T) -> int:
        """Insertion point of value in the set's order.

        Mostly useful for non-members: the slot of the first element not
        before value. Unordered sets answer len(data) as "not applicable".
        """
        match self.kind:
            case SetKind.Empty:
                return 0
            case SetKind.Unordered:
                return len(self.data)
            case SetKind.Ordered | SetKind.Indexed | SetKind.Ranked:
                return self._find(value).start
            case _:
                raise Impossible

    def count(self, value: T) -> int:
        """Number of occurrences of value."""
        match self.kind:
            case SetKind.Empty:
                return 0
            case SetKind.Unordered:
                return sum(1 for item in self.data if item == value)
            case SetKind.Ordered | SetKind.Indexed | SetKind.Ranked:
                return len(self._find(value))
            case _:
                raise Impossible

    # Mutation

    def minsert(self, value: T) -> None:
        mset_insert(self, value)

    def mdelete(self, value: T) -> bool:
        """Delete the first occurrence of value in place.

        Returns:
            False if value was not found, in which case nothing changed.
        """
        return mset_delete(self, value)

    def mdelete_all(self, value: T) -> int:
        return mset_delete_all(self, value)

    def mreverse(self) -> None:
        mset_reverse(self)

    def mdedup(self) -> None:
        mset_dedup(self)

    mnonrepeat = mdedup

    def insert(self, value: T) -> Set[T]:
        """Copy with value inserted.

        Time Complexity: O(n) for Ordered, Indexed and Ranked, O(1) amortized
        for Unordered (copy aside)
        """
        result = self.copy()
        result.minsert(value)
        return result

    def delete(self, value: T) -> Set[T]:
        """Copy with the first occurrence of value removed.

        Returns an unchanged copy if value is absent.
        """
        result = self.copy()
        result.mdelete(value)
        return result

    def delete_all(self, value: T) -> Set[T]:
        result = self.copy()
        result.mdelete_all(value)
        return result

    def reverse(self) -> Set[T]:
        """Copy with the order sense flipped."""
        result = self.copy()
        result.mreverse()
        return result

    def dedup(self) -> Set[T]:
        result = self.copy()
        result.mdedup()
        return result

    nonrepeat = dedup

    # Algebra

    def munion(self, other: Set[T]) -> None:
        mset_union(self, other)

    def mintersection(self, other: Set[T]) -> None:
        mset_intersection(self, other)

    def mdifference(self, other: Set[T]) -> None:
        mset_difference(self, other)

    def union(self, other: Set[T]) -> Set[T]:
        """Return the union of two sets, keeping duplicates.

        Time Complexity: O(m + n) plus any conversion to ascending order

        Args:
            other: The set to union with this one. Not modified.

        Returns:
            A new set in this set's kind and order.
        """
        result = self.copy()
        result.munion(other)
        return result

    def intersection(self, other: Set[T]) -> Set[T]:
        """Return the intersection of two sets.

        Args:
            other: The set to intersect with this one. Not modified.

        Returns:
            A new set in this set's kind and order holding the elements
            matched one-for-one in both.
        """
        result = self.copy()
        result.mintersection(other)
        return result

    def difference(self, other: Set[T]) -> Set[T]:
        """Return the difference of two sets (elements in self but not in other).

        Args:
            other: The set to subtract from this one. Not modified.

        Returns:
            A new set in this set's kind and order.
        """
        result = self.copy()
        result.mdifference(other)
        return result

    def __or__(self, other: Set[T]) -> Set[T]:
        return self.union(other)

    def __and__(self, other: Set[T]) -> Set[T]:
        return self.intersection(other)

    def __sub__(self, other: Set[T]) -> Set[T]:
        return self.difference(other)
