from enum import Enum, auto, unique

__all__ = ["SetKind"]


@unique
class SetKind(Enum):
    """The representation a Set is currently held in."""

    Empty = auto()  # No data and no index
    Unordered = auto()  # Data in no particular order
    Ordered = auto()  # Data physically sorted
    Indexed = auto()  # Data in insertion order plus a sort-index
    Ranked = auto()  # Data in insertion order plus a rank-index

    @property
    def has_index(self) -> bool:
        """Check whether sets of this kind carry an auxiliary index."""
        return self in (SetKind.Indexed, SetKind.Ranked)
