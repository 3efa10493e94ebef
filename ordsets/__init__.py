from ordsets.common import Flip, Impossible, Ordering
from ordsets.indices import MinMax
from ordsets.kind import SetKind
from ordsets.set import Set

__all__ = [
    "Flip",
    "Impossible",
    "MinMax",
    "Ordering",
    "Set",
    "SetKind",
]
