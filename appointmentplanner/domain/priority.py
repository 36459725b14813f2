"""
Priority levels used to rank appointments.
"""

from enum import Enum
from functools import total_ordering


@total_ordering
class Priority(Enum):
    """
    Closed set of appointment priorities, ordered LOW < MEDIUM < HIGH.

    The member values only carry the declaration order; they are not a
    numeric weight.
    """
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.value < other.value

    @classmethod
    def from_name(cls, name: str) -> "Priority":
        """Resolve a member by its case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            allowed = ", ".join(member.name for member in cls)
            raise ValueError(f"Unknown priority '{name}', expected one of: {allowed}") from None
