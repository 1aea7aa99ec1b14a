"""Alert level enumeration for sensor severity."""
from enum import Enum


class AlertLevel(Enum):
    """Ordered alert severities: NONE < LOW < MEDIUM < HIGH."""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def weight(self) -> int:
        """Triangulation weight. LOW is defined but filtered out before weighting."""
        return _WEIGHTS[self]

    def is_elevated(self) -> bool:
        """True for levels that take part in origin triangulation."""
        return self.rank >= AlertLevel.MEDIUM.rank

    def __lt__(self, other):
        if not isinstance(other, AlertLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, AlertLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, AlertLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, AlertLevel):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {
    AlertLevel.NONE: 0,
    AlertLevel.LOW: 1,
    AlertLevel.MEDIUM: 2,
    AlertLevel.HIGH: 3,
}

_WEIGHTS = {
    AlertLevel.NONE: 0,
    AlertLevel.LOW: 1,
    AlertLevel.MEDIUM: 2,
    AlertLevel.HIGH: 3,
}
