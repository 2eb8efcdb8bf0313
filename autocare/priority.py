"""Priority enums for maintenance recommendations."""

from enum import Enum


class PriorityLevel(Enum):
    """Recommendation urgency. Higher value = more urgent."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class PriorityBasis(Enum):
    """Which elapsed/interval axis drives priority once a category is due."""

    MILEAGE = "mileage"
    TIME = "time"
    WORST = "worst"  # more urgent of the two axes
