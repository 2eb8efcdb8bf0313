"""Result types produced by the recommendation engine."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .priority import PriorityLevel

if TYPE_CHECKING:
    from .rule import CategoryRule

AUTO_GENERATED_NOTE = "Auto-generated recommendation"


@dataclass(frozen=True)
class Recommendation:
    """A maintenance action raised for one category of one vehicle."""

    vehicle_id: Any
    category: str
    component: str
    description: str
    recommended_date: date
    recommended_mileage: float
    priority: PriorityLevel
    created_date: date
    notes: str = AUTO_GENERATED_NOTE
    mileage_elapsed: Optional[float] = None
    months_elapsed: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the YAML/JSON dict format (camelCase keys, ISO dates)."""
        return {
            "vehicleId": self.vehicle_id,
            "category": self.category,
            "component": self.component,
            "description": self.description,
            "recommendedDate": self.recommended_date.isoformat(),
            "recommendedMileage": self.recommended_mileage,
            "priority": self.priority.label,
            "createdDate": self.created_date.isoformat(),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Skipped:
    """A rule that could not be evaluated, and why."""

    rule: "CategoryRule"
    reason: str


@dataclass
class EvaluationResult:
    """Recommendations for one vehicle plus any rules that were skipped."""

    recommendations: List[Recommendation] = field(default_factory=list)
    skipped: List[Skipped] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped
