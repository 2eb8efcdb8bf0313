"""VehicleRecord class - a stored vehicle and its maintenance history."""

from datetime import date
from dateutil.parser import isoparse
from typing import Any, Dict, List, Optional

from .errors import ConfigurationError
from .history_entry import HistoryEntry
from .service_state import ServiceRecord, VehicleServiceState


def parse_service_date(entry: HistoryEntry) -> Optional[date]:
    """
    Date part of a history entry's ISO date or timestamp.

    Raises ConfigurationError when the value is not an ISO date.
    """
    if not entry.date:
        return None
    try:
        return isoparse(str(entry.date)).date()
    except ValueError as e:
        raise ConfigurationError(
            f"{entry.category}: invalid service date '{entry.date}'"
        ) from e


class VehicleRecord:
    """Vehicle identity, odometer state, service history and saved recommendations."""

    def __init__(
        self,
        vehicle_id: Any,
        name: Optional[str] = None,
        history: Optional[List[HistoryEntry]] = None,
        state_current_mileage: Optional[float] = None,
        recommendations: Optional[List[Dict[str, Any]]] = None,
    ):
        self.vehicle_id = vehicle_id
        self.name = name or str(vehicle_id)
        self.history = history or []
        self._state_current_mileage = state_current_mileage
        self.recommendations = recommendations or []

    @property
    def current_mileage(self) -> float:
        """Current mileage, auto-computed from history if not explicitly set."""
        if self._state_current_mileage is not None:
            return self._state_current_mileage
        miles_from_history = [h.mileage for h in self.history if h.mileage is not None]
        if miles_from_history:
            return max(miles_from_history)
        return 0

    @property
    def categories(self) -> List[str]:
        """Category keys with at least one history entry, in first-seen order."""
        seen: List[str] = []
        for h in self.history:
            if h.category not in seen:
                seen.append(h.category)
        return seen

    def get_history_for_category(self, category: str) -> List[HistoryEntry]:
        """Get all history entries for a specific category."""
        return [h for h in self.history if h.category == category]

    def get_last_service(self, category: str) -> Optional[HistoryEntry]:
        """Get the most recent service for a category (mileage breaks date ties)."""
        entries = self.get_history_for_category(category)
        if not entries:
            return None
        return max(entries, key=lambda h: (h.date, h.mileage or 0))

    def get_history_sorted(
        self, sort_by: str = "date", reverse: bool = True
    ) -> List[HistoryEntry]:
        """
        Get history entries sorted by specified field.

        Args:
            sort_by: "date", "miles", or "category"
            reverse: If True, newest/highest first (default)
        """
        if sort_by == "date":
            return sorted(self.history, key=lambda h: h.date, reverse=reverse)
        elif sort_by == "miles":
            return sorted(self.history, key=lambda h: h.mileage or 0, reverse=reverse)
        elif sort_by == "category":
            return sorted(
                self.history, key=lambda h: (h.category, h.date), reverse=reverse
            )
        return self.history

    def service_state(self, now: date) -> VehicleServiceState:
        """Snapshot the last service per category for the recommendation engine."""
        services = {}
        for category in self.categories:
            last = self.get_last_service(category)
            services[category] = ServiceRecord(
                last_service_date=parse_service_date(last),
                last_service_mileage=last.mileage,
            )
        return VehicleServiceState(
            vehicle_id=self.vehicle_id,
            current_mileage=self.current_mileage,
            current_date=now,
            services=services,
        )
