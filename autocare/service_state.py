"""Service state snapshot consumed by the recommendation engine."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ServiceRecord:
    """Last known service for one category. None means never serviced."""

    last_service_date: Optional[date] = None
    last_service_mileage: Optional[float] = None


NEVER_SERVICED = ServiceRecord()


@dataclass(frozen=True)
class VehicleServiceState:
    """A vehicle's odometer reading and last service per category key."""

    vehicle_id: Any
    current_mileage: float
    current_date: date
    services: Dict[str, ServiceRecord] = field(default_factory=dict)

    def service_for(self, key: str) -> ServiceRecord:
        return self.services.get(key, NEVER_SERVICED)
