"""
Vehicle maintenance recommendation engine.

This package evaluates how overdue each tracked maintenance category is for a
vehicle and turns the result into prioritized recommendations:
- PriorityLevel: Urgency levels (LOW, MEDIUM, HIGH, CRITICAL)
- CategoryRule: Mileage/time interval for one maintenance category
- VehicleServiceState: Snapshot of a vehicle's last service per category
- Recommendation: A maintenance action raised by the engine
- VehicleRecord: YAML-backed vehicle with service history
"""

from .errors import ConfigurationError
from .priority import PriorityLevel, PriorityBasis
from .rule import CategoryRule
from .history_entry import HistoryEntry
from .service_state import ServiceRecord, VehicleServiceState
from .recommendation import Recommendation, Skipped, EvaluationResult
from .calculations import classify_priority, mileage_elapsed, months_elapsed
from .engine import (
    evaluate_category,
    evaluate_rules,
    generate_recommendations,
    sort_by_priority,
)
from .defaults import DEFAULT_RULES
from .vehicle import VehicleRecord
from .loader import (
    load_rules,
    load_vehicle,
    save_history_entry,
    save_current_mileage,
    save_recommendations,
    acknowledge_recommendation,
)

__all__ = [
    "ConfigurationError",
    "PriorityLevel",
    "PriorityBasis",
    "CategoryRule",
    "HistoryEntry",
    "ServiceRecord",
    "VehicleServiceState",
    "Recommendation",
    "Skipped",
    "EvaluationResult",
    "classify_priority",
    "mileage_elapsed",
    "months_elapsed",
    "evaluate_category",
    "evaluate_rules",
    "generate_recommendations",
    "sort_by_priority",
    "DEFAULT_RULES",
    "VehicleRecord",
    "load_rules",
    "load_vehicle",
    "save_history_entry",
    "save_current_mileage",
    "save_recommendations",
    "acknowledge_recommendation",
]
