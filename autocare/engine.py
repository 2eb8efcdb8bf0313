"""Maintenance-due evaluation and recommendation assembly."""

import logging
from datetime import date
from typing import Iterable, List, Optional

from .calculations import classify_priority, mileage_elapsed, months_elapsed
from .errors import ConfigurationError
from .priority import PriorityBasis, PriorityLevel
from .recommendation import EvaluationResult, Recommendation, Skipped
from .rule import CategoryRule
from .service_state import VehicleServiceState

logger = logging.getLogger(__name__)


def _priority(
    miles: float,
    months: float,
    rule: CategoryRule,
    basis: PriorityBasis,
) -> PriorityLevel:
    if basis == PriorityBasis.MILEAGE:
        return classify_priority(miles, rule.mileage_interval)
    if basis == PriorityBasis.TIME:
        return classify_priority(months, rule.time_interval_months)
    by_miles = classify_priority(miles, rule.mileage_interval)
    by_time = classify_priority(months, rule.time_interval_months)
    return max(by_miles, by_time, key=lambda level: level.value)


def evaluate_category(
    state: VehicleServiceState,
    rule: CategoryRule,
    now: date,
    basis: PriorityBasis = PriorityBasis.MILEAGE,
) -> Optional[Recommendation]:
    """
    Decide whether one category needs service and build its recommendation.

    Logic:
    - Elapsed miles: current - last service miles (odometer zero if never
      serviced), negative deltas clamp to 0
    - Elapsed months: calendar months since last service date, always due
      when there is no service date
    - Due when either axis reaches its interval (whichever comes first)
    - Priority comes from the mileage axis unless another basis is requested

    Raises ConfigurationError if the rule has a non-positive interval.
    Missing or inconsistent service data never raises.
    """
    rule.validate()

    record = state.service_for(rule.key)
    miles = mileage_elapsed(state.current_mileage, record.last_service_mileage)
    months = months_elapsed(record.last_service_date, now)

    due = miles >= rule.mileage_interval or months >= rule.time_interval_months
    if not due:
        return None

    return Recommendation(
        vehicle_id=state.vehicle_id,
        category=rule.key,
        component=rule.component,
        description=rule.description,
        recommended_date=now,
        recommended_mileage=state.current_mileage,
        priority=_priority(miles, months, rule, basis),
        created_date=now,
        mileage_elapsed=miles,
        months_elapsed=months,
    )


def evaluate_rules(
    state: VehicleServiceState,
    rules: Iterable[CategoryRule],
    now: date,
    basis: PriorityBasis = PriorityBasis.MILEAGE,
) -> EvaluationResult:
    """
    Evaluate every rule in order for one vehicle.

    A rule with a bad interval is reported in `skipped` instead of
    stopping the remaining rules.
    """
    result = EvaluationResult()
    for rule in rules:
        try:
            rec = evaluate_category(state, rule, now, basis)
        except ConfigurationError as e:
            logger.warning(
                "Skipping rule %s for vehicle %s: %s", rule.key, state.vehicle_id, e
            )
            result.skipped.append(Skipped(rule=rule, reason=str(e)))
            continue
        if rec is not None:
            result.recommendations.append(rec)
    logger.debug(
        "Vehicle %s: %d recommendation(s), %d skipped rule(s)",
        state.vehicle_id,
        len(result.recommendations),
        len(result.skipped),
    )
    return result


def generate_recommendations(
    state: VehicleServiceState,
    rules: Iterable[CategoryRule],
    now: date,
    basis: PriorityBasis = PriorityBasis.MILEAGE,
) -> List[Recommendation]:
    """Recommendations for all due categories, in rule order. Empty if none."""
    return evaluate_rules(state, rules, now, basis).recommendations


def sort_by_priority(recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    """Most urgent first; rule order is kept within a priority level."""
    return sorted(recommendations, key=lambda r: -r.priority.value)
