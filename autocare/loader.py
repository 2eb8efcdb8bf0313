"""YAML loading and saving utilities for rules and vehicle files."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import yaml
from jsonschema import FormatChecker, validate, ValidationError

from .errors import ConfigurationError
from .history_entry import HistoryEntry
from .recommendation import Recommendation
from .rule import CategoryRule
from .vehicle import VehicleRecord

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"


@lru_cache(maxsize=None)
def _load_schemas() -> Dict[str, Any]:
    with open(SCHEMA_PATH) as fp:
        return yaml.safe_load(fp)


def load_schema(name: str) -> Dict[str, Any]:
    """Return the JSON schema for a file kind ("rules" or "vehicle")."""
    return _load_schemas()[name]


def _read_yaml(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_yaml(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _parse_object(dct: Dict[str, Any]) -> Union[HistoryEntry, VehicleRecord, dict]:
    """Parse dictionary into appropriate object type."""
    # History entry
    if "category" in dct and "date" in dct:
        return HistoryEntry(
            dct["category"],
            dct["date"],
            dct.get("mileage"),
            dct.get("performedBy"),
            dct.get("notes"),
            dct.get("cost"),
        )
    # Top-level vehicle object
    elif "vehicle" in dct:
        meta = dct["vehicle"] or {}
        return VehicleRecord(
            meta.get("id"),
            meta.get("name"),
            dct.get("history"),
            meta.get("currentMileage"),
            dct.get("recommendations"),
        )
    else:
        # Vehicle metadata and saved recommendations stay plain dicts
        return dct


def load_vehicle(filename: Union[str, Path]) -> VehicleRecord:
    """Load a vehicle from a YAML file."""
    with open(filename, "rb") as fp:
        # default=str turns unquoted YAML dates into ISO strings
        json_data = json.dumps(
            yaml.load(fp, Loader=yaml.SafeLoader), indent=4, default=str
        )
        return json.loads(json_data, object_hook=_parse_object)


def _rule_from_dict(dct: Dict[str, Any]) -> CategoryRule:
    return CategoryRule(
        dct["component"],
        dct["mileageInterval"],
        dct["timeIntervalMonths"],
        dct.get("description"),
        dct.get("key"),
    )


def _rule_to_dict(rule: CategoryRule) -> Dict[str, Any]:
    """Serialize a CategoryRule to the YAML dict format (camelCase keys)."""
    return {
        "key": rule.key,
        "component": rule.component,
        "description": rule.description,
        "mileageInterval": rule.mileage_interval,
        "timeIntervalMonths": rule.time_interval_months,
    }


def load_rules(filename: Union[str, Path]) -> List[CategoryRule]:
    """
    Load maintenance category rules from a YAML file.

    The file is checked against the rules schema and every rule must have
    positive intervals; otherwise ConfigurationError is raised, so a bad
    rule never reaches evaluation.
    """
    try:
        data = _read_yaml(filename)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read rules file {filename}: {e}") from e

    try:
        validate(
            instance=data, schema=load_schema("rules"), format_checker=FormatChecker()
        )
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        raise ConfigurationError(
            f"{filename}: {e.message}" + (f" (at {where})" if where else "")
        ) from e

    rules = [_rule_from_dict(d) for d in data["rules"]]
    keys = set()
    for rule in rules:
        rule.validate()
        if rule.key in keys:
            raise ConfigurationError(
                f"{filename}: duplicate rule key '{rule.key}'", rule=rule.key
            )
        keys.add(rule.key)
    logger.debug("Loaded %d rule(s) from %s", len(rules), filename)
    return rules


def save_rules(filename: Union[str, Path], rules: Iterable[CategoryRule]) -> None:
    """Write rules to a YAML file in the format load_rules reads."""
    _write_yaml(filename, {"rules": [_rule_to_dict(r) for r in rules]})


def save_history_entry(filename: Union[str, Path], entry: HistoryEntry) -> None:
    """
    Append a history entry to a vehicle YAML file.

    Loads the raw YAML, appends the entry to the history list,
    and writes back to the file.
    """
    data = _read_yaml(filename)

    if data.get("history") is None:
        data["history"] = []

    # Omit None values for cleaner YAML
    entry_dict: Dict[str, Any] = {"category": entry.category, "date": entry.date}
    if entry.mileage is not None:
        entry_dict["mileage"] = entry.mileage
    if entry.performed_by is not None:
        entry_dict["performedBy"] = entry.performed_by
    if entry.notes is not None:
        entry_dict["notes"] = entry.notes
    if entry.cost is not None:
        entry_dict["cost"] = entry.cost

    data["history"].append(entry_dict)
    _write_yaml(filename, data)


def save_current_mileage(filename: Union[str, Path], miles: float) -> None:
    """Update vehicle.currentMileage in a vehicle YAML file."""
    data = _read_yaml(filename)

    if data.get("vehicle") is None:
        data["vehicle"] = {}
    data["vehicle"]["currentMileage"] = miles

    _write_yaml(filename, data)


def save_recommendations(
    filename: Union[str, Path], recommendations: Iterable[Recommendation]
) -> int:
    """
    Append recommendations to a vehicle YAML file.

    A recommendation is skipped when an unacknowledged one for the same
    category is already stored. Returns the number added.
    """
    data = _read_yaml(filename)

    if data.get("recommendations") is None:
        data["recommendations"] = []
    stored = data["recommendations"]
    open_categories = {r.get("category") for r in stored if not r.get("acknowledged")}

    added = 0
    for rec in recommendations:
        if rec.category in open_categories:
            logger.debug("Already recommended: %s", rec.category)
            continue
        rec_dict = rec.to_dict()
        rec_dict["acknowledged"] = False
        stored.append(rec_dict)
        open_categories.add(rec.category)
        added += 1

    _write_yaml(filename, data)
    return added


def acknowledge_recommendation(filename: Union[str, Path], index: int) -> None:
    """Mark the stored recommendation at the given index as acknowledged."""
    data = _read_yaml(filename)

    stored = data.get("recommendations") or []
    if index < 0 or index >= len(stored):
        raise IndexError(
            f"Recommendation index {index} out of range (0..{len(stored) - 1})"
        )

    stored[index]["acknowledged"] = True
    _write_yaml(filename, data)
