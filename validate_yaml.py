#!/usr/bin/env python3
"""Validate rules and vehicle YAML files against their schemas."""
import json
import sys
from pathlib import Path

import yaml
from jsonschema import FormatChecker, validate, ValidationError

from autocare.loader import load_schema


def detect_kind(data) -> str:
    """'rules' for a rules file, otherwise 'vehicle'."""
    if isinstance(data, dict) and "rules" in data:
        return "rules"
    return "vehicle"


def validate_file(filepath: Path) -> list[str]:
    """Validate a single rules or vehicle YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        # Unquoted YAML dates load as date objects; schemas expect strings
        data = json.loads(json.dumps(data, default=str))
        validate(
            instance=data,
            schema=load_schema(detect_kind(data)),
            format_checker=FormatChecker(),
        )
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except (OSError, UnicodeDecodeError) as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given YAML files, or every file in vehicles/."""
    argv = sys.argv[1:] if argv is None else argv
    if argv:
        yaml_files = [Path(p) for p in argv]
    else:
        vehicles_dir = Path.cwd() / "vehicles"
        if not vehicles_dir.exists():
            print(f"Error: vehicles directory not found: {vehicles_dir}")
            return 1
        yaml_files = sorted(
            list(vehicles_dir.glob("*.yaml")) + list(vehicles_dir.glob("*.yml"))
        )

    if not yaml_files:
        print("Warning: No YAML files found")
        return 0

    all_valid = True
    for filepath in yaml_files:
        errors = validate_file(filepath)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
