#!/usr/bin/env python3
"""Validate maintenance snapshot files against the schema."""
import sys
from datetime import date
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _dates_to_strings(value):
    # YAML turns unquoted 2024-01-31 into a date; the schema expects strings
    if isinstance(value, dict):
        return {k: _dates_to_strings(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_dates_to_strings(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    return value


def validate_snapshot_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single snapshot file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=_dates_to_strings(data), schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given snapshot files (default: all of snapshots/)."""
    schema = load_schema()
    args = sys.argv[1:] if argv is None else argv

    if args:
        files = [Path(a) for a in args]
    else:
        snapshots_dir = Path(__file__).parent / "snapshots"
        if not snapshots_dir.exists():
            print(f"Error: snapshots directory not found: {snapshots_dir}")
            return 1
        files = sorted(list(snapshots_dir.glob("*.yaml")) + list(snapshots_dir.glob("*.yml")))

    if not files:
        print("Warning: No snapshot files found")
        return 0

    all_valid = True
    for filepath in files:
        errors = validate_snapshot_file(filepath, schema)
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
