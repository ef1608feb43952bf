#!/usr/bin/env python3
"""Record completed matches from JSON files and update player career stats.

Usage:
    python scripts/record_match.py match1.json [match2.json ...]
"""

import sys
import os
import json
import argparse
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy.exc import SQLAlchemyError
from app import create_app, get_services
from engine.exceptions import ValidationError


def record_files(recorder, paths):
    """Record each file; returns the number that failed."""
    failures = 0
    for path in paths:
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"❌ Could not read {path}: {e}")
            failures += 1
            continue

        try:
            match, players = recorder.record_match(payload)
        except ValidationError as e:
            print(f"❌ {path}: invalid match data ({e.field}): {e.message}")
            failures += 1
            continue
        except SQLAlchemyError as e:
            print(f"❌ {path}: database error: {e}")
            failures += 1
            continue

        print(f"✅ {path}: saved match {match.id} ({match.team_a_name} vs {match.team_b_name}), "
              f"{len(players)} players updated")
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description='Record completed matches from JSON files')
    parser.add_argument('paths', nargs='+', help='Match JSON file(s)')
    parser.add_argument('--config', help='Path to config.yaml')
    args = parser.parse_args(argv)

    app = create_app(args.config)
    with app.app_context():
        failures = record_files(get_services(app)["recorder"], args.paths)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
