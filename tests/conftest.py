"""
Pytest fixtures for PlayerBook testing.
Provides reusable test fixtures for database, app, services, and match payloads.
"""

import copy
import os
import sys

import pytest
import yaml

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app import create_app, get_services
from database import db


# ==================== Application Fixtures ====================

@pytest.fixture(scope="function")
def test_config(tmp_path):
    """Create a temporary config file for testing."""
    config_path = tmp_path / "config.yaml"
    config_data = {
        "database": {
            "uri": "sqlite:///:memory:",  # overridden by PLAYERBOOK_DB_URI below
        },
        "logging": {
            "level": "DEBUG",
            "dir": str(tmp_path / "logs"),
        },
    }

    config_path.write_text(yaml.safe_dump(config_data, sort_keys=False), encoding="utf-8")
    return config_path


@pytest.fixture(scope="function")
def app(test_config, tmp_path, monkeypatch):
    """Create and configure a test Flask application instance."""
    monkeypatch.setenv("PLAYERBOOK_CONFIG_PATH", str(test_config))
    test_db_file = tmp_path / "pytest_app.db"
    monkeypatch.setenv("PLAYERBOOK_DB_URI", f"sqlite:///{test_db_file.as_posix()}")

    app = create_app()
    app.config.update({"TESTING": True})

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def services(app):
    return get_services(app)


@pytest.fixture(scope="function")
def store(services):
    return services["store"]


@pytest.fixture(scope="function")
def recorder(services):
    return services["recorder"]


@pytest.fixture(scope="function")
def stats_service(services):
    return services["stats_service"]


# ==================== Match Payload Fixtures ====================

STRIKERS_XI = ["Arjun", "Bala", "Chetan", "Dev"]
TITANS_XI = ["Ravi", "Sam", "Tariq", "Uday"]


def build_match_payload():
    """A two-innings match between two four-a-side teams."""
    return {
        "teamA": {"name": "Strikers", "xi": list(STRIKERS_XI)},
        "teamB": {"name": "Titans", "xi": list(TITANS_XI)},
        "overs": 5,
        "ballType": "tennis",
        "result": "Strikers won by 12 runs",
        "winner": "Strikers",
        "manOfTheMatch": {"name": "Arjun"},
        "innings": [
            {
                "batsmen": [
                    {"name": "Arjun", "runs": 34, "balls": 20, "fours": 4, "sixes": 1, "status": "c Sam b Ravi"},
                    {"name": "Bala", "runs": 0, "balls": 3, "fours": 0, "sixes": 0, "status": "b Tariq"},
                    {"name": "Chetan", "runs": 12, "balls": 7, "fours": 1, "sixes": 0, "status": "not out"},
                ],
                "bowlers": [
                    {"name": "Ravi", "overs": 2.0, "runs": 18, "wickets": 1},
                    {"name": "Tariq", "overs": 2.3, "runs": 21, "wickets": 1},
                ],
            },
            {
                "batsmen": [
                    {"name": "Ravi", "runs": 25, "balls": 18, "fours": 2, "sixes": 1, "status": "run out"},
                    {"name": "Sam", "runs": 0, "balls": 0, "fours": 0, "sixes": 0, "status": "Not Out"},
                ],
                "bowlers": [
                    {"name": "Dev", "overs": 3.0, "runs": 14, "wickets": 2},
                    {"name": "Arjun", "overs": 1.4, "runs": 11, "wickets": 0},
                ],
            },
        ],
    }


@pytest.fixture(scope="function")
def match_payload():
    """Return a fresh copy of the sample match payload."""
    return copy.deepcopy(build_match_payload())


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
