"""
Shared pytest fixtures for clinic directory tests.
"""
import pytest
from fastapi.testclient import TestClient

import main
from main import app
from models import normalize_clinic
from seed import seed_data
from session import DirectorySession
from source import ClinicSource


# Two-clinic dataset used by the end-to-end filter scenarios
SCENARIO_RECORDS = [
    {"id": "dt", "name": "Downtown Health", "phone": "555-0001", "services": ["Dental"]},
    {"id": "up", "name": "Uptown Clinic", "phone": "555-0002", "services": ["Cardio"]},
]


@pytest.fixture
def client():
    """FastAPI TestClient."""
    return TestClient(app)


@pytest.fixture
def seeded_data():
    """
    Reset the store to seed data and give the API a freshly mounted page.
    Seed: CLIN-001 Downtown Health Clinic, CLIN-002 Uptown Family Practice,
    CLIN-003 Riverside Cardiology, CLIN-004 Lakeside Dental Care.
    """
    seed_data()
    main.session.reset()
    yield
    seed_data()
    main.session.reset()


@pytest.fixture
def scenario_source():
    """Data source holding only the two scenario clinics (own store, not the global one)."""
    return ClinicSource([normalize_clinic(r) for r in SCENARIO_RECORDS])


@pytest.fixture
def session(scenario_source):
    """Directory page loaded from the scenario source."""
    return DirectorySession(scenario_source)


def visible_names(session):
    """Helper: names of the visible clinics, in order."""
    return [c.name for c in session.visible()]


def marked(segments):
    """Helper: the matched pieces of a list of segment dicts or Segments."""
    out = []
    for s in segments:
        if isinstance(s, dict):
            if s["isMatch"]:
                out.append(s["text"])
        elif s.is_match:
            out.append(s.text)
    return out
