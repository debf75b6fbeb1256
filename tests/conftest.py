"""Shared pytest configuration and fixtures for patient-resolver tests."""

import json
import csv
import logging
import tempfile
from pathlib import Path
from typing import List

import pytest

from patient_resolver import secure_logging
from patient_resolver.matching import FuzzyNameMatcher, PatientRecord, PatientSearchStrategy


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_roster() -> List[PatientRecord]:
    """A small ward roster with overlapping surnames and room suffixes."""
    return [
        PatientRecord(id=1, room="2A-208", name="Sarah Johnson"),
        PatientRecord(id=2, room="2B-415", name="Maria Santos"),
        PatientRecord(id=3, room="3C-312", name="James Johnson"),
        PatientRecord(id=4, room="2A-312", name="Robert Chen"),
        PatientRecord(id=5, room="4D-101", name="Sara Williams"),
    ]


@pytest.fixture
def sample_roster_rows(sample_roster):
    """The sample roster as plain mappings, as a roster file would provide it."""
    return [patient.to_dict() for patient in sample_roster]


@pytest.fixture
def roster_files(temp_dir, sample_roster_rows):
    """Write the sample roster as JSON and CSV files."""
    json_path = temp_dir / "roster.json"
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(sample_roster_rows, f)

    csv_path = temp_dir / "roster.csv"
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=["id", "room", "name"])
        writer.writeheader()
        writer.writerows(sample_roster_rows)

    return {"json": json_path, "csv": csv_path}


@pytest.fixture
def fuzzy_matcher():
    """Create a FuzzyNameMatcher with default settings."""
    return FuzzyNameMatcher()


@pytest.fixture
def search_strategy(fuzzy_matcher):
    """Create a PatientSearchStrategy with default settings."""
    return PatientSearchStrategy(fuzzy_matcher=fuzzy_matcher)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Isolate tests from resolver environment variables and global logging state."""
    for key in (
        "PATIENT_RESOLVER_LOG_LEVEL",
        "PATIENT_RESOLVER_LOG_FILE",
        "PATIENT_RESOLVER_PRODUCTION_LOGGING",
    ):
        monkeypatch.delenv(key, raising=False)

    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    saved_mode = secure_logging._PRODUCTION_MODE

    yield

    # Drop handlers added by configure_secure_logging during the test
    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers and isinstance(handler, (logging.FileHandler, logging.StreamHandler)) \
                and type(handler).__module__.startswith("logging"):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(saved_level)
    secure_logging._PRODUCTION_MODE = saved_mode


# Test markers for different test categories
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def ids(patients) -> List[int]:
    return [patient.id for patient in patients]


@pytest.fixture
def patient_ids():
    """Helper that maps a list of patients to their ids."""
    return ids
