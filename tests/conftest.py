"""
Pytest configuration and shared fixtures.

This file provides common fixtures and configuration for all tests.
"""

import copy
import sys
from pathlib import Path

import pytest
import yaml

# Add src/ to path so tests run without installing the package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from adcs_sim.config.store import ConfigurationStore, get_configuration  # noqa: E402

CONFIGS_DIR = project_root / "configs"


# ============================================================================
# Document Fixtures
# ============================================================================


BASE_DOCUMENT = {
    "Satellite": {
        "Moment": [[2.0, 0.0, 0.0], [0.0, 3.0, 0.0], [0.0, 0.0, 4.0]],
        "Position": [1.0, 2.0, 3.0],
        "Velocity": [0.1, 0.2, 0.3],
    },
    "Actuators": {
        "Wheel1": {
            "type": "ReactionWheel",
            "Moment": 2.0,
            "MaxAngVel": 5,
            "MaxAngAccel": 1,
            "MinAngVel": -5,
            "MinAngAccel": -1,
            "PollingTime": 100,
            "Position": [1, 0, 0],
            "Velocity": 0.5,
            "AxisOfRotation": [0, 0, 1],
            "Acceleration": 0.25,
        },
    },
    "Sensors": {
        "Gyro1": {"type": "Gyroscope", "PollingTime": 10, "Position": [0.1, 0.0, 0.0]},
        "Accel1": {"type": "Accelerometer", "PollingTime": 20, "Position": [0.0, 0.2, 0.0]},
    },
    "VariableTimestep": False,
    "TimeStep": 5,
    "Timeout": 1000,
    "Controller": {
        "DesiredSatellitePosition": [0.0, 0.0, 1.0],
        "AllowedJitter": 0.1,
        "RequiredAccuracy": 0.5,
        "RequiredHoldTime": 2000,
    },
}


@pytest.fixture
def base_document():
    """Provide a valid document as a fresh, mutable dictionary."""
    return copy.deepcopy(BASE_DOCUMENT)


@pytest.fixture
def write_document(tmp_path):
    """Write a document (dict or raw YAML text) and return its path."""
    counter = {"n": 0}

    def _write(document, name=None):
        counter["n"] += 1
        path = tmp_path / (name or f"config_{counter['n']}.yaml")
        text = document if isinstance(document, str) else yaml.safe_dump(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_path(write_document, base_document):
    """Path to a valid configuration document."""
    return write_document(base_document, "simulator.yaml")


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def store():
    """Provide an empty configuration store."""
    return ConfigurationStore()


@pytest.fixture
def loaded_store(store, config_path):
    """Provide a store loaded from the base document."""
    assert store.load(config_path)
    return store


@pytest.fixture
def global_store():
    """Provide a fresh process-wide store, reset after the test."""
    get_configuration.cache_clear()
    yield get_configuration()
    get_configuration.cache_clear()
