"""
Unit tests for config.store.

Tests loading, all-or-nothing semantics, lookups and getters.
"""

import logging

import numpy as np
import pytest

from adcs_sim.config.models import GyroscopeConfig, ReactionWheelConfig
from adcs_sim.config.store import ConfigurationStore, get_configuration
from adcs_sim.core.exceptions import ConfigFileError, ParseError, UnknownTypeError


@pytest.mark.unit
class TestDefaults:
    """Test getters before any load."""

    def test_not_loaded(self, store):
        assert store.is_loaded is False
        assert store.source_path is None
        assert store.last_error is None
        assert store.exit_error is None
        assert store.exit_snapshot is None

    def test_satellite_getters_are_zero(self, store):
        np.testing.assert_array_equal(store.get_satellite_moment(), np.zeros((3, 3)))
        np.testing.assert_array_equal(store.get_satellite_position(), np.zeros(3))
        np.testing.assert_array_equal(store.get_satellite_velocity(), np.zeros(3))
        np.testing.assert_array_equal(store.get_desired_satellite_position(), np.zeros(3))

    def test_scalar_getters_are_zero(self, store):
        assert store.get_timestep_ms() == 0
        assert store.get_timestep_decision() is False
        assert store.get_min_timestep() == 0.0
        assert store.get_max_timestep() == 0.0
        assert store.get_timeout() == 0
        assert store.get_allowed_jitter() == 0.0
        assert store.get_required_accuracy() == 0.0
        assert store.get_hold_time() == 0

    def test_lookups_absent(self, store):
        assert store.get_sensor_config("Gyro1") is None
        assert store.get_actuator_config("Wheel1") is None
        assert len(store.get_sensor_configs()) == 0
        assert len(store.get_actuator_configs()) == 0


@pytest.mark.unit
class TestLoad:
    """Test successful loads and round-trip fidelity."""

    def test_load_succeeds(self, store, config_path):
        assert store.load(config_path) is True
        assert store.is_loaded
        assert store.source_path == config_path
        assert store.last_error is None

    def test_sensor_round_trip(self, loaded_store, base_document):
        for name, entry in base_document["Sensors"].items():
            record = loaded_store.get_sensor_config(name)
            assert record.type.value == entry["type"]
            assert record.polling_time == entry["PollingTime"]
            assert list(record.position) == entry["Position"]

    def test_actuator_round_trip(self, loaded_store, base_document):
        entry = base_document["Actuators"]["Wheel1"]
        record = loaded_store.get_actuator_config("Wheel1")

        assert isinstance(record, ReactionWheelConfig)
        assert record.moment_of_inertia == entry["Moment"]
        assert record.max_ang_vel == entry["MaxAngVel"]
        assert record.max_ang_accel == entry["MaxAngAccel"]
        assert record.min_ang_vel == entry["MinAngVel"]
        assert record.min_ang_accel == entry["MinAngAccel"]
        assert record.polling_time == entry["PollingTime"]
        assert list(record.position) == entry["Position"]
        assert list(record.axis_of_rotation) == entry["AxisOfRotation"]
        assert record.velocity == entry["Velocity"]
        assert record.acceleration == entry["Acceleration"]

    def test_satellite_round_trip(self, loaded_store, base_document):
        sat = base_document["Satellite"]

        np.testing.assert_array_equal(loaded_store.get_satellite_moment(), sat["Moment"])
        np.testing.assert_array_equal(loaded_store.get_satellite_position(), sat["Position"])
        np.testing.assert_array_equal(loaded_store.get_satellite_velocity(), sat["Velocity"])
        assert loaded_store.get_timestep_ms() == 5
        assert loaded_store.get_timestep_decision() is False
        assert loaded_store.get_timeout() == 1000

    def test_controller_round_trip(self, loaded_store, base_document):
        ctrl = base_document["Controller"]

        np.testing.assert_array_equal(
            loaded_store.get_desired_satellite_position(), ctrl["DesiredSatellitePosition"]
        )
        assert loaded_store.get_allowed_jitter() == ctrl["AllowedJitter"]
        assert loaded_store.get_required_accuracy() == ctrl["RequiredAccuracy"]
        assert loaded_store.get_hold_time() == ctrl["RequiredHoldTime"]

    def test_lookup_returns_shared_record(self, loaded_store):
        first = loaded_store.get_sensor_config("Gyro1")
        second = loaded_store.get_sensor_configs()["Gyro1"]

        assert first is second
        assert isinstance(first, GyroscopeConfig)

    def test_unknown_name_is_absent(self, loaded_store):
        assert loaded_store.get_sensor_config("undefined_name") is None
        assert loaded_store.get_actuator_config("undefined_name") is None

    def test_load_logs_summary(self, store, config_path, caplog):
        caplog.set_level(logging.INFO, logger="adcs_sim")
        store.load(config_path)
        assert "2 sensor(s), 1 actuator(s)" in caplog.text


@pytest.mark.unit
class TestReadOnlyViews:
    """Test that callers cannot mutate shared configuration."""

    def test_mapping_views_reject_writes(self, loaded_store):
        with pytest.raises(TypeError):
            loaded_store.get_sensor_configs()["New"] = None
        with pytest.raises(TypeError):
            del loaded_store.get_actuator_configs()["Wheel1"]

    def test_arrays_reject_writes(self, loaded_store):
        moment = loaded_store.get_satellite_moment()
        with pytest.raises(ValueError):
            moment[0, 0] = 99.0

        position = loaded_store.get_satellite_position()
        with pytest.raises(ValueError):
            position += 1.0

    def test_copies_do_not_drift(self, loaded_store):
        moment = loaded_store.get_satellite_moment().copy()
        moment[0, 0] = 99.0
        assert loaded_store.get_satellite_moment()[0, 0] == 2.0


@pytest.mark.unit
class TestFailedLoad:
    """Test that failed loads leave the store unchanged."""

    def test_bad_position_keeps_previous_state(self, loaded_store, write_document, base_document):
        previous = loaded_store.snapshot
        base_document["Sensors"]["Gyro1"]["Position"] = [1, 2]
        bad_path = write_document(base_document)

        assert loaded_store.load(bad_path) is False
        assert isinstance(loaded_store.last_error, ParseError)
        assert loaded_store.snapshot is previous
        assert loaded_store.get_sensor_config("Gyro1").position == (0.1, 0.0, 0.0)

    def test_bad_position_on_empty_store(self, store, write_document, base_document):
        base_document["Sensors"]["Gyro1"]["Position"] = [1, 2, 3, 4]

        assert store.load(write_document(base_document)) is False
        assert store.is_loaded is False
        assert len(store.get_sensor_configs()) == 0
        assert store.get_timeout() == 0

    def test_unknown_type_reports_failure(self, loaded_store, write_document, base_document):
        base_document["Sensors"]["Star1"] = {
            "type": "StarTracker",
            "PollingTime": 1,
            "Position": [0, 0, 0],
        }

        assert loaded_store.load(write_document(base_document)) is False
        assert isinstance(loaded_store.last_error, UnknownTypeError)
        assert loaded_store.get_sensor_config("Star1") is None

    def test_missing_file_reports_failure(self, store, tmp_path, caplog):
        assert store.load(tmp_path / "nope.yaml") is False
        assert isinstance(store.last_error, ConfigFileError)
        assert "Failed to load configuration" in caplog.text

    def test_success_clears_last_error(self, store, tmp_path, config_path):
        store.load(tmp_path / "nope.yaml")
        assert store.load(config_path)
        assert store.last_error is None

    def test_complex_key_reports_parse_error(self, loaded_store, write_document):
        path = write_document(
            "Satellite:\n"
            "  Moment: [[1, 0, 0], [0, 1, 0], [0, 0, 1]]\n"
            "  Position: [0, 0, 0]\n"
            "  Velocity: [0, 0, 0]\n"
            "TimeStep: 1\n"
            "Sensors:\n"
            "  ? [a, b]\n"
            "  : {type: Gyroscope, PollingTime: 1, Position: [0, 0, 0]}\n"
        )

        assert loaded_store.load(path) is False
        assert isinstance(loaded_store.last_error, ParseError)
        assert "scalar" in str(loaded_store.last_error)
        assert loaded_store.get_sensor_config("Gyro1") is not None


@pytest.mark.unit
class TestReload:
    """Test that a second load fully supersedes the first."""

    def test_second_load_replaces_first(self, loaded_store, write_document):
        second = {
            "Satellite": {
                "Moment": [[1, 0, 0], [0, 1, 0], [0, 0, 1]],
                "Position": [0, 0, 0],
                "Velocity": [0, 0, 0],
            },
            "Sensors": {"Gyro9": {"type": "Gyroscope", "PollingTime": 7, "Position": [0, 0, 1]}},
            "VariableTimestep": True,
            "TimeStepMin": 2,
            "TimeStepMax": 20,
        }

        assert loaded_store.load(write_document(second))

        assert set(loaded_store.get_sensor_configs()) == {"Gyro9"}
        assert len(loaded_store.get_actuator_configs()) == 0
        assert loaded_store.get_sensor_config("Gyro1") is None
        assert loaded_store.get_timestep_decision() is True
        assert loaded_store.get_timestep_ms() == 0
        assert loaded_store.get_timeout() == 0
        assert loaded_store.get_hold_time() == 0
        np.testing.assert_array_equal(loaded_store.get_satellite_moment(), np.eye(3))


@pytest.mark.unit
class TestExitFile:
    """Test the separate exit configuration document."""

    def test_exit_file_kept_apart(self, loaded_store, write_document, base_document):
        base_document["Sensors"] = {
            "ExitGyro": {"type": "Gyroscope", "PollingTime": 50, "Position": [0, 0, 0]}
        }
        base_document["Timeout"] = 5

        assert loaded_store.load_exit_file(write_document(base_document))

        assert set(loaded_store.exit_snapshot.sensors) == {"ExitGyro"}
        assert loaded_store.exit_snapshot.timeout_ms == 5
        assert loaded_store.get_sensor_config("ExitGyro") is None
        assert loaded_store.get_timeout() == 1000

    def test_exit_file_alone_does_not_mark_loaded(self, store, config_path):
        assert store.load_exit_file(config_path)
        assert store.is_loaded is False
        assert store.exit_snapshot.source_path == config_path

    def test_failed_exit_file_keeps_previous(self, store, config_path, write_document):
        assert store.load_exit_file(config_path)
        previous = store.exit_snapshot

        assert store.load_exit_file(write_document({"Satellite": None})) is False
        assert isinstance(store.exit_error, ParseError)
        assert store.last_error is None
        assert store.exit_snapshot is previous

    def test_exit_success_keeps_primary_failure(self, store, tmp_path, config_path):
        assert store.load(tmp_path / "nope.yaml") is False
        assert store.load_exit_file(config_path)

        assert isinstance(store.last_error, ConfigFileError)
        assert store.exit_error is None

    def test_primary_success_keeps_exit_failure(self, store, tmp_path, config_path):
        assert store.load_exit_file(tmp_path / "nope.yaml") is False
        assert store.load(config_path)

        assert isinstance(store.exit_error, ConfigFileError)
        assert store.last_error is None


@pytest.mark.unit
class TestProcessWideStore:
    """Test the lazily created shared store."""

    def test_same_instance_every_call(self, global_store):
        assert get_configuration() is global_store
        assert get_configuration() is get_configuration()

    def test_starts_empty(self, global_store):
        assert isinstance(global_store, ConfigurationStore)
        assert global_store.is_loaded is False

    def test_load_visible_to_every_caller(self, global_store, config_path):
        assert get_configuration().load(config_path)
        assert global_store.get_sensor_config("Gyro1") is not None
