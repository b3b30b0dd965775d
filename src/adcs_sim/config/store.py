"""
Configuration Store

Holds the satellite's hardware configuration for the lifetime of the
process. A store is populated by ``load`` and is read-only afterwards:
every getter returns either an immutable value, a frozen record, a
read-only mapping view or a read-only numpy array.

Usage:
    from adcs_sim.config import ConfigurationStore

    store = ConfigurationStore()
    if not store.load("configs/simulator.yaml"):
        raise SystemExit(1)

    gyro = store.get_sensor_config("Gyro1")
    inertia = store.get_satellite_moment()

A process-wide instance is available through ``get_configuration()`` for
code that cannot be handed a store explicitly.
"""

import functools
import logging
from pathlib import Path
from typing import Mapping, Optional, Tuple

import numpy as np

from adcs_sim.config.loader import ConfigurationSnapshot, PathLike, load_document
from adcs_sim.config.models import ActuatorRecord, SensorRecord, readonly_array
from adcs_sim.core.exceptions import ADCSException, format_exception_message

logger = logging.getLogger(__name__)


class ConfigurationStore:
    """
    Validated sensor, actuator and satellite configuration.

    Loads are all-or-nothing: a failed load leaves the previous snapshot in
    place, a successful one replaces it entirely.
    """

    def __init__(self) -> None:
        self._snapshot = ConfigurationSnapshot()
        self._exit_snapshot: Optional[ConfigurationSnapshot] = None
        self._loaded = False
        # Failure of the most recent load / load_exit_file respectively
        self.last_error: Optional[ADCSException] = None
        self.exit_error: Optional[ADCSException] = None

    # ========================================================================
    # LOADING
    # ========================================================================

    @staticmethod
    def _read(
        path: PathLike, label: str
    ) -> Tuple[Optional[ConfigurationSnapshot], Optional[ADCSException]]:
        try:
            return load_document(path), None
        except ADCSException as e:
            logger.error(f"Failed to load {label} {path}: {format_exception_message(e)}")
            return None, e

    def load(self, path: PathLike) -> bool:
        """
        Load the primary configuration document.

        Args:
            path: Path to the YAML document

        Returns:
            True on success. On failure the store is unchanged and the
            exception is available as ``last_error``.
        """
        snapshot, self.last_error = self._read(path, "configuration")
        if snapshot is None:
            return False

        self._snapshot = snapshot
        self._loaded = True
        logger.info(
            f"Loaded configuration from {path}: "
            f"{len(snapshot.sensors)} sensor(s), {len(snapshot.actuators)} actuator(s)"
        )
        return True

    def load_exit_file(self, path: PathLike) -> bool:
        """
        Load the exit (teardown) configuration document.

        Parsed with the same rules as ``load`` but kept apart from the
        primary configuration, which is never modified by this call.

        Args:
            path: Path to the YAML document

        Returns:
            True on success, False otherwise (see ``exit_error``).
        """
        snapshot, self.exit_error = self._read(path, "exit configuration")
        if snapshot is None:
            return False

        self._exit_snapshot = snapshot
        logger.info(f"Loaded exit configuration from {path}")
        return True

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def source_path(self) -> Optional[Path]:
        return self._snapshot.source_path

    @property
    def snapshot(self) -> ConfigurationSnapshot:
        """The current primary snapshot (immutable)."""
        return self._snapshot

    @property
    def exit_snapshot(self) -> Optional[ConfigurationSnapshot]:
        """The exit snapshot, or None until ``load_exit_file`` succeeds."""
        return self._exit_snapshot

    # ========================================================================
    # COMPONENT LOOKUP
    # ========================================================================

    def get_sensor_config(self, name: str) -> Optional[SensorRecord]:
        """Return the sensor record for ``name``, or None if not configured."""
        return self._snapshot.sensors.get(name)

    def get_actuator_config(self, name: str) -> Optional[ActuatorRecord]:
        """Return the actuator record for ``name``, or None if not configured."""
        return self._snapshot.actuators.get(name)

    def get_sensor_configs(self) -> Mapping[str, SensorRecord]:
        return self._snapshot.sensors

    def get_actuator_configs(self) -> Mapping[str, ActuatorRecord]:
        return self._snapshot.actuators

    # ========================================================================
    # SATELLITE PARAMETERS
    # ========================================================================

    def get_satellite_moment(self) -> np.ndarray:
        """3x3 satellite inertia matrix."""
        return readonly_array(self._snapshot.satellite.moment_of_inertia)

    def get_satellite_position(self) -> np.ndarray:
        return readonly_array(self._snapshot.satellite.position)

    def get_satellite_velocity(self) -> np.ndarray:
        return readonly_array(self._snapshot.satellite.velocity)

    # ========================================================================
    # TIMING
    # ========================================================================

    def get_timestep_ms(self) -> int:
        """Fixed timestep in milliseconds."""
        return self._snapshot.timestep.timestep_ms

    def get_timestep_decision(self) -> bool:
        """True when the variable timestep is in use."""
        return self._snapshot.timestep.use_variable_timestep

    def get_min_timestep(self) -> float:
        return self._snapshot.timestep.min_timestep

    def get_max_timestep(self) -> float:
        return self._snapshot.timestep.max_timestep

    def get_timeout(self) -> int:
        """Simulation timeout in milliseconds."""
        return self._snapshot.timeout_ms

    # ========================================================================
    # CONTROLLER TARGETS
    # ========================================================================

    def get_desired_satellite_position(self) -> np.ndarray:
        return readonly_array(self._snapshot.controller.desired_satellite_position)

    def get_allowed_jitter(self) -> float:
        """Allowed jitter in degrees/second."""
        return self._snapshot.controller.allowed_jitter

    def get_required_accuracy(self) -> float:
        """Required pointing accuracy in degrees."""
        return self._snapshot.controller.required_accuracy

    def get_hold_time(self) -> int:
        """Time the controller must hold the target, in milliseconds."""
        return self._snapshot.controller.required_hold_time


@functools.lru_cache(maxsize=None)
def get_configuration() -> ConfigurationStore:
    """
    Return the process-wide configuration store.

    Created empty on first call; populate it once at startup with ``load``.
    """
    return ConfigurationStore()
