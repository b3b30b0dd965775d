"""
Sensor/Actuator Factory

Builds runtime device objects from the records held in a ConfigurationStore.
Unconfigured names are a normal case and produce None; a record whose
concrete class does not match its type tag is a programming error and
fails an assertion.

Adding a device variant means one record class in config.models, one
registry entry there, and one builder in the tables below.
"""

import logging
from datetime import timedelta
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from adcs_sim.config.models import (
    AccelerometerConfig,
    ActuatorType,
    GyroscopeConfig,
    ReactionWheelConfig,
    SensorType,
)
from adcs_sim.config.store import ConfigurationStore, get_configuration
from adcs_sim.core.devices import (
    Accelerometer,
    Actuator,
    ActuatorState,
    Gyroscope,
    ReactionWheel,
    Sensor,
    timestamp,
)

logger = logging.getLogger(__name__)

# Position/time limits used when no bound is enforced on wheel position
POSITION_FLOOR = -100000000000000.0
POSITION_CEILING = 10000000000.0
MAX_STATE_TIME_MS = 10000000.0


class SensorActuatorFactory:
    """
    Creates sensors and actuators by configured name.

    Args:
        config: Store to read records from (default: process-wide store)
        position_bounds: (floor, ceiling) applied to actuator position
        max_state_time: Upper time bound of actuator max states
    """

    def __init__(
        self,
        config: Optional[ConfigurationStore] = None,
        position_bounds: Tuple[float, float] = (POSITION_FLOOR, POSITION_CEILING),
        max_state_time: timedelta = timestamp(MAX_STATE_TIME_MS),
    ) -> None:
        if position_bounds[0] > position_bounds[1]:
            raise ValueError(f"Position floor exceeds ceiling: {position_bounds}")
        self.config = config if config is not None else get_configuration()
        self.position_bounds = position_bounds
        self.max_state_time = max_state_time

        self._sensor_builders: Dict[SensorType, Tuple[type, Callable]] = {
            SensorType.ACCELEROMETER: (AccelerometerConfig, self._build_accelerometer),
            SensorType.GYROSCOPE: (GyroscopeConfig, self._build_gyroscope),
        }
        self._actuator_builders: Dict[ActuatorType, Tuple[type, Callable]] = {
            ActuatorType.REACTION_WHEEL: (ReactionWheelConfig, self._build_reaction_wheel),
        }

    def get_sensor(self, name: str) -> Optional[Sensor]:
        """Build the sensor configured as ``name``; None if there is none."""
        record = self.config.get_sensor_config(name)
        if record is None:
            logger.debug(f"Sensor '{name}' not configured")
            return None

        record_cls, build = self._sensor_builders[record.type]
        assert isinstance(record, record_cls), f"Sensor '{name}' tagged {record.type}"
        return build(record)

    def get_actuator(self, name: str) -> Optional[Actuator]:
        """Build the actuator configured as ``name``; None if there is none."""
        record = self.config.get_actuator_config(name)
        if record is None:
            logger.debug(f"Actuator '{name}' not configured")
            return None

        record_cls, build = self._actuator_builders[record.type]
        assert isinstance(record, record_cls), f"Actuator '{name}' tagged {record.type}"
        return build(record)

    def build_all(self) -> Dict[str, object]:
        """Build every configured sensor and actuator, keyed by name."""
        devices: Dict[str, object] = {}
        for name in self.config.get_sensor_configs():
            devices[name] = self.get_sensor(name)
        for name in self.config.get_actuator_configs():
            devices[name] = self.get_actuator(name)
        return devices

    # ------------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------------

    @staticmethod
    def _build_accelerometer(record: AccelerometerConfig) -> Accelerometer:
        return Accelerometer(timestamp(record.polling_time), np.array(record.position))

    @staticmethod
    def _build_gyroscope(record: GyroscopeConfig) -> Gyroscope:
        return Gyroscope(timestamp(record.polling_time), np.array(record.position))

    def _build_reaction_wheel(self, record: ReactionWheelConfig) -> ReactionWheel:
        floor, ceiling = self.position_bounds
        min_state = ActuatorState(
            velocity=record.min_ang_vel,
            acceleration=record.min_ang_accel,
            position=floor,
            time=timestamp(0.0),
        )
        max_state = ActuatorState(
            velocity=record.max_ang_vel,
            acceleration=record.max_ang_accel,
            position=ceiling,
            time=self.max_state_time,
        )
        return ReactionWheel(
            polling_time=timestamp(record.polling_time),
            position=np.array(record.position),
            min_state=min_state,
            max_state=max_state,
            moment_of_inertia=record.moment_of_inertia,
            axis_of_rotation=np.array(record.axis_of_rotation),
            state=ActuatorState(velocity=record.velocity, acceleration=record.acceleration),
        )
