"""
Core Module

Exceptions, error handling and the runtime device objects built from
configuration.

Public API:
- Sensor, Gyroscope, Accelerometer: Runtime sensor objects
- Actuator, ReactionWheel, ActuatorState: Runtime actuator objects

The factory depends on the config package and is imported from its own
module: ``from adcs_sim.core.factory import SensorActuatorFactory``.
"""

from adcs_sim.core.devices import (
    Accelerometer,
    Actuator,
    ActuatorState,
    Gyroscope,
    ReactionWheel,
    Sensor,
    timestamp,
)

__all__ = [
    "Sensor",
    "Gyroscope",
    "Accelerometer",
    "Actuator",
    "ActuatorState",
    "ReactionWheel",
    "timestamp",
]
