"""
Configuration Package for the ADCS Simulation

Typed records for the satellite's sensors, actuators and satellite-wide
parameters, the YAML document loader, and the store that holds them.

Modules:
- models: pydantic record types and type registries
- loader: YAML document -> ConfigurationSnapshot
- store: ConfigurationStore and the process-wide get_configuration()

Usage:
    from adcs_sim.config import ConfigurationStore

    store = ConfigurationStore()
    store.load("configs/simulator.yaml")
"""

from .loader import ConfigurationSnapshot, load_document, parse_document
from .models import (
    ACTUATOR_CONFIG_TYPES,
    SENSOR_CONFIG_TYPES,
    AccelerometerConfig,
    ActuatorRecord,
    ActuatorType,
    ControllerTargets,
    GyroscopeConfig,
    ReactionWheelConfig,
    SatelliteParams,
    SensorRecord,
    SensorType,
    TimestepPolicy,
)
from .store import ConfigurationStore, get_configuration

__all__ = [
    "ConfigurationStore",
    "get_configuration",
    "ConfigurationSnapshot",
    "load_document",
    "parse_document",
    "SensorType",
    "ActuatorType",
    "GyroscopeConfig",
    "AccelerometerConfig",
    "ReactionWheelConfig",
    "SensorRecord",
    "ActuatorRecord",
    "SatelliteParams",
    "TimestepPolicy",
    "ControllerTargets",
    "SENSOR_CONFIG_TYPES",  # Sensor type tag -> record class
    "ACTUATOR_CONFIG_TYPES",  # Actuator type tag -> record class
]
