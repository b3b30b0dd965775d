"""
Pydantic Configuration Models for the ADCS Simulation

Type-safe records for the satellite's sensors, actuators and satellite-wide
parameters, with range checks and descriptive error messages.

Document keys (``PollingTime``, ``Position``, ``MaxAngVel`` ...) are field
aliases; records can also be built by field name. All records are frozen.
"""

import logging
from enum import Enum
from typing import Dict, Literal, Tuple, Type, Union

import numpy as np
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

# Three strict numbers; ints are accepted and stored as floats
Vector3 = Tuple[StrictFloat, StrictFloat, StrictFloat]
Matrix3 = Tuple[Vector3, Vector3, Vector3]

ZERO_VECTOR: Vector3 = (0.0, 0.0, 0.0)
ZERO_MATRIX: Matrix3 = (ZERO_VECTOR, ZERO_VECTOR, ZERO_VECTOR)

# Longest polling interval a device timestamp can represent (~31 years)
MAX_POLLING_TIME_MS = 10**12


def readonly_array(values) -> np.ndarray:
    """Return a float64 array that callers cannot write through."""
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


class SensorType(str, Enum):
    """Sensor type tags as they appear in the document."""

    GYROSCOPE = "Gyroscope"
    ACCELEROMETER = "Accelerometer"


class ActuatorType(str, Enum):
    """Actuator type tags as they appear in the document."""

    REACTION_WHEEL = "ReactionWheel"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", allow_inf_nan=False
    )


# ============================================================================
# Sensors
# ============================================================================


class _SensorFields(_Record):
    """Fields shared by every sensor variant."""

    polling_time: StrictInt = Field(
        ...,
        alias="PollingTime",
        ge=0,
        le=MAX_POLLING_TIME_MS,
        description="Sampling interval in milliseconds",
    )
    position: Vector3 = Field(
        ...,
        alias="Position",
        description="Mounting position (x, y, z) in the body frame",
    )

    @property
    def position_array(self) -> np.ndarray:
        """Return position as a read-only numpy array."""
        return readonly_array(self.position)


class GyroscopeConfig(_SensorFields):
    """Gyroscope record."""

    type: Literal[SensorType.GYROSCOPE] = SensorType.GYROSCOPE


class AccelerometerConfig(_SensorFields):
    """Accelerometer record."""

    type: Literal[SensorType.ACCELEROMETER] = SensorType.ACCELEROMETER


SensorRecord = Union[GyroscopeConfig, AccelerometerConfig]

SENSOR_CONFIG_TYPES: Dict[SensorType, Type[_SensorFields]] = {
    SensorType.GYROSCOPE: GyroscopeConfig,
    SensorType.ACCELEROMETER: AccelerometerConfig,
}


# ============================================================================
# Actuators
# ============================================================================


class ReactionWheelConfig(_Record):
    """
    Reaction wheel record.

    Attributes:
        moment_of_inertia: Wheel moment of inertia about its spin axis [kg*m^2]
        max_ang_vel / min_ang_vel: Angular velocity limits [rad/s]
        max_ang_accel / min_ang_accel: Angular acceleration limits [rad/s^2]
        polling_time: Update interval [ms]
        position: Mounting position in the body frame
        axis_of_rotation: Spin axis in the body frame (conventionally unit)
        velocity: Initial angular velocity [rad/s]
        acceleration: Initial angular acceleration [rad/s^2]
    """

    type: Literal[ActuatorType.REACTION_WHEEL] = ActuatorType.REACTION_WHEEL

    moment_of_inertia: StrictFloat = Field(..., alias="Moment", gt=0)
    max_ang_vel: StrictFloat = Field(..., alias="MaxAngVel")
    max_ang_accel: StrictFloat = Field(..., alias="MaxAngAccel")
    min_ang_vel: StrictFloat = Field(..., alias="MinAngVel")
    min_ang_accel: StrictFloat = Field(..., alias="MinAngAccel")
    polling_time: StrictFloat = Field(
        ..., alias="PollingTime", ge=0, le=MAX_POLLING_TIME_MS
    )
    position: Vector3 = Field(..., alias="Position")
    axis_of_rotation: Vector3 = Field(..., alias="AxisOfRotation")
    velocity: StrictFloat = Field(..., alias="Velocity")
    acceleration: StrictFloat = Field(..., alias="Acceleration")

    @field_validator("axis_of_rotation")
    @classmethod
    def validate_axis(cls, v: Vector3) -> Vector3:
        """Reject a zero axis; warn on a non-unit one."""
        norm = float(np.linalg.norm(v))
        if norm == 0.0:
            raise ValueError("axis of rotation must be non-zero")
        if abs(norm - 1.0) > 1e-3:
            logger.warning(f"Reaction wheel axis {v} is not unit length (|a| = {norm:.4f})")
        return v

    @model_validator(mode="after")
    def check_limit_ordering(self) -> "ReactionWheelConfig":
        """Ensure each min limit does not exceed its max."""
        if self.min_ang_vel > self.max_ang_vel:
            raise ValueError(
                f"MinAngVel ({self.min_ang_vel}) cannot exceed MaxAngVel ({self.max_ang_vel})"
            )
        if self.min_ang_accel > self.max_ang_accel:
            raise ValueError(
                f"MinAngAccel ({self.min_ang_accel}) cannot exceed "
                f"MaxAngAccel ({self.max_ang_accel})"
            )
        return self

    @property
    def position_array(self) -> np.ndarray:
        """Return position as a read-only numpy array."""
        return readonly_array(self.position)

    @property
    def axis_array(self) -> np.ndarray:
        """Return rotation axis as a read-only numpy array."""
        return readonly_array(self.axis_of_rotation)


ActuatorRecord = ReactionWheelConfig

ACTUATOR_CONFIG_TYPES: Dict[ActuatorType, Type[_Record]] = {
    ActuatorType.REACTION_WHEEL: ReactionWheelConfig,
}


# ============================================================================
# Satellite-level parameters
# ============================================================================


class SatelliteParams(_Record):
    """Rigid-body parameters of the satellite."""

    moment_of_inertia: Matrix3 = Field(ZERO_MATRIX, alias="Moment")
    position: Vector3 = Field(ZERO_VECTOR, alias="Position")
    velocity: Vector3 = Field(ZERO_VECTOR, alias="Velocity")


class TimestepPolicy(_Record):
    """Fixed or variable simulation timestep."""

    use_variable_timestep: StrictBool = Field(False, alias="VariableTimestep")
    timestep_ms: StrictInt = Field(0, alias="TimeStep", ge=0)
    min_timestep: StrictFloat = Field(0.0, alias="TimeStepMin", ge=0)
    max_timestep: StrictFloat = Field(0.0, alias="TimeStepMax", ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "TimestepPolicy":
        """Ensure min_timestep <= max_timestep for variable stepping."""
        if self.use_variable_timestep and self.min_timestep > self.max_timestep:
            raise ValueError(
                f"TimeStepMin ({self.min_timestep}) cannot exceed "
                f"TimeStepMax ({self.max_timestep})"
            )
        return self


class ControllerTargets(_Record):
    """Targets the attitude controller must reach and hold."""

    desired_satellite_position: Vector3 = Field(ZERO_VECTOR, alias="DesiredSatellitePosition")
    allowed_jitter: StrictFloat = Field(
        0.0, alias="AllowedJitter", ge=0, description="Allowed jitter in deg/s"
    )
    required_accuracy: StrictFloat = Field(
        0.0, alias="RequiredAccuracy", ge=0, description="Required accuracy in deg"
    )
    required_hold_time: StrictInt = Field(
        0, alias="RequiredHoldTime", ge=0, description="Hold time in ms"
    )
