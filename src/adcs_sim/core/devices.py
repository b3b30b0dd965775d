"""
Runtime Sensor and Actuator Objects

Lightweight device objects handed to the simulation loop. They carry the
static parameters a device needs at runtime; the physics that updates them
lives in the simulation, not here.

Timestamps are ``datetime.timedelta`` values.
"""

from dataclasses import dataclass, field, replace
from datetime import timedelta

import numpy as np


def timestamp(milliseconds: float) -> timedelta:
    """Return a sampling timestamp for a duration in milliseconds."""
    return timedelta(milliseconds=milliseconds)


# ============================================================================
# Sensors
# ============================================================================


@dataclass
class Sensor:
    """
    Base sensor.

    Attributes:
        polling_time: Sampling interval
        position: Mounting position (x, y, z) in the body frame
    """

    polling_time: timedelta
    position: np.ndarray


@dataclass
class Gyroscope(Sensor):
    """Angular rate sensor."""


@dataclass
class Accelerometer(Sensor):
    """Linear acceleration sensor."""


# ============================================================================
# Actuators
# ============================================================================


@dataclass(frozen=True)
class ActuatorState:
    """One (velocity, acceleration, position, time) tuple of an actuator."""

    velocity: float = 0.0
    acceleration: float = 0.0
    position: float = 0.0
    time: timedelta = timedelta(0)


@dataclass
class Actuator:
    """
    Base actuator.

    Attributes:
        polling_time: Update interval
        position: Mounting position (x, y, z) in the body frame
    """

    polling_time: timedelta
    position: np.ndarray


@dataclass
class ReactionWheel(Actuator):
    """
    Reaction wheel with min/max bound states.

    Attributes:
        min_state: Lower limits on velocity, acceleration, position and time
        max_state: Upper limits on velocity, acceleration, position and time
        moment_of_inertia: Wheel inertia about its spin axis [kg*m^2]
        axis_of_rotation: Spin axis in the body frame
        state: Current wheel state
    """

    min_state: ActuatorState = field(default_factory=ActuatorState)
    max_state: ActuatorState = field(default_factory=ActuatorState)
    moment_of_inertia: float = 0.0
    axis_of_rotation: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 1.0]))
    state: ActuatorState = field(default_factory=ActuatorState)

    def clamp(self, state: ActuatorState) -> ActuatorState:
        """Return ``state`` with every component limited to [min_state, max_state]."""
        lo, hi = self.min_state, self.max_state
        return replace(
            state,
            velocity=float(np.clip(state.velocity, lo.velocity, hi.velocity)),
            acceleration=float(np.clip(state.acceleration, lo.acceleration, hi.acceleration)),
            position=float(np.clip(state.position, lo.position, hi.position)),
            time=min(max(state.time, lo.time), hi.time),
        )

    @property
    def angular_momentum(self) -> np.ndarray:
        """Wheel angular momentum vector in the body frame."""
        return self.moment_of_inertia * self.state.velocity * self.axis_of_rotation
