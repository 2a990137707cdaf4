"""
Kinematic input contract between the host dynamics engine and the force models.

The host owns the rigid body and its integrator. Every force component only
reads, once per simulation time, the body's position, orientation, linear and
angular velocity and the current simulation time through the RigidBody
protocol below. Hosts that push state instead of exposing a body object can
update a BodyState in place each step.

Coordinate system: world frame, Z vertical (up is positive).
Orientation: unit quaternion, scalar first (e0, e1, e2, e3).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable

import numpy as np
from scipy.spatial.transform import Rotation


@runtime_checkable
class RigidBody(Protocol):
    """Read-only view of a host rigid body (queried several times per step)."""

    def get_time(self) -> float:
        """Current simulation time in s (non-decreasing)."""
        ...

    def get_position(self) -> Sequence[float]:
        """Reference point position (x, y, z) in m."""
        ...

    def get_rotation(self) -> Sequence[float]:
        """Orientation as a unit quaternion (e0, e1, e2, e3)."""
        ...

    def get_linear_velocity(self) -> Sequence[float]:
        """Linear velocity (vx, vy, vz) in m/s."""
        ...

    def get_angular_velocity(self) -> Sequence[float]:
        """Angular velocity (wx, wy, wz) in rad/s."""
        ...


@dataclass
class BodyState:
    """Mutable kinematic state implementing RigidBody."""
    time: float = 0.0
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0, 0.0]))
    linear_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def get_time(self) -> float:
        return self.time

    def get_position(self) -> np.ndarray:
        return self.position

    def get_rotation(self) -> np.ndarray:
        return self.rotation

    def get_linear_velocity(self) -> np.ndarray:
        return self.linear_velocity

    def get_angular_velocity(self) -> np.ndarray:
        return self.angular_velocity


def euler123(quaternion: Sequence[float]) -> np.ndarray:
    """
    Reduce a scalar-first unit quaternion to Cardan angles about x, y, z.

    Angles are applied about the fixed x axis first, then y, then z
    (roll, pitch, yaw).
    """
    e0, e1, e2, e3 = (float(q) for q in quaternion)
    return Rotation.from_quat([e1, e2, e3, e0]).as_euler('xyz')


def pose_vector(body: RigidBody) -> np.ndarray:
    """Six-component pose [x, y, z, rx, ry, rz] of the body."""
    return np.concatenate([np.asarray(body.get_position(), dtype=float),
                           euler123(body.get_rotation())])


def velocity_vector(body: RigidBody) -> np.ndarray:
    """Six-component velocity [vx, vy, vz, wx, wy, wz] of the body."""
    return np.concatenate([np.asarray(body.get_linear_velocity(), dtype=float),
                           np.asarray(body.get_angular_velocity(), dtype=float)])
