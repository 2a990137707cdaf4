"""Time-domain hydrodynamic force models for a floating rigid body."""

from .body import RigidBody, BodyState, euler123, pose_vector, velocity_vector
from .base import (
    ForceFunction,
    HostForce,
    CoordinateFunction,
    ConstantFunction,
    TimeCachedForce,
)
from .restoring import LinearRestoringForce, equilibrium_state
from .buoyancy import BuoyancyForce
from .radiation import RadiationConvolutionForce, VelocityHistory, trapezoid_lag_integral
from .added_mass import AddedMassLoad
from .hydro import HydroForces

__all__ = [
    # Kinematics
    "RigidBody",
    "BodyState",
    "euler123",
    "pose_vector",
    "velocity_vector",
    # Host force functions
    "ForceFunction",
    "HostForce",
    "CoordinateFunction",
    "ConstantFunction",
    "TimeCachedForce",
    # Force components
    "LinearRestoringForce",
    "equilibrium_state",
    "BuoyancyForce",
    "RadiationConvolutionForce",
    "VelocityHistory",
    "trapezoid_lag_integral",
    "AddedMassLoad",
    "HydroForces",
]
