"""
Linear hydrostatic restoring force.

    F = K (equilibrium - pose)

K is the restoring stiffness already scaled by rho * g, pose is
[x, y, z, rx, ry, rz] with the rotation reduced to Euler-123 angles, and the
equilibrium is [cg_x, cg_y, cg_z, 0, 0, 0].
"""

import numpy as np

from hydroloads.coefficients.store import HydroCoefficientStore
from .base import TimeCachedForce
from .body import RigidBody, pose_vector


def equilibrium_state(store: HydroCoefficientStore) -> np.ndarray:
    """Rest pose of the body: center of gravity, no rotation."""
    return np.concatenate([store.center_of_gravity, np.zeros(3)])


class LinearRestoringForce(TimeCachedForce):
    """Restoring force/torque proportional to the displacement from equilibrium."""

    def __init__(self, store: HydroCoefficientStore, body: RigidBody):
        super().__init__(store, body)
        self.equilibrium = equilibrium_state(store)
        self.equilibrium.setflags(write=False)

    def _compute(self, time: float) -> np.ndarray:
        displacement = self.equilibrium - pose_vector(self.body)
        return self.store.restoring_stiffness @ displacement
