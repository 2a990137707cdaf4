"""
Added-mass inertial load.

The infinite-frequency added mass is not a force: it is added to the body's
mass matrix on the left-hand side of the equations of motion. The host asks
for the load's jacobians (mass M, damping R, stiffness K) and for its
contribution to the residual R += c * M * w, where w is the body's
acceleration-like or velocity-like vector and c the integrator's factor.
Only M is non-zero for added mass.
"""

import numpy as np

from hydroloads.coefficients.store import DOF_COUNT, HydroCoefficientStore


class AddedMassLoad:
    """Constant 6x6 added-mass operator for one body."""

    def __init__(self, store: HydroCoefficientStore):
        mass = np.array(store.added_mass, dtype=float)
        mass.setflags(write=False)
        self.mass = mass

        zeros = np.zeros((DOF_COUNT, DOF_COUNT))
        zeros.setflags(write=False)
        self._zeros = zeros

    @property
    def damping(self) -> np.ndarray:
        return self._zeros

    @property
    def stiffness(self) -> np.ndarray:
        return self._zeros

    def compute_jacobians(self) -> tuple:
        """Return (M, R, K) = (added mass, 0, 0)."""
        return self.mass, self._zeros, self._zeros

    def load_residual_mv(self, residual: np.ndarray, w: np.ndarray, c: float,
                         offset: int = 0) -> None:
        """
        Add c * M * w into the host residual, in place.

        Args:
            residual: Host residual vector, updated in place
            w: Host vector of the same layout as residual
            c: Scaling factor supplied by the integrator
            offset: Index of the body's first degree of freedom in both vectors
        """
        block = slice(offset, offset + DOF_COUNT)
        residual[block] += c * (self.mass @ np.asarray(w[block], dtype=float))
