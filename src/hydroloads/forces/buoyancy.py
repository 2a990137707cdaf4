"""
Constant hydrostatic buoyancy force.

    bf = rho * g * displaced_volume, applied along +Z

The displaced volume is the equilibrium value from the coefficient file, so
the force does not follow the instantaneous submerged depth; depth-dependent
changes are carried by the linear restoring force.
"""

import numpy as np

from hydroloads.coefficients.store import DOF_COUNT, HydroCoefficientStore
from .base import ConstantFunction, HostForce

VERTICAL_AXIS = 2


class BuoyancyForce:
    """Constant vertical force computed once from the coefficient store."""

    def __init__(self, store: HydroCoefficientStore):
        self.store = store
        self.magnitude = store.rho * store.g * store.displaced_volume
        self.function = ConstantFunction(self.magnitude)

        vector = np.zeros(DOF_COUNT)
        vector[VERTICAL_AXIS] = self.magnitude
        vector.setflags(write=False)
        self._vector = vector

    @property
    def vector(self) -> np.ndarray:
        """[0, 0, bf, 0, 0, 0]"""
        return self._vector

    def force(self) -> np.ndarray:
        return self._vector

    def set_force(self, force: HostForce) -> None:
        """Wire the constant into the vertical slot of a host force object."""
        force.set_fz(self.function)
