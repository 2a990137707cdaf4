"""
All hydrodynamic loads of one floating body.

Usage:
    from hydroloads.coefficients import load_coefficients
    from hydroloads.forces import HydroForces

    store = load_coefficients("hydroData/sphere.h5", "body1")
    hydro = HydroForces(store, body)                 # body implements RigidBody
    hydro.attach(f_restoring, t_restoring, f_radiation, t_radiation, f_buoyancy)
    host_add_load(hydro.added_mass)                  # host inertial load slot
"""

import numpy as np

from hydroloads.coefficients.store import HydroCoefficientStore
from .added_mass import AddedMassLoad
from .base import HostForce
from .body import RigidBody
from .buoyancy import BuoyancyForce
from .radiation import RadiationConvolutionForce
from .restoring import LinearRestoringForce


class HydroForces:
    """Restoring, buoyancy, radiation and added-mass loads sharing one store."""

    def __init__(self, store: HydroCoefficientStore, body: RigidBody):
        self.store = store
        self.body = body
        self.restoring = LinearRestoringForce(store, body)
        self.buoyancy = BuoyancyForce(store)
        self.radiation = RadiationConvolutionForce(store, body)
        self.added_mass = AddedMassLoad(store)

    def total(self) -> np.ndarray:
        """Summed restoring + buoyancy + radiation force/torque at the current time."""
        return self.restoring.force() + self.buoyancy.force() + self.radiation.force()

    def attach(self, restoring_force: HostForce, restoring_torque: HostForce,
               radiation_force: HostForce, radiation_torque: HostForce,
               buoyancy_force: HostForce = None) -> None:
        """
        Wire every force component into host force objects.

        A host force slot holds one function per axis, so restoring and
        radiation each get their own force/torque pair.
        """
        self.restoring.set_force(restoring_force)
        self.restoring.set_torque(restoring_torque)
        self.radiation.set_force(radiation_force)
        self.radiation.set_torque(radiation_torque)
        if buoyancy_force is not None:
            self.buoyancy.set_force(buoyancy_force)
