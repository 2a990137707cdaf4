"""
Force/torque interfaces shared by the hydrodynamic force components.

The host engine attaches loads to a body through per-component force
functions: one callable per Cartesian component, called with the current
simulation time and returning a scalar. A time-cached force evaluates its
full six-component vector at most once per distinct simulation time and
hands out one CoordinateFunction per degree of freedom.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

import numpy as np

from hydroloads.coefficients.store import DOF_COUNT, HydroCoefficientStore
from hydroloads.errors import warn_index
from .body import RigidBody


class ForceFunction(Protocol):
    def __call__(self, time: float) -> float:
        """Return one force or torque component at *time*."""
        ...


class HostForce(Protocol):
    """Host force (or torque) object with one function slot per axis."""

    def set_fx(self, function: ForceFunction) -> None:
        ...

    def set_fy(self, function: ForceFunction) -> None:
        ...

    def set_fz(self, function: ForceFunction) -> None:
        ...


class CoordinateFunction:
    """Force function returning coordinate *index* of its owner's force vector."""

    __slots__ = ('owner', 'index')

    def __init__(self, owner: 'TimeCachedForce', index: int):
        self.owner = owner
        self.index = index

    def __call__(self, time: float = None) -> float:
        return self.owner.coordinate(self.index)

    def __repr__(self):
        return f"CoordinateFunction({type(self.owner).__name__}, {self.index})"


class ConstantFunction:
    """Force function returning the same value at every time."""

    __slots__ = ('value',)

    def __init__(self, value: float):
        self.value = float(value)

    def __call__(self, time: float = None) -> float:
        return self.value

    def __repr__(self):
        return f"ConstantFunction({self.value!r})"


class TimeCachedForce(ABC):
    """
    Base class for forces recomputed once per distinct simulation time.

    Subclasses implement _compute(time) returning the six-component
    [Fx, Fy, Fz, Mx, My, Mz] vector. Within one simulation time every
    coordinate query returns a component of the same cached vector.

    Attributes:
        store: Shared, read-only coefficient store
        body: Host body providing kinematic state
        functions: Six CoordinateFunction objects, one per degree of freedom
        evaluations: Number of times _compute() has run
    """

    def __init__(self, store: HydroCoefficientStore, body: RigidBody):
        self.store = store
        self.body = body
        self.functions = tuple(CoordinateFunction(self, i) for i in range(DOF_COUNT))
        self.evaluations = 0
        self._last_time = None
        self._force = np.zeros(DOF_COUNT)

    @abstractmethod
    def _compute(self, time: float) -> np.ndarray:
        """Return the six-component force vector at *time*."""

    @property
    def last_time(self):
        """Simulation time of the cached force, None before the first evaluation."""
        return self._last_time

    def force(self) -> np.ndarray:
        """Six-component force/torque at the body's current simulation time."""
        time = self.body.get_time()
        if time == self._last_time:
            return self._force
        force = np.asarray(self._compute(time), dtype=float)
        force.setflags(write=False)
        self._force = force
        self._last_time = time
        self.evaluations += 1
        return self._force

    def coordinate(self, index: int) -> float:
        """
        Return component *index* of the current force vector.

        Indices outside [0, 6) emit an IndexWarning and yield 0.
        """
        if 0 <= index < DOF_COUNT:
            return float(self.force()[index])
        warn_index(f"{type(self).__name__} coordinate index {index} out of range [0, {DOF_COUNT})")
        return 0.0

    def set_force(self, force: HostForce) -> None:
        """Wire coordinates 0-2 into a host force object."""
        force.set_fx(self.functions[0])
        force.set_fy(self.functions[1])
        force.set_fz(self.functions[2])

    def set_torque(self, torque: HostForce) -> None:
        """Wire coordinates 3-5 into a host torque object."""
        torque.set_fx(self.functions[3])
        torque.set_fy(self.functions[4])
        torque.set_fz(self.functions[5])
