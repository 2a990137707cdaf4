"""
Radiation (fluid-memory) force from the impulse-response convolution.

The radiation force is the convolution of the body's velocity history with
the impulse-response kernel K:

    F_r(t) = - integral_0^T K(tau) v(t - tau) dtau

The infinite history is truncated to the kernel's S lag steps. The last S
velocity samples live in a circular buffer: each step the write offset moves
back by one and the newest sample overwrites the oldest, so nothing is ever
shifted or reallocated. The lag integral uses the trapezoidal rule over the
kernel's own time samples:

    g(r, s)  = sum_c K(r, c, s) * v_s[c]      (v_s: sample s steps old)
    F_r[r]   = - sum_{s=1}^{S-1} (g(r, s-1) + g(r, s)) / 2 * (t[s] - t[s-1])

Cost per step is O(S * n^2), independent of elapsed simulation time.
"""

import numpy as np

from hydroloads.coefficients.store import DOF_COUNT, HydroCoefficientStore
from hydroloads.errors import FormatError
from .base import TimeCachedForce
from .body import RigidBody, velocity_vector


class VelocityHistory:
    """
    Fixed-capacity circular buffer of six-component velocity samples.

    Row (lag + offset) % capacity of `samples` holds the sample written
    `lag` pushes ago; lag 0 is the newest.
    """

    def __init__(self, capacity: int, width: int = DOF_COUNT, offset: int = 0):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.samples = np.zeros((capacity, width))
        self.offset = offset % capacity

    def __len__(self):
        return self.capacity

    def push(self, sample) -> None:
        """Write the newest sample, overwriting the oldest one."""
        self.offset = (self.offset - 1) % self.capacity
        self.samples[self.offset] = sample

    def lag_indices(self) -> np.ndarray:
        return (np.arange(self.capacity) + self.offset) % self.capacity

    def ordered(self) -> np.ndarray:
        """Samples ordered newest first: row s is the sample s steps old."""
        return self.samples[self.lag_indices()]


def trapezoid_lag_integral(integrand: np.ndarray, time_samples: np.ndarray) -> np.ndarray:
    """Trapezoidal integral of each row of *integrand* over *time_samples*."""
    intervals = np.diff(time_samples)
    return np.sum(0.5 * (integrand[:, :-1] + integrand[:, 1:]) * intervals, axis=1)


class RadiationConvolutionForce(TimeCachedForce):
    """
    Radiation damping force from a rolling window of velocity samples.

    Args:
        store: Shared coefficient store
        body: Host body
        window_length: Optional expected lag-step count; must equal the
            kernel's step count when given

    Raises:
        FormatError: if window_length disagrees with the loaded kernel
    """

    def __init__(self, store: HydroCoefficientStore, body: RigidBody,
                 window_length: int = None):
        super().__init__(store, body)
        if window_length is not None and window_length != store.step_count:
            raise FormatError(
                f"Convolution window of {window_length} steps does not match the "
                f"impulse response of {store.step_count} steps")
        kernel = store.impulse_response
        kernel.setflags(write=False)
        self.kernel = kernel
        self.time_samples = store.time_samples
        self.history = VelocityHistory(store.step_count)

    @property
    def window_length(self) -> int:
        return self.history.capacity

    def _compute(self, time: float) -> np.ndarray:
        self.history.push(velocity_vector(self.body))
        integrand = np.einsum('rcs,sc->rs', self.kernel, self.history.ordered())
        return -trapezoid_lag_integral(integrand, self.time_samples)
