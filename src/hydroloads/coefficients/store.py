#!/usr/bin/env python3
"""
Hydrodynamic coefficient store for one floating body.

This module loads the time-domain hydrodynamic coefficients that an external
boundary-element solver writes for each body, validates their shapes and
keeps them read-only for the force components attached to that body.

Scaling rules (kept exactly as the coefficient file convention requires):
    restoring stiffness  - multiplied by rho * g once, at load time
    added mass (inf. w)  - stored raw, multiplied by rho on every read
    impulse response K   - stored raw, multiplied by rho on every read

File layout (default dataset paths, "{body}" is e.g. "body1"):
    {body}/hydro_coeffs/linear_restoring_stiffness                  n x n
    {body}/hydro_coeffs/added_mass/inf_freq                         n x n
    {body}/hydro_coeffs/radiation_damping/impulse_response_fun/K    n x n x S
    {body}/hydro_coeffs/radiation_damping/impulse_response_fun/t    S
    {body}/properties/cg, {body}/properties/cb                      3
    {body}/properties/disp_vol                                      scalar
    simulation_parameters/rho, simulation_parameters/g              scalar

Usage:
    from hydroloads.coefficients import load_coefficients

    store = load_coefficients("hydroData/sphere.h5", "body1")  # once per body
    store.restoring_stiffness    # already includes rho * g
    store.added_mass             # rho-scaled on read
    store.kernel(2, 2, 0)        # rho-scaled impulse response element
"""

import logging

import numpy as np

from hydroloads.errors import FileError, FormatError, warn_index
from .reader import CoefficientReader, get_reader

logger = logging.getLogger(__name__)


# Six rigid-body degrees of freedom: surge, sway, heave, roll, pitch, yaw
DOF_COUNT = 6

# Lag-step count of the reference sphere model; the runtime window always
# follows the loaded kernel instead.
DEFAULT_WINDOW_LENGTH = 1001

DEFAULT_BODY = "body1"

DEFAULT_DATASET_PATHS = {
    'restoring_stiffness': "{body}/hydro_coeffs/linear_restoring_stiffness",
    'added_mass': "{body}/hydro_coeffs/added_mass/inf_freq",
    'impulse_response': "{body}/hydro_coeffs/radiation_damping/impulse_response_fun/K",
    'time_samples': "{body}/hydro_coeffs/radiation_damping/impulse_response_fun/t",
    'center_of_gravity': "{body}/properties/cg",
    'center_of_buoyancy': "{body}/properties/cb",
    'displaced_volume': "{body}/properties/disp_vol",
    'rho': "simulation_parameters/rho",
    'g': "simulation_parameters/g",
}


def _read_only(values) -> np.ndarray:
    """Copy *values* into a float array that cannot be written through."""
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


def _as_scalar(name: str, values) -> float:
    array = np.asarray(values, dtype=float)
    if array.size != 1:
        raise FormatError(f"Dataset '{name}' must hold a single value, got shape {array.shape}")
    return float(array.reshape(-1)[0])


def _as_vector(name: str, values, length: int = None) -> np.ndarray:
    """Flatten a (k,), (k, 1) or (1, k) dataset into a length-k vector."""
    array = np.asarray(values, dtype=float)
    if array.ndim > 2 or (array.ndim == 2 and min(array.shape) != 1):
        raise FormatError(f"Dataset '{name}' must be a vector, got shape {array.shape}")
    vector = array.reshape(-1)
    if length is not None and vector.size != length:
        raise FormatError(f"Dataset '{name}' must have {length} entries, got {vector.size}")
    return vector


def _as_square_matrix(name: str, values) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim != 2 or array.shape[0] != array.shape[1]:
        raise FormatError(f"Dataset '{name}' must be a square matrix, got shape {array.shape}")
    return array


class HydroCoefficientStore:
    """
    Read-only hydrodynamic coefficients of one body.

    One store may be shared by every force component attached to the same
    body; nothing here changes after construction.

    Args:
        restoring_stiffness: Raw n x n hydrostatic stiffness (scaled by rho * g here)
        added_mass: Raw n x n added mass at infinite frequency
        impulse_response: Raw n x n x S radiation impulse-response kernel
        time_samples: S increasing lag times of the kernel's step axis (s)
        center_of_gravity: 3-vector (m)
        center_of_buoyancy: 3-vector (m)
        displaced_volume: Displaced volume at equilibrium (m^3)
        rho: Fluid density (kg/m^3)
        g: Gravitational acceleration (m/s^2)
        body: Body identifier inside the coefficient file

    Raises:
        FormatError: if any shape is inconsistent
    """

    def __init__(self, restoring_stiffness, added_mass, impulse_response, time_samples,
                 center_of_gravity, center_of_buoyancy, displaced_volume, rho, g,
                 body: str = DEFAULT_BODY):
        self._body = body
        self._rho = _as_scalar('rho', rho)
        self._g = _as_scalar('g', g)
        self._displaced_volume = _as_scalar('displaced_volume', displaced_volume)

        restoring = _as_square_matrix('restoring_stiffness', restoring_stiffness)
        n = restoring.shape[0]
        if n != DOF_COUNT:
            raise FormatError(
                f"Dataset 'restoring_stiffness' must be {DOF_COUNT} x {DOF_COUNT}, got {restoring.shape}")

        inf_freq = _as_square_matrix('added_mass', added_mass)
        if inf_freq.shape != restoring.shape:
            raise FormatError(
                f"Dataset 'added_mass' shape {inf_freq.shape} does not match "
                f"restoring stiffness {restoring.shape}")

        kernel = np.asarray(impulse_response, dtype=float)
        if kernel.ndim != 3:
            raise FormatError(
                f"Dataset 'impulse_response' must be 3-dimensional, got shape {kernel.shape}")
        if kernel.shape[:2] != restoring.shape:
            raise FormatError(
                f"Dataset 'impulse_response' leading dimensions {kernel.shape[:2]} do not match "
                f"restoring stiffness {restoring.shape}")

        times = _as_vector('time_samples', time_samples)
        if times.size != kernel.shape[2]:
            raise FormatError(
                f"Dataset 'time_samples' has {times.size} entries but the impulse response "
                f"has {kernel.shape[2]} steps")
        if times.size < 2:
            raise FormatError("Dataset 'time_samples' needs at least two entries")
        if np.any(np.diff(times) <= 0):
            raise FormatError("Dataset 'time_samples' must be strictly increasing")

        self._restoring = _read_only(restoring * self._rho * self._g)
        self._added_mass = _read_only(inf_freq)
        self._kernel = _read_only(kernel)
        self._times = _read_only(times)
        self._cg = _read_only(_as_vector('center_of_gravity', center_of_gravity, 3))
        self._cb = _read_only(_as_vector('center_of_buoyancy', center_of_buoyancy, 3))

    @classmethod
    def load(cls, path: str, body: str = DEFAULT_BODY, **kwargs) -> 'HydroCoefficientStore':
        """Load a store from a coefficient file, see load_coefficients()."""
        return load_coefficients(path, body, **kwargs)

    def __repr__(self):
        return (f"HydroCoefficientStore(body={self._body!r}, n={self.dof_count}, "
                f"S={self.step_count}, rho={self._rho}, g={self._g})")

    # --- dimensions -----------------------------------------------------

    @property
    def body(self) -> str:
        return self._body

    @property
    def dof_count(self) -> int:
        """Number of degrees of freedom n."""
        return self._restoring.shape[0]

    @property
    def step_count(self) -> int:
        """Number of lag steps S of the impulse-response kernel."""
        return self._kernel.shape[2]

    # --- matrices -------------------------------------------------------

    @property
    def restoring_stiffness(self) -> np.ndarray:
        """Linear restoring stiffness, already scaled by rho * g."""
        return self._restoring

    @property
    def added_mass(self) -> np.ndarray:
        """Added mass at infinite frequency, scaled by rho on every read."""
        return self._added_mass * self._rho

    @property
    def raw_added_mass(self) -> np.ndarray:
        """Added mass at infinite frequency as stored in the file, without rho."""
        return self._added_mass

    @property
    def impulse_response(self) -> np.ndarray:
        """Whole n x n x S kernel, scaled by rho on every read."""
        return self._kernel * self._rho

    def kernel(self, row: int, col: int, step: int) -> float:
        """
        Return the rho-scaled impulse response at (row, col, step).

        Out-of-range indices emit an IndexWarning and yield 0.
        """
        n, _, s = self._kernel.shape
        if not (0 <= row < n and 0 <= col < n and 0 <= step < s):
            warn_index(f"Impulse response index ({row}, {col}, {step}) out of range "
                       f"[0, {n}) x [0, {n}) x [0, {s})")
            return 0.0
        return float(self._kernel[row, col, step]) * self._rho

    # --- time axis ------------------------------------------------------

    @property
    def time_samples(self) -> np.ndarray:
        return self._times

    @property
    def timestep(self) -> float:
        """Nominal timestep: spacing of the first two time samples."""
        return float(self._times[1] - self._times[0])

    # --- body properties ------------------------------------------------

    @property
    def center_of_gravity(self) -> np.ndarray:
        return self._cg

    @property
    def center_of_buoyancy(self) -> np.ndarray:
        return self._cb

    @property
    def displaced_volume(self) -> float:
        return self._displaced_volume

    @property
    def rho(self) -> float:
        return self._rho

    @property
    def g(self) -> float:
        return self._g

    def summary(self) -> dict:
        """JSON-serialisable description of the store."""
        return {
            'body': self._body,
            'dof_count': self.dof_count,
            'step_count': self.step_count,
            'timestep_s': self.timestep,
            'duration_s': float(self._times[-1] - self._times[0]),
            'rho_kg_m3': self._rho,
            'g_m_s2': self._g,
            'displaced_volume_m3': self._displaced_volume,
            'center_of_gravity_m': self._cg.tolist(),
            'center_of_buoyancy_m': self._cb.tolist(),
            'restoring_stiffness': self._restoring.tolist(),
            'added_mass': self.added_mass.tolist(),
        }


def load_coefficients(path: str, body: str = DEFAULT_BODY,
                      dataset_paths: dict = None,
                      reader: CoefficientReader = None) -> HydroCoefficientStore:
    """
    Load one body's hydrodynamic coefficients from a file.

    This should be called **once** per body. The returned store is immutable
    and is shared by all force components acting on that body.

    Args:
        path: Path to the coefficient file (.h5/.hdf5 or .npz)
        body: Name of the body's group in the file, e.g. "body1"
        dataset_paths: Optional overrides of DEFAULT_DATASET_PATHS entries
        reader: Optional CoefficientReader; defaults to get_reader(path)

    Returns:
        HydroCoefficientStore

    Raises:
        FileError: if the file cannot be opened or read
        FormatError: if a dataset is missing or has the wrong shape
    """
    paths = dict(DEFAULT_DATASET_PATHS)
    if dataset_paths:
        unknown = set(dataset_paths) - set(DEFAULT_DATASET_PATHS)
        if unknown:
            raise ValueError(f"Unknown dataset field(s): {', '.join(sorted(unknown))}")
        paths.update(dataset_paths)

    if reader is None:
        reader = get_reader(path)

    try:
        handle = reader.open(path)
    except (OSError, ValueError) as e:
        raise FileError(f"Cannot open coefficient file '{path}': {e}") from e

    raw = {}
    try:
        for field, template in paths.items():
            name = template.format(body=body)
            try:
                raw[field] = reader.read(handle, name)
            except KeyError:
                raise FormatError(f"Missing dataset '{name}' in '{path}'") from None
            except OSError as e:
                raise FileError(f"Cannot read dataset '{name}' from '{path}': {e}") from e
            except (TypeError, ValueError) as e:
                raise FormatError(f"Dataset '{name}' in '{path}' is not numeric: {e}") from e
    finally:
        reader.close(handle)

    store = HydroCoefficientStore(body=body, **raw)
    logger.debug("Loaded %s from %s: n=%d S=%d dt=%g rho=%g g=%g",
                 body, path, store.dof_count, store.step_count,
                 store.timestep, store.rho, store.g)
    return store
