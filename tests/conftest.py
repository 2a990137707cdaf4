"""
hydroloads test configuration and fixtures.

Builds small synthetic coefficient files (HDF5 and npz) with the dataset
layout of the boundary-element pre-processor, so tests never depend on
external data.
"""

import h5py
import numpy as np
import pytest

from hydroloads.coefficients import load_coefficients, reset_reader
from hydroloads.coefficients.store import HydroCoefficientStore
from hydroloads.forces import BodyState

RHO = 1000.0
G = 9.81
DISP_VOL = 0.5
STEPS = 11
DT = 0.1
BODY = "body1"


def make_datasets(body: str = BODY, steps: int = STEPS, seed: int = 7) -> dict:
    """Raw (unscaled) datasets keyed by their full path in the file."""
    rng = np.random.default_rng(seed)
    restoring = np.diag([0.0, 0.0, 78.54, 12.0, 12.0, 0.0]) + 0.1 * rng.standard_normal((6, 6))
    added_mass = np.diag([130.0, 130.0, 260.0, 20.0, 20.0, 1.0])
    added_mass[1, 3] = added_mass[3, 1] = -14.3
    prefix = f"{body}/hydro_coeffs"
    return {
        f"{prefix}/linear_restoring_stiffness": restoring,
        f"{prefix}/added_mass/inf_freq": added_mass,
        f"{prefix}/radiation_damping/impulse_response_fun/K": rng.standard_normal((6, 6, steps)),
        f"{prefix}/radiation_damping/impulse_response_fun/t": np.arange(steps) * DT,
        f"{body}/properties/cg": np.array([0.0, 0.0, -2.0]),
        f"{body}/properties/cb": np.array([0.0, 0.0, -2.5]),
        f"{body}/properties/disp_vol": np.array([DISP_VOL]),
        "simulation_parameters/rho": np.array(RHO),
        "simulation_parameters/g": np.array(G),
    }


def write_h5(path, datasets: dict) -> str:
    with h5py.File(path, 'w') as f:
        for name, values in datasets.items():
            f.create_dataset(name, data=values)
    return str(path)


def write_npz(path, datasets: dict) -> str:
    np.savez(path, **datasets)
    return str(path)


def make_store(kernel: np.ndarray = None, times: np.ndarray = None,
               restoring: np.ndarray = None, cg=(0.0, 0.0, 0.0),
               rho: float = RHO, g: float = G, displaced_volume: float = DISP_VOL,
               added_mass: np.ndarray = None) -> HydroCoefficientStore:
    """Store built directly from arrays, defaults are all-zero coefficients."""
    if kernel is None:
        kernel = np.zeros((6, 6, STEPS))
    if times is None:
        times = np.arange(kernel.shape[2]) * DT
    return HydroCoefficientStore(
        restoring_stiffness=np.zeros((6, 6)) if restoring is None else restoring,
        added_mass=np.zeros((6, 6)) if added_mass is None else added_mass,
        impulse_response=kernel,
        time_samples=times,
        center_of_gravity=cg,
        center_of_buoyancy=(0.0, 0.0, 0.0),
        displaced_volume=displaced_volume,
        rho=rho,
        g=g,
    )


class RecordingForce:
    """Stand-in for a host force object with one function slot per axis."""

    def __init__(self):
        self.fx = None
        self.fy = None
        self.fz = None

    def set_fx(self, function):
        self.fx = function

    def set_fy(self, function):
        self.fy = function

    def set_fz(self, function):
        self.fz = function


@pytest.fixture(autouse=True)
def _default_reader():
    reset_reader()
    yield
    reset_reader()


@pytest.fixture
def datasets():
    return make_datasets()


@pytest.fixture
def h5_path(tmp_path, datasets):
    return write_h5(tmp_path / "sphere.h5", datasets)


@pytest.fixture
def npz_path(tmp_path, datasets):
    return write_npz(tmp_path / "sphere.npz", datasets)


@pytest.fixture
def store(h5_path):
    return load_coefficients(h5_path, BODY)


@pytest.fixture
def body():
    return BodyState()
