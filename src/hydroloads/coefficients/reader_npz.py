"""
Numpy-archive implementation of the coefficient-file abstraction layer.

Datasets are stored as archive members named by their full HDF5-style path,
e.g. ``np.savez(path, **{"body1/properties/cg": cg, "simulation_parameters/rho": 1025.0})``.
"""

from __future__ import annotations

import zipfile

import numpy as np


class NpzReader:
    """CoefficientReader for ``.npz`` archives written with numpy.savez."""

    def open(self, path: str):
        try:
            return np.load(path, allow_pickle=False)
        except zipfile.BadZipFile as e:
            raise OSError(f"corrupt numpy archive: {e}") from e

    def close(self, handle) -> None:
        handle.close()

    def read(self, handle, name: str) -> np.ndarray:
        if name not in handle.files:
            raise KeyError(name)
        # Members are decompressed lazily, so a damaged archive can fail here too
        try:
            values = handle[name]
        except zipfile.BadZipFile as e:
            raise OSError(f"corrupt archive member '{name}': {e}") from e
        return np.asarray(values, dtype=float)
