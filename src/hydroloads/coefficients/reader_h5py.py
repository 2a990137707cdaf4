"""
HDF5 implementation of the coefficient-file abstraction layer.

This is the **only** file in hydroloads that imports h5py.
"""

from __future__ import annotations

import h5py
import numpy as np


class H5pyReader:
    """CoefficientReader implemented on top of h5py.File."""

    def open(self, path: str) -> h5py.File:
        return h5py.File(path, 'r')

    def close(self, handle: h5py.File) -> None:
        handle.close()

    def read(self, handle: h5py.File, name: str) -> np.ndarray:
        obj = handle.get(name)
        # A group at the path is as unusable as nothing at all
        if not isinstance(obj, h5py.Dataset):
            raise KeyError(name)
        return np.asarray(obj[()], dtype=float)
