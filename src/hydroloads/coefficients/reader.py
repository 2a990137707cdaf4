"""
Coefficient-file abstraction layer for hydroloads.

Defines the CoefficientReader protocol (file I/O for named, hierarchical
datasets) so the store never imports a specific file-format library directly.

Selection: get_reader(path) picks a reader from the file extension and lazily
imports its module.  Use set_reader() to override (e.g. for tests or
alternative formats) and reset_reader() to return to extension-based lookup.
"""

from __future__ import annotations

import os
from typing import Any, Protocol, runtime_checkable

import numpy as np

from hydroloads.errors import FileError


# "handle" is a reader-specific opaque object.
Handle = Any


@runtime_checkable
class CoefficientReader(Protocol):
    """File I/O - one open/close per store, one read per dataset."""

    def open(self, path: str) -> Handle:
        """Open a coefficient file, return an opaque handle.

        Raises OSError if the file cannot be opened.
        """
        ...

    def close(self, handle: Handle) -> None:
        """Close a coefficient file."""
        ...

    def read(self, handle: Handle, name: str) -> np.ndarray:
        """Return the dataset at slash-separated *name* as a float array.

        Raises KeyError if no dataset exists at *name*.
        """
        ...


# ---------------------------------------------------------------------------
# Module-level registry
# ---------------------------------------------------------------------------

HDF5_EXTENSIONS = ('.h5', '.hdf5')
NPZ_EXTENSIONS = ('.npz',)

_reader: CoefficientReader | None = None


def _detect(path: str) -> CoefficientReader:
    """Pick a reader from the file extension."""
    ext = os.path.splitext(path)[1].lower()

    if ext in NPZ_EXTENSIONS:
        from .reader_npz import NpzReader
        return NpzReader()

    if ext in HDF5_EXTENSIONS or not ext:
        from .reader_h5py import H5pyReader
        return H5pyReader()

    raise FileError(
        f"No coefficient reader for '{ext}' files. Use an HDF5 ({', '.join(HDF5_EXTENSIONS)}) "
        f"or numpy ({', '.join(NPZ_EXTENSIONS)}) file, or call set_reader() "
        "with a custom implementation."
    )


def set_reader(reader: CoefficientReader) -> None:
    """Explicitly set the reader used for every file."""
    global _reader
    _reader = reader


def reset_reader() -> None:
    """Drop an explicit reader and go back to extension-based selection."""
    global _reader
    _reader = None


def get_reader(path: str) -> CoefficientReader:
    """Return the active CoefficientReader for *path*."""
    if _reader is not None:
        return _reader
    return _detect(path)
