# Hydrodynamic coefficient library for time-domain body loads
#
# This library provides:
# - HydroCoefficientStore - one body's restoring, added-mass and
#   impulse-response coefficients, validated and read-only
# - load_coefficients - builds a store from an HDF5 or numpy coefficient file
#
# A store is loaded once per body and shared by all force components
# attached to that body.

from .store import (
    HydroCoefficientStore,
    load_coefficients,
    DOF_COUNT,
    DEFAULT_BODY,
    DEFAULT_DATASET_PATHS,
    DEFAULT_WINDOW_LENGTH,
)

from .reader import (
    CoefficientReader,
    set_reader,
    reset_reader,
    get_reader,
)

__all__ = [
    # Store
    'HydroCoefficientStore',
    'load_coefficients',
    'DOF_COUNT',
    'DEFAULT_BODY',
    'DEFAULT_DATASET_PATHS',
    'DEFAULT_WINDOW_LENGTH',
    # File readers
    'CoefficientReader',
    'set_reader',
    'reset_reader',
    'get_reader',
]
