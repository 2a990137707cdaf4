"""
Error taxonomy for hydrodynamic coefficient loading and force evaluation.

Construction-time problems (the coefficient file cannot be read, or its
datasets have the wrong shape) are exceptions and abort store creation.
Per-step lookup problems (an index outside the kernel or the six degrees of
freedom) are IndexWarning: the lookup yields 0 and the simulation keeps going.
"""

import logging
import warnings

logger = logging.getLogger(__name__)


class HydroCoefficientError(Exception):
    """Base class for failures while building a coefficient store."""


class FileError(HydroCoefficientError):
    """The coefficient source could not be opened or read."""


class FormatError(HydroCoefficientError, ValueError):
    """A dataset is missing or its shape does not match the expected layout."""


class IndexWarning(RuntimeWarning):
    """A kernel or coordinate index is out of range; the value used is 0."""


def warn_index(message: str, stacklevel: int = 3) -> None:
    """Report an out-of-range lookup on both the warnings and logging channels."""
    logger.warning(message)
    warnings.warn(message, IndexWarning, stacklevel=stacklevel)
