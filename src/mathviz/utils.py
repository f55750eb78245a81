"""
Utility functions for the Mathviz package.
"""

import warnings
from typing import Type
import numpy as np
from .config import config


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    Used by the solver boundary only. The integration core accepts any input
    and never calls this.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from mathviz.utils import validation_error
    >>> from mathviz import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError
    >>> validation_error("Wrong kind", TypeError)  # Raises TypeError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)


def as_state_vector(state) -> np.ndarray:
    """
    Copy array-like input into a new 1-D float64 state vector.

    The caller's object is never aliased, so later in-place changes on either
    side cannot leak into the other.
    """
    return np.array(state, dtype=float).reshape(-1)


def first_nonfinite_row(states: np.ndarray) -> int | None:
    """Index of the first row holding a NaN or Inf, or None if all finite."""
    bad = ~np.isfinite(states).all(axis=1)
    if not bad.any():
        return None
    return int(np.argmax(bad))
