"""
Flat-argument solver entry points.

Each ``solve_*`` function takes plain scalars (physical constants, initial
conditions, step size and step count), runs the RK4 core and returns the
trajectory as one flat float64 buffer ordered
``[x0, y0, (z0), x1, y1, (z1), ...]``.

This is the only layer that checks inputs. The step count must be a
non-negative integer; failures go through ``validation_error`` and so follow
``config.STRICT_VALIDATION``. Step size and parameters pass through unchecked.
"""

import numbers
import warnings
import numpy as np
from .config import config
from .system import (LorenzParams, VanDerPolParams, PendulumParams,
                     RosslerParams, integrate)
from .utils import validation_error, first_nonfinite_row


def solve_lorenz(sigma: float, rho: float, beta: float,
                 x0: float, y0: float, z0: float,
                 dt: float, steps: int) -> np.ndarray:
    """
    Solve the Lorenz system.

    Returns
    -------
    np.ndarray
        Flat array [x0, y0, z0, x1, y1, z1, ...] of length 3 * (steps + 1)
    """
    return _solve(LorenzParams(sigma, rho, beta), (x0, y0, z0), dt, steps)


def solve_van_der_pol(mu: float, x0: float, y0: float,
                      dt: float, steps: int) -> np.ndarray:
    """
    Solve the Van der Pol oscillator.

    Returns
    -------
    np.ndarray
        Flat array [x0, y0, x1, y1, ...] of length 2 * (steps + 1)
    """
    return _solve(VanDerPolParams(mu), (x0, y0), dt, steps)


def solve_damped_pendulum(gamma: float, omega0: float,
                          theta0: float, omega_init: float,
                          dt: float, steps: int) -> np.ndarray:
    """
    Solve the damped pendulum.

    Returns
    -------
    np.ndarray
        Flat array [theta0, omega0, theta1, omega1, ...] of length
        2 * (steps + 1)
    """
    return _solve(PendulumParams(gamma, omega0), (theta0, omega_init), dt, steps)


def solve_rossler(a: float, b: float, c: float,
                  x0: float, y0: float, z0: float,
                  dt: float, steps: int) -> np.ndarray:
    """
    Solve the Rössler system.

    Returns
    -------
    np.ndarray
        Flat array [x0, y0, z0, x1, y1, z1, ...] of length 3 * (steps + 1)
    """
    return _solve(RosslerParams(a, b, c), (x0, y0, z0), dt, steps)


def to_points(data, dim: int) -> np.ndarray:
    """
    Convert a flat solver buffer into 3-D points.

    Parameters
    ----------
    data : array_like
        Flat buffer as returned by a solve_* function
    dim : int
        State dimension, 2 or 3. Planar data is placed in the z = 0 plane.

    Returns
    -------
    np.ndarray
        Array of shape (len(data) // dim, 3)

    Raises
    ------
    ValueError
        If dim is not 2 or 3, or len(data) is not a multiple of dim
    """
    if dim not in (2, 3):
        raise ValueError(f"dim must be 2 or 3, got {dim}")
    data = np.asarray(data, dtype=float)
    if data.size % dim != 0:
        raise ValueError(
            f"Buffer length {data.size} is not a multiple of dim={dim}"
        )
    states = data.reshape(-1, dim)
    points = np.zeros((states.shape[0], 3))
    points[:, :dim] = states
    return points


def _check_steps(steps) -> int:
    """Validate the step count, returning it as a plain int."""
    if isinstance(steps, bool) or not isinstance(steps, numbers.Integral):
        validation_error(
            f"steps must be an integer, got {type(steps).__name__} {steps!r}",
            TypeError
        )
        if isinstance(steps, numbers.Real) and not np.isfinite(steps):
            validation_error(f"steps must be finite, got {steps!r}")
            return 0
        steps = int(steps)
    if steps < 0:
        validation_error(f"steps must be non-negative, got {steps}")
        steps = 0
    return int(steps)


def _solve(params, initial_state, dt, steps) -> np.ndarray:
    steps = _check_steps(steps)
    data = integrate(params, dt, steps, initial_state)

    if config.WARN_ON_DIVERGENCE:
        bad = first_nonfinite_row(data.reshape(-1, len(initial_state)))
        if bad is not None:
            warnings.warn(
                f"{type(params).__name__} trajectory became non-finite at "
                f"step {bad} of {steps}",
                RuntimeWarning,
                stacklevel=3
            )
    return data
