"""
Fixed-step classical Runge-Kutta integrator.

The integrator is generic over the state dimension: ``dim`` is fixed at
construction and every state passing through it has that length. The same
algorithm serves the planar (N=2) and spatial (N=3) systems with no
branching on dimension.
"""

from typing import Callable
import numpy as np
from .utils import as_state_vector

# f(t, y) -> dy/dt, same shape as y
DerivativeFn = Callable[[float, np.ndarray], np.ndarray]


class RK4Integrator:
    """
    4th-order Runge-Kutta integrator with a fixed step size.

    Parameters
    ----------
    dt : float
        Step size. Not validated: zero, negative or non-finite values are
        accepted and produce a degenerate or divergent trajectory.
    dim : int
        State dimension N.

    Notes
    -----
    Local truncation error is O(dt^5), global error O(dt^4). The integrator
    holds no state besides ``dt`` and ``dim``; repeated calls with the same
    inputs return bit-identical results. States that overflow to inf or nan
    keep propagating without a warning or an exception.
    """

    def __init__(self, dt: float, dim: int):
        self._dt = float(dt)
        self._dim = int(dim)

    @property
    def dt(self) -> float:
        """Fixed step size."""
        return self._dt

    @property
    def dim(self) -> int:
        """State dimension N."""
        return self._dim

    def step(self, f: DerivativeFn, t: float, y: np.ndarray) -> np.ndarray:
        """
        Advance one RK4 step from (t, y).

        Parameters
        ----------
        f : callable
            Derivative function f(t, y) -> dy/dt
        t : float
            Current time
        y : np.ndarray
            Current state, shape (dim,)

        Returns
        -------
        np.ndarray
            New state array at t + dt. ``y`` is left untouched.
        """
        dt = self._dt
        k1 = np.asarray(f(t, y), dtype=float)
        k2 = np.asarray(f(t + dt / 2.0, y + k1 * (dt / 2.0)), dtype=float)
        k3 = np.asarray(f(t + dt / 2.0, y + k2 * (dt / 2.0)), dtype=float)
        k4 = np.asarray(f(t + dt, y + k3 * dt), dtype=float)

        return y + (k1 + k2 * 2.0 + k3 * 2.0 + k4) * (dt / 6.0)

    def integrate(self, f: DerivativeFn, y0, steps: int,
                  t0: float = 0.0) -> np.ndarray:
        """
        Integrate for a fixed number of steps.

        Parameters
        ----------
        f : callable
            Derivative function f(t, y) -> dy/dt
        y0 : array_like
            Initial state, length dim
        steps : int
            Number of RK4 steps. 0 returns the initial state alone.
        t0 : float, optional
            Time of the initial state (default 0.0). Time advances by
            ``+= dt`` after each step and is never renormalized.

        Returns
        -------
        np.ndarray
            Flat array of length (steps + 1) * dim, row-major per step:
            [y0_0, y0_1, ..., y1_0, y1_1, ...]. The first dim entries are
            the initial state exactly.

        Raises
        ------
        ValueError
            If y0 does not have length dim
        """
        y = as_state_vector(y0)
        if y.shape[0] != self._dim:
            raise ValueError(
                f"Initial state has length {y.shape[0]}, "
                f"integrator dimension is {self._dim}"
            )

        # one allocation for the whole run
        out = np.empty((steps + 1, self._dim), dtype=float)
        out[0] = y

        t = float(t0)
        # overflow to inf/nan is carried forward, not reported
        with np.errstate(over='ignore', invalid='ignore'):
            for i in range(1, steps + 1):
                y = self.step(f, t, y)
                t += self._dt
                out[i] = y

        return out.reshape(-1)

    def __repr__(self):
        return f"RK4Integrator(dt={self._dt}, dim={self._dim})"
