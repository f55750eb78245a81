"""
System catalog: parameter records and equations for the supported
dynamical systems, plus the ``System`` class that pairs them and hands
the derivative function to the RK4 integrator.
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, Dict, Tuple, Union
from enum import Enum
from .integrator import RK4Integrator
from .trajectory import Trajectory


# define an enumerated list of system types
class SysType(Enum):
    LORENZ = 'lorenz'
    VAN_DER_POL = 'van_der_pol'
    DAMPED_PENDULUM = 'damped_pendulum'
    ROSSLER = 'rossler'


"""
Immutable parameter records, one per system type.
No value checks are done: any real number is accepted, including values
that make the system diverge. Exploring such regimes is a normal use.
"""
@dataclass(frozen=True)
class LorenzParams:
    """
    Parameters for the Lorenz system.

    dx/dt = sigma (y - x)
    dy/dt = x (rho - z) - y
    dz/dt = x y - beta z

    Attributes
    ----------
    sigma : float
        Prandtl number
    rho : float
        Rayleigh number
    beta : float
        Geometric factor
    """
    sigma: float
    rho: float
    beta: float


@dataclass(frozen=True)
class VanDerPolParams:
    """
    Parameters for the Van der Pol oscillator.

    dx/dt = y
    dy/dt = mu (1 - x^2) y - x

    Attributes
    ----------
    mu : float
        Nonlinearity and damping strength
    """
    mu: float


@dataclass(frozen=True)
class PendulumParams:
    """
    Parameters for the damped pendulum.

    dtheta/dt = omega
    domega/dt = -gamma omega - omega0^2 sin(theta)

    Attributes
    ----------
    gamma : float
        Damping coefficient
    omega0 : float
        Natural frequency
    """
    gamma: float
    omega0: float


@dataclass(frozen=True)
class RosslerParams:
    """
    Parameters for the Rossler system.

    dx/dt = -y - z
    dy/dt = x + a y
    dz/dt = b + z (x - c)
    """
    a: float
    b: float
    c: float


SystemParams = Union[LorenzParams, VanDerPolParams, PendulumParams, RosslerParams]

# system type -> (params class, dimension, coordinate names)
_CATALOG: Dict[SysType, Tuple[type, int, Tuple[str, ...]]] = {
    SysType.LORENZ: (LorenzParams, 3, ('x', 'y', 'z')),
    SysType.VAN_DER_POL: (VanDerPolParams, 2, ('x', 'y')),
    SysType.DAMPED_PENDULUM: (PendulumParams, 2, ('theta', 'omega')),
    SysType.ROSSLER: (RosslerParams, 3, ('x', 'y', 'z')),
}


class System:
    """
    Immutable dynamical system definition for fixed-step propagation.

    Pairs a parameter record with the governing equations of one catalog
    system and exposes them as a derivative function f(t, state).

    Parameters
    ----------
    base_type : SysType or str
        System type: "lorenz", "van_der_pol", "damped_pendulum" or "rossler"
    params : LorenzParams, VanDerPolParams, PendulumParams or RosslerParams
        Parameter record matching base_type

    Notes
    -----
    - System is immutable - create a new instance to change parameters
    - All catalog systems are autonomous: the time argument of the
      derivative is accepted and ignored
    - Nothing is cached between propagations
    """

    # ========== CONSTRUCTION ==========
    def __init__(self, base_type, params: SystemParams):
        """
        Initialize System and build its equations.

        Raises
        ------
        ValueError
            If base_type is not a known system type
        TypeError
            If params is not the record type for base_type
        """
        self._base_type = self._parse_base_type(base_type)
        params_cls, dim, coords = _CATALOG[self._base_type]
        if not isinstance(params, params_cls):
            raise TypeError(
                f"{self._base_type.value} system requires {params_cls.__name__}, "
                f"got {type(params).__name__}"
            )

        self._params = params
        self._dim = dim
        self._coordinates = coords

        # Build derivative closure over the parameters
        self._eom = self._build_eom()

    @classmethod
    def from_params(cls, params: SystemParams) -> "System":
        """Create a System, inferring the type from the parameter record."""
        for sys_type, (params_cls, _, _) in _CATALOG.items():
            if isinstance(params, params_cls):
                return cls(sys_type, params)
        raise TypeError(
            f"Unknown parameter record {type(params).__name__}. "
            f"Valid options: {[c.__name__ for c, _, _ in _CATALOG.values()]}"
        )

    # ========== DYNAMICS ==========
    def derivative(self, t: float, state) -> np.ndarray:
        """
        Evaluate the equations of motion.

        Parameters
        ----------
        t : float
            Time (ignored, the catalog systems are autonomous)
        state : array_like
            State vector of length dim

        Returns
        -------
        np.ndarray
            New array holding d(state)/dt
        """
        return self._eom(t, np.asarray(state, dtype=float))

    @property
    def derivative_fn(self) -> Callable[[float, np.ndarray], np.ndarray]:
        """The derivative closure f(t, state), as passed to the integrator."""
        return self._eom

    # ========== PROPAGATION ==========
    def propagate(self, initial_state, dt: float, steps: int,
                  t0: float = 0.0) -> Trajectory:
        """
        Propagate with fixed-step RK4.

        Parameters
        ----------
        initial_state : array_like
            Initial state in the system's natural coordinate order
        dt : float
            Step size (not validated)
        steps : int
            Number of steps (not validated)
        t0 : float, optional
            Time of the initial state (default 0.0)

        Returns
        -------
        Trajectory
            Trajectory holding steps + 1 states
        """
        integrator = RK4Integrator(dt, self._dim)
        data = integrator.integrate(self._eom, initial_state, steps, t0=t0)
        return Trajectory(self, data, integrator.dt, t0)

    # ========== PROPERTY ACCESS ==========
    def summary(self):
        """Print detailed summary of system parameters."""
        print(f"System Type: {self._base_type}")
        print(f"Dimension: {self._dim}")
        print(f"Coordinates: {', '.join(self._coordinates)}")
        print("Parameters:")
        for name, value in vars(self._params).items():
            print(f"  {name} = {value}")

    @property
    def base_type(self) -> SysType:
        """Type of system."""
        return self._base_type

    @property
    def params(self) -> SystemParams:
        """Parameter record."""
        return self._params

    @property
    def dim(self) -> int:
        """State dimension (2 or 3)."""
        return self._dim

    @property
    def coordinates(self) -> Tuple[str, ...]:
        """Names of the state components, in state vector order."""
        return self._coordinates

    # ========== UTILITY METHODS ==========
    def _build_eom(self):
        """
        Build the derivative closure for this system.

        Parameters are unpacked into plain floats once here so the closure
        does no attribute lookups inside the integration loop.
        """
        if self._base_type == SysType.LORENZ:
            return _lorenz_eom(self._params)
        elif self._base_type == SysType.VAN_DER_POL:
            return _van_der_pol_eom(self._params)
        elif self._base_type == SysType.DAMPED_PENDULUM:
            return _pendulum_eom(self._params)
        elif self._base_type == SysType.ROSSLER:
            return _rossler_eom(self._params)
        else:
            raise NotImplementedError(
                f"_build_eom() not yet implemented for {self._base_type}"
            )

    # ========== SPECIAL METHODS ==========
    def __eq__(self, other):
        if not isinstance(other, System):
            return NotImplemented
        return (self._base_type == other._base_type
                and self._params == other._params)

    def __hash__(self):
        return hash((self._base_type, self._params))

    def __repr__(self):
        """Readable string representation."""
        fields = ", ".join(f"{k}={v}" for k, v in vars(self._params).items())
        return f"System(base_type='{self._base_type.value}', {fields})"

    # ========== STATIC METHODS ==========
    @staticmethod
    def _parse_base_type(base_type):
        """Convert string or enum to SysType enum"""
        if isinstance(base_type, SysType):
            return base_type
        elif isinstance(base_type, str):
            # Map string to enum
            type_map = {
                'lorenz': SysType.LORENZ,
                'Lorenz': SysType.LORENZ,
                'van_der_pol': SysType.VAN_DER_POL,
                'vanderpol': SysType.VAN_DER_POL,
                'VanDerPol': SysType.VAN_DER_POL,
                'vdp': SysType.VAN_DER_POL,
                'damped_pendulum': SysType.DAMPED_PENDULUM,
                'pendulum': SysType.DAMPED_PENDULUM,
                'DampedPendulum': SysType.DAMPED_PENDULUM,
                'rossler': SysType.ROSSLER,
                'Rossler': SysType.ROSSLER,
                'rössler': SysType.ROSSLER,
                'Rössler': SysType.ROSSLER,
            }
            if base_type in type_map:
                return type_map[base_type]
            else:
                raise ValueError(f"Unknown base type '{base_type}'. "
                                 f"Use: {list(type_map.keys())}")
        else:
            raise TypeError(
                f"base_type must be SysType or str, got {type(base_type).__name__}"
            )


# ========== EQUATIONS OF MOTION ==========
def _lorenz_eom(p: LorenzParams):
    sigma, rho, beta = float(p.sigma), float(p.rho), float(p.beta)

    def f(t, state):
        x, y, z = state
        return np.array([
            sigma * (y - x),
            x * (rho - z) - y,
            x * y - beta * z,
        ])
    return f


def _van_der_pol_eom(p: VanDerPolParams):
    mu = float(p.mu)

    def f(t, state):
        x, y = state
        return np.array([y, mu * (1.0 - x * x) * y - x])
    return f


def _pendulum_eom(p: PendulumParams):
    gamma, omega0 = float(p.gamma), float(p.omega0)

    def f(t, state):
        theta, omega = state
        return np.array([
            omega,
            -gamma * omega - omega0 * omega0 * np.sin(theta),
        ])
    return f


def _rossler_eom(p: RosslerParams):
    a, b, c = float(p.a), float(p.b), float(p.c)

    def f(t, state):
        x, y, z = state
        return np.array([-y - z, x + a * y, b + z * (x - c)])
    return f


def integrate(system_parameters: SystemParams, dt: float, steps: int,
              initial_state) -> np.ndarray:
    """
    Integrate a catalog system and return the flat trajectory.

    The system is selected from the type of ``system_parameters``.

    Parameters
    ----------
    system_parameters : LorenzParams, VanDerPolParams, PendulumParams or RosslerParams
        Physical constants of the system
    dt : float
        Step size (not validated)
    steps : int
        Number of RK4 steps
    initial_state : array_like
        Initial state in natural coordinate order

    Returns
    -------
    np.ndarray
        Flat array of length (steps + 1) * N, ordered
        [x0, y0, (z0), x1, y1, (z1), ...]
    """
    system = System.from_params(system_parameters)
    integrator = RK4Integrator(dt, system.dim)
    return integrator.integrate(system.derivative_fn, initial_state, steps)
