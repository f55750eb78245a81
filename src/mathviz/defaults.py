"""
Default Parameters and Preset Simulations
=========================================

Classic parameter sets, initial conditions and simulation settings for the
catalog systems, plus factory functions that build the corresponding System.

Examples
--------
>>> from mathviz import lorenz, run_preset
>>> sys = lorenz()                  # Classic Lorenz system
>>> traj = run_preset('rossler')    # Integrate with the preset dt and steps
"""
import numpy as np
from dataclasses import dataclass, field
from typing import Dict, Tuple
from .system import (System, SysType, LorenzParams, VanDerPolParams,
                     PendulumParams, RosslerParams, SystemParams)
from .trajectory import Trajectory

"""
Predefined parameter records
"""
LORENZ_CLASSIC = LorenzParams(sigma=10.0, rho=28.0, beta=8.0 / 3.0)

VAN_DER_POL_CLASSIC = VanDerPolParams(mu=1.5)

PENDULUM_CLASSIC = PendulumParams(gamma=0.3, omega0=1.5)

ROSSLER_CLASSIC = RosslerParams(a=0.2, b=0.2, c=5.7)


@dataclass(frozen=True)
class Preset:
    """
    A ready-to-run simulation setup.

    Attributes
    ----------
    name : str
        Display name
    params : LorenzParams, VanDerPolParams, PendulumParams or RosslerParams
        Parameter record
    initial_state : tuple of float
        Initial state in natural coordinate order
    dt : float
        Step size
    steps : int
        Number of steps
    param_labels : dict of str to str
        Display label for each parameter field, keyed by field name
    description : str
        One-line description
    """
    name: str
    params: SystemParams
    initial_state: Tuple[float, ...]
    dt: float
    steps: int
    param_labels: Dict[str, str] = field(default_factory=dict)
    description: str = ''

    def system(self) -> System:
        """Build the System for this preset."""
        return System.from_params(self.params)

    def run(self) -> Trajectory:
        """Integrate the preset."""
        return self.system().propagate(self.initial_state, self.dt, self.steps)


PRESETS: Dict[SysType, Preset] = {
    SysType.LORENZ: Preset(
        name='Lorenz Attractor',
        params=LORENZ_CLASSIC,
        initial_state=(1.0, 1.0, 1.0),
        dt=0.01,
        steps=10000,
        param_labels={
            'sigma': 'σ (Prandtl number)',
            'rho': 'ρ (Rayleigh number)',
            'beta': 'β (geometric factor)',
        },
        description='The butterfly effect in action',
    ),
    SysType.VAN_DER_POL: Preset(
        name='Van der Pol Oscillator',
        params=VAN_DER_POL_CLASSIC,
        initial_state=(2.0, 0.0),
        dt=0.02,
        steps=5000,
        param_labels={'mu': 'μ (nonlinearity strength)'},
        description='Self-sustaining electronic heartbeat',
    ),
    SysType.DAMPED_PENDULUM: Preset(
        name='Damped Pendulum',
        params=PENDULUM_CLASSIC,
        initial_state=(np.pi - 0.5, 0.0),
        dt=0.02,
        steps=5000,
        param_labels={
            'gamma': 'γ (damping coefficient)',
            'omega0': 'ω₀ (natural frequency)',
        },
        description='Energy slowly fading to stillness',
    ),
    SysType.ROSSLER: Preset(
        name='Rössler System',
        params=ROSSLER_CLASSIC,
        initial_state=(1.0, 1.0, 1.0),
        dt=0.02,
        steps=10000,
        param_labels={'a': 'a', 'b': 'b', 'c': 'c'},
        description='Chaos in its simplest form',
    ),
}


def get_preset(base_type) -> Preset:
    """
    Look up a preset by system type.

    Parameters
    ----------
    base_type : SysType or str
        System type or any alias accepted by System

    Returns
    -------
    Preset
    """
    return PRESETS[System._parse_base_type(base_type)]


def run_preset(base_type) -> Trajectory:
    """Integrate the preset for base_type with its default dt and steps."""
    return get_preset(base_type).run()


def lorenz(sigma=10.0, rho=28.0, beta=8.0 / 3.0):
    """
    Create a Lorenz system.

    Parameters
    ----------
    sigma, rho, beta : float, optional
        Defaults are the classic chaotic values 10, 28, 8/3

    Returns
    -------
    System
    """
    return System(SysType.LORENZ, LorenzParams(sigma, rho, beta))


def van_der_pol(mu=1.5):
    """
    Create a Van der Pol oscillator.

    Small mu gives a nearly sinusoidal limit cycle, large mu gives
    relaxation oscillations.
    """
    return System(SysType.VAN_DER_POL, VanDerPolParams(mu))


def damped_pendulum(gamma=0.3, omega0=1.5):
    """Create a damped pendulum."""
    return System(SysType.DAMPED_PENDULUM, PendulumParams(gamma, omega0))


def rossler(a=0.2, b=0.2, c=5.7):
    """Create a Rössler system."""
    return System(SysType.ROSSLER, RosslerParams(a, b, c))
