"""
Mathviz: Trajectories of Nonlinear Dynamical Systems

A Python package for computing fixed-step RK4 trajectories of classic
nonlinear systems (Lorenz, Van der Pol, damped pendulum, Rössler) for
visualization.
"""

# Core classes
from .integrator import RK4Integrator
from .system import (
    System, SysType,
    LorenzParams, VanDerPolParams, PendulumParams, RosslerParams,
    integrate,
)
from .trajectory import Trajectory, Trajectory as Traj

# Presets and factories
from .defaults import (
    Preset, PRESETS, get_preset, run_preset,
    LORENZ_CLASSIC, VAN_DER_POL_CLASSIC, PENDULUM_CLASSIC, ROSSLER_CLASSIC,
    lorenz, van_der_pol, damped_pendulum, rossler,
)

# Flat-argument solvers
from .solvers import (
    solve_lorenz, solve_van_der_pol, solve_damped_pendulum, solve_rossler,
    to_points,
)

# Configuration
from .config import config, temp_config

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from mathviz import *"
__all__ = [
    # Classes
    "RK4Integrator",
    "System",
    "SysType",
    "LorenzParams",
    "VanDerPolParams",
    "PendulumParams",
    "RosslerParams",
    "Trajectory",
    "Preset",
    # Abbreviations
    "Traj",
    # Functions
    "integrate",
    "get_preset",
    "run_preset",
    "lorenz",
    "van_der_pol",
    "damped_pendulum",
    "rossler",
    "solve_lorenz",
    "solve_van_der_pol",
    "solve_damped_pendulum",
    "solve_rossler",
    "to_points",
    # Constants
    "PRESETS",
    "LORENZ_CLASSIC",
    "VAN_DER_POL_CLASSIC",
    "PENDULUM_CLASSIC",
    "ROSSLER_CLASSIC",
    # Configuration
    "config",
    "temp_config",
]
