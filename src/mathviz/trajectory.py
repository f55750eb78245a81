"""
Trajectory class: the discrete RK4 trajectory of a System, with array views,
DataFrame export and plotly figures for the visualization layer.
"""

import numpy as np
import pandas as pd
from typing import Optional, Tuple, TYPE_CHECKING
import plotly.graph_objects as go
from .config import config
from .utils import first_nonfinite_row
if TYPE_CHECKING:
    from .system import System


class Trajectory:
    """
    A fixed-step trajectory segment.

    Attributes:
        system: Reference to parent System (immutable)
        flat: flat state buffer of length (steps + 1) * dim, row-major
        dt: step size used to produce the buffer
        t0: time of the first state
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, system: "System", data: np.ndarray, dt: float,
                 t0: float = 0.0):
        self._system = system  # Immutable reference
        # Private read-only view; the caller's array keeps its own flags
        self._data = np.asarray(data, dtype=float).reshape(-1).view()
        self._data.flags.writeable = False
        self._dt = dt
        self._t0 = t0

    # ========== PROPERTY ACCESS ==========
    @property
    def system(self) -> "System":
        return self._system

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def dim(self) -> int:
        return self._system.dim

    @property
    def coordinates(self) -> Tuple[str, ...]:
        return self._system.coordinates

    @property
    def steps(self) -> int:
        """Number of RK4 steps (one less than the number of states)."""
        return len(self) - 1

    @property
    def t0(self) -> float:
        return self._t0

    @property
    def tf(self) -> float:
        """Nominal end time t0 + steps * dt."""
        return self._t0 + self.steps * self._dt

    @property
    def duration(self) -> float:
        """Trajectory duration."""
        return self.tf - self.t0

    @property
    def flat(self) -> np.ndarray:
        """Flat read-only buffer [x0, y0, (z0), x1, ...]."""
        return self._data

    @property
    def states(self) -> np.ndarray:
        """Read-only view of shape (steps + 1, dim)."""
        return self._data.reshape(-1, self.dim)

    @property
    def times(self) -> np.ndarray:
        """Sample times t0 + i * dt."""
        return self._t0 + np.arange(len(self)) * self._dt

    @property
    def initial_state(self) -> np.ndarray:
        return self.states[0].copy()

    @property
    def final_state(self) -> np.ndarray:
        return self.states[-1].copy()

    @property
    def is_finite(self) -> bool:
        """True if no state component is NaN or Inf."""
        return bool(np.all(np.isfinite(self._data)))

    # ========== UTILITY METHODS ==========
    def state_at_step(self, i: int) -> np.ndarray:
        """
        Get a copy of the state after step i.

        Negative indices count from the end, as for sequences.

        Raises:
            IndexError: If i is out of range
        """
        n = len(self)
        if not -n <= i < n:
            raise IndexError(
                f"Step {i} outside trajectory with {n} states"
            )
        return self.states[i].copy()

    def state_at(self, t: float) -> np.ndarray:
        """
        Get the stored state nearest to time t.

        No interpolation is done; the trajectory only holds the RK4 samples.

        Raises:
            ValueError: If t is outside [t0, tf]
        """
        self._validate_time(t)
        if not np.isfinite(self._dt) or self._dt == 0 or self.steps == 0:
            return self.state_at_step(0)
        i = int(round((t - self._t0) / self._dt))
        return self.state_at_step(min(max(i, 0), self.steps))

    def _validate_time(self, t: float):
        """Validate that time is within trajectory bounds."""
        t_min = min(self.t0, self.tf)
        t_max = max(self.t0, self.tf)

        if not (t_min <= t <= t_max):
            raise ValueError(
                f"Time {t} outside trajectory bounds [{self.t0}, {self.tf}]"
            )

    def contains_time(self, t: float) -> bool:
        """Check if time is within trajectory bounds."""
        return min(self.t0, self.tf) <= t <= max(self.t0, self.tf)

    def first_nonfinite_step(self) -> Optional[int]:
        """
        Index of the first state holding a NaN or Inf.

        Returns None for a fully finite trajectory. Intended for callers that
        want to cut or flag a diverged run; the trajectory itself keeps every
        sample.
        """
        return first_nonfinite_row(self.states)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export trajectory to pandas DataFrame.

        Returns:
            DataFrame with columns step, time and one column per coordinate
        """
        states = self.states
        data = {
            'step': np.arange(len(self)),
            'time': self.times,
        }
        for j, name in enumerate(self.coordinates):
            data[name] = states[:, j]

        return pd.DataFrame(data)

    def to_points(self) -> np.ndarray:
        """
        States as 3-D points of shape (steps + 1, 3).

        Planar systems are placed in the z = 0 plane.
        """
        points = np.zeros((len(self), 3))
        points[:, :self.dim] = self.states[:, :3]
        return points

    def extend(self, steps: int) -> 'Trajectory':
        """
        Continue integration from the final state.

        This creates a NEW Trajectory object that starts at the current end
        state and time. The original trajectory is unchanged.

        Parameters:
            steps: Number of additional steps

        Returns:
            New Trajectory object spanning [self.tf, self.tf + steps * dt]
        """
        return self._system.propagate(self.final_state, self._dt, steps,
                                      t0=self.tf)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        """Number of stored states (steps + 1)."""
        return self._data.shape[0] // self.dim

    def __repr__(self):
        return (f"Trajectory(system={self.system.base_type.value}, "
                f"dt={self.dt}, steps={self.steps}, t0={self.t0}, tf={self.tf})")

    def __str__(self):
        return (f"Trajectory of {self.system.base_type.value}: "
                f"{len(self)} states, t ∈ [{self.t0}, {self.tf}]")

    def __call__(self, t: float) -> np.ndarray:
        """
        Evaluate trajectory at time t.
        Syntactic sugar for .state_at(t). Allows traj(t) syntax.
        """
        return self.state_at(t)

    # ========== PLOTTING ==========
    def _plot_indices(self, n_points: Optional[int]) -> np.ndarray:
        """Evenly spaced sample indices, always including both ends."""
        if n_points is None:
            n_points = config.DEFAULT_PLOT_POINTS
        n = len(self)
        if n_points >= n:
            return np.arange(n)
        if n_points < 2:
            raise ValueError("n_points must be at least 2")
        return np.unique(np.linspace(0, n - 1, n_points).round().astype(int))

    def plot_3d(self, n_points: Optional[int] = None,
                traj_color: Optional[str] = None,
                line_width: Optional[int] = None) -> go.Figure:
        """
        Create 3D plot of trajectory.

        Planar systems are drawn in the z = 0 plane.

        Parameters:
            n_points: Maximum number of samples drawn (default: config)
            traj_color: Color of trajectory line (default: config)
            line_width: Width of trajectory line (default: config)

        Returns:
            Plotly Figure object
        """
        if traj_color is None:
            traj_color = config.DEFAULT_TRAJ_COLOR
        if line_width is None:
            line_width = config.DEFAULT_LINE_WIDTH

        points = self.to_points()[self._plot_indices(n_points)]
        labels = list(self.coordinates) + ['z'] * (3 - self.dim)

        fig = go.Figure()
        fig.add_trace(go.Scatter3d(
            x=points[:, 0],
            y=points[:, 1],
            z=points[:, 2],
            mode='lines',
            line=dict(color=traj_color, width=line_width),
            name='Trajectory',
            hovertemplate=(f'{labels[0]}: %{{x:.4f}}<br>{labels[1]}: %{{y:.4f}}'
                           f'<br>{labels[2]}: %{{z:.4f}}<extra></extra>')
        ))

        fig.update_layout(
            scene=dict(
                xaxis_title=labels[0],
                yaxis_title=labels[1],
                zaxis_title=labels[2],
                aspectmode='data'
            ),
            title=self._title(),
            showlegend=True
        )

        return fig

    def plot_phase(self, axes: Tuple[int, int] = (0, 1),
                   n_points: Optional[int] = None,
                   traj_color: Optional[str] = None) -> go.Figure:
        """
        Create 2D phase-space plot of two state components.

        Parameters:
            axes: Indices of the components on the x and y axes (default: (0, 1))
            n_points: Maximum number of samples drawn (default: config)
            traj_color: Color of trajectory line (default: config)

        Returns:
            Plotly Figure object
        """
        i, j = axes
        for k in axes:
            if not 0 <= k < self.dim:
                raise ValueError(
                    f"Axis {k} out of range for {self.dim}-dimensional system"
                )
        if traj_color is None:
            traj_color = config.DEFAULT_TRAJ_COLOR

        states = self.states[self._plot_indices(n_points)]
        fig = go.Figure(data=go.Scatter(
            x=states[:, i],
            y=states[:, j],
            mode='lines',
            line=dict(color=traj_color, width=config.DEFAULT_LINE_WIDTH),
            name='Trajectory'
        ))
        fig.update_layout(
            xaxis_title=self.coordinates[i],
            yaxis_title=self.coordinates[j],
            title=f'{self._title()} phase portrait'
        )
        return fig

    def add_to_plot(self, fig: go.Figure,
                    n_points: Optional[int] = None, color: Optional[str] = None,
                    name: Optional[str] = None, **kwargs) -> go.Figure:
        """
        Add this trajectory to an existing 3D Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            n_points: Maximum number of samples drawn (default: config)
            color: Color of trajectory line (default: config)
            name: Legend name for this trajectory (default: 'Trajectory N')
            **kwargs: Additional arguments passed to Scatter3d

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        if color is None:
            color = config.DEFAULT_TRAJ_COLOR_ADD
        points = self.to_points()[self._plot_indices(n_points)]

        # Default name if not provided
        if name is None:
            n_existing = sum(1 for trace in fig.data if isinstance(trace, go.Scatter3d))
            name = f'Trajectory {n_existing + 1}'

        fig.add_trace(go.Scatter3d(
            x=points[:, 0],
            y=points[:, 1],
            z=points[:, 2],
            mode='lines',
            line=dict(color=color, width=config.DEFAULT_LINE_WIDTH),
            name=name,
            **kwargs
        ))

        return fig

    def _title(self) -> str:
        return self.system.base_type.value.replace('_', ' ').title()
