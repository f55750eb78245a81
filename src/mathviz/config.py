"""
Global Configuration for Mathviz Package
========================================

This module provides package-wide configuration settings that users can modify
to control input validation at the solver boundary, divergence reporting, and
default plotting options.

Examples
--------
View current configuration:

>>> import mathviz
>>> print(mathviz.config)

Modify settings:

>>> mathviz.config.WARN_ON_DIVERGENCE = True
>>> mathviz.config.DEFAULT_PLOT_POINTS = 2000

Reset to defaults:

>>> mathviz.config.reset()

Temporarily modify settings:

>>> with mathviz.temp_config(STRICT_VALIDATION=False):
...     # Negative step counts are coerced to 0 with a warning
...     mathviz.solve_van_der_pol(1.0, 2.0, 0.0, 0.01, -5)

Notes
-----
None of these settings change the integration core. RK4Integrator and
System.propagate never validate their inputs and never look at this config.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class MathvizConfig:
    """
    Global configuration for Mathviz package.

    Attributes
    ----------
    STRICT_VALIDATION : bool
        If True, boundary validation failures raise exceptions.
        If False, validation failures issue warnings and the input is coerced.
        Default: True
    WARN_ON_DIVERGENCE : bool
        If True, the solve_* functions issue a RuntimeWarning when the
        returned trajectory contains non-finite values.
        Default: False
    DEFAULT_PLOT_POINTS : int
        Maximum number of trajectory samples drawn in plots. Longer
        trajectories are decimated evenly.
        Default: 5000
    DEFAULT_TRAJ_COLOR : str
        Default color for trajectory lines in plots.
        Default: 'red'
    DEFAULT_TRAJ_COLOR_ADD : str
        Default color for trajectories added to an existing figure.
        Default: 'blue'
    DEFAULT_LINE_WIDTH : int
        Default line width for trajectory lines.
        Default: 2
    """

    # Boundary validation behavior
    STRICT_VALIDATION: bool = True
    WARN_ON_DIVERGENCE: bool = False

    # Plotting defaults
    DEFAULT_PLOT_POINTS: int = 5000
    DEFAULT_TRAJ_COLOR: str = 'red'
    DEFAULT_TRAJ_COLOR_ADD: str = 'blue'
    DEFAULT_LINE_WIDTH: int = 2

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import mathviz
        >>> mathviz.config.STRICT_VALIDATION = False  # Modify
        >>> mathviz.config.reset()  # Back to defaults
        >>> mathviz.config.STRICT_VALIDATION
        True
        """
        defaults = MathvizConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["MathvizConfig:"]
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    WARN_ON_DIVERGENCE = {self.WARN_ON_DIVERGENCE}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_PLOT_POINTS = {self.DEFAULT_PLOT_POINTS}")
        lines.append(f"    DEFAULT_TRAJ_COLOR = '{self.DEFAULT_TRAJ_COLOR}'")
        lines.append(f"    DEFAULT_TRAJ_COLOR_ADD = '{self.DEFAULT_TRAJ_COLOR_ADD}'")
        lines.append(f"    DEFAULT_LINE_WIDTH = {self.DEFAULT_LINE_WIDTH}")
        return "\n".join(lines)


# Global configuration instance
config = MathvizConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import mathviz
    >>> with mathviz.temp_config(WARN_ON_DIVERGENCE=True):
    ...     data = mathviz.solve_lorenz(10, 28, 8/3, 1, 1, 1, 0.01, 1000)
    >>> # Original config restored here
    >>> mathviz.config.WARN_ON_DIVERGENCE
    False

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"MathvizConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
