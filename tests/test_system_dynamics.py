"""
Test suite for the catalog equations of motion and System propagation.

Tests cover:
- Pointwise derivative values for each system
- Autonomy (time argument ignored) and purity
- The module-level integrate() entry point
- System.propagate() results
"""

import pytest
import numpy as np
from mathviz import (
    System, RK4Integrator, integrate,
    LorenzParams, VanDerPolParams, PendulumParams, RosslerParams,
    LORENZ_CLASSIC, VAN_DER_POL_CLASSIC, PENDULUM_CLASSIC, ROSSLER_CLASSIC,
)

TOL = 1e-10


class TestDerivatives:
    """Fixed-point derivative checks, one per system."""

    def test_lorenz(self):
        """Lorenz at (1, 1, 1) with classic parameters."""
        sys = System('lorenz', LorenzParams(10.0, 28.0, 8.0 / 3.0))
        d = sys.derivative(0.0, [1.0, 1.0, 1.0])

        np.testing.assert_allclose(d, [0.0, 26.0, 1.0 - 8.0 / 3.0],
                                   rtol=0, atol=TOL)

    def test_van_der_pol(self):
        """Van der Pol at (0, 1) with mu=1."""
        sys = System('van_der_pol', VanDerPolParams(1.0))
        d = sys.derivative(0.0, [0.0, 1.0])

        np.testing.assert_allclose(d, [1.0, 1.0], rtol=0, atol=TOL)

    def test_van_der_pol_nonlinear_term(self):
        """Van der Pol at (2, 3) with mu=0.5 exercises the x^2 term."""
        sys = System('van_der_pol', VanDerPolParams(0.5))
        d = sys.derivative(0.0, [2.0, 3.0])

        # 0.5 * (1 - 4) * 3 - 2 = -6.5
        np.testing.assert_allclose(d, [3.0, -6.5], rtol=0, atol=TOL)

    def test_damped_pendulum(self):
        """Pendulum at (0, 1) with gamma=0.5, omega0=1."""
        sys = System('damped_pendulum', PendulumParams(0.5, 1.0))
        d = sys.derivative(0.0, [0.0, 1.0])

        np.testing.assert_allclose(d, [1.0, -0.5], rtol=0, atol=TOL)

    def test_damped_pendulum_gravity_term(self):
        """Pendulum at (pi/2, 0) with omega0=2 gives -omega0^2."""
        sys = System('damped_pendulum', PendulumParams(0.3, 2.0))
        d = sys.derivative(0.0, [np.pi / 2.0, 0.0])

        np.testing.assert_allclose(d, [0.0, -4.0], rtol=0, atol=TOL)

    def test_rossler(self):
        """Rossler at (1, 1, 1) with classic parameters."""
        sys = System('rossler', RosslerParams(0.2, 0.2, 5.7))
        d = sys.derivative(0.0, [1.0, 1.0, 1.0])

        np.testing.assert_allclose(d, [-2.0, 1.2, -4.5], rtol=0, atol=TOL)


class TestDerivativeContract:
    """Test the (t, state) -> state capability contract."""

    @pytest.mark.parametrize("params,state", [
        (LORENZ_CLASSIC, [1.5, -2.0, 20.0]),
        (VAN_DER_POL_CLASSIC, [0.7, -0.3]),
        (PENDULUM_CLASSIC, [2.5, 0.1]),
        (ROSSLER_CLASSIC, [-3.0, 2.0, 0.5]),
    ])
    def test_time_ignored(self, params, state):
        """All catalog systems are autonomous."""
        sys = System.from_params(params)

        np.testing.assert_array_equal(sys.derivative(0.0, state),
                                      sys.derivative(123.4, state))

    @pytest.mark.parametrize("params,state", [
        (LORENZ_CLASSIC, [1.5, -2.0, 20.0]),
        (PENDULUM_CLASSIC, [2.5, 0.1]),
    ])
    def test_output_shape_and_purity(self, params, state):
        """Output has the state's shape; input is untouched; calls repeat."""
        sys = System.from_params(params)
        y = np.array(state)
        d1 = sys.derivative_fn(0.0, y)
        d2 = sys.derivative_fn(0.0, y)

        assert d1.shape == y.shape
        assert d1 is not y
        np.testing.assert_array_equal(d1, d2)
        np.testing.assert_array_equal(y, state)

    def test_derivative_fn_usable_by_integrator(self):
        """derivative_fn plugs straight into RK4Integrator."""
        sys = System('lorenz', LORENZ_CLASSIC)
        out = RK4Integrator(0.01, sys.dim).integrate(sys.derivative_fn,
                                                     [1.0, 1.0, 1.0], 10)

        assert out.shape == (33,)


class TestIntegrate:
    """Test the flat integrate() entry point."""

    @pytest.mark.parametrize("params,y0", [
        (LORENZ_CLASSIC, (1.0, 1.0, 1.0)),
        (VAN_DER_POL_CLASSIC, (2.0, 0.0)),
        (PENDULUM_CLASSIC, (np.pi - 0.5, 0.0)),
        (ROSSLER_CLASSIC, (1.0, 1.0, 1.0)),
    ])
    @pytest.mark.parametrize("steps", [0, 1, 250])
    def test_length_and_initial_state(self, params, y0, steps):
        """Length is (steps + 1) * N and the head is the initial state."""
        out = integrate(params, 0.01, steps, y0)
        n = len(y0)

        assert out.shape == ((steps + 1) * n,)
        assert tuple(out[:n]) == y0

    def test_deterministic(self):
        """Identical calls give bit-identical trajectories."""
        a = integrate(LORENZ_CLASSIC, 0.01, 3000, (1.0, 1.0, 1.0))
        b = integrate(LORENZ_CLASSIC, 0.01, 3000, (1.0, 1.0, 1.0))

        np.testing.assert_array_equal(a, b)

    def test_matches_propagate(self):
        """integrate() and System.propagate() agree."""
        flat = integrate(ROSSLER_CLASSIC, 0.02, 500, (1.0, 1.0, 1.0))
        traj = System('rossler', ROSSLER_CLASSIC).propagate((1.0, 1.0, 1.0),
                                                          0.02, 500)

        np.testing.assert_array_equal(flat, traj.flat)

    def test_lorenz_stays_on_attractor(self):
        """Classic Lorenz run stays bounded."""
        out = integrate(LORENZ_CLASSIC, 0.01, 5000, (1.0, 1.0, 1.0))
        states = out.reshape(-1, 3)

        assert np.all(np.isfinite(states))
        assert np.max(np.abs(states[:, :2])) < 40.0
        assert 0.0 < np.max(states[:, 2]) < 60.0

    def test_pendulum_decays_to_rest(self):
        """Damped pendulum spirals to the origin."""
        out = integrate(PENDULUM_CLASSIC, 0.02, 5000, (np.pi - 0.5, 0.0))
        final = out[-2:]

        assert np.all(np.abs(final) < 1e-3)

    def test_van_der_pol_limit_cycle(self):
        """Van der Pol settles on a cycle of amplitude about 2."""
        out = integrate(VanDerPolParams(1.0), 0.01, 5000, (0.1, 0.0))
        x = out.reshape(-1, 2)[-2000:, 0]

        assert 1.9 < np.max(np.abs(x)) < 2.1

    def test_divergent_parameters_propagate_non_finite(self):
        """Unstable parameters give non-finite values without an error."""
        out = integrate(VanDerPolParams(-50.0), 0.1, 200, (3.0, 3.0))

        assert len(out) == 402
        assert out[0] == 3.0
        assert not np.all(np.isfinite(out))
