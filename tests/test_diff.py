"""Tests for autobody.diff — finite-difference differentiation."""

import numpy as np
import numpy.testing as npt
import pytest

from autobody import ConfigurationError, Differentiator, FiniteDifference


FD = FiniteDifference()


class TestFiniteDifference:
    def test_satisfies_protocol(self):
        assert isinstance(FD, Differentiator)

    def test_gradient_of_quadratic(self):
        f = lambda x: x[0] ** 2 + 3.0 * x[0] * x[1] - x[2]
        x = np.array([1.0, 2.0, -0.5])
        npt.assert_allclose(FD.gradient(f, x), [2.0 + 6.0, 3.0, -1.0], atol=1e-7)

    def test_gradient_far_from_origin(self):
        f = lambda x: np.sum(x ** 2)
        x = np.array([1.0e4, -2.0e4])
        npt.assert_allclose(FD.gradient(f, x), 2.0 * x, rtol=1e-6)

    def test_jacobian_linear_map(self):
        M = np.array([[1.0, 2.0, 0.0], [0.5, -1.0, 3.0]])
        J = FD.jacobian(lambda x: M @ x, np.array([0.1, 0.2, 0.3]))
        assert J.shape == (2, 3)
        npt.assert_allclose(J, M, atol=1e-8)

    def test_jacobian_nonlinear(self):
        f = lambda x: np.array([x[0] * x[1], np.sin(x[0])])
        x = np.array([0.4, 1.5])
        expected = np.array([[x[1], x[0]], [np.cos(x[0]), 0.0]])
        npt.assert_allclose(FD.jacobian(f, x), expected, atol=1e-8)

    def test_derivative(self):
        f = lambda t: np.array([t ** 2, np.cos(t)])
        npt.assert_allclose(FD.derivative(f, 0.8), [1.6, -np.sin(0.8)], atol=1e-8)

    def test_derivative_of_scalar_valued(self):
        d = FD.derivative(lambda t: 3.0 * t, 2.0)
        assert d.shape == (1,)
        npt.assert_allclose(d, [3.0], atol=1e-8)

    def test_hessian_of_quadratic(self):
        A = np.array([[2.0, 0.5, 0.0], [0.5, 1.0, -0.3], [0.0, -0.3, 4.0]])
        f = lambda x: 0.5 * x @ A @ x
        H = FD.hessian(f, np.array([0.2, -0.1, 0.4]))
        npt.assert_allclose(H, A, atol=1e-6)
        npt.assert_array_equal(H, H.T)

    def test_accepts_lists(self):
        g = FD.gradient(lambda x: x[0] + 2.0 * x[1], [1.0, 1.0])
        npt.assert_allclose(g, [1.0, 2.0], atol=1e-8)

    def test_nan_propagates(self):
        g = FD.gradient(lambda x: np.nan * x[0], np.array([1.0, 2.0]))
        assert np.isnan(g[0])

    @pytest.mark.parametrize("step", [0.0, -1e-6, np.inf, np.nan])
    def test_invalid_step(self, step):
        with pytest.raises(ConfigurationError):
            FiniteDifference(step=step)

    def test_invalid_hessian_step(self):
        with pytest.raises(ConfigurationError):
            FiniteDifference(hessian_step=0.0)

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            FD.step = 1.0

    def test_invalid_kink_tol(self):
        with pytest.raises(ConfigurationError):
            FiniteDifference(kink_tol=-1e-3)


# ===========================================================================
# Non-smooth points
# ===========================================================================

class TestKinks:
    def test_abs_kink_is_nan(self):
        g = FD.gradient(lambda x: abs(x[0]) + 2.0 * x[1], np.array([0.0, 0.3]))
        assert np.isnan(g[0])
        npt.assert_allclose(g[1], 2.0, atol=1e-8)

    def test_cone_apex_is_nan(self):
        g = FD.gradient(lambda x: np.linalg.norm(x) - 0.5, np.zeros(3))
        assert np.all(np.isnan(g))

    def test_min_tie_is_nan(self):
        g = FD.gradient(lambda x: min(x[0], -x[0]), np.array([0.0, 1.0]))
        assert np.isnan(g[0])
        assert g[1] == 0.0

    def test_smooth_near_kink_is_finite(self):
        g = FD.gradient(lambda x: abs(x[0]), np.array([0.01]))
        npt.assert_allclose(g, [1.0], atol=1e-8)

    def test_parallel_branches_are_not_a_kink(self):
        # coincident surfaces: both sides of the tie have the same slope
        g = FD.gradient(lambda x: min(x[0] - 0.2, x[0] - 0.2), np.array([0.2]))
        npt.assert_allclose(g, [1.0], atol=1e-8)
