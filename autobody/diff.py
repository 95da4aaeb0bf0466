"""Differentiation providers.

:func:`~autobody.measure.measure_sdf_map` needs three derivatives of
user-supplied callables: the spatial gradient of the distance, the spatial
Jacobian of the coordinate map and the time derivative of the map.  Any
object implementing :class:`Differentiator` can supply them, so the
composition algebra never depends on a particular differentiation strategy.

:class:`FiniteDifference` is the default: second-order central differences
in plain numpy.  Each partial costs two function evaluations, so a Jacobian
column costs two calls and a gradient in ``n`` dimensions ``2n + 1``.

Steps are relative: along axis ``i`` the step is
``step * max(1, |x_i|)``, which keeps the truncation/round-off balance
reasonable for coordinates far from the origin.

The gradient is built from the forward and backward slopes along each axis.
Where they disagree, as at the centre of a sphere or on the tie plane of a
union, the component is NaN rather than their average, and measurement
falls back to its zero normal and velocity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

import numpy as np

from ._common import _F, as_point
from .errors import ConfigurationError

__all__ = ["DEFAULT_STEP", "DEFAULT_HESSIAN_STEP", "DEFAULT_KINK_TOL", "Differentiator", "FiniteDifference"]

DEFAULT_STEP = 1e-6
# second differences divide by h², so they need a much larger step
DEFAULT_HESSIAN_STEP = 1e-4
# relative disagreement of the one-sided slopes that marks a kink
DEFAULT_KINK_TOL = 1e-3


@runtime_checkable
class Differentiator(Protocol):
    """Interface for the derivatives used by measurement and curvature."""

    def gradient(self, f: Callable[[_F], float], x: _F) -> _F:
        """Gradient ``∂f/∂x`` of a scalar function, shape ``(n,)``."""
        ...

    def jacobian(self, f: Callable[[_F], _F], x: _F) -> _F:
        """Jacobian ``J[i, j] = ∂f_i/∂x_j`` of a vector function, shape ``(m, n)``."""
        ...

    def derivative(self, f: Callable[[float], _F], t: float) -> _F:
        """Derivative ``df/dt`` of a vector function of a scalar, shape ``(m,)``."""
        ...

    def hessian(self, f: Callable[[_F], float], x: _F) -> _F:
        """Hessian ``∂²f/∂x_i∂x_j`` of a scalar function, shape ``(n, n)``."""
        ...


@dataclass(frozen=True)
class FiniteDifference:
    """Central finite differences.

    Parameters
    ----------
    step:
        Relative step for first derivatives.
    hessian_step:
        Relative step for second derivatives.
    kink_tol:
        Relative disagreement between the forward and backward slopes above
        which a gradient component is reported as NaN.

    NaN or Inf values returned by *f* propagate into the result.
    """

    step: float = DEFAULT_STEP
    hessian_step: float = DEFAULT_HESSIAN_STEP
    kink_tol: float = DEFAULT_KINK_TOL

    def __post_init__(self) -> None:
        for name in ("step", "hessian_step", "kink_tol"):
            value = getattr(self, name)
            if not (np.isfinite(value) and value > 0):
                raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")

    @staticmethod
    def _steps(x: _F, step: float) -> _F:
        return step * np.maximum(1.0, np.abs(x))

    def gradient(self, f: Callable[[_F], float], x: _F) -> _F:
        x = as_point(x)
        h = self._steps(x, self.step)
        f0 = f(x)
        g = np.empty_like(x)
        for i in range(x.size):
            e = np.zeros_like(x)
            e[i] = h[i]
            forward = (f(x + e) - f0) / h[i]
            backward = (f0 - f(x - e)) / h[i]
            # the one-sided slopes disagree across a kink, where no gradient exists
            if abs(forward - backward) > self.kink_tol * max(1.0, abs(forward), abs(backward)):
                g[i] = np.nan
            else:
                g[i] = 0.5 * (forward + backward)
        return g

    def jacobian(self, f: Callable[[_F], _F], x: _F) -> _F:
        x = as_point(x)
        h = self._steps(x, self.step)
        columns = []
        for j in range(x.size):
            e = np.zeros_like(x)
            e[j] = h[j]
            fp = np.atleast_1d(np.asarray(f(x + e), dtype=float))
            fm = np.atleast_1d(np.asarray(f(x - e), dtype=float))
            columns.append((fp - fm) / (2.0 * h[j]))
        return np.stack(columns, axis=-1)

    def derivative(self, f: Callable[[float], _F], t: float) -> _F:
        t = float(t)
        h = self.step * max(1.0, abs(t))
        fp = np.atleast_1d(np.asarray(f(t + h), dtype=float))
        fm = np.atleast_1d(np.asarray(f(t - h), dtype=float))
        return (fp - fm) / (2.0 * h)

    def hessian(self, f: Callable[[_F], float], x: _F) -> _F:
        x = as_point(x)
        n = x.size
        h = self._steps(x, self.hessian_step)
        f0 = f(x)
        H = np.empty((n, n))
        for i in range(n):
            ei = np.zeros_like(x)
            ei[i] = h[i]
            H[i, i] = (f(x + ei) - 2.0 * f0 + f(x - ei)) / (h[i] * h[i])
            for j in range(i + 1, n):
                ej = np.zeros_like(x)
                ej[j] = h[j]
                H[i, j] = H[j, i] = (
                    f(x + ei + ej) - f(x + ei - ej) - f(x - ei + ej) + f(x - ei - ej)
                ) / (4.0 * h[i] * h[j])
        return H
