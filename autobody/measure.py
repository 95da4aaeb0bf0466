"""Distance, normal, boundary velocity and curvature from implicit bodies.

The measurement turns any implicit function into the three quantities an
immersed-boundary solver needs at a point:

1. ``d = f(x, t)`` and ``n = ∇ₓf``.
2. A general implicit function with ``f(x₀) = 0`` satisfies
   ``f(x) = f(x₀) + d|∇f| + O(d²)``, so ``d ≈ f(x)/|∇f|`` and
   ``n̂ = ∇f/|∇f|`` are first-order accurate even for pseudo-SDFs.
3. The material coordinate ``ξ = map(x, t)`` is constant on the moving
   boundary: ``Dξ/Dt = ∂map/∂t + J ẋ = 0``, hence ``ẋ = -J⁻¹ ∂map/∂t`` with
   ``J = ∂map/∂x``.

Only the coordinate map determines the velocity.
"""

from __future__ import annotations

import logging
import warnings
from typing import NamedTuple, Optional, Tuple

import numpy as np

from ._common import _F, MapFunc, SDFFunc, as_point, length
from .diff import Differentiator, FiniteDifference
from .errors import BoundaryVelocityWarning, DimensionError, SingularMapError

__all__ = ["Measurement", "measure", "measure_sdf_map", "curvature", "body_curvature"]

logger = logging.getLogger(__name__)


class Measurement(NamedTuple):
    """Result of :func:`measure`; unpacks as ``d, n, V``."""

    distance: float
    normal: _F
    velocity: _F


def measure_sdf_map(
    sdf: SDFFunc,
    map: MapFunc,
    x,
    t: float,
    diff: Optional[Differentiator] = None,
) -> Measurement:
    """Measure the implicit geometry defined by *sdf* and *map* at ``(x, t)``.

    Parameters
    ----------
    sdf:
        ``sdf(x, t) -> float``, already composed with the map if desired.
    map:
        ``map(x, t) -> array``; its spatial Jacobian must be invertible at
        ``(x, t)``.
    x:
        Query point, any array-like of length ``n``.
    t:
        Time.
    diff:
        Differentiation provider; defaults to :class:`FiniteDifference`.

    Returns
    -------
    Measurement
        ``(distance, normal, velocity)``.  If the gradient of *sdf* contains
        NaN the result is ``(sdf(x, t), 0, 0)``: a zero normal means the
        geometry is undefined at this point.

    Raises
    ------
    SingularMapError
        If the map Jacobian is exactly singular.
    """
    diff = FiniteDifference() if diff is None else diff
    x = as_point(x)
    t = float(t)

    d = np.float64(sdf(x, t))
    n = np.asarray(diff.gradient(lambda p: sdf(p, t), x), dtype=float)
    if np.isnan(n).any():
        logger.debug("NaN gradient at x=%s, t=%g; returning zero normal and velocity", x, t)
        return Measurement(float(d), np.zeros_like(x), np.zeros_like(x))

    m = length(n)
    d = d / m
    n = n / m

    J = np.asarray(diff.jacobian(lambda p: map(p, t), x), dtype=float)
    dot = np.asarray(diff.derivative(lambda s: map(x, s), t), dtype=float)
    return Measurement(float(d), n, _boundary_velocity(J, dot))


def _boundary_velocity(J: _F, dot: _F) -> _F:
    """Solve ``J v = -dot``."""
    try:
        v = -np.linalg.solve(J, dot)
    except np.linalg.LinAlgError as exc:
        raise SingularMapError(f"cannot solve for boundary velocity: {exc}") from exc
    if not np.isfinite(v).all():
        warnings.warn(
            "boundary velocity is not finite; the coordinate map Jacobian is "
            "ill-conditioned or contains NaN",
            BoundaryVelocityWarning,
            stacklevel=3,
        )
    return v


def measure(body, x, t: float, diff: Optional[Differentiator] = None) -> Measurement:
    """``d, n, V = measure(body, x, t)`` for any body or superposition."""
    return body.measure(x, t, diff=diff)


# ===========================================================================
# Curvature
# ===========================================================================

def curvature(A) -> Tuple[float, float]:
    """Return ``H, K``, the mean and Gaussian curvature from ``A = hessian(sdf)``.

    ``H = tr(A)/2``.  ``K`` is the sum of the principal 2×2 minors of *A* in
    3-D and zero in 2-D.

    Raises
    ------
    DimensionError
        If *A* is not 2×2 or 3×3.
    """
    A = np.asarray(A, dtype=float)
    if A.shape not in ((2, 2), (3, 3)):
        raise DimensionError(f"curvature needs a 2x2 or 3x3 Hessian, got shape {A.shape}")
    H = 0.5 * np.trace(A)
    K = 0.0
    if A.shape == (3, 3):
        K = (
            A[0, 0] * A[1, 1] + A[0, 0] * A[2, 2] + A[1, 1] * A[2, 2]
            - A[0, 1] ** 2 - A[0, 2] ** 2 - A[1, 2] ** 2
        )
    return float(H), float(K)


def body_curvature(body, x, t: float, diff: Optional[Differentiator] = None) -> Tuple[float, float]:
    """Curvature of *body*'s distance field at ``(x, t)``.

    The Hessian comes from ``diff.hessian``; for a superposition the active
    sub-body at ``(x, t)`` is differentiated.
    """
    diff = FiniteDifference() if diff is None else diff
    x = as_point(x)
    t = float(t)
    sdf_func, _ = body.resolve(x, t)
    return curvature(diff.hessian(lambda p: sdf_func(p, t), x))
