"""Implicit bodies and the algebra that combines them.

An *implicit body* answers two questions about a point ``x`` at time ``t``:

* ``sdf(x, t)`` — the signed distance to its surface (negative inside),
* ``map(x, t)`` — the time-dependent coordinate map that moves it.

:class:`AutoBody` wraps a user-supplied pair of callables.  :class:`Union`,
:class:`Intersection` and :class:`Negation` hold their operands and pick the
``map`` of whichever operand wins the ``min``/``max`` at query time, so the
boundary velocity seen by :func:`autobody.measure.measure` always belongs to
the surface that is actually closest.

For more than a handful of bodies prefer :class:`autobody.bodies.AutoBodies`,
which folds iteratively instead of nesting combinators.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ._common import (
    _F,
    MapFunc,
    SDFFunc,
    as_point,
    identity_map,
    opIntersection,
    opUnion,
)
from .measure import Measurement, body_curvature, measure_sdf_map

__all__ = [
    "AbstractBody",
    "AutoBody",
    "Union",
    "Intersection",
    "Negation",
    "union",
    "intersection",
    "negate",
    "difference",
    "sdf",
]


# ===========================================================================
# Base class
# ===========================================================================

class AbstractBody:
    """Base class for implicit bodies.

    Subclasses implement :meth:`sdf` and :meth:`map`.  Everything else —
    measurement, curvature and the boolean operators — is shared.

    Implements:
    - Boolean operations: :meth:`union`, :meth:`intersect`, :meth:`subtract`,
      :meth:`negate` and the operators ``+``, ``|``, ``&``, ``-``
    - Geometry queries:   :meth:`measure`, :meth:`curvature`
    """

    def sdf(self, x: _F, t: float) -> float:
        """Signed distance at point *x* and time *t*."""
        raise NotImplementedError

    def map(self, x: _F, t: float) -> _F:
        """Coordinate map evaluated at point *x* and time *t*."""
        raise NotImplementedError

    def resolve(self, x: _F, t: float) -> Tuple[SDFFunc, MapFunc]:
        """Return the ``(sdf, map)`` pair to differentiate at ``(x, t)``."""
        return self.sdf, self.map

    def measure(self, x, t: float, diff=None) -> Measurement:
        """Distance, unit normal and boundary velocity at ``(x, t)``.

        See :func:`autobody.measure.measure_sdf_map`.
        """
        x = as_point(x)
        sdf_func, map_func = self.resolve(x, t)
        return measure_sdf_map(sdf_func, map_func, x, t, diff=diff)

    def curvature(self, x, t: float, diff=None) -> Tuple[float, float]:
        """Mean and Gaussian curvature ``(H, K)`` of the distance field at ``(x, t)``."""
        return body_curvature(self, x, t, diff=diff)

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, other: AbstractBody) -> Union:
        """Return the union (min) of this body and *other*."""
        return Union(self, other)

    def intersect(self, other: AbstractBody) -> Intersection:
        """Return the intersection (max) of this body and *other*."""
        return Intersection(self, other)

    def negate(self) -> Negation:
        """Swap inside and outside."""
        return Negation(self)

    def subtract(self, other: AbstractBody) -> Intersection:
        """Remove *other* from this body."""
        return Intersection(self, Negation(other))

    def __add__(self, other: AbstractBody) -> Union:
        return self.union(other)

    def __or__(self, other: AbstractBody) -> Union:
        return self.union(other)

    def __and__(self, other: AbstractBody) -> Intersection:
        return self.intersect(other)

    def __sub__(self, other: AbstractBody) -> Intersection:
        return self.subtract(other)

    def __neg__(self) -> Negation:
        return self.negate()


# ===========================================================================
# Leaf body
# ===========================================================================

class AutoBody(AbstractBody):
    """Body defined by a signed distance function and an optional coordinate map.

    Parameters
    ----------
    sdf:
        ``sdf(x, t) -> float``.  Need not be an exact distance: the gradient
        normalisation in :func:`~autobody.measure.measure_sdf_map` corrects
        pseudo-SDFs to first order.
    map:
        ``map(x, t) -> array`` of the same length as *x*.  Defaults to the
        identity, i.e. a static body.
    compose:
        If true (the default) the stored distance is ``sdf(map(x, t), t)``.
        If false, *sdf* is stored unchanged and *map* is only used for the
        boundary velocity.  ``map`` itself is never composed.
    """

    def __init__(
        self,
        sdf: SDFFunc,
        map: Optional[MapFunc] = None,
        compose: bool = True,
    ) -> None:
        map_func = identity_map if map is None else map
        if compose:
            def _sdf(x: _F, t: float) -> float:
                return sdf(map_func(x, t), t)
        else:
            _sdf = sdf
        self._sdf = _sdf
        self._map = map_func

    def sdf(self, x: _F, t: float) -> float:
        return self._sdf(x, t)

    def map(self, x: _F, t: float) -> _F:
        return self._map(x, t)


# ===========================================================================
# Combinators
# ===========================================================================

class Union(AbstractBody):
    """Union of two bodies: minimum distance, map of the nearer body.

    On equal distances the first operand's map is used.
    """

    def __init__(self, a: AbstractBody, b: AbstractBody) -> None:
        self.a = a
        self.b = b

    def sdf(self, x: _F, t: float) -> float:
        return opUnion(self.a.sdf(x, t), self.b.sdf(x, t))

    def map(self, x: _F, t: float) -> _F:
        if self.b.sdf(x, t) < self.a.sdf(x, t):
            return self.b.map(x, t)
        return self.a.map(x, t)

    def __repr__(self) -> str:
        return f"Union({self.a!r}, {self.b!r})"


class Intersection(AbstractBody):
    """Intersection of two bodies: maximum distance, map of the farther body.

    On equal distances the first operand's map is used.
    """

    def __init__(self, a: AbstractBody, b: AbstractBody) -> None:
        self.a = a
        self.b = b

    def sdf(self, x: _F, t: float) -> float:
        return opIntersection(self.a.sdf(x, t), self.b.sdf(x, t))

    def map(self, x: _F, t: float) -> _F:
        if self.b.sdf(x, t) > self.a.sdf(x, t):
            return self.b.map(x, t)
        return self.a.map(x, t)

    def __repr__(self) -> str:
        return f"Intersection({self.a!r}, {self.b!r})"


class Negation(AbstractBody):
    """Complement of a body: the distance changes sign, the map is unchanged."""

    def __init__(self, body: AbstractBody) -> None:
        self.body = body

    def sdf(self, x: _F, t: float) -> float:
        return -self.body.sdf(x, t)

    def map(self, x: _F, t: float) -> _F:
        return self.body.map(x, t)

    def __repr__(self) -> str:
        return f"Negation({self.body!r})"


# ===========================================================================
# Functional interface
# ===========================================================================

def union(a: AbstractBody, b: AbstractBody) -> Union:
    """``a ∪ b``."""
    return Union(a, b)


def intersection(a: AbstractBody, b: AbstractBody) -> Intersection:
    """``a ∩ b``."""
    return Intersection(a, b)


def negate(a: AbstractBody) -> Negation:
    """Complement of *a*."""
    return Negation(a)


def difference(a: AbstractBody, b: AbstractBody) -> Intersection:
    """``a ∖ b``, i.e. ``intersection(a, negate(b))``."""
    return Intersection(a, Negation(b))


def sdf(body: AbstractBody, x, t: float) -> float:
    """Signed distance of *body* at point *x* and time *t*."""
    return body.sdf(as_point(x), t)
