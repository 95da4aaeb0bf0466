"""Shared helpers used across the autobody modules.

This module provides:

* **Type aliases**: :data:`_F`, :data:`SDFFunc`, :data:`MapFunc`
* **Point helpers**: :func:`as_point`, :func:`identity_map`, :func:`length`
* **Scalar boolean operators**: :func:`opUnion`, :func:`opIntersection`

Not meant to be imported directly by end users — import from
:mod:`autobody` instead.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]
SDFFunc = Callable[[_F, float], float]
MapFunc = Callable[[_F, float], _F]

__all__ = [
    "_F", "SDFFunc", "MapFunc",
    "as_point", "identity_map", "length",
    "opUnion", "opIntersection",
]


# ===========================================================================
# Point helpers
# ===========================================================================

def as_point(x) -> _F:
    """Return *x* as a 1-D float array (a single query point)."""
    return np.asarray(x, dtype=float).reshape(-1)


def identity_map(x: _F, t: float) -> _F:
    """Default coordinate map: ``map(x, t) = x``."""
    return x


def length(v: _F) -> float:
    """Euclidean length of *v*."""
    return float(np.linalg.norm(v))


# ===========================================================================
# Boolean operators on distance values
# ===========================================================================

def opUnion(d1: float, d2: float) -> float:
    """Union of two distances: ``min(d1, d2)``."""
    return np.minimum(d1, d2)


def opIntersection(d1: float, d2: float) -> float:
    """Intersection of two distances: ``max(d1, d2)``."""
    return np.maximum(d1, d2)
