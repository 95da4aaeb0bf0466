"""
autobody — implicit immersed-boundary geometry
==============================================

Signed distance functions with time-dependent coordinate maps, for
immersed-boundary flow solvers.  At any point and time a body reports its
distance, unit normal and boundary velocity.

Implemented features
--------------------
- Bodies: :class:`AutoBody` from an ``sdf(x, t)`` and an optional
  ``map(x, t)``
- Boolean operations: :class:`Union`, :class:`Intersection`,
  :class:`Negation` and the operators ``+``, ``|``, ``&``, ``-``
- Iterative superposition of many bodies: :class:`AutoBodies`
- Measurement: :func:`measure` (distance, normal, velocity)
- Curvature: :func:`curvature`, :func:`body_curvature`
- Pluggable differentiation: :class:`Differentiator`,
  :class:`FiniteDifference`
- Grid sampling: :func:`sample_levelset`, :func:`sample_measure`

Quick start
-----------

::

    import numpy as np
    from autobody import AutoBody, AutoBodies, measure

    radius = 0.5
    circle = lambda x, t: np.linalg.norm(x) - radius
    # a cylinder moving in +x at unit speed
    moving = AutoBody(circle, lambda x, t: x - np.array([t, 0.0]))
    static = AutoBody(circle, lambda x, t: x - np.array([0.0, 2.0]))

    body = AutoBodies([moving, static])
    d, n, V = measure(body, [1.0, 0.0], 0.25)
    # d ≈ 0.25, n ≈ (1, 0), V ≈ (1, 0)
"""

from .bodies import AutoBodies, Op, sdf_map_d
from .body import (
    AbstractBody,
    AutoBody,
    Intersection,
    Negation,
    Union,
    difference,
    intersection,
    negate,
    sdf,
    union,
)
from .diff import Differentiator, FiniteDifference
from .errors import (
    AutoBodyError,
    BoundaryVelocityWarning,
    ConfigurationError,
    DimensionError,
    SingularMapError,
)
from .grid import cell_centres, sample_levelset, sample_measure
from .measure import Measurement, body_curvature, curvature, measure, measure_sdf_map

__version__ = "0.1.0"

__all__ = [
    # Bodies
    "AbstractBody",
    "AutoBody",
    "AutoBodies",

    # Boolean operations
    "Union",
    "Intersection",
    "Negation",
    "union",
    "intersection",
    "negate",
    "difference",
    "Op",

    # Evaluation
    "sdf",
    "sdf_map_d",
    "measure",
    "measure_sdf_map",
    "Measurement",
    "curvature",
    "body_curvature",

    # Differentiation
    "Differentiator",
    "FiniteDifference",

    # Grid utilities
    "cell_centres",
    "sample_levelset",
    "sample_measure",

    # Errors
    "AutoBodyError",
    "ConfigurationError",
    "DimensionError",
    "SingularMapError",
    "BoundaryVelocityWarning",
]
