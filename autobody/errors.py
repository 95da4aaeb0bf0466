"""Exceptions and warnings raised by autobody."""

from __future__ import annotations

import numpy as np

__all__ = [
    "AutoBodyError",
    "ConfigurationError",
    "DimensionError",
    "SingularMapError",
    "BoundaryVelocityWarning",
]


class AutoBodyError(Exception):
    """Base class for all autobody errors."""


class ConfigurationError(AutoBodyError, ValueError):
    """A body, superposition or differentiator was built with invalid arguments."""


class DimensionError(AutoBodyError, ValueError):
    """An array argument has an unsupported shape."""


class SingularMapError(AutoBodyError, np.linalg.LinAlgError):
    """The spatial Jacobian of a coordinate map is singular at the query point.

    The boundary velocity ``-J⁻¹ ∂map/∂t`` is undefined there.
    """


class BoundaryVelocityWarning(RuntimeWarning):
    """The boundary velocity solve produced non-finite values."""
