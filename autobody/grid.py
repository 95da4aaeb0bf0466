"""Grid sampling utilities for implicit bodies."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .body import AbstractBody
from .diff import Differentiator, FiniteDifference
from .errors import DimensionError

_Array = npt.NDArray[np.floating]
_Bounds = Sequence[Tuple[float, float]]
_Resolution = Sequence[int]

__all__ = ["cell_centres", "sample_levelset", "sample_measure"]


def cell_centres(bounds: _Bounds, resolution: _Resolution) -> _Array:
    """Cell-centre coordinates of a uniform grid.

    Parameters
    ----------
    bounds:
        ``((x0, x1), (y0, y1), ...)`` physical extents, one pair per axis.
    resolution:
        ``(nx, ny, ...)`` number of cells along each axis.

    Returns
    -------
    numpy.ndarray
        Shape ``(..., ny, nx, ndim)``: axes are reversed (z-first in 3-D)
        and the last axis holds ``(x, y, ...)``.
    """
    if len(bounds) != len(resolution):
        raise DimensionError(
            f"bounds has {len(bounds)} axes but resolution has {len(resolution)}"
        )
    axes = [
        np.linspace(lo, hi, n, endpoint=False) + (hi - lo) / (2.0 * n)
        for (lo, hi), n in zip(bounds, resolution)
    ]
    mesh = np.meshgrid(*reversed(axes), indexing="ij")
    return np.stack(mesh[::-1], axis=-1)


def sample_levelset(
    body: AbstractBody,
    bounds: _Bounds,
    resolution: _Resolution,
    t: float = 0.0,
) -> _Array:
    """Sample the signed distance of *body* at time *t* on a cell-centred grid.

    Returns an array of shape ``resolution[::-1]``.
    """
    p = cell_centres(bounds, resolution)
    phi = np.empty(p.shape[:-1])
    for idx in np.ndindex(*phi.shape):
        phi[idx] = body.sdf(p[idx], t)
    return phi


def sample_measure(
    body: AbstractBody,
    bounds: _Bounds,
    resolution: _Resolution,
    t: float = 0.0,
    diff: Optional[Differentiator] = None,
) -> Tuple[_Array, _Array, _Array]:
    """Measure *body* at every cell centre.

    Returns
    -------
    tuple
        ``(d, normal, velocity)`` with shapes ``grid``, ``grid + (ndim,)``
        and ``grid + (ndim,)``, where ``grid = resolution[::-1]``.
    """
    diff = FiniteDifference() if diff is None else diff
    p = cell_centres(bounds, resolution)
    d = np.empty(p.shape[:-1])
    normal = np.empty(p.shape)
    velocity = np.empty(p.shape)
    for idx in np.ndindex(*d.shape):
        d[idx], normal[idx], velocity[idx] = body.measure(p[idx], t, diff=diff)
    return d, normal, velocity
