"""Render a moving 2-D superposition at several times, with boundary velocities.

Each panel shows the signed distance as a heatmap, the zero level set in
black, and the boundary velocity from :func:`autobody.measure` as arrows on
cells next to the surface.

Usage::

    python scripts/gallery_2d.py                   # saves gallery_2d.png
    python scripts/gallery_2d.py --out my_file.png # custom output path

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import os
import sys
import warnings

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from autobody import AutoBodies, AutoBody, Op, cell_centres, sample_measure

_BOUNDS = ((-1.0, 1.0), (-1.0, 1.0))
_RES    = (96, 96)
_EXTENT = [-1, 1, -1, 1]
_TIMES  = (0.0, 0.5, 1.0, 1.5)
# messages numpy emits for float divide-by-zero, 0/0 and overflow
_NUMPY_FP_WARNING = r"(divide by zero|invalid value|overflow) encountered"


def _circle(radius: float):
    return lambda x, t: np.linalg.norm(x) - radius


def _make_body() -> AutoBodies:
    """A disc orbiting the origin, a static ellipse with a hole, a sliding bar."""
    omega = 2.0

    def orbit(x, t):
        c = 0.55 * np.array([np.cos(omega * t), np.sin(omega * t)])
        return x - c

    def slide(x, t):
        return x - np.array([0.0, -0.7 + 0.1 * np.sin(3.0 * t)])

    disc = AutoBody(_circle(0.18), orbit)
    # pseudo-SDF: measure() normalises it by |∇f|
    ellipse = AutoBody(lambda x, t: (x[0] / 0.35) ** 2 + (x[1] / 0.2) ** 2 - 1.0)
    hole = AutoBody(_circle(0.08))
    bar = AutoBody(lambda x, t: max(abs(x[0]) - 0.6, abs(x[1]) - 0.05), slide)
    return AutoBodies([ellipse, hole, disc, bar], [Op.DIFFERENCE, Op.UNION, Op.UNION])


def _sample_frame(body: AutoBodies, t: float, bounds=_BOUNDS, res=_RES):
    """Distance and velocity on the grid at time *t*.

    Only numpy's floating-point RuntimeWarnings are silenced, so a
    BoundaryVelocityWarning still reaches the user.
    """
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=_NUMPY_FP_WARNING, category=RuntimeWarning)
        d, _, V = sample_measure(body, bounds, res, t=t)
    return d, V


def render_gallery(body: AutoBodies, out_path: str) -> None:
    p = cell_centres(_BOUNDS, _RES)
    fig, axes = plt.subplots(1, len(_TIMES), figsize=(len(_TIMES) * 3.2, 3.4))
    fig.patch.set_facecolor("#111")

    for ax, t in zip(axes, _TIMES):
        d, V = _sample_frame(body, t)

        vmax = np.abs(d).max()
        ax.imshow(d, extent=_EXTENT, origin="lower", cmap="RdBu", vmin=-vmax, vmax=vmax)
        ax.contour(p[..., 0], p[..., 1], d, levels=[0.0], colors="k", linewidths=1.0)

        near = np.abs(d) < 2.0 * (_BOUNDS[0][1] - _BOUNDS[0][0]) / _RES[0]
        near[::2, :] = False
        near[:, ::2] = False
        ax.quiver(
            p[..., 0][near], p[..., 1][near], V[..., 0][near], V[..., 1][near],
            color="#ffcc33", scale=20.0, width=0.006,
        )
        ax.set_title(f"t = {t:.2f}", color="white", fontsize=9)
        ax.set_xticks([])
        ax.set_yticks([])

    plt.tight_layout()
    plt.savefig(out_path, dpi=130, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--out", default="gallery_2d.png", help="output PNG path")
    args = parser.parse_args()
    render_gallery(_make_body(), args.out)


if __name__ == "__main__":
    main()
