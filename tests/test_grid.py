"""Tests for autobody grid utilities."""

import numpy as np
import numpy.testing as npt
import pytest

from autobody import (
    AutoBody,
    AutoBodies,
    DimensionError,
    cell_centres,
    sample_levelset,
    sample_measure,
)


def _circle(radius=0.3):
    return AutoBody(lambda x, t: np.linalg.norm(x) - radius)


class TestCellCentres:
    def test_shape_and_order(self):
        p = cell_centres(((0, 1), (0, 2)), (4, 2))
        assert p.shape == (2, 4, 2)
        npt.assert_allclose(p[0, 0], [0.125, 0.5])
        npt.assert_allclose(p[1, 3], [0.875, 1.5])

    def test_3d(self):
        p = cell_centres(((-1, 1), (-1, 1), (-1, 1)), (8, 4, 2))
        assert p.shape == (2, 4, 8, 3)

    def test_mismatch(self):
        with pytest.raises(DimensionError):
            cell_centres(((0, 1), (0, 1)), (4, 4, 4))


class TestSampleLevelset:
    def test_output_shape(self):
        phi = sample_levelset(_circle(), ((-1, 1), (-1, 1)), (16, 8))
        assert phi.shape == (8, 16)

    def test_inside_negative_outside_positive(self):
        phi = sample_levelset(_circle(), ((-1, 1), (-1, 1)), (16, 16))
        assert (phi < 0).any()
        assert (phi > 0).any()

    def test_cell_centred_near_minus_r(self):
        phi = sample_levelset(_circle(), ((-1, 1), (-1, 1)), (65, 65))
        npt.assert_allclose(phi[32, 32], -0.3, atol=1e-12)

    def test_time_moves_body(self):
        moving = AutoBody(
            lambda x, t: np.linalg.norm(x) - 0.3, lambda x, t: x - np.array([t, 0.0])
        )
        bounds, res = ((-1, 1), (-1, 1)), (65, 65)
        phi0 = sample_levelset(moving, bounds, res, t=0.0)
        phi1 = sample_levelset(moving, bounds, res, t=0.5)
        assert np.argmin(phi1[32]) > np.argmin(phi0[32])

    def test_superposition(self):
        ab = AutoBodies([_circle(0.3), _circle(0.1)], "difference")
        phi = sample_levelset(ab, ((-1, 1), (-1, 1)), (65, 65))
        assert phi[32, 32] > 0                 # centre is cut out
        assert phi[32, 32 + 6] < 0             # x ≈ 0.19 is inside the ring


class TestSampleMeasure:
    def test_shapes(self):
        d, n, V = sample_measure(_circle(), ((-1, 1), (-1, 1)), (6, 4), t=1.0)
        assert d.shape == (4, 6)
        assert n.shape == (4, 6, 2)
        assert V.shape == (4, 6, 2)

    def test_normals_point_outward(self):
        bounds, res = ((-1, 1), (-1, 1)), (6, 6)
        d, n, V = sample_measure(_circle(), bounds, res)
        p = cell_centres(bounds, res)
        expected = p / np.linalg.norm(p, axis=-1, keepdims=True)
        npt.assert_allclose(n, expected, atol=1e-7)
        npt.assert_allclose(d, np.linalg.norm(p, axis=-1) - 0.3, atol=1e-8)
        npt.assert_allclose(V, 0.0, atol=1e-12)
