"""Tests for the warning handling in scripts/gallery_2d.py."""

import importlib.util
import os

import numpy as np
import pytest

from autobody import AutoBody, AutoBodies, BoundaryVelocityWarning

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

_SCRIPT = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "gallery_2d.py"
)


def _load_gallery():
    spec = importlib.util.spec_from_file_location("gallery_2d", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


gallery = _load_gallery()

_BOUNDS = ((-1.0, 1.0), (-1.0, 1.0))
_RES = (2, 2)


class TestSampleFrame:
    @pytest.mark.filterwarnings("error")
    def test_numpy_float_warnings_are_silenced(self):
        # constant field: zero gradient, so the normalisation divides by zero
        body = AutoBodies([AutoBody(lambda x, t: 0.5)])
        d, V = gallery._sample_frame(body, 0.0, _BOUNDS, _RES)
        assert d.shape == (2, 2)
        assert np.isinf(d).all()
        assert np.all(V == 0.0)

    def test_boundary_velocity_warning_is_visible(self):
        def _map(x, s):
            return x if s == 1.0 else np.full(2, np.nan)

        body = AutoBodies([AutoBody(lambda x, t: np.linalg.norm(x) - 0.3, _map, compose=False)])
        with pytest.warns(BoundaryVelocityWarning):
            _, V = gallery._sample_frame(body, 1.0, _BOUNDS, _RES)
        assert np.isnan(V).all()

    def test_default_body_renders(self, tmp_path):
        out = tmp_path / "gallery.png"
        gallery.render_gallery(gallery._make_body(), str(out))
        assert out.is_file()
