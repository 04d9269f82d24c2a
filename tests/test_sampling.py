import numpy as np
import pytest
from buoyancy_sim.geometry.sampling import sample_circle, circle_sample_count


def test_sample_count_and_radius():
    """Radius 2 at 16 samples per unit radius gives a regular 32-gon."""
    pts = sample_circle((0.0, 0.0), 2.0, 16.0)
    assert pts.shape == (32, 2)

    dist = np.linalg.norm(pts, axis=1)
    assert np.allclose(dist, 2.0)

    angles = np.unwrap(np.arctan2(pts[:, 1], pts[:, 0]))
    assert angles[0] == pytest.approx(0.0)
    assert np.allclose(np.diff(angles), 2 * np.pi / 32)


def test_sample_offset_center():
    """Samples are placed around the given center, starting at angle 0."""
    pts = sample_circle((3.0, -1.0), 0.5, 16.0)
    assert len(pts) == 8
    assert pts[0] == pytest.approx([3.5, -1.0])
    assert np.allclose(np.linalg.norm(pts - [3.0, -1.0], axis=1), 0.5)


def test_sample_count_rounds_up():
    assert circle_sample_count(1.01, 16.0) == 17
    assert circle_sample_count(0.1, 16.0) == 2


def test_degenerate_radius_gives_single_point():
    """A zero radius still yields one point (at the center)."""
    pts = sample_circle((1.0, 2.0), 0.0)
    assert pts.shape == (1, 2)
    assert pts[0] == pytest.approx([1.0, 2.0])
