import numpy as np
import pytest
from buoyancy_sim.types import RigidBody2D, Fixture, Box, Circle, ConvexPolygon, Segment
from buoyancy_sim.geometry.clipping import (
    PolygonClipper, intersect_fixtures, inside, line_intersection, world_polygon,
)
from buoyancy_sim.geometry.centroid import compute_centroid_and_area


def square(x0, y0, size=1.0):
    """CCW axis-aligned square with lower-left corner (x0, y0)."""
    return np.array([
        [x0, y0],
        [x0 + size, y0],
        [x0 + size, y0 + size],
        [x0, y0 + size],
    ], dtype=np.float64)


def test_inside_is_left_of_edge():
    cp1, cp2 = np.array([0.0, 0.0]), np.array([1.0, 0.0])
    assert inside(cp1, cp2, np.array([0.5, 1.0]))
    assert not inside(cp1, cp2, np.array([0.5, -1.0]))
    # Points on the line are outside
    assert not inside(cp1, cp2, np.array([0.5, 0.0]))


def test_line_intersection():
    p = line_intersection(
        np.array([0.0, 0.0]), np.array([2.0, 0.0]),
        np.array([1.0, -1.0]), np.array([1.0, 3.0]),
    )
    assert p == pytest.approx([1.0, 0.0])


def test_line_intersection_parallel_returns_none():
    p = line_intersection(
        np.array([0.0, 0.0]), np.array([1.0, 0.0]),
        np.array([0.0, 1.0]), np.array([1.0, 1.0]),
    )
    assert p is None


def test_disjoint_squares():
    clipper = PolygonClipper()
    out = clipper.clip(square(0, 0), square(5, 5))
    assert out.shape == (0, 2)


def test_quarter_overlap():
    """Unit squares offset by (0.5, 0.5) overlap in a 0.5 x 0.5 square."""
    out = PolygonClipper().clip(square(0, 0), square(0.5, 0.5))
    assert len(out) == 4

    res = compute_centroid_and_area(out)
    assert res.area == pytest.approx(0.25)
    assert res.centroid == pytest.approx([0.75, 0.75])


def test_contained_polygon_is_returned_whole():
    """A subject fully inside the clip polygon passes through unchanged."""
    small = square(0.25, 0.25, 0.5)
    out = PolygonClipper().clip(small, square(0, 0, 2.0))
    assert np.allclose(out, small)


def test_clip_is_repeatable():
    """Same inputs give bit-identical output, also when the clipper is reused."""
    clipper = PolygonClipper(capacity=4)
    a, b = square(0, 0), square(0.3, 0.6)
    first = clipper.clip(a, b)
    clipper.clip(square(0, 0, 3.0), square(1, 1))
    second = clipper.clip(a, b)
    assert np.array_equal(first, second)
    assert np.array_equal(first, PolygonClipper().clip(a, b))


def test_buffers_grow_for_large_inputs():
    """Polygons larger than the initial capacity are clipped correctly."""
    theta = np.linspace(0.0, 2 * np.pi, 200, endpoint=False)
    disc = np.column_stack((np.cos(theta), np.sin(theta)))
    clipper = PolygonClipper(capacity=4)

    out = clipper.clip(disc, square(0, -1, 2.0))
    assert clipper.capacity >= 200
    # Right half of the unit disc
    res = compute_centroid_and_area(out)
    assert res.area == pytest.approx(0.5 * 0.5 * 200 * np.sin(2 * np.pi / 200), rel=1e-6)
    assert np.all(out[:, 0] >= -1e-12)


def test_empty_inputs():
    clipper = PolygonClipper()
    assert clipper.clip(np.empty((0, 2)), square(0, 0)).shape == (0, 2)
    assert clipper.clip(square(0, 0), np.empty((0, 2))).shape == (0, 2)


def test_world_polygon_transforms_vertices():
    """Box corners are rotated and translated into world space."""
    body = RigidBody2D(Box((1.0, 0.5)), mass=1.0, position=(2.0, 3.0), angle=np.pi / 2)
    pts = world_polygon(Fixture(body))
    expected = np.array([[2.5, 2.0], [2.5, 4.0], [1.5, 4.0], [1.5, 2.0]])
    assert np.allclose(pts, expected)


def test_world_polygon_circle_uses_world_center():
    body = RigidBody2D(Circle(1.0, center=(1.0, 0.0)), mass=1.0, position=(0.0, 5.0), angle=np.pi / 2)
    pts = world_polygon(Fixture(body), resolution=8.0)
    assert len(pts) == 8
    assert np.allclose(pts.mean(axis=0), [0.0, 6.0])


def test_world_polygon_unsupported_shape():
    body = RigidBody2D(Segment((0.0, 0.0), (1.0, 0.0)), mass=1.0)
    assert world_polygon(Fixture(body)) is None


def test_intersect_fixtures_box_and_polygon():
    fluid = RigidBody2D(Box((5.0, 5.0)), mass=0.0, position=(0.0, -5.0))
    verts = np.array([[-1.0, -1.0], [1.0, -1.0], [1.0, 1.0], [-1.0, 1.0]])
    body = RigidBody2D(ConvexPolygon(verts), mass=1.0, position=(0.0, 0.0))

    out = intersect_fixtures(Fixture(fluid), Fixture(body))
    res = compute_centroid_and_area(out)
    # Lower half of the 2x2 body is below the surface at y=0
    assert res.area == pytest.approx(2.0)
    assert res.centroid == pytest.approx([0.0, -0.5])


def test_intersect_fixtures_circle_fully_submerged():
    fluid = RigidBody2D(Box((10.0, 10.0)), mass=0.0, position=(0.0, 0.0))
    ball = RigidBody2D(Circle(2.0), mass=1.0, position=(1.0, 1.0))

    out = intersect_fixtures(Fixture(fluid), Fixture(ball), resolution=16.0)
    res = compute_centroid_and_area(out)
    n = 32
    assert res.area == pytest.approx(0.5 * n * 4.0 * np.sin(2 * np.pi / n))
    assert res.centroid == pytest.approx([1.0, 1.0])


def test_intersect_fixtures_unsupported_shape_is_empty():
    fluid = RigidBody2D(Box((10.0, 10.0)), mass=0.0)
    stick = RigidBody2D(Segment((-1.0, 0.0), (1.0, 0.0)), mass=1.0)
    assert intersect_fixtures(Fixture(fluid), Fixture(stick)).shape == (0, 2)
    assert intersect_fixtures(Fixture(stick), Fixture(fluid)).shape == (0, 2)


def test_polygon_winding_is_normalized_to_ccw():
    cw = ConvexPolygon([[0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [1.0, 0.0]])
    ccw = ConvexPolygon([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])

    assert compute_centroid_and_area(cw.vertices).area == pytest.approx(1.0)
    assert np.array_equal(ccw.vertices, [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


def test_clockwise_polygon_clips_like_ccw():
    water = RigidBody2D(Box((5.0, 5.0)), mass=0.0)
    cw = ConvexPolygon([[-1.0, -1.0], [-1.0, 1.0], [1.0, 1.0], [1.0, -1.0]])
    body = RigidBody2D(cw, mass=1.0, position=(0.0, 5.0))

    out = intersect_fixtures(Fixture(water), Fixture(body))
    res = compute_centroid_and_area(out)
    assert res.area == pytest.approx(2.0)
    assert res.centroid == pytest.approx([0.0, 4.5])


def test_line_intersection_at_small_scale():
    """The parallel test is relative, so short edges still intersect."""
    p = line_intersection(
        np.array([0.0, 0.0]), np.array([1e-7, 0.0]),
        np.array([5e-8, -5e-8]), np.array([5e-8, 5e-8]),
    )
    assert p is not None
    assert p == pytest.approx([5e-8, 0.0], abs=1e-20)


def test_small_squares_overlap():
    size = 1e-6
    out = PolygonClipper().clip(square(0, 0, size), square(0.5 * size, 0.5 * size, size))

    assert len(out) == 4
    assert out.min(axis=0) == pytest.approx([0.5 * size, 0.5 * size], abs=1e-18)
    assert out.max(axis=0) == pytest.approx([size, size], abs=1e-18)
