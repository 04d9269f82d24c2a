import numpy as np
import pytest
from buoyancy_sim.types import RigidBody2D, Fixture, Box, Circle, ConvexPolygon, Segment
from buoyancy_sim.geometry.broadphase import SpatialHashBroadphase, aabb_for_fixture, aabb_for_body
from buoyancy_sim.scene import FluidVolume


def test_circle_aabb_uses_world_center():
    body = RigidBody2D(Circle(0.5, center=(1.0, 0.0)), mass=1.0, position=(2.0, 2.0), angle=np.pi)
    assert aabb_for_body(body) == pytest.approx((0.5, 1.5, 1.5, 2.5))


def test_rotated_box_aabb():
    body = RigidBody2D(Box((2.0, 1.0)), mass=1.0, position=(0.0, 0.0), angle=np.pi / 2)
    assert aabb_for_body(body) == pytest.approx((-1.0, -2.0, 1.0, 2.0))


def test_polygon_and_segment_aabb():
    tri = RigidBody2D(ConvexPolygon([[0, 0], [2, 0], [0, 1]]), mass=1.0, position=(1.0, 1.0))
    assert aabb_for_body(tri) == pytest.approx((1.0, 1.0, 3.0, 2.0))

    seg = RigidBody2D(Segment((-1.0, 0.0), (1.0, 0.0)), mass=1.0, position=(0.0, 3.0), angle=np.pi / 2)
    assert aabb_for_fixture(Fixture(seg)) == pytest.approx((0.0, 2.0, 0.0, 4.0), abs=1e-12)


def test_fluid_pairs_filters_candidates():
    water = RigidBody2D(Box((5.0, 2.0)), mass=0.0, position=(0.0, -2.0), id=1)
    fluid = FluidVolume(Fixture(water))

    near = RigidBody2D(Circle(0.5), mass=1.0, position=(1.0, -1.0), id=2)
    far = RigidBody2D(Circle(0.5), mass=1.0, position=(30.0, 30.0), id=3)
    rock = RigidBody2D(Circle(0.5), mass=0.0, position=(0.0, -1.0), id=4)

    pairs = SpatialHashBroadphase(cell_size=1.0).fluid_pairs([fluid], [water, far, rock, near])
    assert pairs == [(fluid, near)]


def test_fluid_pairs_order_is_deterministic():
    water_a = RigidBody2D(Box((5.0, 5.0)), mass=0.0, id=1)
    water_b = RigidBody2D(Box((5.0, 5.0)), mass=0.0, id=2)
    fluids = [FluidVolume(Fixture(water_a)), FluidVolume(Fixture(water_b))]
    b3 = RigidBody2D(Box((2.0, 2.0)), mass=1.0, id=3)
    b4 = RigidBody2D(Box((2.0, 2.0)), mass=1.0, id=4)

    pairs = SpatialHashBroadphase(cell_size=0.5).fluid_pairs(fluids, [b4, b3])
    assert [(fluids.index(f), b.id) for f, b in pairs] == [(0, 3), (0, 4), (1, 3), (1, 4)]


def test_invalid_cell_size():
    with pytest.raises(ValueError):
        SpatialHashBroadphase(cell_size=0.0)


def test_fluid_grid_is_reused_until_a_fluid_moves():
    water = RigidBody2D(Box((50.0, 2.0)), mass=0.0, position=(0.0, -2.0), id=1)
    fluid = FluidVolume(Fixture(water))
    boat = RigidBody2D(Circle(0.5), mass=1.0, position=(40.0, -1.0), id=2)
    bp = SpatialHashBroadphase(cell_size=1.0)

    assert bp.fluid_pairs([fluid], [boat]) == [(fluid, boat)]
    grid = bp._grid
    assert bp.fluid_pairs([fluid], [boat]) == [(fluid, boat)]
    assert bp._grid is grid

    # Moving the fluid body rebuilds the grid
    water.position = np.array([200.0, -2.0])
    assert bp.fluid_pairs([fluid], [boat]) == []
    assert bp._grid is not grid

    # So does changing the fluid list
    assert bp.fluid_pairs([], [boat]) == []
