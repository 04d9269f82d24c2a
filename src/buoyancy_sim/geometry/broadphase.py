# MIT License (see LICENSE)
"""
Broadphase pairing of fluid volumes with bodies using spatial hashing.

Space is partitioned into a uniform grid. Fluid fixtures and body fixtures
are hashed into grid cells based on their axis-aligned bounding boxes
(AABBs), and only a fluid and a body sharing a cell are passed on to the
exact polygon clip.

Key concepts:
- AABB (Axis-Aligned Bounding Box): Conservative bounding region for a shape.
- Spatial hashing: O(1) expected cell lookup for broad phase culling.
- The output is a list of (fluid, body) pairs that may be overlapping.
"""
from __future__ import annotations
from collections import defaultdict
from typing import TYPE_CHECKING, Iterator

import numpy as np

from ..types import Fixture, RigidBody2D, Circle, Box, ConvexPolygon, Segment
from ..util import f64

if TYPE_CHECKING:
    from ..scene import FluidVolume

AABB = tuple[float, float, float, float]


def _points_aabb(points: np.ndarray) -> AABB:
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    return (float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def aabb_for_fixture(fixture: Fixture) -> AABB:
    """
    Calculate the world-space AABB (min_x, min_y, max_x, max_y) of a fixture.
    """
    body = fixture.body
    shape = fixture.shape

    if isinstance(shape, Circle):
        r = shape.radius
        p = body.local_to_world(shape.center)
        return (p[0] - r, p[1] - r, p[0] + r, p[1] + r)

    if isinstance(shape, Box):
        # Standard OBB extents:
        # ex = |c*hx| + |s*hy|
        # ey = |s*hx| + |c*hy|
        hx, hy = shape.half_extents
        c = float(np.cos(body.angle))
        s = float(np.sin(body.angle))
        ex = abs(c * hx) + abs(s * hy)
        ey = abs(s * hx) + abs(c * hy)
        p = body.position
        return (p[0] - ex, p[1] - ey, p[0] + ex, p[1] + ey)

    if isinstance(shape, ConvexPolygon):
        return _points_aabb(body.local_to_world_many(shape.vertices))

    if isinstance(shape, Segment):
        return _points_aabb(body.local_to_world_many(f64([shape.a, shape.b])))

    raise TypeError(f"Unknown shape type: {type(shape)}")


def aabb_for_body(body: RigidBody2D) -> AABB:
    """AABB of a body's primary shape."""
    return aabb_for_fixture(Fixture(body))


class SpatialHashBroadphase:
    """
    Spatial hash grid for fluid/body broadphase.

    Partitions 2D space into cells of uniform size. Fluid volumes are
    inserted into all cells their AABB overlaps; each body then looks up
    the cells it touches and is paired with the fluids found there.

    Attributes:
        cell: The size of each grid cell in world units.

    Example:
        broadphase = SpatialHashBroadphase(cell_size=2.0)
        for fluid, body in broadphase.fluid_pairs(scene.fluids, scene.bodies):
            apply_buoyancy(fluid.fixture, Fixture(body), ...)
    """

    def __init__(self, cell_size: float = 1.0) -> None:
        """
        Initialize the spatial hash grid.

        Args:
            cell_size: Size of each grid cell in world units. Larger cells
                       reduce insertion cost but increase false positives.
        """
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell = float(cell_size)
        # Fluid grid from the last call, keyed by the fluid AABBs it was built from
        self._grid: dict[tuple[int, int], list[int]] = {}
        self._grid_key: tuple[AABB, ...] | None = None

    def _cells_for_aabb(self, aabb: AABB) -> Iterator[tuple[int, int]]:
        """
        Yield all grid cell coordinates that overlap with an AABB.

        Args:
            aabb: Bounding box as (x_min, y_min, x_max, y_max).

        Yields:
            (ix, iy) integer cell coordinates.
        """
        x0, y0, x1, y1 = aabb
        cs = self.cell
        ix0, iy0 = int(np.floor(x0 / cs)), int(np.floor(y0 / cs))
        ix1, iy1 = int(np.floor(x1 / cs)), int(np.floor(y1 / cs))
        for ix in range(ix0, ix1 + 1):
            for iy in range(iy0, iy1 + 1):
                yield (ix, iy)

    def _fluid_grid(self, fluids: list["FluidVolume"]) -> dict[tuple[int, int], list[int]]:
        """
        Map of grid cell -> indices of the fluids whose AABB covers it.

        Fluid volumes are usually large and static, so the grid is only
        rebuilt when some fluid AABB (or the fluid list) has changed since
        the previous call.
        """
        key = tuple(aabb_for_fixture(f.fixture) for f in fluids)
        if key != self._grid_key:
            grid: dict[tuple[int, int], list[int]] = defaultdict(list)
            for idx, aabb in enumerate(key):
                for c in self._cells_for_aabb(aabb):
                    grid[c].append(idx)
            self._grid = dict(grid)
            self._grid_key = key
        return self._grid

    def fluid_pairs(
        self,
        fluids: list["FluidVolume"],
        bodies: list[RigidBody2D],
    ) -> list[tuple["FluidVolume", RigidBody2D]]:
        """
        Find all potentially overlapping (fluid, body) pairs.

        Static bodies are never paired, nor is a body with a fluid volume
        attached to itself. Duplicate pairs are eliminated using a seen set.

        Args:
            fluids: Fluid volumes in registration order.
            bodies: Candidate bodies.

        Returns:
            List of (fluid, body) tuples, ordered by fluid registration
            index and then body id for deterministic force accumulation.
        """
        grid = self._fluid_grid(fluids)

        seen: set[tuple[int, int]] = set()
        keyed: list[tuple[int, int, RigidBody2D]] = []
        for b in bodies:
            if b.mass <= 0:
                continue
            for c in self._cells_for_aabb(aabb_for_body(b)):
                for idx in grid.get(c, ()):
                    if fluids[idx].fixture.body is b:
                        continue
                    key = (idx, id(b))
                    if key in seen:
                        continue
                    seen.add(key)
                    keyed.append((idx, b.id, b))

        keyed.sort(key=lambda t: (t[0], t[1]))
        return [(fluids[idx], b) for idx, _, b in keyed]
