# MIT License (see LICENSE)
"""
Geometry subsystem for fluid overlap queries.

This subpackage provides:
    - Sampling: Circle discretization into regular polygons.
    - Clipping: Sutherland-Hodgman intersection of convex fixtures.
    - Centroid: Signed area and centroid of the clipped region.
    - Broadphase: Spatial hashing of fluid volumes against bodies.

Typical usage:
    from buoyancy_sim.geometry import intersect_fixtures, compute_centroid_and_area
    
    overlap = intersect_fixtures(fluid_fixture, body_fixture)
    if len(overlap) >= 3:
        result = compute_centroid_and_area(overlap)
"""
from .sampling import sample_circle, circle_sample_count
from .clipping import (
    inside,
    line_intersection,
    world_polygon,
    PolygonClipper,
    intersect_fixtures,
)
from .centroid import CentroidResult, compute_centroid_and_area
from .broadphase import SpatialHashBroadphase, aabb_for_fixture, aabb_for_body

__all__ = [
    # Sampling
    "sample_circle",
    "circle_sample_count",
    # Clipping
    "inside",
    "line_intersection",
    "world_polygon",
    "PolygonClipper",
    "intersect_fixtures",
    # Centroid
    "CentroidResult",
    "compute_centroid_and_area",
    # Broadphase
    "SpatialHashBroadphase",
    "aabb_for_fixture",
    "aabb_for_body",
]
