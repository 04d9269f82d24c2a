# MIT License (see LICENSE)
"""
Buoyancy, current, drag and lift forces from a fluid overlap.

Given a fluid fixture and a body fixture, the overlap polygon is found by
convex clipping and every force is derived from it:

- Buoyancy:  F = ρ · A · (-g), applied at the overlap centroid.
- Current:   F = flow · (cos φ, sin φ), applied at the center of mass.
- Drag:      per leading edge of the overlap, opposing the relative velocity,
             |F| = ρ · (n · v) · L · |v|², applied at the edge midpoint.
- Lift:      per leading edge, perpendicular to the relative velocity,
             |F| = (ê · v̂) · |drag|, applied at the edge midpoint.

Only leading edges (those facing into the relative flow) produce drag and
lift; the cutoff is hard, without blending at grazing angles.

All forces go through the body's apply_force sink and accumulate
additively, so edge order only affects floating-point summation order.
"""
from __future__ import annotations
import logging

import numpy as np

from ..constants import DEFAULT_CIRCLE_RESOLUTION
from ..geometry.centroid import compute_centroid_and_area
from ..geometry.clipping import PolygonClipper, intersect_fixtures
from ..types import Fixture
from ..util import f64, normalize, cross_z_scalar_vec

logger = logging.getLogger(__name__)


def apply_buoyancy(
    fluid: Fixture,
    fixture: Fixture,
    gravity: np.ndarray | tuple[float, float],
    flip_gravity: bool = False,
    density: float = 1.0,
    drag_multiplier: float = 1.0,
    flow_magnitude: float = 0.0,
    flow_angle: float = 0.0,
    *,
    resolution: float = DEFAULT_CIRCLE_RESOLUTION,
    clipper: PolygonClipper | None = None,
) -> bool:
    """
    Apply fluid forces to the body of a fixture overlapping a fluid volume.
    
    Args:
        fluid: The fluid volume fixture (clipping subject).
        fixture: The submerged fixture; forces go to its body.
        gravity: World gravity vector.
        flip_gravity: Reverse buoyancy and the edge-normal convention.
        density: Fluid density.
        drag_multiplier: Scale applied to drag only.
        flow_magnitude: Current strength.
        flow_angle: Current direction in radians.
        resolution: Circle samples per unit radius.
        clipper: Optional clipper whose scratch buffers are reused.
        
    Returns:
        True if the fixtures overlap and forces were applied. False when
        they do not overlap, a shape cannot displace fluid, or the overlap
        degenerates to fewer than 3 points.
    """
    polygon = intersect_fixtures(fluid, fixture, resolution, clipper)
    if len(polygon) < 3:
        if len(polygon):
            logger.debug("Degenerate fluid overlap with %d points; skipping", len(polygon))
        return False

    body = fixture.body
    fluid_body = fluid.body
    result = compute_centroid_and_area(polygon)
    gravity_multiplier = -1.0 if flip_gravity else 1.0

    if result.area > 0.0:
        displaced_mass = density * result.area
        buoyancy_force = displaced_mass * gravity_multiplier * -f64(gravity)
        body.apply_force(buoyancy_force, result.centroid, wake=True)
    else:
        logger.debug("Zero-area fluid overlap; buoyancy skipped")

    if flow_magnitude != 0.0:
        flow_force = flow_magnitude * np.array([np.cos(flow_angle), np.sin(flow_angle)], dtype=np.float64)
        body.apply_force_to_center(flow_force, wake=True)

    # Drag and lift, separately for each edge of the overlap
    n = len(polygon)
    for i in range(n):
        v0 = polygon[i]
        v1 = polygon[(i + 1) % n]
        mid_point = 0.5 * (v0 + v1)

        # Relative velocity between object and fluid at the edge midpoint
        vel = body.velocity_at(mid_point) - fluid_body.velocity_at(mid_point)

        edge = v1 - v0
        normal = cross_z_scalar_vec(gravity_multiplier, edge)
        facing = float(np.dot(normal, vel))
        if facing >= 0.0:
            continue  # trailing edge

        drag_dot = -facing
        vel_dir, speed = normalize(vel)
        edge_dir, edge_length = normalize(edge)

        drag_mag = drag_dot * edge_length * density * speed * speed
        drag_force = drag_mag * drag_multiplier * -vel_dir
        body.apply_force(drag_force, mid_point, wake=True)

        lift_mag = float(np.dot(edge_dir, vel_dir)) * drag_mag
        lift_dir = cross_z_scalar_vec(gravity_multiplier, vel_dir)
        body.apply_force(lift_mag * lift_dir, mid_point, wake=True)

    return True
