# MIT License (see LICENSE)
"""
Convex polygon intersection using Sutherland-Hodgman clipping.

The subject polygon is clipped in turn against the half-plane to the left of
every edge of the clip polygon. This is exact for a convex clip polygon,
which every fixture shape here is (circles are sampled into regular
polygons first).

Key concepts:
- A point p is inside edge (cp1, cp2) when it lies strictly to its left,
  i.e. (cp2 - cp1) × (p - cp1) > 0. Clip polygons must therefore be CCW,
  which every fixture shape is (ConvexPolygon normalizes its winding).
- The result keeps the winding of the subject polygon.
- An empty result means "no overlap", not an error.

Reference:
    https://en.wikipedia.org/wiki/Sutherland%E2%80%93Hodgman_algorithm
"""
from __future__ import annotations
import logging
import math

import numpy as np

from ..constants import DEFAULT_CIRCLE_RESOLUTION, PARALLEL_EPS
from ..types import Fixture, Circle, Box, ConvexPolygon
from ..util import f64
from .sampling import sample_circle

logger = logging.getLogger(__name__)


def _empty() -> np.ndarray:
    return np.empty((0, 2), dtype=np.float64)


def inside(cp1: np.ndarray, cp2: np.ndarray, p: np.ndarray) -> bool:
    """True if p lies strictly left of the directed line cp1 → cp2."""
    return (cp2[0] - cp1[0]) * (p[1] - cp1[1]) > (cp2[1] - cp1[1]) * (p[0] - cp1[0])


def line_intersection(
    cp1: np.ndarray,
    cp2: np.ndarray,
    s: np.ndarray,
    e: np.ndarray,
    eps: float = PARALLEL_EPS,
) -> np.ndarray | None:
    """
    Intersection of the infinite lines through (cp1, cp2) and (s, e).

    Uses the determinant form of the two-point line equations. The
    parallel test is relative to both edge lengths, so it behaves the same
    at any scale.

    Returns:
        The intersection point, or None when the lines are parallel
        (|denominator| <= eps * |cp2 - cp1| * |e - s|).
    """
    dcx, dcy = cp1[0] - cp2[0], cp1[1] - cp2[1]
    dpx, dpy = s[0] - e[0], s[1] - e[1]
    denom = dcx * dpy - dcy * dpx
    if abs(denom) <= eps * math.hypot(dcx, dcy) * math.hypot(dpx, dpy):
        return None
    n1 = cp1[0] * cp2[1] - cp1[1] * cp2[0]
    n2 = s[0] * e[1] - s[1] * e[0]
    n3 = 1.0 / denom
    return np.array([(n1 * dpx - n2 * dcx) * n3, (n1 * dpy - n2 * dcy) * n3], dtype=np.float64)


def world_polygon(fixture: Fixture, resolution: float = DEFAULT_CIRCLE_RESOLUTION) -> np.ndarray | None:
    """
    Resolve a fixture's shape to a world-space polygon.

    Polygons and boxes have their local vertices mapped through the body
    transform; circles are sampled around their world-space center.

    Returns:
        Array [N, 2] of world points, or None for shape kinds that cannot
        displace fluid (e.g. Segment).
    """
    body = fixture.body
    shape = fixture.shape
    if isinstance(shape, ConvexPolygon):
        return body.local_to_world_many(shape.vertices)
    if isinstance(shape, Box):
        return body.local_to_world_many(shape.vertices())
    if isinstance(shape, Circle):
        return sample_circle(body.local_to_world(shape.center), shape.radius, resolution)
    return None


class PolygonClipper:
    """
    Sutherland-Hodgman clipper with reusable scratch storage.

    Two [capacity, 2] buffers are ping-ponged between clip edges: each pass
    reads the current polygon from the front buffer and writes the clipped
    polygon into the back buffer, then the two swap. Buffers only grow, and
    only when a pass could overflow them, so a long-lived clipper allocates
    nothing per call apart from the returned copy.

    A clipper holds no state between calls other than its buffers, so
    clipping the same inputs twice yields identical results. Instances are
    not thread-safe; use one per thread.

    Example:
        clipper = PolygonClipper()
        overlap = clipper.clip(subject, clip_polygon)
        if len(overlap) >= 3:
            ...
    """

    def __init__(self, capacity: int = 64) -> None:
        capacity = max(4, int(capacity))
        self._front = np.empty((capacity, 2), dtype=np.float64)
        self._back = np.empty((capacity, 2), dtype=np.float64)

    @property
    def capacity(self) -> int:
        return len(self._front)

    def _reserve(self, size: int, live: int) -> None:
        """Grow both buffers to hold size points, keeping the first live points of the front one."""
        if size <= len(self._front):
            return
        cap = max(size, 2 * len(self._front))
        front = np.empty((cap, 2), dtype=np.float64)
        front[:live] = self._front[:live]
        self._front = front
        self._back = np.empty((cap, 2), dtype=np.float64)

    def clip(self, subject: np.ndarray, clip_polygon: np.ndarray) -> np.ndarray:
        """
        Clip subject against a convex CCW clip polygon.

        Args:
            subject: Array [N, 2] of subject vertices (open, wraps to index 0).
            clip_polygon: Array [M, 2] of clip vertices, convex and CCW.

        Returns:
            Array [K, 2] of the intersection polygon in the subject's winding.
            K is 0 when the polygons do not overlap.
        """
        subject = f64(subject).reshape(-1, 2)
        clip_polygon = f64(clip_polygon).reshape(-1, 2)
        count = len(subject)
        if count == 0 or len(clip_polygon) == 0:
            return _empty()

        self._reserve(2 * count, 0)
        self._front[:count] = subject

        cp1 = clip_polygon[-1]
        for cp2 in clip_polygon:
            # Each subject vertex emits at most two points
            self._reserve(2 * count, count)
            src, dst = self._front, self._back
            k = 0
            s = src[count - 1]
            s_in = inside(cp1, cp2, s)
            for i in range(count):
                e = src[i]
                e_in = inside(cp1, cp2, e)
                if e_in:
                    if not s_in:
                        p = line_intersection(cp1, cp2, s, e)
                        if p is not None:
                            dst[k] = p
                            k += 1
                    dst[k] = e
                    k += 1
                elif s_in:
                    p = line_intersection(cp1, cp2, s, e)
                    if p is not None:
                        dst[k] = p
                        k += 1
                s, s_in = e, e_in

            self._front, self._back = dst, src
            count = k
            if count == 0:
                return _empty()
            cp1 = cp2

        return self._front[:count].copy()


def intersect_fixtures(
    fixture_a: Fixture,
    fixture_b: Fixture,
    resolution: float = DEFAULT_CIRCLE_RESOLUTION,
    clipper: PolygonClipper | None = None,
) -> np.ndarray:
    """
    World-space intersection polygon of two fixtures.

    fixture_a provides the subject polygon and fixture_b the clip polygon.

    Args:
        fixture_a: Subject fixture (the fluid volume in buoyancy queries).
        fixture_b: Clip fixture.
        resolution: Circle samples per unit radius.
        clipper: Optional clipper whose scratch buffers are reused.

    Returns:
        Array [K, 2]; empty when the shapes do not overlap or either
        shape kind cannot be resolved to a polygon.
    """
    subject = world_polygon(fixture_a, resolution)
    if subject is None:
        logger.debug("No polygon for shape %s; skipping", type(fixture_a.shape).__name__)
        return _empty()
    clip_polygon = world_polygon(fixture_b, resolution)
    if clip_polygon is None:
        logger.debug("No polygon for shape %s; skipping", type(fixture_b.shape).__name__)
        return _empty()
    if clipper is None:
        clipper = PolygonClipper(capacity=2 * (len(subject) + len(clip_polygon)))
    return clipper.clip(subject, clip_polygon)
