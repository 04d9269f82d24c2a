# MIT License (see LICENSE)
"""
Circle discretization.

Circles take part in polygon clipping as regular polygons sampled on their
boundary. The number of samples grows with the radius so that the
approximation error stays roughly constant in world units.
"""
from __future__ import annotations
import math

import numpy as np

from ..constants import DEFAULT_CIRCLE_RESOLUTION
from ..util import f64


def circle_sample_count(radius: float, resolution: float = DEFAULT_CIRCLE_RESOLUTION) -> int:
    """Number of boundary samples for a circle: ceil(resolution * radius), at least 1."""
    return max(1, int(math.ceil(resolution * radius)))


def sample_circle(
    center: np.ndarray | tuple[float, float],
    radius: float,
    resolution: float = DEFAULT_CIRCLE_RESOLUTION,
) -> np.ndarray:
    """
    Approximate a circle by points evenly spaced on its boundary.
    
    Points start at angle 0 and advance counterclockwise by 2π / count, so
    the result is a CCW regular polygon.
    
    Args:
        center: World-space circle center.
        radius: Circle radius.
        resolution: Samples per unit of radius.
        
    Returns:
        Array [count, 2] of world-space points. Radii near zero give a
        single point; callers must not treat fewer than 3 points as a polygon.
    """
    count = circle_sample_count(radius, resolution)
    theta = (2.0 * np.pi / count) * np.arange(count, dtype=np.float64)
    offsets = np.column_stack((np.cos(theta), np.sin(theta)))
    return f64(center) + radius * offsets
