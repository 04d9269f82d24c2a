# MIT License (see LICENSE)
"""
Signed area and centroid of simple polygons.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..constants import AREA_EPS
from ..util import f64

INV3 = 1.0 / 3.0


@dataclass(frozen=True)
class CentroidResult:
    """
    Attributes:
        centroid: Area-weighted centroid [x, y]. Meaningless when area is 0.
        area: Signed area, reported as exactly 0 for degenerate polygons.
    """
    centroid: np.ndarray
    area: float


def compute_centroid_and_area(polygon: np.ndarray) -> CentroidResult:
    """
    Signed area and centroid by fan triangulation from the origin.
    
    Each edge (p2, p3) forms the triangle (origin, p2, p3) with signed area
    ½ (p2 × p3) and centroid (p2 + p3) / 3. The reference point does not
    change the result apart from rounding error.
    
    Totals not exceeding AREA_EPS (including clockwise polygons, whose
    area is negative) are reported as area 0, and the centroid is then
    left as the unnormalized accumulator. Check the area before using the
    centroid physically.
    
    Raises:
        ValueError: If the polygon has fewer than 3 points.
    """
    vs = f64(polygon).reshape(-1, 2)
    count = len(vs)
    if count < 3:
        raise ValueError(f"Polygon must have at least 3 vertices, got {count}")

    c = np.zeros(2, dtype=np.float64)
    area = 0.0
    for i in range(count):
        p2 = vs[i]
        p3 = vs[i + 1] if i + 1 < count else vs[0]

        triangle_area = 0.5 * float(p2[0] * p3[1] - p2[1] * p3[0])
        area += triangle_area

        # Area weighted centroid (the origin vertex contributes nothing)
        c += triangle_area * INV3 * (p2 + p3)

    if area > AREA_EPS:
        c *= 1.0 / area
    else:
        area = 0.0
    return CentroidResult(centroid=c, area=area)
