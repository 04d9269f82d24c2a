# MIT License (see LICENSE)
"""
Numeric defaults used by the buoyancy geometry and force model.

These are plain defaults; every routine that uses one also accepts it
as an explicit argument.
"""
from __future__ import annotations

# Circle discretization density: sample points per unit of radius.
# A circle of radius r becomes a ceil(16 * r)-gon.
DEFAULT_CIRCLE_RESOLUTION: float = 16.0

# Polygons whose signed area does not exceed this are reported with area 0.
# Single-precision machine epsilon, so behaviour matches float32 engines.
AREA_EPS: float = 1.1920929e-07

# Lines are treated as parallel when |denominator| <= PARALLEL_EPS * |d1| * |d2|,
# i.e. when the sine of the angle between them is at or below this.
PARALLEL_EPS: float = 1e-12
