# MIT License (see LICENSE)
"""
Fluid material properties.

A fluid volume is an ordinary fixture tagged with a FluidMaterial. The
material holds every per-volume parameter the buoyancy force model needs.
"""
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class FluidMaterial:
    """
    Physical properties of a fluid volume.
    
    Attributes:
        density: Mass per unit area (kg/m² in 2D). Scales buoyancy, drag and lift.
        drag_multiplier: Extra scale applied to drag only (lift is unaffected).
        flow_magnitude: Strength of the uniform current, in Newtons, applied at
                        the center of mass of any body overlapping the volume.
        flow_angle: Direction of the current in radians (counterclockwise from +x).
        flip_gravity: Reverse the buoyancy direction and the edge-normal
                      convention, for worlds simulated upside down.
    """
    density: float = 1.0
    drag_multiplier: float = 1.0
    flow_magnitude: float = 0.0
    flow_angle: float = 0.0
    flip_gravity: bool = False
