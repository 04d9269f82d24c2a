# MIT License (see LICENSE)
"""
Body force generators for the host simulation.

These functions modify body.force in-place and are called during the force
accumulation phase of a step, before fluid forces are added.
"""
from __future__ import annotations

import numpy as np

from ..types import RigidBody2D


def apply_gravity(body: RigidBody2D, g: np.ndarray) -> None:
    """
    Apply gravitational force F = m * g to a body.
    
    Args:
        body: The rigid body to apply gravity to.
        g: Gravitational acceleration vector as [gx, gy] in m/s².
        
    Note:
        Has no effect on static (mass <= 0) or sleeping bodies.
    """
    if body.mass > 0 and not body.sleeping:
        body.force += body.mass * g


def apply_linear_drag(body: RigidBody2D, c: float) -> None:
    """
    Apply a global linear drag F = -c * v (air resistance outside fluids).
    
    Args:
        body: The rigid body to apply drag to.
        c: Drag coefficient. Higher values = more damping.
    """
    if c != 0.0 and body.mass > 0 and not body.sleeping:
        body.force += -c * body.velocity
