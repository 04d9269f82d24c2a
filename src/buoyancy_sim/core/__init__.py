# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Buoyancy: Fluid forces (buoyancy, current, drag, lift) from an overlap.
    - Force generators: Gravity and linear drag.
    - Integrators: Semi-implicit Euler and velocity Verlet.

Typical usage:
    from buoyancy_sim.core import apply_buoyancy
    
    apply_buoyancy(fluid_fixture, body_fixture, gravity=(0, -9.81), density=1000.0)
"""
from .buoyancy import apply_buoyancy
from .forces import apply_gravity, apply_linear_drag
from .integrators import semi_implicit_euler_step, verlet_step

__all__ = [
    # Fluid forces
    "apply_buoyancy",
    # Forces
    "apply_gravity",
    "apply_linear_drag",
    # Integrators
    "semi_implicit_euler_step",
    "verlet_step",
]
