# MIT License (see LICENSE)
"""
buoyancy_sim - 2D fluid forces for rigid body simulation.

Computes the region where a body overlaps a fluid volume (convex polygon
clipping) and derives buoyancy, current, drag and lift forces from it.
A small host simulation is included to run scenes end to end.

Main entry points:
    - apply_buoyancy: Fluid forces for one (fluid, body) fixture pair.
    - Scene: The simulation world containing bodies and fluid volumes.
    - RigidBody2D, Fixture: Bodies and the shapes attached to them.
    - Circle, Box, ConvexPolygon, Segment: Shape definitions.
    - FluidMaterial: Fluid density, drag and current parameters.

Submodules:
    - geometry: Circle sampling, clipping, centroid/area, broadphase.
    - core: Buoyancy model, body forces and integrators.
    - io: JSON serialization/deserialization.

Example:
    from buoyancy_sim import Scene, RigidBody2D, Box, FluidMaterial
    
    scene = Scene(gravity=(0, -9.81))
    water = RigidBody2D(shape=Box((10.0, 5.0)), mass=0, position=(0, -5))
    scene.add_fluid(water, FluidMaterial(density=2.0))
    crate = RigidBody2D(shape=Box((0.5, 0.5)), mass=1.0, position=(0, 2))
    scene.add_body(crate)
    scene.step()
"""
from .scene import Scene, FluidVolume
from .types import RigidBody2D, Fixture, Circle, Box, ConvexPolygon, Segment
from .materials import FluidMaterial
from .core.buoyancy import apply_buoyancy

__all__ = [
    # Simulation
    "Scene",
    "FluidVolume",
    "RigidBody2D",
    "Fixture",
    # Shapes
    "Circle",
    "Box",
    "ConvexPolygon",
    "Segment",
    # Fluids
    "FluidMaterial",
    "apply_buoyancy",
]
