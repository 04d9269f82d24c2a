# MIT License (see LICENSE)
"""
The simulation scene and loop.

The Scene class acts as the world container and simulation controller.
It manages:
- The list of rigid bodies and fluid volumes.
- Global simulation parameters (gravity, timestep, integrator choice).
- The main simulation loop (step), including per substep:
    1. Fluid forces (broadphase pairing + buoyancy/drag/lift).
    2. Body forces (gravity, global drag).
    3. Integration (semi-implicit Euler or Verlet).

Structure:
    - User creates a Scene.
    - User adds bodies via add_body() and fluid volumes via add_fluid().
    - User calls scene.step(dt) in a loop.

Fluid forces for one body are applied one fluid volume at a time, in
registration order, so overlapping volumes accumulate additively.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .constants import DEFAULT_CIRCLE_RESOLUTION
from .core.buoyancy import apply_buoyancy
from .core.forces import apply_gravity, apply_linear_drag
from .core.integrators import semi_implicit_euler_step, verlet_step
from .geometry.broadphase import SpatialHashBroadphase
from .geometry.clipping import PolygonClipper
from .materials import FluidMaterial
from .types import Fixture, RigidBody2D, Shape2D
from .util import f64

logger = logging.getLogger(__name__)

INTEGRATORS = {
    "euler": semi_implicit_euler_step,
    "verlet": verlet_step,
}


@dataclass(eq=False)
class FluidVolume:
    """
    A fixture that acts as fluid, with its material.

    Attributes:
        fixture: The fluid region (usually on a static body).
        material: Density, drag and current parameters.
    """
    fixture: Fixture
    material: FluidMaterial = field(default_factory=FluidMaterial)

    @property
    def body(self) -> RigidBody2D:
        return self.fixture.body


@dataclass
class Scene:
    """
    Physics simulation world with fluid volumes.

    Attributes:
        gravity: Global gravity vector (default: Earth gravity [0, -9.81]).
        dt: Base simulation timestep in seconds (default: 1/60).
        integrator: Integration scheme ("euler" or "verlet").
        substeps: Number of substeps per 'step' call. Fluid forces are
                  recomputed every substep. Default: 1.
        linear_damping: Velocity damping applied to every dynamic body (1/s).
        angular_damping: Angular velocity damping (1/s).
        drag_c: Global linear drag coefficient (air resistance).
        circle_resolution: Circle samples per unit radius when clipping.
        cell_size: Broadphase grid cell size.
    """
    gravity: tuple[float, float] = (0.0, -9.81)
    dt: float = 1/60
    integrator: str = "euler"
    substeps: int = 1
    linear_damping: float = 0.0
    angular_damping: float = 0.0
    drag_c: float = 0.0
    circle_resolution: float = DEFAULT_CIRCLE_RESOLUTION
    cell_size: float = 1.0

    # Internal state
    bodies: list[RigidBody2D] = field(default_factory=list)
    fluids: list[FluidVolume] = field(default_factory=list)
    time: float = 0.0

    def __post_init__(self) -> None:
        """Initialize internal structures after dataclass creation."""
        if self.integrator not in INTEGRATORS:
            raise ValueError(f"Unknown integrator: {self.integrator}")
        if self.substeps < 1:
            raise ValueError(f"substeps must be >= 1, got {self.substeps}")
        self._g = f64(self.gravity)
        self._broadphase = SpatialHashBroadphase(cell_size=self.cell_size)
        # Shared scratch buffers for every fluid query in this scene
        self._clipper = PolygonClipper()
        self._next_id = 1

    def add_body(self, body: RigidBody2D) -> int:
        """
        Add a rigid body to the simulation.

        Assigns a unique ID to the body.

        Returns:
            The assigned body ID.
        """
        body.id = self._next_id
        self._next_id += 1
        self.bodies.append(body)
        return body.id

    def add_fluid(
        self,
        body: RigidBody2D,
        material: FluidMaterial | None = None,
        shape: Shape2D | None = None,
    ) -> FluidVolume:
        """
        Register a fluid volume.

        Args:
            body: Body carrying the fluid region. Added to the scene if needed.
            material: Fluid parameters (defaults to FluidMaterial()).
            shape: Fluid region; defaults to the body's own shape.

        Returns:
            The new FluidVolume.
        """
        if body not in self.bodies:
            self.add_body(body)
        fluid = FluidVolume(Fixture(body, shape), material or FluidMaterial())
        self.fluids.append(fluid)
        return fluid

    def remove_fluid(self, fluid: FluidVolume) -> None:
        """Remove a fluid volume (its body stays in the scene)."""
        if fluid in self.fluids:
            self.fluids.remove(fluid)

    def _apply_fluid_forces(self) -> int:
        """Apply fluid forces for every overlapping (fluid, body) pair. Returns the overlap count."""
        hits = 0
        for fluid, body in self._broadphase.fluid_pairs(self.fluids, self.bodies):
            m = fluid.material
            if apply_buoyancy(
                fluid.fixture,
                Fixture(body),
                self._g,
                flip_gravity=m.flip_gravity,
                density=m.density,
                drag_multiplier=m.drag_multiplier,
                flow_magnitude=m.flow_magnitude,
                flow_angle=m.flow_angle,
                resolution=self.circle_resolution,
                clipper=self._clipper,
            ):
                hits += 1
        return hits

    def _apply_forces(self) -> None:
        """Clear accumulators, then add fluid forces and body forces."""
        for b in self.bodies:
            b.clear_forces()

        # Fluid forces first: they may wake sleeping bodies
        hits = self._apply_fluid_forces()
        if hits:
            logger.debug("t=%.4f: %d fluid overlap(s)", self.time, hits)

        for b in self.bodies:
            apply_gravity(b, self._g)
            apply_linear_drag(b, self.drag_c)

    def _integrate(self, dt: float) -> None:
        """Advance kinematic state of all awake dynamic bodies by dt."""
        step_fn = INTEGRATORS[self.integrator]
        for b in self.bodies:
            if b.mass <= 0 or b.sleeping:
                continue
            step_fn(b, dt, self.linear_damping, self.angular_damping)

    def step(self, dt: float | None = None) -> None:
        """
        Advance the simulation by one frame (dt), split into substeps.
        """
        dt = float(self.dt if dt is None else dt)
        h = dt / self.substeps
        for _ in range(self.substeps):
            self._apply_forces()
            self._integrate(h)
        self.time += dt
