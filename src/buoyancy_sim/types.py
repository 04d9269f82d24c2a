# MIT License (see LICENSE)
"""
Core type definitions for the 2D buoyancy simulation.

Defines the fundamental data structures:
- Shape primitives (Circle, Box, ConvexPolygon, Segment)
- RigidBody2D: The host body with transform, velocity sampling and a
  force accumulator.
- Fixture: A shape attached to a body.

Linear and angular motion follow standard Newtonian mechanics in 2D:
  - Linear:  F = m·a  →  a = F/m
  - Angular: τ = I·α  →  α = τ/I
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64, cross2, cross_z_scalar_vec, rotation


# =============================================================================
# Shape Definitions
# =============================================================================

@dataclass(frozen=True)
class Circle:
    """
    Circular shape defined by radius and a local center.
    
    Attributes:
        radius: Distance from center to edge in meters.
        center: Circle center in body-local coordinates.
    """
    radius: float
    center: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class Box:
    """
    Box shape defined by half-extents, centered on the body origin.
    
    The full width is 2*hx and full height is 2*hy.
    
    Attributes:
        half_extents: Tuple (hx, hy) representing half-width and half-height.
    """
    half_extents: tuple[float, float]

    def vertices(self) -> np.ndarray:
        """Local-space corners in counterclockwise order."""
        hx, hy = self.half_extents
        return np.array([[-hx, -hy], [hx, -hy], [hx, hy], [-hx, hy]], dtype=np.float64)


@dataclass(frozen=True)
class ConvexPolygon:
    """
    General convex polygon defined by vertices.
    
    Attributes:
        vertices: Array of vertices [N, 2] in local space. Must be convex;
                  either winding is accepted and stored counter-clockwise.
    """
    vertices: np.ndarray

    def __post_init__(self) -> None:
        """Store vertices as float64, reversed if they wind clockwise."""
        v = f64(self.vertices).reshape(-1, 2)
        x, y = v[:, 0], v[:, 1]
        # Shoelace: negative signed area means clockwise
        signed_area = 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))
        if signed_area < 0.0:
            v = v[::-1].copy()
        object.__setattr__(self, "vertices", v)


@dataclass(frozen=True)
class Segment:
    """
    Line segment (edge) shape between two local points.
    
    Segments have no area, so they never displace fluid.
    """
    a: tuple[float, float]
    b: tuple[float, float]


# Union type for shape dispatch
Shape2D = Circle | Box | ConvexPolygon | Segment


# =============================================================================
# Rigid Body
# =============================================================================

@dataclass(eq=False)
class RigidBody2D:
    """
    A 2D rigid body with kinematic state and a force accumulator.
    
    Attributes:
        shape: Primary collision geometry.
        mass: Mass in kg. Use mass ≤ 0 for static/immovable bodies.
        position: Center of mass position [x, y] in meters.
        angle: Rotation angle in radians (counterclockwise from +x axis).
        velocity: Linear velocity [vx, vy] in m/s.
        omega: Angular velocity in rad/s (counterclockwise positive).
        force: Accumulated force vector [Fx, Fy] (cleared each step).
        torque: Accumulated torque scalar (cleared each step).
        id: Unique identifier assigned by Scene.add_body().
    
    Note:
        Forces are accumulated through apply_force() during a step, then
        integrated and cleared for the next step. The body origin is its
        center of mass.
    """
    shape: Shape2D
    mass: float
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    angle: float = 0.0
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    omega: float = 0.0

    # Sleep state
    sleeping: bool = False
    
    # Runtime state (not user-specified)
    force: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    torque: float = 0.0
    id: int = -1

    def __post_init__(self) -> None:
        """Convert position/velocity to float64 arrays for consistent numerics."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.force = f64(self.force)

    def wake(self) -> None:
        """Force the body to wake up."""
        self.sleeping = False

    @property
    def inv_mass(self) -> float:
        """Inverse mass (1/m). Returns 0 for static bodies (mass ≤ 0)."""
        return 0.0 if self.mass <= 0 else 1.0 / self.mass

    @property
    def inertia(self) -> float:
        """
        Moment of inertia about the body origin.
        
        Formulas for solid 2D shapes:
          Circle:  I = (1/2) m r² + m |c|²   (parallel axis for an offset center)
          Box:     I = (1/12) m (w² + h²)  where w=2*hx, h=2*hy
          Polygon: Second moment of area about the origin, scaled by mass/area.
          Segment: I = (1/12) m L² + m |mid|²
        
        Reference: https://en.wikipedia.org/wiki/List_of_moments_of_inertia
        """
        shape = self.shape
        if isinstance(shape, Circle):
            r = shape.radius
            cx, cy = shape.center
            return 0.5 * self.mass * r * r + self.mass * (cx * cx + cy * cy)
        if isinstance(shape, Box):
            hx, hy = shape.half_extents
            w, h = 2 * hx, 2 * hy
            return (1 / 12) * self.mass * (w * w + h * h)
        if isinstance(shape, ConvexPolygon):
            verts = shape.vertices
            numerator = 0.0
            denominator = 0.0
            for i in range(len(verts)):
                p1 = verts[i]
                p2 = verts[(i + 1) % len(verts)]
                # Signed double-area of triangle (0, p1, p2)
                cross = cross2(p1, p2)
                numerator += cross * (np.dot(p1, p1) + np.dot(p1, p2) + np.dot(p2, p2))
                denominator += cross
            if abs(denominator) < 1e-9:
                return 1.0  # Degenerate polygon
            return (self.mass / 6.0) * (numerator / denominator)
        if isinstance(shape, Segment):
            a, b = f64(shape.a), f64(shape.b)
            d = b - a
            mid = 0.5 * (a + b)
            return self.mass * (float(np.dot(d, d)) / 12.0 + float(np.dot(mid, mid)))

        raise TypeError(f"Unknown shape type: {type(shape)}")

    @property
    def inv_inertia(self) -> float:
        """Inverse moment of inertia (1/I). Returns 0 for static bodies."""
        if self.mass <= 0:
            return 0.0
        I = self.inertia
        return 0.0 if I <= 0 else 1.0 / I

    def clear_forces(self) -> None:
        """Reset accumulated force and torque to zero for next timestep."""
        self.force[:] = 0.0
        self.torque = 0.0

    def local_to_world(self, local_point: tuple[float, float] | np.ndarray) -> np.ndarray:
        """Transform a point from local body coordinates to world coordinates."""
        # p_world = pos + Rot * p_local
        c, s = np.cos(self.angle), np.sin(self.angle)
        lx, ly = local_point[0], local_point[1]
        
        wx = lx * c - ly * s + self.position[0]
        wy = lx * s + ly * c + self.position[1]
        return np.array([wx, wy], dtype=np.float64)

    def local_to_world_many(self, local_points: np.ndarray) -> np.ndarray:
        """Transform an [N, 2] array of local points to world coordinates."""
        return f64(local_points) @ rotation(self.angle).T + self.position

    def world_to_local(self, world_point: tuple[float, float] | np.ndarray) -> np.ndarray:
        """Transform a point from world coordinates to local body coordinates."""
        # p_local = Rot^T * (p_world - pos)
        dx = world_point[0] - self.position[0]
        dy = world_point[1] - self.position[1]
        c, s = np.cos(self.angle), np.sin(self.angle)
        
        lx = dx * c + dy * s
        ly = -dx * s + dy * c
        return np.array([lx, ly], dtype=np.float64)

    def velocity_at(self, world_point: tuple[float, float] | np.ndarray) -> np.ndarray:
        """
        Velocity of the material point at a world position: v + ω × r.
        
        r is measured from the center of mass (the body position).
        """
        r = f64(world_point) - self.position
        return self.velocity + cross_z_scalar_vec(self.omega, r)

    def apply_force(
        self,
        force: np.ndarray | tuple[float, float],
        point: np.ndarray | tuple[float, float],
        wake: bool = True,
    ) -> None:
        """
        Accumulate a force acting at a world point.
        
        Adds F to the net force and r × F to the net torque. Static bodies
        ignore forces. A sleeping body ignores the force unless wake is set,
        in which case it is woken first.
        """
        if self.mass <= 0:
            return
        if self.sleeping:
            if not wake:
                return
            self.wake()
        f = f64(force)
        r = f64(point) - self.position
        self.force += f
        self.torque += cross2(r, f)

    def apply_force_to_center(self, force: np.ndarray | tuple[float, float], wake: bool = True) -> None:
        """Accumulate a force at the center of mass (no torque)."""
        if self.mass <= 0:
            return
        if self.sleeping:
            if not wake:
                return
            self.wake()
        self.force += f64(force)


# =============================================================================
# Fixture
# =============================================================================

@dataclass(eq=False)
class Fixture:
    """
    A shape attached to a rigid body.
    
    Bodies carry a primary shape; a fixture refers to that shape unless a
    separate one is given. Fixtures compare by identity.
    """
    body: RigidBody2D
    shape: Shape2D | None = None

    def __post_init__(self) -> None:
        if self.shape is None:
            self.shape = self.body.shape
