# MIT License (see LICENSE)
"""
Numerical integrators for rigid body dynamics.

Both integrators hold the accumulated force and torque constant over the
step:
    dx/dt = v,         dv/dt = F/m
    dθ/dt = ω,         dω/dt = τ/I

Available integrators:
- semi_implicit_euler_step: Velocity first, then position (symplectic Euler),
  with Box2D-style velocity damping. The default.
- verlet_step: Velocity Verlet with constant acceleration.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
    Velocity Verlet: https://en.wikipedia.org/wiki/Verlet_integration#Velocity_Verlet
"""
from __future__ import annotations

from ..types import RigidBody2D


def semi_implicit_euler_step(
    body: RigidBody2D,
    dt: float,
    linear_damping: float = 0.0,
    angular_damping: float = 0.0,
) -> None:
    """
    Advance body state by dt using semi-implicit Euler.
    
    Velocities are updated from forces, damped by 1 / (1 + dt·c), and then
    used to move the body.
    
    Args:
        body: Rigid body to integrate (modified in-place).
        dt: Timestep in seconds.
        linear_damping: Linear velocity damping coefficient (1/s).
        angular_damping: Angular velocity damping coefficient (1/s).
    """
    body.velocity = body.velocity + body.force * (body.inv_mass * dt)
    body.omega = body.omega + body.torque * body.inv_inertia * dt

    body.velocity = body.velocity * (1.0 / (1.0 + dt * linear_damping))
    body.omega = body.omega * (1.0 / (1.0 + dt * angular_damping))

    body.position = body.position + body.velocity * dt
    body.angle = body.angle + body.omega * dt


def verlet_step(
    body: RigidBody2D,
    dt: float,
    linear_damping: float = 0.0,
    angular_damping: float = 0.0,
) -> None:
    """
    Advance body state using velocity Verlet integration.
    
    With forces held constant over the step this reduces to:
        x(t+dt) = x(t) + v(t)*dt + 0.5*a*dt²
        v(t+dt) = v(t) + a*dt
    Damping is applied to the velocity after the update.
    
    Args:
        body: Rigid body to integrate (modified in-place).
        dt: Timestep in seconds.
        linear_damping: Linear velocity damping coefficient (1/s).
        angular_damping: Angular velocity damping coefficient (1/s).
    """
    a0 = body.force * body.inv_mass
    alpha0 = body.torque * body.inv_inertia
    
    body.position = body.position + body.velocity * dt + 0.5 * a0 * dt * dt
    body.angle = body.angle + body.omega * dt + 0.5 * alpha0 * dt * dt
    
    body.velocity = (body.velocity + a0 * dt) * (1.0 / (1.0 + dt * linear_damping))
    body.omega = (body.omega + alpha0 * dt) * (1.0 / (1.0 + dt * angular_damping))
