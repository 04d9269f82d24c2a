# examples/river_current.py
import numpy as np

from buoyancy_sim.scene import Scene
from buoyancy_sim.types import RigidBody2D, Box, Circle
from buoyancy_sim.materials import FluidMaterial

scene = Scene(gravity=(0.0, -9.81), dt=1/60, substeps=2)

river = RigidBody2D(shape=Box((50.0, 2.0)), mass=0.0, position=(0.0, -2.0))
scene.add_fluid(river, FluidMaterial(density=1.0, flow_magnitude=0.5, flow_angle=0.0))

log = RigidBody2D(shape=Box((0.8, 0.15)), mass=0.15, position=(-10.0, 0.5))
ball = RigidBody2D(shape=Circle(0.3), mass=0.1, position=(-12.0, 1.0))
scene.add_body(log)
scene.add_body(ball)

for _ in range(300):
    scene.step()

for name, b in (("log", log), ("ball", ball)):
    print(f"{name}: pos={np.round(b.position, 3)} vel={np.round(b.velocity, 3)}")
