# examples/floating_raft.py
import logging

from buoyancy_sim.scene import Scene
from buoyancy_sim.types import RigidBody2D, Box
from buoyancy_sim.materials import FluidMaterial
from buoyancy_sim.logging_config import setup_logging

setup_logging(logging.INFO)

scene = Scene(gravity=(0.0, -9.81), dt=1/60, substeps=4, linear_damping=1.0, angular_damping=1.0)

water = RigidBody2D(shape=Box((10.0, 5.0)), mass=0.0, position=(0.0, -5.0))
scene.add_fluid(water, FluidMaterial(density=1.0, drag_multiplier=0.5))

# Half the fluid density: should float half submerged, centered on the surface
raft = RigidBody2D(
    shape=Box((1.0, 0.25)),
    mass=0.5,
    position=(0.0, 2.0),
    angle=0.2,
)
scene.add_body(raft)

for i in range(600):
    scene.step()
    if i % 60 == 0:
        print(f"t={scene.time:5.2f}  y={raft.position[1]: .4f}  angle={raft.angle: .4f}")

print("final pos:", raft.position, "angle:", raft.angle)
