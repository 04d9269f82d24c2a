"""
Microbenchmark: time per fluid query vs circle resolution.
Run:
  python benchmarks/bench_buoyancy.py
"""
import time
import numpy as np
from buoyancy_sim.types import RigidBody2D, Fixture, Box, Circle
from buoyancy_sim.core.buoyancy import apply_buoyancy
from buoyancy_sim.geometry.clipping import PolygonClipper


def run(resolution: float, calls: int = 2000):
    water = Fixture(RigidBody2D(Box((10.0, 5.0)), mass=0.0, position=(0.0, -5.0)))
    rng = np.random.default_rng(12345)
    bodies = [
        RigidBody2D(
            Circle(0.5) if k % 2 else Box((0.5, 0.3)),
            mass=1.0,
            position=(float(rng.uniform(-8, 8)), float(rng.uniform(-1, 0.5))),
            velocity=(float(rng.normal()), float(rng.normal())),
            angle=float(rng.uniform(0, np.pi)),
        )
        for k in range(64)
    ]
    clipper = PolygonClipper()

    t0 = time.perf_counter()
    for i in range(calls):
        b = bodies[i % len(bodies)]
        apply_buoyancy(water, Fixture(b), (0.0, -9.81), density=1.0,
                       resolution=resolution, clipper=clipper)
    t1 = time.perf_counter()
    return (t1 - t0) / calls


if __name__ == "__main__":
    for res in [4.0, 8.0, 16.0, 32.0]:
        per_call = run(res)
        print(f"resolution={res:5.1f}  call={1e6*per_call:8.1f} us  calls/s={1/per_call:9.1f}")
