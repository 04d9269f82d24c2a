# MIT License (see LICENSE)
"""
JSON serialization and deserialization for buoyancy scenes.

JSON Schema Overview:
---------------------
{
  "gravity": [float, float],       # Default: [0.0, -9.81]
  "dt": float,                     # Timestep (sec), default: 1/60
  "integrator": string,            # "euler" or "verlet"
  "substeps": int,                 # Default: 1
  "linear_damping": float,         # Default: 0
  "angular_damping": float,        # Default: 0
  "drag_c": float,                 # Default: 0
  "circle_resolution": float,      # Default: 16
  "bodies": [
    {
      "shape": {                   # Required
        "type": "circle" | "box" | "polygon" | "segment",
        "radius": float,           # If circle
        "center": [x, y],          # If circle, optional local center
        "hx": float, "hy": float,  # If box (half-extents)
        "vertices": [[x,y], ...],  # If polygon (convex, either winding)
        "a": [x, y], "b": [x, y]   # If segment
      },
      "mass": float,               # Required (>0 for dynamic, <=0 for static)
      "position": [x, y],          # Default: [0, 0]
      "velocity": [vx, vy],        # Default: [0, 0]
      "angle": float,              # Radians, default: 0
      "omega": float               # Rad/s, default: 0
    }
  ],
  "fluids": [                      # Optional
    {
      "body": int,                 # Index in bodies list
      "shape": {...},              # Optional, defaults to the body's shape
      "density": float,            # Default: 1
      "drag_multiplier": float,    # Default: 1
      "flow_magnitude": float,     # Default: 0
      "flow_angle": float,         # Radians, default: 0
      "flip_gravity": bool         # Default: false
    }
  ]
}
"""
from __future__ import annotations
import json
import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from ..constants import DEFAULT_CIRCLE_RESOLUTION
from ..materials import FluidMaterial
from ..types import RigidBody2D, Circle, Box, ConvexPolygon, Segment, Shape2D

if TYPE_CHECKING:
    from ..scene import Scene, FluidVolume

logger = logging.getLogger(__name__)

_FLUID_DEFAULTS = FluidMaterial()


def load_scene_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a scene file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def scene_from_json(data: dict[str, Any]) -> "Scene":
    """
    Construct a Scene from already-parsed JSON data.

    Raises:
        ValueError: If a body or fluid definition is invalid.
    """
    # Import locally to avoid circular import
    from ..scene import Scene

    scene = Scene(
        gravity=tuple(data.get("gravity", [0.0, -9.81])),
        dt=float(data.get("dt", 1 / 60.0)),
        integrator=data.get("integrator", "euler"),
        substeps=int(data.get("substeps", 1)),
        linear_damping=float(data.get("linear_damping", 0.0)),
        angular_damping=float(data.get("angular_damping", 0.0)),
        drag_c=float(data.get("drag_c", 0.0)),
        circle_resolution=float(data.get("circle_resolution", DEFAULT_CIRCLE_RESOLUTION)),
    )

    loaded_bodies = []
    for body_data in data.get("bodies", []):
        body = body_from_json(body_data)
        scene.add_body(body)
        loaded_bodies.append(body)

    for fluid_data in data.get("fluids", []):
        idx = fluid_data.get("body")
        if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < len(loaded_bodies):
            raise ValueError(f"Fluid references invalid body index: {idx}")
        shape = shape_from_json(fluid_data["shape"]) if "shape" in fluid_data else None
        scene.add_fluid(loaded_bodies[idx], fluid_from_json(fluid_data), shape)

    return scene


def load_scene(path: str) -> "Scene":
    """
    Load and construct a fully initialized Scene from a JSON file.

    Args:
        path: Path to the JSON scene file.

    Returns:
        A ready-to-run Scene object.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If a body or fluid definition is invalid.
    """
    scene = scene_from_json(load_scene_raw(path))
    logger.info("Loaded scene %s: %d bodies, %d fluids", path, len(scene.bodies), len(scene.fluids))
    return scene


def shape_from_json(shape_data: dict[str, Any]) -> Shape2D:
    """Parse a shape definition."""
    shape_type = shape_data.get("type")

    if shape_type == "circle":
        radius = float(shape_data["radius"])
        if radius <= 0:
            raise ValueError(f"Circle radius must be positive, got {radius}")
        center = tuple(float(v) for v in shape_data.get("center", [0.0, 0.0]))
        return Circle(radius=radius, center=center)
    if shape_type == "box":
        hx = float(shape_data["hx"])
        hy = float(shape_data["hy"])
        if hx <= 0 or hy <= 0:
            raise ValueError(f"Box extents must be positive, got ({hx}, {hy})")
        return Box(half_extents=(hx, hy))
    if shape_type == "polygon":
        verts = shape_data["vertices"]
        if len(verts) < 3:
            raise ValueError("Polygon must have at least 3 vertices")
        return ConvexPolygon(vertices=np.array(verts, dtype=np.float64))
    if shape_type == "segment":
        a = tuple(float(v) for v in shape_data["a"])
        b = tuple(float(v) for v in shape_data["b"])
        return Segment(a=a, b=b)
    raise ValueError(f"Unknown shape type: '{shape_type}'")


def shape_to_json(shape: Shape2D) -> dict[str, Any]:
    """Serialize a shape definition."""
    if isinstance(shape, Circle):
        data = {"type": "circle", "radius": shape.radius}
        if tuple(shape.center) != (0.0, 0.0):
            data["center"] = list(shape.center)
        return data
    if isinstance(shape, Box):
        hx, hy = shape.half_extents
        return {"type": "box", "hx": hx, "hy": hy}
    if isinstance(shape, ConvexPolygon):
        return {"type": "polygon", "vertices": shape.vertices.tolist()}
    if isinstance(shape, Segment):
        return {"type": "segment", "a": list(shape.a), "b": list(shape.b)}
    raise TypeError(f"Cannot serialize unknown shape type: {type(shape)}")


def body_from_json(d: dict[str, Any]) -> RigidBody2D:
    """
    Parse a single rigid body definition from a dictionary.

    Raises:
        ValueError: If the shape is missing or invalid.
    """
    if "shape" not in d:
        raise ValueError("Body definition missing required 'shape' field.")

    return RigidBody2D(
        shape=shape_from_json(d["shape"]),
        mass=float(d["mass"]),
        position=tuple(d.get("position", [0.0, 0.0])),
        angle=float(d.get("angle", 0.0)),
        velocity=tuple(d.get("velocity", [0.0, 0.0])),
        omega=float(d.get("omega", 0.0)),
    )


def body_to_json(body: RigidBody2D) -> dict[str, Any]:
    """
    Serialize a RigidBody2D to a dictionary (round-trip compatible).

    Only minimal/non-default fields are included to keep the output concise.
    """
    result = {
        "shape": shape_to_json(body.shape),
        "mass": body.mass,
        "position": _to_list(body.position),
        "velocity": _to_list(body.velocity),
    }
    if body.angle != 0.0:
        result["angle"] = body.angle
    if body.omega != 0.0:
        result["omega"] = body.omega
    return result


def fluid_from_json(d: dict[str, Any]) -> FluidMaterial:
    """Parse the material part of a fluid definition."""
    density = float(d.get("density", _FLUID_DEFAULTS.density))
    if density < 0:
        raise ValueError(f"Fluid density must be non-negative, got {density}")
    return FluidMaterial(
        density=density,
        drag_multiplier=float(d.get("drag_multiplier", _FLUID_DEFAULTS.drag_multiplier)),
        flow_magnitude=float(d.get("flow_magnitude", _FLUID_DEFAULTS.flow_magnitude)),
        flow_angle=float(d.get("flow_angle", _FLUID_DEFAULTS.flow_angle)),
        flip_gravity=bool(d.get("flip_gravity", _FLUID_DEFAULTS.flip_gravity)),
    )


def fluid_to_json(fluid: "FluidVolume", body_index: int) -> dict[str, Any]:
    """Serialize a fluid volume, skipping default material values."""
    result: dict[str, Any] = {"body": body_index}
    if fluid.fixture.shape is not fluid.body.shape:
        result["shape"] = shape_to_json(fluid.fixture.shape)
    m = fluid.material
    for name in ("density", "drag_multiplier", "flow_magnitude", "flow_angle", "flip_gravity"):
        value = getattr(m, name)
        if value != getattr(_FLUID_DEFAULTS, name):
            result[name] = value
    return result


def scene_to_json(scene: "Scene") -> dict[str, Any]:
    """
    Serialize a complete Scene to a dictionary.

    Captured state includes global parameters, all bodies with their
    kinematic state, and all fluid volumes.
    """
    result = {
        "gravity": list(scene.gravity),
        "dt": scene.dt,
        "bodies": [body_to_json(b) for b in scene.bodies],
    }

    # Optional parameters (skip if standard defaults)
    if scene.integrator != "euler":
        result["integrator"] = scene.integrator
    if scene.substeps != 1:
        result["substeps"] = scene.substeps
    if scene.linear_damping != 0.0:
        result["linear_damping"] = scene.linear_damping
    if scene.angular_damping != 0.0:
        result["angular_damping"] = scene.angular_damping
    if scene.drag_c != 0.0:
        result["drag_c"] = scene.drag_c
    if scene.circle_resolution != DEFAULT_CIRCLE_RESOLUTION:
        result["circle_resolution"] = scene.circle_resolution

    if scene.fluids:
        index = {id(b): i for i, b in enumerate(scene.bodies)}
        result["fluids"] = [fluid_to_json(f, index.get(id(f.body), -1)) for f in scene.fluids]

    return result


def save_scene(scene: "Scene", path: str, indent: int = 2) -> None:
    """Save a Scene instance to a JSON file on disk."""
    data = scene_to_json(scene)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
    logger.info("Saved scene %s", path)


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
