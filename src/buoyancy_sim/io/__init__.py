# MIT License (see LICENSE)
"""
Input/Output utilities for buoyancy scenes.

This subpackage provides:
    - JSON serialization: Save and load scenes (bodies and fluid volumes).
    - Round-trip support: Serialized scenes can be loaded back identically.

Typical usage:
    from buoyancy_sim.io import load_scene, save_scene
    
    scene = load_scene("harbour.json")
    save_scene(scene, "output.json")
"""
from .json_io import (
    load_scene,
    load_scene_raw,
    scene_from_json,
    save_scene,
    scene_to_json,
    body_to_json,
    body_from_json,
    shape_to_json,
    shape_from_json,
    fluid_to_json,
    fluid_from_json,
)

__all__ = [
    # Loading
    "load_scene",
    "load_scene_raw",
    "scene_from_json",
    # Saving
    "save_scene",
    # Serialization
    "scene_to_json",
    "body_to_json",
    "body_from_json",
    "shape_to_json",
    "shape_from_json",
    "fluid_to_json",
    "fluid_from_json",
]
