# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

All functions operate on 2D vectors represented as numpy arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.
    
    Used throughout the codebase so positions, velocities and vertex lists
    can be given as tuples or lists.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def normalize(v: np.ndarray, eps: float = 1e-12) -> tuple[np.ndarray, float]:
    """
    Split a vector into direction and length.

    Returns (unit vector, length). Vectors shorter than eps give a zero
    direction and their (tiny) length.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(2, dtype=np.float64), n
    return v / n, n


def cross2(a: np.ndarray, b: np.ndarray) -> float:
    """
    2D cross product (scalar result): a × b = ax*by - ay*bx.
    
    Positive result means b is counterclockwise from a.
    """
    return float(a[0] * b[1] - a[1] * b[0])


def cross_z_scalar_vec(z: float, v: np.ndarray) -> np.ndarray:
    """
    Cross product of z-axis scalar with 2D vector: (0, 0, z) × (vx, vy, 0).
    
    Result: (-z*vy, z*vx), i.e. v rotated 90° counterclockwise and scaled
    by z. Used for point velocities (ω × r) and edge perpendiculars.
    """
    return np.array([-z * v[1], z * v[0]], dtype=np.float64)


def rotation(angle: float) -> np.ndarray:
    """2x2 rotation matrix for a counterclockwise angle in radians."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s], [s, c]], dtype=np.float64)
