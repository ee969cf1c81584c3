# core/matrix.py
import math
from typing import Sequence
import numpy as np

def identity() -> np.ndarray:
    """
    Returns a fresh 4x4 identity matrix.
    """
    return np.eye(4, dtype=np.float64)

def point(x: float, y: float, z: float) -> np.ndarray:
    """
    Returns a homogeneous point (w = 1).
    """
    return np.array([x, y, z, 1.0], dtype=np.float64)

def vector(x: float, y: float, z: float) -> np.ndarray:
    """
    Returns a homogeneous direction (w = 0).
    """
    return np.array([x, y, z, 0.0], dtype=np.float64)

def normalize(v: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(v)
    if length == 0.0:
        return v
    return v / length

def translation_matrix(offset: Sequence[float]) -> np.ndarray:
    m = identity()
    m[0:3, 3] = offset[0:3]
    return m

def scale_matrix(factors: Sequence[float]) -> np.ndarray:
    return np.diag([factors[0], factors[1], factors[2], 1.0]).astype(np.float64)

def rotation_matrix(radians: float, axis: Sequence[float]) -> np.ndarray:
    """
    Rotation about an arbitrary axis (Rodrigues form). A zero axis yields identity.
    """
    a = np.asarray(axis[0:3], dtype=np.float64)
    length = np.linalg.norm(a)
    if length == 0.0:
        return identity()
    x, y, z = a / length
    c = math.cos(radians)
    s = math.sin(radians)
    t = 1.0 - c
    m = identity()
    m[0:3, 0:3] = [
        [x * x * t + c,     x * y * t - z * s, x * z * t + y * s],
        [y * x * t + z * s, y * y * t + c,     y * z * t - x * s],
        [z * x * t - y * s, z * y * t + x * s, z * z * t + c],
    ]
    return m

# The three builders below post-multiply, so successive calls apply to the
# object in reverse order of the calls, like a modelview matrix.
def translate(m: np.ndarray, offset: Sequence[float]) -> np.ndarray:
    return m @ translation_matrix(offset)

def scale(m: np.ndarray, factors: Sequence[float]) -> np.ndarray:
    return m @ scale_matrix(factors)

def rotate(m: np.ndarray, radians: float, axis: Sequence[float]) -> np.ndarray:
    return m @ rotation_matrix(radians, axis)

def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """
    Builds a right-handed view matrix looking from eye towards target, camera facing -z.
    """
    eye = np.asarray(eye, dtype=np.float64)
    forward = normalize(np.asarray(target, dtype=np.float64) - eye)
    right = normalize(np.cross(forward, np.asarray(up, dtype=np.float64)))
    true_up = np.cross(right, forward)

    m = identity()
    m[0, 0:3] = right
    m[1, 0:3] = true_up
    m[2, 0:3] = -forward
    m[0:3, 3] = [-right.dot(eye), -true_up.dot(eye), forward.dot(eye)]
    return m

def normal_matrix(m: np.ndarray) -> np.ndarray:
    """
    Inverse-transpose of m, used to carry normals through non-uniform scales.
    """
    return np.linalg.inv(m).T
