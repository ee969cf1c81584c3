# core/utils.py
import math
from typing import Optional
import numpy as np

# Offset applied to secondary ray origins to avoid self-intersection
EPSILON = 1e-4

def reflect(v: np.ndarray, n: np.ndarray) -> np.ndarray:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(v: np.ndarray, n: np.ndarray, eta: float) -> Optional[np.ndarray]:
    """
    Bends unit vector v through a surface with unit normal n facing against it.
    eta is the ratio of refractive indices (from / to). Returns None on total
    internal reflection.
    """
    cos_i = -v.dot(n)
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None
    return v * eta + n * (eta * cos_i - math.sqrt(k))
