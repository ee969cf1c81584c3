# core/ray.py
import numpy as np

class Ray:
    """
    Represents a ray with a homogeneous start point (w = 1) and direction (w = 0).
    The direction is not required to be unit length.
    """
    def __init__(self, start, direction):
        self.start = np.asarray(start, dtype=np.float64)
        self.direction = np.asarray(direction, dtype=np.float64)

    def at(self, t: float) -> np.ndarray:
        """
        Returns the point along the ray at parameter t.
        """
        return self.start + self.direction * t

    def transformed(self, matrix: np.ndarray) -> "Ray":
        """
        Returns this ray expressed in the frame that matrix maps into.
        """
        return Ray(matrix @ self.start, matrix @ self.direction)

    def __repr__(self) -> str:
        return f"Ray({self.start[:3]}, {self.direction[:3]})"
