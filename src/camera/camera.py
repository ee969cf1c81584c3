# camera/camera.py
import math
from typing import Sequence
import numpy as np
from core.matrix import look_at, point, vector
from core.ray import Ray

class Camera:
    """
    Pinhole camera. Rays are generated in camera space with the eye at the
    origin looking down -z; view_matrix() carries the scene into that space.
    """
    def __init__(self, eye: Sequence[float] = (0.0, 0.0, 0.0),
                 target: Sequence[float] = (0.0, 0.0, -1.0),
                 up: Sequence[float] = (0.0, 1.0, 0.0), fov: float = math.pi / 2):
        self.eye = np.asarray(eye, dtype=np.float64)
        self.target = np.asarray(target, dtype=np.float64)
        self.up = np.asarray(up, dtype=np.float64)
        self.fov = fov

    def view_matrix(self) -> np.ndarray:
        return look_at(self.eye, self.target, self.up)

    def distance_to_plane(self, height: int) -> float:
        """Distance from the eye to an image plane measured in pixels."""
        return 0.5 * height / math.tan(self.fov / 2)

    def primary_ray(self, x: int, y: int, width: int, height: int) -> Ray:
        """
        Ray through pixel (x, y) with y growing upwards from the bottom row.
        The direction is left unnormalized.
        """
        d = self.distance_to_plane(height)
        return Ray(point(0.0, 0.0, 0.0), vector(x - width / 2, y - height / 2, -d))
