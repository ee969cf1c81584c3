# materials/light.py
import math
from typing import Sequence
import numpy as np

class Light:
    """
    Point, directional or spot light.

    The position is homogeneous: w = 1 for a point light, w = 0 for a
    directional light whose xyz is the direction the light travels in.
    A spot cutoff of pi means the light shines in every direction.
    """
    def __init__(self, ambient=(0.0, 0.0, 0.0), diffuse=(0.0, 0.0, 0.0),
                 specular=(0.0, 0.0, 0.0)):
        self.ambient = np.array(ambient[0:3], dtype=np.float64)
        self.diffuse = np.array(diffuse[0:3], dtype=np.float64)
        self.specular = np.array(specular[0:3], dtype=np.float64)
        self.position = np.array([0.0, 0.0, 0.0, 1.0])
        self.spot_direction = np.zeros(4)
        self.spot_cutoff = math.pi

    def set_position(self, position: Sequence[float]):
        self.position = np.array([position[0], position[1], position[2], 1.0], dtype=np.float64)

    def set_direction(self, direction: Sequence[float]):
        self.position = np.array([direction[0], direction[1], direction[2], 0.0], dtype=np.float64)

    def set_spot_direction(self, direction: Sequence[float]):
        self.spot_direction = np.array([direction[0], direction[1], direction[2], 0.0], dtype=np.float64)

    def set_spot_angle(self, radians: float):
        self.spot_cutoff = float(radians)

    def is_directional(self) -> bool:
        return self.position[3] == 0.0

    def transformed(self, matrix: np.ndarray) -> "Light":
        """
        Returns a copy with position and spot direction carried through matrix.
        Directional lights only see its linear part because w = 0.
        """
        result = Light(self.ambient, self.diffuse, self.specular)
        result.position = matrix @ self.position
        result.spot_direction = matrix @ self.spot_direction
        result.spot_direction[3] = 0.0
        result.spot_cutoff = self.spot_cutoff
        return result

    def __repr__(self) -> str:
        kind = "directional" if self.is_directional() else "point"
        return f"Light({kind}, position={self.position}, cutoff={self.spot_cutoff:.4g})"
