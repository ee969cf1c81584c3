# materials/material.py
from typing import Sequence
import numpy as np

def _color(values: Sequence[float]) -> np.ndarray:
    return np.array(values[0:3], dtype=np.float64)

class Material:
    """
    Phong reflectance coefficients plus the split of outgoing energy between
    local shading (absorption), mirror reflection and transmission.
    """
    def __init__(self, ambient=(0.0, 0.0, 0.0), diffuse=(0.0, 0.0, 0.0),
                 specular=(0.0, 0.0, 0.0), emission=(0.0, 0.0, 0.0),
                 shininess: float = 0.0, absorption: float = 1.0,
                 reflection: float = 0.0, transparency: float = 0.0,
                 refractive_index: float = 1.0):
        self.ambient = _color(ambient)
        self.diffuse = _color(diffuse)
        self.specular = _color(specular)
        self.emission = _color(emission)
        self.shininess = float(shininess)
        self.absorption = float(absorption)
        self.reflection = float(reflection)
        self.transparency = float(transparency)
        self.refractive_index = float(refractive_index)

    def is_energy_conserving(self, tolerance: float = 1e-6) -> bool:
        total = self.absorption + self.reflection + self.transparency
        return abs(total - 1.0) <= tolerance

    def copy(self) -> "Material":
        return Material(self.ambient, self.diffuse, self.specular, self.emission,
                        self.shininess, self.absorption, self.reflection,
                        self.transparency, self.refractive_index)

    def __repr__(self) -> str:
        return (f"Material(ambient={self.ambient}, diffuse={self.diffuse}, "
                f"specular={self.specular}, shininess={self.shininess}, "
                f"absorption={self.absorption}, reflection={self.reflection}, "
                f"transparency={self.transparency}, index={self.refractive_index})")
