# geometry/hittable.py
import numpy as np
from core.uv import UV

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    def __init__(self, time: float = 0.0, point: np.ndarray = None, normal: np.ndarray = None,
                 material=None, texture_name: str = "", uv: UV = None, incoming: bool = True):
        self.time = time                  # Ray parameter at intersection
        self.point = point                # Homogeneous intersection point (w = 1)
        self.normal = normal              # Outward surface normal (w = 0)
        self.material = material
        self.texture_name = texture_name  # Empty when the surface is untextured
        self.uv = uv if uv is not None else UV(0.0, 0.0)
        self.incoming = incoming          # True if the ray enters the solid here

    def __repr__(self) -> str:
        return (f"HitRecord(time={self.time:.6g}, point={self.point[:3]}, "
                f"normal={self.normal[:3]}, incoming={self.incoming})")
