# geometry/__init__.py
from geometry.hittable import HitRecord
from geometry.primitives import PRIMITIVES, solve

__all__ = ["HitRecord", "PRIMITIVES", "solve"]
