# scenegraph/mesh.py
import os
from typing import Optional
from geometry.primitives import PRIMITIVES

class MeshInstance:
    """
    Mesh registry entry: an instance name and the source its canonical
    geometry comes from. Ray tracing resolves it to one of the analytic
    primitives by instance name, falling back to the file name of the source.
    """
    def __init__(self, name: str, path: str = ""):
        self.name = name
        self.path = path

    @property
    def primitive(self) -> Optional[str]:
        if self.name in PRIMITIVES:
            return self.name
        stem = os.path.splitext(os.path.basename(self.path))[0]
        if stem in PRIMITIVES:
            return stem
        return None

    def __repr__(self) -> str:
        return f"MeshInstance({self.name!r}, {self.path!r})"
