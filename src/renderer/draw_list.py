# renderer/draw_list.py
from typing import List, NamedTuple
import numpy as np
from materials.material import Material

class DrawCommand(NamedTuple):
    mesh_name: str
    material: Material
    texture_name: str
    transform: np.ndarray

class DrawList:
    """
    Draw context that records what a scene graph traversal asks to draw, in
    order, for a rasterizer to replay.
    """
    def __init__(self):
        self.commands: List[DrawCommand] = []

    def draw_mesh(self, mesh_name: str, material: Material, texture_name: str,
                  transform: np.ndarray):
        self.commands.append(DrawCommand(mesh_name, material, texture_name,
                                         np.array(transform, dtype=np.float64)))

    def clear(self):
        self.commands.clear()

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)
