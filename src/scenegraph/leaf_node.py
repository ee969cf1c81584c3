# scenegraph/leaf_node.py
import logging
from typing import List, Optional
import numpy as np
from core.matrix import normalize
from core.ray import Ray
from core.stack import MatrixStack
from core.uv import UV
from geometry.hittable import HitRecord
from geometry.primitives import solve
from materials.light import Light
from materials.material import Material
from scenegraph.node import Node

logger = logging.getLogger(__name__)

class LeafNode(Node):
    """
    Holds a renderable object: a mesh instance name, its own material and an
    optional texture name.
    """
    def __init__(self, mesh_name: str, name: str = "g", scenegraph=None):
        super().__init__(name, scenegraph)
        self.mesh_name = mesh_name
        self.material = Material()
        self.texture_name = ""
        # (stack top bytes, inverse, inverse transpose) of the last frame seen
        self._frame_cache = None

    def set_material(self, material: Material):
        if not material.is_energy_conserving():
            logger.warning("Material of %r splits energy %.3g/%.3g/%.3g, which does not sum to 1",
                           self.name, material.absorption, material.reflection,
                           material.transparency)
        self.material = material.copy()

    def set_texture_name(self, name: str):
        self.texture_name = name

    def _primitive(self) -> Optional[str]:
        graph = self.scenegraph
        if graph is None:
            return None
        mesh = graph.meshes.get(self.mesh_name)
        return mesh.primitive if mesh is not None else None

    def _frame(self, top: np.ndarray):
        key = top.tobytes()
        cached = self._frame_cache
        if cached is None or cached[0] != key:
            inverse = np.linalg.inv(top)
            cached = (key, inverse, inverse.T)
            self._frame_cache = cached
        return cached[1], cached[2]

    def draw(self, context, stack: MatrixStack):
        graph = self.scenegraph
        if graph is not None and self.mesh_name in graph.meshes:
            context.draw_mesh(self.mesh_name, self.material, self.texture_name, stack.peek())

    def find_lights(self, stack: MatrixStack) -> List[Light]:
        return self.transformed_lights(stack)

    def ray_intersect(self, ray: Ray, stack: MatrixStack) -> Optional[HitRecord]:
        primitive = self._primitive()
        if primitive is None:
            return None

        top = stack.peek()
        inverse, normal_matrix = self._frame(top)
        local = ray.transformed(inverse)
        hit = solve(primitive, local.start, local.direction)
        if hit is None:
            return None

        t, px, py, pz, nx, ny, nz, u, v, incoming = hit
        point = top @ np.array([px, py, pz, 1.0])
        normal = normal_matrix @ np.array([nx, ny, nz, 0.0])
        normal[3] = 0.0
        normal = normalize(normal)
        return HitRecord(time=t, point=point, normal=normal, material=self.material,
                         texture_name=self.texture_name, uv=UV(u, v), incoming=bool(incoming))

    def clone(self) -> "LeafNode":
        result = LeafNode(self.mesh_name, self.name, self.scenegraph)
        result.material = self.material.copy()
        result.texture_name = self.texture_name
        self._clone_lights_into(result)
        return result
