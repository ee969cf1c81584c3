# scenegraph/node.py
import weakref
from typing import List, Optional
from core.ray import Ray
from core.stack import MatrixStack
from geometry.hittable import HitRecord
from materials.light import Light

class Node:
    """
    Shared state of the three node kinds (transform, group and leaf): a name,
    attached lights, and non-owning references to the parent node and the
    scene graph. Children are owned by their parent; the scene graph owns the
    root only.

    Subclasses implement draw, find_lights, ray_intersect, clone and get_node.
    A draw context is any object with
    draw_mesh(mesh_name, material, texture_name, transform).
    """
    def __init__(self, name: str, scenegraph=None):
        self.name = name
        self.lights: List[Light] = []
        self._parent = None
        self._scenegraph = weakref.ref(scenegraph) if scenegraph is not None else None

    @property
    def parent(self) -> Optional["Node"]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional["Node"]):
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def scenegraph(self):
        return self._scenegraph() if self._scenegraph is not None else None

    def set_scenegraph(self, graph):
        """
        Points this node at graph and registers it in the graph's name table.
        Nodes with children recurse.
        """
        self._scenegraph = weakref.ref(graph)
        graph.add_node(self.name, self)

    def add_light(self, light: Light):
        self.lights.append(light)

    def transformed_lights(self, stack: MatrixStack) -> List[Light]:
        """Attached lights expressed in the frame at the top of the stack."""
        top = stack.peek()
        return [light.transformed(top) for light in self.lights]

    def get_node(self, name: str) -> Optional["Node"]:
        return self if self.name == name else None

    def draw(self, context, stack: MatrixStack):
        raise NotImplementedError("draw() must be implemented by subclasses.")

    def find_lights(self, stack: MatrixStack) -> List[Light]:
        raise NotImplementedError("find_lights() must be implemented by subclasses.")

    def ray_intersect(self, ray: Ray, stack: MatrixStack) -> Optional[HitRecord]:
        raise NotImplementedError("ray_intersect() must be implemented by subclasses.")

    def clone(self) -> "Node":
        raise NotImplementedError("clone() must be implemented by subclasses.")

    def _clone_lights_into(self, other: "Node"):
        for light in self.lights:
            copy = Light(light.ambient, light.diffuse, light.specular)
            copy.position = light.position.copy()
            copy.spot_direction = light.spot_direction.copy()
            copy.spot_cutoff = light.spot_cutoff
            other.add_light(copy)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
