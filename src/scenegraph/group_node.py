# scenegraph/group_node.py
from typing import List, Optional
from core.ray import Ray
from core.stack import MatrixStack
from geometry.hittable import HitRecord
from materials.light import Light
from scenegraph.node import Node

class GroupNode(Node):
    """
    A logical grouping of any number of children of any kind.
    """
    def __init__(self, name: str = "g", scenegraph=None):
        super().__init__(name, scenegraph)
        self.children: List[Node] = []

    def add_child(self, child: Node):
        self.children.append(child)
        child.parent = self

    def set_scenegraph(self, graph):
        super().set_scenegraph(graph)
        for child in self.children:
            child.set_scenegraph(graph)

    def get_node(self, name: str) -> Optional[Node]:
        if self.name == name:
            return self
        for child in self.children:
            found = child.get_node(name)
            if found is not None:
                return found
        return None

    def draw(self, context, stack: MatrixStack):
        for child in self.children:
            child.draw(context, stack)

    def find_lights(self, stack: MatrixStack) -> List[Light]:
        lights = self.transformed_lights(stack)
        for child in self.children:
            lights.extend(child.find_lights(stack))
        return lights

    def ray_intersect(self, ray: Ray, stack: MatrixStack) -> Optional[HitRecord]:
        closest = None
        for child in self.children:
            rec = child.ray_intersect(ray, stack)
            if rec is not None and (closest is None or rec.time < closest.time):
                closest = rec
        return closest

    def clone(self) -> "GroupNode":
        result = GroupNode(self.name, self.scenegraph)
        self._clone_lights_into(result)
        for child in self.children:
            result.add_child(child.clone())
        return result
