# scenegraph/transform_node.py
from typing import List, Optional
import numpy as np
from core.matrix import identity
from core.ray import Ray
from core.stack import MatrixStack
from geometry.hittable import HitRecord
from materials.light import Light
from scenegraph.node import Node

class TransformNode(Node):
    """
    Changes from its only child's coordinate system to its parent's.

    The static transform and the animation transform are stored separately so
    an animation driver can update one without touching the other. Visiting
    the child uses top @ animation @ transform: the static transform applies
    to the child first, the animation on top of it.
    """
    def __init__(self, name: str = "t", scenegraph=None):
        super().__init__(name, scenegraph)
        self.transform = identity()
        self.animation_transform = identity()
        self.child: Optional[Node] = None

    def set_transform(self, matrix: np.ndarray):
        self.transform = np.array(matrix, dtype=np.float64)

    def set_animation_transform(self, matrix: np.ndarray):
        self.animation_transform = np.array(matrix, dtype=np.float64)

    def add_child(self, child: Node):
        if self.child is not None:
            raise ValueError(f"Transform node {self.name!r} already has a child")
        self.child = child
        child.parent = self

    def set_child(self, child: Node):
        """Replaces the current child, if any."""
        if self.child is not None:
            self.child.parent = None
        self.child = None
        self.add_child(child)
        graph = self.scenegraph
        if graph is not None:
            child.set_scenegraph(graph)

    def composed(self, top: np.ndarray) -> np.ndarray:
        return top @ self.animation_transform @ self.transform

    def set_scenegraph(self, graph):
        super().set_scenegraph(graph)
        if self.child is not None:
            self.child.set_scenegraph(graph)

    def get_node(self, name: str) -> Optional[Node]:
        if self.name == name:
            return self
        if self.child is not None:
            return self.child.get_node(name)
        return None

    def draw(self, context, stack: MatrixStack):
        stack.push(self.composed(stack.peek()))
        try:
            if self.child is not None:
                self.child.draw(context, stack)
        finally:
            stack.pop()

    def find_lights(self, stack: MatrixStack) -> List[Light]:
        stack.push(self.composed(stack.peek()))
        try:
            lights = self.transformed_lights(stack)
            if self.child is not None:
                lights.extend(self.child.find_lights(stack))
        finally:
            stack.pop()
        return lights

    def ray_intersect(self, ray: Ray, stack: MatrixStack) -> Optional[HitRecord]:
        # The leaf below maps the ray through the full accumulated matrix,
        # so only the frame needs to be pushed here.
        if self.child is None:
            return None
        stack.push(self.composed(stack.peek()))
        try:
            return self.child.ray_intersect(ray, stack)
        finally:
            stack.pop()

    def clone(self) -> "TransformNode":
        result = TransformNode(self.name, self.scenegraph)
        result.set_transform(self.transform)
        result.set_animation_transform(self.animation_transform)
        self._clone_lights_into(result)
        if self.child is not None:
            result.add_child(self.child.clone())
        return result
