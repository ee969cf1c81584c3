# scenegraph/scenegraph.py
import logging
import os
import weakref
from typing import Dict, List, Optional
import numpy as np
from core.ray import Ray
from core.stack import MatrixStack
from geometry.hittable import HitRecord
from materials.light import Light
from materials.texture_loader import load_textures
from materials.textures import Texture
from scenegraph.mesh import MeshInstance
from scenegraph.node import Node
from scenegraph.transform_node import TransformNode

logger = logging.getLogger(__name__)

class Scenegraph:
    """
    Owns the root of the node tree, the mesh and texture registries and a
    name -> node lookup table.

    Building happens in two phases: the importer registers meshes and texture
    paths while it constructs the tree, then load_resources() blocks until
    every texture is decoded. Rendering a graph with textures still pending
    is an error.
    """
    def __init__(self):
        self.root: Optional[Node] = None
        self.meshes: Dict[str, MeshInstance] = {}
        self.texture_paths: Dict[str, str] = {}
        self.textures: Dict[str, Texture] = {}
        # Non-owning: entries vanish with the nodes they point to
        self._nodes = weakref.WeakValueDictionary()

    def make_scenegraph(self, root: Node):
        """
        Sets the root and lets every node of the tree register itself.
        """
        self.root = root
        root.set_scenegraph(self)

    def add_node(self, name: str, node: Node):
        self._nodes[name] = node

    @property
    def nodes(self) -> Dict[str, Node]:
        return dict(self._nodes)

    def get_node(self, name: str) -> Optional[Node]:
        node = self._nodes.get(name)
        if node is None and self.root is not None:
            node = self.root.get_node(name)
        return node

    def add_mesh(self, name: str, path: str = ""):
        self.meshes[name] = MeshInstance(name, path)

    def add_texture(self, name: str, path: str):
        """Registers a texture to be decoded by load_resources()."""
        self.texture_paths[name] = path

    def add_texture_object(self, name: str, texture: Texture):
        """Registers an already decoded texture."""
        self.textures[name] = texture

    def get_texture(self, name: str) -> Optional[Texture]:
        if not name:
            return None
        return self.textures.get(name)

    @property
    def pending_textures(self) -> List[str]:
        return [name for name in self.texture_paths if name not in self.textures]

    def is_ready(self) -> bool:
        return self.root is not None and not self.pending_textures

    def load_resources(self, base_path: str = "", max_workers: Optional[int] = None):
        """
        Decodes every pending texture concurrently and returns when all are done.
        Relative paths are resolved against base_path.
        """
        pending = {}
        for name in self.pending_textures:
            path = self.texture_paths[name]
            if base_path and not os.path.isabs(path):
                path = os.path.join(base_path, path)
            pending[name] = path
        self.textures.update(load_textures(pending, max_workers=max_workers))
        logger.info("Scene resources ready: %d meshes, %d textures",
                    len(self.meshes), len(self.textures))

    def draw(self, context, stack: MatrixStack):
        if self.root is not None:
            self.root.draw(context, stack)

    def find_lights(self, stack: MatrixStack) -> List[Light]:
        if self.root is None:
            return []
        return self.root.find_lights(stack)

    def ray_intersect(self, ray: Ray, stack: MatrixStack) -> Optional[HitRecord]:
        if self.root is None:
            return None
        return self.root.ray_intersect(ray, stack)

    def set_animation_transform(self, name: str, matrix: np.ndarray):
        """
        Entry point for an external animation driver, between frames only.
        """
        node = self.get_node(name)
        if node is None:
            raise KeyError(f"No node named {name!r} in the scene graph")
        if not isinstance(node, TransformNode):
            raise TypeError(f"Node {name!r} is a {type(node).__name__}, not a transform")
        node.set_animation_transform(matrix)
