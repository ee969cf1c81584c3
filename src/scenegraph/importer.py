# scenegraph/importer.py
"""
Builds a Scenegraph from a JSON scene description.

    {
      "instances": [{"name": "box", "path": "models/box.obj"}],
      "images": [{"name": "checker", "path": "textures/checker.png"}],
      "root": {
        "type": "transform", "name": "floor",
        "transform": [{"scale": [10, 0.1, 10]}, {"rotate": [45, 0, 1, 0]}],
        "child": {"type": "object", "instanceof": "box", "texture": "checker",
                  "material": {"ambient": [...], "diffuse": [...],
                               "specular": [...], "shininess": 10}},
        "lights": [{"ambient": [...], "diffuse": [...], "specular": [...],
                    "position": [0, 10, 0],
                    "spotdirection": [0, -1, 0], "spotcutoff": 30}]
      }
    }

Transform ops apply in list order, each post-multiplying the accumulated
matrix. Rotation angles and spot cutoffs are in degrees.
"""
import json
import logging
import math
import os
from typing import Any, Dict, List, Sequence
import numpy as np
from core import matrix
from materials.light import Light
from materials.material import Material
from materials.presets import MaterialPresets
from scenegraph.group_node import GroupNode
from scenegraph.leaf_node import LeafNode
from scenegraph.node import Node
from scenegraph.scenegraph import Scenegraph
from scenegraph.transform_node import TransformNode

logger = logging.getLogger(__name__)

class SceneFormatError(ValueError):
    """Raised when a scene description cannot be turned into a scene graph."""

def _require(obj: Dict[str, Any], key: str, what: str):
    if key not in obj:
        raise SceneFormatError(f"Missing {key!r} in {what}")
    return obj[key]

def _entries(values: Any, what: str) -> List[Dict[str, Any]]:
    if not isinstance(values, list):
        raise SceneFormatError(f"{what} must be a list, got {values!r}")
    for entry in values:
        if not isinstance(entry, dict):
            raise SceneFormatError(f"Entry of {what} must be an object, got {entry!r}")
    return values

def _numbers(values: Any, count: int, what: str) -> List[float]:
    if not isinstance(values, (list, tuple)):
        raise SceneFormatError(f"{what} must be a list of numbers, got {values!r}")
    if len(values) != count:
        raise SceneFormatError(f"{count} values needed for {what}, got {len(values)}")
    try:
        return [float(v) for v in values]
    except (TypeError, ValueError) as e:
        raise SceneFormatError(f"Non-numeric value in {what}: {values!r}") from e

def _color(obj: Dict[str, Any], key: str, what: str) -> List[float]:
    if key not in obj:
        return [0.0, 0.0, 0.0]
    values = obj[key]
    # 4-component colors carry an alpha that shading ignores
    if isinstance(values, (list, tuple)) and len(values) == 4:
        values = values[0:3]
    return _numbers(values, 3, f"{what} {key}")

def _vec3(values: Sequence, what: str) -> List[float]:
    # positions may be written homogeneous; the w is implied by the key
    if isinstance(values, (list, tuple)) and len(values) == 4:
        values = values[0:3]
    return _numbers(values, 3, what)

MATERIAL_PRESETS = {
    "matte": MaterialPresets.matte,
    "plastic": MaterialPresets.plastic,
    "mirror": MaterialPresets.mirror,
    "glass": MaterialPresets.glass,
}

def parse_material(obj: Dict[str, Any]) -> Material:
    if "preset" in obj:
        preset = obj["preset"]
        if preset not in MATERIAL_PRESETS:
            raise SceneFormatError(f"Unknown material preset {preset!r}; choose from {sorted(MATERIAL_PRESETS)}")
        return MATERIAL_PRESETS[preset]()
    if "color" in obj:
        return Material(ambient=_color(obj, "color", "material"))
    return Material(
        ambient=_color(obj, "ambient", "material"),
        diffuse=_color(obj, "diffuse", "material"),
        specular=_color(obj, "specular", "material"),
        emission=_color(obj, "emission", "material"),
        shininess=float(obj.get("shininess", 0.0)),
        absorption=float(obj.get("absorption", 1.0)),
        reflection=float(obj.get("reflection", 0.0)),
        transparency=float(obj.get("transparency", 0.0)),
        refractive_index=float(obj.get("refractive_index", 1.0)),
    )

def parse_light(obj: Dict[str, Any]) -> Light:
    light = Light(_color(obj, "ambient", "light"),
                  _color(obj, "diffuse", "light"),
                  _color(obj, "specular", "light"))
    if "direction" in obj:
        light.set_direction(_vec3(obj["direction"], "light direction"))
    elif "position" in obj:
        light.set_position(_vec3(obj["position"], "light position"))
    if "spotdirection" in obj:
        light.set_spot_direction(_vec3(obj["spotdirection"], "light spotdirection"))
        cutoff = _require(obj, "spotcutoff", "spot light")
        light.set_spot_angle(math.radians(float(cutoff)))
    return light

def parse_transform_ops(ops: Any) -> np.ndarray:
    if not isinstance(ops, list):
        raise SceneFormatError(f"Transform must be a list of operations, got {ops!r}")
    result = matrix.identity()
    for op in ops:
        if not isinstance(op, dict):
            raise SceneFormatError(f"Transform operation must be an object, got {op!r}")
        if "translate" in op:
            result = matrix.translate(result, _numbers(op["translate"], 3, "translate"))
        elif "scale" in op:
            result = matrix.scale(result, _numbers(op["scale"], 3, "scale"))
        elif "rotate" in op:
            values = _numbers(op["rotate"], 4, "rotate")
            result = matrix.rotate(result, math.radians(values[0]), values[1:4])
        else:
            raise SceneFormatError(f"Unknown transform operation {op!r}")
    return result

class SceneImporter:
    """
    Turns a parsed JSON document into a Scenegraph. Construction fails fast:
    the first problem raises SceneFormatError and no graph is returned.
    """
    def __init__(self):
        self.scenegraph = Scenegraph()
        self.node_count = 0

    def build(self, document: Dict[str, Any]) -> Scenegraph:
        if not isinstance(document, dict):
            raise SceneFormatError("Scene description must be a JSON object")
        instances = _entries(_require(document, "instances", "scene description"), "instances")
        for instance in instances:
            name = _require(instance, "name", "instance")
            self.scenegraph.add_mesh(name, instance.get("path", ""))
        for image in _entries(document.get("images", []), "images"):
            self.scenegraph.add_texture(_require(image, "name", "image"),
                                        _require(image, "path", "image"))

        root = self.handle_node(_require(document, "root", "scene description"))
        self.scenegraph.make_scenegraph(root)
        logger.info("Built scene graph: %d nodes, %d mesh instances, %d texture(s) pending",
                    self.node_count, len(self.scenegraph.meshes),
                    len(self.scenegraph.pending_textures))
        return self.scenegraph

    def handle_node(self, obj: Dict[str, Any]) -> Node:
        if not isinstance(obj, dict):
            raise SceneFormatError(f"Node description must be an object, got {obj!r}")
        node_type = _require(obj, "type", "node")
        if node_type == "transform":
            node = self.handle_transform(obj)
        elif node_type == "group":
            node = self.handle_group(obj)
        elif node_type == "object":
            node = self.handle_object(obj)
        else:
            raise SceneFormatError(f"Unknown node type {node_type!r}")

        for light_obj in _entries(obj.get("lights", []), "lights"):
            node.add_light(parse_light(light_obj))
        self.node_count += 1
        return node

    def handle_transform(self, obj: Dict[str, Any]) -> TransformNode:
        node = TransformNode(obj.get("name", "t"), self.scenegraph)
        child_obj = _require(obj, "child", "transform node")
        ops = _require(obj, "transform", "transform node")
        node.set_transform(parse_transform_ops(ops))
        node.add_child(self.handle_node(child_obj))
        return node

    def handle_group(self, obj: Dict[str, Any]) -> GroupNode:
        node = GroupNode(obj.get("name", "g"), self.scenegraph)
        for child in obj.get("children", []):
            node.add_child(self.handle_node(child))
        return node

    def handle_object(self, obj: Dict[str, Any]) -> LeafNode:
        mesh_name = _require(obj, "instanceof", "object node")
        node = LeafNode(mesh_name, obj.get("name", "g"), self.scenegraph)
        if mesh_name not in self.scenegraph.meshes:
            logger.warning("Object %r refers to unknown instance %r; it will not be rendered",
                           node.name, mesh_name)
        if "material" in obj:
            node.set_material(parse_material(obj["material"]))
        if "texture" in obj:
            node.set_texture_name(obj["texture"])
        return node

def parse_scene(document: Dict[str, Any]) -> Scenegraph:
    """Builds a scene graph from an already decoded JSON document."""
    return SceneImporter().build(document)

def import_scene(text: str) -> Scenegraph:
    """Builds a scene graph from JSON text."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise SceneFormatError(f"Invalid JSON: {e}") from e
    return parse_scene(document)

def load_scene(path: str, load_resources: bool = True, max_workers=None) -> Scenegraph:
    """
    Reads a scene file and, unless told otherwise, waits for its textures.
    Texture paths are relative to the scene file.
    """
    with open(path, "r", encoding="utf-8") as f:
        scenegraph = import_scene(f.read())
    if load_resources:
        scenegraph.load_resources(os.path.dirname(os.path.abspath(path)), max_workers=max_workers)
    return scenegraph
