"""Shared fixtures for the ray tracer tests.

Scene graphs only hold weak references from nodes back to the graph, so tests
keep the Scenegraph returned by ``build_graph`` alive for as long as they
query its nodes.
"""

import pytest


@pytest.fixture
def identity_stack():
    """A matrix stack holding only the identity (camera at the world origin)."""
    from core.matrix import identity
    from core.stack import MatrixStack

    return MatrixStack(identity())


@pytest.fixture
def build_graph():
    """Factory: wrap a node tree in a Scenegraph knowing all four primitives."""
    from geometry.primitives import PRIMITIVES
    from scenegraph.scenegraph import Scenegraph

    def _build(root, meshes=PRIMITIVES):
        graph = Scenegraph()
        for name in meshes:
            graph.add_mesh(name, f"models/{name}.obj")
        graph.make_scenegraph(root)
        return graph

    return _build


@pytest.fixture
def make_leaf():
    """Factory: a leaf node for a mesh with an optional material."""
    from scenegraph.leaf_node import LeafNode

    def _make(mesh_name, material=None, name=None):
        node = LeafNode(mesh_name, name or mesh_name)
        if material is not None:
            node.set_material(material)
        return node

    return _make


@pytest.fixture
def make_transform():
    """Factory: a transform node with the given matrix wrapping child."""
    from scenegraph.transform_node import TransformNode

    def _make(child, matrix, name="t"):
        node = TransformNode(name)
        node.set_transform(matrix)
        node.add_child(child)
        return node

    return _make


@pytest.fixture
def scenes_dir():
    """Directory holding the sample scene files shipped with the project."""
    from pathlib import Path

    return Path(__file__).resolve().parent.parent / "scenes"
