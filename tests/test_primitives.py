"""Unit tests for the object-space primitive solvers.

Tests cover:
- Axis-aligned hits on each primitive, with time, point and normal
- Rays starting inside a solid (exit root, incoming=False)
- Misses, including rays parallel to a slab or the cylinder axis
- Cap versus lateral surface selection for cylinder and cone
- Rejection of the cone's mirrored upper nappe
- Texture coordinates
"""

import math

import pytest


def unpack(hit):
    t, px, py, pz, nx, ny, nz, u, v, incoming = hit
    return t, (px, py, pz), (nx, ny, nz), (u, v), incoming


class TestBox:
    """Tests for the [-0.5, 0.5]^3 box."""

    def test_hit_front_face(self):
        """A ray down -z from (0,0,10) hits z=0.5 at t=9.5 with normal +z."""
        from geometry.primitives import intersect_box

        t, p, n, _, incoming = unpack(intersect_box(0.0, 0.0, 10.0, 0.0, 0.0, -1.0))
        assert abs(t - 9.5) < 1e-9
        assert abs(p[2] - 0.5) < 1e-9
        assert n == (0.0, 0.0, 1.0)
        assert incoming

    def test_parallel_ray_outside_slab_misses(self):
        """Zero direction component with origin outside the slab is a miss."""
        from geometry.primitives import intersect_box

        assert intersect_box(2.0, 0.0, 10.0, 0.0, 0.0, -1.0)[0] < 0.0

    def test_box_behind_ray_misses(self):
        """Both roots negative means no hit."""
        from geometry.primitives import intersect_box

        assert intersect_box(0.0, 0.0, 10.0, 0.0, 0.0, 1.0)[0] < 0.0

    def test_ray_from_inside_uses_exit(self):
        """From the center the far root is reported and incoming is False."""
        from geometry.primitives import intersect_box

        t, p, n, _, incoming = unpack(intersect_box(0.0, 0.0, 0.0, 1.0, 0.0, 0.0))
        assert abs(t - 0.5) < 1e-9
        assert n == (1.0, 0.0, 0.0)
        assert not incoming

    def test_oblique_hit_picks_single_face(self):
        """A diagonal ray into the top face gets the +y normal."""
        from geometry.primitives import intersect_box

        t, p, n, _, _ = unpack(intersect_box(0.1, 5.0, 0.1, 0.0, -1.0, -0.01))
        assert abs(p[1] - 0.5) < 1e-9
        assert n == (0.0, 1.0, 0.0)

    def test_front_face_uv_lands_in_its_cell(self):
        """The center of the +z face maps to the middle of its cross cell."""
        from geometry.primitives import intersect_box

        _, _, _, (u, v), _ = unpack(intersect_box(0.0, 0.0, 10.0, 0.0, 0.0, -1.0))
        assert abs(u - 0.375) < 1e-9
        assert abs(v - 0.375) < 1e-9


class TestSphere:
    """Tests for the radius 0.5 sphere."""

    def test_hit_from_positive_z(self):
        """A ray down -z from (0,0,10) hits (0,0,0.5) at t=9.5."""
        from geometry.primitives import intersect_sphere

        t, p, n, _, incoming = unpack(intersect_sphere(0.0, 0.0, 10.0, 0.0, 0.0, -1.0))
        assert abs(t - 9.5) < 1e-9
        assert p == pytest.approx((0.0, 0.0, 0.5))
        assert n == pytest.approx((0.0, 0.0, 1.0))
        assert incoming

    def test_unnormalized_direction_scales_time(self):
        """Time is measured in units of the direction vector."""
        from geometry.primitives import intersect_sphere

        t = intersect_sphere(0.0, 0.0, 10.0, 0.0, 0.0, -2.0)[0]
        assert abs(t - 4.75) < 1e-9

    def test_miss(self):
        """A ray passing beside the sphere misses."""
        from geometry.primitives import intersect_sphere

        assert intersect_sphere(1.0, 0.0, 10.0, 0.0, 0.0, -1.0)[0] < 0.0

    def test_inside_reports_exit(self):
        """From the center the hit is the exit point."""
        from geometry.primitives import intersect_sphere

        t, p, n, _, incoming = unpack(intersect_sphere(0.0, 0.0, 0.0, 0.0, 1.0, 0.0))
        assert abs(t - 0.5) < 1e-9
        assert n == pytest.approx((0.0, 1.0, 0.0))
        assert not incoming

    def test_uv_of_front_pole(self):
        """The +z point sits at a quarter turn of the azimuth, on the equator."""
        from geometry.primitives import intersect_sphere

        _, _, _, (u, v), _ = unpack(intersect_sphere(0.0, 0.0, 10.0, 0.0, 0.0, -1.0))
        assert abs(u - 0.25) < 1e-9
        assert abs(v - 0.5) < 1e-9


class TestCylinder:
    """Tests for the radius 0.5, unit height cylinder."""

    def test_ray_from_above_hits_top_cap(self):
        """Straight down from above: top cap at y=1 with normal +y."""
        from geometry.primitives import intersect_cylinder

        t, p, n, _, incoming = unpack(intersect_cylinder(0.0, 5.0, 0.0, 0.0, -1.0, 0.0, 1.0))
        assert abs(t - 4.0) < 1e-9
        assert abs(p[1] - 1.0) < 1e-9
        assert n == (0.0, 1.0, 0.0)
        assert incoming

    def test_ray_from_below_hits_bottom_cap(self):
        """Straight up from below: bottom cap with normal -y."""
        from geometry.primitives import intersect_cylinder

        t, p, n, _, _ = unpack(intersect_cylinder(0.0, -5.0, 0.0, 0.0, 1.0, 0.0, 1.0))
        assert abs(t - 5.0) < 1e-9
        assert n == (0.0, -1.0, 0.0)

    def test_side_hit(self):
        """A horizontal ray at half height hits the lateral surface."""
        from geometry.primitives import intersect_cylinder

        t, p, n, (u, v), _ = unpack(intersect_cylinder(10.0, 0.5, 0.0, -1.0, 0.0, 0.0, 1.0))
        assert abs(t - 9.5) < 1e-9
        assert n == pytest.approx((1.0, 0.0, 0.0))
        assert abs(v - 0.5) < 1e-9

    def test_horizontal_ray_above_misses(self):
        """A horizontal ray above the top cap never enters the slab."""
        from geometry.primitives import intersect_cylinder

        assert intersect_cylinder(10.0, 2.0, 0.0, -1.0, 0.0, 0.0, 1.0)[0] < 0.0

    def test_vertical_ray_outside_radius_misses(self):
        """A ray parallel to the axis outside the radius misses."""
        from geometry.primitives import intersect_cylinder

        assert intersect_cylinder(2.0, 5.0, 0.0, 0.0, -1.0, 0.0, 1.0)[0] < 0.0


class TestCone:
    """Tests for the cone with base radius 0.5 at y=0 and apex at y=1."""

    def test_ray_from_below_hits_base(self):
        """Straight up through the axis hits the base cap first."""
        from geometry.primitives import intersect_cone

        t, p, n, _, _ = unpack(intersect_cone(0.0, -5.0, 0.0, 0.0, 1.0, 0.0, 1.0))
        assert abs(t - 5.0) < 1e-9
        assert n == (0.0, -1.0, 0.0)

    def test_side_hit_at_half_height(self):
        """At y=0.5 the radius is 0.25; the normal leans upward."""
        from geometry.primitives import intersect_cone

        t, p, n, _, _ = unpack(intersect_cone(10.0, 0.5, 0.0, -1.0, 0.0, 0.0, 1.0))
        assert abs(t - 9.75) < 1e-9
        assert n[0] > 0.0 and n[1] > 0.0
        assert abs(math.sqrt(sum(c * c for c in n)) - 1.0) < 1e-9

    def test_upper_nappe_rejected(self):
        """A vertical ray from above passes the mirrored nappe and hits the real cone."""
        from geometry.primitives import intersect_cone

        t, p, n, _, _ = unpack(intersect_cone(0.2, 5.0, 0.0, 0.0, -1.0, 0.0, 1.0))
        assert abs(t - 4.4) < 1e-9
        assert abs(p[1] - 0.6) < 1e-9
        assert n[1] > 0.0

    def test_vertical_ray_outside_base_misses(self):
        """Outside the base radius a vertical ray only meets the upper nappe."""
        from geometry.primitives import intersect_cone

        assert intersect_cone(1.0, 5.0, 0.0, 0.0, -1.0, 0.0, 1.0)[0] < 0.0

    def test_horizontal_ray_above_apex_misses(self):
        """Above the apex nothing of the real cone can be hit."""
        from geometry.primitives import intersect_cone

        assert intersect_cone(10.0, 1.5, 0.0, -1.0, 0.0, 0.0, 1.0)[0] < 0.0


class TestSolve:
    """Tests for the name based dispatch."""

    def test_known_primitive(self):
        """solve() forwards to the matching solver."""
        import numpy as np

        from geometry.primitives import solve

        hit = solve("sphere", np.array([0.0, 0.0, 10.0, 1.0]), np.array([0.0, 0.0, -1.0, 0.0]))
        assert hit is not None
        assert abs(hit[0] - 9.5) < 1e-9

    def test_unknown_primitive_is_a_miss(self):
        """Unrecognised mesh names yield no hit rather than an error."""
        import numpy as np

        from geometry.primitives import solve

        assert solve("teapot", np.array([0.0, 0.0, 10.0, 1.0]), np.array([0.0, 0.0, -1.0, 0.0])) is None
