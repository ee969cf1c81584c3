"""Unit tests for matrix helpers and the pinhole camera.

Tests cover:
- Rotation, translation and post-multiplication order
- Normal matrix under non-uniform scale
- look_at view matrices
- Camera image plane distance and primary rays
"""

import math

import numpy as np
import pytest


class TestMatrix:
    """Tests for core.matrix."""

    def test_rotation_about_z(self):
        from core.matrix import point, rotation_matrix

        p = rotation_matrix(math.pi / 2, [0, 0, 1]) @ point(1, 0, 0)
        assert np.allclose(p, [0, 1, 0, 1])

    def test_zero_axis_is_identity(self):
        from core.matrix import rotation_matrix

        assert np.allclose(rotation_matrix(1.0, [0, 0, 0]), np.eye(4))

    def test_post_multiply_applies_last_call_first(self):
        """translate then scale scales the object first, then moves it."""
        from core import matrix

        m = matrix.scale(matrix.translate(matrix.identity(), [1, 0, 0]), [2, 2, 2])
        assert np.allclose(m @ matrix.point(1, 0, 0), [3, 0, 0, 1])

    def test_vectors_ignore_translation(self):
        from core import matrix

        m = matrix.translation_matrix([5, 5, 5])
        assert np.allclose(m @ matrix.vector(0, 1, 0), [0, 1, 0, 0])

    def test_normal_matrix_under_scale(self):
        from core import matrix

        n = matrix.normal_matrix(matrix.scale_matrix([2, 1, 1])) @ matrix.vector(1, 1, 0)
        assert np.allclose(matrix.normalize(n[0:3]), np.array([0.5, 1.0, 0.0]) / math.sqrt(1.25))

    def test_look_at_moves_target_onto_negative_z(self):
        from core.matrix import look_at, point

        view = look_at([0, 0, 10], [0, 0, 0], [0, 1, 0])
        assert np.allclose(view @ point(0, 0, 0), [0, 0, -10, 1])
        assert np.allclose(view @ point(0, 0, 10), [0, 0, 0, 1])

    def test_look_at_from_the_side(self):
        from core.matrix import look_at, point

        view = look_at([10, 0, 0], [0, 0, 0], [0, 1, 0])
        assert np.allclose(view @ point(0, 0, 0), [0, 0, -10, 1])
        assert np.allclose(view @ point(10, 1, 0), [0, 1, 0, 1])


class TestCamera:
    """Tests for camera.camera.Camera."""

    def test_distance_to_plane(self):
        from camera.camera import Camera

        assert Camera().distance_to_plane(100) == pytest.approx(50.0)

    def test_narrower_fov_moves_plane_away(self):
        from camera.camera import Camera

        assert Camera(fov=math.radians(60)).distance_to_plane(100) == pytest.approx(50 * math.sqrt(3))

    def test_center_ray(self):
        from camera.camera import Camera

        ray = Camera().primary_ray(50, 50, 100, 100)
        assert np.allclose(ray.start, [0, 0, 0, 1])
        assert np.allclose(ray.direction, [0, 0, -50, 0])

    def test_bottom_left_ray(self):
        from camera.camera import Camera

        ray = Camera().primary_ray(0, 0, 8, 4)
        assert np.allclose(ray.direction, [-4, -2, -2, 0])

    def test_default_view_is_identity(self):
        from camera.camera import Camera

        assert np.allclose(Camera().view_matrix(), np.eye(4))


class TestRenderSettings:
    """Tests for renderer.settings."""

    def test_quality_preset(self):
        from renderer.settings import RenderSettings

        settings = RenderSettings.for_quality("interactive", 400, 300)
        assert (settings.width, settings.height, settings.max_depth) == (200, 150, 2)

    def test_overrides_win(self):
        from renderer.settings import RenderSettings

        settings = RenderSettings.for_quality("balanced", 100, 100, max_depth=1, workers=3)
        assert settings.max_depth == 1 and settings.workers == 3 and settings.width == 75

    def test_unknown_quality(self):
        from renderer.settings import RenderSettings

        with pytest.raises(ValueError):
            RenderSettings.for_quality("cinematic", 10, 10)
