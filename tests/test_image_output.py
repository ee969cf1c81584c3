"""Tests for image output, tone mapping and the command line entry point.

Tests cover:
- 8-bit conversion and clamping
- Saving images with Pillow
- Tone mapping ranges
- Rendering the bundled scene through main()
"""

import numpy as np
import pytest


class TestToneMapping:
    """Tests for renderer.tone_mapping."""

    def test_to_uint8_clamps(self):
        from renderer.tone_mapping import to_uint8

        out = to_uint8(np.array([[[-1.0, 0.5, 2.0]]]))
        assert out.dtype == np.uint8
        assert out.tolist() == [[[0, 128, 255]]]

    def test_reinhard_range(self):
        from renderer.tone_mapping import reinhard_tone_mapping

        out = reinhard_tone_mapping(np.array([[[0.0, 1.0, 100.0]]]))
        assert out.min() >= 0.0 and out.max() <= 1.0
        assert out[0, 0, 0] == 0.0

    def test_reinhard_keeps_white_bright(self):
        """A saturated image stays at full brightness instead of dimming to gray."""
        from renderer.tone_mapping import reinhard_tone_mapping

        assert np.allclose(reinhard_tone_mapping(np.ones((1, 1, 3))), 1.0)

    def test_reinhard_compresses_highlights(self):
        """The brightest value maps to 1 and dimmer ones keep their order below it."""
        from renderer.tone_mapping import reinhard_tone_mapping

        out = reinhard_tone_mapping(np.array([[[0.5, 1.0, 4.0]]]))
        assert out[0, 0, 2] == pytest.approx(1.0)
        assert 0.0 < out[0, 0, 0] < out[0, 0, 1] < 1.0

    def test_auto_exposure_on_black(self):
        from renderer.tone_mapping import auto_exposure_tone_mapping

        out = auto_exposure_tone_mapping(np.zeros((2, 2, 3)))
        assert np.allclose(out, 0.0)


class TestSaveImage:
    """Tests for renderer.image_output.save_image."""

    def test_round_trip(self, tmp_path):
        from PIL import Image
        from renderer.image_output import save_image

        image = np.zeros((2, 3, 3))
        image[0, 0] = [1.0, 0.0, 0.0]
        path = tmp_path / "out" / "image.png"
        save_image(image, str(path))

        with Image.open(path) as img:
            assert img.size == (3, 2)
            assert img.getpixel((0, 0)) == (255, 0, 0)
            assert img.getpixel((2, 1)) == (0, 0, 0)


class TestMain:
    """Tests for the command line entry point."""

    def test_renders_sample_scene(self, tmp_path, scenes_dir):
        from PIL import Image
        from main import main

        out = tmp_path / "spheres.png"
        code = main([str(scenes_dir / "spheres.json"), "-o", str(out),
                     "--width", "16", "--height", "12", "--depth", "2", "--workers", "2"])
        assert code == 0
        with Image.open(out) as img:
            assert img.size == (16, 12)

    def test_quality_preset_scales_output(self, tmp_path, scenes_dir):
        from PIL import Image
        from main import main

        out = tmp_path / "small.png"
        code = main([str(scenes_dir / "spheres.json"), "-o", str(out), "--width", "20",
                     "--height", "16", "--quality", "interactive", "--tone-map", "reinhard"])
        assert code == 0
        with Image.open(out) as img:
            assert img.size == (10, 8)

    def test_missing_scene_fails(self, tmp_path):
        from main import main

        out = tmp_path / "never.png"
        assert main([str(tmp_path / "missing.json"), "-o", str(out)]) == 1
        assert not out.exists()

    def test_malformed_scene_fails(self, tmp_path):
        from main import main

        scene = tmp_path / "bad.json"
        scene.write_text('{"instances": [], "root": {"type": "sphere"}}')
        assert main([str(scene), "-o", str(tmp_path / "bad.png")]) == 1

    def test_unwritable_output_fails(self, tmp_path, scenes_dir):
        """A failed save is logged and reported through the exit status."""
        from main import main

        taken = tmp_path / "taken.png"
        taken.mkdir()
        code = main([str(scenes_dir / "spheres.json"), "-o", str(taken),
                     "--width", "4", "--height", "4", "--depth", "0"])
        assert code == 1

    def test_unknown_output_format_fails(self, tmp_path, scenes_dir):
        from main import main

        code = main([str(scenes_dir / "spheres.json"), "-o", str(tmp_path / "render.nope"),
                     "--width", "4", "--height", "4", "--depth", "0"])
        assert code == 1

    def test_build_settings(self):
        import math
        from main import build_settings, parse_args

        settings = build_settings(parse_args(["scene.json", "--fov", "60", "--depth", "3"]))
        assert settings.max_depth == 3
        assert settings.fov == pytest.approx(math.radians(60))
