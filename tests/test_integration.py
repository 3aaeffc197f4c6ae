"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from world construction through
final image output. It verifies that all components work together correctly
and that the output meets basic quality criteria.

Tests are designed to be fast (low resolution) while still exercising the
full pipeline.
"""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
from PIL import Image as PILImage

from spheretrace.camera.wall import WallCamera, render
from spheretrace.core.color import Color
from spheretrace.preview.export import save_png
from spheretrace.scene.world import World, default_world, single_sphere_world


class TestSingleSphereIntegration:
    """Integration tests for rendering the single sphere scene."""

    def test_output_is_finite(self) -> None:
        """Test the rendered image contains no NaN or Inf."""
        canvas = render(single_sphere_world(), WallCamera(width=24, height=24))
        image = canvas.to_array()
        assert not np.any(np.isnan(image))
        assert not np.any(np.isinf(image))

    def test_image_is_green_only(self) -> None:
        """Test a pure green material under a white light has no red or blue
        apart from the specular highlight."""
        canvas = render(single_sphere_world(), WallCamera(width=24, height=24))
        image = canvas.to_array()
        assert np.any(image[:, :, 1] > 0.0)
        # Red and blue come only from the white specular term, never exceed green
        assert np.all(image[:, :, 0] <= image[:, :, 1] + 1e-6)
        assert np.all(image[:, :, 2] <= image[:, :, 1] + 1e-6)

    def test_light_side_is_brighter(self) -> None:
        """Test the upper-left quadrant, facing the light, is brightest."""
        canvas = render(single_sphere_world(), WallCamera(width=32, height=32))
        green = canvas.to_array()[:, :, 1]
        upper_left = green[:16, :16].sum()
        lower_right = green[16:, 16:].sum()
        assert upper_left > lower_right

    def test_save_png(self, tmp_path: Path) -> None:
        """Test rendering then exporting produces a valid PNG."""
        canvas = render(single_sphere_world(), WallCamera(width=16, height=12))
        filepath = tmp_path / "single.png"
        save_png(canvas, filepath)

        img = PILImage.open(filepath)
        assert img.size == (16, 12)
        assert img.mode == "RGB"


class TestSceneFileIntegration:
    """Integration tests for worlds loaded from JSON."""

    def test_json_world_renders_identically(self, tmp_path: Path) -> None:
        """Test a world saved to JSON and loaded back renders identically."""
        world = default_world()
        scene_file = tmp_path / "world.json"
        scene_file.write_text(json.dumps(world.to_dict()))

        loaded = World.from_dict(json.loads(scene_file.read_text()))
        camera = WallCamera(width=12, height=12)
        original = render(world, camera, background=Color(0.1, 0.1, 0.1)).to_array()
        reloaded = render(loaded, camera, background=Color(0.1, 0.1, 0.1)).to_array()
        assert np.allclose(original, reloaded)
