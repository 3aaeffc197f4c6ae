"""Tests for the preview module.

This module tests the preview/canvas, preview/display and preview/export
functionality including:
- Canvas pixel access and bounds checks
- Tone mapping functions (Reinhard, exposure)
- Gamma correction
- 8-bit quantization and PNG export

Note: Tests avoid displaying actual windows by not calling show_preview
in automated tests. The processing functions are tested directly.
"""

import numpy as np
import pytest
from PIL import Image as PILImage

from spheretrace.core.color import Color


class TestCanvas:
    """Test the float framebuffer."""

    def test_new_canvas_is_black(self):
        """Test that every pixel starts black."""
        from spheretrace.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        assert canvas.width == 10
        assert canvas.height == 20
        assert np.all(canvas.to_array() == 0.0)

    def test_array_shape_is_height_width(self):
        """Test the array is laid out as (H, W, 3)."""
        from spheretrace.preview.canvas import Canvas

        assert Canvas(10, 20).to_array().shape == (20, 10, 3)

    def test_set_and_get_pixel(self):
        """Test writing then reading a pixel."""
        from spheretrace.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        canvas.set_pixel(2, 3, Color(1.0, 0.0, 0.0))
        assert canvas.get_pixel(2, 3) == Color.red()
        assert canvas.get_pixel(3, 2) == Color.black()

    def test_keeps_unclamped_values(self):
        """Test the canvas stores values above 1 unchanged."""
        from spheretrace.preview.canvas import Canvas

        canvas = Canvas(2, 2)
        canvas.set_pixel(0, 0, Color(1.9, 1.9, 1.9))
        assert canvas.get_pixel(0, 0).r == pytest.approx(1.9, abs=1e-6)

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (10, 0), (0, 20)])
    def test_out_of_bounds_raises(self, x, y):
        """Test that pixel access outside the canvas raises IndexError."""
        from spheretrace.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        with pytest.raises(IndexError):
            canvas.set_pixel(x, y, Color.white())
        with pytest.raises(IndexError):
            canvas.get_pixel(x, y)

    def test_invalid_size_raises(self):
        """Test that a non-positive size raises ValueError."""
        from spheretrace.preview.canvas import Canvas

        with pytest.raises(ValueError):
            Canvas(0, 10)

    def test_fill(self):
        """Test filling every pixel."""
        from spheretrace.preview.canvas import Canvas

        canvas = Canvas(3, 3)
        canvas.fill(Color(0.2, 0.4, 0.6))
        assert canvas.get_pixel(2, 2) == Color(0.2, 0.4, 0.6)

    def test_to_uint8_clamps(self):
        """Test quantization clamps out-of-range colors."""
        from spheretrace.preview.canvas import Canvas

        canvas = Canvas(3, 1)
        canvas.set_pixel(0, 0, Color(1.5, 0.0, -0.5))
        canvas.set_pixel(1, 0, Color(0.5, 0.5, 0.5))
        result = canvas.to_uint8()
        assert result.dtype == np.uint8
        assert result[0, 0].tolist() == [255, 0, 0]
        assert result[0, 1].tolist() == [128, 128, 128]


class TestToneMapping:
    """Test Reinhard and exposure tone mapping."""

    def test_reinhard_formula(self):
        """Test Reinhard formula: L / (1 + L)."""
        from spheretrace.preview.display import tone_map_reinhard

        for val in [0.0, 0.5, 1.0, 1.9, 10.0]:
            image = np.full((2, 2, 3), val, dtype=np.float32)
            assert np.allclose(tone_map_reinhard(image), val / (1.0 + val), atol=1e-6)

    def test_reinhard_handles_negative_input(self):
        """Test that Reinhard clamps negative values to zero."""
        from spheretrace.preview.display import tone_map_reinhard

        image = np.full((4, 4, 3), -1.0, dtype=np.float32)
        assert np.all(tone_map_reinhard(image) >= 0.0)

    def test_exposure_formula(self):
        """Test exposure formula: 1 - exp(-c * exposure)."""
        from spheretrace.preview.display import tone_map_exposure

        image = np.full((2, 2, 3), 1.0, dtype=np.float32)
        result = tone_map_exposure(image, exposure=2.0)
        assert np.allclose(result, 1.0 - np.exp(-2.0), atol=1e-6)

    def test_exposure_higher_value_brighter(self):
        """Test that higher exposure values produce brighter results."""
        from spheretrace.preview.display import tone_map_exposure

        image = np.full((4, 4, 3), 0.5, dtype=np.float32)
        assert np.mean(tone_map_exposure(image, 2.0)) > np.mean(tone_map_exposure(image, 0.5))


class TestGammaAndPipeline:
    """Test gamma correction and the full display pipeline."""

    def test_gamma_1_no_change(self, rng):
        """Test that gamma=1.0 produces no change."""
        from spheretrace.preview.display import apply_gamma

        image = rng.random((8, 8, 3)).astype(np.float32)
        assert np.allclose(apply_gamma(image, gamma=1.0), image)

    def test_gamma_brightens_midtones(self):
        """Test that gamma correction brightens midtones."""
        from spheretrace.preview.display import apply_gamma

        image = np.full((4, 4, 3), 0.5, dtype=np.float32)
        assert np.all(apply_gamma(image, gamma=2.2) > 0.5)

    def test_process_clamps_highlights(self):
        """Test that unclamped shading output ends up in [0, 1]."""
        from spheretrace.preview.display import process_image_for_display

        image = np.full((4, 4, 3), 1.9, dtype=np.float32)
        result = process_image_for_display(image, tone_map="none", gamma=1.0)
        assert np.allclose(result, 1.0)

    def test_process_output_always_valid(self, rng):
        """Test that processed output is always in valid display range."""
        from spheretrace.preview.display import process_image_for_display

        for tone_map in ["none", "reinhard", "exposure"]:
            image = (rng.random((8, 8, 3)) * 10.0 - 1.0).astype(np.float32)
            result = process_image_for_display(image, tone_map=tone_map, gamma=2.2)
            assert np.all(result >= 0.0)
            assert np.all(result <= 1.0)
            assert not np.any(np.isnan(result))

    def test_process_invalid_tone_map_raises(self):
        """Test that invalid tone map method raises ValueError."""
        from spheretrace.preview.display import process_image_for_display

        image = np.zeros((4, 4, 3), dtype=np.float32)
        with pytest.raises(ValueError, match="Unknown tone mapping"):
            process_image_for_display(image, tone_map="invalid")  # type: ignore[arg-type]

    def test_process_does_not_modify_input(self):
        """Test the caller's image is left untouched."""
        from spheretrace.preview.display import process_image_for_display

        image = np.full((4, 4, 3), 1.9, dtype=np.float32)
        for tone_map in ["none", "reinhard", "exposure"]:
            process_image_for_display(image, tone_map=tone_map, gamma=2.2)
        assert np.all(image == np.float32(1.9))

    def test_invalid_tone_map_lists_choices(self):
        """Test the error names the accepted methods."""
        from spheretrace.preview.display import process_image_for_display

        with pytest.raises(ValueError, match="none, reinhard, exposure"):
            process_image_for_display(np.zeros((2, 2, 3), dtype=np.float32), tone_map="filmic")  # type: ignore[arg-type]


class TestExport:
    """Test 8-bit conversion and PNG export."""

    def test_image_to_uint8_black_and_white(self):
        """Test uint8 conversion of black and white."""
        from spheretrace.preview.export import image_to_uint8

        image = np.array([[[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]]], dtype=np.float32)
        result = image_to_uint8(image)
        assert np.all(result[0, 0] == 0)
        assert np.all(result[0, 1] == 255)

    def test_save_png(self, tmp_path):
        """Test that save_png writes a readable RGB image."""
        from spheretrace.preview.canvas import Canvas
        from spheretrace.preview.export import save_png

        canvas = Canvas(16, 8)
        canvas.set_pixel(0, 0, Color(1.0, 0.0, 0.0))
        filepath = tmp_path / "canvas.png"
        save_png(canvas, filepath)

        img = PILImage.open(filepath)
        assert img.size == (16, 8)  # PIL size is (width, height)
        assert img.mode == "RGB"
        assert img.getpixel((0, 0)) == (255, 0, 0)
        assert img.getpixel((1, 0)) == (0, 0, 0)

    def test_save_png_with_tone_mapping(self, tmp_path):
        """Test PNG export with each tone mapping method."""
        from spheretrace.preview.canvas import Canvas
        from spheretrace.preview.export import save_png

        canvas = Canvas(4, 4)
        canvas.fill(Color(1.9, 1.0, 0.5))
        for tone_map in ["none", "reinhard", "exposure"]:
            filepath = tmp_path / f"{tone_map}.png"
            save_png(canvas, filepath, tone_map=tone_map, gamma=2.2)
            assert filepath.exists()

    def test_save_png_from_array_rejects_bad_shape(self, tmp_path):
        """Test that a non-RGB array raises ValueError."""
        from spheretrace.preview.export import save_png_from_array

        with pytest.raises(ValueError):
            save_png_from_array(np.zeros((4, 4), dtype=np.float32), tmp_path / "bad.png")


class TestModuleExports:
    """Test that all expected symbols are exported from the module."""

    def test_preview_exports(self):
        """Test that canvas, display and export names are exported."""
        from spheretrace.preview import (
            Canvas,
            apply_gamma,
            image_to_uint8,
            process_image_for_display,
            save_png,
            save_png_from_array,
            show_preview,
            tone_map_exposure,
            tone_map_reinhard,
        )

        assert callable(show_preview)
        assert callable(save_png)
        assert callable(save_png_from_array)
        assert callable(image_to_uint8)
        assert callable(apply_gamma)
        assert callable(process_image_for_display)
        assert callable(tone_map_reinhard)
        assert callable(tone_map_exposure)
        assert Canvas is not None
