"""Framebuffer for shaded colors.

The canvas stores linear, unclamped colors exactly as shading produced them.
Clamping and 8-bit quantization happen only when the image leaves the canvas
(see :meth:`Canvas.to_uint8` and :mod:`spheretrace.preview.export`).
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from spheretrace.core.color import Color
from spheretrace.preview.display import ToneMapMethod
from spheretrace.preview.export import image_to_uint8


class Canvas:
    """A width x height grid of RGB colors, initially black.

    Attributes:
        width: Number of pixel columns.
        height: Number of pixel rows.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float32)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            )

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Write a color at column ``x``, row ``y``.

        Raises:
            IndexError: If the coordinates are outside the canvas.
        """
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_array()

    def get_pixel(self, x: int, y: int) -> Color:
        """Read the color at column ``x``, row ``y``.

        Raises:
            IndexError: If the coordinates are outside the canvas.
        """
        self._check_bounds(x, y)
        return Color.from_sequence(self._pixels[y, x].tolist())

    def fill(self, color: Color) -> None:
        """Set every pixel to ``color``."""
        self._pixels[:, :] = color.to_array()

    def to_array(self) -> npt.NDArray[np.float32]:
        """Copy of the linear image with shape (height, width, 3)."""
        return self._pixels.copy()

    def to_uint8(
        self,
        *,
        tone_map: ToneMapMethod = "none",
        gamma: float = 1.0,
    ) -> npt.NDArray[np.uint8]:
        """Quantize the image to 8 bits per channel.

        Values are clamped to [0, 1] (after optional tone mapping and gamma)
        and scaled to [0, 255].
        """
        return image_to_uint8(self._pixels, tone_map=tone_map, gamma=gamma)
