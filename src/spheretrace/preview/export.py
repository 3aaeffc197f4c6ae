"""Image export utilities for rendered canvases.

Supported formats:
    - PNG (8-bit RGB via Pillow); any other extension Pillow recognises
      also works, the format is picked from the file name

Example:
    >>> from spheretrace.camera.wall import WallCamera, render
    >>> from spheretrace.preview.export import save_png
    >>> from spheretrace.scene.world import default_world
    >>> canvas = render(default_world(), WallCamera(width=256, height=256))
    >>> save_png(canvas, "spheres.png")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from spheretrace.preview.canvas import Canvas

logger = logging.getLogger(__name__)


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save a canvas as an 8-bit image file.

    Args:
        canvas: The canvas to save.
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value. Default 1.0 writes linear values.
        exposure: Exposure value for exposure tone mapping.
    """
    save_png_from_array(
        canvas.to_array(),
        filepath,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save a linear NumPy image as an 8-bit image file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value.
        exposure: Exposure value for exposure tone mapping.

    Raises:
        ValueError: If ``image`` is not an (H, W, 3) array.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    image_uint8 = image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(image_uint8).save(filepath)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], filepath)


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    processed = process_image_for_display(
        image,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )
    return np.round(processed * 255.0).astype(np.uint8)
