"""Preview module for output and visualization.

Components:
    canvas: Float RGB framebuffer holding unclamped shaded colors
    display: Tone mapping, gamma and the Matplotlib preview window
    export: PNG export via Pillow

Nothing in this module is needed to shade a ray; it is where the colors
produced by the core are clamped, quantized and written out.

Example:
    >>> from spheretrace.preview import Canvas, save_png
    >>> canvas = Canvas(64, 64)
    >>> save_png(canvas, "black.png")
"""

from spheretrace.preview.canvas import Canvas
from spheretrace.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from spheretrace.preview.export import (
    image_to_uint8,
    save_png,
    save_png_from_array,
)

__all__ = [
    "Canvas",
    # Display functions
    "show_preview",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
]
