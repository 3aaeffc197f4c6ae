"""Display processing and Matplotlib preview for rendered canvases.

Shaded colors are linear and unclamped: a default material lit head-on peaks
at 1.9. Before they can be shown or written out each pixel goes through

    tone map (optional) -> gamma -> clamp to [0, 1]

Tone mapping compresses values above 1 instead of letting the clamp flatten
highlights to white. Without it the pipeline reduces to a plain clamp, which
is what the canvas uses by default.

Example:
    >>> from spheretrace.camera.wall import WallCamera, render
    >>> from spheretrace.preview.display import show_preview
    >>> from spheretrace.scene.world import default_world
    >>> canvas = render(default_world(), WallCamera(width=128, height=128))
    >>> show_preview(canvas, tone_map="reinhard")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from spheretrace.preview.canvas import Canvas

Image = npt.NDArray[np.float32]

# Names accepted wherever a tone mapping is selected
ToneMapMethod = Literal["none", "reinhard", "exposure"]


# =============================================================================
# Tone Mapping
# =============================================================================


def tone_map_reinhard(image: Image) -> Image:
    """Map each channel L to L / (1 + L).

    Negative channels map to 0; the result is in [0, 1).
    """
    linear = np.clip(image, 0.0, None)
    return (linear / (1.0 + linear)).astype(np.float32)


def tone_map_exposure(image: Image, exposure: float = 1.0) -> Image:
    """Map each channel L to 1 - exp(-L * exposure).

    Args:
        image: Linear image of shape (H, W, 3).
        exposure: Scale applied before the curve; larger is brighter.
    """
    linear = np.clip(image, 0.0, None)
    return (-np.expm1(-linear * exposure)).astype(np.float32)


def _identity_map(image: Image, exposure: float) -> Image:
    return image


def _reinhard_map(image: Image, exposure: float) -> Image:
    return tone_map_reinhard(image)


_TONE_MAPPERS: dict[str, Callable[[Image, float], Image]] = {
    "none": _identity_map,
    "reinhard": _reinhard_map,
    "exposure": tone_map_exposure,
}


# =============================================================================
# Display Pipeline
# =============================================================================


def apply_gamma(image: Image, gamma: float = 2.2) -> Image:
    """Encode linear values with an exponent of 1 / gamma.

    A gamma of 1.0 returns ``image`` itself. Otherwise values are clamped to
    [0, 1] first, since negative channels have no real root.
    """
    if gamma == 1.0:
        return image
    return np.power(np.clip(image, 0.0, 1.0), 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: Image,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> Image:
    """Turn a linear image into display values in [0, 1].

    The input array is never modified.

    Args:
        image: Linear image of shape (H, W, 3).
        tone_map: "none", "reinhard" or "exposure".
        gamma: Display gamma; 1.0 keeps values linear.
        exposure: Only used by exposure tone mapping.

    Raises:
        ValueError: If ``tone_map`` is not one of the known names.
    """
    mapper = _TONE_MAPPERS.get(tone_map)
    if mapper is None:
        raise ValueError(
            f"Unknown tone mapping method: {tone_map!r} "
            f"(expected one of {', '.join(_TONE_MAPPERS)})"
        )
    mapped = mapper(np.asarray(image, dtype=np.float32), exposure)
    return np.clip(apply_gamma(mapped, gamma), 0.0, 1.0).astype(np.float32)


# =============================================================================
# Preview Window
# =============================================================================


def show_preview(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (6, 6),
    block: bool = True,
) -> None:
    """Open a Matplotlib window showing ``canvas``.

    Matplotlib is imported on first use so that rendering and export work
    without a display backend.

    Args:
        canvas: The canvas to show.
        tone_map: Tone mapping applied before display.
        gamma: Display gamma.
        exposure: Exposure for exposure tone mapping.
        title: Window title; defaults to the canvas size and tone mapping.
        figsize: Figure size in inches.
        block: Wait until the window is closed.
    """
    import matplotlib.pyplot as plt

    pixels = process_image_for_display(
        canvas.to_array(), tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    if title is None:
        suffix = "" if tone_map == "none" else f", {tone_map}"
        title = f"{canvas.width}x{canvas.height}{suffix}"

    fig, ax = plt.subplots(figsize=figsize)
    ax.imshow(pixels, interpolation="nearest")
    ax.set_axis_off()
    ax.set_title(title)
    fig.tight_layout()
    plt.show(block=block)
