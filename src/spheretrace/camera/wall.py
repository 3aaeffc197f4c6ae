"""Projection-wall camera and the pixel sweep that drives the core.

The camera sits at a fixed origin and looks down +z at a square "wall". Each
pixel of the output image maps to a point on that wall, and the primary ray
for the pixel runs from the origin through that point. Pixel (0, 0) is the
top-left corner of the wall.

This is the simplest driver for the shading core: one ray per pixel, no
sub-pixel sampling, rows swept top to bottom.

Example:
    >>> from spheretrace.camera.wall import WallCamera, render
    >>> from spheretrace.scene.world import single_sphere_world
    >>> camera = WallCamera(width=100, height=100)
    >>> canvas = render(single_sphere_world(), camera)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from spheretrace.core.color import Color
from spheretrace.core.linalg import normalize, point
from spheretrace.core.ray import Ray
from spheretrace.preview.canvas import Canvas
from spheretrace.scene.world import World

logger = logging.getLogger(__name__)


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class WallCamera:
    """Configuration for a projection-wall camera.

    Attributes:
        origin: Eye position in world space (x, y, z).
        wall_z: z coordinate of the wall plane.
        wall_size: Side length of the square wall in world units.
        width: Output image width in pixels.
        height: Output image height in pixels.
    """

    origin: tuple[float, float, float] = (0.0, 0.0, -5.0)
    wall_z: float = 10.0
    wall_size: float = 7.0
    width: int = 512
    height: int = 512

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.wall_size <= 0.0:
            raise ValueError(f"Wall size must be positive, got {self.wall_size}")

    @property
    def pixel_size(self) -> float:
        """World-space size of one pixel on the wall.

        Derived from the width so pixels stay square. The wall spans
        ``wall_size`` horizontally and ``pixel_size * height`` vertically,
        centered on x = y = 0.
        """
        return self.wall_size / self.width

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Primary ray through the wall point of pixel (x, y).

        Args:
            x: Pixel column, 0 at the left.
            y: Pixel row, 0 at the top.

        Returns:
            A ray from the camera origin with a normalized direction.
        """
        half_width = self.wall_size / 2.0
        half_height = self.pixel_size * self.height / 2.0
        world_x = -half_width + self.pixel_size * x
        world_y = half_height - self.pixel_size * y
        eye = point(*self.origin)
        target = point(world_x, world_y, self.wall_z)
        return Ray(eye, normalize(target - eye))


# =============================================================================
# Rendering
# =============================================================================


def render(
    world: World,
    camera: WallCamera,
    canvas: Canvas | None = None,
    background: Color | None = None,
) -> Canvas:
    """Sweep every pixel of ``camera`` and shade it against ``world``.

    Args:
        world: The scene to render. Must not change during the sweep.
        camera: The camera producing one ray per pixel.
        canvas: Target canvas of the camera's size. A new one is created if
            omitted.
        background: Color written for pixels whose ray hits nothing. If
            omitted, missed pixels keep the canvas's existing color.

    Returns:
        The canvas that was written to.

    Raises:
        ValueError: If ``canvas`` does not match the camera's size.
    """
    if canvas is None:
        canvas = Canvas(camera.width, camera.height)
    elif (canvas.width, canvas.height) != (camera.width, camera.height):
        raise ValueError(
            f"Canvas is {canvas.width}x{canvas.height} but camera renders "
            f"{camera.width}x{camera.height}"
        )

    logger.debug(
        "Rendering %dx%d with %d spheres", camera.width, camera.height, len(world)
    )

    hits = 0
    for y in range(camera.height):
        for x in range(camera.width):
            color = world.color_at(camera.ray_for_pixel(x, y))
            if color is not None:
                canvas.set_pixel(x, y, color)
                hits += 1
            elif background is not None:
                canvas.set_pixel(x, y, background)

    logger.debug("Render finished: %d of %d pixels hit", hits, camera.width * camera.height)
    return canvas
