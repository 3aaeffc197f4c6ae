"""Camera module for primary ray generation.

Components:
    wall: Projection-wall camera and the per-pixel render sweep

The camera is an external driver for the shading core: it turns pixel
coordinates into rays, asks the world for a color and writes the result
into a canvas.
"""

from .wall import WallCamera, render

__all__ = [
    "WallCamera",
    "render",
]
