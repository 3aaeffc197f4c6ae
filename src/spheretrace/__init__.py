"""Phong-shaded ray casting against transformable unit spheres.

Given a ray and a world of spheres lit by one point light, this package finds
the nearest visible surface hit and computes its Phong-shaded color.

Subpackages:
    core: Homogeneous points/vectors, 4x4 transforms, colors and rays
    materials: Phong material coefficients
    geometry: The transformable unit sphere and its surface normal
    scene: Intersection, hit selection, lighting and the world
    camera: Projection-wall camera driving one ray per pixel
    preview: Canvas framebuffer, display processing and PNG export
"""

__version__ = "0.1.0"
