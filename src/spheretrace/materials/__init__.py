"""Materials module for surface shading parameters.

Components:
    phong: Material value holding Phong illumination coefficients

Only the Phong model is supported. The coefficients are validated when a
material is constructed, so every material reaching the shading code is
well formed.
"""

from .phong import Material

__all__ = [
    "Material",
]
