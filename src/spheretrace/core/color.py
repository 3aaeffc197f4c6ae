"""RGB color value used as the shading accumulator.

Channels are plain floats and are never clamped here. Shading can push them
above 1.0 (a fully lit specular highlight sums to 1.9 with default material
coefficients) or, in principle, below zero. Mapping to a displayable range is
done by the preview helpers when pixels are written out.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from spheretrace.core.linalg import EPSILON


@dataclass(frozen=True, eq=False)
class Color:
    """An unclamped RGB triple.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    # =========================================================================
    # Named colors
    # =========================================================================

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def red(cls) -> Color:
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def green(cls) -> Color:
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def blue(cls) -> Color:
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def from_sequence(cls, values: tuple[float, float, float] | list[float]) -> Color:
        """Build a color from any 3-element sequence."""
        r, g, b = values
        return cls(float(r), float(g), float(b))

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: Color) -> Color:
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the componentwise (Hadamard) product
        if isinstance(other, Color):
            return Color(
                self.r * other.r,
                self.g * other.g,
                self.b * other.b,
            )
        if isinstance(other, (int, float)):
            return Color(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Color:
        if isinstance(other, (int, float)):
            return self * other
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            math.isclose(self.r, other.r, abs_tol=EPSILON)
            and math.isclose(self.g, other.g, abs_tol=EPSILON)
            and math.isclose(self.b, other.b, abs_tol=EPSILON)
        )

    __hash__ = None  # type: ignore[assignment]

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_array(self) -> npt.NDArray[np.float32]:
        """Channels as a float32 array of shape (3,)."""
        return np.array(self.to_tuple(), dtype=np.float32)
