"""
Pixel value types: RGB / RGBA colors and complex-to-real conversion.

Channels are saturated to [0, 255] when a color is built from a scalar.
Converting a color to a number gives |r| + |g| + |b| (scaled by |alpha| for
RGBA), which is how colors collapse when stored into scalar arrays.
"""

from dataclasses import dataclass

import numpy as np

from .numeric import clamp

RGB_DTYPE = np.dtype([("red", np.uint8), ("green", np.uint8), ("blue", np.uint8)])
RGBA_DTYPE = np.dtype(
    [("red", np.uint8), ("green", np.uint8), ("blue", np.uint8), ("alpha", np.uint8)]
)


def to_real(value) -> float:
    """Collapse a (possibly complex) value to a real number; complex gives magnitude."""
    if isinstance(value, complex | np.complexfloating):
        return float(abs(value))
    return float(value)


@dataclass
class RGB:
    """24-bit color."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @classmethod
    def from_scalar(cls, value) -> "RGB":
        """Gray color from a scalar; complex scalars use their magnitude."""
        level = clamp(to_real(value), 0.0, 255.0)
        return cls(level, level, level)

    @classmethod
    def from_rgba(cls, color: "RGBA") -> "RGB":
        return cls(color.red, color.green, color.blue)

    def to_rgba(self, alpha: float = 255.0) -> "RGBA":
        return RGBA(self.red, self.green, self.blue, alpha)

    def to_record(self) -> np.void:
        """Structured scalar for storage in an RGB_DTYPE array."""
        return np.array(
            (clamp(round(self.red), 0, 255), clamp(round(self.green), 0, 255),
             clamp(round(self.blue), 0, 255)),
            dtype=RGB_DTYPE,
        )[()]

    def __float__(self) -> float:
        return abs(self.red) + abs(self.green) + abs(self.blue)

    def __int__(self) -> int:
        return int(float(self))

    def __complex__(self) -> complex:
        return complex(float(self))

    def __str__(self) -> str:
        return f"({self.red},{self.green},{self.blue})"


@dataclass
class RGBA:
    """32-bit color with alpha."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 255.0

    @classmethod
    def from_scalar(cls, value) -> "RGBA":
        level = clamp(to_real(value), 0.0, 255.0)
        return cls(level, level, level, level)

    @classmethod
    def from_rgb(cls, color: RGB) -> "RGBA":
        return cls(color.red, color.green, color.blue, 255.0)

    def to_rgb(self) -> RGB:
        return RGB(self.red, self.green, self.blue)

    def to_record(self) -> np.void:
        """Structured scalar for storage in an RGBA_DTYPE array."""
        return np.array(
            (clamp(round(self.red), 0, 255), clamp(round(self.green), 0, 255),
             clamp(round(self.blue), 0, 255), clamp(round(self.alpha), 0, 255)),
            dtype=RGBA_DTYPE,
        )[()]

    def __float__(self) -> float:
        return abs(self.alpha) * (abs(self.red) + abs(self.green) + abs(self.blue))

    def __int__(self) -> int:
        return int(float(self))

    def __complex__(self) -> complex:
        return complex(float(self))

    def __str__(self) -> str:
        return f"({self.red},{self.green},{self.blue},{self.alpha})"
