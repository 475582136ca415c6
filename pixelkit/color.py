"""RGBA colours with floating-point components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

_U32_MAX = 0xFFFFFFFF


def _check_byte(name: str, value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} component {value} is outside the range 0 to 255")
    return value


def _check_u32(value: int) -> int:
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"value {value:#x} does not fit in 32 bits")
    return value


@dataclass(frozen=True)
class Color:
    """A colour with red, green, blue and alpha components from 0.0 to 1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    TRANSPARENT: ClassVar[Color]
    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    BLUE: ClassVar[Color]
    YELLOW: ClassVar[Color]
    CYAN: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    GRAY: ClassVar[Color]
    LIGHT_GRAY: ClassVar[Color]
    DARK_GRAY: ClassVar[Color]

    @classmethod
    def from_rgba(cls, r: float, g: float, b: float, a: float) -> Color:
        """Create a colour from float components, including alpha."""
        return cls(r, g, b, a)

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> Color:
        """Create a fully opaque colour from float components."""
        return cls(r, g, b, 1.0)

    @classmethod
    def from_int_rgba(cls, r: int, g: int, b: int, a: int) -> Color:
        """Create a colour from integer components in the range 0 to 255."""
        return cls(
            _check_byte("red", r) / 255.0,
            _check_byte("green", g) / 255.0,
            _check_byte("blue", b) / 255.0,
            _check_byte("alpha", a) / 255.0,
        )

    @classmethod
    def from_int_rgb(cls, r: int, g: int, b: int) -> Color:
        """Create a fully opaque colour from integer components (0 to 255)."""
        return cls(
            _check_byte("red", r) / 255.0,
            _check_byte("green", g) / 255.0,
            _check_byte("blue", b) / 255.0,
            1.0,
        )

    @classmethod
    def from_hex_argb(cls, argb: int) -> Color:
        """Create a colour from a 0xAARRGGBB integer.

        Without alpha bits the resulting colour is fully transparent.
        """
        _check_u32(argb)
        return cls.from_int_rgba(
            (argb >> 16) & 0xFF,
            (argb >> 8) & 0xFF,
            argb & 0xFF,
            (argb >> 24) & 0xFF,
        )

    @classmethod
    def from_hex_rgb(cls, rgb: int) -> Color:
        """Create an opaque colour from a 0xRRGGBB integer; high bits are ignored."""
        _check_u32(rgb)
        return cls.from_int_rgb((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)

    @classmethod
    def from_gray(cls, brightness: float) -> Color:
        """Create an opaque gray with all three components set to ``brightness``."""
        return cls.from_rgb(brightness, brightness, brightness)

    def subjective_brightness(self) -> float:
        """Brightness as perceived by a human, from 0.0 to 1.0."""
        return self.r * 0.299 + self.g * 0.587 + self.b * 0.114


Color.TRANSPARENT = Color.from_rgba(0.0, 0.0, 0.0, 0.0)
Color.BLACK = Color.from_rgb(0.0, 0.0, 0.0)
Color.WHITE = Color.from_rgb(1.0, 1.0, 1.0)
Color.RED = Color.from_rgb(1.0, 0.0, 0.0)
Color.GREEN = Color.from_rgb(0.0, 1.0, 0.0)
Color.BLUE = Color.from_rgb(0.0, 0.0, 1.0)
Color.YELLOW = Color.from_rgb(1.0, 1.0, 0.0)
Color.CYAN = Color.from_rgb(0.0, 1.0, 1.0)
Color.MAGENTA = Color.from_rgb(1.0, 0.0, 1.0)
Color.GRAY = Color.from_rgb(0.5, 0.5, 0.5)
Color.LIGHT_GRAY = Color.from_rgb(0.75, 0.75, 0.75)
Color.DARK_GRAY = Color.from_rgb(0.25, 0.25, 0.25)