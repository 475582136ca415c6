"""Two-component vectors used for sizes and positions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterator, Optional, Tuple, Union

Number = Union[int, float]
VectorLike = Union["Vector2", Tuple[Number, Number]]

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U32_MAX = 2**32 - 1


def _coerce(value: VectorLike) -> Vector2:
    if isinstance(value, Vector2):
        return value
    if isinstance(value, tuple) and len(value) == 2:
        return Vector2(value[0], value[1])
    raise TypeError(f"cannot treat {value!r} as a Vector2")


def _cast_int(value: Number, low: int, high: int) -> int:
    """Cast like a numeric conversion: floats saturate, integers wrap."""
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return high if value > 0 else low
        return max(low, min(high, math.trunc(value)))
    span = high - low + 1
    return (int(value) - low) % span + low


def _round_half_away(value: Number) -> Number:
    if isinstance(value, int) or math.isnan(value) or math.isinf(value):
        return value
    truncated = math.trunc(value)
    if abs(value - truncated) >= 0.5:
        truncated += 1 if value > 0 else -1
    return float(truncated)


@dataclass(frozen=True)
class Vector2:
    """A vector of two numbers, representing a size or a position."""

    x: Number
    y: Number

    ZERO: ClassVar[Vector2]

    @classmethod
    def new_x(cls, x: Number) -> Vector2:
        """A vector with the given horizontal component and zero vertical."""
        return cls(x, type(x)(0))

    @classmethod
    def new_y(cls, y: Number) -> Vector2:
        """A vector with the given vertical component and zero horizontal."""
        return cls(type(y)(0), y)

    def magnitude_squared(self) -> Number:
        """The magnitude of the vector, squared."""
        return self.x * self.x + self.y * self.y

    def magnitude(self) -> float:
        """The magnitude of the vector."""
        return math.sqrt(self.magnitude_squared())

    def normalize(self) -> Optional[Vector2]:
        """A vector of magnitude 1.0 in the same direction, or None if zero."""
        magnitude = self.magnitude()
        if magnitude == 0.0:
            return None
        return Vector2(self.x / magnitude, self.y / magnitude)

    def rotate_90_degrees_clockwise(self) -> Vector2:
        """Rotate by 90 degrees clockwise."""
        return Vector2(-self.y, self.x)

    def rotate_90_degrees_anticlockwise(self) -> Vector2:
        """Rotate by 90 degrees anticlockwise."""
        return Vector2(self.y, -self.x)

    def into_f32(self) -> Vector2:
        """Each component converted to float."""
        return Vector2(float(self.x), float(self.y))

    def into_i32(self) -> Vector2:
        """Each component cast to a 32-bit signed integer."""
        return Vector2(
            _cast_int(self.x, _I32_MIN, _I32_MAX), _cast_int(self.y, _I32_MIN, _I32_MAX)
        )

    def into_u32(self) -> Vector2:
        """Each component cast to a 32-bit unsigned integer."""
        return Vector2(_cast_int(self.x, 0, _U32_MAX), _cast_int(self.y, 0, _U32_MAX))

    def try_into_i32(self) -> Vector2:
        """Convert integer components to 32-bit signed, raising if out of range."""
        for value in self:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{value!r} is not an integer")
            if not _I32_MIN <= value <= _I32_MAX:
                raise OverflowError(f"{value} does not fit in a 32-bit signed integer")
        return Vector2(self.x, self.y)

    def round(self) -> Vector2:
        """Round each component to the nearest integer, halves away from zero."""
        return Vector2(_round_half_away(self.x), _round_half_away(self.y))

    def __add__(self, other: VectorLike) -> Vector2:
        try:
            rhs = _coerce(other)
        except TypeError:
            return NotImplemented
        return Vector2(self.x + rhs.x, self.y + rhs.y)

    def __sub__(self, other: VectorLike) -> Vector2:
        try:
            rhs = _coerce(other)
        except TypeError:
            return NotImplemented
        return Vector2(self.x - rhs.x, self.y - rhs.y)

    def __mul__(self, factor: Number) -> Vector2:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vector2(self.x * factor, self.y * factor)

    def __truediv__(self, divisor: Number) -> Vector2:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Vector2(self.x / divisor, self.y / divisor)

    def __iter__(self) -> Iterator[Number]:
        yield self.x
        yield self.y


Vector2.ZERO = Vector2(0, 0)