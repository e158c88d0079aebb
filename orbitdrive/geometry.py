"""Two-dimensional vectors, RGBA colours and small vector helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterator


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def dot(self, other: Vec2) -> float:
        """Return the dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        """Return the Euclidean length of the vector."""
        return math.hypot(self.x, self.y)


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    BLUE: ClassVar[Color]
    YELLOW: ClassVar[Color]
    MAGENTA: ClassVar[Color]

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range 0..255: {channel}")


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)
Color.BLUE = Color(0, 0, 255)
Color.YELLOW = Color(255, 255, 0)
Color.MAGENTA = Color(255, 0, 255)


def normalize(source: Vec2) -> Vec2:
    """Return the unit vector in the direction of ``source``; a zero vector is returned unchanged."""
    length = source.length()
    if length != 0:
        return source / length
    return source


def distance(a: Vec2, b: Vec2) -> float:
    """Return the distance between two points."""
    return (b - a).length()