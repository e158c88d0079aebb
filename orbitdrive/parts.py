"""Parts that can be mounted on a rocket."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from orbitdrive import constants
from orbitdrive.geometry import Color, Vec2

_PART_DEGREES = 3.14159 / 180.0


def _rotate(point: Vec2, radians: float) -> Vec2:
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    return Vec2(point.x * cos_a - point.y * sin_a, point.x * sin_a + point.y * cos_a)


class RocketPart(ABC):
    """A part placed relative to the rocket's centre."""

    def __init__(self, relative_position: Vec2, color: Color) -> None:
        self.relative_position = relative_position
        self.color = color

    @abstractmethod
    def placement(
        self, rocket_position: Vec2, rotation: float, scale: float = 1.0
    ) -> tuple[Vec2, ...]:
        """Return the part's outline in world coordinates."""


class Engine(RocketPart):
    """A triangular engine providing thrust."""

    def __init__(
        self,
        relative_position: Vec2,
        thrust: float,
        color: Color = Color(255, 100, 0),
    ) -> None:
        super().__init__(relative_position, color)
        self.thrust = thrust
        size = constants.ROCKET_SIZE
        self.shape = (
            Vec2(0.0, -size * 2 / 3),
            Vec2(-size / 3, size * 2 / 3),
            Vec2(size / 3, size * 2 / 3),
        )

    def placement(
        self, rocket_position: Vec2, rotation: float, scale: float = 1.0
    ) -> tuple[Vec2, ...]:
        """Return the engine triangle scaled and rotated around the rocket."""
        offset = _rotate(self.relative_position, rotation * _PART_DEGREES)
        origin = rocket_position + offset * scale
        shape_radians = math.radians(rotation)
        return tuple(origin + _rotate(point * scale, shape_radians) for point in self.shape)