"""Base class for every simulated body."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orbitdrive.geometry import Color, Vec2


class GameObject(ABC):
    """A body with a position, a velocity and a colour."""

    def __init__(self, position: Vec2, velocity: Vec2, color: Color) -> None:
        self.position = position
        self.velocity = velocity
        self.color = color

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the object by ``delta_time`` seconds."""