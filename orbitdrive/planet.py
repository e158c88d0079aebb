"""Planets: massive bodies whose radius follows their mass."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from orbitdrive import constants
from orbitdrive.game_object import GameObject
from orbitdrive.geometry import Color, Vec2, normalize


class Planet(GameObject):
    """A planet. A non-positive radius is derived from the mass."""

    def __init__(
        self,
        position: Vec2,
        radius: float,
        mass: float,
        color: Color = Color.BLUE,
    ) -> None:
        super().__init__(position, Vec2(0.0, 0.0), color)
        self._mass = mass
        self.radius = 0.0
        if radius > 0:
            self.radius = radius
        else:
            self.update_radius_from_mass()

    @property
    def mass(self) -> float:
        return self._mass

    @mass.setter
    def mass(self, value: float) -> None:
        self._mass = value
        self.update_radius_from_mass()

    def update(self, delta_time: float) -> None:
        """Move the planet along its velocity."""
        self.position = self.position + self.velocity * delta_time

    def update_radius_from_mass(self) -> None:
        """Set the radius from the mass with a cube-root law."""
        self.radius = constants.BASE_RADIUS_FACTOR * (
            self._mass / constants.REFERENCE_MASS
        ) ** (1.0 / 3.0)

    def velocity_vector(self, scale: float = 1.0) -> tuple[Vec2, Vec2]:
        """Return the start and end points of the scaled velocity line."""
        return self.position, self.position + self.velocity * scale

    def orbit_path(
        self,
        planets: Sequence[Planet],
        time_step: float = 0.5,
        steps: int = 200,
    ) -> list[tuple[Vec2, Color]]:
        """Predict the planet's path as points with fading colours.

        Other planets are held still during the prediction.
        """
        sim_position = self.position
        sim_velocity = self.velocity
        points = [(sim_position, replace(self.color, a=100))]

        for i in range(steps):
            total_acceleration = Vec2(0.0, 0.0)
            for other in planets:
                if other is self:
                    continue
                direction = other.position - sim_position
                dist = direction.length()
                if dist <= other.radius + self.radius + constants.TRAJECTORY_COLLISION_RADIUS:
                    break
                force = constants.G * other.mass * self._mass / (dist * dist)
                total_acceleration = total_acceleration + normalize(direction) * force / self._mass

            sim_velocity = sim_velocity + total_acceleration * time_step
            sim_position = sim_position + sim_velocity * time_step

            alpha = int(255 * (1.0 - i / steps))
            points.append((sim_position, replace(self.color, a=alpha)))

        return points