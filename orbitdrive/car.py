"""Cars: surface vehicles that drive along a planet once grounded."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

from orbitdrive import constants
from orbitdrive.game_object import GameObject
from orbitdrive.geometry import Color, Vec2
from orbitdrive.planet import Planet

if TYPE_CHECKING:
    from orbitdrive.rocket import Rocket

_DEGREES = 3.14159 / 180.0
_MAX_SPEED = 200.0
_ACCELERATION_GAIN = 10.0
_ROTATION_GAIN = 2.0
_SURFACE_FRICTION = 0.98


class Car(GameObject):
    """A car that can only steer and accelerate while on a planet surface."""

    def __init__(
        self,
        position: Vec2,
        velocity: Vec2,
        color: Color = Color.GREEN,
    ) -> None:
        super().__init__(position, velocity, color)
        self.rotation = 0.0
        self.speed = 0.0
        self.max_speed = _MAX_SPEED
        self.current_planet: Planet | None = None
        self.is_grounded = False

    def accelerate(self, amount: float) -> None:
        """Change speed while grounded; reverse is capped at half the top speed."""
        if not self.is_grounded:
            return
        speed = self.speed + amount * _ACCELERATION_GAIN
        speed = min(speed, self.max_speed)
        self.speed = max(speed, -self.max_speed / 2.0)

    def rotate(self, amount: float) -> None:
        """Turn the car while grounded."""
        if self.is_grounded:
            self.rotation += amount * _ROTATION_GAIN

    def check_grounding(self, planets: Sequence[Planet]) -> None:
        """Ground the car on the closest planet whose surface it touches."""
        self.is_grounded = False
        self.current_planet = None
        closest = math.inf
        for planet in planets:
            dist = (self.position - planet.position).length()
            if dist <= planet.radius + constants.ROCKET_SIZE and dist < closest:
                closest = dist
                self.current_planet = planet
                self.is_grounded = True

    def update(self, delta_time: float) -> None:
        """Drive along the surface when grounded, otherwise drift with velocity."""
        planet = self.current_planet
        if self.is_grounded and planet is not None:
            to_planet = planet.position - self.position
            normal = to_planet / to_planet.length()
            tangent = Vec2(-normal.y, normal.x)

            radians = self.rotation * _DEGREES
            move_dir = Vec2(math.cos(radians), math.sin(radians))
            effective_dir = tangent * move_dir.dot(tangent)

            self.position = self.position + effective_dir * self.speed * delta_time
            self.position = planet.position + normal * (
                planet.radius + constants.TRAJECTORY_COLLISION_RADIUS
            )
            self.speed *= _SURFACE_FRICTION
        else:
            self.position = self.position + self.velocity * delta_time

    def initialize_from_rocket(self, rocket: Rocket) -> None:
        """Take over a rocket's position and a reduced share of its velocity."""
        self.position = rocket.position
        self.velocity = rocket.velocity * constants.TRANSFORM_VELOCITY_FACTOR
        planet = self.current_planet
        if planet is not None:
            to_planet = planet.position - self.position
            normal = to_planet / to_planet.length()
            self.rotation = math.atan2(-normal.x, normal.y) / _DEGREES