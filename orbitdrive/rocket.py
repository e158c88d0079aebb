"""Rockets: thrust-driven bodies that rest on planet surfaces."""

from __future__ import annotations

import math
from typing import Sequence

from orbitdrive import constants
from orbitdrive.game_object import GameObject
from orbitdrive.geometry import Color, Vec2, distance, normalize
from orbitdrive.parts import Engine, RocketPart
from orbitdrive.planet import Planet

_DEGREES = 3.14159 / 180.0
_ANGULAR_DAMPING = 0.98
_SURFACE_FRICTION = 0.98
_FORCE_VECTOR_CLEARANCE = 15.0

_TRAJECTORY_START_COLOR = Color.BLUE
_TRAJECTORY_COLOR_START = (51, 51, 255)
_TRAJECTORY_COLOR_DELTA = (204, 0, -155)
_SELF_INTERSECTION_SKIP = 10


def _gravity_acceleration(
    planets: Sequence[Planet], positions: Sequence[Vec2], point: Vec2
) -> Vec2 | None:
    """Return the acceleration at ``point``, or None when it lies inside a planet."""
    total = Vec2(0.0, 0.0)
    for planet, planet_position in zip(planets, positions):
        direction = planet_position - point
        dist = direction.length()
        if dist <= planet.radius + constants.TRAJECTORY_COLLISION_RADIUS:
            return None
        # The rocket's own mass cancels out of F / m.
        total = total + normalize(direction) * (constants.G * planet.mass / (dist * dist))
    return total


class Rocket(GameObject):
    """A rocket with a triangular body, mountable parts and a thrust level."""

    def __init__(
        self,
        position: Vec2,
        velocity: Vec2,
        color: Color = Color.WHITE,
        mass: float = 1.0,
    ) -> None:
        super().__init__(position, velocity, color)
        self.rotation = 0.0
        self.angular_velocity = 0.0
        self._thrust_level = 0.0
        self.mass = mass
        self.nearby_planets: list[Planet] = []
        self.parts: list[RocketPart] = []
        size = constants.ROCKET_SIZE
        self.body = (
            Vec2(0.0, -size),
            Vec2(-size / 2, size),
            Vec2(size / 2, size),
        )
        self.add_part(Engine(Vec2(0.0, size), constants.ENGINE_THRUST_POWER))

    @property
    def thrust_level(self) -> float:
        """Current thrust level between 0.0 and 1.0."""
        return self._thrust_level

    @thrust_level.setter
    def thrust_level(self, level: float) -> None:
        self._thrust_level = max(0.0, min(1.0, level))

    def add_part(self, part: RocketPart) -> None:
        """Mount a part on the rocket."""
        self.parts.append(part)

    def apply_thrust(self, amount: float) -> None:
        """Push the rocket along its nose direction, scaled by the thrust level."""
        radians = self.rotation * _DEGREES
        direction = Vec2(math.sin(radians), -math.cos(radians))
        self.velocity = self.velocity + direction * amount * self._thrust_level / self.mass

    def rotate(self, amount: float) -> None:
        """Add to the angular velocity."""
        self.angular_velocity += amount

    def is_colliding(self, planet: Planet) -> bool:
        """Return whether the rocket overlaps the planet."""
        return distance(self.position, planet.position) < planet.radius + constants.ROCKET_SIZE

    def merge_with(self, other: Rocket) -> Rocket:
        """Return a new rocket combining this one and ``other``, conserving momentum."""
        merged_position = (self.position + other.position) / 2.0
        total_mass = self.mass + other.mass
        merged_velocity = (self.velocity * self.mass + other.velocity * other.mass) / total_mass
        merged_color = self.color if self.mass > other.mass else other.color
        merged = Rocket(merged_position, merged_velocity, merged_color, total_mass)

        combined_thrust = sum(
            part.thrust
            for part in (*self.parts, *other.parts)
            if isinstance(part, Engine)
        )
        merged.add_part(Engine(Vec2(0.0, constants.ROCKET_SIZE), combined_thrust))
        return merged

    def update(self, delta_time: float) -> None:
        """Advance the rocket, resting it on any planet it is pressing into."""
        resting = False
        for planet in self.nearby_planets:
            direction = self.position - planet.position
            if direction.length() > planet.radius + constants.ROCKET_SIZE:
                continue
            normal = normalize(direction)
            into_surface = self.velocity.dot(normal)
            if into_surface < 0:
                self.velocity = self.velocity - normal * into_surface
                tangent = Vec2(-normal.y, normal.x)
                self.velocity = tangent * self.velocity.dot(tangent) * _SURFACE_FRICTION
                self.position = planet.position + normal * (planet.radius + constants.ROCKET_SIZE)
                resting = True

        if not resting:
            self.position = self.position + self.velocity * delta_time

        self.rotation += self.angular_velocity * delta_time
        self.angular_velocity *= _ANGULAR_DAMPING

    def body_points(self, scale: float = 1.0) -> tuple[Vec2, ...]:
        """Return the body triangle, scaled and rotated, in world coordinates."""
        radians = math.radians(self.rotation)
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        return tuple(
            self.position
            + Vec2(p.x * scale * cos_a - p.y * scale * sin_a, p.x * scale * sin_a + p.y * scale * cos_a)
            for p in self.body
        )

    def velocity_vector(self, scale: float = constants.VELOCITY_VECTOR_SCALE) -> tuple[Vec2, Vec2]:
        """Return the start and end points of the scaled velocity line."""
        return self.position, self.position + self.velocity * scale

    def gravity_force_vectors(
        self, planets: Sequence[Planet], scale: float = 1.0
    ) -> list[tuple[Vec2, Vec2]]:
        """Return a line per planet showing the scaled gravitational pull on the rocket."""
        lines = []
        for planet in planets:
            direction = planet.position - self.position
            dist = direction.length()
            if dist <= planet.radius + _FORCE_VECTOR_CLEARANCE:
                continue
            force = constants.G * planet.mass * self.mass / (dist * dist)
            force_vector = normalize(direction) * force * (scale / self.mass)
            lines.append((self.position, self.position + force_vector))
        return lines

    def trajectory(
        self,
        planets: Sequence[Planet],
        time_step: float = 0.5,
        steps: int = 200,
        detect_self_intersection: bool = False,
    ) -> list[tuple[Vec2, Color]]:
        """Predict the rocket's path as coloured points.

        Planets move and attract each other during the prediction, except the
        first, which stays pinned. The path stops at a planet surface or, if
        asked, where it crosses itself.
        """
        sim_position = self.position
        sim_velocity = self.velocity
        points = [(sim_position, _TRAJECTORY_START_COLOR)]
        previous_positions = [sim_position]

        planet_positions = [planet.position for planet in planets]
        planet_velocities = [planet.velocity for planet in planets]

        for i in range(steps):
            planet_positions = [
                pos + vel * time_step for pos, vel in zip(planet_positions, planet_velocities)
            ]

            new_velocities = list(planet_velocities)
            for j, planet in enumerate(planets):
                if j == 0:
                    continue
                total = Vec2(0.0, 0.0)
                for k, other in enumerate(planets):
                    if k == j:
                        continue
                    direction = planet_positions[k] - planet_positions[j]
                    dist = direction.length()
                    if dist > other.radius + planet.radius:
                        force = constants.G * other.mass * planet.mass / (dist * dist)
                        total = total + normalize(direction) * force / planet.mass
                new_velocities[j] = planet_velocities[j] + total * time_step
            planet_velocities = new_velocities

            acceleration = _gravity_acceleration(planets, planet_positions, sim_position)
            if acceleration is None:
                break

            half_velocity = sim_velocity + acceleration * (time_step * 0.5)
            sim_position = sim_position + half_velocity * time_step

            new_acceleration = _gravity_acceleration(planets, planet_positions, sim_position)
            if new_acceleration is None:
                break
            sim_velocity = half_velocity + new_acceleration * (time_step * 0.5)

            if detect_self_intersection and any(
                distance(sim_position, earlier) < constants.TRAJECTORY_COLLISION_RADIUS
                for earlier in previous_positions[:-_SELF_INTERSECTION_SKIP]
            ):
                break

            previous_positions.append(sim_position)

            ratio = i / steps
            channels = tuple(
                int(start + delta * ratio)
                for start, delta in zip(_TRAJECTORY_COLOR_START, _TRAJECTORY_COLOR_DELTA)
            )
            points.append((sim_position, Color(*channels)))

        return points