"""Switching a player between their rocket and their car."""

from __future__ import annotations

import enum
from typing import Sequence

from orbitdrive import constants
from orbitdrive.car import Car
from orbitdrive.game_object import GameObject
from orbitdrive.geometry import Vec2, distance
from orbitdrive.planet import Planet
from orbitdrive.rocket import Rocket


class VehicleType(enum.Enum):
    """Which vehicle a player is currently controlling."""

    ROCKET = enum.auto()
    CAR = enum.auto()


class VehicleManager:
    """Owns a player's rocket and car and forwards controls to the active one."""

    def __init__(self, initial_position: Vec2, planets: Sequence[Planet]) -> None:
        self.planets = list(planets)
        self.active_vehicle_type = VehicleType.ROCKET
        self.rocket = Rocket(initial_position, Vec2(0.0, 0.0))
        self.rocket.nearby_planets = list(self.planets)
        self.car = Car(initial_position, Vec2(0.0, 0.0))

    @property
    def active_vehicle(self) -> GameObject:
        """The vehicle currently in use."""
        if self.active_vehicle_type is VehicleType.ROCKET:
            return self.rocket
        return self.car

    def switch_vehicle(self) -> None:
        """Swap vehicles when allowed: rocket to car near a surface, car to rocket when grounded."""
        if self.active_vehicle_type is VehicleType.ROCKET:
            can_transform = any(
                distance(self.rocket.position, planet.position)
                <= planet.radius + constants.TRANSFORM_DISTANCE
                for planet in self.planets
            )
            if can_transform:
                self.car.initialize_from_rocket(self.rocket)
                self.car.check_grounding(self.planets)
                self.active_vehicle_type = VehicleType.CAR
        elif self.car.is_grounded:
            self.rocket.position = self.car.position
            self.rocket.velocity = Vec2(0.0, 0.0)
            self.active_vehicle_type = VehicleType.ROCKET

    def update(self, delta_time: float) -> None:
        """Advance the active vehicle."""
        if self.active_vehicle_type is VehicleType.ROCKET:
            self.rocket.nearby_planets = list(self.planets)
            self.rocket.update(delta_time)
        else:
            self.car.check_grounding(self.planets)
            self.car.update(delta_time)

    def apply_thrust(self, amount: float) -> None:
        """Thrust at full level with the rocket, or accelerate the car."""
        if self.active_vehicle_type is VehicleType.ROCKET:
            self.rocket.thrust_level = 1.0
            self.rocket.apply_thrust(amount)
        else:
            self.car.accelerate(amount)

    def rotate(self, amount: float) -> None:
        """Turn the active vehicle."""
        if self.active_vehicle_type is VehicleType.ROCKET:
            self.rocket.rotate(amount)
        else:
            self.car.rotate(amount)

    def velocity_vector(self, scale: float = 1.0) -> tuple[Vec2, Vec2] | None:
        """Return the rocket's velocity line, or None while driving the car."""
        if self.active_vehicle_type is VehicleType.ROCKET:
            return self.rocket.velocity_vector(scale)
        return None