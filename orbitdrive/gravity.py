"""Newtonian gravity between planets, rockets and a player's vehicle."""

from __future__ import annotations

from orbitdrive import constants
from orbitdrive.geometry import normalize
from orbitdrive.planet import Planet
from orbitdrive.rocket import Rocket
from orbitdrive.vehicle_manager import VehicleManager, VehicleType


def _pull_toward_planets(rocket: Rocket, planets: list[Planet], delta_time: float) -> None:
    for planet in planets:
        direction = planet.position - rocket.position
        dist = direction.length()
        if dist > planet.radius + constants.TRAJECTORY_COLLISION_RADIUS:
            force = constants.G * planet.mass * rocket.mass / (dist * dist)
            acceleration = normalize(direction) * force / rocket.mass
            rocket.velocity = rocket.velocity + acceleration * delta_time


class GravitySimulator:
    """Applies gravity to registered bodies each step.

    The first planet added is pinned: it pulls on the others but is never moved.
    When a vehicle manager is attached, only its rocket is pulled; otherwise the
    individually registered rockets are pulled and attract each other.
    """

    def __init__(self) -> None:
        self.planets: list[Planet] = []
        self.rockets: list[Rocket] = []
        self.vehicle_manager: VehicleManager | None = None
        self.simulate_planet_gravity = True

    def add_planet(self, planet: Planet) -> None:
        self.planets.append(planet)

    def add_rocket(self, rocket: Rocket) -> None:
        self.rockets.append(rocket)

    def clear_rockets(self) -> None:
        self.rockets.clear()

    def add_vehicle_manager(self, manager: VehicleManager) -> None:
        """Attach the vehicle manager whose rocket feels planet gravity."""
        self.vehicle_manager = manager

    def remove_vehicle_manager(self, manager: VehicleManager) -> None:
        """Detach ``manager`` if it is the one attached."""
        if self.vehicle_manager is manager:
            self.vehicle_manager = None

    def add_rocket_gravity_interactions(self, delta_time: float) -> None:
        """Let every pair of registered rockets attract each other."""
        for i, first in enumerate(self.rockets):
            for second in self.rockets[i + 1:]:
                direction = second.position - first.position
                dist = max(direction.length(), constants.TRAJECTORY_COLLISION_RADIUS)
                force = constants.G * first.mass * second.mass / (dist * dist)
                unit = normalize(direction)
                first.velocity = first.velocity + unit * force / first.mass * delta_time
                second.velocity = second.velocity - unit * force / second.mass * delta_time

    def _apply_planet_gravity(self, delta_time: float) -> None:
        for i, first in enumerate(self.planets):
            for second in self.planets[i + 1:]:
                if i == 0:
                    direction = first.position - second.position
                    dist = direction.length()
                    if dist > first.radius + second.radius:
                        force = constants.G * first.mass * second.mass / (dist * dist)
                        accel = normalize(direction) * force / second.mass
                        second.velocity = second.velocity + accel * delta_time
                else:
                    direction = second.position - first.position
                    dist = direction.length()
                    if dist > first.radius + second.radius:
                        force = constants.G * first.mass * second.mass / (dist * dist)
                        unit = normalize(direction)
                        first.velocity = first.velocity + unit * force / first.mass * delta_time
                        second.velocity = second.velocity - unit * force / second.mass * delta_time

    def update(self, delta_time: float) -> None:
        """Apply one step of gravity to velocities."""
        if self.simulate_planet_gravity:
            self._apply_planet_gravity(delta_time)

        manager = self.vehicle_manager
        if manager is not None:
            if manager.active_vehicle_type is VehicleType.ROCKET:
                _pull_toward_planets(manager.rocket, self.planets, delta_time)
        else:
            for rocket in self.rockets:
                _pull_toward_planets(rocket, self.planets, delta_time)
            self.add_rocket_gravity_interactions(delta_time)