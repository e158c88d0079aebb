"""The authoritative game world run by the host."""

from __future__ import annotations

import logging

from orbitdrive import constants
from orbitdrive.game_state import GameState, PlanetState, RocketState
from orbitdrive.geometry import Color, Vec2
from orbitdrive.gravity import GravitySimulator
from orbitdrive.planet import Planet
from orbitdrive.player_input import PlayerInput
from orbitdrive.vehicle_manager import VehicleManager, VehicleType

log = logging.getLogger(__name__)

_ROTATION_RATE = 6.0
_FRAME_RATE = 60.0


class GameServer:
    """Owns the planets and every player's vehicles and steps the simulation."""

    def __init__(self) -> None:
        self.simulator = GravitySimulator()
        self.planets: list[Planet] = []
        self.players: dict[int, VehicleManager] = {}
        self.sequence_number = 0
        self.game_time = 0.0

    def initialize(self) -> None:
        """Create the main planet and its orbiting companion."""
        main_planet = Planet(
            Vec2(constants.MAIN_PLANET_X, constants.MAIN_PLANET_Y),
            0,
            constants.MAIN_PLANET_MASS,
            Color.BLUE,
        )
        main_planet.velocity = Vec2(0.0, 0.0)
        self.planets.append(main_planet)

        secondary_planet = Planet(
            Vec2(constants.SECONDARY_PLANET_X, constants.SECONDARY_PLANET_Y),
            0,
            constants.SECONDARY_PLANET_MASS,
            Color.GREEN,
        )
        secondary_planet.velocity = Vec2(0.0, constants.SECONDARY_PLANET_ORBITAL_VELOCITY)
        self.planets.append(secondary_planet)

        self.simulator.simulate_planet_gravity = True
        for planet in self.planets:
            self.simulator.add_planet(planet)

    def _spawn_position(self) -> Vec2:
        home = self.planets[0]
        return home.position + Vec2(0.0, -(home.radius + constants.ROCKET_SIZE))

    def add_player(
        self, player_id: int, initial_position: Vec2, color: Color = Color.WHITE
    ) -> int:
        """Add a player unless one with this id exists; return the id."""
        if player_id in self.players:
            return player_id
        manager = VehicleManager(initial_position, self.planets)
        manager.rocket.color = color
        self.simulator.add_vehicle_manager(manager)
        self.players[player_id] = manager
        log.info("Added player with ID: %d", player_id)
        return player_id

    def remove_player(self, player_id: int) -> None:
        """Remove a player if present."""
        manager = self.players.pop(player_id, None)
        if manager is not None:
            self.simulator.remove_vehicle_manager(manager)

    def player(self, player_id: int) -> VehicleManager | None:
        """Return the player's vehicle manager, or None if unknown."""
        return self.players.get(player_id)

    def update(self, delta_time: float) -> None:
        """Advance the world by ``delta_time`` seconds."""
        self.game_time += delta_time
        self.simulator.update(delta_time)
        for planet in self.planets:
            planet.update(delta_time)
        for manager in self.players.values():
            manager.update(delta_time)
        self.sequence_number += 1

    def handle_player_input(self, player_id: int, player_input: PlayerInput) -> None:
        """Apply a player's controls; an unknown id spawns that player instead."""
        manager = self.players.get(player_id)
        if manager is None:
            log.info("Unknown player ID: %d, creating new player", player_id)
            manager = VehicleManager(self._spawn_position(), self.planets)
            self.players[player_id] = manager
            self.simulator.add_vehicle_manager(manager)
            return

        log.debug("Server applying input to player ID: %d", player_id)
        turn = _ROTATION_RATE * player_input.delta_time * _FRAME_RATE
        if player_input.thrust_forward:
            manager.apply_thrust(1.0)
        if player_input.thrust_backward:
            manager.apply_thrust(-0.5)
        if player_input.rotate_left:
            manager.rotate(-turn)
        if player_input.rotate_right:
            manager.rotate(turn)
        if player_input.switch_vehicle:
            manager.switch_vehicle()

        if manager.active_vehicle_type is VehicleType.ROCKET:
            manager.rocket.thrust_level = player_input.thrust_level

    def game_state(self) -> GameState:
        """Snapshot the world: rockets of players flying them, ordered by id, and all planets."""
        rockets = [
            RocketState(
                player_id=player_id,
                position=manager.rocket.position,
                velocity=manager.rocket.velocity,
                rotation=manager.rocket.rotation,
                angular_velocity=0.0,
                thrust_level=manager.rocket.thrust_level,
                mass=manager.rocket.mass,
                color=manager.rocket.color,
            )
            for player_id, manager in sorted(self.players.items())
            if manager.active_vehicle_type is VehicleType.ROCKET
        ]
        planets = [
            PlanetState(
                planet_id=index,
                position=planet.position,
                velocity=planet.velocity,
                mass=planet.mass,
                radius=planet.radius,
                color=planet.color,
            )
            for index, planet in enumerate(self.planets)
        ]
        return GameState(self.sequence_number, self.game_time, rockets, planets)