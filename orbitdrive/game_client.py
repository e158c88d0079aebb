"""The client-side view of a networked game.

The client predicts its own player locally, corrects towards the server's
state, and interpolates remote players between received snapshots.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass

from orbitdrive import constants
from orbitdrive.game_state import GameState, RocketState
from orbitdrive.geometry import Color, Vec2
from orbitdrive.gravity import GravitySimulator
from orbitdrive.planet import Planet
from orbitdrive.player_input import PlayerInput
from orbitdrive.vehicle_manager import VehicleManager, VehicleType

log = logging.getLogger(__name__)

_ROTATION_RATE = 6.0
_FRAME_RATE = 60.0
_HARD_CORRECTION_DISTANCE = 20.0
_SOFT_CORRECTION_DISTANCE = 5.0
_SOFT_CORRECTION_FACTOR = 0.2
_ROTATION_CORRECTION_THRESHOLD = 45.0
_DEFAULT_LATENCY_COMPENSATION = 0.05

_KEY_THRUST_FORWARD = "w"
_KEY_THRUST_BACKWARD = "s"
_KEY_ROTATE_LEFT = "a"
_KEY_ROTATE_RIGHT = "d"
_KEY_SWITCH_VEHICLE = "l"


def _remote_color(player_id: int) -> Color:
    return Color(
        100 + (player_id * 50) % 155,
        100 + (player_id * 30) % 155,
        100 + (player_id * 70) % 155,
    )


@dataclass
class RemotePlayerState:
    """Interpolation data for one remote player between two snapshots."""

    start_position: Vec2
    start_velocity: Vec2
    target_position: Vec2
    target_velocity: Vec2
    rotation: float
    timestamp: float


class GameClient:
    """A client's local world: its own player, remote players and the planets."""

    def __init__(self) -> None:
        self.simulator = GravitySimulator()
        self.planets: list[Planet] = []
        self.remote_players: dict[int, VehicleManager] = {}
        self.local_player: VehicleManager | None = None
        self.local_player_id = 0
        self.last_state = GameState()
        self.state_timestamp = 0.0
        self.remote_player_states: dict[int, RemotePlayerState] = {}
        self.latency_compensation = _DEFAULT_LATENCY_COMPENSATION

    def initialize(self) -> None:
        """Create placeholder planets and the local player until the server reports."""
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

        home = self.planets[0]
        initial_position = home.position + Vec2(0.0, -(home.radius + constants.ROCKET_SIZE))
        self.local_player = VehicleManager(initial_position, self.planets)

        self.simulator.simulate_planet_gravity = True
        for planet in self.planets:
            self.simulator.add_planet(planet)
        self.simulator.add_vehicle_manager(self.local_player)

    def update(self, delta_time: float) -> None:
        """Advance gravity, planets, the local player and remote players."""
        self.simulator.update(delta_time)
        for planet in self.planets:
            planet.update(delta_time)
        if self.local_player is not None:
            self.local_player.update(delta_time)
        for manager in self.remote_players.values():
            manager.update(delta_time)

    def _correct_local_player(self, rocket_state: RocketState) -> None:
        if self.local_player is None:
            return
        rocket = self.local_player.rocket
        offset = rocket_state.position - rocket.position
        gap = offset.length()
        if gap > _HARD_CORRECTION_DISTANCE:
            rocket.position = rocket_state.position
            rocket.velocity = rocket_state.velocity
        elif gap > _SOFT_CORRECTION_DISTANCE:
            rocket.position = rocket.position + offset * _SOFT_CORRECTION_FACTOR
            velocity_offset = rocket_state.velocity - rocket.velocity
            rocket.velocity = rocket.velocity + velocity_offset * _SOFT_CORRECTION_FACTOR

        if abs(rocket_state.rotation - rocket.rotation) > _ROTATION_CORRECTION_THRESHOLD:
            rocket.rotation = rocket_state.rotation

    def _update_remote_player(self, rocket_state: RocketState, timestamp: float) -> None:
        player_id = rocket_state.player_id
        manager = self.remote_players.get(player_id)
        if manager is None:
            manager = VehicleManager(rocket_state.position, self.planets)
            self.remote_players[player_id] = manager
            self.simulator.add_vehicle_manager(manager)
            manager.rocket.color = _remote_color(player_id)
            log.info("Added remote player with ID: %d", player_id)

        rocket = manager.rocket
        previous_position = rocket.position
        previous_velocity = rocket.velocity

        rocket.position = rocket_state.position
        rocket.velocity = rocket_state.velocity
        rocket.rotation = rocket_state.rotation
        rocket.thrust_level = rocket_state.thrust_level

        self.remote_player_states[player_id] = RemotePlayerState(
            previous_position,
            previous_velocity,
            rocket_state.position,
            rocket_state.velocity,
            rocket_state.rotation,
            timestamp,
        )

    def process_game_state(self, state: GameState) -> None:
        """Apply a server snapshot to planets, the local player and remote players."""
        self.last_state = state
        self.state_timestamp = state.timestamp

        for planet_state in state.planets:
            while planet_state.planet_id >= len(self.planets):
                planet = Planet(Vec2(0.0, 0.0), 0, 1.0)
                self.planets.append(planet)
                self.simulator.add_planet(planet)
            planet = self.planets[planet_state.planet_id]
            planet.position = planet_state.position
            planet.velocity = planet_state.velocity
            planet.mass = planet_state.mass

        for rocket_state in state.rockets:
            if rocket_state.player_id == self.local_player_id:
                self._correct_local_player(rocket_state)
            else:
                self._update_remote_player(rocket_state, state.timestamp)

        present = {rocket_state.player_id for rocket_state in state.rockets}
        departed = [player_id for player_id in self.remote_players if player_id not in present]
        for player_id in departed:
            log.info("Remote player %d disconnected", player_id)
            manager = self.remote_players.pop(player_id)
            self.simulator.remove_vehicle_manager(manager)
            self.remote_player_states.pop(player_id, None)

    def local_player_input(
        self, delta_time: float, pressed_keys: Collection[str] = ()
    ) -> PlayerInput:
        """Build the local player's input from the keys held down (W, S, A, D, L)."""
        keys = {key.lower() for key in pressed_keys}
        player_input = PlayerInput(
            player_id=self.local_player_id,
            thrust_forward=_KEY_THRUST_FORWARD in keys,
            thrust_backward=_KEY_THRUST_BACKWARD in keys,
            rotate_left=_KEY_ROTATE_LEFT in keys,
            rotate_right=_KEY_ROTATE_RIGHT in keys,
            switch_vehicle=_KEY_SWITCH_VEHICLE in keys,
            delta_time=delta_time,
        )
        if (
            self.local_player is not None
            and self.local_player.active_vehicle_type is VehicleType.ROCKET
        ):
            player_input.thrust_level = self.local_player.rocket.thrust_level
        return player_input

    def apply_local_input(self, player_input: PlayerInput) -> None:
        """Apply input to the local player at once for a responsive feel."""
        manager = self.local_player
        if manager is None:
            return

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

    def interpolate_remote_players(self, current_time: float) -> None:
        """Blend each remote rocket from its previous to its latest received state."""
        for player_id, data in self.remote_player_states.items():
            manager = self.remote_players.get(player_id)
            if manager is None:
                continue
            elapsed = current_time - data.timestamp
            alpha = min(elapsed / self.latency_compensation, 1.0)
            rocket = manager.rocket
            rocket.position = (
                data.start_position + (data.target_position - data.start_position) * alpha
            )
            rocket.velocity = (
                data.start_velocity + (data.target_velocity - data.start_velocity) * alpha
            )