import pytest

from orbitdrive.game_client import GameClient, RemotePlayerState
from orbitdrive.game_state import GameState, PlanetState, RocketState
from orbitdrive.geometry import Color, Vec2, distance
from orbitdrive.player_input import PlayerInput

FAR = Vec2(50000.0, 50000.0)


def _remote(player_id, position, velocity=Vec2(), rotation=0.0, thrust_level=0.0):
    return RocketState(
        player_id=player_id,
        position=position,
        velocity=velocity,
        rotation=rotation,
        thrust_level=thrust_level,
        mass=1.0,
    )


@pytest.fixture
def client():
    game = GameClient()
    game.initialize()
    return game


def test_initialize_places_local_player_on_main_planet(client):
    assert len(client.planets) == 2
    home = client.planets[0]
    rocket = client.local_player.rocket
    assert distance(rocket.position, home.position) == pytest.approx(home.radius + 15.0)
    assert client.simulator.vehicle_manager is client.local_player


def test_process_game_state_adds_remote_player():
    game = GameClient()
    game.process_game_state(
        GameState(1, 2.0, [_remote(3, FAR, Vec2(1.0, 2.0), rotation=30.0, thrust_level=5.0)], [])
    )
    assert set(game.remote_players) == {3}
    rocket = game.remote_players[3].rocket
    assert rocket.position == FAR
    assert rocket.velocity == Vec2(1.0, 2.0)
    assert rocket.rotation == 30.0
    assert rocket.thrust_level == 1.0
    assert game.state_timestamp == 2.0


def test_remote_player_colors_follow_id():
    game = GameClient()
    game.process_game_state(GameState(1, 0.0, [_remote(1, FAR), _remote(2, FAR * 2)], []))
    assert game.remote_players[1].rocket.color == Color(150, 130, 170)
    for manager in game.remote_players.values():
        color = manager.rocket.color
        assert all(100 <= channel < 255 for channel in (color.r, color.g, color.b))
    assert game.remote_players[1].rocket.color != game.remote_players[2].rocket.color


def test_missing_remote_players_are_removed():
    game = GameClient()
    game.process_game_state(GameState(1, 0.0, [_remote(1, FAR), _remote(2, FAR * 2)], []))
    game.process_game_state(GameState(2, 0.1, [_remote(2, FAR * 2)], []))
    assert set(game.remote_players) == {2}
    assert set(game.remote_player_states) == {2}


def test_planets_are_created_up_to_reported_id():
    game = GameClient()
    planet_state = PlanetState(planet_id=2, position=Vec2(7.0, 8.0), velocity=Vec2(1.0, 0.0), mass=10000.0)
    game.process_game_state(GameState(1, 0.0, [], [planet_state]))
    assert len(game.planets) == 3
    assert len(game.simulator.planets) == 3
    planet = game.planets[2]
    assert planet.position == Vec2(7.0, 8.0)
    assert planet.velocity == Vec2(1.0, 0.0)
    assert planet.radius == pytest.approx(100.0)


def test_large_local_error_is_hard_corrected(client):
    rocket = client.local_player.rocket
    target = rocket.position + Vec2(30.0, 0.0)
    client.process_game_state(GameState(1, 0.0, [_remote(0, target, Vec2(3.0, 4.0))], []))
    assert rocket.position == target
    assert rocket.velocity == Vec2(3.0, 4.0)
    assert client.remote_players == {}


def test_medium_local_error_is_smoothed(client):
    rocket = client.local_player.rocket
    start = rocket.position
    target = start + Vec2(10.0, 0.0)
    client.process_game_state(GameState(1, 0.0, [_remote(0, target)], []))
    assert distance(rocket.position, target) == pytest.approx(0.8 * distance(start, target))
    assert distance(start, rocket.position) == pytest.approx(0.2 * distance(start, target))


def test_small_local_error_is_ignored(client):
    rocket = client.local_player.rocket
    start = rocket.position
    client.process_game_state(GameState(1, 0.0, [_remote(0, start + Vec2(2.0, 0.0))], []))
    assert rocket.position == start


def test_rotation_corrected_only_when_far_off(client):
    rocket = client.local_player.rocket
    position = rocket.position
    client.process_game_state(GameState(1, 0.0, [_remote(0, position, rotation=30.0)], []))
    assert rocket.rotation == 0.0
    client.process_game_state(GameState(2, 0.0, [_remote(0, position, rotation=90.0)], []))
    assert rocket.rotation == 90.0


def test_interpolation_between_snapshots():
    game = GameClient()
    start = FAR
    end = FAR + Vec2(100.0, 0.0)
    game.process_game_state(GameState(1, 0.0, [_remote(1, start)], []))
    game.process_game_state(GameState(2, 1.0, [_remote(1, end)], []))
    data = game.remote_player_states[1]
    assert isinstance(data, RemotePlayerState)
    assert data.start_position == start and data.target_position == end

    rocket = game.remote_players[1].rocket
    game.interpolate_remote_players(1.0)
    assert rocket.position == start
    game.interpolate_remote_players(1.0 + game.latency_compensation / 2)
    assert rocket.position.x == pytest.approx((start.x + end.x) / 2)
    game.interpolate_remote_players(10.0)
    assert rocket.position == end


def test_local_player_input_reads_keys(client):
    client.local_player_id = 4
    client.local_player.rocket.thrust_level = 0.25
    player_input = client.local_player_input(0.1, {"W", "a"})
    assert player_input.player_id == 4
    assert player_input.thrust_forward and player_input.rotate_left
    assert not (player_input.thrust_backward or player_input.rotate_right or player_input.switch_vehicle)
    assert player_input.thrust_level == 0.25
    assert player_input.delta_time == 0.1


def test_apply_local_input_thrusts_and_sets_level(client):
    rocket = client.local_player.rocket
    client.apply_local_input(PlayerInput(thrust_forward=True, thrust_level=0.5, delta_time=0.1))
    assert rocket.velocity.x == pytest.approx(0.0)
    assert rocket.velocity.y == pytest.approx(-1.0)
    assert rocket.thrust_level == 0.5


def test_apply_local_input_rotations_cancel(client):
    rocket = client.local_player.rocket
    client.apply_local_input(PlayerInput(rotate_left=True, rotate_right=True, delta_time=0.1))
    assert rocket.angular_velocity == pytest.approx(0.0)
    client.apply_local_input(PlayerInput(rotate_right=True, delta_time=0.1))
    assert rocket.angular_velocity > 0


def test_apply_local_input_without_player_is_harmless():
    game = GameClient()
    game.apply_local_input(PlayerInput(thrust_forward=True))
    assert game.local_player is None


def test_update_moves_orbiting_planet(client):
    secondary = client.planets[1]
    before = secondary.position
    client.update(0.5)
    assert secondary.position.y > before.y
    assert client.planets[0].position == Vec2(400.0, 300.0)