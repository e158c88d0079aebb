import pytest

from orbitdrive.game_state import GameState, PlanetState, RocketState
from orbitdrive.geometry import Color, Vec2
from orbitdrive.packet import Packet, PacketError


def _rocket(player_id=3):
    return RocketState(
        player_id=player_id,
        position=Vec2(10.5, -4.0),
        velocity=Vec2(0.25, 1.0),
        rotation=90.0,
        angular_velocity=-1.5,
        thrust_level=0.5,
        mass=2.0,
        color=Color(1, 2, 3, 4),
    )


def _planet(planet_id=1):
    return PlanetState(
        planet_id=planet_id,
        position=Vec2(400.0, 300.0),
        velocity=Vec2(0.0, 12.5),
        mass=6000.0,
        radius=84.0,
        color=Color.GREEN,
    )


def test_rocket_state_round_trip():
    state = _rocket()
    assert RocketState.read_from(Packet(state.write_to(Packet()).data)) == state


def test_planet_state_round_trip():
    state = _planet()
    assert PlanetState.read_from(Packet(state.write_to(Packet()).data)) == state


def test_game_state_round_trip():
    state = GameState(
        sequence_number=42,
        timestamp=3.5,
        rockets=[_rocket(1), _rocket(2)],
        planets=[_planet(0), _planet(1)],
    )
    reader = Packet(state.write_to(Packet()).data)
    assert GameState.read_from(reader) == state
    assert reader.end_of_packet


def test_empty_game_state_layout():
    data = GameState().write_to(Packet()).data
    assert len(data) == 16
    assert GameState.read_from(Packet(data)) == GameState()


def test_sequence_number_truncated_to_32_bits():
    state = GameState(sequence_number=2**32 + 9)
    assert GameState.read_from(Packet(state.write_to(Packet()).data)).sequence_number == 9


def test_rocket_state_starts_with_player_id():
    data = _rocket(player_id=7).write_to(Packet()).data
    assert Packet(data[:4]).get_int32() == 7


def test_truncated_game_state_raises():
    data = GameState(rockets=[_rocket()]).write_to(Packet()).data
    with pytest.raises(PacketError):
        GameState.read_from(Packet(data[:-1]))


def test_defaults_are_independent():
    first = GameState()
    first.rockets.append(_rocket())
    assert GameState().rockets == []