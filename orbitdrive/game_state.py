"""Snapshots of the game world sent from the server to clients."""

from __future__ import annotations

from dataclasses import dataclass, field

from orbitdrive.geometry import Color, Vec2
from orbitdrive.packet import Packet

_UINT32_MASK = 0xFFFFFFFF


@dataclass
class RocketState:
    """Serializable state of one player's rocket."""

    player_id: int = 0
    position: Vec2 = Vec2()
    velocity: Vec2 = Vec2()
    rotation: float = 0.0
    angular_velocity: float = 0.0
    thrust_level: float = 0.0
    mass: float = 0.0
    color: Color = Color.WHITE

    def write_to(self, packet: Packet) -> Packet:
        packet.put_int32(self.player_id)
        packet.put_vec2(self.position).put_vec2(self.velocity)
        packet.put_float(self.rotation).put_float(self.angular_velocity)
        packet.put_float(self.thrust_level).put_float(self.mass)
        return packet.put_color(self.color)

    @classmethod
    def read_from(cls, packet: Packet) -> RocketState:
        return cls(
            player_id=packet.get_int32(),
            position=packet.get_vec2(),
            velocity=packet.get_vec2(),
            rotation=packet.get_float(),
            angular_velocity=packet.get_float(),
            thrust_level=packet.get_float(),
            mass=packet.get_float(),
            color=packet.get_color(),
        )


@dataclass
class PlanetState:
    """Serializable state of one planet."""

    planet_id: int = 0
    position: Vec2 = Vec2()
    velocity: Vec2 = Vec2()
    mass: float = 0.0
    radius: float = 0.0
    color: Color = Color.BLUE

    def write_to(self, packet: Packet) -> Packet:
        packet.put_int32(self.planet_id)
        packet.put_vec2(self.position).put_vec2(self.velocity)
        packet.put_float(self.mass).put_float(self.radius)
        return packet.put_color(self.color)

    @classmethod
    def read_from(cls, packet: Packet) -> PlanetState:
        return cls(
            planet_id=packet.get_int32(),
            position=packet.get_vec2(),
            velocity=packet.get_vec2(),
            mass=packet.get_float(),
            radius=packet.get_float(),
            color=packet.get_color(),
        )


@dataclass
class GameState:
    """The complete world state used for synchronisation."""

    sequence_number: int = 0
    timestamp: float = 0.0
    rockets: list[RocketState] = field(default_factory=list)
    planets: list[PlanetState] = field(default_factory=list)

    def write_to(self, packet: Packet) -> Packet:
        """Append the state; the sequence number is truncated to 32 bits."""
        packet.put_uint32(self.sequence_number & _UINT32_MASK)
        packet.put_float(self.timestamp)
        packet.put_uint32(len(self.rockets))
        for rocket in self.rockets:
            rocket.write_to(packet)
        packet.put_uint32(len(self.planets))
        for planet in self.planets:
            planet.write_to(packet)
        return packet

    @classmethod
    def read_from(cls, packet: Packet) -> GameState:
        sequence_number = packet.get_uint32()
        timestamp = packet.get_float()
        rockets = [RocketState.read_from(packet) for _ in range(packet.get_uint32())]
        planets = [PlanetState.read_from(packet) for _ in range(packet.get_uint32())]
        return cls(sequence_number, timestamp, rockets, planets)