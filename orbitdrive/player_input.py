"""Player control input sent from clients to the server."""

from __future__ import annotations

from dataclasses import dataclass

from orbitdrive.packet import Packet


@dataclass
class PlayerInput:
    """The controls held by one player during one frame."""

    player_id: int = 0
    thrust_forward: bool = False
    thrust_backward: bool = False
    rotate_left: bool = False
    rotate_right: bool = False
    switch_vehicle: bool = False
    thrust_level: float = 0.0
    delta_time: float = 0.0

    def write_to(self, packet: Packet) -> Packet:
        packet.put_int32(self.player_id)
        for flag in (
            self.thrust_forward,
            self.thrust_backward,
            self.rotate_left,
            self.rotate_right,
            self.switch_vehicle,
        ):
            packet.put_bool(flag)
        return packet.put_float(self.thrust_level).put_float(self.delta_time)

    @classmethod
    def read_from(cls, packet: Packet) -> PlayerInput:
        return cls(
            player_id=packet.get_int32(),
            thrust_forward=packet.get_bool(),
            thrust_backward=packet.get_bool(),
            rotate_left=packet.get_bool(),
            rotate_right=packet.get_bool(),
            switch_vehicle=packet.get_bool(),
            thrust_level=packet.get_float(),
            delta_time=packet.get_float(),
        )