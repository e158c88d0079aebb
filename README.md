# orbitdrive

`orbitdrive` is the simulation core of a small multiplayer space game. A
heavy main planet sits pinned at the centre of the world while a smaller
moon circles it. Players fly rockets under real inverse-square gravity.
They can land, switch to a surface rover, drive around a planet and take
off again.

The package has no graphical front end. It produces positions, velocities,
predicted trajectories and outline points, and any renderer can draw these.

## What is inside

- `orbitdrive.geometry`: `Vec2` and `Color` value types, plus `normalize`
  and `distance`.
- `orbitdrive.constants`: the tuning constants of the world, such as the
  gravitational constant, planet masses, orbit period and vehicle sizes.
- `orbitdrive.planet`: `Planet`, whose radius follows its mass by a
  cube-root law. It can also predict its own orbit path.
- `orbitdrive.parts`: `RocketPart` and `Engine`, the attachable rocket parts.
- `orbitdrive.rocket`: `Rocket`, which covers thrust, rotation, surface
  contact, merging and Verlet-integrated trajectory prediction.
- `orbitdrive.car`: `Car`, a rover that sticks to a planet surface.
- `orbitdrive.vehicle_manager`: `VehicleManager` and `VehicleType`. These
  switch one player between rocket and rover.
- `orbitdrive.gravity`: `GravitySimulator`, which handles planet-planet,
  planet-rocket and rocket-rocket attraction.
- `orbitdrive.packet`: `Packet` and `PacketError`, a big-endian binary
  packet used for the wire format.
- `orbitdrive.game_state` and `orbitdrive.player_input`: the
  `GameState`, `RocketState`, `PlanetState` and `PlayerInput` messages.
- `orbitdrive.game_server` and `orbitdrive.game_client`: the authoritative
  `GameServer`, and the predicting and interpolating `GameClient`.
- `orbitdrive.button`: `Button`, a hover-aware clickable rectangle for menus.
- `orbitdrive.network`: `NetworkManager` and `MessageType`, which run the
  TCP host/join layer.

## A short session

```python
from orbitdrive.game_server import GameServer
from orbitdrive.game_state import GameState
from orbitdrive.geometry import Color, Vec2
from orbitdrive.packet import Packet
from orbitdrive.player_input import PlayerInput

server = GameServer()
server.initialize()
server.add_player(1, Vec2(400.0, -20.0), Color(255, 0, 0, 255))

server.handle_player_input(1, PlayerInput(player_id=1, thrust_forward=True,
                                          thrust_level=1.0, delta_time=1 / 60))
for _ in range(60):
    server.update(1 / 60)

state = server.game_state()

packet = Packet()
state.write_to(packet)
received = GameState.read_from(packet)
print(received.rockets[0].position)
```

On the receiving side, pass each `GameState` to `GameClient.process_game_state`.
Then call `GameClient.interpolate_remote_players` on every frame so that
other players move smoothly between server updates.

## Running the tests

The tests use pytest, which is listed in the `test` extra.