"""TCP networking between a hosting player and joining clients.

Every message is a packet framed on the stream by a 32-bit big-endian byte
count and starts with a 32-bit message type. The host accepts clients, hands
each one a player id, relays their inputs to the game and broadcasts the game
state; a client reports its inputs and applies the states it receives.
"""

from __future__ import annotations

import enum
import logging
import socket
import struct
import time
from collections.abc import Callable

from orbitdrive import constants
from orbitdrive.game_state import GameState
from orbitdrive.geometry import Color, Vec2
from orbitdrive.packet import Packet, PacketError
from orbitdrive.player_input import PlayerInput

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orbitdrive.game_client import GameClient
    from orbitdrive.game_server import GameServer

log = logging.getLogger(__name__)

_FRAME_HEADER = struct.Struct(">I")
_RECEIVE_CHUNK = 65536
_CONNECT_TIMEOUT = 5.0
_CONNECTION_TIMEOUT = 5.0
_HEARTBEAT_INTERVAL = 1.0
_STATE_INTERVAL_MS = 50
_SPAWN_CLEARANCE = 30.0


class MessageType(enum.IntEnum):
    """The kind of message a packet carries."""

    GAME_STATE = 1
    PLAYER_INPUT = 2
    PLAYER_ID = 3
    HEARTBEAT = 4
    DISCONNECT = 5


class _Status(enum.Enum):
    DONE = enum.auto()
    NOT_READY = enum.auto()
    DISCONNECTED = enum.auto()


def _message(message_type: MessageType) -> Packet:
    return Packet().put_uint32(message_type)


class _Connection:
    """A non-blocking socket that sends and receives whole packets."""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock
        self._buffer = bytearray()
        self._closed = False

    def set_blocking(self, blocking: bool) -> None:
        self.sock.setblocking(blocking)

    def remote_address(self) -> str | None:
        try:
            return str(self.sock.getpeername()[0])
        except OSError:
            return None

    def send(self, packet: Packet) -> bool:
        try:
            self.sock.sendall(_FRAME_HEADER.pack(len(packet)) + packet.data)
        except OSError:
            return False
        return True

    def receive(self) -> tuple[_Status, Packet | None]:
        frame = self._next_frame()
        if frame is None:
            self._fill()
            frame = self._next_frame()
        if frame is not None:
            return _Status.DONE, Packet(frame)
        if self._closed:
            return _Status.DISCONNECTED, None
        return _Status.NOT_READY, None

    def close(self) -> None:
        self._closed = True
        self.sock.close()

    def _fill(self) -> None:
        while not self._closed:
            try:
                chunk = self.sock.recv(_RECEIVE_CHUNK)
            except BlockingIOError:
                return
            except OSError:
                self._closed = True
                return
            if not chunk:
                self._closed = True
                return
            self._buffer += chunk

    def _next_frame(self) -> bytes | None:
        if len(self._buffer) < _FRAME_HEADER.size:
            return None
        (size,) = _FRAME_HEADER.unpack_from(self._buffer)
        end = _FRAME_HEADER.size + size
        if len(self._buffer) < end:
            return None
        frame = bytes(self._buffer[_FRAME_HEADER.size:end])
        del self._buffer[:end]
        return frame


class NetworkManager:
    """Hosts a game or joins one, and exchanges messages on each update."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.is_host = False
        self.port = 0
        self.connected = False
        self.game_server: GameServer | None = None
        self.game_client: GameClient | None = None
        self.packet_loss = 0
        self.ping_ms = 0
        self.on_player_input_received: Callable[[int, PlayerInput], None] | None = None
        self.on_game_state_received: Callable[[GameState], None] | None = None
        self._clients: list[_Connection] = []
        self._server_connection: _Connection | None = None
        self._listener: socket.socket | None = None
        now = clock()
        self._last_packet_time = now
        self._heartbeat_time = now
        self._state_send_time = now
        self._ping_time = now

    def __enter__(self) -> NetworkManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    @property
    def ping(self) -> float:
        """Milliseconds between the last two game states received."""
        return float(self.ping_ms)

    @property
    def client_count(self) -> int:
        """Number of clients connected to this host."""
        return len(self._clients)

    def host_game(self, port: int) -> bool:
        """Listen for clients on ``port`` (0 picks a free one); return success."""
        self.port = port
        self.is_host = True
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            listener.bind(("", port))
            listener.listen()
        except OSError as exc:
            listener.close()
            log.error("Failed to bind to port %d: %s", port, exc)
            return False

        self.port = listener.getsockname()[1]
        log.info("Server started on port %d", self.port)
        try:
            log.info("Local IP address: %s", socket.gethostbyname(socket.gethostname()))
        except OSError:
            log.info("Could not determine local IP address")

        listener.setblocking(False)
        self._listener = listener
        self.connected = True
        return True

    def join_game(self, address: str, port: int) -> bool:
        """Connect to a host, waiting at most five seconds; return success."""
        self.is_host = False
        log.info("Connecting to %s:%d...", address, port)
        try:
            sock = socket.create_connection((address, port), timeout=_CONNECT_TIMEOUT)
        except OSError as exc:
            log.error("Failed to connect to %s:%d: %s", address, port, exc)
            return False
        sock.setblocking(False)
        self._server_connection = _Connection(sock)
        log.info("Successfully connected to server!")
        self.connected = True
        self._last_packet_time = self._clock()
        return True

    def disconnect(self) -> None:
        """Tell the other side goodbye and close every socket."""
        if self.connected and not self.is_host and self._server_connection is not None:
            self._server_connection.send(_message(MessageType.DISCONNECT))

        if self.is_host:
            if self._listener is not None:
                self._listener.close()
                self._listener = None
            for client in self._clients:
                client.send(_message(MessageType.DISCONNECT))
                client.close()
            self._clients.clear()
        elif self._server_connection is not None:
            self._server_connection.close()
            self._server_connection = None

        self.connected = False
        log.info("Disconnected from network")

    def enable_robust_networking(self) -> None:
        """Make every socket non-blocking."""
        if self.is_host:
            for client in self._clients:
                client.set_blocking(False)
        elif self._server_connection is not None:
            self._server_connection.set_blocking(False)

    def update(self) -> None:
        """Handle timeouts, heartbeats, connections and incoming messages."""
        if not self.connected:
            return

        now = self._clock()
        if now - self._last_packet_time > _CONNECTION_TIMEOUT:
            log.error("Connection timed out - no data received for 5 seconds")
            self.disconnect()
            return

        if now - self._heartbeat_time > _HEARTBEAT_INTERVAL:
            heartbeat = _message(MessageType.HEARTBEAT)
            if self.is_host:
                for client in self._clients:
                    client.send(heartbeat)
            elif self._server_connection is not None:
                self._server_connection.send(heartbeat)
            self._heartbeat_time = now

        if self.is_host:
            self._update_host()
        else:
            self._update_client()

    def send_game_state(self, state: GameState) -> bool:
        """Send a state to every client; host only. Return whether all sends succeeded."""
        if not self.is_host or not self.connected:
            return False
        packet = _message(MessageType.GAME_STATE)
        state.write_to(packet)
        all_succeeded = True
        for client in self._clients:
            if not client.send(packet):
                all_succeeded = False
                self.packet_loss += 1
        return all_succeeded

    def send_player_input(self, player_input: PlayerInput) -> bool:
        """Send input to the host; client only. Return whether the send succeeded."""
        if self.is_host or not self.connected or self._server_connection is None:
            return False
        packet = _message(MessageType.PLAYER_INPUT)
        player_input.write_to(packet)
        if not self._server_connection.send(packet):
            self.packet_loss += 1
            return False
        return True

    def _update_host(self) -> None:
        self._accept_client()

        index = 0
        while index < len(self._clients):
            status, packet = self._clients[index].receive()
            if status is _Status.DONE and packet is not None:
                self._last_packet_time = self._clock()
                if self._handle_client_message(index, packet):
                    continue
            elif status is _Status.DISCONNECTED:
                self._drop_client(index)
                continue
            index += 1

        now = self._clock()
        if int((now - self._state_send_time) * 1000) > _STATE_INTERVAL_MS:
            self._state_send_time = now
            if self.game_server is not None:
                self.send_game_state(self.game_server.game_state())

    def _accept_client(self) -> None:
        if self._listener is None:
            return
        try:
            sock, _ = self._listener.accept()
        except OSError:
            return
        sock.setblocking(False)
        client = _Connection(sock)
        log.info(
            "New client connecting from: %s", client.remote_address() or "unknown address"
        )
        self._clients.append(client)
        client_id = len(self._clients)

        client.send(_message(MessageType.PLAYER_ID).put_uint32(client_id))

        if self.game_server is not None:
            home = self.game_server.planets[0]
            spawn = home.position + Vec2(
                0.0, -(home.radius + constants.ROCKET_SIZE + _SPAWN_CLEARANCE)
            )
            self.game_server.add_player(client_id, spawn, Color.RED)

        log.info("New client connected with ID: %d", client_id)

    def _handle_client_message(self, index: int, packet: Packet) -> bool:
        """Handle one message; return True when the client was removed."""
        try:
            message_type = packet.get_uint32()
            if message_type == MessageType.PLAYER_INPUT:
                player_input = PlayerInput.read_from(packet)
                if self.on_player_input_received is not None:
                    log.debug(
                        "Server received input from player ID: %d", player_input.player_id
                    )
                    self.on_player_input_received(player_input.player_id, player_input)
            elif message_type == MessageType.DISCONNECT:
                self._drop_client(index)
                return True
        except PacketError as exc:
            log.warning("Ignoring malformed packet from client %d: %s", index + 1, exc)
        return False

    def _drop_client(self, index: int) -> None:
        log.info("Client %d has disconnected", index + 1)
        if self.game_server is not None:
            self.game_server.remove_player(index + 1)
        self._clients[index].close()
        del self._clients[index]

    def _update_client(self) -> None:
        connection = self._server_connection
        if connection is None:
            return
        status, packet = connection.receive()
        if status is _Status.DISCONNECTED:
            log.info("Lost connection to server")
            self.connected = False
            return
        if status is not _Status.DONE or packet is None:
            return

        self._last_packet_time = self._clock()
        try:
            message_type = packet.get_uint32()
            if message_type == MessageType.PLAYER_ID:
                player_id = packet.get_uint32()
                if self.game_client is not None:
                    self.game_client.local_player_id = player_id
                    log.info("Received player ID from server: %d", player_id)
            elif message_type == MessageType.GAME_STATE:
                now = self._clock()
                self.ping_ms = int((now - self._ping_time) * 1000)
                self._ping_time = now
                state = GameState.read_from(packet)
                if self.on_game_state_received is not None:
                    self.on_game_state_received(state)
            elif message_type == MessageType.DISCONNECT:
                log.info("Disconnected from server")
                self.connected = False
                connection.close()
                self._server_connection = None
        except PacketError as exc:
            log.warning("Ignoring malformed packet from server: %s", exc)