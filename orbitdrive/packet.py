"""A byte packet for the game's wire messages.

Values are written one after another with no framing. Integers and floats
are stored in network (big-endian) byte order, booleans as a single byte.
"""

from __future__ import annotations

import struct

from orbitdrive.geometry import Color, Vec2


class PacketError(ValueError):
    """Raised when a packet holds too few bytes for the value being read."""


_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")
_UINT8 = struct.Struct(">B")
_FLOAT = struct.Struct(">f")


class Packet:
    """An append-only buffer with a read cursor."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)
        self._read_position = 0

    @property
    def data(self) -> bytes:
        """All bytes written to or loaded into the packet."""
        return bytes(self._data)

    @property
    def end_of_packet(self) -> bool:
        """Whether every byte has been read."""
        return self._read_position >= len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def _put(self, layout: struct.Struct, value: float | int) -> Packet:
        try:
            self._data += layout.pack(value)
        except (struct.error, OverflowError) as exc:
            raise ValueError(f"value cannot be packed: {value!r}") from exc
        return self

    def _get(self, layout: struct.Struct) -> float | int:
        end = self._read_position + layout.size
        if end > len(self._data):
            raise PacketError(
                f"need {layout.size} bytes at offset {self._read_position}, "
                f"packet holds {len(self._data)}"
            )
        (value,) = layout.unpack_from(self._data, self._read_position)
        self._read_position = end
        return value

    def put_int32(self, value: int) -> Packet:
        return self._put(_INT32, value)

    def put_uint32(self, value: int) -> Packet:
        return self._put(_UINT32, value)

    def put_uint8(self, value: int) -> Packet:
        return self._put(_UINT8, value)

    def put_bool(self, value: bool) -> Packet:
        return self._put(_UINT8, 1 if value else 0)

    def put_float(self, value: float) -> Packet:
        return self._put(_FLOAT, value)

    def put_vec2(self, value: Vec2) -> Packet:
        return self.put_float(value.x).put_float(value.y)

    def put_color(self, value: Color) -> Packet:
        for channel in (value.r, value.g, value.b, value.a):
            self.put_uint8(channel)
        return self

    def get_int32(self) -> int:
        return int(self._get(_INT32))

    def get_uint32(self) -> int:
        return int(self._get(_UINT32))

    def get_uint8(self) -> int:
        return int(self._get(_UINT8))

    def get_bool(self) -> bool:
        return self._get(_UINT8) != 0

    def get_float(self) -> float:
        return float(self._get(_FLOAT))

    def get_vec2(self) -> Vec2:
        x = self.get_float()
        y = self.get_float()
        return Vec2(x, y)

    def get_color(self) -> Color:
        r = self.get_uint8()
        g = self.get_uint8()
        b = self.get_uint8()
        a = self.get_uint8()
        return Color(r, g, b, a)