import pytest

from orbitdrive.geometry import Color, Vec2
from orbitdrive.packet import Packet, PacketError


def test_uint32_is_big_endian():
    assert Packet().put_uint32(5).data == b"\x00\x00\x00\x05"


def test_bool_is_single_byte():
    assert Packet().put_bool(True).put_bool(False).data == b"\x01\x00"


@pytest.mark.parametrize("value", [0, 1, -1, 2**31 - 1, -(2**31)])
def test_int32_round_trip(value):
    packet = Packet(Packet().put_int32(value).data)
    assert packet.get_int32() == value
    assert packet.end_of_packet


@pytest.mark.parametrize("value", [0, 7, 2**32 - 1])
def test_uint32_round_trip(value):
    assert Packet(Packet().put_uint32(value).data).get_uint32() == value


@pytest.mark.parametrize("value", [0.0, 1.5, -0.25, 1024.0])
def test_float_round_trip(value):
    assert Packet(Packet().put_float(value).data).get_float() == value


def test_vec2_and_color_round_trip():
    color = Color(10, 20, 30, 40)
    packet = Packet().put_vec2(Vec2(0.5, -2.0)).put_color(color)
    reader = Packet(packet.data)
    assert reader.get_vec2() == Vec2(0.5, -2.0)
    assert reader.get_color() == color
    assert reader.end_of_packet


def test_bool_reads_any_nonzero_as_true():
    reader = Packet(bytes([0, 3]))
    assert reader.get_bool() is False
    assert reader.get_bool() is True


def test_reading_past_end_raises():
    reader = Packet(b"\x00\x01")
    with pytest.raises(PacketError):
        reader.get_uint32()


def test_failed_read_does_not_consume():
    reader = Packet(b"\x09")
    with pytest.raises(PacketError):
        reader.get_int32()
    assert reader.get_uint8() == 9


@pytest.mark.parametrize(
    "method, value",
    [("put_uint8", 256), ("put_uint8", -1), ("put_uint32", -1), ("put_int32", 2**31)],
)
def test_out_of_range_values_raise(method, value):
    with pytest.raises(ValueError):
        getattr(Packet(), method)(value)


def test_length_counts_written_bytes():
    packet = Packet().put_uint8(1).put_float(2.0)
    assert len(packet) == len(packet.data)
    assert not Packet(packet.data).end_of_packet