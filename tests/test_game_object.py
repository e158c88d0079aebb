import pytest

from orbitdrive.game_object import GameObject
from orbitdrive.geometry import Color, Vec2


class _Drifter(GameObject):
    def update(self, delta_time):
        self.position = self.position + self.velocity * delta_time


def test_game_object_is_abstract():
    with pytest.raises(TypeError):
        GameObject(Vec2(), Vec2(), Color.WHITE)


def test_constructor_stores_state():
    obj = _Drifter(Vec2(1.0, 2.0), Vec2(3.0, 4.0), Color.RED)
    assert obj.position == Vec2(1.0, 2.0)
    assert obj.velocity == Vec2(3.0, 4.0)
    assert obj.color == Color.RED


def test_velocity_can_be_replaced_and_used_by_update():
    obj = _Drifter(Vec2(0.0, 0.0), Vec2(0.0, 0.0), Color.WHITE)
    obj.velocity = Vec2(2.0, -1.0)
    obj.update(1.0)
    assert obj.position == Vec2(2.0, -1.0)