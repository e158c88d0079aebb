import math

import pytest

from orbitdrive import constants
from orbitdrive.geometry import Color, Vec2
from orbitdrive.parts import Engine, RocketPart


def _close(a, b):
    return math.isclose(a.x, b.x, abs_tol=1e-3) and math.isclose(a.y, b.y, abs_tol=1e-3)


def _coords(points):
    return [value for point in points for value in (point.x, point.y)]


def test_rocket_part_is_abstract():
    with pytest.raises(TypeError):
        RocketPart(Vec2(), Color.WHITE)


def test_engine_defaults_and_shape():
    engine = Engine(Vec2(0.0, constants.ROCKET_SIZE), constants.ENGINE_THRUST_POWER)
    assert engine.thrust == constants.ENGINE_THRUST_POWER
    assert engine.color == Color(255, 100, 0)
    assert engine.relative_position == Vec2(0.0, constants.ROCKET_SIZE)
    size = constants.ROCKET_SIZE
    assert engine.shape == (
        Vec2(0.0, -size * 2 / 3),
        Vec2(-size / 3, size * 2 / 3),
        Vec2(size / 3, size * 2 / 3),
    )


def test_placement_without_rotation_translates_shape():
    relative = Vec2(0.0, constants.ROCKET_SIZE)
    engine = Engine(relative, 1.0)
    rocket = Vec2(100.0, 50.0)
    points = engine.placement(rocket, 0.0)
    assert len(points) == 3
    for placed, local in zip(points, engine.shape):
        assert _close(placed, rocket + relative + local)


def test_placement_scales_offset_and_shape():
    relative = Vec2(0.0, constants.ROCKET_SIZE)
    engine = Engine(relative, 1.0)
    points = engine.placement(Vec2(0.0, 0.0), 0.0, 2.0)
    size = constants.ROCKET_SIZE
    expected = [
        0.0, (size - size * 2 / 3) * 2.0,
        -size / 3 * 2.0, (size + size * 2 / 3) * 2.0,
        size / 3 * 2.0, (size + size * 2 / 3) * 2.0,
    ]
    assert len(points) == 3
    assert _coords(points) == pytest.approx(expected, abs=1e-3)


def test_placement_half_turn_mirrors_through_rocket():
    relative = Vec2(0.0, constants.ROCKET_SIZE)
    engine = Engine(relative, 1.0)
    points = engine.placement(Vec2(0.0, 0.0), 180.0)
    size = constants.ROCKET_SIZE
    expected = [
        0.0, -(size - size * 2 / 3),
        size / 3, -(size + size * 2 / 3),
        -size / 3, -(size + size * 2 / 3),
    ]
    assert len(points) == 3
    assert _coords(points) == pytest.approx(expected, abs=1e-3)


def test_placement_preserves_distances_under_rotation():
    engine = Engine(Vec2(0.0, constants.ROCKET_SIZE), 1.0)
    rocket = Vec2(10.0, -5.0)
    plain = engine.placement(rocket, 0.0)
    turned = engine.placement(rocket, 37.0)
    for a, b in zip(plain, turned):
        assert math.isclose((a - rocket).length(), (b - rocket).length(), rel_tol=1e-4)