"""
Tests for key bindings and direction resolution.
"""

import math

import pytest

from planet_slicer.slicer_core.config_loader import load_config
from planet_slicer.slicer_core.input_resolver import InputResolver
from planet_slicer.slicer_core.sim_objects import Direction, ObjectKind, SimObject


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def resolver(config):
    return InputResolver(config)


def make_object(obj_id, direction, kind=ObjectKind.PLANET, vx=4.0, vy=0.0):
    return SimObject(
        id=obj_id,
        kind=kind,
        required_direction=direction,
        x=100.0,
        y=100.0,
        vx=vx,
        vy=vy,
        radius=30.0,
        rotation=1.0,
        color=(0, 255, 255),
        highlight_color=(0, 191, 255),
        atmosphere_color=(224, 255, 255),
    )


class TestKeyBindings:
    """WASD and arrow keys map to directions."""

    @pytest.mark.parametrize("key,direction", [
        ("a", Direction.LEFT),
        ("d", Direction.RIGHT),
        ("w", Direction.UP),
        ("s", Direction.DOWN),
        ("left", Direction.LEFT),
        ("right", Direction.RIGHT),
        ("up", Direction.UP),
        ("down", Direction.DOWN),
        ("A", Direction.LEFT),
    ])
    def test_bound_keys(self, resolver, key, direction):
        assert resolver.direction_for_key(key) is direction

    @pytest.mark.parametrize("key", ["q", "space", "", "return"])
    def test_unbound_keys(self, resolver, key):
        assert resolver.direction_for_key(key) is None

    def test_key_letters(self):
        assert Direction.LEFT.key_letter == "A"
        assert Direction.RIGHT.key_letter == "D"
        assert Direction.UP.key_letter == "W"
        assert Direction.DOWN.key_letter == "S"

    def test_parse(self):
        assert Direction.parse("Left") is Direction.LEFT
        assert Direction.parse(Direction.UP) is Direction.UP
        with pytest.raises(ValueError):
            Direction.parse("sideways")


class TestResolve:
    """Matching objects resolve on a single press."""

    def test_slice_effects(self, resolver):
        obj = make_object(1, Direction.LEFT, vx=4.0, vy=-2.0)

        result = resolver.resolve([obj], Direction.LEFT)

        assert result.sliced == [obj]
        assert obj.sliced
        assert obj.velocity == pytest.approx((6.0, -3.0))
        assert obj.rotation == pytest.approx(1.0 + 4 * math.pi)

    def test_bomb_reported_untouched(self, resolver):
        bomb = make_object(1, Direction.UP, kind=ObjectKind.BOMB, vx=0.0, vy=4.0)

        result = resolver.resolve([bomb], Direction.UP)

        assert result.bomb_hit
        assert result.bombs == [bomb]
        assert not bomb.sliced
        assert bomb.velocity == (0.0, 4.0)

    def test_all_matches_resolve(self, resolver):
        objects = [
            make_object(1, Direction.DOWN),
            make_object(2, Direction.LEFT),
            make_object(3, Direction.DOWN),
        ]

        result = resolver.resolve(objects, Direction.DOWN)

        assert [o.id for o in result.matches] == [1, 3]
        assert not objects[1].sliced

    def test_sliced_objects_do_not_match_again(self, resolver):
        obj = make_object(1, Direction.RIGHT)
        resolver.resolve([obj], Direction.RIGHT)

        result = resolver.resolve([obj], Direction.RIGHT)

        assert result.is_noop

    def test_no_match_is_noop(self, resolver):
        obj = make_object(1, Direction.LEFT)

        result = resolver.resolve([obj], Direction.RIGHT)

        assert result.is_noop
        assert not result.bomb_hit
        assert not obj.sliced
        assert obj.velocity == (4.0, 0.0)
