"""
Tests for per-frame motion and culling.
"""

import pytest

from planet_slicer.slicer_core.config_loader import load_config
from planet_slicer.slicer_core.sim_objects import Direction, ObjectKind, SimObject
from planet_slicer.slicer_core.simulation import ObjectField


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def field(config):
    return ObjectField(config)


def make_object(obj_id=1, kind=ObjectKind.PLANET, direction=Direction.LEFT,
                x=400.0, y=300.0, vx=0.0, vy=0.0, sliced=False):
    return SimObject(
        id=obj_id,
        kind=kind,
        required_direction=direction,
        x=x,
        y=y,
        vx=vx,
        vy=vy,
        radius=30.0,
        rotation=0.0,
        color=(255, 0, 0),
        highlight_color=(255, 100, 100),
        atmosphere_color=(255, 200, 200),
        sliced=sliced,
    )


class TestKinematics:
    """Live and sliced motion."""

    def test_live_object_moves_linearly(self, field):
        obj = make_object(vx=4.0, vy=0.0)
        field.objects.append(obj)

        field.step()

        assert obj.position == pytest.approx((404.0, 300.0))
        assert obj.velocity == pytest.approx((4.0, 0.0))
        assert obj.rotation == pytest.approx(0.02)

    def test_sliced_object_falls(self, field):
        obj = make_object(vx=6.0, vy=0.0, sliced=True)
        field.objects.append(obj)

        field.step()

        # Position uses the velocity from before this frame's drag and gravity
        assert obj.position == pytest.approx((406.0, 300.0))
        assert obj.vx == pytest.approx(6.0 * 0.98)
        assert obj.vy == pytest.approx(0.5)
        assert obj.rotation == pytest.approx(0.1)

        field.step()
        assert obj.y == pytest.approx(300.5)
        assert obj.vy == pytest.approx(1.0)


class TestCulling:
    """Objects past the margin are removed."""

    def test_inside_margin_kept(self, field):
        obj = make_object(x=-99.0, vx=0.0)
        field.objects.append(obj)

        outcome = field.step()

        assert outcome.culled == []
        assert field.count == 1

    def test_live_planet_past_margin_is_missed(self, field):
        obj = make_object(x=899.0, vx=2.0)
        field.objects.append(obj)

        outcome = field.step()

        assert outcome.missed == [obj]
        assert outcome.miss_count == 1
        assert field.count == 0

    def test_bomb_culled_silently(self, field):
        bomb = make_object(kind=ObjectKind.BOMB, y=699.0, vy=2.0)
        field.objects.append(bomb)

        outcome = field.step()

        assert outcome.culled == [bomb]
        assert outcome.missed == []

    def test_sliced_planet_culled_silently(self, field):
        obj = make_object(y=699.0, vy=2.0, sliced=True)
        field.objects.append(obj)

        outcome = field.step()

        assert outcome.culled == [obj]
        assert outcome.missed == []

    def test_every_edge(self, field):
        objects = [
            make_object(1, x=-99.0, vx=-2.0),
            make_object(2, x=899.0, vx=2.0),
            make_object(3, y=-99.0, vy=-2.0),
            make_object(4, y=699.0, vy=2.0),
        ]
        field.objects.extend(objects)

        outcome = field.step()

        assert [o.id for o in outcome.missed] == [1, 2, 3, 4]

    def test_order_preserved_and_list_shared(self, field):
        objects = field.objects
        objects.extend([
            make_object(1),
            make_object(2, x=899.0, vx=2.0),
            make_object(3),
        ])

        field.step()

        assert objects is field.objects
        assert [o.id for o in objects] == [1, 3]


class TestFieldAccess:
    """Lookup helpers."""

    def test_live_objects_and_get(self, field):
        live = make_object(1)
        sliced = make_object(2, sliced=True)
        field.objects.extend([live, sliced])

        assert field.live_objects() == [live]
        assert field.get(2) is sliced
        assert field.get(99) is None

        field.clear()
        assert len(field) == 0
