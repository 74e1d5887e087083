import numpy as np
import pytest

from sphere_rt.common import Settings, Sphere, World, default_scene


def test_settings_defaults():
    settings = Settings()
    assert (settings.width, settings.height) == (800, 600)
    assert settings.bounces == 2
    assert settings.ambient == pytest.approx(0.15)
    np.testing.assert_array_equal(settings.light_pos, [0.0, 0.0, 0.0])


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"height": -1},
    {"bounces": -1},
])
def test_settings_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_default_scene():
    scene = default_scene()
    assert len(scene) == 2
    np.testing.assert_allclose(scene[0].center, [0.0, 0.0, 3.0])
    assert scene[0].radius == 1.0
    np.testing.assert_allclose(scene[1].center, [0.0, -86.5, 3.0])
    assert scene[1].radius == 85.0


def test_default_scene_returns_fresh_spheres():
    first = default_scene()
    first[0].radius = 10.0
    assert default_scene()[0].radius == 1.0


def test_add_sphere_defaults_to_white_unit_sphere():
    world = World(objs=[])
    sphere = world.add_sphere()

    assert world.objs == [sphere]
    assert sphere.radius == 1.0
    np.testing.assert_array_equal(sphere.center, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(sphere.color, [1.0, 1.0, 1.0])


def test_remove_sphere_keeps_order():
    world = World(objs=default_scene())
    extra = world.add_sphere(Sphere(np.ones(3), 0.5, np.ones(3)))
    ground = world.objs[1]

    removed = world.remove_sphere(0)

    assert removed.radius == 1.0
    assert world.objs == [ground, extra]


def test_remove_sphere_bad_index():
    world = World(objs=[])
    with pytest.raises(IndexError):
        world.remove_sphere(0)
