# tests/test_particles.py
from __future__ import annotations

import numpy as np
import pytest

from src.core.particles import ParticleDriftField, ParticleFieldConfig, focal_centroid
from src.utils import settings
from src.utils.errors import ConfigurationError

ORIGIN = [(0.0, 0.0, 0.0)]


def _field(**overrides):
    cfg = dict(count=64, width=8.0, depth=6.0, height=10.0, vertical_bias=0.0, drift_speed=2.0, seed=7)
    cfg.update(overrides)
    return ParticleDriftField(ORIGIN, ParticleFieldConfig(**cfg))


def test_init_fills_box():
    f = _field(count=500, vertical_bias=3.0)
    pts = f.points
    assert pts.shape == (500, 3)
    assert f.positions.dtype == np.float32
    assert f.center == (0.0, 3.0, 0.0)
    assert f.lower == pytest.approx(-2.0)
    assert f.upper == pytest.approx(8.0)
    assert np.all(pts[:, 0] >= -4.0) and np.all(pts[:, 0] <= 4.0)
    assert np.all(pts[:, 1] >= -2.0) and np.all(pts[:, 1] <= 8.0)
    assert np.all(pts[:, 2] >= -3.0) and np.all(pts[:, 2] <= 3.0)


def test_seed_is_deterministic():
    a, b = _field(seed=42), _field(seed=42)
    np.testing.assert_array_equal(a.positions, b.positions)


def test_wraparound_keeps_overflow():
    f = _field(count=1)
    eps = 0.05
    f.ys[0] = f.upper - eps
    dt = 0.1  # speed 2 -> step 0.2 > eps
    f.update(dt)
    assert f.ys[0] == pytest.approx(f.lower + (2.0 * dt - eps), abs=1e-5)


def test_negative_speed_wraps_to_top():
    f = _field(count=1, drift_speed=-2.0)
    eps = 0.05
    f.ys[0] = f.lower + eps
    f.update(0.1)
    assert f.ys[0] == pytest.approx(f.upper - (0.2 - eps), abs=1e-5)


def test_large_step_stays_in_box():
    f = _field(count=32)
    f.update(12.3)  # step spans more than two box heights
    assert np.all(f.ys >= f.lower - 1e-4)
    assert np.all(f.ys <= f.upper + 1e-4)


def test_no_wrap_inside_box():
    f = _field(count=1)
    f.ys[0] = 0.0
    f.update(0.25)
    assert f.ys[0] == pytest.approx(0.5)


def test_horizontal_coordinates_immutable_and_buffer_reused():
    f = _field(count=200)
    buf = f.positions
    xs = f.points[:, 0].copy()
    zs = f.points[:, 2].copy()
    for _ in range(600):
        f.update(1 / 60)
    assert f.positions is buf
    np.testing.assert_array_equal(f.points[:, 0], xs)
    np.testing.assert_array_equal(f.points[:, 2], zs)
    assert np.all(f.ys >= f.lower - 1e-4)
    assert np.all(f.ys <= f.upper + 1e-4)


def test_dirty_flag_and_version():
    f = _field()
    assert f.consume_dirty()
    assert not f.consume_dirty()
    f.update(1 / 60)
    assert f.version == 1
    assert f.consume_dirty()
    f.update(0.0)
    assert f.version == 1
    assert not f.dirty


def test_empty_field_updates():
    f = _field(count=0)
    f.update(1.0)
    assert len(f) == 0
    assert f.points.shape == (0, 3)


def test_focal_centroid_of_heroes():
    heroes = [h["position"] for h in settings.HERO_OBJECTS.values()]
    cx, cy, cz = focal_centroid(heroes)
    assert cx == pytest.approx(-14.0 / 3.0)
    assert cy == pytest.approx(27.4 / 3.0)
    assert cz == pytest.approx(-7.0 / 3.0)
    f = ParticleDriftField(heroes, ParticleFieldConfig(count=4, seed=0))
    assert f.focus_target == pytest.approx((cx, cy, cz))


@pytest.mark.parametrize("overrides", [
    {"count": -1},
    {"count": 2.5},
    {"height": 0.0},
    {"width": -1.0},
    {"drift_speed": float("nan")},
])
def test_invalid_config(overrides):
    with pytest.raises(ConfigurationError):
        ParticleFieldConfig(**overrides)


def test_focal_points_required():
    with pytest.raises(ConfigurationError):
        focal_centroid([])
    with pytest.raises(ConfigurationError):
        focal_centroid([(1.0, 2.0)])


def test_focal_points_accept_arrays():
    with pytest.raises(ConfigurationError):
        focal_centroid(np.zeros((0, 3)))
    pts = np.array([[0.0, 0.0, 0.0], [2.0, 4.0, -6.0]])
    assert focal_centroid(pts) == pytest.approx((1.0, 2.0, -3.0))
