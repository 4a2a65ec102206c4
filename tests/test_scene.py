# tests/test_scene.py
from __future__ import annotations

import math

import pytest

from src.core.camera_rig import RigState
from src.core.hover_lift import TweenPhase
from src.core.particles import ParticleFieldConfig
from src.core.scene import ShowcaseScene, build_heroes
from src.utils.errors import ConfigurationError, LifecycleError
from src.utils.event_bus import HOVER_ENTER, HOVER_LEAVE, POINTER_MOVE, VIEWPORT_RESIZE


@pytest.fixture
def scene(bus):
    s = ShowcaseScene(bus, viewport=(1280, 720), particle_config=ParticleFieldConfig(count=50, seed=3))
    yield s
    s.dispose()


def test_scene_wiring(scene):
    assert scene.rig.state is RigState.ACTIVE
    assert sorted(scene.hover) == ["swan", "wyvern"]
    assert len(scene.particles) == 50
    assert scene.camera.position.length() == pytest.approx(55.0)
    assert tuple(scene.rig.base_target) == (0.0, 17.0, 0.0)
    assert tuple(scene.focus_target) == pytest.approx(scene.particles.focus_target)


def test_hover_event_lifts_hero(bus, scene):
    wyvern = scene.hero("wyvern")
    base = wyvern.lift_part.position.y
    bus.emit(HOVER_ENTER, key="wyvern")
    for _ in range(30):
        scene.tick(1 / 60)
    assert wyvern.lift_part.position.y > base
    assert scene.stats()["lifting"] == ["wyvern"]

    bus.emit(HOVER_LEAVE, key="wyvern")
    assert scene.hover.get("wyvern").phase is TweenPhase.FALLING
    for _ in range(120):
        scene.tick(1 / 60)
    assert wyvern.lift_part.position.y == pytest.approx(base)


def test_pointer_moves_look_target(bus, scene):
    bus.emit(POINTER_MOVE, x=1280, y=360)
    for _ in range(120):
        scene.tick(1 / 60)
    assert scene.rig.look_offset.x > 1.5
    assert math.isclose(scene.rig.look_offset.y, 0.0, abs_tol=1e-9)
    # sway is along camera right, never along the view axis
    offset = scene.camera.target - scene.rig.base_target
    assert offset.dot(scene.rig.forward) == pytest.approx(0.0, abs=1e-9)


def test_particles_advance_with_ticks(scene):
    before = scene.particles.version
    scene.tick(1 / 60)
    assert scene.particles.version == before + 1


def test_dispose_releases_all_subscriptions(bus):
    s = ShowcaseScene(bus, particle_config=ParticleFieldConfig(count=0))
    assert bus.subscriber_count(POINTER_MOVE) == 1
    s.dispose()
    s.dispose()
    for event in (POINTER_MOVE, VIEWPORT_RESIZE, HOVER_ENTER, HOVER_LEAVE):
        assert bus.subscriber_count(event) == 0
    s.tick(1 / 60)  # no-op after dispose


ALL_EVENTS = (POINTER_MOVE, VIEWPORT_RESIZE, HOVER_ENTER, HOVER_LEAVE)


def test_no_heroes_rejected_without_subscribing(bus):
    with pytest.raises(ConfigurationError):
        ShowcaseScene(bus, heroes=[])
    for event in ALL_EVENTS:
        assert bus.subscriber_count(event) == 0


def test_failed_build_releases_subscriptions(bus):
    heroes = build_heroes()
    heroes.append(build_heroes()[0])  # second "wyvern"
    with pytest.raises(LifecycleError):
        ShowcaseScene(bus, heroes=heroes, particle_config=ParticleFieldConfig(count=0))
    for event in ALL_EVENTS:
        assert bus.subscriber_count(event) == 0
    # stray events find nobody listening
    assert bus.emit(HOVER_ENTER, key="wyvern") == 0


def test_from_overrides(bus):
    s = ShowcaseScene.from_overrides(
        {"rig": {"damping": 5.0}, "lift": {"height": 0.2}, "particles": {"count": 5, "seed": 1}}, bus)
    assert s.rig.config.damping == 5.0
    assert s.hover.get("swan").config.height == 0.2
    assert len(s.particles) == 5
    s.dispose()


def test_from_overrides_rejects_bad_values(bus):
    with pytest.raises(ConfigurationError):
        ShowcaseScene.from_overrides({"rig": {"dead_zone": 1.0}}, bus)


def test_build_heroes_from_settings():
    heroes = {h.name: h for h in build_heroes()}
    assert set(heroes) == {"wyvern", "swan", "shells"}
    assert heroes["wyvern"].lift_part.position.y == pytest.approx(0.121)
    assert heroes["wyvern"].world_lift_y == pytest.approx(21.0 + 0.121 * 26.0)
    assert not heroes["shells"].hoverable
