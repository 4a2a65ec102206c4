# tests/test_pointer.py
from __future__ import annotations

import threading

import pytest

from src.core.pointer import PointerInputMapper, dead_zone_map, normalize
from src.utils.errors import ConfigurationError


def test_normalize_center_and_corners():
    assert normalize(500, 250, 1000, 500) == pytest.approx((0.0, 0.0))
    # top-left of the screen is left/up
    assert normalize(0, 0, 1000, 500) == pytest.approx((-1.0, 1.0))
    assert normalize(1000, 500, 1000, 500) == pytest.approx((1.0, -1.0))


def test_normalize_zero_viewport_is_zero():
    assert normalize(123, 45, 0, 0) == (0.0, 0.0)
    nx, ny = normalize(750, 45, 1000, 0)
    assert nx == pytest.approx(0.5)
    assert ny == 0.0


def test_normalize_clamps_positions_outside_window():
    assert normalize(-200, 900, 1000, 500) == pytest.approx((-1.0, -1.0))


def test_dead_zone_examples():
    assert dead_zone_map(0.10, 0.15) == 0.0
    assert dead_zone_map(1.0, 0.15) == pytest.approx(1.0)
    assert dead_zone_map(-1.0, 0.15) == pytest.approx(-1.0)
    assert dead_zone_map(0.6, 0.15) == pytest.approx(0.45 / 0.85)


@pytest.mark.parametrize("dz", [0.0, 0.05, 0.15, 0.5, 0.9])
def test_dead_zone_properties(dz):
    for i in range(-100, 101):
        v = i / 100.0
        out = dead_zone_map(v, dz)
        if abs(v) <= dz:
            assert out == 0.0
        else:
            assert out != 0.0
            assert (out > 0) == (v > 0)
            assert -1.0 <= out <= 1.0


def test_zero_dead_zone_is_identity():
    for v in (-1.0, -0.3, 0.0, 0.42, 1.0):
        assert dead_zone_map(v, 0.0) == pytest.approx(v)


@pytest.mark.parametrize("dz", [1.0, 1.5, -0.1, float("nan")])
def test_invalid_dead_zone_rejected(dz):
    with pytest.raises(ConfigurationError):
        PointerInputMapper(dead_zone=dz)


def test_mapper_tracks_pointer_and_resize():
    m = PointerInputMapper(dead_zone=0.15, width=1000, height=1000)
    m.on_pointer_move(800, 500)
    assert m.raw == pytest.approx((0.6, 0.0))
    assert m.axes() == pytest.approx(((0.6 - 0.15) / 0.85, 0.0))

    # same pixel in a wider window lands closer to center
    m.resize(2000, 1000)
    m.on_pointer_move(800, 500)
    assert m.raw[0] == pytest.approx(-0.2)
    assert m.axes()[0] == pytest.approx(-(0.2 - 0.15) / 0.85)


def test_mapper_without_viewport_reports_rest():
    m = PointerInputMapper()
    m.on_pointer_move(640, 360)
    assert m.axes() == (0.0, 0.0)


def test_set_axes_clamps():
    m = PointerInputMapper(dead_zone=0.0)
    m.set_axes(3.0, -2.0)
    assert m.axes() == (1.0, -1.0)


def test_pointer_pairs_never_torn_across_threads():
    m = PointerInputMapper(dead_zone=0.0, width=1000, height=1000)
    sizes = (1000, 2000)
    pixels = range(0, 1001, 7)
    # square viewports keep every written pair on the x == -y diagonal
    written = {normalize(i, i, w, w) for i in pixels for w in sizes} | {(0.0, 0.0)}
    done = threading.Event()

    def pointer_thread():
        for _ in range(30):
            for w in sizes:
                m.resize(w, w)
                for i in pixels:
                    m.on_pointer_move(i, i)
        done.set()

    t = threading.Thread(target=pointer_thread)
    t.start()
    reads = 0
    while not done.is_set() or reads == 0:
        raw = m.raw
        ax, ay = m.axes()
        assert raw in written
        assert ax == -ay
        reads += 1
    t.join()
    assert m.raw in written
