# src/core/pointer.py
"""
Pointer -> axis mapping for the camera rig.

Raw pointer pixels become signed axes in [-1, 1] (x right-positive, y up-positive),
then a dead zone removes jitter near rest and rescales the remainder to the
full range.
"""
from __future__ import annotations

import threading
from typing import Tuple

from src.utils.errors import ConfigurationError, require_finite


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def normalize(x: float, y: float, width: float, height: float) -> Tuple[float, float]:
    """Pixel coordinates -> [-1, 1] axes. A zero-sized viewport axis maps to 0."""
    nx = (x / width) * 2.0 - 1.0 if width > 0 else 0.0
    ny = -((y / height) * 2.0 - 1.0) if height > 0 else 0.0
    # pointer capture can report positions outside the window
    return _clamp(nx, -1.0, 1.0), _clamp(ny, -1.0, 1.0)


def dead_zone_map(v: float, dead_zone: float) -> float:
    av = abs(v)
    if av <= dead_zone:
        return 0.0
    t = (av - dead_zone) / (1.0 - dead_zone)
    return _sign(v) * _clamp(t, 0.0, 1.0)


def validate_dead_zone(dead_zone: float) -> float:
    dz = require_finite("dead_zone", dead_zone)
    if not 0.0 <= dz < 1.0:
        raise ConfigurationError(f"dead_zone must be in [0, 1), got {dz!r}")
    return dz


class PointerInputMapper:
    """
    Keeps the last pointer position and viewport size; `axes()` returns the
    dead-zoned pair read by the rig at the start of each tick.

    Pointer events may arrive from a different thread than the frame tick, so
    the (x, y) pair is written and read under a lock.
    """

    def __init__(self, dead_zone: float = 0.15, width: int = 0, height: int = 0) -> None:
        self.dead_zone = validate_dead_zone(dead_zone)
        self._width = max(0, int(width))
        self._height = max(0, int(height))
        self._raw = (0.0, 0.0)
        self._lock = threading.Lock()

    @property
    def viewport(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def raw(self) -> Tuple[float, float]:
        """Normalized axes before the dead zone is applied."""
        with self._lock:
            return self._raw

    def resize(self, width: int, height: int) -> None:
        with self._lock:
            self._width = max(0, int(width))
            self._height = max(0, int(height))

    def on_pointer_move(self, x: float, y: float) -> None:
        with self._lock:
            self._raw = normalize(float(x), float(y), self._width, self._height)

    def set_axes(self, ax: float, ay: float) -> None:
        """Feed already-normalized axes (gamepads, scripted demos)."""
        with self._lock:
            self._raw = (_clamp(float(ax), -1.0, 1.0), _clamp(float(ay), -1.0, 1.0))

    def axes(self) -> Tuple[float, float]:
        rx, ry = self.raw
        return dead_zone_map(rx, self.dead_zone), dead_zone_map(ry, self.dead_zone)


__all__ = ["PointerInputMapper", "normalize", "dead_zone_map", "validate_dead_zone"]
