# src/utils/easing.py
"""
Easing curves addressed by string identifiers ("expo.out", "power3.out", ...).

Every curve maps t in [0, 1] to [0, 1] with f(0) == 0 and f(1) == 1. Input is
clamped, so a tween that overshoots its duration by a frame still lands on
the end value.

Power naming follows the common timeline-library convention:
    power1 == quad, power2 == cubic, power3 == quart, power4 == quint
"""
from __future__ import annotations

import math
from typing import Callable, Dict

from src.utils.errors import ConfigurationError

Ease = Callable[[float], float]


def _clamp01(t: float) -> float:
    return 0.0 if t <= 0.0 else 1.0 if t >= 1.0 else t


def linear(t: float) -> float:
    return _clamp01(t)


def smoothstep(t: float) -> float:
    t = _clamp01(t)
    return t * t * (3 - 2 * t)


def _power_in(exponent: int) -> Ease:
    def ease(t: float) -> float:
        return _clamp01(t) ** exponent
    return ease


def _sine_in(t: float) -> float:
    return 1.0 - math.cos(_clamp01(t) * math.pi * 0.5)


def _expo_in(t: float) -> float:
    t = _clamp01(t)
    return 0.0 if t == 0.0 else 2.0 ** (10.0 * (t - 1.0))


def _out(ease_in: Ease) -> Ease:
    def ease(t: float) -> float:
        return 1.0 - ease_in(1.0 - _clamp01(t))
    return ease


def _in_out(ease_in: Ease) -> Ease:
    def ease(t: float) -> float:
        t = _clamp01(t)
        if t < 0.5:
            return ease_in(t * 2.0) * 0.5
        return 1.0 - ease_in((1.0 - t) * 2.0) * 0.5
    return ease


def _build_registry() -> Dict[str, Ease]:
    reg: Dict[str, Ease] = {
        "linear": linear,
        "none": linear,
        "power0": linear,
        "smoothstep": smoothstep,
    }
    families: Dict[str, Ease] = {
        "power1": _power_in(2),
        "power2": _power_in(3),
        "power3": _power_in(4),
        "power4": _power_in(5),
        "quad": _power_in(2),
        "cubic": _power_in(3),
        "quart": _power_in(4),
        "quint": _power_in(5),
        "sine": _sine_in,
        "expo": _expo_in,
    }
    for name, ease_in in families.items():
        reg[f"{name}.in"] = ease_in
        reg[f"{name}.out"] = _out(ease_in)
        reg[f"{name}.inOut"] = _in_out(ease_in)
        reg[name] = reg[f"{name}.out"]  # bare family name means ".out"
    return reg


EASES: Dict[str, Ease] = _build_registry()


def get_ease(name: str) -> Ease:
    """Look up an ease by identifier; unknown names are a configuration error."""
    try:
        return EASES[name]
    except (KeyError, TypeError):
        raise ConfigurationError(f"unknown ease {name!r}") from None


__all__ = ["Ease", "EASES", "get_ease", "linear", "smoothstep"]
