# src/utils/errors.py
from __future__ import annotations

import math
from typing import Any


class ShowcaseError(Exception):
    """Base class for errors raised by the showcase motion layer."""


class ConfigurationError(ShowcaseError, ValueError):
    """Invalid configuration detected at construction time."""


class MissingHandleError(ShowcaseError):
    """A camera or object handle was required but has not been attached yet."""


class LifecycleError(ShowcaseError):
    """An attach/initialize step was repeated or called in the wrong state."""


def require_finite(name: str, value: Any) -> float:
    """Coerce `value` to float, rejecting NaN/Infinity and non-numbers."""
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(v):
        raise ConfigurationError(f"{name} must be finite, got {v!r}")
    return v


def require_positive(name: str, value: Any) -> float:
    v = require_finite(name, value)
    if v <= 0.0:
        raise ConfigurationError(f"{name} must be > 0, got {v!r}")
    return v


def require_non_negative(name: str, value: Any) -> float:
    v = require_finite(name, value)
    if v < 0.0:
        raise ConfigurationError(f"{name} must be >= 0, got {v!r}")
    return v


__all__ = [
    "ShowcaseError",
    "ConfigurationError",
    "MissingHandleError",
    "LifecycleError",
    "require_finite",
    "require_positive",
    "require_non_negative",
]
