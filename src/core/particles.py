# src/core/particles.py
"""
Ambient drifting particles ("motes") around the hero objects.

The buffer is allocated once: N points scattered uniformly in a box centered
on the focal centroid (raised by a vertical bias). Each frame every point
rises by `drift_speed * dt`; a point that leaves the top re-enters from the
bottom carrying its overflow, with X/Z untouched, so each mote reads as part
of a continuous rising column. All per-frame work is in-place numpy.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from src.utils import settings
from src.utils.camera_types import Vec3Like
from src.utils.errors import ConfigurationError, require_finite, require_non_negative, require_positive
from src.utils.logging_setup import get_logger

log = get_logger("particles")


def focal_centroid(points: Sequence[Vec3Like]) -> Tuple[float, float, float]:
    """Average of the hero focal points."""
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"focal points must be 3-vectors: {e}") from e
    if arr.size == 0:
        raise ConfigurationError("at least one focal point is required")
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ConfigurationError(f"focal points must be 3-vectors, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ConfigurationError("focal points must be finite")
    c = arr.mean(axis=0)
    return float(c[0]), float(c[1]), float(c[2])


@dataclass
class ParticleFieldConfig:
    count: int = settings.PARTICLE_COUNT
    width: float = settings.PARTICLE_BOX_WIDTH
    depth: float = settings.PARTICLE_BOX_DEPTH
    height: float = settings.PARTICLE_BOX_HEIGHT
    vertical_bias: float = settings.PARTICLE_VERTICAL_BIAS
    drift_speed: float = settings.PARTICLE_DRIFT_SPEED
    seed: Optional[int] = settings.PARTICLE_SEED

    def __post_init__(self) -> None:
        count = require_non_negative("count", self.count)
        if count != int(count):
            raise ConfigurationError(f"count must be a whole number, got {self.count!r}")
        self.count = int(count)
        self.width = require_non_negative("width", self.width)
        self.depth = require_non_negative("depth", self.depth)
        self.height = require_positive("height", self.height)
        self.vertical_bias = require_finite("vertical_bias", self.vertical_bias)
        self.drift_speed = require_finite("drift_speed", self.drift_speed)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParticleFieldConfig":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(f"unknown particle settings: {', '.join(unknown)}")
        return cls(**known)


class ParticleDriftField:
    """Fixed-size point buffer advancing along +Y with wraparound."""

    def __init__(self, focal_points: Sequence[Vec3Like], config: Optional[ParticleFieldConfig] = None) -> None:
        self.config = config if config is not None else ParticleFieldConfig()
        cfg = self.config

        self.focus_target = focal_centroid(focal_points)
        cx, cy, cz = self.focus_target
        self.center = (cx, cy + cfg.vertical_bias, cz)
        self.lower = self.center[1] - cfg.height * 0.5
        self.upper = self.center[1] + cfg.height * 0.5

        n = cfg.count
        self.positions: NDArray[np.float32] = np.empty(n * 3, dtype=np.float32)
        self._wrap_mask: NDArray[np.bool_] = np.zeros(n, dtype=bool)
        self._below: NDArray[np.bool_] = np.zeros(n, dtype=bool)

        rng = np.random.default_rng(cfg.seed)
        pts = self.points
        pts[:, 0] = rng.uniform(cx - cfg.width * 0.5, cx + cfg.width * 0.5, n)
        pts[:, 1] = rng.uniform(self.lower, self.upper, n)
        pts[:, 2] = rng.uniform(cz - cfg.depth * 0.5, cz + cfg.depth * 0.5, n)

        self.version = 0
        self.dirty = True
        log.debug("Particle field: %d points, box center %s, y in [%.2f, %.2f]",
                  n, tuple(round(c, 2) for c in self.center), self.lower, self.upper)

    def __len__(self) -> int:
        return self.config.count

    @property
    def points(self) -> NDArray[np.float32]:
        """(N, 3) view over the flat buffer."""
        return self.positions.reshape(-1, 3)

    @property
    def ys(self) -> NDArray[np.float32]:
        return self.positions[1::3]

    def update(self, dt: float) -> None:
        if not (dt > 0.0 and math.isfinite(dt)) or self.config.count == 0:
            return
        step = self.config.drift_speed * dt
        if step == 0.0:
            return

        ys = self.ys
        lower, height = self.lower, self.config.height
        mask = self._wrap_mask
        np.add(ys, step, out=ys)
        np.greater(ys, self.upper, out=mask)
        np.less(ys, lower, out=self._below)
        np.logical_or(mask, self._below, out=mask)
        # continuation: re-enter from the opposite face keeping the overflow
        np.subtract(ys, lower, out=ys, where=mask)
        np.mod(ys, height, out=ys, where=mask)
        np.add(ys, lower, out=ys, where=mask)

        self.version += 1
        self.dirty = True

    def consume_dirty(self) -> bool:
        """Return and clear the dirty flag (the draw call re-uploads when True)."""
        was = self.dirty
        self.dirty = False
        return was


__all__ = ["ParticleDriftField", "ParticleFieldConfig", "focal_centroid"]
