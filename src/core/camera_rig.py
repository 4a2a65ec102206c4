# src/core/camera_rig.py
"""
Pointer-driven camera rig for the 3D showcase scene.

- One-shot spherical placement (radius / azimuth / polar) when the rig attaches
- Look-at sway along the camera's own right/up axes, exponentially damped
- Optional positional drift on world X/Y, damped with the same law
- Dead-zoned pointer input through an injected event source (subscribe on
  attach, unsubscribe on dispose)

Damping law, frame-rate independent and free of overshoot:
    value(t + dt) = target + (value(t) - target) * exp(-rate * dt)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import pygame

from src.core.camera import orthonormal_basis, spherical_to_cartesian
from src.core.pointer import PointerInputMapper, validate_dead_zone
from src.utils import settings
from src.utils.camera_types import CameraHandle
from src.utils.errors import (
    ConfigurationError,
    LifecycleError,
    MissingHandleError,
    require_finite,
    require_positive,
)
from src.utils.event_bus import POINTER_MOVE, VIEWPORT_RESIZE, EventBus
from src.utils.logging_setup import get_logger

log = get_logger("camera_rig")


def damp(current: float, target: float, rate: float, dt: float) -> float:
    """Exponential approach of `current` toward `target`."""
    return target + (current - target) * math.exp(-rate * dt)


@dataclass
class RigConfig:
    damping: float = settings.RIG_DAMPING
    dead_zone: float = settings.RIG_DEAD_ZONE
    look_amplitude_x: float = settings.RIG_LOOK_AMPLITUDE_X
    look_amplitude_y: float = settings.RIG_LOOK_AMPLITUDE_Y
    position_amplitude_x: float = settings.RIG_POSITION_AMPLITUDE_X
    position_amplitude_y: float = settings.RIG_POSITION_AMPLITUDE_Y

    def __post_init__(self) -> None:
        self.damping = require_positive("damping", self.damping)
        self.dead_zone = validate_dead_zone(self.dead_zone)
        self.look_amplitude_x = require_finite("look_amplitude_x", self.look_amplitude_x)
        self.look_amplitude_y = require_finite("look_amplitude_y", self.look_amplitude_y)
        self.position_amplitude_x = require_finite("position_amplitude_x", self.position_amplitude_x)
        self.position_amplitude_y = require_finite("position_amplitude_y", self.position_amplitude_y)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RigConfig":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(f"unknown rig settings: {', '.join(unknown)}")
        return cls(**known)


@dataclass
class CameraPlacement:
    """Fixed spherical placement applied once at attach."""
    radius: float = settings.CAMERA_RADIUS
    azimuth: float = settings.CAMERA_AZIMUTH
    polar: float = settings.CAMERA_POLAR
    target: Tuple[float, float, float] = field(default_factory=lambda: tuple(settings.CAMERA_TARGET))

    def __post_init__(self) -> None:
        self.radius = require_positive("radius", self.radius)
        self.azimuth = require_finite("azimuth", self.azimuth)
        self.polar = require_finite("polar", self.polar)
        if len(self.target) != 3:
            raise ConfigurationError(f"target must have 3 components, got {self.target!r}")
        self.target = tuple(require_finite("target", c) for c in self.target)

    def position(self) -> pygame.Vector3:
        return spherical_to_cartesian(self.radius, self.azimuth, self.polar)


class RigState(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    DISPOSED = "disposed"


class DampedCameraRig:
    """Owns the camera's sway offsets; `update(dt)` once per frame while active."""

    def __init__(self, config: Optional[RigConfig] = None, events: Optional[EventBus] = None,
                 *, viewport: Tuple[int, int] = (0, 0)) -> None:
        self.config = config if config is not None else RigConfig()
        self.events = events
        self.pointer = PointerInputMapper(self.config.dead_zone, *viewport)

        self.state = RigState.UNINITIALIZED
        self.camera: Optional[CameraHandle] = None

        self.base_position = pygame.Vector3()
        self.base_target = pygame.Vector3()
        self.base_right = pygame.Vector3(1.0, 0.0, 0.0)
        self.base_up = pygame.Vector3(0.0, 1.0, 0.0)
        self.forward = pygame.Vector3(0.0, 0.0, -1.0)

        self.look_offset = pygame.Vector2(0.0, 0.0)
        self.axes: Tuple[float, float] = (0.0, 0.0)
        self.look_at_point = pygame.Vector3()

        self._unsubscribers: List[Callable[[], None]] = []
        self._warned_unattached = False

    def __repr__(self) -> str:
        return f"DampedCameraRig(state={self.state.value}, offset=({self.look_offset.x:.3f}, {self.look_offset.y:.3f}))"

    # -------------------------
    # Lifecycle
    # -------------------------

    @property
    def active(self) -> bool:
        return self.state is RigState.ACTIVE

    def attach(self, camera: CameraHandle, placement: Optional[CameraPlacement] = None) -> None:
        """
        Bind the camera, optionally place it, and capture the base frame.
        Without a placement the camera's current position/target become the base.
        """
        if self.state is not RigState.UNINITIALIZED:
            raise LifecycleError(f"rig cannot attach while {self.state.value}")

        if placement is not None:
            camera.position.update(placement.position())
            camera.look_at(placement.target)

        base_position = pygame.Vector3(camera.position)
        base_target = pygame.Vector3(placement.target if placement is not None else camera.target)
        try:
            right, up, forward = orthonormal_basis(base_target - base_position)
        except ValueError as e:
            raise ConfigurationError("camera target coincides with camera position") from e

        self.camera = camera
        self.base_position = base_position
        self.base_target = base_target
        self.base_right, self.base_up, self.forward = right, up, forward
        self.look_at_point = pygame.Vector3(base_target)

        if self.events is not None:
            self._unsubscribers = [
                self.events.on(POINTER_MOVE, self._on_pointer_move),
                self.events.on(VIEWPORT_RESIZE, self._on_viewport_resize),
            ]
        self.state = RigState.ACTIVE
        log.info("Camera rig attached at %s looking at %s", tuple(round(c, 2) for c in base_position),
                 tuple(round(c, 2) for c in base_target))

    def dispose(self) -> None:
        """Release event subscriptions; safe to call repeatedly."""
        if self.state is RigState.DISPOSED:
            return
        for off in self._unsubscribers:
            off()
        self._unsubscribers = []
        self.camera = None
        self.state = RigState.DISPOSED
        log.debug("Camera rig disposed")

    def require_camera(self) -> CameraHandle:
        if self.camera is None:
            raise MissingHandleError("camera rig has no attached camera")
        return self.camera

    # -------------------------
    # Input
    # -------------------------

    def _on_pointer_move(self, payload: Dict[str, Any]) -> None:
        self.pointer.on_pointer_move(payload["x"], payload["y"])

    def _on_viewport_resize(self, payload: Dict[str, Any]) -> None:
        self.pointer.resize(payload["width"], payload["height"])

    # -------------------------
    # Frame update
    # -------------------------

    def update(self, dt: float) -> None:
        camera = self.camera
        if camera is None or self.state is not RigState.ACTIVE:
            # frames can tick before the camera is attached
            if not self._warned_unattached:
                log.debug("Camera rig update skipped: no camera attached")
                self._warned_unattached = True
            return
        if not (dt > 0.0 and math.isfinite(dt)):
            return

        cfg = self.config
        px, py = self.pointer.axes()
        self.axes = (px, py)

        rate = cfg.damping
        self.look_offset.x = damp(self.look_offset.x, px * cfg.look_amplitude_x, rate, dt)
        self.look_offset.y = damp(self.look_offset.y, py * cfg.look_amplitude_y, rate, dt)

        self.look_at_point = (self.base_target
                              + self.base_right * self.look_offset.x
                              + self.base_up * self.look_offset.y)

        # Amplitudes compose independently; zero disables that axis outright.
        if cfg.position_amplitude_x:
            target_x = self.base_position.x + px * cfg.position_amplitude_x
            camera.position.x = damp(camera.position.x, target_x, rate, dt)
        if cfg.position_amplitude_y:
            target_y = self.base_position.y + py * cfg.position_amplitude_y
            camera.position.y = damp(camera.position.y, target_y, rate, dt)

        camera.look_at(self.look_at_point)

    # -------------------------
    # Debug
    # -------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot for overlays and logs."""
        return {
            "state": self.state.value,
            "axes": tuple(self.axes),
            "look_offset": (float(self.look_offset.x), float(self.look_offset.y)),
            "look_at": tuple(float(c) for c in self.look_at_point),
            "base_position": tuple(float(c) for c in self.base_position),
        }


__all__ = ["DampedCameraRig", "RigConfig", "CameraPlacement", "RigState", "damp"]
