# src/core/hover_lift.py
"""
Hover-triggered lift animation for hero objects.

Each hoverable part has a fixed rest height (`base_y`, captured once) and at
most one tween in flight:

    IDLE --enter--> RISING(start_y, elapsed) --done--> IDLE
    IDLE --leave--> FALLING(start_y, elapsed) --done--> IDLE

A new enter/leave always kills the running tween first and starts from the
part's current Y, so interrupting a rise halfway falls from where it stopped.
Only `part.position.y` is ever written.
"""
from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterator, List, Mapping, Optional

import pygame

from src.utils import settings
from src.utils.camera_types import TransformLike, Vec3Like
from src.utils.easing import Ease, get_ease
from src.utils.errors import ConfigurationError, LifecycleError, require_finite, require_non_negative
from src.utils.event_bus import HOVER_ENTER, HOVER_LEAVE, EventBus
from src.utils.logging_setup import get_logger

log = get_logger("hover_lift")


@dataclass
class Transform:
    """Minimal renderer-side transform; the draw code reads `position` every frame."""
    position: pygame.Vector3 = field(default_factory=pygame.Vector3)

    def __post_init__(self) -> None:
        self.position = pygame.Vector3(self.position)

    @classmethod
    def at(cls, position: Vec3Like) -> "Transform":
        return cls(pygame.Vector3(position))


@dataclass
class LiftConfig:
    height: float = settings.LIFT_HEIGHT
    rise_duration: float = settings.LIFT_RISE_DURATION
    fall_duration: float = settings.LIFT_FALL_DURATION
    rise_ease: str = settings.LIFT_RISE_EASE
    fall_ease: str = settings.LIFT_FALL_EASE

    def __post_init__(self) -> None:
        self.height = require_finite("height", self.height)
        self.rise_duration = require_non_negative("rise_duration", self.rise_duration)
        self.fall_duration = require_non_negative("fall_duration", self.fall_duration)
        # resolve now so a typo fails at construction, not on first hover
        get_ease(self.rise_ease)
        get_ease(self.fall_ease)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LiftConfig":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(f"unknown lift settings: {', '.join(unknown)}")
        return cls(**known)


class TweenPhase(Enum):
    IDLE = "idle"
    RISING = "rising"
    FALLING = "falling"


@dataclass
class LiftTween:
    phase: TweenPhase
    start_y: float
    end_y: float
    duration: float
    ease: Ease
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        if self.duration <= 0.0:
            return 1.0
        return min(1.0, self.elapsed / self.duration)

    def advance(self, dt: float) -> float:
        """Move the clock forward and return the eased Y for the new time."""
        self.elapsed += dt
        return self.start_y + (self.end_y - self.start_y) * self.ease(self.progress)

    @property
    def finished(self) -> bool:
        return self.progress >= 1.0


class HoverLiftAnimator:
    """Two-level interruptible lift for one hoverable part."""

    def __init__(self, config: Optional[LiftConfig] = None, part: Optional[TransformLike] = None,
                 *, name: str = "") -> None:
        self.config = config if config is not None else LiftConfig()
        self.name = name
        self.part: Optional[TransformLike] = None
        self.base_y: Optional[float] = None
        self.tween: Optional[LiftTween] = None
        self.disposed = False
        self._lock = threading.RLock()
        if part is not None:
            self.attach(part)

    def __repr__(self) -> str:
        return f"HoverLiftAnimator({self.name or 'unnamed'}, phase={self.phase.value}, base_y={self.base_y})"

    # -------------------------
    # Lifecycle
    # -------------------------

    @property
    def initialized(self) -> bool:
        return self.base_y is not None

    @property
    def phase(self) -> TweenPhase:
        tween = self.tween
        return tween.phase if tween is not None else TweenPhase.IDLE

    @property
    def lifted_y(self) -> Optional[float]:
        return None if self.base_y is None else self.base_y + self.config.height

    def initialize(self, initial_y: float) -> None:
        """Capture the rest height. Allowed once, before any hover is handled."""
        with self._lock:
            if self.base_y is not None:
                raise LifecycleError(f"{self.name or 'hoverable'}: base_y already captured")
            self.base_y = require_finite("initial_y", initial_y)

    def attach(self, part: TransformLike) -> None:
        """Bind the displaceable part; its current Y becomes base_y unless already initialized."""
        with self._lock:
            self.part = part
            if self.base_y is None:
                self.initialize(part.position.y)

    def dispose(self) -> None:
        """Kill any pending tween so nothing writes into a destroyed transform."""
        with self._lock:
            if self.disposed:
                return
            self.tween = None
            self.part = None
            self.disposed = True
            log.debug("%s disposed", self.name or "hoverable")

    # -------------------------
    # Hover events
    # -------------------------

    def enter(self) -> bool:
        cfg = self.config
        return self._start(TweenPhase.RISING, cfg.height, cfg.rise_duration, cfg.rise_ease)

    def leave(self) -> bool:
        cfg = self.config
        return self._start(TweenPhase.FALLING, 0.0, cfg.fall_duration, cfg.fall_ease)

    def _start(self, phase: TweenPhase, lift: float, duration: float, ease_name: str) -> bool:
        with self._lock:
            part = self.part
            if self.disposed or part is None or self.base_y is None:
                return False
            self.tween = None  # kill current before starting the next one
            start_y = part.position.y
            end_y = self.base_y + lift
            if duration <= 0.0:
                part.position.y = end_y
                return True
            self.tween = LiftTween(phase, start_y, end_y, duration, get_ease(ease_name))
            return True

    # -------------------------
    # Frame update
    # -------------------------

    def update(self, dt: float) -> bool:
        """Advance the active tween; returns True if the part moved this frame."""
        with self._lock:
            tween, part = self.tween, self.part
            if tween is None or part is None:
                return False
            if not (dt > 0.0 and math.isfinite(dt)):
                return False
            part.position.y = tween.advance(dt)
            if tween.finished:
                part.position.y = tween.end_y
                self.tween = None
            return True


class HoverLiftGroup:
    """
    Routes hover enter/leave events (keyed by object identity) to the
    matching animator and ticks every animator once per frame.
    """

    def __init__(self, events: Optional[EventBus] = None) -> None:
        self.events = events
        self._animators: Dict[Hashable, HoverLiftAnimator] = {}
        self._unsubscribers: List[Callable[[], None]] = []
        self.disposed = False
        if events is not None:
            self._unsubscribers = [
                events.on(HOVER_ENTER, lambda p: self.hover_enter(p["key"])),
                events.on(HOVER_LEAVE, lambda p: self.hover_leave(p["key"])),
            ]

    def __len__(self) -> int:
        return len(self._animators)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._animators)

    def __contains__(self, key: object) -> bool:
        return key in self._animators

    def add(self, key: Hashable, animator: HoverLiftAnimator) -> HoverLiftAnimator:
        if key in self._animators:
            raise LifecycleError(f"hoverable {key!r} already registered")
        self._animators[key] = animator
        return animator

    def get(self, key: Hashable) -> Optional[HoverLiftAnimator]:
        return self._animators.get(key)

    def remove(self, key: Hashable) -> None:
        animator = self._animators.pop(key, None)
        if animator is not None:
            animator.dispose()

    def hover_enter(self, key: Hashable) -> bool:
        animator = self._animators.get(key)
        if animator is None:
            log.debug("hover_enter for unknown key %r", key)
            return False
        return animator.enter()

    def hover_leave(self, key: Hashable) -> bool:
        animator = self._animators.get(key)
        if animator is None:
            log.debug("hover_leave for unknown key %r", key)
            return False
        return animator.leave()

    def update(self, dt: float) -> int:
        """Tick all animators; returns how many moved."""
        return sum(1 for a in self._animators.values() if a.update(dt))

    def dispose(self) -> None:
        if self.disposed:
            return
        for off in self._unsubscribers:
            off()
        self._unsubscribers = []
        for animator in self._animators.values():
            animator.dispose()
        self.disposed = True


__all__ = [
    "HoverLiftAnimator",
    "HoverLiftGroup",
    "LiftConfig",
    "LiftTween",
    "TweenPhase",
    "Transform",
]
