# src/core/scene.py
"""
Wires the camera rig, hover lifts and particle field for the showcase scene.

Placement constants come from settings; the renderer reads back
`camera`, each hero's `lift_part.position` and `particles.positions`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pygame

from src.core.camera import PerspectiveCamera
from src.core.camera_rig import CameraPlacement, DampedCameraRig, RigConfig
from src.core.hover_lift import HoverLiftAnimator, HoverLiftGroup, LiftConfig, Transform
from src.core.particles import ParticleDriftField, ParticleFieldConfig
from src.utils import settings
from src.utils.event_bus import EventBus
from src.utils.logging_setup import get_logger

log = get_logger("scene")


@dataclass
class HeroObject:
    name: str
    position: pygame.Vector3
    rotation: Tuple[float, float, float]
    scale: float
    lift_part: Transform
    hoverable: bool

    @property
    def world_lift_y(self) -> float:
        """Lifting part height in world space (local offset scaled by the hero's scale)."""
        return self.position.y + self.lift_part.position.y * self.scale


def build_heroes(entries: Mapping[str, Mapping[str, Any]] = settings.HERO_OBJECTS) -> List[HeroObject]:
    heroes = []
    for name, entry in entries.items():
        heroes.append(HeroObject(
            name=name,
            position=pygame.Vector3(entry["position"]),
            rotation=tuple(entry.get("rotation", (0.0, 0.0, 0.0))),
            scale=float(entry.get("scale", 1.0)),
            lift_part=Transform.at((0.0, float(entry.get("lift_part_y", 0.0)), 0.0)),
            hoverable=bool(entry.get("hoverable", False)),
        ))
    return heroes


class ShowcaseScene:
    """Owns the motion components; `tick(dt)` once per frame from the host loop."""

    def __init__(
        self,
        events: Optional[EventBus] = None,
        *,
        viewport: Tuple[int, int] = (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT),
        rig_config: Optional[RigConfig] = None,
        lift_config: Optional[LiftConfig] = None,
        particle_config: Optional[ParticleFieldConfig] = None,
        placement: Optional[CameraPlacement] = None,
        heroes: Optional[List[HeroObject]] = None,
    ) -> None:
        self.events = events if events is not None else EventBus()
        self.viewport = viewport
        self.heroes = heroes if heroes is not None else build_heroes()

        # nothing touches the bus until the heroes have been validated
        self.particles = ParticleDriftField([h.position for h in self.heroes], particle_config)
        self.focus_target = pygame.Vector3(self.particles.focus_target)

        self.camera = PerspectiveCamera(fov_deg=settings.CAMERA_FOV_DEG, roll=settings.CAMERA_ROLL)
        self.rig = DampedCameraRig(rig_config, self.events, viewport=viewport)
        self.hover = HoverLiftGroup(self.events)
        lift = lift_config if lift_config is not None else LiftConfig()
        try:
            self.rig.attach(self.camera, placement if placement is not None else CameraPlacement())
            for hero in self.heroes:
                if hero.hoverable:
                    self.hover.add(hero.name, HoverLiftAnimator(lift, hero.lift_part, name=hero.name))
        except Exception:
            self.rig.dispose()
            self.hover.dispose()
            raise
        self.disposed = False
        log.info("Scene ready: %d heroes (%d hoverable), %d particles",
                 len(self.heroes), len(self.hover), len(self.particles))

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, Mapping[str, Any]], events: Optional[EventBus] = None,
                       **kwargs: Any) -> "ShowcaseScene":
        """Build from a {"rig": {...}, "lift": {...}, "particles": {...}} mapping."""
        return cls(
            events,
            rig_config=RigConfig.from_dict(overrides.get("rig", {})),
            lift_config=LiftConfig.from_dict(overrides.get("lift", {})),
            particle_config=ParticleFieldConfig.from_dict(overrides.get("particles", {})),
            **kwargs,
        )

    def hero(self, name: str) -> Optional[HeroObject]:
        for h in self.heroes:
            if h.name == name:
                return h
        return None

    def tick(self, dt: float) -> None:
        if self.disposed:
            return
        self.rig.update(dt)
        self.hover.update(dt)
        self.particles.update(dt)

    def stats(self) -> Dict[str, Any]:
        return {
            "rig": self.rig.to_dict(),
            "lifting": [k for k in self.hover if self.hover.get(k).tween is not None],
            "particle_version": self.particles.version,
        }

    def dispose(self) -> None:
        if self.disposed:
            return
        self.rig.dispose()
        self.hover.dispose()
        self.disposed = True
        log.info("Scene disposed")


__all__ = ["ShowcaseScene", "HeroObject", "build_heroes"]
