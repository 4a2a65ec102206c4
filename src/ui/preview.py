# src/ui/preview.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Optional, Set, Tuple

import pygame

from src.core.scene import ShowcaseScene
from src.utils import settings
from src.utils.event_bus import HOVER_ENTER, HOVER_LEAVE, EventBus


# -----------------------------
# Hit testing
# -----------------------------
class HoverPicker:
    """
    Screen-space hit test for hero objects: a hero is hovered while the mouse is
    within `radius_px` of its projected lift part. Emits HOVER_ENTER / HOVER_LEAVE
    only on transitions, so the animators see one event per edge.
    """

    def __init__(self, events: EventBus, radius_px: float = settings.HOVER_PICK_RADIUS_PX) -> None:
        self.events = events
        self.radius_sq = float(radius_px) ** 2
        self.hovered: Set[Hashable] = set()

    def update(self, scene: ShowcaseScene, mouse: Tuple[int, int], size: Tuple[int, int]) -> None:
        w, h = size
        mx, my = mouse
        now: Set[Hashable] = set()
        for hero in scene.heroes:
            if not hero.hoverable:
                continue
            anchor = (hero.position.x, hero.world_lift_y, hero.position.z)
            p = scene.camera.world_to_screen(anchor, w, h)
            if p is None:
                continue
            dx, dy = p[0] - mx, p[1] - my
            if dx * dx + dy * dy <= self.radius_sq:
                now.add(hero.name)

        for key in now - self.hovered:
            self.events.emit(HOVER_ENTER, key=key)
        for key in self.hovered - now:
            self.events.emit(HOVER_LEAVE, key=key)
        self.hovered = now


# -----------------------------
# Drawing
# -----------------------------
@dataclass
class PreviewConfig:
    show_text: bool = True
    font_name: str = "consolas"
    font_size: int = 14
    hero_radius_px: int = 9


class ScenePreview:
    """Point-cloud preview of the scene: particles, hero anchors, and the rig's look-at point."""

    def __init__(self, config: Optional[PreviewConfig] = None) -> None:
        self.cfg = config or PreviewConfig()
        self.font: Optional[pygame.font.Font] = None

    def handle_event(self, event: pygame.event.Event) -> None:
        """F1 toggles the text panel."""
        if event.type == pygame.KEYDOWN and event.key == pygame.K_F1:
            self.cfg.show_text = not self.cfg.show_text

    def draw(self, screen: pygame.Surface, scene: ShowcaseScene, hovered: Set[Hashable] = frozenset()) -> None:
        w, h = screen.get_size()
        cam = scene.camera

        scene.particles.consume_dirty()
        for x, y, z in scene.particles.points:
            p = cam.world_to_screen((float(x), float(y), float(z)), w, h)
            if p is None:
                continue
            sx, sy, depth = p
            if 0 <= sx < w and 0 <= sy < h:
                size = 2 if depth < 40.0 else 1
                pygame.draw.circle(screen, settings.PARTICLE_COLOR, (int(sx), int(sy)), size)

        for hero in scene.heroes:
            anchor = (hero.position.x, hero.world_lift_y, hero.position.z)
            p = cam.world_to_screen(anchor, w, h)
            if p is None:
                continue
            color = settings.HERO_HOVER_COLOR if hero.name in hovered else settings.HERO_COLOR
            pygame.draw.circle(screen, color, (int(p[0]), int(p[1])), self.cfg.hero_radius_px, 2)

        target = cam.world_to_screen(scene.rig.look_at_point, w, h)
        if target is not None:
            tx, ty = int(target[0]), int(target[1])
            pygame.draw.line(screen, settings.TARGET_COLOR, (tx - 6, ty), (tx + 6, ty), 1)
            pygame.draw.line(screen, settings.TARGET_COLOR, (tx, ty - 6), (tx, ty + 6), 1)

        if self.cfg.show_text:
            self._draw_text(screen, scene)

    def _draw_text(self, screen: pygame.Surface, scene: ShowcaseScene) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont(self.cfg.font_name, self.cfg.font_size)
        stats: Dict = scene.stats()
        rig = stats["rig"]
        lines = [
            f"axes   {rig['axes'][0]:+.2f} {rig['axes'][1]:+.2f}",
            f"offset {rig['look_offset'][0]:+.3f} {rig['look_offset'][1]:+.3f}",
            f"lifting {', '.join(stats['lifting']) or '-'}",
        ]
        y = 8
        for line in lines:
            surf = self.font.render(line, True, (235, 235, 245))
            screen.blit(surf, (8, y))
            y += surf.get_height() + 2


__all__ = ["HoverPicker", "ScenePreview", "PreviewConfig"]
