# src/core/safe_main.py
from __future__ import annotations

import argparse
import json
import os
import time
import traceback
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from src.utils import settings
from src.utils.errors import ConfigurationError


def configure_environment(headless: Optional[bool] = None) -> None:
    """Robust SDL/Pygame defaults for Linux/CI/headless."""
    ci = os.getenv("CI", "").lower() == "true"
    no_display = not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY"))
    if headless is None:
        headless = ci or no_display
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    os.environ.setdefault("SDL_HINT_RENDER_DRIVER", "software")
    if headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


def init_pygame_display(size: Tuple[int, int] = (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT), *,
                        caption: str = settings.WINDOW_CAPTION):
    """Initialize pygame and return a display surface (or None if headless)."""
    import pygame
    pygame.init()
    pygame.font.init()
    try:
        surf = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption(caption)
        return surf
    except pygame.error:
        return None  # headless/CI


def load_overrides(path: Optional[str]) -> Dict[str, Any]:
    """Read a JSON overrides file: {"rig": {...}, "lift": {...}, "particles": {...}}."""
    if not path:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"config {path} must hold a JSON object")
    unknown = sorted(set(data) - {"rig", "lift", "particles"})
    if unknown:
        raise ConfigurationError(f"unknown config sections: {', '.join(unknown)}")
    for section, values in data.items():
        if not isinstance(values, dict):
            raise ConfigurationError(f"config section {section!r} must be a JSON object")
    return data


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Interactive showcase camera and ambient motion preview.")
    p.add_argument("--config", help="JSON file with rig/lift/particles overrides")
    p.add_argument("--frames", type=int, default=0, help="stop after N frames (0 = run until closed)")
    p.add_argument("--headless", action="store_true", help="force the SDL dummy video driver")
    p.add_argument("--log-level", default=settings.LOG_LEVEL)
    p.add_argument("--log-file", action="store_true", default=settings.LOG_TO_FILE)
    return p.parse_args(argv)


def _write_crash_file() -> Path:
    crash_dir = Path("logs")
    crash_dir.mkdir(parents=True, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    path = crash_dir / f"crash_{stamp}.txt"
    path.write_text("Unexpected crash.\n\n" + traceback.format_exc(), encoding="utf-8")
    return path


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Safe entrypoint runner:
      - Configures env for Linux/headless.
      - Initializes logging.
      - Builds the scene and drives it from the pygame event loop.
      - Catches exceptions in the loop and writes a crash log.
    """
    args = parse_args(argv)
    configure_environment(True if args.headless else None)

    from src.utils.logging_setup import setup_logging, get_logger
    setup_logging(args.log_level, log_to_file=args.log_file)
    log = get_logger("safe_main")

    try:
        overrides = load_overrides(args.config)
    except ConfigurationError as e:
        log.error("%s", e)
        return 2

    import pygame
    from src.core.scene import ShowcaseScene
    from src.ui.preview import HoverPicker, ScenePreview
    from src.utils.dt import FrameClock
    from src.utils.event_bus import POINTER_MOVE, VIEWPORT_RESIZE, EventBus

    screen = init_pygame_display()
    if screen is None:
        log.warning("Running without a visible display (SDL dummy).")
    size = screen.get_size() if screen is not None else (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT)

    events = EventBus()
    try:
        scene = ShowcaseScene.from_overrides(overrides, events, viewport=size)
    except ConfigurationError as e:
        log.error("Invalid configuration: %s", e)
        pygame.quit()
        return 2

    picker = HoverPicker(events)
    preview = ScenePreview()
    clock = FrameClock(fps=settings.FPS, max_dt=settings.MAX_FRAME_DT, window=settings.FRAME_DT_WINDOW)
    mouse = (size[0] // 2, size[1] // 2)
    frames = 0

    try:
        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                elif ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.type == pygame.MOUSEMOTION:
                    mouse = ev.pos
                    events.emit(POINTER_MOVE, x=ev.pos[0], y=ev.pos[1])
                elif ev.type == pygame.VIDEORESIZE:
                    size = (ev.w, ev.h)
                    events.emit(VIEWPORT_RESIZE, width=ev.w, height=ev.h)
                preview.handle_event(ev)

            dt = clock.tick()
            picker.update(scene, mouse, size)
            scene.tick(dt)

            if screen is not None:
                screen.fill(settings.BG_COLOR)
                preview.draw(screen, scene, picker.hovered)
                pygame.display.flip()

            frames += 1
            if args.frames and frames >= args.frames:
                running = False
        return 0
    except Exception as e:
        path = _write_crash_file()
        log.exception("Unhandled exception in frame loop (%s): %s", path, e)
        return 1
    finally:
        scene.dispose()
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(run())
