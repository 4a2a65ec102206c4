# src/utils/dt.py
from __future__ import annotations
from collections import deque
import math
from typing import Deque, Optional

import pygame


class FrameClock:
    """
    Per-frame delta source for the host loop: pygame clock ticks, clamped and
    smoothed to keep a hitch (window drag, breakpoint) from launching a tween
    or camera damping step across several seconds in one frame.

    Example:
        clock = FrameClock(fps=60)
        while running:
            dt = clock.tick()
            scene.tick(dt)
    """
    def __init__(self, *, fps: int = 60, max_dt: float = 1/15.0, window: int = 8,
                 clock: Optional["pygame.time.Clock"] = None):
        self.fps = max(0, int(fps))
        self.max_dt = float(max_dt)
        self._buf: Deque[float] = deque(maxlen=max(1, int(window)))
        self._clock = clock if clock is not None else pygame.time.Clock()

    def smooth(self, dt: float) -> float:
        """Clamp one raw delta into [0, max_dt] and return the rolling average."""
        dt = float(dt)
        if not math.isfinite(dt):
            dt = 0.0
        dt = max(0.0, min(self.max_dt, dt))
        self._buf.append(dt)
        return sum(self._buf) / len(self._buf)

    def tick(self) -> float:
        """Wait for the next frame and return its smoothed delta in seconds."""
        raw_ms = self._clock.tick(self.fps)
        return self.smooth(raw_ms / 1000.0)

    def reset(self) -> None:
        self._buf.clear()
