# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path
import pytest

# Ensure repo root is importable as a package root (so `import src...` works on CI)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless Pygame setup (vector math works without a display, the preview does not)
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def bus():
    from src.utils.event_bus import EventBus
    return EventBus()


@pytest.fixture
def camera():
    """Camera on +Z looking at the origin: right = +X, up = +Y."""
    from src.core.camera import PerspectiveCamera
    return PerspectiveCamera(position=(0.0, 0.0, 10.0), target=(0.0, 0.0, 0.0))


@pytest.fixture
def make_rig(bus, camera):
    """Factory for an attached rig with a 1000x1000 viewport."""
    from src.core.camera_rig import DampedCameraRig, RigConfig

    created = []

    def _make(**overrides):
        rig = DampedCameraRig(RigConfig(**overrides), bus, viewport=(1000, 1000))
        rig.attach(camera)
        created.append(rig)
        return rig

    yield _make
    for rig in created:
        rig.dispose()
