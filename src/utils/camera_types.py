"""
Lightweight camera type hints.

- Uses `from __future__ import annotations` so pygame types in annotations
  don't need pygame at import-time (helps headless CI).
- Imports pygame only under TYPE_CHECKING to keep runtime import optional.
- Provides `CameraHandle` / `TransformLike` Protocols that renderer-side
  objects can satisfy without inheriting anything from this package.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    import pygame  # noqa: F401

Vec3Like = Sequence[float]


class CameraHandle(Protocol):
    """
    Minimal requirements for a camera the rig may drive.
    The renderer owns the object; the rig only mutates `position` and calls
    `look_at()`.
    """

    position: "pygame.Vector3"
    target: "pygame.Vector3"

    def look_at(self, point: Vec3Like) -> None: ...


class TransformLike(Protocol):
    """Anything with a mutable `position` vector (only `.y` is written by hover lifts)."""

    position: "pygame.Vector3"


__all__ = [
    "CameraHandle",
    "TransformLike",
    "Vec3Like",
]
