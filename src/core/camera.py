# src/core/camera.py
"""
Perspective camera handle for the 3D showcase scene (pygame vector math).

- Mutable `position` / `target` (pygame.Vector3), owned by the renderer
- look_at() derives an orthonormal view basis (right, up, forward) with optional roll
- Spherical placement helper (radius, azimuth, polar) matching a Y-up world
- world_to_screen() pinhole projection used by the debug preview
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import pygame

from src.utils.camera_types import Vec3Like

_EPS = 1e-9
WORLD_UP = pygame.Vector3(0.0, 1.0, 0.0)
WORLD_RIGHT = pygame.Vector3(1.0, 0.0, 0.0)


def spherical_to_cartesian(radius: float, azimuth: float, polar: float) -> pygame.Vector3:
    """
    Y-up spherical coordinates; polar is measured from +Y, azimuth from +Z toward +X.
        x = r sin(phi) sin(theta), y = r cos(phi), z = r sin(phi) cos(theta)
    """
    sp = math.sin(polar)
    return pygame.Vector3(
        radius * sp * math.sin(azimuth),
        radius * math.cos(polar),
        radius * sp * math.cos(azimuth),
    )


def orthonormal_basis(forward: Vec3Like, up_hint: Vec3Like = WORLD_UP
                      ) -> Tuple[pygame.Vector3, pygame.Vector3, pygame.Vector3]:
    """
    Returns (right, up, forward) for a view direction.
    A direction parallel to `up_hint` falls back to world X as right.
    """
    f = pygame.Vector3(forward)
    if f.length_squared() < _EPS:
        raise ValueError("view direction has zero length")
    f.normalize_ip()
    right = f.cross(pygame.Vector3(up_hint))
    if right.length_squared() < _EPS:
        right = pygame.Vector3(WORLD_RIGHT)
    right.normalize_ip()
    up = right.cross(f)
    up.normalize_ip()
    return right, up, f


class PerspectiveCamera:
    """Renderer-owned camera satisfying the `CameraHandle` protocol."""

    __slots__ = ("position", "target", "roll", "fov_deg", "near", "right", "up", "forward")

    def __init__(self, position: Vec3Like = (0.0, 0.0, 10.0), target: Vec3Like = (0.0, 0.0, 0.0),
                 *, fov_deg: float = 50.0, near: float = 0.1, roll: float = 0.0) -> None:
        self.position = pygame.Vector3(position)
        self.target = pygame.Vector3(target)
        self.roll = float(roll)
        self.fov_deg = float(fov_deg)
        self.near = float(near)
        self.right = pygame.Vector3(WORLD_RIGHT)
        self.up = pygame.Vector3(WORLD_UP)
        self.forward = pygame.Vector3(0.0, 0.0, -1.0)
        self.look_at(self.target)

    def __repr__(self) -> str:
        p, t = self.position, self.target
        return (f"PerspectiveCamera(pos=({p.x:.2f}, {p.y:.2f}, {p.z:.2f}), "
                f"target=({t.x:.2f}, {t.y:.2f}, {t.z:.2f}))")

    def look_at(self, point: Vec3Like) -> None:
        """Aim at `point`; a target coincident with the position keeps the previous basis."""
        self.target.update(point)
        direction = self.target - self.position
        if direction.length_squared() < _EPS:
            return
        right, up, forward = orthonormal_basis(direction)
        if self.roll:
            deg = math.degrees(self.roll)
            right = right.rotate(deg, forward)
            up = up.rotate(deg, forward)
        self.right, self.up, self.forward = right, up, forward

    def world_to_screen(self, point: Vec3Like, width: int, height: int
                        ) -> Optional[Tuple[float, float, float]]:
        """Project to (sx, sy, depth) in pixels; None when behind the near plane."""
        rel = pygame.Vector3(point) - self.position
        depth = rel.dot(self.forward)
        if depth <= self.near:
            return None
        focal = (height * 0.5) / math.tan(math.radians(self.fov_deg) * 0.5)
        sx = width * 0.5 + rel.dot(self.right) * focal / depth
        sy = height * 0.5 - rel.dot(self.up) * focal / depth
        return sx, sy, depth


__all__ = ["PerspectiveCamera", "spherical_to_cartesian", "orthonormal_basis", "WORLD_UP"]
