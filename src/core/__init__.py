# --- FILE: src/core/__init__.py
"""
Frame-driven motion components: pointer mapping, camera rig, hover lifts,
particle drift, and the scene that wires them together.
"""
__all__ = ["camera", "pointer", "camera_rig", "hover_lift", "particles", "scene", "safe_main"]
