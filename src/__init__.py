# --- FILE: src/__init__.py
"""
Top-level package marker for the showcase motion layer.

Having an __init__ here ensures imports like
`from src.core.camera_rig import DampedCameraRig` work consistently on all
environments, including tools and test runners that don't inject the project
root to sys.path.
"""
__all__ = ["core", "ui", "utils"]
