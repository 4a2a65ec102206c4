# --- FILE: src/utils/__init__.py
"""
Utilities package marker: settings, errors, logging, easing, event bus.
"""
__all__ = ["settings", "errors", "logging_setup", "easing", "event_bus", "dt", "camera_types"]
