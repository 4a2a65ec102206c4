# --- FILE: src/ui/__init__.py
"""Debug preview and hover hit testing for the host loop."""
__all__ = ["preview"]
