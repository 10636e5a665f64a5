"""Wireframe height-map loading, RGBA images, XPM42 decoding and a headless window model."""

__version__ = "0.1.0"
__all__ = ["canvas", "colors", "errors", "events", "fdfmap", "window", "xpm42"]