"""Data models for LED panel layouts and output."""

from .color import BLACK, BLUE, GREEN, RED, WHITE, YELLOW, Color, to_rgb
from .config import AppConfig
from .enums import ColorMapping, DeviceProtocol
from .layout import LayoutModel, PanelGeometry

__all__ = [
    "AppConfig",
    # Models
    "Color",
    "LayoutModel",
    "PanelGeometry",
    # Enums
    "ColorMapping",
    "DeviceProtocol",
    # Helpers
    "to_rgb",
    "BLACK",
    "BLUE",
    "GREEN",
    "RED",
    "WHITE",
    "YELLOW",
]
