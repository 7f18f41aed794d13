"""ledgrid: composite LED matrix frames and stream them to WLED panels."""

__version__ = "0.1.0"

from .compositor import LedGrid
from .layouts import load_layout

__all__ = [
    "LedGrid",
    "load_layout",
]
