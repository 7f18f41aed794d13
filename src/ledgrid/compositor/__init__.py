"""Compositing of per-panel color buffers."""

from .led_grid import LedGrid
from .producers import ContentProducer, CornerTestPattern, SolidColor
from .runner import FrameLoop

__all__ = [
    "ContentProducer",
    "CornerTestPattern",
    "FrameLoop",
    "LedGrid",
    "SolidColor",
]
