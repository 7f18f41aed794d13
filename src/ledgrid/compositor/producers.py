"""Content producers.

A producer draws one frame into a ``LedGrid`` per call. Real animations
live outside this package; the built-ins here are for wiring checks.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from ledgrid.models import BLUE, GREEN, RED, YELLOW, Color, to_rgb

if TYPE_CHECKING:
    from .led_grid import LedGrid


class ContentProducer(Protocol):
    """Protocol for anything that can draw a frame."""

    def render(self, grid: LedGrid, width: int, height: int) -> None:
        """
        Draw the next frame into the grid buffers.

        Args:
            grid: Target grid (write via set_color / set_window_color / panel_buffer)
            width: Window width in pixels
            height: Window height in pixels
        """
        ...


class CornerTestPattern:
    """Light the four corners of every panel in distinct colors.

    Top-left red, top-right green, bottom-left blue, bottom-right yellow.
    A panel showing them in the wrong places is mirrored or rotated; wrong
    colors point at its color mapping.
    """

    def __init__(
        self,
        top_left: Color = RED,
        top_right: Color = GREEN,
        bottom_left: Color = BLUE,
        bottom_right: Color = YELLOW,
    ):
        self.top_left = top_left
        self.top_right = top_right
        self.bottom_left = bottom_left
        self.bottom_right = bottom_right

    def render(self, grid: LedGrid, width: int, height: int) -> None:
        grid.clear_all()
        for index, panel in enumerate(grid.layout.panels):
            last = panel.grid_size - 1
            grid.set_color(index, 0, 0, self.top_left)
            grid.set_color(index, last, 0, self.top_right)
            grid.set_color(index, 0, last, self.bottom_left)
            grid.set_color(index, last, last, self.bottom_right)


class SolidColor:
    """Fill every panel with one color."""

    def __init__(self, color: Color | Sequence[int]):
        self.color = to_rgb(color)

    def render(self, grid: LedGrid, width: int, height: int) -> None:
        for index in range(grid.get_panel_count()):
            grid.fill_panel(index, self.color)
