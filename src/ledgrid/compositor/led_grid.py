"""LED grid compositor.

Owns one color buffer and one output channel per panel of a layout,
maps window coordinates onto panel cells, and dispatches frames.

Buffer layout
-------------

Each panel buffer is a ``uint8`` array of shape ``(grid_size, grid_size, 3)``
indexed ``[x, y]`` with a top-left origin. On output a buffer is flattened
row-major (``y`` outer, ``x`` inner), which is the order both wire encoders
and the physical LED chains expect::

    wire index = y * grid_size + x

A panel marked ``mirror`` is wired right-to-left; its columns are read as
``grid_size - 1 - x`` when flattening. Storage itself is never flipped, so
content producers always draw in window orientation.
"""

import logging
import threading
from collections.abc import Sequence
from typing import Callable, Optional

import numpy as np
import numpy.typing as npt

from ledgrid.devices.channel import SocketFactory
from ledgrid.devices.protocols import DeviceChannel
from ledgrid.devices.registry import create_channel
from ledgrid.exceptions import ErrorContext, collect_errors
from ledgrid.models import AppConfig, Color, LayoutModel, PanelGeometry, to_rgb

logger = logging.getLogger(__name__)


class LedGrid:
    """
    Composite per-panel color buffers and send them to the panels.

    Example:
        ```python
        with LedGrid(load_layout("TwoGrids")) as grid:
            grid.set_window_color(10, 10, RED)
            grid.send_to_devices()
            grid.turn_off_all()
        ```
    """

    def __init__(
        self,
        layout: LayoutModel,
        channels: Optional[Sequence[DeviceChannel]] = None,
        config: Optional[AppConfig] = None,
        socket_factory: Optional[SocketFactory] = None,
    ):
        """
        Initialize the grid (channels are not connected yet).

        Args:
            layout: Panel arrangement
            channels: One channel per panel, in layout order. Built from
                config.protocol when omitted.
            config: Ports, rate limit and turn-off settings (defaults if None)
            socket_factory: Passed to built channels (ignored with explicit channels)

        Raises:
            ValueError: If the number of channels doesn't match the panels
        """
        self.layout = layout
        self.config = config or AppConfig()

        if channels is None:
            channels = [
                create_channel(panel, index, self.config, socket_factory)
                for index, panel in enumerate(layout.panels)
            ]
        if len(channels) != layout.panel_count:
            raise ValueError(
                f"Layout '{layout.name}' has {layout.panel_count} panels "
                f"but {len(channels)} channels were given"
            )

        self._channels: list[DeviceChannel] = list(channels)
        self._buffers: list[npt.NDArray[np.uint8]] = [
            np.zeros((panel.grid_size, panel.grid_size, 3), dtype=np.uint8)
            for panel in layout.panels
        ]
        self._frame_count = 0

        logger.info(f"LedGrid '{layout.name}' with {layout.panel_count} panel(s)")

    # =================================================================
    # Layout queries
    # =================================================================

    @property
    def panel_count(self) -> int:
        return len(self._buffers)

    def get_panel_count(self) -> int:
        return self.panel_count

    @property
    def window_width(self) -> int:
        return self.layout.window_width

    @property
    def window_height(self) -> int:
        return self.layout.window_height

    @property
    def frame_count(self) -> int:
        """Number of send_to_devices() calls so far."""
        return self._frame_count

    def _resolve(self, panel: int | str) -> int:
        if isinstance(panel, str):
            return self.layout.index_of(panel)
        if not 0 <= panel < self.panel_count:
            raise IndexError(f"Panel index {panel} out of range (0-{self.panel_count - 1})")
        return panel

    def _find(self, panel: int | str) -> Optional[int]:
        try:
            return self._resolve(panel)
        except (IndexError, KeyError):
            return None

    def get_panel_geometry(self, panel: int | str) -> Optional[PanelGeometry]:
        """Get a panel's geometry by index or id, or None if there is no such panel."""
        index = self._find(panel)
        return None if index is None else self.layout.panels[index]

    def get_channel(self, panel: int | str) -> DeviceChannel:
        """Get a panel's output channel by index or id."""
        return self._channels[self._resolve(panel)]

    def window_to_panel_cell(self, wx: int, wy: int) -> tuple[int, int, int] | None:
        """
        Map a window coordinate to (panel_index, cell_x, cell_y).

        Panels are scanned in layout order and the first one containing the
        point wins, so overlapping panels resolve to the earlier one.

        Returns:
            Panel index and clamped cell coordinates, or None outside every panel
        """
        for index, panel in enumerate(self.layout.panels):
            if panel.contains(wx, wy):
                cell_x, cell_y = panel.cell_at(wx, wy)
                return index, cell_x, cell_y
        return None

    # =================================================================
    # Buffer access
    # =================================================================

    def set_color(self, panel_index: int, x: int, y: int, color: Color | Sequence[int]) -> None:
        """
        Set one cell. Out-of-range panels or cells are ignored; channels are clamped.

        Fractional coordinates address the cell they fall in.
        """
        if not 0 <= panel_index < self.panel_count:
            return
        buffer = self._buffers[panel_index]
        size = buffer.shape[0]
        if not (0 <= x < size and 0 <= y < size):
            return
        buffer[int(x), int(y)] = to_rgb(color)

    def set_color_by_id(self, panel_id: str, x: int, y: int, color: Color | Sequence[int]) -> None:
        """Set one cell on the panel with this id (unknown ids are ignored)."""
        try:
            index = self.layout.index_of(panel_id)
        except KeyError:
            return
        self.set_color(index, x, y, color)

    def set_window_color(self, wx: int, wy: int, color: Color | Sequence[int]) -> bool:
        """
        Set the cell under a window coordinate.

        Returns:
            True if the point hit a panel
        """
        hit = self.window_to_panel_cell(wx, wy)
        if hit is None:
            return False
        panel_index, cell_x, cell_y = hit
        self.set_color(panel_index, cell_x, cell_y, color)
        return True

    def get_color(self, panel_index: int, x: int, y: int) -> tuple[int, int, int] | None:
        """Read one cell as (r, g, b), or None when out of range."""
        if not 0 <= panel_index < self.panel_count:
            return None
        buffer = self._buffers[panel_index]
        size = buffer.shape[0]
        if not (0 <= x < size and 0 <= y < size):
            return None
        r, g, b = buffer[int(x), int(y)]
        return int(r), int(g), int(b)

    def panel_buffer(self, panel: int | str) -> npt.NDArray[np.uint8]:
        """The live ``[x, y, rgb]`` buffer of a panel, for bulk writes."""
        return self._buffers[self._resolve(panel)]

    def fill_panel(self, panel: int | str, color: Color | Sequence[int]) -> None:
        """Set every cell of a panel to one color (unknown panels are ignored)."""
        index = self._find(panel)
        if index is not None:
            self._buffers[index][:, :] = to_rgb(color)

    def clear_panel(self, panel: int | str) -> None:
        index = self._find(panel)
        if index is not None:
            self._buffers[index].fill(0)

    def clear_all(self) -> None:
        for buffer in self._buffers:
            buffer.fill(0)

    def flatten_panel(self, panel: int | str) -> bytes:
        """Serialize a panel buffer to row-major RGB bytes, applying its mirror."""
        index = self._resolve(panel)
        buffer = self._buffers[index]
        if self.layout.panels[index].mirror:
            buffer = buffer[::-1]
        # [x, y] -> [y, x] so C order walks rows
        return buffer.transpose(1, 0, 2).tobytes()

    # =================================================================
    # Output
    # =================================================================

    def send_to_devices(self) -> bool:
        """
        Send every panel's buffer to its channel.

        All panels are attempted even after a failure.

        Returns:
            True only if every channel reported success

        Raises:
            NotConnectedError: If a channel requires connect() first
        """
        all_sent = True
        for index, (panel, channel) in enumerate(zip(self.layout.panels, self._channels)):
            sent = channel.send_frame(self.flatten_panel(index))
            if not sent:
                logger.error(f"Failed to send frame to panel '{panel.id}' at {panel.device_ip}")
            all_sent = all_sent and sent
        self._frame_count += 1
        return all_sent

    def turn_off_all(self, stop_event: Optional[threading.Event] = None) -> bool:
        """
        Blank every panel, repeating black frames to survive packet loss.

        Clears the buffers too so the next frame does not restore old content.

        Returns:
            True only if every panel received at least one black frame
        """
        self.clear_all()
        all_off = True
        for panel, channel in zip(self.layout.panels, self._channels):
            off = channel.turn_off(stop_event=stop_event)
            if not off:
                logger.error(f"Failed to turn off panel '{panel.id}' at {panel.device_ip}")
            all_off = all_off and off
        return all_off

    def start_turn_off(
        self,
        stop_event: Optional[threading.Event] = None,
        on_complete: Optional[Callable[[bool], None]] = None,
    ) -> threading.Thread:
        """
        Run turn_off_all() on a daemon thread.

        Args:
            stop_event: Set it to abandon the remaining repeats
            on_complete: Called on the worker thread with the turn_off_all()
                result; an unexpected error is logged and reported as False

        Returns:
            The started thread (join it to wait for completion)
        """

        def run() -> None:
            try:
                result = self.turn_off_all(stop_event=stop_event)
            except Exception:
                logger.exception(f"Turn off of layout '{self.layout.name}' failed")
                result = False
            if on_complete is not None:
                on_complete(result)

        thread = threading.Thread(
            target=run,
            name="ledgrid-turn-off",
            daemon=True,
        )
        thread.start()
        return thread

    # =================================================================
    # Lifecycle
    # =================================================================

    @property
    def is_connected(self) -> bool:
        return all(channel.is_connected for channel in self._channels)

    def connect(self) -> None:
        """Open every channel. On failure, channels already opened are closed again."""
        try:
            with ErrorContext(f"connect {self.panel_count} channel(s)", logger):
                for channel in self._channels:
                    channel.connect()
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        """Close every channel, continuing past individual failures."""
        collector = collect_errors("close channels")
        for panel, channel in zip(self.layout.panels, self._channels):
            with collector.try_operation(f"close {panel.id}"):
                channel.close()
        if collector.has_errors:
            logger.warning(collector.get_summary())

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
