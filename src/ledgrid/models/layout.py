"""Panel geometry and layout models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import ColorMapping


class PanelGeometry(BaseModel):
    """One physical LED panel: where it sits in the window and how to reach it.

    ``led_count`` is always ``grid_size ** 2``. It may be omitted in layout
    files; an explicit value that disagrees is rejected.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="grid", min_length=1, description="Panel identifier, unique within a layout")
    device_ip: str = Field(default="192.168.1.100", description="Receiver IP address")
    led_count: int = Field(default=256, ge=0, description="Number of LEDs (grid_size squared)")

    # Placement in window space
    x: int = Field(default=0, description="Left edge in window pixels")
    y: int = Field(default=0, description="Top edge in window pixels")
    width: int = Field(default=240, ge=0, description="Width in window pixels")
    height: int = Field(default=240, ge=0, description="Height in window pixels")

    grid_size: int = Field(default=16, ge=1, description="Logical resolution (N x N cells)")
    pixel_size: int = Field(default=15, ge=1, description="Window pixels per logical cell")

    color_mapping: ColorMapping = Field(
        default=ColorMapping.GBR, description="Channel order expected by the panel"
    )
    mirror: bool = Field(
        default=False, description="Panel is wired right-to-left; flip columns on output"
    )
    universe: int | None = Field(
        default=None,
        ge=0,
        le=0x7FFF,
        description="Art-Net universe (None = panel index)",
    )

    @model_validator(mode="before")
    @classmethod
    def derive_led_count(cls, data):
        """Fill in led_count from grid_size when the layout omits it."""
        if isinstance(data, dict) and data.get("led_count") is None:
            grid_size = data.get("grid_size", 16)
            if isinstance(grid_size, int):
                data = {**data, "led_count": grid_size * grid_size}
        return data

    @model_validator(mode="after")
    def check_led_count(self) -> "PanelGeometry":
        """Panels are square: led_count must match the grid."""
        expected = self.grid_size * self.grid_size
        if self.led_count != expected:
            raise ValueError(
                f"led_count {self.led_count} does not match grid_size {self.grid_size} "
                f"(expected {expected})"
            )
        return self

    def contains(self, wx: int, wy: int) -> bool:
        """Check if a window coordinate falls inside this panel."""
        return self.x <= wx < self.x + self.width and self.y <= wy < self.y + self.height

    def cell_at(self, wx: int, wy: int) -> tuple[int, int]:
        """Convert a window coordinate to a clamped (cell_x, cell_y) on this panel."""
        last = self.grid_size - 1
        cell_x = max(0, min(last, int((wx - self.x) // self.pixel_size)))
        cell_y = max(0, min(last, int((wy - self.y) // self.pixel_size)))
        return cell_x, cell_y


class LayoutModel(BaseModel):
    """A named arrangement of panels in a window."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Unnamed", description="Layout name")
    title: str = Field(default="LedFx", description="Window title")
    window_width: int = Field(default=500, ge=1, description="Window width in pixels")
    window_height: int = Field(default=400, ge=1, description="Window height in pixels")
    panels: list[PanelGeometry] = Field(default_factory=list, description="Panels in output order")

    @field_validator("panels")
    @classmethod
    def validate_unique_ids(cls, panels: list[PanelGeometry]) -> list[PanelGeometry]:
        """Reject duplicate panel identifiers."""
        seen: set[str] = set()
        for panel in panels:
            if panel.id in seen:
                raise ValueError(f"Duplicate panel id: {panel.id}")
            seen.add(panel.id)
        return panels

    @property
    def panel_count(self) -> int:
        return len(self.panels)

    def index_of(self, panel_id: str) -> int:
        """
        Get the index of a panel by id.

        Raises:
            KeyError: If no panel has this id
        """
        for index, panel in enumerate(self.panels):
            if panel.id == panel_id:
                return index
        raise KeyError(panel_id)

    def get_panel(self, panel_id: str) -> PanelGeometry:
        """Get a panel by id (raises KeyError if missing)."""
        return self.panels[self.index_of(panel_id)]
