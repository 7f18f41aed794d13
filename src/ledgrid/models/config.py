"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from ledgrid.persistence import PydanticPersistence

from .enums import DeviceProtocol

LEDGRID_HOME = Path.home() / ".ledgrid"
DEFAULT_CONFIG_PATH = LEDGRID_HOME / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Transport
    protocol: DeviceProtocol = Field(
        default=DeviceProtocol.DDP, description="Wire protocol used for every panel"
    )
    ddp_port: int = Field(default=4048, ge=1, le=65535, description="DDP receiver UDP port")
    artnet_port: int = Field(default=5568, ge=1, le=65535, description="Art-Net receiver UDP port")
    min_send_interval: float = Field(
        default=0.008,
        ge=0.0,
        description="Minimum seconds between frames per panel (0.008 = 125 Hz); faster frames are dropped",
    )

    # Turn off
    turn_off_repeats: int = Field(
        default=5, ge=1, description="How many black frames to send when turning panels off"
    )
    turn_off_interval: float = Field(
        default=0.05, ge=0.0, description="Seconds between turn-off repeats"
    )

    # Layouts
    layouts_dir: Path = Field(
        default_factory=lambda: LEDGRID_HOME / "layouts",
        description="Directory searched for user layouts before the built-in ones",
    )
    default_layout: str = Field(default="OneGrid", description="Layout used when none is given")

    # Frame loop
    target_fps: int = Field(default=60, ge=1, le=240, description="Frames per second for the test loop")

    @field_serializer("layouts_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    def port_for(self, protocol: DeviceProtocol | None = None) -> int:
        """UDP port for a protocol (defaults to the configured one)."""
        protocol = protocol or self.protocol
        if protocol == DeviceProtocol.ARTNET:
            return self.artnet_port
        return self.ddp_port

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return defaults when it is missing.

        Args:
            path: Path to config file. If None, uses ~/.ledgrid/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH
        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file (keeps a .bak of the previous one)."""
        if path is None:
            path = DEFAULT_CONFIG_PATH
        PydanticPersistence.save_json(self, path)
