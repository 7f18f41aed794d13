"""Channel registry.

Maps a ``DeviceProtocol`` to a builder that turns a panel's geometry into
a ready-to-connect channel. Built-in builders for DDP and Art-Net are
registered on import; ``register_channel_builder`` adds more.
"""

import logging
from typing import Callable, Optional

from ledgrid.models import AppConfig, DeviceProtocol, PanelGeometry

from .artnet import ArtNetChannel
from .channel import SocketFactory, UdpChannel
from .ddp import DdpChannel

logger = logging.getLogger(__name__)

# Builder signature: (panel, panel_index, config, socket_factory) -> channel
ChannelBuilder = Callable[[PanelGeometry, int, AppConfig, Optional[SocketFactory]], UdpChannel]

CHANNEL_BUILDERS: dict[DeviceProtocol, ChannelBuilder] = {}


def register_channel_builder(protocol: DeviceProtocol, builder: ChannelBuilder) -> None:
    """
    Register a channel builder.

    Args:
        protocol: Protocol the builder serves (replaces any existing builder)
        builder: Callable(panel, index, config, socket_factory) returning a channel
    """
    CHANNEL_BUILDERS[protocol] = builder


def get_channel_builder(protocol: DeviceProtocol) -> ChannelBuilder | None:
    return CHANNEL_BUILDERS.get(protocol)


def create_channel(
    panel: PanelGeometry,
    index: int,
    config: AppConfig,
    socket_factory: Optional[SocketFactory] = None,
    protocol: Optional[DeviceProtocol] = None,
) -> UdpChannel:
    """
    Build the output channel for one panel.

    Args:
        panel: Panel geometry (address, LED count, channel order)
        index: Panel position in the layout (default Art-Net universe)
        config: Ports, rate limit and turn-off settings
        socket_factory: Optional socket factory passed to the channel
        protocol: Override config.protocol

    Raises:
        ValueError: If no builder is registered for the protocol
    """
    protocol = protocol or config.protocol
    builder = get_channel_builder(protocol)
    if builder is None:
        raise ValueError(f"No channel builder registered for protocol '{protocol.value}'")
    channel = builder(panel, index, config, socket_factory)
    logger.debug(f"Created {protocol.display_name} channel for panel {panel.id} -> {panel.device_ip}")
    return channel


def _common_kwargs(panel: PanelGeometry, config: AppConfig, socket_factory) -> dict:
    return {
        "color_mapping": panel.color_mapping,
        "min_send_interval": config.min_send_interval,
        "turn_off_repeats": config.turn_off_repeats,
        "turn_off_interval": config.turn_off_interval,
        "socket_factory": socket_factory,
    }


def _build_ddp(panel, index, config, socket_factory) -> UdpChannel:
    return DdpChannel(
        panel.device_ip,
        panel.led_count,
        port=config.ddp_port,
        **_common_kwargs(panel, config, socket_factory),
    )


def _build_artnet(panel, index, config, socket_factory) -> UdpChannel:
    universe = panel.universe if panel.universe is not None else index
    return ArtNetChannel(
        panel.device_ip,
        panel.led_count,
        universe=universe,
        port=config.artnet_port,
        **_common_kwargs(panel, config, socket_factory),
    )


def _register_builtin_builders() -> None:
    """Register built-in builders. Called on module import."""
    register_channel_builder(DeviceProtocol.DDP, _build_ddp)
    register_channel_builder(DeviceProtocol.ARTNET, _build_artnet)


_register_builtin_builders()

__all__ = [
    "ChannelBuilder",
    "create_channel",
    "get_channel_builder",
    "register_channel_builder",
]
