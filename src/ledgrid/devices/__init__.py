"""UDP output channels for LED panels."""

from .artnet import ArtDmxPacket, ArtNetChannel
from .channel import UdpChannel
from .ddp import DdpChannel, DdpPacket
from .protocols import DeviceChannel
from .rate_limiter import RateLimiter
from .registry import create_channel, register_channel_builder
from .repeat import repeat_send

__all__ = [
    "ArtDmxPacket",
    "ArtNetChannel",
    "DdpChannel",
    "DdpPacket",
    "DeviceChannel",
    "RateLimiter",
    "UdpChannel",
    "create_channel",
    "register_channel_builder",
    "repeat_send",
]
