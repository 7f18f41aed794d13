"""Art-Net ArtDMX output.

Each panel is addressed by its own universe and sent as a single packet::

    0   "Art-Net\\0"       8-byte id
    8   opcode 0x5000      little-endian
    10  protocol version   14, big-endian
    12  sequence           0 (sequencing disabled)
    13  physical           0
    14  universe           little-endian
    16  data length        big-endian, 1 + led_count * 3
    18  start code         0
    19  pixel bytes        led_count * 3, in the panel's channel order

Unlike DDP, the pixel bytes are remapped through the panel's
``ColorMapping`` because the receiver forwards DMX channels verbatim.
"""

import logging
import socket
import struct
from dataclasses import dataclass

import numpy as np

from ledgrid.exceptions import ProtocolError
from ledgrid.models import ColorMapping

from .channel import UdpChannel

logger = logging.getLogger(__name__)

ARTNET_PORT = 5568
ARTNET_ID = b"Art-Net\x00"
ARTNET_OPCODE_DMX = 0x5000
ARTNET_PROTOCOL_VERSION = 14
ARTNET_HEADER_SIZE = 18
ARTNET_MAX_UNIVERSE = 0x7FFF
DMX_START_CODE = 0x00


@dataclass(frozen=True, slots=True)
class ArtDmxPacket:
    """Decoded ArtDMX packet."""

    protocol_version: int
    sequence: int
    physical: int
    universe: int
    start_code: int
    data: bytes  # Pixel bytes in wire order, start code excluded

    @property
    def led_count(self) -> int:
        return len(self.data) // 3

    def to_rgb(self, mapping: ColorMapping) -> bytes:
        """Undo a panel's channel order, returning canonical RGB bytes."""
        pixels = np.frombuffer(self.data[:self.led_count * 3], dtype=np.uint8)
        return mapping.inverse().apply(pixels).tobytes()


def encode_frame(
    rgb: bytes,
    universe: int,
    led_count: int,
    mapping: ColorMapping = ColorMapping.GBR,
) -> bytes:
    """
    Encode one panel frame as an ArtDMX packet.

    Args:
        rgb: Canonical RGB bytes; missing trailing bytes are sent as zero,
            extra bytes are ignored
        universe: Target universe (0-32767)
        led_count: Number of LEDs on the panel
        mapping: Channel order expected by the panel

    Raises:
        ProtocolError: If the universe or LED count cannot be encoded
    """
    if not 0 <= universe <= ARTNET_MAX_UNIVERSE:
        raise ProtocolError("Art-Net", f"universe {universe} out of range 0-{ARTNET_MAX_UNIVERSE}")
    data_length = 1 + led_count * 3
    if led_count < 0 or data_length > 0xFFFF:
        raise ProtocolError("Art-Net", f"cannot encode {led_count} LEDs in one packet")

    pixels = np.zeros(led_count * 3, dtype=np.uint8)
    available = min(len(rgb), led_count * 3)
    pixels[:available] = np.frombuffer(bytes(rgb[:available]), dtype=np.uint8)

    header = (
        ARTNET_ID
        + struct.pack("<H", ARTNET_OPCODE_DMX)
        + struct.pack(">H", ARTNET_PROTOCOL_VERSION)
        + bytes([0, 0])  # sequence, physical
        + struct.pack("<H", universe)
        + struct.pack(">H", data_length)
    )
    return header + bytes([DMX_START_CODE]) + mapping.apply(pixels).tobytes()


def decode_packet(packet: bytes) -> ArtDmxPacket:
    """
    Parse an ArtDMX packet.

    Raises:
        ProtocolError: On a short packet, wrong id/opcode, or a length field
            that disagrees with the data
    """
    if len(packet) < ARTNET_HEADER_SIZE + 1:
        raise ProtocolError("Art-Net", f"packet too short ({len(packet)} bytes)")
    if packet[:8] != ARTNET_ID:
        raise ProtocolError("Art-Net", "missing Art-Net id")

    (opcode,) = struct.unpack_from("<H", packet, 8)
    if opcode != ARTNET_OPCODE_DMX:
        raise ProtocolError("Art-Net", f"unexpected opcode 0x{opcode:04X}")

    (version,) = struct.unpack_from(">H", packet, 10)
    sequence, physical = packet[12], packet[13]
    (universe,) = struct.unpack_from("<H", packet, 14)
    (length,) = struct.unpack_from(">H", packet, 16)

    body = bytes(packet[ARTNET_HEADER_SIZE:])
    if len(body) != length:
        raise ProtocolError(
            "Art-Net", f"length field says {length} bytes but packet carries {len(body)}"
        )
    return ArtDmxPacket(
        protocol_version=version,
        sequence=sequence,
        physical=physical,
        universe=universe,
        start_code=body[0],
        data=body[1:],
    )


class ArtNetChannel(UdpChannel):
    """Send a panel's frames as ArtDMX to one universe.

    Every failure, including sending before connect(), is logged and
    reported as False. A missing connection is logged at ERROR once, then at
    DEBUG until the channel is connected again.
    """

    protocol_name = "Art-Net"

    def __init__(
        self,
        device_ip: str,
        led_count: int,
        universe: int = 0,
        port: int = ARTNET_PORT,
        **kwargs,
    ):
        super().__init__(device_ip, port, led_count, **kwargs)
        self.universe = universe
        self._reported_not_connected = False

    def _ready_to_send(self, rgb: bytes) -> bool:
        if self._sock is None:
            message = f"Art-Net channel {self._label} (universe {self.universe}) not connected"
            if self._reported_not_connected:
                logger.debug(message)
            else:
                logger.error(message)
                self._reported_not_connected = True
            return False
        self._reported_not_connected = False
        return True

    def _transmit(self, sock: socket.socket, rgb: bytes) -> bool:
        try:
            packet = encode_frame(rgb, self.universe, self.led_count, self.color_mapping)
            sock.sendto(packet, self.address)
        except (OSError, ProtocolError) as e:
            logger.error(f"Art-Net send to {self._label} (universe {self.universe}) failed: {e}")
            return False
        return True
