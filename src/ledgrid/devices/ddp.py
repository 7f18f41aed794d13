"""DDP (Distributed Display Protocol) pixel streaming.

Packet layout (all multi-byte fields big-endian)::

    0  flags        0x40 on the final fragment of a frame, 0x00 otherwise
    1  sequence     frame counter mod 256, same for every fragment
    2  data type    0x01 (RGB, 8 bits per channel)
    3  destination  0x01 (default output)
    4  offset       byte offset of this fragment's payload (4 bytes)
    8  length       payload byte count (2 bytes)
    10 payload      canonical RGB, at most 1440 bytes (480 LEDs)

The payload is sent in canonical RGB order; receivers apply their own
channel order, so the panel's color mapping is not used here.
"""

import logging
import math
import socket
import struct
from dataclasses import dataclass

from ledgrid.exceptions import NotConnectedError, ProtocolError

from .channel import UdpChannel

logger = logging.getLogger(__name__)

DDP_PORT = 4048
DDP_HEADER_SIZE = 10
DDP_MAX_LEDS_PER_PACKET = 480
DDP_MAX_DATA_SIZE = DDP_MAX_LEDS_PER_PACKET * 3  # 1440 bytes

DDP_FLAG_FINAL = 0x40
DDP_TYPE_RGB = 0x01
DDP_DESTINATION_DEFAULT = 0x01

_HEADER = struct.Struct(">BBBBIH")


@dataclass(frozen=True, slots=True)
class DdpPacket:
    """Decoded DDP packet."""

    flags: int
    sequence: int
    data_type: int
    destination: int
    offset: int
    payload: bytes

    @property
    def is_final(self) -> bool:
        return bool(self.flags & DDP_FLAG_FINAL)


def fragment_count(led_count: int) -> int:
    """Number of packets needed for a frame of ``led_count`` LEDs."""
    return math.ceil(led_count / DDP_MAX_LEDS_PER_PACKET)


def encode_frame(rgb: bytes, sequence: int) -> list[bytes]:
    """
    Encode one frame of RGB bytes as DDP packets.

    Args:
        rgb: Canonical RGB bytes, 3 per LED
        sequence: Frame sequence number (taken mod 256)

    Returns:
        Packets in send order; empty for an empty frame

    Raises:
        ProtocolError: If ``rgb`` is not a whole number of LEDs
    """
    if len(rgb) % 3:
        raise ProtocolError("DDP", f"frame length {len(rgb)} is not a multiple of 3")

    data = bytes(rgb)
    seq = sequence % 256
    packets = []
    for offset in range(0, len(data), DDP_MAX_DATA_SIZE):
        chunk = data[offset:offset + DDP_MAX_DATA_SIZE]
        is_last = offset + len(chunk) >= len(data)
        flags = DDP_FLAG_FINAL if is_last else 0x00
        header = _HEADER.pack(flags, seq, DDP_TYPE_RGB, DDP_DESTINATION_DEFAULT, offset, len(chunk))
        packets.append(header + chunk)
    return packets


def decode_packet(packet: bytes) -> DdpPacket:
    """
    Parse a DDP packet.

    Raises:
        ProtocolError: If the packet is shorter than its header or its length
            field disagrees with the payload size
    """
    if len(packet) < DDP_HEADER_SIZE:
        raise ProtocolError("DDP", f"packet too short ({len(packet)} bytes)")

    flags, sequence, data_type, destination, offset, length = _HEADER.unpack_from(packet)
    payload = bytes(packet[DDP_HEADER_SIZE:])
    if len(payload) != length:
        raise ProtocolError(
            "DDP", f"length field says {length} bytes but payload has {len(payload)}"
        )
    return DdpPacket(
        flags=flags,
        sequence=sequence,
        data_type=data_type,
        destination=destination,
        offset=offset,
        payload=payload,
    )


class DdpChannel(UdpChannel):
    """
    Stream a panel's frames to a DDP receiver.

    Frames larger than 480 LEDs are split into fragments sharing one
    sequence number. The sequence advances only after a whole frame has been
    handed to the socket.
    """

    protocol_name = "DDP"

    def __init__(self, device_ip: str, led_count: int, port: int = DDP_PORT, **kwargs):
        super().__init__(device_ip, port, led_count, **kwargs)
        self._sequence = 0

    @property
    def sequence(self) -> int:
        """Sequence number the next frame will carry."""
        return self._sequence

    def _ready_to_send(self, rgb: bytes) -> bool:
        if self._sock is None:
            raise NotConnectedError(address=self._label, protocol=self.protocol_name)
        expected = self.led_count * 3
        if len(rgb) < expected:
            raise ValueError(
                f"RGB data too short for {self._label}: {len(rgb)} bytes, need {expected}"
            )
        return True

    def _transmit(self, sock: socket.socket, rgb: bytes) -> bool:
        packets = encode_frame(rgb[:self.led_count * 3], self._sequence)
        try:
            for packet in packets:
                sock.sendto(packet, self.address)
        except OSError as e:
            logger.error(f"DDP send to {self._label} failed: {e}")
            return False

        self._sequence = (self._sequence + 1) % 256
        return True
