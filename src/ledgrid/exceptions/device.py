"""Device channel exceptions.

This module defines exceptions raised by device channels and wire codecs:
- DeviceError: Base class for device channel errors
- NotConnectedError: A channel was used before connect() (or after close())
- ProtocolError: A packet could not be decoded
"""

from .base import LedGridError


class DeviceError(LedGridError):
    """Device channel operation failed."""

    def __init__(self, user_message: str, address: str | None = None, **kwargs):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            address: Network address of the device (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.address = address


class NotConnectedError(DeviceError):
    """Channel socket is not open.

    Sending on a channel that was never connected is a caller bug, so this
    is not recoverable on a per-frame basis.
    """

    def __init__(self, address: str | None = None, protocol: str = "DDP"):
        """
        Initialize not-connected error.

        Args:
            address: Device address of the channel
            protocol: Protocol name used in the message
        """
        user_msg = f"{protocol} channel for {address or 'unknown device'} is not connected."
        recovery = "Call connect() on the channel (or the LedGrid) before sending frames."

        super().__init__(
            user_message=user_msg,
            technical_message=f"{protocol} send attempted on closed socket ({address})",
            address=address,
            recoverable=False,
            recovery_hint=recovery,
        )
        self.protocol = protocol


class ProtocolError(DeviceError):
    """Packet bytes do not match the expected wire format."""

    def __init__(self, protocol: str, reason: str):
        """
        Initialize protocol error.

        Args:
            protocol: Protocol name (e.g., "DDP", "Art-Net")
            reason: Why the packet is invalid
        """
        super().__init__(
            user_message=f"Malformed {protocol} packet: {reason}",
            technical_message=f"{protocol} decode failed: {reason}",
        )
        self.protocol = protocol
        self.reason = reason
