"""Device channel protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DeviceChannel(Protocol):
    """Protocol for one panel's output channel.

    A channel owns its socket, device address and per-frame state (sequence
    counter, rate-limit timestamp). Implementations report transport failures
    as ``False``; only misuse (sending before ``connect()``) raises.
    """

    @property
    def address(self) -> tuple[str, int]:
        """Receiver (ip, port)."""
        ...

    @property
    def is_connected(self) -> bool:
        """Whether a socket is open."""
        ...

    def connect(self) -> None:
        """Open the UDP socket."""
        ...

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        ...

    def send_frame(self, rgb: bytes) -> bool:
        """
        Send one frame of canonical RGB bytes (row-major, 3 bytes per LED).

        Returns:
            True if sent or intentionally dropped by the rate limiter,
            False if the transport failed.
        """
        ...

    def turn_off(self, stop_event=None) -> bool:
        """
        Send repeated all-black frames, bypassing the rate limiter.

        Args:
            stop_event: Optional threading.Event that aborts remaining repeats

        Returns:
            True if at least one black frame was delivered.
        """
        ...
