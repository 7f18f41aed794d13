"""Base UDP channel shared by the DDP and Art-Net channels."""

import logging
import socket
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ledgrid.models import ColorMapping

from .rate_limiter import RateLimiter
from .repeat import repeat_send

logger = logging.getLogger(__name__)

# Log a send count every N frames at DEBUG level
SEND_LOG_EVERY = 60

SocketFactory = Callable[[int, int], socket.socket]


class UdpChannel(ABC):
    """
    One panel's UDP output channel.

    Handles the socket lifecycle, the rate-limit gate and the turn-off
    sequence. Subclasses supply the wire encoding in ``_transmit`` and
    decide in ``_ready_to_send`` how misuse is reported.

    States: disconnected after construction, connected after ``connect()``,
    back to disconnected after ``close()`` (a closed channel can reconnect).
    """

    protocol_name = "UDP"

    def __init__(
        self,
        device_ip: str,
        port: int,
        led_count: int,
        color_mapping: ColorMapping = ColorMapping.GBR,
        min_send_interval: float = 0.008,
        turn_off_repeats: int = 5,
        turn_off_interval: float = 0.05,
        socket_factory: Optional[SocketFactory] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize channel (does not open the socket).

        Args:
            device_ip: Receiver IP address
            port: Receiver UDP port
            led_count: Number of LEDs on the panel
            color_mapping: Channel order expected by the panel
            min_send_interval: Frames closer together than this are dropped
            turn_off_repeats: Black frames sent by turn_off()
            turn_off_interval: Seconds between black frames
            socket_factory: Callable(family, type) returning a socket (tests inject fakes)
            clock: Monotonic time source for the rate limiter
        """
        self.device_ip = device_ip
        self.port = port
        self.led_count = led_count
        self.color_mapping = color_mapping
        self.turn_off_repeats = turn_off_repeats
        self.turn_off_interval = turn_off_interval
        self.rate_limiter = RateLimiter(min_send_interval, clock=clock)
        self._socket_factory = socket_factory or socket.socket
        self._sock: Optional[socket.socket] = None
        self._sock_lock = threading.Lock()
        # Serializes whole frames so turn-off and the frame loop never interleave
        self._send_lock = threading.Lock()
        self._send_count = 0
        self._dropped_count = 0

    # =================================================================
    # Lifecycle
    # =================================================================

    @property
    def address(self) -> tuple[str, int]:
        return (self.device_ip, self.port)

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    @property
    def send_count(self) -> int:
        """Frames handed to the socket since construction."""
        return self._send_count

    @property
    def dropped_count(self) -> int:
        """Frames discarded by the rate limiter."""
        return self._dropped_count

    def connect(self) -> None:
        """Open a non-blocking UDP socket."""
        with self._sock_lock:
            if self._sock is not None:
                logger.warning(f"{self.protocol_name} channel {self._label} already connected")
                return
            sock = self._socket_factory(socket.AF_INET, socket.SOCK_DGRAM)
            sock.setblocking(False)
            self._sock = sock
        logger.info(f"{self.protocol_name} channel connected to {self._label}")

    def close(self) -> None:
        """Close the socket. Safe to call when not connected."""
        with self._sock_lock:
            sock, self._sock = self._sock, None
        if sock is None:
            return
        try:
            sock.close()
        finally:
            logger.info(
                f"{self.protocol_name} channel {self._label} closed "
                f"({self._send_count} sent, {self._dropped_count} dropped)"
            )

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # =================================================================
    # Sending
    # =================================================================

    def send_frame(self, rgb: bytes) -> bool:
        """
        Send one frame of canonical RGB bytes.

        Returns:
            True if sent or dropped by the rate limiter, False on transport failure
        """
        if not self._ready_to_send(rgb):
            return False

        if not self.rate_limiter.try_acquire():
            self._dropped_count += 1
            return True

        return self._send(rgb)

    def turn_off(self, stop_event: Optional[threading.Event] = None) -> bool:
        """
        Send all-black frames ``turn_off_repeats`` times.

        Bypasses the rate limiter so every repeat is emitted, but refreshes
        its timestamp so an animation frame arriving right after does not
        immediately overwrite the black frame.

        Returns:
            True if at least one black frame was delivered
        """
        black = bytes(self.led_count * 3)

        def send_black() -> bool:
            if not self._ready_to_send(black):
                return False
            self.rate_limiter.mark()
            return self._send(black)

        delivered = repeat_send(
            send_black,
            repeats=self.turn_off_repeats,
            interval=self.turn_off_interval,
            stop_event=stop_event,
        )
        if delivered:
            logger.info(f"Turned off {self._label}")
        else:
            logger.error(f"Failed to turn off {self._label}")
        return delivered

    def _send(self, rgb: bytes) -> bool:
        sock = self._sock
        if sock is None:
            logger.error(f"{self.protocol_name} channel {self._label} lost its socket")
            return False

        with self._send_lock:
            if not self._transmit(sock, rgb):
                return False
            self._send_count += 1
            count = self._send_count

        if count % SEND_LOG_EVERY == 0:
            logger.debug(f"{self.protocol_name} frames sent to {self._label}: {count}")
        return True

    @property
    def _label(self) -> str:
        return f"{self.device_ip}:{self.port}"

    @abstractmethod
    def _ready_to_send(self, rgb: bytes) -> bool:
        """
        Check preconditions before a frame is sent.

        Returns:
            False to report failure without sending; may raise for misuse
        """
        pass

    @abstractmethod
    def _transmit(self, sock: socket.socket, rgb: bytes) -> bool:
        """
        Encode and send one frame on ``sock``.

        Called with the send lock held, so per-frame state such as a
        sequence number needs no extra locking.

        Returns:
            True if every datagram was handed to the OS, False on socket error
        """
        pass
