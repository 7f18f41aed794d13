"""Best-effort repeated sends over a lossy transport."""

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


def repeat_send(
    send: Callable[[], bool],
    repeats: int = 5,
    interval: float = 0.05,
    stop_event: threading.Event | None = None,
) -> bool:
    """
    Call ``send`` several times with a fixed delay in between.

    UDP gives no delivery guarantee, so important frames (all-black on
    shutdown) are sent more than once. The result is at-least-once: True if
    any attempt reported success.

    Args:
        send: Zero-argument callable returning True on success
        repeats: Number of attempts
        interval: Seconds to wait between attempts (not after the last)
        stop_event: If set while waiting, remaining attempts are skipped

    Returns:
        True if at least one attempt succeeded
    """
    delivered = False
    for attempt in range(repeats):
        if stop_event is not None and stop_event.is_set():
            logger.debug(f"Repeat send interrupted after {attempt} of {repeats} attempts")
            break
        if send():
            delivered = True
        if attempt < repeats - 1 and interval > 0:
            if stop_event is not None:
                if stop_event.wait(interval):
                    logger.debug(f"Repeat send interrupted after {attempt + 1} of {repeats} attempts")
                    break
            else:
                time.sleep(interval)
    return delivered
