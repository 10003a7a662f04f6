"""Random value providers: local practice entropy and the cross-thread bridge."""

import logging
import queue
import secrets
import threading
from typing import Callable

from .protocol import RandomResult

logger = logging.getLogger(__name__)

RANDOM_VALUE_BYTES = 32


def generate_practice_random() -> str:
    """256 bits of local entropy as a 0x-prefixed hex string."""
    return "0x" + secrets.token_hex(RANDOM_VALUE_BYTES)


class QueuedRandomProvider:
    """
    Hands random values from a collaborator thread to the game thread.

    The collaborator calls deliver() from any thread; the game calls poll()
    once per frame. Deliveries that arrive with no outstanding request
    (for example after the player dismissed the result) are dropped.
    """

    def __init__(self, on_request: Callable[[], None] | None = None):
        self._on_request = on_request
        self._results: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._awaiting = False
        self._requests_issued = 0

    @property
    def is_awaiting(self) -> bool:
        """Whether a request is outstanding."""
        with self._lock:
            return self._awaiting

    @property
    def requests_issued(self) -> int:
        return self._requests_issued

    def request_random(self) -> None:
        """Record an outstanding request and notify the collaborator."""
        with self._lock:
            self._awaiting = True
            self._requests_issued += 1
        logger.info(f"Random value requested (#{self._requests_issued})")
        if self._on_request is not None:
            self._on_request()

    def deliver(self, value: str, sequence_number: int | None = None) -> bool:
        """Queue a value for the game thread. Returns False if it was dropped."""
        with self._lock:
            if not self._awaiting:
                logger.warning(f"Dropping random value {sequence_number}: no request outstanding")
                return False
            self._awaiting = False
            # Enqueue under the lock so a concurrent reset() cannot miss it
            self._results.put(RandomResult(value=value, sequence_number=sequence_number))
        logger.info(f"Random value delivered (sequence {sequence_number})")
        return True

    def poll(self) -> RandomResult | None:
        """Next delivered value, if any. Never blocks."""
        try:
            return self._results.get_nowait()
        except queue.Empty:
            return None

    def reset(self) -> None:
        """Forget the outstanding request and any undelivered values."""
        with self._lock:
            self._awaiting = False
            while True:
                try:
                    self._results.get_nowait()
                except queue.Empty:
                    break


class LocalEntropyProvider(QueuedRandomProvider):
    """
    Stand-in for an external random source: answers each request with
    local entropy after a delay, from a timer thread.
    """

    def __init__(self, delay_seconds: float = 1.0):
        super().__init__(on_request=self._schedule_delivery)
        self.delay_seconds = delay_seconds
        self._next_sequence = 1
        self._timer: threading.Timer | None = None

    def _schedule_delivery(self) -> None:
        sequence = self._next_sequence
        self._next_sequence += 1
        self._timer = threading.Timer(
            self.delay_seconds,
            self.deliver,
            args=(generate_practice_random(), sequence),
        )
        self._timer.daemon = True
        self._timer.start()

    def reset(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        super().reset()
