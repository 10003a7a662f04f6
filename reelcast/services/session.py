"""In-process session used when no wallet collaborator is attached."""

import logging
import threading
from dataclasses import replace

from reelcast.config import SessionConfig
from .protocol import SessionStatus

logger = logging.getLogger(__name__)


class LocalSession:
    """
    Session state held in memory.

    Thread-safe so that a collaborator thread can update the fee and
    balance while the game thread reads status() every frame.
    """

    def __init__(self, config: SessionConfig | None = None):
        config = config if config is not None else SessionConfig()
        self._lock = threading.Lock()
        self._status = SessionStatus(
            is_authenticated=config.authenticated,
            is_on_correct_network=config.on_correct_network,
            fee=config.fee,
            wallet_balance=config.wallet_balance,
        )

    def status(self) -> SessionStatus:
        with self._lock:
            return self._status

    def _update(self, **changes) -> None:
        with self._lock:
            self._status = replace(self._status, **changes)

    def login(self) -> None:
        self._update(is_authenticated=True)
        logger.info("Session authenticated")

    def logout(self) -> None:
        self._update(is_authenticated=False)
        logger.info("Session logged out")

    def switch_network(self) -> None:
        self._update(is_on_correct_network=True)
        logger.info("Switched to the game network")

    def set_funds(self, fee: int | None, wallet_balance: int | None) -> None:
        """Record the latest fee quote and wallet balance."""
        self._update(fee=fee, wallet_balance=wallet_balance)
