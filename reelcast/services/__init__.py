"""Collaborators outside the game core: session and random value sources."""

from .protocol import RandomResult, RandomValueProvider, SessionProvider, SessionStatus
from .randomness import LocalEntropyProvider, QueuedRandomProvider, generate_practice_random
from .session import LocalSession

__all__ = [
    "RandomResult",
    "RandomValueProvider",
    "SessionProvider",
    "SessionStatus",
    "LocalEntropyProvider",
    "QueuedRandomProvider",
    "generate_practice_random",
    "LocalSession",
]
