"""
Protocol and types for the collaborators outside the game core.

The core never talks to a wallet or a chain directly. It asks a
SessionProvider whether real-stake play is possible and a
RandomValueProvider for the one random value each successful reel needs.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SessionStatus:
    """
    Snapshot of the player's session as seen by the game.

    fee and wallet_balance are None until the collaborator has fetched them.
    """

    is_authenticated: bool = False
    is_on_correct_network: bool = False
    fee: int | None = None
    wallet_balance: int | None = None

    @property
    def is_ready(self) -> bool:
        """Whether real-stake play is possible."""
        return self.is_authenticated and self.is_on_correct_network

    @property
    def has_insufficient_balance(self) -> bool:
        """Known fee that the known wallet balance cannot cover."""
        if self.fee is None or self.wallet_balance is None:
            return False
        return self.wallet_balance < self.fee


@dataclass(frozen=True)
class RandomResult:
    """A delivered random value and its optional sequence id."""

    value: str
    sequence_number: int | None = None


@runtime_checkable
class SessionProvider(Protocol):
    """Wallet / auth collaborator."""

    def status(self) -> SessionStatus:
        """Current session state."""
        ...

    def login(self) -> None:
        ...

    def logout(self) -> None:
        ...

    def switch_network(self) -> None:
        ...


@runtime_checkable
class RandomValueProvider(Protocol):
    """
    Source of the external random value.

    request_random() is called at most once per reel cycle. The value may
    arrive later on another thread; poll() is called every frame from the
    game thread and returns it once available.
    """

    def request_random(self) -> None:
        ...

    def poll(self) -> RandomResult | None:
        ...

    def reset(self) -> None:
        """Forget any outstanding request (called when a cycle is dismissed)."""
        ...
