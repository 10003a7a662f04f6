"""
Reducer actions - everything that can happen to a snapshot.
NO UI DEPENDENCIES.

All durations are milliseconds. Wall-clock time enters only through
RevealFish.timestamp so the reducer itself never reads a clock.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Action:
    """Base class for reducer input."""
    pass


@dataclass(frozen=True)
class StartCast(Action):
    """Player tapped while idle. fee/wallet_balance come from the session."""
    fee: Optional[int] = None
    wallet_balance: Optional[int] = None


@dataclass(frozen=True)
class UpdateCast(Action):
    progress: float


@dataclass(frozen=True)
class StartWaiting(Action):
    pass


@dataclass(frozen=True)
class UpdateWaiting(Action):
    delta_ms: float


@dataclass(frozen=True)
class StartBite(Action):
    pass


@dataclass(frozen=True)
class UpdateBite(Action):
    delta_ms: float


@dataclass(frozen=True)
class MissBite(Action):
    pass


@dataclass(frozen=True)
class StartReeling(Action):
    pass


@dataclass(frozen=True)
class UpdateReeling(Action):
    delta_ms: float
    holding: bool


@dataclass(frozen=True)
class UpdateRevealing(Action):
    delta_ms: float


@dataclass(frozen=True)
class RequestRandom(Action):
    """Marks the single random-value request of this cycle as issued."""
    pass


@dataclass(frozen=True)
class SetRandom(Action):
    result: str
    sequence_number: Optional[int] = None


@dataclass(frozen=True)
class RevealFish(Action):
    timestamp: float = 0.0


@dataclass(frozen=True)
class FishEscaped(Action):
    pass


@dataclass(frozen=True)
class UpdateResult(Action):
    delta_ms: float


@dataclass(frozen=True)
class UpdateParticles(Action):
    pass


@dataclass(frozen=True)
class Tick(Action):
    """One frame: advances whichever countdown the current phase owns."""
    delta_ms: float
    holding: bool = False


@dataclass(frozen=True)
class Reset(Action):
    pass


@dataclass(frozen=True)
class SetPracticeMode(Action):
    enabled: bool


@dataclass(frozen=True)
class SetStake(Action):
    amount: int
