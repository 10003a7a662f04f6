"""
Game snapshot - the complete, immutable state of one fishing session.
NO UI DEPENDENCIES.

A snapshot is never mutated. The reducer builds a new one for every
transition, so the renderer can hold on to whatever it was given.
"""
import random
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Optional, Tuple

from reelcast.config import Settings, get_settings
from .fish import CaughtFish


class Phase(Enum):
    """Current phase of a fishing cycle."""
    IDLE = auto()       # Waiting for the player to cast
    CASTING = auto()    # Cast animation running
    WAITING = auto()    # Bobber in the water, no bite yet
    BITE = auto()       # Fish on the hook, player must react
    REELING = auto()    # Tension / progress minigame
    REVEALING = auto()  # Reel finished, waiting for the random value
    CAUGHT = auto()     # Catch shown
    ESCAPED = auto()    # Fish lost


RESULT_PHASES = (Phase.CAUGHT, Phase.ESCAPED)

# Fields carried over when a finished cycle is reset
PRESERVED_ON_RESET = ("catches", "balance", "stake", "is_practice_mode")


@dataclass(frozen=True)
class SplashParticle:
    """Short-lived water droplet, velocities in px per frame."""
    x: float
    y: float
    vx: float
    vy: float
    life: float  # 1.0 at spawn, removed at 0


@dataclass(frozen=True)
class GameSnapshot:
    """Everything the reducer, the controller and the renderer need."""

    phase: Phase = Phase.IDLE

    # Casting
    cast_progress: float = 0.0
    rod_angle: float = 0.0
    rod_target_angle: float = 0.0

    # Waiting
    bobber_distance: float = 0.0
    bobber_x: float = 0.0
    wait_timer: float = 0.0
    bite_delay: float = 0.0

    # Bite
    bite_timer: float = 0.0

    # Reeling
    tension: float = 0.0
    progress: float = 0.0
    fish_is_fighting: bool = False
    fish_fight_timer: float = 0.0
    fish_fight_intensity: float = 0.0
    reel_clock: float = 0.0

    # Revealing
    reveal_timer: float = 0.0
    reveal_elapsed: float = 0.0
    random_request_issued: bool = False
    random_result: Optional[str] = None
    sequence_number: Optional[int] = None

    # Result
    result_timer: float = 0.0
    caught_fish_y: float = 0.0
    last_catch: Optional[CaughtFish] = None
    last_payout: Optional[int] = None  # None pending, 0 lost, >0 won

    splash_particles: Tuple[SplashParticle, ...] = ()

    # Session (survives reset)
    catches: Tuple[CaughtFish, ...] = ()  # newest first
    is_practice_mode: bool = True
    stake: int = 10
    balance: int = 1000

    @property
    def is_result(self) -> bool:
        return self.phase in RESULT_PHASES

    @property
    def can_dismiss(self) -> bool:
        """A finished result that has been on screen long enough."""
        return self.is_result and self.result_timer <= 0


@dataclass
class SimulationContext:
    """Tunables and randomness handed to every reducer call."""
    settings: Settings = field(default_factory=get_settings)
    rng: random.Random = field(default_factory=random.Random)


def create_initial_snapshot(settings: Optional[Settings] = None) -> GameSnapshot:
    """Fresh session at IDLE with the configured stake and balance."""
    settings = settings if settings is not None else get_settings()
    return GameSnapshot(
        rod_angle=settings.reeling.rod_angle_idle,
        rod_target_angle=settings.reeling.rod_angle_idle,
        stake=settings.economy.default_stake,
        balance=settings.economy.default_balance,
    )


def reset_snapshot(snapshot: GameSnapshot, settings: Settings) -> GameSnapshot:
    """Back to IDLE, keeping the session group of fields."""
    preserved = {name: getattr(snapshot, name) for name in PRESERVED_ON_RESET}
    return replace(create_initial_snapshot(settings), **preserved)
