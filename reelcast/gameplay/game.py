"""
Main FishingGame class - orchestrates one player's fishing session.
NO UI DEPENDENCIES.

The reducer is pure; this class owns everything around it: the current
snapshot, the held-input flag, the session and random-value
collaborators, and the list of events the UI reacts to.
"""
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from reelcast.config import Settings, get_settings
from reelcast.services.protocol import RandomValueProvider, SessionProvider, SessionStatus
from reelcast.services.randomness import QueuedRandomProvider, generate_practice_random
from reelcast.services.session import LocalSession
from .actions import (
    Action, StartCast, StartReeling, Tick, RequestRandom, SetRandom,
    RevealFish, Reset, SetPracticeMode, SetStake,
)
from .fish import CaughtFish
from .reducer import apply
from .state import GameSnapshot, Phase, SimulationContext, create_initial_snapshot

logger = logging.getLogger(__name__)


@dataclass
class GameEvent:
    """An event that occurred during gameplay (for UI to react to)."""
    pass


@dataclass
class PhaseChangedEvent(GameEvent):
    """Game phase changed."""
    old_phase: Phase
    new_phase: Phase


@dataclass
class RandomRequiredEvent(GameEvent):
    """The reel succeeded and the external random value is now needed."""
    pass


@dataclass
class CatchEvent(GameEvent):
    """A catch was resolved and added to the history."""
    fish: CaughtFish
    payout: Optional[int]


@dataclass(frozen=True)
class RenderOptions:
    """Per-frame flags the renderer needs beyond the snapshot."""
    insufficient_balance: bool = False


class FishingGame:
    """
    Orchestrates input, timing and collaborators around the reducer.

    Usage:
        game = FishingGame()
        game.input_start()          # tap: cast
        while running:
            events = game.update(dt)
            # UI reads game.snapshot and renders
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[SessionProvider] = None,
        random_provider: Optional[RandomValueProvider] = None,
        rng: Optional[random.Random] = None,
        practice_random: Callable[[], str] = generate_practice_random,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings if settings is not None else get_settings()
        self.context = SimulationContext(settings=self.settings, rng=rng or random.Random())
        self.session = session if session is not None else LocalSession(self.settings.session)
        self.random_provider = random_provider if random_provider is not None else QueuedRandomProvider()
        self._practice_random = practice_random
        self._clock = clock

        self.snapshot: GameSnapshot = create_initial_snapshot(self.settings)
        self.holding = False

        # Event queue for UI notifications
        self._events: List[GameEvent] = []

        self._sync_practice_mode()

    @property
    def phase(self) -> Phase:
        return self.snapshot.phase

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def dispatch(self, action: Action) -> GameSnapshot:
        """Run one action through the reducer and record a phase change."""
        old = self.snapshot
        self.snapshot = apply(old, action, self.context)
        if self.snapshot.phase != old.phase:
            logger.debug(f"{old.phase.name} -> {self.snapshot.phase.name} ({type(action).__name__})")
            self._events.append(PhaseChangedEvent(old.phase, self.snapshot.phase))
        return self.snapshot

    def input_start(self) -> None:
        """Press / touch / space down."""
        self.holding = True
        phase = self.snapshot.phase
        if phase == Phase.IDLE:
            self._sync_practice_mode()
            status = self.session.status()
            self.dispatch(StartCast(fee=status.fee, wallet_balance=status.wallet_balance))
        elif phase == Phase.BITE:
            self.dispatch(StartReeling())
        elif self.snapshot.is_result:
            before = self.snapshot
            if self.dispatch(Reset()) is not before:
                self.random_provider.reset()

    def input_end(self) -> None:
        """Release / touch end / pointer left the window."""
        self.holding = False

    def set_stake(self, amount: int) -> bool:
        """Change the stake while idle. Returns whether it changed."""
        before = self.snapshot
        return self.dispatch(SetStake(amount)) is not before

    def apply_settings(self, settings: Settings) -> None:
        """Swap tunables without restarting the session."""
        self.settings = settings
        self.context.settings = settings
        logger.info("Settings applied")

    # =========================================================================
    # UPDATE
    # =========================================================================

    def update(self, delta_ms: float) -> List[GameEvent]:
        """
        Advance the game by delta_ms milliseconds.
        Returns the events since the previous update, input included.
        """
        if self.snapshot.phase == Phase.IDLE:
            self._sync_practice_mode()

        self.dispatch(Tick(delta_ms=delta_ms, holding=self.holding))

        if self.snapshot.phase == Phase.REVEALING:
            self._update_revealing()

        events, self._events = self._events, []
        return events

    def _update_revealing(self) -> None:
        snapshot = self.snapshot
        if snapshot.is_practice_mode:
            self.dispatch(RequestRandom())
            self.dispatch(SetRandom(result=self._practice_random()))
            self._reveal()
            return

        if not snapshot.random_request_issued and snapshot.reveal_timer <= 0:
            if self.dispatch(RequestRandom()) is not snapshot:
                self.random_provider.request_random()
                self._events.append(RandomRequiredEvent())

        if self.snapshot.random_request_issued:
            result = self.random_provider.poll()
            if result is not None:
                self.dispatch(SetRandom(result=result.value, sequence_number=result.sequence_number))
                self._reveal()

    def _reveal(self) -> None:
        self.dispatch(RevealFish(timestamp=self._clock()))
        if self.snapshot.phase == Phase.CAUGHT and self.snapshot.last_catch is not None:
            fish = self.snapshot.last_catch
            logger.info(f"Caught {fish.name} ({fish.rarity.value}, {fish.size}cm)")
            self._events.append(CatchEvent(fish, self.snapshot.last_payout))

    def _sync_practice_mode(self) -> None:
        """Practice mode whenever the session cannot play for real."""
        self.dispatch(SetPracticeMode(enabled=not self.session.status().is_ready))

    # =========================================================================
    # QUERIES
    # =========================================================================

    def session_status(self) -> SessionStatus:
        return self.session.status()

    def is_insufficient_balance(self) -> bool:
        """Real-stake play with a known fee the wallet cannot cover."""
        if self.snapshot.is_practice_mode:
            return False
        return self.session.status().has_insufficient_balance

    def render_options(self) -> RenderOptions:
        return RenderOptions(insufficient_balance=self.is_insufficient_balance())

    def simulate(self, milliseconds: float, dt: float = 16.0) -> List[GameEvent]:
        """
        Run the game for a number of milliseconds with the current input.
        Returns all events that occurred.
        """
        all_events = []
        elapsed = 0.0
        while elapsed < milliseconds:
            all_events.extend(self.update(dt))
            elapsed += dt
        return all_events
