"""
Game state machine - a pure reducer over GameSnapshot.
NO UI DEPENDENCIES.

    snapshot = apply(snapshot, action, context)

apply() never raises and never mutates. An action that is not legal in
the current phase returns the very same snapshot object, so callers can
detect a no-op with an identity check.
"""
import logging
import math
from dataclasses import replace
from typing import Callable, Dict, Optional, Type

from .actions import (
    Action, StartCast, UpdateCast, StartWaiting, UpdateWaiting, StartBite,
    UpdateBite, MissBite, StartReeling, UpdateReeling, UpdateRevealing,
    RequestRandom, SetRandom, RevealFish, FishEscaped, UpdateResult,
    UpdateParticles, Tick, Reset, SetPracticeMode, SetStake,
)
from .constants import (
    PERCENT_MIN, PERCENT_MAX,
    CAUGHT_FISH_START_Y, CAUGHT_FISH_REST_Y, CAUGHT_FISH_RISE_DIVISOR,
    WOBBLE_FIGHT_PERIOD, WOBBLE_FIGHT_BASE, WOBBLE_FIGHT_SCALE,
    WOBBLE_HOLD_PERIOD, WOBBLE_HOLD_AMPLITUDE,
    WOBBLE_DRIFT_PERIOD, WOBBLE_DRIFT_AMPLITUDE,
)
from .fish import CaughtFish
from .outcome import InvalidRandomValue, determine_catch, payout_for
from .particles import spawn_splash, step_particles
from .state import GameSnapshot, Phase, RESULT_PHASES, SimulationContext, reset_snapshot

logger = logging.getLogger(__name__)

Handler = Callable[[GameSnapshot, Action, SimulationContext], GameSnapshot]

PRACTICE_SEQUENCE = "practice"


def _clamp(value: float, low: float = PERCENT_MIN, high: float = PERCENT_MAX) -> float:
    return max(low, min(high, value))


def _smooth_rod(snapshot: GameSnapshot, target: float, context: SimulationContext) -> float:
    factor = context.settings.reeling.rod_smooth_factor
    return snapshot.rod_angle + (target - snapshot.rod_angle) * factor


def _escape(snapshot: GameSnapshot, context: SimulationContext, **changes) -> GameSnapshot:
    """Every way of losing the fish ends here."""
    return replace(
        snapshot,
        phase=Phase.ESCAPED,
        result_timer=context.settings.timing.escaped_display_ms,
        last_payout=0,
        **changes,
    )


# =============================================================================
# CASTING / WAITING / BITE
# =============================================================================

def _start_cast(s: GameSnapshot, action: StartCast, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.IDLE:
        return s
    if not s.is_practice_mode:
        wallet = action.wallet_balance or 0
        fee = action.fee or 0
        if wallet < fee or s.balance < s.stake:
            return s
    return replace(
        s,
        phase=Phase.CASTING,
        cast_progress=0.0,
        rod_target_angle=ctx.settings.reeling.rod_angle_casting,
    )


def _update_cast(s: GameSnapshot, action: UpdateCast, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.CASTING:
        return s
    progress = _clamp(action.progress, 0.0, 1.0)
    s = replace(s, cast_progress=progress, rod_angle=_smooth_rod(s, s.rod_target_angle, ctx))
    if progress >= 1.0:
        return _start_waiting(s, StartWaiting(), ctx)
    return s


def _start_waiting(s: GameSnapshot, action: StartWaiting, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.CASTING:
        return s
    timing = ctx.settings.timing
    return replace(
        s,
        phase=Phase.WAITING,
        bobber_distance=ctx.settings.reeling.bobber_initial_distance,
        bobber_x=0.0,
        rod_target_angle=ctx.settings.reeling.rod_angle_waiting,
        wait_timer=timing.max_wait_time_ms,
        bite_delay=ctx.rng.uniform(timing.bite_delay_min_ms, timing.bite_delay_max_ms),
        splash_particles=spawn_splash(ctx.rng),
    )


def _update_waiting(s: GameSnapshot, action: UpdateWaiting, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.WAITING:
        return s
    s = replace(
        s,
        wait_timer=s.wait_timer - action.delta_ms,
        bite_delay=s.bite_delay - action.delta_ms,
        rod_angle=_smooth_rod(s, s.rod_target_angle, ctx),
    )
    if s.wait_timer <= 0:
        return _escape(s, ctx)
    if s.bite_delay <= 0:
        return _start_bite(s, StartBite(), ctx)
    return s


def _start_bite(s: GameSnapshot, action: StartBite, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.WAITING:
        return s
    return replace(s, phase=Phase.BITE, bite_timer=ctx.settings.timing.bite_window_ms)


def _update_bite(s: GameSnapshot, action: UpdateBite, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.BITE:
        return s
    s = replace(s, bite_timer=s.bite_timer - action.delta_ms)
    if s.bite_timer <= 0:
        return _escape(s, ctx, bite_timer=0.0)
    return s


def _miss_bite(s: GameSnapshot, action: MissBite, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.BITE:
        return s
    return _escape(s, ctx)


# =============================================================================
# REELING
# =============================================================================

def _start_reeling(s: GameSnapshot, action: StartReeling, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.BITE:
        return s
    reeling = ctx.settings.reeling
    balance = s.balance if s.is_practice_mode else s.balance - s.stake
    return replace(
        s,
        phase=Phase.REELING,
        balance=balance,
        tension=reeling.initial_tension,
        progress=0.0,
        fish_is_fighting=False,
        fish_fight_timer=ctx.rng.uniform(reeling.fight_delay_min_ms, reeling.fight_delay_max_ms),
        fish_fight_intensity=0.0,
        reel_clock=0.0,
        bobber_distance=reeling.bobber_initial_distance,
        last_payout=None,
    )


def _update_reeling(s: GameSnapshot, action: UpdateReeling, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.REELING:
        return s
    cfg = ctx.settings.reeling
    dt = action.delta_ms
    holding = action.holding

    # Fish alternates between fighting bursts and rests
    fighting = s.fish_is_fighting
    intensity = s.fish_fight_intensity
    fight_timer = s.fish_fight_timer - dt
    if fight_timer <= 0:
        if fighting:
            fighting = False
            fight_timer = ctx.rng.uniform(cfg.fight_delay_min_ms, cfg.fight_delay_max_ms)
        else:
            fighting = True
            intensity = ctx.rng.uniform(cfg.fight_intensity_min, cfg.fight_intensity_max)
            fight_timer = ctx.rng.uniform(cfg.fight_duration_min_ms, cfg.fight_duration_max_ms)

    clock = s.reel_clock + dt
    if fighting:
        bobber_x = math.sin(clock / WOBBLE_FIGHT_PERIOD) * (WOBBLE_FIGHT_BASE + intensity * WOBBLE_FIGHT_SCALE)
    elif holding:
        bobber_x = math.sin(clock / WOBBLE_HOLD_PERIOD) * WOBBLE_HOLD_AMPLITUDE
    else:
        bobber_x = math.sin(clock / WOBBLE_DRIFT_PERIOD) * WOBBLE_DRIFT_AMPLITUDE

    tension = s.tension
    progress = s.progress
    bobber_distance = s.bobber_distance
    if holding:
        tension += dt / cfg.tension_hold_divisor
        progress += dt / cfg.progress_hold_divisor
        bobber_distance -= dt / cfg.bobber_pull_divisor
        target = cfg.rod_angle_holding_base + (tension / PERCENT_MAX) * cfg.rod_angle_holding_range
    else:
        divisor = cfg.tension_release_fight_divisor if fighting else cfg.tension_release_divisor
        tension -= dt / divisor
        target = cfg.rod_angle_fighting if fighting else cfg.rod_angle_reeling

    if fighting:
        tension += (dt / cfg.tension_fight_divisor) * intensity

    change = _clamp(tension - s.tension, -cfg.tension_max_change_per_frame, cfg.tension_max_change_per_frame)
    tension = _clamp(s.tension + change)

    if fighting and not cfg.fight_zone_min <= tension <= cfg.fight_zone_max:
        if tension < cfg.fight_zone_min:
            distance = cfg.fight_zone_min - tension
        else:
            distance = tension - cfg.fight_zone_max
        progress -= (dt / cfg.fight_zone_progress_drain) * (1 + distance / cfg.fight_zone_penalty_scale)

    s = replace(
        s,
        tension=tension,
        progress=_clamp(progress),
        bobber_distance=_clamp(bobber_distance),
        bobber_x=bobber_x,
        fish_is_fighting=fighting,
        fish_fight_timer=fight_timer,
        fish_fight_intensity=intensity,
        reel_clock=clock,
        rod_target_angle=target,
        rod_angle=_smooth_rod(s, target, ctx),
    )

    # Line snapping wins over landing the fish on the same frame
    if s.tension >= PERCENT_MAX:
        return _escape(s, ctx, tension=PERCENT_MAX)
    if s.progress >= PERCENT_MAX:
        return replace(
            s,
            phase=Phase.REVEALING,
            progress=PERCENT_MAX,
            reveal_timer=ctx.settings.timing.reveal_request_delay_ms,
            reveal_elapsed=0.0,
        )
    return s


# =============================================================================
# REVEALING
# =============================================================================

def _update_revealing(s: GameSnapshot, action: UpdateRevealing, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.REVEALING:
        return s
    s = replace(
        s,
        reveal_timer=max(0.0, s.reveal_timer - action.delta_ms),
        reveal_elapsed=s.reveal_elapsed + action.delta_ms,
    )
    if s.random_result is None and s.reveal_elapsed >= ctx.settings.timing.reveal_timeout_ms:
        logger.warning("No random value after %.0fms, treating catch as lost", s.reveal_elapsed)
        return _escape(s, ctx)
    return s


def _request_random(s: GameSnapshot, action: RequestRandom, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.REVEALING or s.random_request_issued:
        return s
    return replace(s, random_request_issued=True)


def _set_random(s: GameSnapshot, action: SetRandom, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.REVEALING or s.random_result is not None or action.result is None:
        return s
    result = action.result if isinstance(action.result, str) else hex(action.result)
    return replace(s, random_result=result, sequence_number=action.sequence_number)


def _reveal_fish(s: GameSnapshot, action: RevealFish, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.REVEALING:
        return s
    if s.random_result is None:
        return _escape(s, ctx)
    try:
        fish = determine_catch(s.random_result, ctx.settings.catch_table)
    except InvalidRandomValue as e:
        logger.warning(f"Discarding catch, bad random value: {e}")
        return _escape(s, ctx)

    if s.is_practice_mode:
        payout = 0
        sequence = PRACTICE_SEQUENCE
    else:
        payout = payout_for(fish.rarity, s.stake, ctx.settings.economy)
        sequence = str(s.sequence_number) if s.sequence_number is not None else ""

    caught = CaughtFish.from_fish(fish, action.timestamp, sequence, s.is_practice_mode)
    return replace(
        s,
        phase=Phase.CAUGHT,
        last_catch=caught,
        catches=(caught,) + s.catches,
        result_timer=ctx.settings.timing.caught_display_ms,
        caught_fish_y=CAUGHT_FISH_START_Y,
        balance=s.balance if s.is_practice_mode else s.balance + payout,
        last_payout=None if s.is_practice_mode else payout,
    )


def _fish_escaped(s: GameSnapshot, action: FishEscaped, ctx: SimulationContext) -> GameSnapshot:
    if s.phase not in (Phase.WAITING, Phase.BITE, Phase.REELING, Phase.REVEALING):
        return s
    return _escape(s, ctx)


# =============================================================================
# RESULT / PARTICLES / SESSION
# =============================================================================

def _update_result(s: GameSnapshot, action: UpdateResult, ctx: SimulationContext) -> GameSnapshot:
    if s.phase not in RESULT_PHASES:
        return s
    caught_fish_y = s.caught_fish_y
    if s.phase == Phase.CAUGHT:
        caught_fish_y = max(CAUGHT_FISH_REST_Y, caught_fish_y - action.delta_ms / CAUGHT_FISH_RISE_DIVISOR)
    return replace(
        s,
        result_timer=max(0.0, s.result_timer - action.delta_ms),
        caught_fish_y=caught_fish_y,
    )


def _update_particles(s: GameSnapshot, action: UpdateParticles, ctx: SimulationContext) -> GameSnapshot:
    if not s.splash_particles:
        return s
    return replace(s, splash_particles=step_particles(s.splash_particles))


def _tick(s: GameSnapshot, action: Tick, ctx: SimulationContext) -> GameSnapshot:
    dt = max(0.0, action.delta_ms)
    phase = s.phase
    if phase == Phase.CASTING:
        progress = s.cast_progress + dt / ctx.settings.timing.cast_duration_ms
        s = _update_cast(s, UpdateCast(progress=min(1.0, progress)), ctx)
    elif phase == Phase.WAITING:
        s = _update_waiting(s, UpdateWaiting(delta_ms=dt), ctx)
    elif phase == Phase.BITE:
        s = _update_bite(s, UpdateBite(delta_ms=dt), ctx)
    elif phase == Phase.REELING:
        s = _update_reeling(s, UpdateReeling(delta_ms=dt, holding=action.holding), ctx)
    elif phase == Phase.REVEALING:
        s = _update_revealing(s, UpdateRevealing(delta_ms=dt), ctx)
    elif phase in RESULT_PHASES:
        s = _update_result(s, UpdateResult(delta_ms=dt), ctx)
    return _update_particles(s, UpdateParticles(), ctx)


def _reset(s: GameSnapshot, action: Reset, ctx: SimulationContext) -> GameSnapshot:
    if not s.can_dismiss:
        return s
    return reset_snapshot(s, ctx.settings)


def _set_practice_mode(s: GameSnapshot, action: SetPracticeMode, ctx: SimulationContext) -> GameSnapshot:
    if s.is_practice_mode == action.enabled:
        return s
    return replace(s, is_practice_mode=action.enabled)


def _set_stake(s: GameSnapshot, action: SetStake, ctx: SimulationContext) -> GameSnapshot:
    if s.phase != Phase.IDLE or s.stake == action.amount:
        return s
    if action.amount not in ctx.settings.economy.stake_options:
        return s
    if not s.is_practice_mode and action.amount > s.balance:
        return s
    return replace(s, stake=action.amount)


_HANDLERS: Dict[Type[Action], Handler] = {
    StartCast: _start_cast,
    UpdateCast: _update_cast,
    StartWaiting: _start_waiting,
    UpdateWaiting: _update_waiting,
    StartBite: _start_bite,
    UpdateBite: _update_bite,
    MissBite: _miss_bite,
    StartReeling: _start_reeling,
    UpdateReeling: _update_reeling,
    UpdateRevealing: _update_revealing,
    RequestRandom: _request_random,
    SetRandom: _set_random,
    RevealFish: _reveal_fish,
    FishEscaped: _fish_escaped,
    UpdateResult: _update_result,
    UpdateParticles: _update_particles,
    Tick: _tick,
    Reset: _reset,
    SetPracticeMode: _set_practice_mode,
    SetStake: _set_stake,
}


def apply(
    snapshot: GameSnapshot,
    action: Action,
    context: Optional[SimulationContext] = None,
) -> GameSnapshot:
    """Apply one action. Unknown or illegal actions return snapshot unchanged."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return snapshot
    return handler(snapshot, action, context if context is not None else SimulationContext())
