"""
Splash particles - spawned when the bobber lands, integrated per frame.
NO UI DEPENDENCIES.
"""
import random
from typing import Tuple

from .constants import (
    SPLASH_PARTICLE_COUNT, SPLASH_ORIGIN_X, SPLASH_ORIGIN_Y, SPLASH_SPREAD_X,
    SPLASH_SPEED_X, SPLASH_LIFT_MIN, SPLASH_LIFT_RANDOM,
    PARTICLE_GRAVITY, PARTICLE_DECAY,
)
from .state import SplashParticle


def spawn_splash(rng: random.Random, count: int = SPLASH_PARTICLE_COUNT) -> Tuple[SplashParticle, ...]:
    """Burst of droplets around the landing point, all thrown upward."""
    return tuple(
        SplashParticle(
            x=SPLASH_ORIGIN_X + (rng.random() - 0.5) * SPLASH_SPREAD_X,
            y=SPLASH_ORIGIN_Y,
            vx=(rng.random() - 0.5) * SPLASH_SPEED_X,
            vy=-SPLASH_LIFT_MIN - rng.random() * SPLASH_LIFT_RANDOM,
            life=1.0,
        )
        for _ in range(count)
    )


def step_particles(particles: Tuple[SplashParticle, ...]) -> Tuple[SplashParticle, ...]:
    """Advance every particle one frame and drop the dead ones."""
    stepped = []
    for p in particles:
        life = p.life - PARTICLE_DECAY
        if life <= 0:
            continue
        stepped.append(SplashParticle(
            x=p.x + p.vx,
            y=p.y + p.vy,
            vx=p.vx,
            vy=p.vy + PARTICLE_GRAVITY,
            life=life,
        ))
    return tuple(stepped)
