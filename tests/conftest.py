"""
Pytest fixtures for ReelCast tests.
"""

import os
import random
from dataclasses import replace

import pytest

# Headless pygame - must be set before pygame is imported
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame

from reelcast.config import SessionConfig, Settings
from reelcast.gameplay.state import Phase, SimulationContext, create_initial_snapshot
from reelcast.services.session import LocalSession


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer REELCAST_* variables out of the tests."""
    for name in list(os.environ):
        if name.startswith("REELCAST_"):
            monkeypatch.delenv(name)


@pytest.fixture(scope="session")
def pygame_init():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def settings():
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def context(settings):
    return SimulationContext(settings=settings, rng=random.Random(7))


@pytest.fixture
def make_snapshot(settings):
    """Factory: initial snapshot moved to a phase with field overrides."""
    def _make(phase=Phase.IDLE, **fields):
        return replace(create_initial_snapshot(settings), phase=phase, **fields)
    return _make


@pytest.fixture
def ready_session():
    """A session that can play for real stakes."""
    return LocalSession(SessionConfig(
        authenticated=True,
        on_correct_network=True,
        fee=1,
        wallet_balance=100,
    ))
