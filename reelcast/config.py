"""
Configuration management for ReelCast.
Uses pydantic-settings for environment variable parsing.

Every tunable of the game lives here: timing windows, reeling physics,
the house economy and the catch table. Values can be overridden with
REELCAST_* environment variables (nested groups use a double underscore,
e.g. REELCAST_TIMING__BITE_WINDOW_MS=1200), a .env file, or a JSON file
passed to load_settings().
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reelcast.gameplay.fish import Rarity

logger = logging.getLogger(__name__)


class TimingConfig(BaseModel):
    """Phase windows and display durations, all in milliseconds."""

    cast_duration_ms: float = Field(default=400, gt=0, description="Time for the cast animation")
    max_wait_time_ms: float = Field(default=60000, gt=0, description="Waiting phase gives up after this")
    bite_delay_min_ms: float = Field(default=500, ge=0, description="Shortest delay before a bite")
    bite_delay_max_ms: float = Field(default=2000, ge=0, description="Longest delay before a bite")
    bite_window_ms: float = Field(default=1500, gt=0, description="Time the player has to hook a bite")
    caught_display_ms: float = Field(default=2000, ge=0, description="Catch celebration before dismiss")
    escaped_display_ms: float = Field(default=1500, ge=0, description="Escape message before dismiss")
    reveal_request_delay_ms: float = Field(
        default=1500,
        ge=0,
        description="Pause after a successful reel before the random value is requested",
    )
    reveal_timeout_ms: float = Field(
        default=120000,
        gt=0,
        description="Revealing phase resolves as escaped if no random value arrives in time",
    )

    @model_validator(mode="after")
    def check_bite_delay_range(self) -> "TimingConfig":
        if self.bite_delay_max_ms < self.bite_delay_min_ms:
            raise ValueError("bite_delay_max_ms must not be below bite_delay_min_ms")
        return self


class ReelingConfig(BaseModel):
    """Tension, progress and fish-fight tuning for the reeling phase."""

    initial_tension: float = 20
    tension_hold_divisor: float = Field(default=18, gt=0)
    tension_fight_divisor: float = Field(default=25, gt=0)
    tension_release_divisor: float = Field(default=12, gt=0)
    tension_release_fight_divisor: float = Field(default=6, gt=0)
    tension_max_change_per_frame: float = Field(
        default=5.0,
        gt=0,
        description="Largest tension change allowed in a single frame",
    )
    tension_low_threshold: float = 40
    tension_high_threshold: float = 70
    progress_hold_divisor: float = Field(default=80, gt=0)

    fight_delay_min_ms: float = 500
    fight_delay_max_ms: float = 1500
    fight_duration_min_ms: float = 5000
    fight_duration_max_ms: float = 10000
    fight_intensity_min: float = 0.3
    fight_intensity_max: float = 1.0
    fight_zone_min: float = 30
    fight_zone_max: float = 60
    fight_zone_progress_drain: float = Field(default=60, gt=0)
    fight_zone_penalty_scale: float = Field(default=30, gt=0)

    bobber_initial_distance: float = 70
    bobber_pull_divisor: float = Field(default=50, gt=0)

    rod_angle_idle: float = 0.0
    rod_angle_casting: float = -0.3
    rod_angle_waiting: float = 0.1
    rod_angle_reeling: float = 0.1
    rod_angle_fighting: float = 0.2
    rod_angle_holding_base: float = 0.3
    rod_angle_holding_range: float = 0.2
    rod_smooth_factor: float = Field(default=0.1, gt=0, le=1)

    @model_validator(mode="after")
    def check_fight_zone(self) -> "ReelingConfig":
        if not 0 <= self.fight_zone_min <= self.fight_zone_max <= 100:
            raise ValueError("fight zone must satisfy 0 <= min <= max <= 100")
        return self


class EconomyConfig(BaseModel):
    """Stakes, starting balance and payout multipliers per rarity."""

    stake_options: list[int] = Field(default=[10, 25, 50, 100], min_length=1)
    default_stake: int = 10
    default_balance: int = 1000
    payout_multipliers: dict[Rarity, float] = Field(
        default={
            Rarity.JUNK: 0,
            Rarity.COMMON: 0,
            Rarity.RARE: 0.4,
            Rarity.LEGENDARY: 2,
        }
    )

    @model_validator(mode="after")
    def check_default_stake(self) -> "EconomyConfig":
        if self.default_stake not in self.stake_options:
            raise ValueError("default_stake must be one of stake_options")
        return self


class SpeciesEntry(BaseModel):
    """One catchable species and its size range in centimetres."""

    name: str
    size_min: int = Field(ge=0)
    size_max: int = Field(ge=0)

    @model_validator(mode="after")
    def check_size_range(self) -> "SpeciesEntry":
        if self.size_max < self.size_min:
            raise ValueError(f"{self.name}: size_max must not be below size_min")
        return self


def _species(size_min: int, size_max: int, *names: str) -> list[SpeciesEntry]:
    return [SpeciesEntry(name=name, size_min=size_min, size_max=size_max) for name in names]


DEFAULT_SPECIES: dict[Rarity, list[SpeciesEntry]] = {
    Rarity.JUNK: _species(
        5, 25, "Old Boot", "Rusty Can", "Tangled Seaweed", "Broken Rod", "Empty Bottle"
    ),
    Rarity.COMMON: _species(
        15, 45, "Common Carp", "Bluegill", "Perch", "Catfish", "Bass", "Trout"
    ),
    Rarity.RARE: _species(
        30, 80, "Golden Trout", "Rainbow Koi", "Silver Salmon", "Electric Eel"
    ),
    Rarity.LEGENDARY: _species(
        50, 150, "Legendary Koi", "Ancient Sturgeon", "Mythic Moonfish"
    ),
}


class CatchTableConfig(BaseModel):
    """
    Rarity thresholds and species tables.

    Thresholds are cumulative upper bounds over a 0-99 roll, checked in
    order: a roll below the first bound is the first rarity, and so on.
    """

    rarity_thresholds: dict[Rarity, int] = Field(
        default={
            Rarity.JUNK: 10,
            Rarity.COMMON: 65,
            Rarity.RARE: 90,
            Rarity.LEGENDARY: 100,
        }
    )
    species: dict[Rarity, list[SpeciesEntry]] = Field(
        default_factory=lambda: {rarity: list(entries) for rarity, entries in DEFAULT_SPECIES.items()}
    )

    @model_validator(mode="after")
    def check_table(self) -> "CatchTableConfig":
        bounds = list(self.rarity_thresholds.values())
        if not bounds:
            raise ValueError("rarity_thresholds must not be empty")
        if any(later <= earlier for earlier, later in zip(bounds, bounds[1:])):
            raise ValueError("rarity_thresholds must be strictly ascending")
        if bounds[0] <= 0 or bounds[-1] != 100:
            raise ValueError("rarity_thresholds must be positive and end at 100")
        for rarity in self.rarity_thresholds:
            if not self.species.get(rarity):
                raise ValueError(f"no species configured for rarity {rarity.value}")
        return self


class SessionConfig(BaseModel):
    """Initial state of the in-process session used when no wallet is attached."""

    authenticated: bool = False
    on_correct_network: bool = True
    fee: int | None = None
    wallet_balance: int | None = None


class Settings(BaseSettings):
    """Game settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REELCAST_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    # Display
    window_width: int = Field(default=360, gt=0, description="Initial window width in pixels")
    window_height: int = Field(default=640, gt=0, description="Initial window height in pixels")
    fps: int = Field(default=60, gt=0, description="Target frames per second")
    max_frame_delta_ms: float = Field(
        default=100,
        gt=0,
        description="Upper bound on the per-frame delta handed to the game",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root logging level")

    # Gameplay
    timing: TimingConfig = Field(default_factory=TimingConfig)
    reeling: ReelingConfig = Field(default_factory=ReelingConfig)
    economy: EconomyConfig = Field(default_factory=EconomyConfig)
    catch_table: CatchTableConfig = Field(default_factory=CatchTableConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    @model_validator(mode="after")
    def check_payouts_cover_rarities(self) -> "Settings":
        missing = [
            rarity.value
            for rarity in self.catch_table.rarity_thresholds
            if rarity not in self.economy.payout_multipliers
        ]
        if missing:
            raise ValueError(f"payout_multipliers missing rarities: {', '.join(missing)}")
        return self


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Build settings, optionally layering a JSON file over the environment.

    Values in the file take precedence over environment variables.
    """
    if path is None:
        return Settings()
    path = Path(path)
    data = json.loads(path.read_text())
    logger.info(f"Loaded settings from {path}")
    return Settings(**data)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
