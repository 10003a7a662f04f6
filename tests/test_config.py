"""
Tests for the configuration surface.
"""
import json

import pytest
from pydantic import ValidationError

from reelcast.config import (
    CatchTableConfig, EconomyConfig, Settings, SpeciesEntry, TimingConfig,
    get_settings, load_settings,
)
from reelcast.gameplay.fish import Rarity


class TestDefaults:
    """Tests for built-in defaults."""

    def test_timing_defaults(self, settings):
        """Phase windows match the classic game."""
        assert settings.timing.cast_duration_ms == 400
        assert settings.timing.max_wait_time_ms == 60000
        assert settings.timing.bite_window_ms == 1500
        assert settings.timing.caught_display_ms == 2000
        assert settings.timing.escaped_display_ms == 1500

    def test_economy_defaults(self, settings):
        """Four stake options and a 1000 starting balance."""
        assert settings.economy.stake_options == [10, 25, 50, 100]
        assert settings.economy.default_balance == 1000
        assert settings.economy.payout_multipliers[Rarity.LEGENDARY] == 2

    def test_species_defaults(self, settings):
        """Every rarity has a species table."""
        species = settings.catch_table.species
        assert [entry.name for entry in species[Rarity.LEGENDARY]] == [
            "Legendary Koi", "Ancient Sturgeon", "Mythic Moonfish",
        ]
        assert len(species[Rarity.JUNK]) == 5
        assert len(species[Rarity.COMMON]) == 6
        assert len(species[Rarity.RARE]) == 4

    def test_get_settings_is_cached(self):
        """get_settings returns one shared instance."""
        assert get_settings() is get_settings()


class TestOverrides:
    """Tests for environment and file overrides."""

    def test_environment_override(self, monkeypatch):
        """Nested values can be set with REELCAST_GROUP__FIELD."""
        monkeypatch.setenv("REELCAST_TIMING__BITE_WINDOW_MS", "1200")
        monkeypatch.setenv("REELCAST_FPS", "30")
        settings = Settings(_env_file=None)
        assert settings.timing.bite_window_ms == 1200
        assert settings.fps == 30

    def test_load_settings_from_json(self, tmp_path):
        """A JSON file replaces the configured groups."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "economy": {"stake_options": [5, 10], "default_stake": 5, "default_balance": 50},
            "catch_table": {
                "rarity_thresholds": {"JUNK": 50, "COMMON": 100},
                "species": {
                    "JUNK": [{"name": "Sock", "size_min": 1, "size_max": 2}],
                    "COMMON": [{"name": "Bream", "size_min": 10, "size_max": 20}],
                },
            },
        }))
        settings = load_settings(path)
        assert settings.economy.default_stake == 5
        assert settings.catch_table.species[Rarity.JUNK][0].name == "Sock"
        assert list(settings.catch_table.rarity_thresholds) == [Rarity.JUNK, Rarity.COMMON]

    def test_load_settings_without_path(self):
        """No path means plain environment settings."""
        assert load_settings().timing.cast_duration_ms == 400


class TestValidation:
    """Bad configuration is rejected at load time."""

    def test_thresholds_must_ascend(self):
        with pytest.raises(ValidationError):
            CatchTableConfig(rarity_thresholds={Rarity.JUNK: 50, Rarity.COMMON: 40, Rarity.RARE: 100})

    def test_thresholds_must_end_at_100(self):
        with pytest.raises(ValidationError):
            CatchTableConfig(rarity_thresholds={Rarity.JUNK: 10, Rarity.COMMON: 90})

    def test_every_rarity_needs_species(self):
        with pytest.raises(ValidationError):
            CatchTableConfig(
                rarity_thresholds={Rarity.JUNK: 50, Rarity.RARE: 100},
                species={Rarity.JUNK: [SpeciesEntry(name="Can", size_min=1, size_max=2)]},
            )

    def test_size_range_must_not_invert(self):
        with pytest.raises(ValidationError):
            SpeciesEntry(name="Backwards", size_min=10, size_max=5)

    def test_default_stake_must_be_an_option(self):
        with pytest.raises(ValidationError):
            EconomyConfig(stake_options=[10, 20], default_stake=15)

    def test_bite_delay_range(self):
        with pytest.raises(ValidationError):
            TimingConfig(bite_delay_min_ms=3000, bite_delay_max_ms=1000)

    def test_payouts_must_cover_rarities(self):
        """Every rarity that can be rolled needs a payout multiplier."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, economy={"payout_multipliers": {"JUNK": 0}})
