"""
Tests for the outcome resolver.
"""
import random

import pytest

from reelcast.config import CatchTableConfig, EconomyConfig, SpeciesEntry
from reelcast.gameplay.fish import FishData, Rarity
from reelcast.gameplay.outcome import (
    InvalidRandomValue, determine_catch, expected_return, parse_random_value,
    payout_for, rarity_odds,
)


class TestParseRandomValue:
    """Tests for random value parsing."""

    def test_hex_with_and_without_prefix(self):
        """0x prefix is optional and case does not matter."""
        assert parse_random_value("0xff") == 255
        assert parse_random_value("FF") == 255
        assert parse_random_value("0XfF") == 255

    def test_integer_passthrough(self):
        """Integers are accepted as-is."""
        assert parse_random_value(12345) == 12345

    def test_full_width_value(self):
        """The largest 256-bit value is valid."""
        assert parse_random_value("0x" + "f" * 64) == 2 ** 256 - 1

    @pytest.mark.parametrize("value", [
        None, "", "0x", "0xnothex", "hello", -1, 2 ** 256, "0x1" + "0" * 64, True, 1.5,
    ])
    def test_rejects_invalid(self, value):
        """Missing, malformed, negative and oversized values raise."""
        with pytest.raises(InvalidRandomValue):
            parse_random_value(value)

    def test_invalid_value_is_value_error(self):
        """Callers can catch the resolver error as a ValueError."""
        with pytest.raises(ValueError):
            parse_random_value("zz")


class TestDetermineCatch:
    """Tests for mapping random values to catches."""

    def test_zero_is_old_boot(self):
        """All-zero value resolves to the first junk entry at minimum size."""
        assert determine_catch("0x" + "00" * 32) == FishData("Old Boot", Rarity.JUNK, 5)

    @pytest.mark.parametrize("value, expected", [
        (9, FishData("Old Boot", Rarity.JUNK, 5)),
        (10, FishData("Common Carp", Rarity.COMMON, 15)),
        (64, FishData("Common Carp", Rarity.COMMON, 15)),
        (65, FishData("Golden Trout", Rarity.RARE, 30)),
        (89, FishData("Golden Trout", Rarity.RARE, 30)),
        (90, FishData("Legendary Koi", Rarity.LEGENDARY, 50)),
        (99, FishData("Legendary Koi", Rarity.LEGENDARY, 50)),
    ])
    def test_rarity_boundaries(self, value, expected):
        """Rarity thresholds are cumulative and exclusive at the top."""
        assert determine_catch(value) == expected

    def test_fish_roll_uses_second_byte(self):
        """Species index comes from (value >> 8) % 100."""
        # 768 % 100 = 68 (rare), 768 >> 8 = 3 -> fourth rare species
        assert determine_catch(768) == FishData("Electric Eel", Rarity.RARE, 30)

    def test_size_roll_uses_third_byte(self):
        """Size offset comes from (value >> 16) % 100 modulo the range."""
        # 327680 % 100 = 80 (rare), (327680 >> 8) % 100 = 80 -> index 0, size roll 5
        assert determine_catch(327680) == FishData("Golden Trout", Rarity.RARE, 35)

    def test_deterministic(self):
        """Same value always resolves to the same catch."""
        value = "0x" + "ab" * 32
        assert determine_catch(value) == determine_catch(value)
        assert determine_catch(value) == determine_catch(int(value, 16))

    def test_species_and_size_within_tier(self):
        """Every resolved catch belongs to its rarity table and size range."""
        table = CatchTableConfig()
        rng = random.Random(99)
        for _ in range(500):
            fish = determine_catch(rng.getrandbits(256), table)
            entries = {entry.name: entry for entry in table.species[fish.rarity]}
            assert fish.name in entries
            entry = entries[fish.name]
            assert entry.size_min <= fish.size < max(entry.size_max, entry.size_min + 1)

    def test_rarity_distribution_converges(self):
        """Uniform values converge to the configured rarity odds."""
        rng = random.Random(1234)
        samples = 20000
        counts = {rarity: 0 for rarity in Rarity}
        for _ in range(samples):
            counts[determine_catch(rng.getrandbits(256)).rarity] += 1

        expected = {Rarity.JUNK: 0.10, Rarity.COMMON: 0.55, Rarity.RARE: 0.25, Rarity.LEGENDARY: 0.10}
        for rarity, share in expected.items():
            assert counts[rarity] / samples == pytest.approx(share, abs=0.02)

    def test_custom_table(self):
        """A single-tier table always yields that tier."""
        table = CatchTableConfig(
            rarity_thresholds={Rarity.COMMON: 100},
            species={Rarity.COMMON: [SpeciesEntry(name="Minnow", size_min=3, size_max=3)]},
        )
        assert determine_catch(987654321, table) == FishData("Minnow", Rarity.COMMON, 3)

    def test_invalid_value_raises(self):
        """Resolver propagates parse errors."""
        with pytest.raises(InvalidRandomValue):
            determine_catch("not a number")


class TestEconomy:
    """Tests for payout helpers."""

    @pytest.mark.parametrize("rarity, stake, payout", [
        (Rarity.JUNK, 100, 0),
        (Rarity.COMMON, 100, 0),
        (Rarity.RARE, 10, 4),
        (Rarity.RARE, 25, 10),
        (Rarity.LEGENDARY, 10, 20),
    ])
    def test_payout_is_floored(self, rarity, stake, payout):
        """Payout is floor(stake * multiplier)."""
        assert payout_for(rarity, stake, EconomyConfig()) == payout

    def test_rarity_odds(self):
        """Odds are the widths of the threshold bands."""
        odds = rarity_odds(CatchTableConfig())
        assert odds[Rarity.JUNK] == pytest.approx(0.10)
        assert odds[Rarity.COMMON] == pytest.approx(0.55)
        assert sum(odds.values()) == pytest.approx(1.0)

    def test_expected_return(self):
        """Default table returns 30% of the stake on average."""
        assert expected_return(CatchTableConfig(), EconomyConfig()) == pytest.approx(0.30)
