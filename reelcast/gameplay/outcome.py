"""
Outcome resolver - maps a 256-bit random value to a catch.
NO UI DEPENDENCIES.

The mapping is deterministic and bit-exact so that anyone holding the
random value can recompute the catch:

    rarity_roll = value % 100
    fish_roll   = (value >> 8) % 100
    size_roll   = (value >> 16) % 100
"""
import math
from typing import Dict, Optional, Union

from reelcast.config import CatchTableConfig, EconomyConfig
from .fish import FishData, Rarity

RANDOM_VALUE_BITS = 256
ROLL_MODULUS = 100


class InvalidRandomValue(ValueError):
    """Raised when a random value is missing, malformed or out of range."""
    pass


def parse_random_value(value: Union[str, int, None]) -> int:
    """
    Convert a random value to an unsigned integer.

    Accepts an int or a hex string with or without a 0x prefix.
    """
    if value is None:
        raise InvalidRandomValue("random value is missing")
    if isinstance(value, bool):
        raise InvalidRandomValue("random value must be an integer or hex string")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if text[:2].lower() == "0x":
            text = text[2:]
        if not text:
            raise InvalidRandomValue("random value is empty")
        try:
            number = int(text, 16)
        except ValueError:
            raise InvalidRandomValue(f"random value is not hex: {value!r}") from None
    else:
        raise InvalidRandomValue(f"unsupported random value type: {type(value).__name__}")

    if number < 0:
        raise InvalidRandomValue("random value must be unsigned")
    if number.bit_length() > RANDOM_VALUE_BITS:
        raise InvalidRandomValue(f"random value exceeds {RANDOM_VALUE_BITS} bits")
    return number


def select_rarity(roll: int, catch_table: CatchTableConfig) -> Rarity:
    """First rarity whose cumulative threshold is above the roll."""
    for rarity, threshold in catch_table.rarity_thresholds.items():
        if roll < threshold:
            return rarity
    # Thresholds end at 100 so a 0-99 roll always matches above
    return list(catch_table.rarity_thresholds)[-1]


def determine_catch(
    random_value: Union[str, int],
    catch_table: Optional[CatchTableConfig] = None,
) -> FishData:
    """Resolve a random value to a species, rarity and size."""
    table = catch_table if catch_table is not None else CatchTableConfig()
    value = parse_random_value(random_value)

    rarity_roll = value % ROLL_MODULUS
    fish_roll = (value >> 8) % ROLL_MODULUS
    size_roll = (value >> 16) % ROLL_MODULUS

    rarity = select_rarity(rarity_roll, table)
    species = table.species[rarity]
    entry = species[fish_roll % len(species)]

    size_range = entry.size_max - entry.size_min
    size = entry.size_min + (size_roll % size_range if size_range > 0 else 0)

    return FishData(name=entry.name, rarity=rarity, size=size)


def payout_for(rarity: Rarity, stake: int, economy: EconomyConfig) -> int:
    """Amount credited for a catch of the given rarity."""
    multiplier = economy.payout_multipliers.get(rarity, 0)
    return math.floor(stake * multiplier)


def rarity_odds(catch_table: CatchTableConfig) -> Dict[Rarity, float]:
    """Probability of each rarity for a uniform random value."""
    odds = {}
    previous = 0
    for rarity, threshold in catch_table.rarity_thresholds.items():
        odds[rarity] = (threshold - previous) / ROLL_MODULUS
        previous = threshold
    return odds


def expected_return(catch_table: CatchTableConfig, economy: EconomyConfig) -> float:
    """Expected payout per unit staked."""
    return sum(
        probability * economy.payout_multipliers.get(rarity, 0)
        for rarity, probability in rarity_odds(catch_table).items()
    )
