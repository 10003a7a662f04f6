"""
Catch value types.
NO UI DEPENDENCIES.
"""
from dataclasses import dataclass
from enum import Enum


class Rarity(Enum):
    """Catch rarity tier, ordered from most to least common."""
    JUNK = "JUNK"
    COMMON = "COMMON"
    RARE = "RARE"
    LEGENDARY = "LEGENDARY"


@dataclass(frozen=True)
class FishData:
    """A resolved catch before it is recorded."""
    name: str
    rarity: Rarity
    size: int  # cm


@dataclass(frozen=True)
class CaughtFish:
    """A catch recorded in the session history."""
    name: str
    rarity: Rarity
    size: int
    timestamp: float
    sequence_number: str  # numeric id from the random source, or "practice"
    is_practice: bool

    @classmethod
    def from_fish(
        cls,
        fish: FishData,
        timestamp: float,
        sequence_number: str,
        is_practice: bool,
    ) -> "CaughtFish":
        return cls(
            name=fish.name,
            rarity=fish.rarity,
            size=fish.size,
            timestamp=timestamp,
            sequence_number=sequence_number,
            is_practice=is_practice,
        )
