"""ReelCast - an arcade fishing mini-game."""

__version__ = "0.1.0"
