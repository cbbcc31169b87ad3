"""Scout Manager - decision core for a football scouting career game."""

__version__ = "0.1.0"
