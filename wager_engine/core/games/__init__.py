"""Game resolvers for the wager engine."""

from .dice import DiceGame, dice_game
from .roulette import RouletteGame, roulette_game
from .slots import SlotsGame, slots_game

__all__ = [
    "DiceGame",
    "dice_game",
    "RouletteGame",
    "roulette_game",
    "SlotsGame",
    "slots_game",
]
