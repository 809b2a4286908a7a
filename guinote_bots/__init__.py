"""Bot strategies and match arena for Guiñote."""

from .base import BotStrategy
from .lowest_card_bot import LowestCardBot
from .random_bot import RandomBot

__all__ = ["BotStrategy", "LowestCardBot", "RandomBot"]
