"""Bot that always plays its cheapest legal card.

This is the move a server substitutes when a player's turn times out.
"""

from __future__ import annotations

from guinote.cards import Card
from guinote.game import legal_plays
from guinote.rules_schema import DEFAULT_RULES, RuleSet
from guinote.service import lowest_value_card
from guinote.state import GameState

from .base import BotStrategy


class LowestCardBot(BotStrategy):
    name = "LowestCard"

    def play_card(self, state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> Card:
        legal = legal_plays(state, player_id, rules)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return lowest_value_card(legal)
