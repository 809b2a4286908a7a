"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from guinote.actions import Action, DeclareVictory
from guinote.cards import Card
from guinote.game import legal_plays
from guinote.rules_schema import DEFAULT_RULES, RuleSet
from guinote.state import GameState

from .base import BotStrategy, available_declarations


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, declare_rate: float = 0.8) -> None:
        self._rng = random.Random(seed)
        self.declare_rate = declare_rate

    def declaration(self, state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> Optional[Action]:
        options = available_declarations(state, player_id, rules)
        if not options:
            return None
        # A winning declaration is never passed up.
        for option in options:
            if isinstance(option, DeclareVictory):
                return option
        if self._rng.random() >= self.declare_rate:
            return None
        return self._rng.choice(options)

    def play_card(self, state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> Card:
        legal = legal_plays(state, player_id, rules)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return self._rng.choice(legal)
