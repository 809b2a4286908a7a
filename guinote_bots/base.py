"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import List, Optional

from guinote.actions import Action, Cambiar7, Cantar, DeclareVictory
from guinote.cards import Card
from guinote.declarations import can_cambiar7, can_declare_victory, cantable_suits
from guinote.game import legal_plays
from guinote.rules_schema import DEFAULT_RULES, RuleSet
from guinote.state import GameState


def available_declarations(state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> List[Action]:
    """Every declaration the engine would accept from ``player_id`` right now."""
    actions: List[Action] = []
    seat = state.seat_of(player_id)
    if seat is None:
        return actions
    if can_declare_victory(state, player_id, rules):
        actions.append(DeclareVictory(player_id))
    if can_cambiar7(state, player_id):
        actions.append(Cambiar7(player_id))
    actions.extend(Cantar(player_id, suit) for suit in cantable_suits(state, player_id, rules))
    return actions


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def on_hand_start(self, state: GameState) -> None:
        """Optional hook invoked after each deal."""
        return None

    def declaration(self, state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> Optional[Action]:
        """Return a declaration to make before the next trick, or None."""
        return None

    def play_card(self, state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> Card:
        legal = legal_plays(state, player_id, rules)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]
