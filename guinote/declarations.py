"""Cantes, the trump-seven exchange and vueltas victory declarations."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple, Union

from .cards import Card, Rank, Suit, has_cante_pair
from .rejections import Rejection, RejectionReason, reject
from .rules_schema import DEFAULT_RULES, RuleSet
from .state import GameState, Phase, team_of_seat

ActionResult = Union[GameState, Rejection]

_ACTIVE_PHASES = (Phase.PLAYING, Phase.ARRASTRE)


def cante_points(suit: Suit, trump: Optional[Suit], rules: RuleSet = DEFAULT_RULES) -> int:
    return rules.trump_cante_points if suit is trump else rules.cante_points


def has_declaration_turn(state: GameState, seat: int) -> bool:
    """Declarations happen between tricks, by the opening lead or the team that took the last trick."""
    if state.current_trick:
        return False
    if state.trick_count == 0:
        return seat == state.mano
    if state.last_trick_winner is None:
        return False
    return team_of_seat(state.last_trick_winner) == team_of_seat(seat)


def cante_violation(
    state: GameState,
    player_id: str,
    suit: Suit,
    rules: RuleSet = DEFAULT_RULES,
) -> Optional[Rejection]:
    seat = state.seat_of(player_id)
    if seat is None:
        return reject(RejectionReason.UNKNOWN_PLAYER, f"Unknown player {player_id!r}.")
    if state.phase not in _ACTIVE_PHASES:
        return reject(RejectionReason.PHASE_VIOLATION, f"Cannot cantar during {state.phase}.")
    if state.phase is Phase.ARRASTRE and not rules.cantes_in_arrastre:
        return reject(RejectionReason.CANTE_TIMING_VIOLATION, "Cantes are closed once the pile is empty.")
    if not has_declaration_turn(state, seat):
        return reject(
            RejectionReason.CANTE_TIMING_VIOLATION,
            "Cantar only before a trick starts, after your team took the previous one.",
        )
    if not has_cante_pair(state.hands[seat], suit):
        return reject(RejectionReason.CANTE_MISSING_PAIR, f"Need Rey and Caballo of {suit} to cantar.")
    if state.teams[team_of_seat(seat)].has_declared(suit):
        return reject(RejectionReason.CANTE_SUIT_ALREADY_DECLARED, f"{suit} was already declared this hand.")
    return None


def cantable_suits(state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> List[Suit]:
    return [suit for suit in Suit if cante_violation(state, player_id, suit, rules) is None]


def cantar(
    state: GameState,
    player_id: str,
    suit: Suit,
    rules: RuleSet = DEFAULT_RULES,
) -> ActionResult:
    rejection = cante_violation(state, player_id, suit, rules)
    if rejection is not None:
        return rejection

    team_index = state.team_of(player_id)
    team = state.teams[team_index]
    points = cante_points(suit, state.trump_suit, rules)
    teams = list(state.teams)
    teams[team_index] = replace(team, score=team.score + points, cantes=team.cantes + (suit,))
    return replace(state, teams=(teams[0], teams[1]))


def cambiar7_violation(state: GameState, player_id: str) -> Optional[Rejection]:
    seat = state.seat_of(player_id)
    if seat is None:
        return reject(RejectionReason.UNKNOWN_PLAYER, f"Unknown player {player_id!r}.")
    if state.phase not in _ACTIVE_PHASES:
        return reject(RejectionReason.PHASE_VIOLATION, f"Cannot exchange the seven during {state.phase}.")

    unmet = RejectionReason.CAMBIAR7_PRECONDITION_UNMET
    if not state.can_cambiar7:
        return reject(unmet, "The trump seven was already exchanged this hand.")
    if not has_declaration_turn(state, seat):
        return reject(unmet, "Exchange only before a trick starts, after your team took the previous one.")
    if not state.draw_pile or state.trump_card is None:
        return reject(unmet, "No face-up trump card left to exchange.")
    if state.trump_card.rank is Rank.SIETE:
        return reject(unmet, "The face-up trump card is already the seven.")
    if _trump_seven(state) not in state.hands[seat]:
        return reject(unmet, "You need the seven of trumps.")
    return None


def can_cambiar7(state: GameState, player_id: str) -> bool:
    return cambiar7_violation(state, player_id) is None


def cambiar7(state: GameState, player_id: str) -> ActionResult:
    rejection = cambiar7_violation(state, player_id)
    if rejection is not None:
        return rejection

    seat = state.seat_of(player_id)
    assert seat is not None and state.trump_card is not None
    seven = _trump_seven(state)
    old_trump = state.trump_card

    hand = [card for card in state.hands[seat] if card != seven] + [old_trump]
    hands = list(state.hands)
    hands[seat] = tuple(hand)
    pile = state.draw_pile[:-1] + (seven,)
    return replace(
        state,
        hands=tuple(hands),
        draw_pile=pile,
        trump_card=seven,
        can_cambiar7=False,
    )


def _trump_seven(state: GameState) -> Card:
    assert state.trump_suit is not None
    return Card(state.trump_suit, Rank.SIETE)


def victory_thresholds(state: GameState, rules: RuleSet = DEFAULT_RULES) -> Optional[Tuple[int, int]]:
    """Hand points each team still needs in vueltas to reach ``winning_score``."""
    if not state.is_vueltas or state.initial_scores is None:
        return None
    first, second = state.initial_scores
    return max(0, rules.winning_score - first), max(0, rules.winning_score - second)


def victory_violation(state: GameState, player_id: str) -> Optional[Rejection]:
    """Victory is declared in vueltas, between tricks, by the team that took the last trick."""
    seat = state.seat_of(player_id)
    if seat is None:
        return reject(RejectionReason.UNKNOWN_PLAYER, f"Unknown player {player_id!r}.")
    if state.phase not in _ACTIVE_PHASES:
        return reject(RejectionReason.PHASE_VIOLATION, f"Cannot declare victory during {state.phase}.")

    unmet = RejectionReason.VICTORY_DECLARATION_PRECONDITION_UNMET
    if not state.is_vueltas or state.initial_scores is None:
        return reject(unmet, "Victory can only be declared during vueltas.")
    if state.current_trick:
        return reject(unmet, "Victory can only be declared between tricks.")
    if state.last_trick_winner is None or team_of_seat(state.last_trick_winner) != team_of_seat(seat):
        return reject(unmet, "Only the team that took the last trick may declare victory.")
    return None


def victory_claim_holds(state: GameState, team_index: int, rules: RuleSet = DEFAULT_RULES) -> bool:
    """True when ``team_index`` would take the partida if the vueltas hand stopped now.

    The combined total must reach ``winning_score`` and beat the other
    team's (ties go to the team that took the last trick), and the team must
    have captured at least ``minimum_card_points`` this hand.
    """
    own = state.combined_score(team_index)
    other = state.combined_score(1 - team_index)
    if own < rules.winning_score:
        return False
    if state.teams[team_index].card_points < rules.minimum_card_points:
        return False
    if own != other:
        return own > other
    return state.last_trick_winner is not None and team_of_seat(state.last_trick_winner) == team_index


def can_declare_victory(state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> bool:
    if victory_violation(state, player_id) is not None:
        return False
    return victory_claim_holds(state, state.team_of(player_id), rules)
