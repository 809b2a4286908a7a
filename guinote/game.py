"""Hand state machine for Guiñote.

Every public function takes an immutable ``GameState`` and returns either a
new ``GameState`` or a ``Rejection``. Shuffling only happens in ``deal`` and
draws from the injected ``Random``.
"""

from __future__ import annotations

from dataclasses import replace
from random import Random
from typing import Iterable, List, Optional, Sequence, Union

from .actions import Action, Cambiar7, Cantar, DeclareVictory, PlayCard
from .cards import Card
from .declarations import cambiar7, cantar, victory_claim_holds, victory_violation
from .deck import (
    DealError,
    build_deck,
    deal_initial_hands,
    place_trump_last,
    reveal_trump,
    shuffle_deck,
)
from .mechanics import legal_moves, play_violation
from .rejections import Rejection, RejectionReason, reject
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import ScoringError, declared_victory_result, score_hand
from .state import SEATS, GameState, Phase, fresh_teams, make_players, next_seat, team_of_seat
from .trick import TRICK_SIZE, TrickCard, resolve_trick, trick_points

ActionResult = Union[GameState, Rejection]

_EMPTY_HANDS = ((),) * SEATS
_ACTIVE_PHASES = (Phase.PLAYING, Phase.ARRASTRE)


def new_game(player_ids: Sequence[str], *, dealer: int = 1, bots: Iterable[str] = ()) -> GameState:
    """Return the undealt state for the first hand of a match."""
    if not 0 <= dealer < SEATS:
        raise ValueError(f"Dealer seat must be between 0 and {SEATS - 1}.")
    mano = next_seat(dealer)
    return GameState(
        players=make_players(player_ids, bots),
        dealer=dealer,
        mano=mano,
        current_player=mano,
    )


def deal(
    state: GameState,
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
    rules: RuleSet = DEFAULT_RULES,
) -> GameState:
    """Deal six cards each, starting with the mano, and reveal trumps.

    A vueltas hand keeps the face-up card of the previous hand.
    """
    if state.phase is not Phase.DEALING:
        raise DealError(f"Cannot deal during {state.phase}.")
    cards = list(deck) if deck is not None else shuffle_deck(build_deck(), rng)

    if state.is_vueltas and state.trump_card is not None:
        cards = place_trump_last(cards, state.trump_card)
        dealt, pile = deal_initial_hands(cards, SEATS, hand_size=rules.hand_size)
        trump_card = pile[-1]
    else:
        dealt, pile = deal_initial_hands(cards, SEATS, hand_size=rules.hand_size)
        trump_card, pile = reveal_trump(pile)

    hands: List[tuple] = list(_EMPTY_HANDS)
    seat = state.mano
    for hand in dealt:
        hands[seat] = tuple(hand)
        seat = next_seat(seat)

    return replace(
        state,
        phase=Phase.PLAYING,
        hands=tuple(hands),
        draw_pile=tuple(pile),
        trump_suit=trump_card.suit,
        trump_card=trump_card,
        current_trick=(),
        current_player=state.mano,
        trick_count=0,
        last_trick_winner=None,
        captured=((), ()),
        can_cambiar7=True,
        hand_result=None,
    )


def legal_plays(state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> List[Card]:
    """Cards ``player_id`` may play right now; empty when it is not their turn."""
    seat = state.seat_of(player_id)
    if seat is None or state.phase not in _ACTIVE_PHASES or seat != state.current_player:
        return []
    return legal_moves(
        state.hands[seat],
        state.current_trick,
        state.trump_suit,
        state.phase,
        partner_winning=state.partner_winning(seat),
        follow_suit_in_draw_phase=rules.follow_suit_in_draw_phase,
    )


def play_card(state: GameState, player_id: str, card_id: str, rules: RuleSet = DEFAULT_RULES) -> ActionResult:
    seat = state.seat_of(player_id)
    if seat is None:
        return reject(RejectionReason.UNKNOWN_PLAYER, f"Unknown player {player_id!r}.")
    if state.phase not in _ACTIVE_PHASES:
        return reject(RejectionReason.PHASE_VIOLATION, f"Cannot play a card during {state.phase}.")
    if seat != state.current_player:
        return reject(RejectionReason.WRONG_TURN, f"It is {state.current_player_id}'s turn.")

    hand = state.hands[seat]
    card = next((held for held in hand if held.card_id == card_id), None)
    if card is None:
        return reject(RejectionReason.CARD_NOT_IN_HAND, f"{card_id} is not in {player_id}'s hand.")

    violation = play_violation(
        card,
        hand,
        state.current_trick,
        state.trump_suit,
        state.phase,
        partner_winning=state.partner_winning(seat),
        follow_suit_in_draw_phase=rules.follow_suit_in_draw_phase,
    )
    if violation is not None:
        return reject(violation, f"{card_id} cannot be played here.")

    hands = list(state.hands)
    hands[seat] = tuple(held for held in hand if held != card)
    played = replace(
        state,
        hands=tuple(hands),
        current_trick=state.current_trick + (TrickCard(player_id, card),),
    )
    if len(played.current_trick) == TRICK_SIZE:
        return _complete_trick(played, rules)
    return replace(played, current_player=next_seat(seat))


def _complete_trick(state: GameState, rules: RuleSet) -> GameState:
    trick = state.current_trick
    winner_seat = state.seat_of(resolve_trick(trick, state.trump_suit))
    assert winner_seat is not None
    team_index = team_of_seat(winner_seat)
    points = trick_points(trick)

    teams = list(state.teams)
    team = teams[team_index]
    teams[team_index] = replace(team, score=team.score + points, card_points=team.card_points + points)
    captured = list(state.captured)
    captured[team_index] = captured[team_index] + tuple(play.card for play in trick)

    # Winner draws first, then the others in play order.
    hands = list(state.hands)
    pile = list(state.draw_pile)
    seat = winner_seat
    for _ in range(SEATS):
        if not pile:
            break
        hands[seat] = hands[seat] + (pile.pop(0),)
        seat = next_seat(seat)

    phase = state.phase
    can_cambiar7 = state.can_cambiar7
    if not pile:
        phase = Phase.ARRASTRE
        can_cambiar7 = False

    resolved = replace(
        state,
        phase=phase,
        teams=(teams[0], teams[1]),
        hands=tuple(hands),
        draw_pile=tuple(pile),
        captured=(captured[0], captured[1]),
        current_trick=(),
        current_player=winner_seat,
        trick_count=state.trick_count + 1,
        last_trick_winner=winner_seat,
        can_cambiar7=can_cambiar7,
    )
    if not resolved.all_hands_empty():
        return resolved

    # Diez de últimas.
    teams[team_index] = replace(teams[team_index], score=teams[team_index].score + rules.last_trick_bonus)
    return finish_hand(replace(resolved, teams=(teams[0], teams[1])), rules)


def finish_hand(state: GameState, rules: RuleSet = DEFAULT_RULES) -> GameState:
    """Score a hand whose cards are all played; goes to scoring or starts vueltas."""
    if not state.all_hands_empty() or state.current_trick:
        raise ScoringError("Cannot score a hand that still has cards to play.")
    last_trick_team = team_of_seat(state.last_trick_winner) if state.last_trick_winner is not None else None
    result = score_hand(
        scores=(state.teams[0].score, state.teams[1].score),
        card_points=(state.teams[0].card_points, state.teams[1].card_points),
        last_trick_team=last_trick_team,
        initial_scores=state.initial_scores,
        rules=rules,
    )
    if result.needs_vueltas:
        return start_vueltas(replace(state, hand_result=result))
    return replace(state, phase=Phase.SCORING, hand_result=result)


def start_vueltas(state: GameState) -> GameState:
    """Carry the scores over, reset both teams and return to dealing with the same trump."""
    initial = (state.teams[0].score, state.teams[1].score)
    dealer = (state.dealer + 1) % SEATS
    mano = next_seat(dealer)
    return replace(
        state,
        phase=Phase.DEALING,
        teams=fresh_teams(),
        hands=_EMPTY_HANDS,
        draw_pile=(),
        current_trick=(),
        captured=((), ()),
        dealer=dealer,
        mano=mano,
        current_player=mano,
        trick_count=0,
        last_trick_winner=None,
        can_cambiar7=True,
        is_vueltas=True,
        initial_scores=initial,
    )


def declare_victory(state: GameState, player_id: str, rules: RuleSet = DEFAULT_RULES) -> ActionResult:
    """End a vueltas hand early for a team whose carried-over total already wins."""
    rejection = victory_violation(state, player_id)
    if rejection is not None:
        return rejection

    team_index = state.team_of(player_id)
    accepted = victory_claim_holds(state, team_index, rules)
    if not accepted and rules.failed_victory_declaration == "reject":
        return reject(
            RejectionReason.VICTORY_DECLARATION_PRECONDITION_UNMET,
            f"{state.teams[team_index].id} does not hold a winning total yet.",
        )

    result = declared_victory_result(
        declaring_team=team_index,
        combined_scores=(state.combined_score(0), state.combined_score(1)),
        accepted=accepted,
        rules=rules,
    )
    return replace(state, phase=Phase.SCORING, hand_result=result)


def apply_action(state: GameState, action: Action, rules: RuleSet = DEFAULT_RULES) -> ActionResult:
    if isinstance(action, PlayCard):
        return play_card(state, action.player_id, action.card_id, rules)
    if isinstance(action, Cantar):
        return cantar(state, action.player_id, action.suit, rules)
    if isinstance(action, Cambiar7):
        return cambiar7(state, action.player_id)
    if isinstance(action, DeclareVictory):
        return declare_victory(state, action.player_id, rules)
    raise TypeError(f"Unsupported action: {action!r}")
