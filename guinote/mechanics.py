"""Legal move generation for Guiñote."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .cards import Card, Suit, beats, card_strength
from .rejections import RejectionReason
from .state import Phase
from .trick import TrickCard, lead_suit, winning_play


def play_violation(
    card: Card,
    hand: Iterable[Card],
    trick: Sequence[TrickCard],
    trump: Optional[Suit],
    phase: Phase,
    *,
    partner_winning: bool = False,
    follow_suit_in_draw_phase: bool = True,
) -> Optional[RejectionReason]:
    """Return the rule broken by playing ``card``, or None when the play is legal.

    While the pile still has cards only the follow-suit obligation applies.
    In arrastre the player must follow, beat the winning card when able, and
    trump (over-trumping when able) when void in the led suit. A player whose
    partner currently holds the trick keeps the follow obligation only.
    """
    cards = list(hand)
    if card not in cards:
        return RejectionReason.CARD_NOT_IN_HAND
    if not trick:
        return None

    led = lead_suit(trick)
    in_led = [held for held in cards if held.suit is led]

    if phase is not Phase.ARRASTRE:
        if in_led and follow_suit_in_draw_phase and card.suit is not led:
            return RejectionReason.MUST_FOLLOW
        return None

    assert led is not None
    winning_card = winning_play(trick, trump).card

    if in_led:
        if card.suit is not led:
            return RejectionReason.MUST_FOLLOW
        if partner_winning:
            return None
        beating = [held for held in in_led if beats(held, winning_card, led, trump)]
        if beating and card not in beating:
            return RejectionReason.MUST_BEAT
        return None

    if partner_winning or trump is None:
        return None
    trump_cards = [held for held in cards if held.suit is trump]
    if not trump_cards:
        return None
    if card.suit is not trump:
        return RejectionReason.MUST_TRUMP
    beating = [held for held in trump_cards if beats(held, winning_card, led, trump)]
    if beating and card not in beating:
        return RejectionReason.MUST_BEAT
    return None


def is_legal_play(
    card: Card,
    hand: Iterable[Card],
    trick: Sequence[TrickCard],
    trump: Optional[Suit],
    phase: Phase,
    **kwargs: bool,
) -> bool:
    return play_violation(card, hand, trick, trump, phase, **kwargs) is None


def legal_moves(
    hand: Iterable[Card],
    trick: Sequence[TrickCard],
    trump: Optional[Suit],
    phase: Phase,
    *,
    partner_winning: bool = False,
    follow_suit_in_draw_phase: bool = True,
) -> List[Card]:
    """Return the subset of cards that are legal to play given the current trick."""
    cards = list(hand)
    legal = [
        card
        for card in cards
        if play_violation(
            card,
            cards,
            trick,
            trump,
            phase,
            partner_winning=partner_winning,
            follow_suit_in_draw_phase=follow_suit_in_draw_phase,
        )
        is None
    ]
    return sorted(legal, key=card_strength)
