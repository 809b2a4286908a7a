"""Deck creation utilities for Guiñote."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Rank, Suit

DECK_SIZE = 40


class DealError(ValueError):
    """Raised when a deal is requested with an unusable deck."""


def build_deck() -> List[Card]:
    """Return the ordered 40-card Spanish deck."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def shuffle_deck(cards: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a uniformly permuted copy of ``cards``; the input is left untouched."""
    if rng is None:
        rng = Random()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def deal_initial_hands(
    deck: Sequence[Card],
    player_count: int = 4,
    *,
    hand_size: int = 6,
) -> Tuple[List[List[Card]], List[Card]]:
    """Deal ``hand_size`` cards to each player in order and return the draw pile."""
    cards = list(deck)
    if len(cards) != DECK_SIZE:
        raise DealError(f"Deck must contain exactly {DECK_SIZE} cards.")
    if len(set(cards)) != DECK_SIZE:
        raise DealError("Deck contains duplicated cards.")

    hands = [cards[seat * hand_size : (seat + 1) * hand_size] for seat in range(player_count)]
    return hands, cards[player_count * hand_size :]


def reveal_trump(pile: Sequence[Card]) -> Tuple[Card, List[Card]]:
    """Turn the top card face up and slide it under the pile.

    The face-up card is drawn last, so while the pile has cards the trump
    card is always ``pile[-1]``.
    """
    if not pile:
        raise DealError("Cannot reveal trump from an empty pile.")
    trump_card = pile[0]
    return trump_card, list(pile[1:]) + [trump_card]


def place_trump_last(deck: Sequence[Card], trump_card: Card) -> List[Card]:
    """Return ``deck`` with ``trump_card`` moved to the bottom, keeping it as the face-up card."""
    cards = [card for card in deck if card != trump_card]
    if len(cards) != len(deck) - 1:
        raise DealError(f"Trump card {trump_card} is not in the deck.")
    return cards + [trump_card]
