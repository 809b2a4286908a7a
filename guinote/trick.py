"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import Card, Suit, beats

TRICK_SIZE = 4


class TrickError(RuntimeError):
    """Raised when a trick is resolved with the wrong number of cards."""


@dataclass(frozen=True)
class TrickCard:
    player_id: str
    card: Card


def lead_suit(trick: Sequence[TrickCard]) -> Optional[Suit]:
    return trick[0].card.suit if trick else None


def winning_play(trick: Sequence[TrickCard], trump: Optional[Suit]) -> TrickCard:
    """Return the play currently winning a (possibly partial) trick."""
    if not trick:
        raise TrickError("Cannot determine winner on empty trick.")
    led = trick[0].card.suit
    winning = trick[0]
    for play in trick[1:]:
        if beats(play.card, winning.card, led, trump):
            winning = play
    return winning


def resolve_trick(trick: Sequence[TrickCard], trump: Optional[Suit]) -> str:
    """Return the id of the player who takes a complete trick."""
    if len(trick) != TRICK_SIZE:
        raise TrickError(f"A trick needs exactly {TRICK_SIZE} cards, got {len(trick)}.")
    return winning_play(trick, trump).player_id


def trick_points(trick: Sequence[TrickCard]) -> int:
    return sum(play.card.point_value() for play in trick)
