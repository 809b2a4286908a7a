"""Card-related data structures and helpers for Guiñote."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping, Optional, Set


class Suit(Enum):
    OROS = auto()
    COPAS = auto()
    ESPADAS = auto()
    BASTOS = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    """Spanish-deck card values; there are no 8s or 9s."""

    AS = 1
    DOS = 2
    TRES = 3
    CUATRO = 4
    CINCO = 5
    SEIS = 6
    SIETE = 7
    SOTA = 10
    CABALLO = 11
    REY = 12

    def __str__(self) -> str:
        return self.name.lower()


CARD_POINTS: dict[Rank, int] = {
    Rank.AS: 11,
    Rank.TRES: 10,
    Rank.REY: 4,
    Rank.CABALLO: 3,
    Rank.SOTA: 2,
    Rank.SIETE: 0,
    Rank.SEIS: 0,
    Rank.CINCO: 0,
    Rank.CUATRO: 0,
    Rank.DOS: 0,
}

# Rank order from lowest to highest for trick resolution.
RANK_ORDER: list[Rank] = [
    Rank.DOS,
    Rank.CUATRO,
    Rank.CINCO,
    Rank.SEIS,
    Rank.SIETE,
    Rank.SOTA,
    Rank.CABALLO,
    Rank.REY,
    Rank.TRES,
    Rank.AS,
]

RANK_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}

SUIT_LABELS: dict[Suit, str] = {
    Suit.OROS: "Oros",
    Suit.COPAS: "Copas",
    Suit.ESPADAS: "Espadas",
    Suit.BASTOS: "Bastos",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        return self.rank.value

    @property
    def card_id(self) -> str:
        return f"{self.suit}_{self.rank.value}"

    def point_value(self) -> int:
        return CARD_POINTS[self.rank]

    def __str__(self) -> str:
        return self.card_id


def card_strength(card: Card) -> int:
    """Return an integer strength used for ordering cards within a suit."""
    return RANK_STRENGTH[card.rank]


def has_cante_pair(cards: Iterable[Card], suit: Suit) -> bool:
    """Return True if the iterable holds both the Rey and the Caballo of ``suit``."""
    seen: Set[Rank] = {card.rank for card in cards if card.suit is suit}
    return Rank.REY in seen and Rank.CABALLO in seen


def beats(candidate: Card, current: Card, led_suit: Suit, trump: Optional[Suit]) -> bool:
    """Return True if candidate wins over current within the trick context."""
    if candidate == current:
        return False

    candidate_trump = trump is not None and candidate.suit is trump
    current_trump = trump is not None and current.suit is trump

    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False

    if candidate.suit is current.suit:
        return card_strength(candidate) > card_strength(current)

    if candidate.suit is led_suit and current.suit is not led_suit:
        return True

    return False


def parse_card_id(card_id: str) -> Card:
    """Inverse of ``Card.card_id``; raises ValueError on unknown ids."""
    suit_name, _, value = card_id.partition("_")
    try:
        return Card(Suit[suit_name.upper()], Rank(int(value)))
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown card id: {card_id!r}") from exc


def serialize_card(card: Card) -> dict[str, object]:
    return {"suit": card.suit.name.lower(), "value": card.rank.value}


def deserialize_card(payload: Mapping[str, object]) -> Card:
    suit_name = str(payload["suit"]).upper()
    return Card(Suit[suit_name], Rank(int(payload["value"])))  # type: ignore[arg-type]


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} de {SUIT_LABELS[card.suit]}"
