"""Player actions accepted by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .cards import Suit


@dataclass(frozen=True)
class PlayCard:
    player_id: str
    card_id: str


@dataclass(frozen=True)
class Cantar:
    player_id: str
    suit: Suit


@dataclass(frozen=True)
class Cambiar7:
    player_id: str


@dataclass(frozen=True)
class DeclareVictory:
    player_id: str


Action = Union[PlayCard, Cantar, Cambiar7, DeclareVictory]
