"""Game state model for a Guiñote hand."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from .cards import Card, Suit
from .trick import TrickCard, winning_play

if TYPE_CHECKING:
    from .scoring import HandScoreResult

SEATS = 4
TEAM_IDS = ("team1", "team2")


class Phase(Enum):
    DEALING = auto()
    PLAYING = auto()
    ARRASTRE = auto()
    SCORING = auto()
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.lower()


def next_seat(seat: int) -> int:
    """Play passes counter-clockwise around the table."""
    return (seat - 1) % SEATS


def team_of_seat(seat: int) -> int:
    return seat % 2


def partner_seat(seat: int) -> int:
    return (seat + 2) % SEATS


@dataclass(frozen=True)
class Player:
    id: str
    team: int
    is_bot: bool = False


@dataclass(frozen=True)
class Team:
    id: str
    score: int = 0
    card_points: int = 0
    cantes: Tuple[Suit, ...] = ()

    def has_declared(self, suit: Suit) -> bool:
        return suit in self.cantes


def make_players(player_ids: Sequence[str], bots: Iterable[str] = ()) -> Tuple[Player, ...]:
    """Seat players in order; seats i and i+2 form a team."""
    if len(player_ids) != SEATS:
        raise ValueError(f"Guiñote needs exactly {SEATS} players.")
    if len(set(player_ids)) != SEATS:
        raise ValueError("Player ids must be unique.")
    bot_ids = set(bots)
    return tuple(
        Player(id=player_id, team=team_of_seat(seat), is_bot=player_id in bot_ids)
        for seat, player_id in enumerate(player_ids)
    )


def fresh_teams() -> Tuple[Team, Team]:
    return Team(id=TEAM_IDS[0]), Team(id=TEAM_IDS[1])


@dataclass(frozen=True)
class GameState:
    """Full-information snapshot of one hand. Never mutated; see ``dataclasses.replace``."""

    players: Tuple[Player, ...]
    teams: Tuple[Team, Team] = field(default_factory=fresh_teams)
    phase: Phase = Phase.DEALING
    hands: Tuple[Tuple[Card, ...], ...] = ((), (), (), ())
    draw_pile: Tuple[Card, ...] = ()
    trump_suit: Optional[Suit] = None
    trump_card: Optional[Card] = None
    current_trick: Tuple[TrickCard, ...] = ()
    current_player: int = 0
    dealer: int = 1
    mano: int = 0
    trick_count: int = 0
    last_trick_winner: Optional[int] = None
    captured: Tuple[Tuple[Card, ...], Tuple[Card, ...]] = ((), ())
    can_cambiar7: bool = True
    is_vueltas: bool = False
    initial_scores: Optional[Tuple[int, int]] = None
    hand_result: Optional["HandScoreResult"] = None

    def __post_init__(self) -> None:
        if len(self.players) != SEATS or len(self.hands) != SEATS:
            raise ValueError(f"GameState requires exactly {SEATS} players and hands.")
        for seat, player in enumerate(self.players):
            if player.team != team_of_seat(seat):
                raise ValueError(f"Player {player.id} is seated outside their team.")

    # Lookups -----------------------------------------------------------

    def seat_of(self, player_id: str) -> Optional[int]:
        for seat, player in enumerate(self.players):
            if player.id == player_id:
                return seat
        return None

    def player_at(self, seat: int) -> Player:
        return self.players[seat]

    @property
    def current_player_id(self) -> str:
        return self.players[self.current_player].id

    def hand_of(self, player_id: str) -> Tuple[Card, ...]:
        seat = self.seat_of(player_id)
        if seat is None:
            raise KeyError(player_id)
        return self.hands[seat]

    def team_of(self, player_id: str) -> int:
        seat = self.seat_of(player_id)
        if seat is None:
            raise KeyError(player_id)
        return team_of_seat(seat)

    # Derived values ----------------------------------------------------

    def combined_score(self, team_index: int) -> int:
        base = self.initial_scores[team_index] if self.initial_scores else 0
        return base + self.teams[team_index].score

    def all_hands_empty(self) -> bool:
        return all(len(hand) == 0 for hand in self.hands)

    def partner_winning(self, seat: int) -> bool:
        """True when ``seat``'s partner currently holds the trick."""
        if not self.current_trick:
            return False
        leader = winning_play(self.current_trick, self.trump_suit)
        return self.seat_of(leader.player_id) == partner_seat(seat)

    def cards_in_play(self) -> List[Card]:
        """Every card the hand accounts for: pile, hands, trick and captured piles."""
        cards: List[Card] = list(self.draw_pile)
        for hand in self.hands:
            cards.extend(hand)
        cards.extend(play.card for play in self.current_trick)
        for pile in self.captured:
            cards.extend(pile)
        return cards
