"""Plain-dict snapshots of engine values for persistence and transport.

Documents coming back from storage are loosely typed; they are validated
here, at the boundary, before being turned back into engine values.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError, validator

from .cards import Card, Rank, Suit, deserialize_card, serialize_card
from .deck import DECK_SIZE
from .match import MatchScore, MatchSet
from .scoring import HandScoreResult
from .state import SEATS, GameState, Phase, Player, Team
from .trick import TrickCard


class SnapshotError(ValueError):
    """Raised when a persisted document cannot be turned into engine values."""


def _enum_name(enum_cls: Any, value: str) -> str:
    normalized = value.upper()
    if normalized not in enum_cls.__members__:
        raise ValueError(f"Unknown {enum_cls.__name__.lower()}: {value!r}")
    return normalized


class CardModel(BaseModel):
    suit: str
    value: int

    @validator("suit")
    def known_suit(cls, value: str) -> str:
        return _enum_name(Suit, value).lower()

    @validator("value")
    def known_value(cls, value: int) -> int:
        if value not in {rank.value for rank in Rank}:
            raise ValueError(f"No card with value {value} in a Spanish deck.")
        return value

    def to_card(self) -> Card:
        return deserialize_card({"suit": self.suit, "value": self.value})


class PlayerModel(BaseModel):
    id: str
    team: int
    is_bot: bool = False


class TeamModel(BaseModel):
    id: str
    score: int = 0
    card_points: int = 0
    cantes: List[str] = []

    @validator("cantes", each_item=True)
    def known_cante_suit(cls, value: str) -> str:
        return _enum_name(Suit, value).lower()


class TrickCardModel(BaseModel):
    player_id: str
    card: CardModel


class HandResultModel(BaseModel):
    final_scores: Tuple[int, int]
    winner: Optional[int] = None
    malas_applied: bool = False
    vueltas: bool = False
    declared: bool = False


class GameDocument(BaseModel):
    phase: str
    players: List[PlayerModel]
    teams: List[TeamModel]
    hands: List[List[CardModel]]
    draw_pile: List[CardModel] = []
    trump_card: Optional[CardModel] = None
    current_trick: List[TrickCardModel] = []
    current_player: int = 0
    dealer: int = 1
    mano: int = 0
    trick_count: int = 0
    last_trick_winner: Optional[int] = None
    captured: List[List[CardModel]] = [[], []]
    can_cambiar7: bool = True
    is_vueltas: bool = False
    initial_scores: Optional[Tuple[int, int]] = None
    hand_result: Optional[HandResultModel] = None

    @validator("phase")
    def known_phase(cls, value: str) -> str:
        return _enum_name(Phase, value)

    @validator("players", "hands")
    def one_per_seat(cls, value: list) -> list:
        if len(value) != SEATS:
            raise ValueError(f"Expected {SEATS} entries, got {len(value)}.")
        return value

    @validator("teams", "captured")
    def one_per_team(cls, value: list) -> list:
        if len(value) != 2:
            raise ValueError(f"Expected 2 entries, got {len(value)}.")
        return value

    @validator("current_player", "dealer", "mano", "last_trick_winner")
    def valid_seat(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not 0 <= value < SEATS:
            raise ValueError(f"Seat {value} is outside the table.")
        return value


class MatchScoreDocument(BaseModel):
    partidas: Tuple[int, int] = (0, 0)
    cotos: Tuple[int, int] = (0, 0)
    partidas_per_coto: int = 3
    cotos_per_match: int = 2
    current_set: str = "buenas"

    @validator("current_set")
    def known_set(cls, value: str) -> str:
        return _enum_name(MatchSet, value)


def dump_state(state: GameState) -> dict[str, Any]:
    result = state.hand_result
    return {
        "phase": str(state.phase),
        "players": [{"id": p.id, "team": p.team, "is_bot": p.is_bot} for p in state.players],
        "teams": [
            {
                "id": team.id,
                "score": team.score,
                "card_points": team.card_points,
                "cantes": [str(suit) for suit in team.cantes],
            }
            for team in state.teams
        ],
        "hands": [[serialize_card(card) for card in hand] for hand in state.hands],
        "draw_pile": [serialize_card(card) for card in state.draw_pile],
        "trump_card": serialize_card(state.trump_card) if state.trump_card else None,
        "current_trick": [
            {"player_id": play.player_id, "card": serialize_card(play.card)} for play in state.current_trick
        ],
        "current_player": state.current_player,
        "dealer": state.dealer,
        "mano": state.mano,
        "trick_count": state.trick_count,
        "last_trick_winner": state.last_trick_winner,
        "captured": [[serialize_card(card) for card in pile] for pile in state.captured],
        "can_cambiar7": state.can_cambiar7,
        "is_vueltas": state.is_vueltas,
        "initial_scores": list(state.initial_scores) if state.initial_scores else None,
        "hand_result": None
        if result is None
        else {
            "final_scores": list(result.final_scores),
            "winner": result.winner,
            "malas_applied": result.malas_applied,
            "vueltas": result.vueltas,
            "declared": result.declared,
        },
    }


def _cards(models: List[CardModel]) -> Tuple[Card, ...]:
    return tuple(model.to_card() for model in models)


def load_state(payload: Mapping[str, Any]) -> GameState:
    try:
        doc = GameDocument(**payload)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid game document: {exc}") from exc

    trump_card = doc.trump_card.to_card() if doc.trump_card else None
    result = doc.hand_result
    try:
        state = GameState(
            players=tuple(Player(id=p.id, team=p.team, is_bot=p.is_bot) for p in doc.players),
            teams=tuple(  # type: ignore[arg-type]
                Team(
                    id=team.id,
                    score=team.score,
                    card_points=team.card_points,
                    cantes=tuple(Suit[name.upper()] for name in team.cantes),
                )
                for team in doc.teams
            ),
            phase=Phase[doc.phase],
            hands=tuple(_cards(hand) for hand in doc.hands),
            draw_pile=_cards(doc.draw_pile),
            trump_suit=trump_card.suit if trump_card else None,
            trump_card=trump_card,
            current_trick=tuple(TrickCard(play.player_id, play.card.to_card()) for play in doc.current_trick),
            current_player=doc.current_player,
            dealer=doc.dealer,
            mano=doc.mano,
            trick_count=doc.trick_count,
            last_trick_winner=doc.last_trick_winner,
            captured=(_cards(doc.captured[0]), _cards(doc.captured[1])),
            can_cambiar7=doc.can_cambiar7,
            is_vueltas=doc.is_vueltas,
            initial_scores=doc.initial_scores,
            hand_result=None
            if result is None
            else HandScoreResult(
                final_scores=result.final_scores,
                winner=result.winner,
                malas_applied=result.malas_applied,
                vueltas=result.vueltas,
                declared=result.declared,
            ),
        )
    except ValueError as exc:
        raise SnapshotError(str(exc)) from exc

    cards = state.cards_in_play()
    if len(set(cards)) != len(cards):
        raise SnapshotError("Game document holds the same card twice.")
    if state.phase in (Phase.PLAYING, Phase.ARRASTRE) and len(cards) != DECK_SIZE:
        raise SnapshotError(f"An active hand must account for all {DECK_SIZE} cards, found {len(cards)}.")
    return state


def dump_match_score(match_score: MatchScore) -> dict[str, Any]:
    return {
        "partidas": list(match_score.partidas),
        "cotos": list(match_score.cotos),
        "partidas_per_coto": match_score.partidas_per_coto,
        "cotos_per_match": match_score.cotos_per_match,
        "current_set": str(match_score.current_set),
    }


def load_match_score(payload: Mapping[str, Any]) -> MatchScore:
    try:
        doc = MatchScoreDocument(**payload)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid match score document: {exc}") from exc
    return MatchScore(
        partidas=doc.partidas,
        cotos=doc.cotos,
        partidas_per_coto=doc.partidas_per_coto,
        cotos_per_match=doc.cotos_per_match,
        current_set=MatchSet[doc.current_set],
    )
