"""Convenience service layer for UI, transport and bot callers.

The engine is pure; this facade owns one match (state, match score and RNG),
serialises actions with a lock, advances through dealing and partidas, and
builds redacted per-player views.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional, Sequence

from .actions import Action, Cambiar7, Cantar, DeclareVictory, PlayCard
from .cards import Card, Suit, card_label, card_strength, serialize_card
from .declarations import can_cambiar7, can_declare_victory, cantable_suits, victory_thresholds
from .game import apply_action, deal, legal_plays, new_game
from .match import MatchScore, create_match_score, finish_partida, match_winner
from .rejections import Rejection, is_rejection
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import HandScoreResult
from .state import GameState, Phase

logger = logging.getLogger(__name__)


class ActionRejected(RuntimeError):
    """Raised by the service when the engine refuses an action."""

    def __init__(self, rejection: Rejection) -> None:
        super().__init__(rejection.message)
        self.rejection = rejection


@dataclass
class TrickPlayView:
    player_id: str
    card: dict
    label: str


@dataclass
class PlayerView:
    """What one player may see; other hands are reduced to their sizes."""

    player_id: str
    phase: str
    current_player: str
    dealer: str
    mano: str
    trump_card: Optional[dict]
    hand: list[dict]
    hand_labels: list[str]
    legal_plays: list[dict]
    cantable_suits: list[str]
    can_cambiar7: bool
    can_declare_victory: bool
    hand_sizes: dict[str, int]
    draw_pile_size: int
    trick: list[TrickPlayView]
    scores: list[int]
    card_points: list[int]
    cantes: list[list[str]]
    is_vueltas: bool
    initial_scores: Optional[list[int]]
    victory_thresholds: Optional[list[int]]
    partidas: list[int]
    cotos: list[int]
    current_set: str
    match_winner: Optional[int]


@dataclass
class MatchService:
    """Own and advance a single match."""

    player_ids: Sequence[str]
    seed: Optional[int] = None
    rules: RuleSet = field(default_factory=lambda: DEFAULT_RULES)
    dealer: int = 1
    bots: Sequence[str] = ()
    rng: Random = field(init=False)
    state: GameState = field(init=False)
    match_score: MatchScore = field(init=False)
    hand_history: List[HandScoreResult] = field(default_factory=list, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)
        self.match_score = create_match_score(self.rules)
        self.state = new_game(self.player_ids, dealer=self.dealer, bots=self.bots)
        self._deal()

    # Actions -----------------------------------------------------------

    def submit(self, action: Action) -> GameState:
        """Apply one action; raise ActionRejected when the engine refuses it."""
        with self._lock:
            result = apply_action(self.state, action, self.rules)
            if is_rejection(result):
                assert isinstance(result, Rejection)
                logger.info("Rejected %s: %s (%s)", action, result.reason, result.message)
                raise ActionRejected(result)
            assert isinstance(result, GameState)
            self.state = result
            self._advance()
            return self.state

    def play_card(self, player_id: str, card_id: str) -> GameState:
        return self.submit(PlayCard(player_id, card_id))

    def cantar(self, player_id: str, suit: Suit) -> GameState:
        return self.submit(Cantar(player_id, suit))

    def cambiar7(self, player_id: str) -> GameState:
        return self.submit(Cambiar7(player_id))

    def declare_victory(self, player_id: str) -> GameState:
        return self.submit(DeclareVictory(player_id))

    def timeout_action(self, player_id: str) -> Action:
        """Default move for a player who ran out of time: the cheapest legal card."""
        plays = legal_plays(self.state, player_id, self.rules)
        if not plays:
            raise RuntimeError(f"{player_id} has no card to play.")
        return PlayCard(player_id, lowest_value_card(plays).card_id)

    def is_complete(self) -> bool:
        return self.state.phase is Phase.GAME_OVER

    # Views -------------------------------------------------------------

    def get_view(self, player_id: str) -> PlayerView:
        state = self.state
        seat = state.seat_of(player_id)
        if seat is None:
            raise KeyError(player_id)
        hand = list(state.hands[seat])
        plays = legal_plays(state, player_id, self.rules)
        thresholds = victory_thresholds(state, self.rules)
        return PlayerView(
            player_id=player_id,
            phase=str(state.phase),
            current_player=state.current_player_id,
            dealer=state.players[state.dealer].id,
            mano=state.players[state.mano].id,
            trump_card=serialize_card(state.trump_card) if state.trump_card else None,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            legal_plays=[serialize_card(card) for card in plays],
            cantable_suits=[str(suit) for suit in cantable_suits(state, player_id, self.rules)],
            can_cambiar7=can_cambiar7(state, player_id),
            can_declare_victory=can_declare_victory(state, player_id, self.rules),
            hand_sizes={player.id: len(state.hands[idx]) for idx, player in enumerate(state.players)},
            draw_pile_size=len(state.draw_pile),
            trick=[
                TrickPlayView(player_id=play.player_id, card=serialize_card(play.card), label=card_label(play.card))
                for play in state.current_trick
            ],
            scores=[team.score for team in state.teams],
            card_points=[team.card_points for team in state.teams],
            cantes=[[str(suit) for suit in team.cantes] for team in state.teams],
            is_vueltas=state.is_vueltas,
            initial_scores=list(state.initial_scores) if state.initial_scores else None,
            victory_thresholds=list(thresholds) if thresholds else None,
            partidas=list(self.match_score.partidas),
            cotos=list(self.match_score.cotos),
            current_set=str(self.match_score.current_set),
            match_winner=match_winner(self.match_score),
        )

    # Helpers -----------------------------------------------------------

    def _deal(self) -> None:
        self.state = deal(self.state, rng=self.rng, rules=self.rules)
        logger.debug(
            "Dealt hand: dealer=%s trump=%s vueltas=%s",
            self.state.dealer,
            self.state.trump_card,
            self.state.is_vueltas,
        )

    def _advance(self) -> None:
        if self.state.phase is Phase.DEALING:
            # Nobody reached the winning score: vueltas.
            if self.state.hand_result is not None:
                self.hand_history.append(self.state.hand_result)
            logger.info("Vueltas with carried scores %s", self.state.initial_scores)
            self._deal()
            return
        if self.state.phase is not Phase.SCORING:
            return

        result = self.state.hand_result
        assert result is not None
        self.hand_history.append(result)
        self.state, self.match_score = finish_partida(self.state, self.match_score)
        logger.info(
            "Partida to team %s (%s); partidas=%s cotos=%s",
            result.winner,
            result.final_scores,
            self.match_score.partidas,
            self.match_score.cotos,
        )
        if self.state.phase is Phase.GAME_OVER:
            logger.info("Match won by team %s", match_winner(self.match_score))
            return
        self._deal()


def lowest_value_card(cards: Sequence[Card]) -> Card:
    """Cheapest card by points, then by trick-taking strength."""
    return min(cards, key=lambda card: (card.point_value(), card_strength(card)))
