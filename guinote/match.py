"""Partida / coto / match bookkeeping between hands."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Tuple

from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import ScoringError
from .state import SEATS, GameState, Phase, fresh_teams


class MatchError(RuntimeError):
    """Raised when the match ladder is advanced out of order."""


class MatchSet(Enum):
    """Display label for the current stretch of a coto."""

    BUENAS = auto()
    MALAS = auto()
    BELLA = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class MatchScore:
    partidas: Tuple[int, int] = (0, 0)
    cotos: Tuple[int, int] = (0, 0)
    partidas_per_coto: int = 3
    cotos_per_match: int = 2
    current_set: MatchSet = MatchSet.BUENAS


def create_match_score(rules: RuleSet = DEFAULT_RULES) -> MatchScore:
    return MatchScore(partidas_per_coto=rules.partidas_per_coto, cotos_per_match=rules.cotos_per_match)


def _set_label(partidas: Tuple[int, int]) -> MatchSet:
    if partidas == (1, 1):
        return MatchSet.BELLA
    if partidas == (0, 0):
        return MatchSet.BUENAS
    return MatchSet.MALAS


def award_partida(match_score: MatchScore, winning_team: int) -> MatchScore:
    if winning_team not in (0, 1):
        raise ScoringError(f"Unknown team index {winning_team}.")
    if is_match_complete(match_score):
        raise MatchError("The match is already decided.")

    partidas = list(match_score.partidas)
    partidas[winning_team] += 1
    if partidas[winning_team] >= match_score.partidas_per_coto:
        cotos = list(match_score.cotos)
        cotos[winning_team] += 1
        return replace(
            match_score,
            partidas=(0, 0),
            cotos=(cotos[0], cotos[1]),
            current_set=MatchSet.BUENAS,
        )

    new_partidas = (partidas[0], partidas[1])
    return replace(match_score, partidas=new_partidas, current_set=_set_label(new_partidas))


def is_match_complete(match_score: MatchScore) -> bool:
    return match_winner(match_score) is not None


def match_winner(match_score: MatchScore) -> Optional[int]:
    for team in (0, 1):
        if match_score.cotos[team] >= match_score.cotos_per_match:
            return team
    return None


def start_new_partida(state: GameState, match_score: MatchScore) -> GameState:
    """Rotate the dealer and reset the table for the next partida.

    The previous dealer leads the new hand.
    """
    if is_match_complete(match_score):
        raise MatchError("Cannot start a partida once the match is decided.")
    dealer = (state.dealer + 1) % SEATS
    mano = state.dealer
    return replace(
        state,
        phase=Phase.DEALING,
        teams=fresh_teams(),
        hands=((),) * SEATS,
        draw_pile=(),
        trump_suit=None,
        trump_card=None,
        current_trick=(),
        current_player=mano,
        dealer=dealer,
        mano=mano,
        trick_count=0,
        last_trick_winner=None,
        captured=((), ()),
        can_cambiar7=True,
        is_vueltas=False,
        initial_scores=None,
        hand_result=None,
    )


def finish_partida(state: GameState, match_score: MatchScore) -> Tuple[GameState, MatchScore]:
    """Award a scored hand to its winner, then end the match or set up the next partida."""
    if state.phase is not Phase.SCORING or state.hand_result is None or state.hand_result.winner is None:
        raise MatchError("Only a scored hand with a winner can close a partida.")
    updated = award_partida(match_score, state.hand_result.winner)
    if is_match_complete(updated):
        return replace(state, phase=Phase.GAME_OVER), updated
    return start_new_partida(state, updated), updated
