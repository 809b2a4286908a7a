"""Hand scoring helpers for Guiñote."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .rules_schema import DEFAULT_RULES, RuleSet


class ScoringError(ValueError):
    """Raised when a hand is scored from inconsistent inputs."""


@dataclass(frozen=True)
class HandScoreResult:
    final_scores: Tuple[int, int]
    winner: Optional[int]
    malas_applied: bool = False
    vueltas: bool = False
    declared: bool = False

    @property
    def needs_vueltas(self) -> bool:
        return self.winner is None


def _pick_winner(totals: Sequence[int], candidates: Sequence[int], last_trick_team: Optional[int]) -> int:
    if len(candidates) == 1:
        return candidates[0]
    if totals[0] != totals[1]:
        return 0 if totals[0] > totals[1] else 1
    if last_trick_team is None:
        raise ScoringError("Tied hand without a last trick winner to break the tie.")
    return last_trick_team


def score_hand(
    *,
    scores: Sequence[int],
    card_points: Sequence[int],
    last_trick_team: Optional[int],
    initial_scores: Optional[Sequence[int]] = None,
    rules: RuleSet = DEFAULT_RULES,
) -> HandScoreResult:
    """Decide a finished hand.

    ``scores`` already include cantes and the last-trick bonus. Outside
    vueltas a team needs ``winning_score`` to take the partida; when nobody
    gets there the result has no winner and the hand goes to vueltas. In
    vueltas the carried-over totals decide. Outside vueltas, a winner facing
    fewer than ``minimum_card_points`` captured points is recorded with
    exactly ``winning_score``; vueltas totals are recorded as they stand.
    """
    if len(scores) != 2 or len(card_points) != 2:
        raise ScoringError("Exactly two teams are supported.")
    if initial_scores is not None and len(initial_scores) != 2:
        raise ScoringError("Exactly two teams are supported.")

    vueltas = initial_scores is not None
    if vueltas:
        assert initial_scores is not None
        totals = [initial_scores[0] + scores[0], initial_scores[1] + scores[1]]
        winner = _pick_winner(totals, (0, 1), last_trick_team)
    else:
        totals = [scores[0], scores[1]]
        reaching = [team for team in (0, 1) if totals[team] >= rules.winning_score]
        if not reaching:
            return HandScoreResult(final_scores=(totals[0], totals[1]), winner=None)
        winner = _pick_winner(totals, reaching, last_trick_team)

    final = list(totals)
    malas = (
        not vueltas
        and totals[winner] >= rules.winning_score
        and card_points[1 - winner] < rules.minimum_card_points
    )
    if malas:
        final[winner] = rules.winning_score

    return HandScoreResult(
        final_scores=(final[0], final[1]),
        winner=winner,
        malas_applied=malas,
        vueltas=vueltas,
    )


def declared_victory_result(
    *,
    declaring_team: int,
    combined_scores: Sequence[int],
    accepted: bool,
    rules: RuleSet = DEFAULT_RULES,
) -> HandScoreResult:
    """Result of a vueltas victory declaration; a failed one hands the partida over with ``winning_score``."""
    final = [combined_scores[0], combined_scores[1]]
    winner = declaring_team
    if not accepted:
        winner = 1 - declaring_team
        final[winner] = rules.winning_score
    return HandScoreResult(
        final_scores=(final[0], final[1]),
        winner=winner,
        vueltas=True,
        declared=True,
    )
