"""Validation schema for Guiñote rules configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, Field, validator


class RuleSet(BaseModel):
    hand_size: int = Field(6, ge=1, description="Cards dealt to each player at the start of a hand.")
    winning_score: int = Field(101, gt=0, description="Hand score needed to take a partida.")
    minimum_card_points: int = Field(
        30,
        ge=0,
        description="Captured card points a team needs to avoid the 30-malas rule.",
    )
    last_trick_bonus: int = Field(10, ge=0, description="Bonus for the team taking the final trick (diez de últimas).")
    cante_points: int = Field(20, gt=0, description="Points for declaring Rey and Caballo of a plain suit.")
    trump_cante_points: int = Field(40, gt=0, description="Points for declaring Rey and Caballo of trumps.")
    partidas_per_coto: int = Field(3, gt=0, description="Partidas a team must win to take a coto.")
    cotos_per_match: int = Field(2, gt=0, description="Cotos a team must win to take the match.")
    follow_suit_in_draw_phase: bool = Field(
        True,
        description="Whether players must follow the led suit while the draw pile has cards.",
    )
    cantes_in_arrastre: bool = Field(False, description="Whether cantes remain available once the pile is empty.")
    failed_victory_declaration: Literal["reject", "forfeit"] = Field(
        "reject",
        description="What happens when a team declares victory during vueltas without the points.",
    )

    @validator("hand_size")
    def fits_the_deck(cls, value: int) -> int:
        # Four hands plus at least the face-up trump card.
        if value * 4 >= 40:
            raise ValueError("Hands are too large for a 40-card deck.")
        return value

    @validator("trump_cante_points")
    def trump_cante_outscores_plain(cls, value: int, values: dict) -> int:
        plain = values.get("cante_points")
        if plain is not None and value < plain:
            raise ValueError("Trump cante cannot be worth less than a plain cante.")
        return value


DEFAULT_RULES = RuleSet()


def load_rules(path: Union[str, Path]) -> RuleSet:
    """Build a RuleSet from a JSON file; missing keys keep their defaults."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return RuleSet(**payload)
