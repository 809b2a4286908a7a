"""Rejection values returned for illegal player actions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class RejectionReason(Enum):
    WRONG_TURN = auto()
    UNKNOWN_PLAYER = auto()
    PHASE_VIOLATION = auto()
    CARD_NOT_IN_HAND = auto()
    MUST_FOLLOW = auto()
    MUST_BEAT = auto()
    MUST_TRUMP = auto()
    CANTE_TIMING_VIOLATION = auto()
    CANTE_MISSING_PAIR = auto()
    CANTE_SUIT_ALREADY_DECLARED = auto()
    CAMBIAR7_PRECONDITION_UNMET = auto()
    VICTORY_DECLARATION_PRECONDITION_UNMET = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Rejection:
    """A refused action. The state it was checked against is left untouched."""

    reason: RejectionReason
    message: str = ""


def reject(reason: RejectionReason, message: str = "") -> Rejection:
    return Rejection(reason=reason, message=message or reason.name.replace("_", " ").capitalize())


def is_rejection(value: object) -> bool:
    return isinstance(value, Rejection)
