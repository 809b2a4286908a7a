from dataclasses import replace

from guinote.cards import Card, Rank, Suit
from guinote.declarations import cambiar7, can_cambiar7, cantable_suits, cantar
from guinote.rejections import Rejection, RejectionReason
from guinote.rules_schema import RuleSet
from guinote.state import GameState, Phase, make_players
from guinote.trick import TrickCard

TRUMP_CARD = Card(Suit.OROS, Rank.AS)


def opening_state():
    hand0 = (
        Card(Suit.COPAS, Rank.REY),
        Card(Suit.COPAS, Rank.CABALLO),
        Card(Suit.OROS, Rank.REY),
        Card(Suit.OROS, Rank.CABALLO),
        Card(Suit.OROS, Rank.SIETE),
        Card(Suit.BASTOS, Rank.DOS),
    )
    hand2 = (Card(Suit.ESPADAS, Rank.REY), Card(Suit.ESPADAS, Rank.CABALLO))
    return GameState(
        players=make_players(["p0", "p1", "p2", "p3"]),
        phase=Phase.PLAYING,
        hands=(hand0, (), hand2, ()),
        draw_pile=(Card(Suit.BASTOS, Rank.TRES), TRUMP_CARD),
        trump_suit=Suit.OROS,
        trump_card=TRUMP_CARD,
        dealer=1,
        mano=0,
        current_player=0,
    )


def test_plain_cante_scores_20_and_trump_cante_40():
    state = cantar(opening_state(), "p0", Suit.COPAS)
    assert isinstance(state, GameState)
    assert state.teams[0].score == 20
    assert state.teams[0].cantes == (Suit.COPAS,)

    state = cantar(state, "p0", Suit.OROS)
    assert isinstance(state, GameState)
    assert state.teams[0].score == 60
    assert state.teams[0].card_points == 0
    assert state.teams[1].score == 0


def test_same_suit_cannot_be_declared_twice_by_the_team():
    state = cantar(opening_state(), "p0", Suit.COPAS)
    again = cantar(state, "p0", Suit.COPAS)
    assert isinstance(again, Rejection)
    assert again.reason is RejectionReason.CANTE_SUIT_ALREADY_DECLARED

    # Partner holding the same pair later in the hand is refused too.
    hand2 = (Card(Suit.COPAS, Rank.REY), Card(Suit.COPAS, Rank.CABALLO))
    later = replace(state, hands=(state.hands[0], (), hand2, ()), trick_count=2, last_trick_winner=0)
    refused = cantar(later, "p2", Suit.COPAS)
    assert isinstance(refused, Rejection)
    assert refused.reason is RejectionReason.CANTE_SUIT_ALREADY_DECLARED


def test_first_trick_cante_is_reserved_for_the_lead_player():
    refused = cantar(opening_state(), "p2", Suit.ESPADAS)
    assert isinstance(refused, Rejection)
    assert refused.reason is RejectionReason.CANTE_TIMING_VIOLATION


def test_cante_needs_the_team_to_have_won_the_last_trick():
    state = replace(opening_state(), trick_count=1, last_trick_winner=1)
    refused = cantar(state, "p0", Suit.COPAS)
    assert isinstance(refused, Rejection)
    assert refused.reason is RejectionReason.CANTE_TIMING_VIOLATION

    partner_won = replace(state, last_trick_winner=2)
    assert isinstance(cantar(partner_won, "p0", Suit.COPAS), GameState)
    assert cantable_suits(partner_won, "p2") == [Suit.ESPADAS]


def test_cante_not_allowed_mid_trick_or_without_pair():
    mid_trick = replace(opening_state(), current_trick=(TrickCard("p0", Card(Suit.BASTOS, Rank.DOS)),))
    refused = cantar(mid_trick, "p0", Suit.COPAS)
    assert isinstance(refused, Rejection)
    assert refused.reason is RejectionReason.CANTE_TIMING_VIOLATION

    missing = cantar(opening_state(), "p0", Suit.BASTOS)
    assert isinstance(missing, Rejection)
    assert missing.reason is RejectionReason.CANTE_MISSING_PAIR


def test_cantes_in_arrastre_follow_the_rules():
    state = replace(opening_state(), phase=Phase.ARRASTRE, draw_pile=(), can_cambiar7=False)
    refused = cantar(state, "p0", Suit.COPAS)
    assert isinstance(refused, Rejection)
    assert refused.reason is RejectionReason.CANTE_TIMING_VIOLATION

    allowed = cantar(state, "p0", Suit.COPAS, RuleSet(cantes_in_arrastre=True))
    assert isinstance(allowed, GameState)
    assert allowed.teams[0].score == 20


def test_cambiar7_swaps_the_seven_for_the_face_up_card():
    state = cambiar7(opening_state(), "p0")
    assert isinstance(state, GameState)
    seven = Card(Suit.OROS, Rank.SIETE)
    assert seven not in state.hands[0]
    assert TRUMP_CARD in state.hands[0]
    assert state.trump_card == seven
    assert state.draw_pile[-1] == seven
    assert state.trump_suit is Suit.OROS
    assert not state.can_cambiar7
    assert len(state.hands[0]) == 6


def test_cambiar7_is_one_shot():
    state = cambiar7(opening_state(), "p0")
    assert isinstance(state, GameState)
    again = cambiar7(state, "p0")
    assert isinstance(again, Rejection)
    assert again.reason is RejectionReason.CAMBIAR7_PRECONDITION_UNMET


def test_cambiar7_preconditions():
    base = opening_state()
    assert can_cambiar7(base, "p0")

    seven_showing = replace(
        base,
        trump_card=Card(Suit.OROS, Rank.SIETE),
        draw_pile=(Card(Suit.BASTOS, Rank.TRES), Card(Suit.OROS, Rank.SIETE)),
    )
    without_seven = replace(base, hands=(base.hands[0][:4], (), base.hands[2], ()))
    wrong_timing = replace(base, trick_count=1, last_trick_winner=3)
    empty_pile = replace(base, phase=Phase.ARRASTRE, draw_pile=())

    for state in (seven_showing, without_seven, wrong_timing, empty_pile):
        result = cambiar7(state, "p0")
        assert isinstance(result, Rejection)
        assert result.reason is RejectionReason.CAMBIAR7_PRECONDITION_UNMET
        assert not can_cambiar7(state, "p0")


def test_declarations_outside_play_are_phase_violations():
    state = replace(opening_state(), phase=Phase.SCORING)
    result = cantar(state, "p0", Suit.COPAS)
    assert isinstance(result, Rejection)
    assert result.reason is RejectionReason.PHASE_VIOLATION
    unknown = cambiar7(opening_state(), "nobody")
    assert isinstance(unknown, Rejection)
    assert unknown.reason is RejectionReason.UNKNOWN_PLAYER
