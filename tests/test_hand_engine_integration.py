from collections import Counter
from random import Random

from guinote.actions import Cambiar7, Cantar, PlayCard
from guinote.cards import Card, Rank, Suit
from guinote.deck import build_deck
from guinote.game import apply_action, deal, legal_plays, new_game, play_card
from guinote.rejections import Rejection, RejectionReason
from guinote.state import GameState, Phase

PLAYERS = ["p0", "p1", "p2", "p3"]


def dealt_state():
    return deal(new_game(PLAYERS), deck=build_deck())


def assert_conserved(state):
    cards = state.cards_in_play()
    assert Counter(cards) == Counter(build_deck())


def autoplay_hand(state):
    while state.phase in (Phase.PLAYING, Phase.ARRASTRE):
        player_id = state.current_player_id
        card = legal_plays(state, player_id)[0]
        state = play_card(state, player_id, card.card_id)
        assert isinstance(state, GameState)
        if state.phase in (Phase.PLAYING, Phase.ARRASTRE, Phase.SCORING):
            assert_conserved(state)
    return state


def test_deal_starts_with_the_mano_and_reveals_trump():
    state = dealt_state()
    assert state.phase is Phase.PLAYING
    assert state.dealer == 1 and state.mano == 0 and state.current_player == 0
    assert [len(hand) for hand in state.hands] == [6, 6, 6, 6]
    assert len(state.draw_pile) == 16
    assert state.trump_card == Card(Suit.ESPADAS, Rank.CINCO)
    assert state.draw_pile[-1] == state.trump_card
    assert state.trump_suit is Suit.ESPADAS
    # Counter-clockwise: the second packet goes to seat 3.
    assert state.hands[3][0] == Card(Suit.OROS, Rank.SIETE)
    assert_conserved(state)


def test_first_trick_resolution_and_draw_back():
    state = dealt_state()
    for player_id, card_id in (("p0", "oros_2"), ("p3", "oros_7"), ("p2", "copas_4"), ("p1", "espadas_2")):
        state = apply_action(state, PlayCard(player_id, card_id))
        assert isinstance(state, GameState)

    assert state.current_trick == ()
    assert state.last_trick_winner == 1
    assert state.current_player == 1
    assert state.trick_count == 1
    assert state.teams[1].card_points == 0
    # Winner draws first, then play continues counter-clockwise.
    assert Card(Suit.ESPADAS, Rank.SEIS) in state.hands[1]
    assert Card(Suit.ESPADAS, Rank.SIETE) in state.hands[0]
    assert Card(Suit.ESPADAS, Rank.SOTA) in state.hands[3]
    assert Card(Suit.ESPADAS, Rank.CABALLO) in state.hands[2]
    assert [len(hand) for hand in state.hands] == [6, 6, 6, 6]
    assert len(state.draw_pile) == 12
    assert_conserved(state)

    # Seat 0 holds the trump seven but its team lost the trick.
    refused = apply_action(state, Cambiar7("p0"))
    assert isinstance(refused, Rejection)
    assert refused.reason is RejectionReason.CAMBIAR7_PRECONDITION_UNMET

    sung = apply_action(state, Cantar("p1", Suit.COPAS))
    assert isinstance(sung, GameState)
    assert sung.teams[1].score == 20


def test_wrong_turn_and_missing_card_are_rejected_without_change():
    state = dealt_state()
    wrong = play_card(state, "p1", "copas_11")
    assert isinstance(wrong, Rejection)
    assert wrong.reason is RejectionReason.WRONG_TURN

    missing = play_card(state, "p0", "bastos_1")
    assert isinstance(missing, Rejection)
    assert missing.reason is RejectionReason.CARD_NOT_IN_HAND

    assert state == dealt_state()


def test_draw_phase_follow_rule_is_enforced_through_the_state():
    state = play_card(dealt_state(), "p0", "oros_2")
    assert isinstance(state, GameState)
    refused = play_card(state, "p3", "copas_1")
    assert isinstance(refused, Rejection)
    assert refused.reason is RejectionReason.MUST_FOLLOW
    assert [card.rank for card in legal_plays(state, "p3")] == [Rank.SIETE, Rank.SOTA, Rank.CABALLO, Rank.REY]
    assert legal_plays(state, "p0") == []


def test_full_hand_conserves_cards_and_points():
    state = autoplay_hand(dealt_state())

    assert state.phase in (Phase.SCORING, Phase.DEALING)
    assert state.hand_result is not None
    if state.phase is Phase.SCORING:
        assert state.teams[0].card_points + state.teams[1].card_points == 120
        assert state.teams[0].score + state.teams[1].score == 130
        assert state.hand_result.winner is not None
        assert state.trick_count == 10
    else:
        assert state.is_vueltas
        assert sum(state.initial_scores) == 130


def test_arrastre_starts_when_the_pile_runs_out():
    state = dealt_state()
    while state.draw_pile:
        player_id = state.current_player_id
        state = play_card(state, player_id, legal_plays(state, player_id)[0].card_id)
        assert isinstance(state, GameState)
    assert state.phase is Phase.ARRASTRE
    assert state.trick_count == 4
    assert not state.can_cambiar7
    assert [len(hand) for hand in state.hands] == [6, 6, 6, 6]


def test_seeded_deals_replay_identically():
    first = deal(new_game(PLAYERS), rng=Random(5))
    second = deal(new_game(PLAYERS), rng=Random(5))
    assert first == second
    assert autoplay_hand(first) == autoplay_hand(second)
