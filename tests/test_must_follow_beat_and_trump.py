from guinote.cards import Card, Rank, Suit
from guinote.mechanics import is_legal_play, legal_moves, play_violation
from guinote.rejections import RejectionReason
from guinote.state import Phase
from guinote.trick import TrickCard


def trick_of(*cards):
    return tuple(TrickCard(f"p{idx}", card) for idx, card in enumerate(cards))


def test_leader_may_play_anything():
    hand = [Card(Suit.OROS, Rank.DOS), Card(Suit.BASTOS, Rank.AS)]
    assert legal_moves(hand, (), Suit.BASTOS, Phase.ARRASTRE) == [
        Card(Suit.OROS, Rank.DOS),
        Card(Suit.BASTOS, Rank.AS),
    ]


def test_must_follow_while_drawing():
    trick = trick_of(Card(Suit.OROS, Rank.CUATRO))
    hand = [Card(Suit.OROS, Rank.DOS), Card(Suit.COPAS, Rank.AS)]

    assert play_violation(Card(Suit.COPAS, Rank.AS), hand, trick, Suit.BASTOS, Phase.PLAYING) is (
        RejectionReason.MUST_FOLLOW
    )
    # Beating is not required before arrastre.
    assert legal_moves(hand, trick, Suit.BASTOS, Phase.PLAYING) == [Card(Suit.OROS, Rank.DOS)]


def test_free_discard_while_drawing_when_void():
    trick = trick_of(Card(Suit.OROS, Rank.CUATRO))
    hand = [Card(Suit.COPAS, Rank.AS), Card(Suit.BASTOS, Rank.DOS)]
    assert is_legal_play(Card(Suit.COPAS, Rank.AS), hand, trick, Suit.BASTOS, Phase.PLAYING)
    assert is_legal_play(Card(Suit.BASTOS, Rank.DOS), hand, trick, Suit.BASTOS, Phase.PLAYING)


def test_draw_phase_freedom_can_be_enabled():
    trick = trick_of(Card(Suit.OROS, Rank.CUATRO))
    hand = [Card(Suit.OROS, Rank.DOS), Card(Suit.COPAS, Rank.AS)]
    moves = legal_moves(hand, trick, Suit.BASTOS, Phase.PLAYING, follow_suit_in_draw_phase=False)
    assert set(moves) == set(hand)


def test_arrastre_must_beat_when_able():
    trick = trick_of(Card(Suit.OROS, Rank.CABALLO))
    hand = [Card(Suit.OROS, Rank.AS), Card(Suit.OROS, Rank.DOS), Card(Suit.COPAS, Rank.TRES)]

    assert legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE) == [Card(Suit.OROS, Rank.AS)]
    assert play_violation(Card(Suit.OROS, Rank.DOS), hand, trick, Suit.BASTOS, Phase.ARRASTRE) is (
        RejectionReason.MUST_BEAT
    )
    assert play_violation(Card(Suit.COPAS, Rank.TRES), hand, trick, Suit.BASTOS, Phase.ARRASTRE) is (
        RejectionReason.MUST_FOLLOW
    )


def test_arrastre_any_follow_when_nothing_beats():
    trick = trick_of(Card(Suit.OROS, Rank.AS))
    hand = [Card(Suit.OROS, Rank.DOS), Card(Suit.OROS, Rank.REY)]
    assert set(legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE)) == set(hand)


def test_arrastre_follow_cannot_beat_a_trump():
    trick = trick_of(Card(Suit.OROS, Rank.SOTA), Card(Suit.BASTOS, Rank.DOS))
    hand = [Card(Suit.OROS, Rank.AS), Card(Suit.OROS, Rank.CUATRO), Card(Suit.BASTOS, Rank.AS)]
    assert set(legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE)) == {
        Card(Suit.OROS, Rank.AS),
        Card(Suit.OROS, Rank.CUATRO),
    }


def test_arrastre_must_trump_when_void():
    trick = trick_of(Card(Suit.OROS, Rank.SOTA))
    hand = [Card(Suit.BASTOS, Rank.DOS), Card(Suit.COPAS, Rank.AS)]
    assert legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE) == [Card(Suit.BASTOS, Rank.DOS)]
    assert play_violation(Card(Suit.COPAS, Rank.AS), hand, trick, Suit.BASTOS, Phase.ARRASTRE) is (
        RejectionReason.MUST_TRUMP
    )


def test_arrastre_must_overtrump_when_able():
    trick = trick_of(Card(Suit.OROS, Rank.SOTA), Card(Suit.BASTOS, Rank.CUATRO))
    hand = [Card(Suit.BASTOS, Rank.DOS), Card(Suit.BASTOS, Rank.AS), Card(Suit.COPAS, Rank.AS)]
    assert legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE) == [Card(Suit.BASTOS, Rank.AS)]
    assert play_violation(Card(Suit.BASTOS, Rank.DOS), hand, trick, Suit.BASTOS, Phase.ARRASTRE) is (
        RejectionReason.MUST_BEAT
    )


def test_arrastre_any_card_when_void_of_suit_and_trumps():
    trick = trick_of(Card(Suit.OROS, Rank.SOTA))
    hand = [Card(Suit.COPAS, Rank.AS), Card(Suit.ESPADAS, Rank.DOS)]
    assert set(legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE)) == set(hand)


def test_partner_winning_exempts_from_beating_but_not_following():
    trick = trick_of(Card(Suit.OROS, Rank.CABALLO))
    hand = [Card(Suit.OROS, Rank.AS), Card(Suit.OROS, Rank.DOS), Card(Suit.COPAS, Rank.TRES)]
    moves = legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE, partner_winning=True)
    # Overtaking the partner (montarse) stays legal.
    assert set(moves) == {Card(Suit.OROS, Rank.AS), Card(Suit.OROS, Rank.DOS)}


def test_partner_winning_exempts_from_trumping():
    trick = trick_of(Card(Suit.OROS, Rank.SOTA))
    hand = [Card(Suit.BASTOS, Rank.DOS), Card(Suit.COPAS, Rank.AS)]
    moves = legal_moves(hand, trick, Suit.BASTOS, Phase.ARRASTRE, partner_winning=True)
    assert set(moves) == set(hand)


def test_card_must_be_held():
    trick = trick_of(Card(Suit.OROS, Rank.SOTA))
    assert play_violation(Card(Suit.OROS, Rank.AS), [Card(Suit.OROS, Rank.DOS)], trick, Suit.BASTOS, Phase.PLAYING) is (
        RejectionReason.CARD_NOT_IN_HAND
    )
