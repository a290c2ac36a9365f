"""Unit tests for cards, the deck and the discard pile."""

import pytest

from unomatch.engine import (
    DECK_SIZE,
    Color,
    Deck,
    DiscardPile,
    DrawTwoCard,
    MementoError,
    NumberedCard,
    ReverseCard,
    SkipCard,
    WildCard,
    WildDrawFourCard,
    card_score,
    create_initial_deck,
)


def test_create_deck_size() -> None:
    deck = create_initial_deck()
    assert deck.size == DECK_SIZE == 108
    assert len(deck) == 108


def test_create_deck_composition() -> None:
    cards = create_initial_deck().cards
    for color in Color:
        numbered = [c for c in cards if isinstance(c, NumberedCard) and c.color == color]
        assert len(numbered) == 19
        assert sum(1 for c in numbered if c.number == 0) == 1
        assert all(sum(1 for c in numbered if c.number == n) == 2 for n in range(1, 10))
        assert cards.count(SkipCard(color)) == 2
        assert cards.count(ReverseCard(color)) == 2
        assert cards.count(DrawTwoCard(color)) == 2
    assert cards.count(WildCard()) == 4
    assert cards.count(WildDrawFourCard()) == 4


def test_create_deck_canonical_order() -> None:
    cards = create_initial_deck().cards
    assert cards[0] == NumberedCard(Color.BLUE, 0)
    assert cards[1] == cards[2] == NumberedCard(Color.BLUE, 1)
    assert cards[18] == NumberedCard(Color.BLUE, 9)
    assert cards[19:25] == (
        SkipCard(Color.BLUE),
        SkipCard(Color.BLUE),
        ReverseCard(Color.BLUE),
        ReverseCard(Color.BLUE),
        DrawTwoCard(Color.BLUE),
        DrawTwoCard(Color.BLUE),
    )
    assert cards[25] == NumberedCard(Color.GREEN, 0)
    assert cards[50] == NumberedCard(Color.RED, 0)
    assert cards[75] == NumberedCard(Color.YELLOW, 0)
    assert cards[100:104] == (WildCard(),) * 4
    assert cards[104:] == (WildDrawFourCard(),) * 4


def test_deal_takes_from_front() -> None:
    deck = Deck([NumberedCard(Color.RED, 1), NumberedCard(Color.RED, 2)])
    assert deck.deal() == NumberedCard(Color.RED, 1)
    assert deck.deal() == NumberedCard(Color.RED, 2)
    assert deck.deal() is None
    assert deck.size == 0


def test_shuffle_permutes_backing_list_in_place() -> None:
    deck = create_initial_deck()
    before = deck.cards
    deck.shuffle(lambda cards: cards.reverse())
    assert deck.cards == tuple(reversed(before))


def test_filter_does_not_mutate() -> None:
    deck = create_initial_deck()
    wilds = deck.filter(lambda c: isinstance(c, (WildCard, WildDrawFourCard)))
    assert wilds.size == 8
    assert deck.size == 108


def test_memento_records() -> None:
    deck = Deck([NumberedCard(Color.GREEN, 4), SkipCard(Color.RED), WildDrawFourCard()])
    assert deck.to_memento() == [
        {"type": "NUMBERED", "color": "GREEN", "number": 4},
        {"type": "SKIP", "color": "RED"},
        {"type": "WILD DRAW"},
    ]
    restored = Deck.from_memento(deck.to_memento())
    assert restored.cards == deck.cards


@pytest.mark.parametrize(
    "record",
    [
        {"type": "NUMBERED", "color": "RED"},
        {"type": "NUMBERED", "color": "RED", "number": 10},
        {"type": "NUMBERED", "color": "RED", "number": -1},
        {"type": "SKIP"},
        {"type": "DRAW", "color": "PURPLE"},
        {"type": "WILD FOUR"},
        {"color": "RED"},
    ],
)
def test_from_memento_rejects_invalid_records(record) -> None:
    with pytest.raises(MementoError):
        Deck.from_memento([record])


def test_card_scores() -> None:
    assert card_score(NumberedCard(Color.RED, 7)) == 7
    assert card_score(NumberedCard(Color.RED, 0)) == 0
    assert card_score(SkipCard(Color.RED)) == 20
    assert card_score(ReverseCard(Color.RED)) == 20
    assert card_score(DrawTwoCard(Color.RED)) == 20
    assert card_score(WildCard()) == 50
    assert card_score(WildDrawFourCard()) == 50


def test_numbered_card_rejects_bad_number() -> None:
    with pytest.raises(ValueError):
        NumberedCard(Color.RED, 12)


def test_discard_pile_tracks_active_color() -> None:
    pile = DiscardPile()
    assert pile.top() is None
    assert pile.current_color is None

    pile.add(NumberedCard(Color.RED, 3))
    assert pile.current_color == Color.RED

    pile.add(WildCard(), Color.GREEN)
    assert pile.top() == WildCard()
    assert pile.current_color == Color.GREEN

    pile.add(SkipCard(Color.BLUE))
    assert pile.current_color == Color.BLUE
    assert pile.size == 3


def test_discard_pile_take_under_top() -> None:
    pile = DiscardPile.from_cards(
        [NumberedCard(Color.RED, 3), SkipCard(Color.RED), WildCard()],
        Color.YELLOW,
    )
    under = pile.take_under_top()
    assert under == [NumberedCard(Color.RED, 3), SkipCard(Color.RED)]
    assert pile.cards == (WildCard(),)
    assert pile.current_color == Color.YELLOW


def test_discard_pile_memento_is_oldest_first() -> None:
    pile = DiscardPile.from_cards([NumberedCard(Color.RED, 3), WildCard()], Color.RED)
    assert pile.to_memento() == [
        {"type": "NUMBERED", "color": "RED", "number": 3},
        {"type": "WILD"},
    ]
