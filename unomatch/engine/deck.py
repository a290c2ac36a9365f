"""Deck creation, dealing and shuffling."""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from unomatch.engine.card import (
    Card,
    Color,
    DrawTwoCard,
    NumberedCard,
    ReverseCard,
    SkipCard,
    WildCard,
    WildDrawFourCard,
    card_to_record,
)
from unomatch.engine.memento import parse_cards
from unomatch.engine.random_utils import Shuffler

DECK_SIZE = 108


class Deck:
    """An ordered pile of cards. Cards are dealt from the front."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: List[Card] = list(cards)

    @property
    def size(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    def deal(self) -> Optional[Card]:
        """Remove and return the front card, or None if the deck is empty."""
        if not self._cards:
            return None
        return self._cards.pop(0)

    def add(self, card: Card) -> None:
        self._cards.append(card)

    def shuffle(self, shuffler: Shuffler) -> None:
        """Let `shuffler` permute the backing list in place."""
        shuffler(self._cards)

    def filter(self, predicate: Callable[[Card], bool]) -> "Deck":
        return Deck(card for card in self._cards if predicate(card))

    def to_memento(self) -> List[Dict[str, Any]]:
        return [card_to_record(card) for card in self._cards]

    @classmethod
    def from_memento(cls, records: Any) -> "Deck":
        return cls(parse_cards(records))


def create_initial_deck() -> Deck:
    """Create a standard 108-card UNO deck in canonical order.

    - 4 colors × (one 0, two each of 1-9, Skip, Reverse, Draw Two): 76 cards
    - 4 Wild, then 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in Color:
        cards.append(NumberedCard(color, 0))
        for number in range(1, 10):
            cards.append(NumberedCard(color, number))
            cards.append(NumberedCard(color, number))
        cards.extend([SkipCard(color)] * 2)
        cards.extend([ReverseCard(color)] * 2)
        cards.extend([DrawTwoCard(color)] * 2)

    cards.extend([WildCard()] * 4)
    cards.extend([WildDrawFourCard()] * 4)

    return Deck(cards)
