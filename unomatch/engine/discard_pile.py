"""Discard pile with an explicitly tracked active color."""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from unomatch.engine.card import Card, Color, card_color, card_to_record


class DiscardPile:
    """Played cards, oldest first. The top is the last card.

    The active color is stored separately because wilds carry no color.
    """

    def __init__(self) -> None:
        self._cards: List[Card] = []
        self._color: Optional[Color] = None

    @classmethod
    def from_cards(cls, cards: Iterable[Card], color: Optional[Color] = None) -> "DiscardPile":
        pile = cls()
        for card in cards:
            pile.add(card)
        if color is not None:
            pile._color = color
        return pile

    @property
    def size(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def current_color(self) -> Optional[Color]:
        return self._color

    def top(self) -> Optional[Card]:
        return self._cards[-1] if self._cards else None

    def add(self, card: Card, color: Optional[Color] = None) -> None:
        """Put a card on top. An explicit color overrides the card's own."""
        self._cards.append(card)
        if color is not None:
            self._color = color
        elif card_color(card) is not None:
            self._color = card_color(card)

    def take_under_top(self) -> List[Card]:
        """Remove and return every card below the top, keeping the active color."""
        under, self._cards = self._cards[:-1], self._cards[-1:]
        return under

    def copy(self) -> "DiscardPile":
        return DiscardPile.from_cards(self._cards, self._color)

    def to_memento(self) -> List[Dict[str, Any]]:
        return [card_to_record(card) for card in self._cards]
