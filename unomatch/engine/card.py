"""Card and Color types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union, assert_never


class Color(str, Enum):
    """Card colors, in canonical deck order."""

    BLUE = "BLUE"
    GREEN = "GREEN"
    RED = "RED"
    YELLOW = "YELLOW"


class CardType(str, Enum):
    """Card kinds. The values are the tags used in mementos."""

    NUMBERED = "NUMBERED"
    SKIP = "SKIP"
    REVERSE = "REVERSE"
    DRAW = "DRAW"
    WILD = "WILD"
    WILD_DRAW = "WILD DRAW"


@dataclass(frozen=True)
class NumberedCard:
    color: Color
    number: int

    type: ClassVar[CardType] = CardType.NUMBERED

    def __post_init__(self) -> None:
        if not 0 <= self.number <= 9:
            raise ValueError(f"Invalid card number: {self.number}")

    def __str__(self) -> str:
        return f"{self.color.value} {self.number}"


@dataclass(frozen=True)
class SkipCard:
    color: Color

    type: ClassVar[CardType] = CardType.SKIP

    def __str__(self) -> str:
        return f"{self.color.value} SKIP"


@dataclass(frozen=True)
class ReverseCard:
    color: Color

    type: ClassVar[CardType] = CardType.REVERSE

    def __str__(self) -> str:
        return f"{self.color.value} REVERSE"


@dataclass(frozen=True)
class DrawTwoCard:
    color: Color

    type: ClassVar[CardType] = CardType.DRAW

    def __str__(self) -> str:
        return f"{self.color.value} DRAW TWO"


@dataclass(frozen=True)
class WildCard:
    type: ClassVar[CardType] = CardType.WILD

    def __str__(self) -> str:
        return "WILD"


@dataclass(frozen=True)
class WildDrawFourCard:
    type: ClassVar[CardType] = CardType.WILD_DRAW

    def __str__(self) -> str:
        return "WILD DRAW FOUR"


Card = Union[
    NumberedCard,
    SkipCard,
    ReverseCard,
    DrawTwoCard,
    WildCard,
    WildDrawFourCard,
]

ACTION_CARD_POINTS = 20
WILD_CARD_POINTS = 50


def is_wild(card: Card) -> bool:
    return isinstance(card, (WildCard, WildDrawFourCard))


def card_color(card: Card) -> Optional[Color]:
    """Return the card's own color, or None for wilds."""
    if isinstance(card, (NumberedCard, SkipCard, ReverseCard, DrawTwoCard)):
        return card.color
    if isinstance(card, (WildCard, WildDrawFourCard)):
        return None
    assert_never(card)


def card_score(card: Card) -> int:
    """Points a card left in hand is worth to the round winner."""
    if isinstance(card, NumberedCard):
        return card.number
    if isinstance(card, (SkipCard, ReverseCard, DrawTwoCard)):
        return ACTION_CARD_POINTS
    if isinstance(card, (WildCard, WildDrawFourCard)):
        return WILD_CARD_POINTS
    assert_never(card)


def card_to_record(card: Card) -> Dict[str, Any]:
    """Plain-data form of a card: {"type", "color"?, "number"?}."""
    if isinstance(card, NumberedCard):
        return {"type": card.type.value, "color": card.color.value, "number": card.number}
    if isinstance(card, (SkipCard, ReverseCard, DrawTwoCard)):
        return {"type": card.type.value, "color": card.color.value}
    if isinstance(card, (WildCard, WildDrawFourCard)):
        return {"type": card.type.value}
    assert_never(card)
