"""UNO rules: table limits, seat arithmetic and card legality."""

from typing import Optional, Sequence, assert_never

from unomatch.engine.card import (
    Card,
    Color,
    DrawTwoCard,
    NumberedCard,
    ReverseCard,
    SkipCard,
    WildCard,
    WildDrawFourCard,
    card_color,
)

MIN_PLAYERS = 2
MAX_PLAYERS = 10
DEFAULT_CARDS_PER_PLAYER = 7
DEFAULT_TARGET_SCORE = 500
DEFAULT_PLAYERS = ("A", "B")

CLOCKWISE = 1
COUNTERCLOCKWISE = -1

UNO_PENALTY_CARDS = 4


def seat_after(seat: int, direction: int, player_count: int, steps: int = 1) -> int:
    """Seat reached by moving `steps` seats from `seat` in `direction`."""
    return (seat + direction * steps) % player_count


def direction_label(direction: int) -> str:
    return "clockwise" if direction == CLOCKWISE else "counterclockwise"


def direction_from_label(label: str) -> int:
    return CLOCKWISE if label == "clockwise" else COUNTERCLOCKWISE


def is_legal_play(
    hand: Sequence[Card],
    index: int,
    top: Optional[Card],
    active_color: Optional[Color],
) -> bool:
    """Check whether hand[index] may be played on the discard pile.

    A Wild Draw Four is only legal when no other card in the hand matches
    the active color (house rule: the restriction replaces the challenge).
    """
    if not 0 <= index < len(hand) or top is None:
        return False
    card = hand[index]

    if isinstance(card, WildCard):
        return True
    if isinstance(card, WildDrawFourCard):
        if active_color is None:
            return True
        return not any(
            card_color(other) == active_color
            for i, other in enumerate(hand)
            if i != index
        )

    if active_color is not None and card.color == active_color:
        return True
    if isinstance(card, NumberedCard):
        if isinstance(top, NumberedCard) and card.number == top.number:
            return True
        return card.color == card_color(top)
    if isinstance(card, (SkipCard, ReverseCard, DrawTwoCard)):
        return type(top) is type(card) or card.color == card_color(top)
    assert_never(card)
