"""Pytest fixtures for engine tests."""

from typing import Optional, Sequence

import pytest

from unomatch.engine import (
    Card,
    Color,
    Round,
    card_to_record,
    create_round_from_memento,
    identity_shuffler,
)


def round_memento(
    hands: Sequence[Sequence[Card]],
    discard: Sequence[Card],
    draw_pile: Sequence[Card] = (),
    current_color: Optional[Color] = None,
    player_in_turn: Optional[int] = 0,
    dealer: int = 0,
    direction: str = "clockwise",
    players: Optional[Sequence[str]] = None,
) -> dict:
    """Build a round memento. `discard` is given oldest first."""
    memento = {
        "players": list(players) if players else [chr(ord("A") + i) for i in range(len(hands))],
        "hands": [[card_to_record(c) for c in hand] for hand in hands],
        "drawPile": [card_to_record(c) for c in draw_pile],
        "discardPile": [card_to_record(c) for c in reversed(discard)],
        "currentDirection": direction,
        "dealer": dealer,
    }
    if current_color is not None:
        memento["currentColor"] = current_color.value
    if player_in_turn is not None:
        memento["playerInTurn"] = player_in_turn
    return memento


@pytest.fixture
def make_memento():
    """Factory for round mementos built from card objects."""
    return round_memento


@pytest.fixture
def make_round():
    """Factory for rounds in a hand-picked state (identity shuffler)."""

    def _make(*args, shuffler=identity_shuffler, **kwargs) -> Round:
        return create_round_from_memento(round_memento(*args, **kwargs), shuffler)

    return _make


def total_cards(round_: Round) -> int:
    hands = sum(len(round_.player_hand(i)) for i in range(round_.player_count))
    return hands + round_.draw_pile().size + round_.discard_pile().size


@pytest.fixture
def count_cards():
    """Count every card in a round: hands, draw pile and discard pile."""
    return total_cards
