"""Game engine for UNO."""

from unomatch.engine.card import (
    Card,
    CardType,
    Color,
    DrawTwoCard,
    NumberedCard,
    ReverseCard,
    SkipCard,
    WildCard,
    WildDrawFourCard,
    card_color,
    card_score,
    card_to_record,
    is_wild,
)
from unomatch.engine.deck import DECK_SIZE, Deck, create_initial_deck
from unomatch.engine.discard_pile import DiscardPile
from unomatch.engine.errors import (
    ConfigurationError,
    IllegalActionError,
    MementoError,
    UnoError,
)
from unomatch.engine.game import Game, create_game, create_game_from_memento
from unomatch.engine.random_utils import (
    Randomizer,
    Shuffler,
    identity_shuffler,
    seeded,
    standard_randomizer,
    standard_shuffler,
)
from unomatch.engine.rules import (
    DEFAULT_CARDS_PER_PLAYER,
    DEFAULT_TARGET_SCORE,
    MAX_PLAYERS,
    MIN_PLAYERS,
)
from unomatch.engine.round import (
    Round,
    RoundResult,
    create_round,
    create_round_from_memento,
)

__all__ = [
    "Card",
    "CardType",
    "Color",
    "NumberedCard",
    "SkipCard",
    "ReverseCard",
    "DrawTwoCard",
    "WildCard",
    "WildDrawFourCard",
    "card_color",
    "card_score",
    "card_to_record",
    "is_wild",
    "DECK_SIZE",
    "Deck",
    "create_initial_deck",
    "DiscardPile",
    "UnoError",
    "ConfigurationError",
    "IllegalActionError",
    "MementoError",
    "Game",
    "create_game",
    "create_game_from_memento",
    "Randomizer",
    "Shuffler",
    "identity_shuffler",
    "seeded",
    "standard_randomizer",
    "standard_shuffler",
    "Round",
    "RoundResult",
    "create_round",
    "create_round_from_memento",
    "DEFAULT_CARDS_PER_PLAYER",
    "DEFAULT_TARGET_SCORE",
    "MAX_PLAYERS",
    "MIN_PLAYERS",
]
