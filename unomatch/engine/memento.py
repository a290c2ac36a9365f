"""Schemas for plain-data snapshots (mementos) of decks, rounds and games.

Mementos are validated once, here, and turned into typed cards before any
engine code sees them. Every failure is reported as a MementoError.
"""

from typing import Annotated, Any, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator
from pydantic.alias_generators import to_camel

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
from unomatch.engine.errors import MementoError
from unomatch.engine.rules import DEFAULT_CARDS_PER_PLAYER, MAX_PLAYERS, MIN_PLAYERS


class NumberedRecord(BaseModel):
    type: Literal["NUMBERED"]
    color: Color
    number: int = Field(ge=0, le=9)

    def to_card(self) -> Card:
        return NumberedCard(self.color, self.number)


class ColoredRecord(BaseModel):
    type: Literal["SKIP", "REVERSE", "DRAW"]
    color: Color

    def to_card(self) -> Card:
        if self.type == "SKIP":
            return SkipCard(self.color)
        if self.type == "REVERSE":
            return ReverseCard(self.color)
        return DrawTwoCard(self.color)


class WildRecord(BaseModel):
    type: Literal["WILD", "WILD DRAW"]

    def to_card(self) -> Card:
        return WildCard() if self.type == "WILD" else WildDrawFourCard()


CardRecord = Annotated[
    Union[NumberedRecord, ColoredRecord, WildRecord],
    Field(discriminator="type"),
]

_card_records = TypeAdapter(List[CardRecord])


def _cards(records: Iterable[Any]) -> List[Card]:
    return [record.to_card() for record in records]


# Stored keys are camelCase (drawPile, playerInTurn, ...); snake_case is accepted too.
_MEMENTO_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoundMemento(BaseModel):
    """Snapshot of a round. The discard pile is stored newest first."""

    model_config = _MEMENTO_CONFIG

    players: List[str]
    hands: List[List[CardRecord]]
    draw_pile: List[CardRecord] = Field(default_factory=list)
    discard_pile: List[CardRecord]
    current_color: Optional[Color] = None
    current_direction: Literal["clockwise", "counterclockwise"] = "clockwise"
    dealer: int
    player_in_turn: Optional[int] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "RoundMemento":
        count = len(self.players)
        if count < MIN_PLAYERS:
            raise ValueError(f"need at least {MIN_PLAYERS} players")
        if count > MAX_PLAYERS:
            raise ValueError(f"at most {MAX_PLAYERS} players are allowed")
        if len(self.hands) != count:
            raise ValueError("hands count does not match player count")
        if not self.discard_pile:
            raise ValueError("discard pile is empty")
        if not 0 <= self.dealer < count:
            raise ValueError("dealer out of bounds")
        if self.player_in_turn is not None and not 0 <= self.player_in_turn < count:
            raise ValueError("player_in_turn out of bounds")

        top_color = card_color(self.discard_pile[0].to_card())
        if top_color is None and self.current_color is None:
            raise ValueError("a wild on top of the discard pile requires current_color")
        if top_color is not None and self.current_color not in (None, top_color):
            raise ValueError("current_color is inconsistent with the top discard card")

        empty_hands = sum(1 for hand in self.hands if not hand)
        if empty_hands > 1:
            raise ValueError("more than one empty hand")
        if empty_hands == 0 and self.player_in_turn is None:
            raise ValueError("player_in_turn is required for an unfinished round")
        return self

    def is_finished(self) -> bool:
        return any(not hand for hand in self.hands)

    def hand_cards(self) -> List[List[Card]]:
        return [_cards(hand) for hand in self.hands]

    def draw_cards(self) -> List[Card]:
        return _cards(self.draw_pile)

    def discard_cards_oldest_first(self) -> List[Card]:
        return _cards(reversed(self.discard_pile))


class GameMemento(BaseModel):
    model_config = _MEMENTO_CONFIG

    players: List[str]
    target_score: int
    scores: List[int]
    cards_per_player: int = DEFAULT_CARDS_PER_PLAYER
    current_round: Optional[RoundMemento] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "GameMemento":
        count = len(self.players)
        if not MIN_PLAYERS <= count <= MAX_PLAYERS:
            raise ValueError(f"a game needs {MIN_PLAYERS} to {MAX_PLAYERS} players")
        if self.target_score <= 0:
            raise ValueError("target_score must be greater than 0")
        if self.cards_per_player <= 0:
            raise ValueError("cards_per_player must be positive")
        if len(self.scores) != count:
            raise ValueError("scores must contain one entry per player")
        if any(score < 0 for score in self.scores):
            raise ValueError("scores cannot be negative")

        winners = [i for i, score in enumerate(self.scores) if score >= self.target_score]
        if len(winners) > 1:
            raise ValueError("more than one player reached the target score")
        if winners and self.current_round is not None:
            raise ValueError("a finished game must not contain a current round")
        if not winners:
            if self.current_round is None:
                raise ValueError("an unfinished game requires a current round")
            if self.current_round.players != self.players:
                raise ValueError("current round players do not match the game players")
            if self.current_round.is_finished():
                raise ValueError("the current round has already ended")
        return self

    def winner(self) -> Optional[int]:
        for i, score in enumerate(self.scores):
            if score >= self.target_score:
                return i
        return None


def parse_cards(records: Any) -> List[Card]:
    """Validate a list of card records and return the cards."""
    try:
        parsed = _card_records.validate_python(records)
    except ValidationError as exc:
        raise MementoError(f"Invalid card records: {exc}") from exc
    return _cards(parsed)


def parse_round_memento(data: Any) -> RoundMemento:
    try:
        return RoundMemento.model_validate(data)
    except ValidationError as exc:
        raise MementoError(f"Invalid round memento: {exc}") from exc


def parse_game_memento(data: Any) -> GameMemento:
    try:
        return GameMemento.model_validate(data)
    except ValidationError as exc:
        raise MementoError(f"Invalid game memento: {exc}") from exc
