"""Plain-data views of a round for automated players."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from unomatch.engine import Round, card_to_record


@dataclass(frozen=True)
class LastTurn:
    """Who acted last, how many cards they kept and whether they declared."""

    player: int
    hand_size: int
    said_uno: bool


@dataclass
class BotState:
    """What one seat can see of a round.

    Contains only that player's hand, as card records, and public info.
    `can_play` lists the legal hand indices and is empty when `me` is not
    in turn.
    """

    me: int
    hand: List[Dict[str, Any]]
    can_play: List[int]
    can_draw: bool
    top_card: Optional[Dict[str, Any]]
    current_color: Optional[str]
    player_in_turn: Optional[int]
    hand_sizes: List[int] = field(default_factory=list)
    players: List[str] = field(default_factory=list)
    just_played: Optional[LastTurn] = None

    @classmethod
    def from_round(
        cls,
        round_: Round,
        me: int,
        last_turn: Optional[LastTurn] = None,
    ) -> "BotState":
        hand = round_.player_hand(me)
        in_turn = round_.player_in_turn()
        my_turn = in_turn == me
        top = round_.discard_pile().top()
        color = round_.current_color()
        return cls(
            me=me,
            hand=[card_to_record(card) for card in hand],
            can_play=[i for i in range(len(hand)) if my_turn and round_.can_play(i)],
            can_draw=my_turn and round_.can_draw(),
            top_card=card_to_record(top) if top is not None else None,
            current_color=color.value if color is not None else None,
            player_in_turn=in_turn,
            hand_sizes=[len(round_.player_hand(i)) for i in range(round_.player_count)],
            players=list(round_.players()),
            just_played=last_turn,
        )


def describe_card(record: Optional[Dict[str, Any]]) -> str:
    """Human-readable form of a card record, e.g. "RED 7" or "WILD DRAW"."""
    if record is None:
        return "None"
    parts = [record.get("color"), record["type"] if record["type"] != "NUMBERED" else None]
    if "number" in record:
        parts.append(str(record["number"]))
    return " ".join(part for part in parts if part)
