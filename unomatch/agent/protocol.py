"""Agent protocol - interface that bot, human and LLM agents implement."""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Union

from unomatch.agent.snapshot import BotState
from unomatch.engine import Color


@dataclass(frozen=True)
class PlayCard:
    """Action: play the card at `card_index`. Wilds need `color`.

    With `say_uno` the player declares uno before playing.
    """

    card_index: int
    color: Optional[Color] = None
    say_uno: bool = False


@dataclass(frozen=True)
class DrawCard:
    """Action: draw a card."""


Action = Union[PlayCard, DrawCard]


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(self, state: BotState) -> Optional[Action]:
        """Choose what to do on this agent's turn.

        Args:
            state: Snapshot of the round from this agent's seat.

        Returns:
            The action to apply, or None to draw.
        """
        ...

    def get_accusation(self, state: BotState) -> Optional[int]:
        """Optionally accuse the player who just went down to one card.

        Called for every agent that is not in turn before each turn.

        Returns:
            The seat to accuse, or None.
        """
        ...


def legal_actions(state: BotState) -> List[Action]:
    """Enumerate the legal actions in a snapshot, one per wild color."""
    actions: List[Action] = []
    for index in state.can_play:
        if "color" in state.hand[index]:
            actions.append(PlayCard(card_index=index))
        else:
            actions.extend(PlayCard(card_index=index, color=color) for color in Color)
    if state.can_draw:
        actions.append(DrawCard())
    return actions
