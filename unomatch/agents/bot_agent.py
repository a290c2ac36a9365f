"""Rule-based bot: plays the first legal card and sometimes forgets uno."""

import logging
import random
from collections import Counter
from typing import Any, Dict, List, Optional

from unomatch.agent.protocol import Action, DrawCard, PlayCard
from unomatch.agent.snapshot import BotState
from unomatch.engine import Color

logger = logging.getLogger(__name__)

UNO_FORGET_PROB = 0.15
UNO_CATCH_PROB = 0.50


def choose_color(hand: List[Dict[str, Any]], skip_index: Optional[int] = None) -> Color:
    """Most common color among the other cards in hand (BLUE if none)."""
    counts = Counter(
        card["color"]
        for i, card in enumerate(hand)
        if i != skip_index and "color" in card
    )
    if not counts:
        return Color.BLUE
    # Ties go to the canonical color order.
    return max(Color, key=lambda color: counts.get(color.value, 0))


class BotAgent:
    """Automated player working from a BotState snapshot."""

    def __init__(
        self,
        name: str = "bot",
        forget_uno_prob: float = UNO_FORGET_PROB,
        catch_uno_prob: float = UNO_CATCH_PROB,
        rng: Optional[random.Random] = None,
    ):
        self._name = name
        self._forget_uno_prob = forget_uno_prob
        self._catch_uno_prob = catch_uno_prob
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return self._name

    def _chance(self, probability: float) -> bool:
        return self._rng.random() < probability

    def get_action(self, state: BotState) -> Optional[Action]:
        if not state.can_play:
            return DrawCard()

        index = state.can_play[0]
        card = state.hand[index]
        color = None
        if "color" not in card:
            color = choose_color(state.hand, skip_index=index)

        say_uno = len(state.hand) == 2 and not self._chance(self._forget_uno_prob)
        if len(state.hand) == 2 and not say_uno:
            logger.debug("[%s] forgot to say uno", self.name)
        return PlayCard(card_index=index, color=color, say_uno=say_uno)

    def get_accusation(self, state: BotState) -> Optional[int]:
        last = state.just_played
        if last is None or last.player == state.me:
            return None
        if last.hand_size != 1 or last.said_uno:
            return None
        if not self._chance(self._catch_uno_prob):
            return None
        return last.player
