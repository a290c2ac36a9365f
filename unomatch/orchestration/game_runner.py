"""Runs a full UNO match between agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from unomatch.agent.protocol import DrawCard, PlayCard
from unomatch.agent.snapshot import BotState, LastTurn
from unomatch.agents.bot_agent import choose_color
from unomatch.engine import (
    DEFAULT_CARDS_PER_PLAYER,
    DEFAULT_TARGET_SCORE,
    IllegalActionError,
    Round,
    create_game,
    seeded,
)

if TYPE_CHECKING:
    from unomatch.agent.protocol import Action, AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Result of a completed (or abandoned) match."""

    winner: Optional[str]
    scores: Dict[str, int]
    rounds_played: int
    num_turns: int
    player_ids: tuple[str, ...]
    stalled: bool = False


class GameRunner:
    """Runs one UNO match, round after round, until a player reaches the target."""

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        target_score: int = DEFAULT_TARGET_SCORE,
        cards_per_player: int = DEFAULT_CARDS_PER_PLAYER,
        seed: Optional[int] = None,
        max_turns: int = 10000,
    ):
        self._agents = agents
        self._target_score = target_score
        self._cards_per_player = cards_per_player
        self._seed = seed
        self._max_turns = max_turns

    def run(self) -> MatchResult:
        """Run the match and return the result."""
        player_ids = list(self._agents.keys())
        seats: List["AgentProtocol"] = list(self._agents.values())
        shuffler, randomizer = seeded(self._seed)
        game = create_game(
            players=player_ids,
            target_score=self._target_score,
            cards_per_player=self._cards_per_player,
            randomizer=randomizer,
            shuffler=shuffler,
        )

        num_turns = 0
        rounds_played = 0
        stalled = False
        round_: Optional[Round] = None
        last_turn: Optional[LastTurn] = None

        while game.winner() is None and num_turns < self._max_turns:
            current = game.current_round()
            if current is None:
                break
            if current is not round_:
                round_ = current
                rounds_played += 1
                last_turn = None
                logger.info("Round %d: %s deals", rounds_played, player_ids[round_.dealer])

            self._collect_accusations(round_, seats, last_turn)

            pid = round_.player_in_turn()
            if pid is None:
                break
            if not round_.can_play_any() and not round_.can_draw():
                logger.warning("Round %d stalled: nothing to play or draw", rounds_played)
                stalled = True
                break

            state = BotState.from_round(round_, pid, last_turn)
            action = seats[pid].get_action(state) or DrawCard()
            said_uno = self._apply(round_, pid, action)
            last_turn = LastTurn(
                player=pid,
                hand_size=len(round_.player_hand(pid)),
                said_uno=said_uno,
            )
            num_turns += 1

        winner = game.winner()
        return MatchResult(
            winner=player_ids[winner] if winner is not None else None,
            scores={pid: game.score(i) for i, pid in enumerate(player_ids)},
            rounds_played=rounds_played,
            num_turns=num_turns,
            player_ids=tuple(player_ids),
            stalled=stalled,
        )

    def _collect_accusations(
        self,
        round_: Round,
        seats: List["AgentProtocol"],
        last_turn: Optional[LastTurn],
    ) -> None:
        if last_turn is None or round_.has_ended():
            return
        for seat, agent in enumerate(seats):
            if seat == last_turn.player:
                continue
            accused = agent.get_accusation(BotState.from_round(round_, seat, last_turn))
            if accused is None:
                continue
            if round_.catch_uno_failure(accuser=seat, accused=accused):
                logger.info("%s caught %s without uno", agent.name, round_.player(accused))
                return

    def _apply(self, round_: Round, pid: int, action: "Action") -> bool:
        """Apply an agent's action, falling back to a legal one if it is rejected.

        Returns whether the player declared uno.
        """
        said_uno = False
        try:
            if isinstance(action, PlayCard):
                if action.say_uno:
                    round_.say_uno(pid)
                    said_uno = True
                round_.play(action.card_index, action.color)
                return said_uno
            round_.draw()
            return False
        except IllegalActionError as exc:
            logger.warning("Illegal action %r by seat %d: %s", action, pid, exc)

        if round_.can_draw():
            round_.draw()
            return False
        hand = round_.player_hand(pid)
        index = next(i for i in range(len(hand)) if round_.can_play(i))
        state = BotState.from_round(round_, pid)
        color = choose_color(state.hand, skip_index=index) if "color" not in state.hand[index] else None
        round_.play(index, color)
        return said_uno
