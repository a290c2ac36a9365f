"""Tests for the match runner and tournaments."""

import random
from typing import Optional

from unomatch.agent import BotState, LastTurn, PlayCard
from unomatch.agents import BotAgent
from unomatch.engine import Color, NumberedCard
from unomatch.orchestration import GameRunner, run_tournament


class StubbornAgent:
    """Always asks for a card it does not have."""

    name = "stubborn"

    def get_action(self, state: BotState) -> Optional[PlayCard]:
        return PlayCard(card_index=99)

    def get_accusation(self, state: BotState) -> Optional[int]:
        return None


class AccusingAgent:
    name = "accuser"

    def get_action(self, state: BotState) -> Optional[PlayCard]:
        return None

    def get_accusation(self, state: BotState) -> Optional[int]:
        return state.just_played.player if state.just_played else None


def bots(count: int = 2) -> dict:
    return {f"p{i}": BotAgent(name=f"Bot{i}", rng=random.Random(i)) for i in range(count)}


def test_bots_finish_a_match() -> None:
    result = GameRunner(bots(), target_score=100, seed=7).run()
    assert result.player_ids == ("p0", "p1")
    assert result.rounds_played >= 1
    assert result.num_turns > 0
    if not result.stalled:
        assert result.winner in ("p0", "p1")
        assert result.scores[result.winner] >= 100


def test_match_is_reproducible_with_seed() -> None:
    first = GameRunner(bots(3), target_score=100, seed=3).run()
    second = GameRunner(bots(3), target_score=100, seed=3).run()
    assert first == second


def test_runner_stops_at_max_turns() -> None:
    result = GameRunner(bots(), seed=1, max_turns=5).run()
    assert result.num_turns == 5
    assert result.winner is None
    assert result.scores == {"p0": 0, "p1": 0}


def test_illegal_actions_fall_back_to_legal_moves() -> None:
    agents = {"s": StubbornAgent(), "b": BotAgent(rng=random.Random(0))}
    result = GameRunner(agents, target_score=50, seed=5, max_turns=300).run()
    assert result.num_turns > 0
    assert result.num_turns <= 300


def test_collect_accusations_penalises_silent_player(make_round) -> None:
    hands = [
        [NumberedCard(Color.BLUE, 1), NumberedCard(Color.BLUE, 2)],
        [NumberedCard(Color.RED, 3), NumberedCard(Color.RED, 4)],
    ]
    round_ = make_round(hands, [NumberedCard(Color.BLUE, 5)], [NumberedCard(Color.GREEN, k) for k in range(1, 6)])
    runner = GameRunner({"a": AccusingAgent(), "b": AccusingAgent()})

    said_uno = runner._apply(round_, 0, PlayCard(card_index=0))
    assert said_uno is False
    runner._collect_accusations(round_, [AccusingAgent(), AccusingAgent()], LastTurn(0, 1, said_uno))

    assert len(round_.player_hand(0)) == 5


def test_apply_declares_uno(make_round) -> None:
    hands = [
        [NumberedCard(Color.BLUE, 1), NumberedCard(Color.BLUE, 2)],
        [NumberedCard(Color.RED, 3), NumberedCard(Color.RED, 4)],
    ]
    round_ = make_round(hands, [NumberedCard(Color.BLUE, 5)], [NumberedCard(Color.GREEN, 7)])
    runner = GameRunner({"a": AccusingAgent(), "b": AccusingAgent()})

    assert runner._apply(round_, 0, PlayCard(card_index=0, say_uno=True)) is True
    assert round_.accusable_player() is None
    assert round_.catch_uno_failure(1, 0) is False


def test_tournament_counts_wins() -> None:
    wins = run_tournament(bots(), num_games=3, seed=1, target_score=50)
    assert set(wins) <= {"p0", "p1"}
    assert sum(wins.values()) <= 3
