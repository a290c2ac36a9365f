"""Tournament - run many matches and aggregate results."""

import random
from collections import defaultdict
from typing import Any

from unomatch.engine import DEFAULT_CARDS_PER_PLAYER, DEFAULT_TARGET_SCORE
from unomatch.orchestration.game_runner import GameRunner


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    seed: int | None = None,
    target_score: int = DEFAULT_TARGET_SCORE,
    cards_per_player: int = DEFAULT_CARDS_PER_PLAYER,
) -> dict[str, int]:
    """Run `num_games` matches between the same agents.

    Seat order alternates between the given order and its reverse, so the
    first dealer's neighbours change from match to match.

    Returns:
        Dict mapping player_id to number of match wins.
    """
    player_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for g in range(num_games):
        order = player_ids if g % 2 == 0 else list(reversed(player_ids))
        ordered_agents = {pid: agents[pid] for pid in order}
        runner = GameRunner(
            ordered_agents,
            target_score=target_score,
            cards_per_player=cards_per_player,
            seed=rng.randint(0, 2**31 - 1),
        )
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
