"""Simulate a match between four bots."""

import logging
import random

from unomatch.agents.bot_agent import BotAgent
from unomatch.orchestration.game_runner import GameRunner


def main():
    logging.basicConfig(level=logging.INFO, format="> %(message)s")

    agents = {
        f"p{i}": BotAgent(name=f"Bot{i}", rng=random.Random(i))
        for i in range(1, 5)
    }

    runner = GameRunner(agents, target_score=200, seed=42)
    result = runner.run()

    print(f"Match finished! Winner: {result.winner}")
    print(f"Rounds: {result.rounds_played}, turns: {result.num_turns}")
    for pid, score in result.scores.items():
        print(f"  {pid}: {score}")


if __name__ == "__main__":
    main()
