"""Match orchestration."""

from unomatch.orchestration.game_runner import GameRunner, MatchResult
from unomatch.orchestration.tournament import run_tournament

__all__ = ["GameRunner", "MatchResult", "run_tournament"]
