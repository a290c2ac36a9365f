"""CLI entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import typer
from dotenv import load_dotenv

from unomatch.engine import DEFAULT_CARDS_PER_PLAYER, DEFAULT_TARGET_SCORE

if TYPE_CHECKING:
    from unomatch.agent.protocol import AgentProtocol

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO matches between bot, human and LLM agents")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
    seed: Optional[int] = None,
) -> dict[str, "AgentProtocol"]:
    import random

    from unomatch.agents.bot_agent import BotAgent
    from unomatch.agents.human_agent import HumanAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "bot":
            rng = random.Random(None if seed is None else seed + i)
            agents[pid] = BotAgent(name=f"Bot_{i}", rng=rng)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        elif kind == "llm":
            from unomatch.agents.llm_agent import LLMAgent

            agents[pid] = LLMAgent(provider=llm_provider, model=model)
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'bot', 'human' or 'llm'.")
    return agents


@app.command()
def play(
    agents: str = typer.Option(
        "bot,bot",
        "--agents",
        "-a",
        help="Comma-separated: bot, human, llm, or llm:model_name (e.g. bot,human,llm:gpt-4o)",
    ),
    target_score: int = typer.Option(
        DEFAULT_TARGET_SCORE, "--target-score", "-t", envvar="UNO_TARGET_SCORE", help="Points needed to win the match"
    ),
    cards_per_player: int = typer.Option(
        DEFAULT_CARDS_PER_PLAYER, "--cards-per-player", "-c", envvar="UNO_CARDS_PER_PLAYER", help="Hand size"
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        envvar="UNO_LLM_PROVIDER",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        envvar="UNO_LLM_MODEL",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", envvar="UNO_SEED", help="Random seed"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", envvar="UNO_LOG_LEVEL", help="Logging level"),
) -> None:
    """Run a single UNO match."""
    from unomatch.engine import ConfigurationError
    from unomatch.orchestration.game_runner import GameRunner

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    runner = GameRunner(agent_map, target_score=target_score, cards_per_player=cards_per_player, seed=seed)
    try:
        result = runner.run()
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"Winner: {result.winner or 'None (unfinished)'}")
    typer.echo(f"Rounds: {result.rounds_played}")
    typer.echo(f"Turns: {result.num_turns}")
    for pid, score in result.scores.items():
        typer.echo(f"  {pid}: {score} points")


@app.command()
def tournament(
    agents: str = typer.Option(
        "bot,bot",
        "--agents",
        "-a",
        help="Comma-separated agent types or llm:model_name (e.g. bot,llm:gpt-4o)",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of matches"),
    target_score: int = typer.Option(
        DEFAULT_TARGET_SCORE, "--target-score", "-t", envvar="UNO_TARGET_SCORE", help="Points needed to win a match"
    ),
    cards_per_player: int = typer.Option(
        DEFAULT_CARDS_PER_PLAYER, "--cards-per-player", "-c", envvar="UNO_CARDS_PER_PLAYER", help="Hand size"
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        envvar="UNO_LLM_PROVIDER",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        envvar="UNO_LLM_MODEL",
        help="Model name",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", envvar="UNO_SEED", help="Random seed"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", envvar="UNO_LOG_LEVEL", help="Logging level"),
) -> None:
    """Run a tournament."""
    from unomatch.engine import ConfigurationError
    from unomatch.orchestration.tournament import run_tournament

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    try:
        wins = run_tournament(
            agent_map,
            num_games=games,
            seed=seed,
            target_score=target_score,
            cards_per_player=cards_per_player,
        )
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo("Tournament results:")
    for pid, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {pid}: {w} wins")


if __name__ == "__main__":
    app()
