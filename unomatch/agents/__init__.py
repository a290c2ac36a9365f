"""Built-in agents."""

from unomatch.agents.bot_agent import BotAgent
from unomatch.agents.human_agent import HumanAgent
from unomatch.agents.llm_agent import LLMAgent

__all__ = ["BotAgent", "HumanAgent", "LLMAgent"]
