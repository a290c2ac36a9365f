"""Agent interface and the views agents decide from."""

from unomatch.agent.protocol import Action, AgentProtocol, DrawCard, PlayCard, legal_actions
from unomatch.agent.snapshot import BotState, LastTurn, describe_card

__all__ = [
    "Action",
    "AgentProtocol",
    "DrawCard",
    "PlayCard",
    "legal_actions",
    "BotState",
    "LastTurn",
    "describe_card",
]
