"""LLM agent using OpenAI library with OpenRouter, Groq, Ollama or Hugging Face."""

import json
import logging
import os
import re
import time
from typing import List, Optional, Tuple

from openai import OpenAI

from unomatch.agent.protocol import Action, DrawCard, PlayCard, legal_actions
from unomatch.agent.snapshot import BotState, describe_card

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"


def _format_state(state: BotState) -> str:
    """Format a bot snapshot as text for the LLM."""
    lines = [
        "=== Your hand ===",
        ", ".join(describe_card(card) for card in state.hand),
        "",
        "=== Top card on discard ===",
        describe_card(state.top_card),
        "",
        "=== Current color to match ===",
        state.current_color or "any",
        "",
        "=== Other players' card counts ===",
    ]
    for seat, count in enumerate(state.hand_sizes):
        if seat != state.me:
            lines.append(f"  {state.players[seat]}: {count} cards")
    return "\n".join(lines)


def _format_legal_actions(state: BotState, actions: List[Action]) -> str:
    """Format legal actions as text."""
    options = []
    for i, a in enumerate(actions):
        if isinstance(a, DrawCard):
            options.append(f"{i}: DRAW")
        else:
            color = f" color={a.color.value}" if a.color else ""
            options.append(f"{i}: PLAY {describe_card(state.hand[a.card_index])}{color}")
    return "\n".join(options)


def _parse_action_response(response: str, actions: List[Action]) -> Tuple[Optional[Action], bool]:
    """Parse LLM response into an Action and the say_uno flag."""
    json_match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except ValueError:
                continue
            if isinstance(data, dict) and isinstance(data.get("action_index"), int):
                idx = data["action_index"]
                if 0 <= idx < len(actions):
                    return actions[idx], bool(data.get("say_uno", False))
                logger.debug("Index %d out of range (0-%d)", idx, len(actions) - 1)
            break

    say_uno = bool(re.search(r'["\']?say_uno["\']?\s*:\s*true', response, re.IGNORECASE))
    match = re.search(r'["\']?action_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        idx = int(match.group(1))
        if 0 <= idx < len(actions):
            return actions[idx], say_uno

    if "DRAW" in response.upper():
        for a in actions:
            if isinstance(a, DrawCard):
                return a, False

    cleaned_response = re.sub(r"[{}\[\]\"'.,:]", " ", response)
    for word in cleaned_response.split():
        if word.isdigit():
            idx = int(word)
            if 0 <= idx < len(actions):
                return actions[idx], say_uno

    return None, False


class LLMAgent:
    """Agent that uses an LLM to choose actions."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if client is None and not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = client or OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._request_history: List[float] = []

        logger.info(
            "[%s] Initialized with provider=%s, base_url=%s, timeout=%ss, rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            oldest = self._request_history[0]
            wait_time = 60.0 - (now - oldest)
            if wait_time > 0:
                logger.info("[%s] Rate limit reached. Waiting %.2fs...", self.name, wait_time)
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def get_action(self, state: BotState) -> Optional[Action]:
        actions = legal_actions(state)
        if not actions:
            return None

        prompt = f"""You are playing UNO.
Objective: Win by playing all your cards. Match the top discard card by color or value. Wild cards can be played on anything, but a Wild Draw Four only when you hold no card of the current color.

{_format_state(state)}

=== Legal actions ===
{_format_legal_actions(state, actions)}

INSTRUCTIONS:
Select the best action to win the game.
If the card you play leaves you with a single card, set "say_uno" to true or you may be penalised.
Respond with a JSON object containing the index of your chosen action.
Example: {{"action_index": 2, "say_uno": false}}
"""

        for attempt in range(1, 4):
            start_time = time.time()
            try:
                self._wait_for_rate_limit()

                kwargs = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                if "gpt-4" in self._model or "gpt-3.5" in self._model or "groq" in self._provider:
                    kwargs["response_format"] = {"type": "json_object"}

                logger.debug("[%s] Attempt %d: sending request to %s", self.name, attempt, self._provider)
                resp = self._client.chat.completions.create(**kwargs)
                content = resp.choices[0].message.content or ""
                logger.debug("[%s] Received response in %.2fs", self.name, time.time() - start_time)

                action, say_uno = _parse_action_response(content, actions)
                if isinstance(action, PlayCard) and say_uno:
                    return PlayCard(card_index=action.card_index, color=action.color, say_uno=True)
                if action is not None:
                    return action

                logger.warning("[%s] Failed to parse action from response: %r", self.name, content)
            except Exception as e:
                logger.warning(
                    "[%s] Error on attempt %d after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )

        logger.warning("[%s] All retries failed. Defaulting to draw/first action.", self.name)
        for a in actions:
            if isinstance(a, DrawCard):
                return a
        return actions[0]

    def get_accusation(self, state: BotState) -> Optional[int]:
        """LLM agents do not accuse."""
        return None
