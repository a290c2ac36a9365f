"""Human agent - reads actions from terminal."""

from typing import Optional

from unomatch.agent.protocol import Action, DrawCard, PlayCard, legal_actions
from unomatch.agent.snapshot import BotState, describe_card


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(self, state: BotState) -> Optional[Action]:
        actions = legal_actions(state)
        if not actions:
            return None

        print("\n--- Your turn ---")
        print("Your hand:", ", ".join(describe_card(card) for card in state.hand))
        print("Top discard:", describe_card(state.top_card), f"(color: {state.current_color})")
        print("\nLegal actions:")
        for i, a in enumerate(actions):
            if isinstance(a, DrawCard):
                print(f"  {i}: DRAW")
            else:
                extra = f" (choose color: {a.color.value})" if a.color else ""
                print(f"  {i}: PLAY {describe_card(state.hand[a.card_index])}{extra}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(actions):
                    break
            except (ValueError, EOFError):
                pass
            print("Invalid. Try again.")

        action = actions[idx]
        if isinstance(action, PlayCard) and len(state.hand) == 2:
            answer = input("Say UNO? [y/N] ").strip().lower()
            if answer.startswith("y"):
                action = PlayCard(card_index=action.card_index, color=action.color, say_uno=True)
        return action

    def get_accusation(self, state: BotState) -> Optional[int]:
        last = state.just_played
        if last is None or last.player == state.me:
            return None
        if last.hand_size != 1 or last.said_uno:
            return None
        answer = input(f"{state.players[last.player]} has one card left. Catch them? [y/N] ")
        return last.player if answer.strip().lower().startswith("y") else None
